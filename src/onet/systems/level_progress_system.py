from esper import World

from onet.components.level_config import LevelConfig
from onet.events.bus import EventBus, EVENT_BOARD_CLEARED, EVENT_LEVEL_ADVANCED
from onet.factories.levels import LevelDatabase
from onet.systems.board import BoardSystem


class LevelProgressSystem:
    """Loads the next level from the database whenever a board is cleared.

    The level index lives only in memory; saving it is left to the caller.
    """
    def __init__(self, world: World, event_bus: EventBus, board_system: BoardSystem,
                 database: LevelDatabase, *, level: int = 0):
        self.world = world
        self.event_bus = event_bus
        self.board_system = board_system
        self.database = database
        self.level = level
        self.event_bus.subscribe(EVENT_BOARD_CLEARED, self.on_board_cleared)

    @property
    def current_config(self) -> LevelConfig:
        return self.database.get(self.level)

    def start(self) -> None:
        self.board_system.start_level(self.current_config)

    def on_board_cleared(self, sender, **kwargs):
        self.level += 1
        config = self.current_config
        self.event_bus.emit(EVENT_LEVEL_ADVANCED, level=self.level, config=config)
        self.board_system.start_level(config)
