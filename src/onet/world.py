from __future__ import annotations

import random
from dataclasses import dataclass

from esper import World

from onet.components.grid import Grid, Position
from onet.events.bus import EventBus, EVENT_TICK, EVENT_TILE_CLICK
from onet.factories.levels import LevelDatabase, default_level_database
from onet.systems.board import BoardSystem
from onet.systems.board_ops import get_grid, get_or_create_board_state
from onet.systems.level_progress_system import LevelProgressSystem
from onet.systems.match import MatchResult, MatchSystem
from onet.systems.match_resolution import MatchResolutionSystem


def create_world(rng: random.Random | None = None) -> World:
    world = World()
    setattr(world, "random", rng or random.Random())
    get_or_create_board_state(world)
    return world


@dataclass
class Session:
    """One player's board: the World, its event bus and the systems wired to it."""

    world: World
    event_bus: EventBus
    board_system: BoardSystem
    match_system: MatchSystem
    resolution_system: MatchResolutionSystem
    level_system: LevelProgressSystem

    def request_match(self, position_a: Position, position_b: Position) -> MatchResult:
        return self.match_system.request_match(position_a, position_b)

    def on_clear_completed(self) -> bool:
        return self.resolution_system.on_clear_completed()

    def is_board_cleared(self) -> bool:
        return self.resolution_system.is_board_cleared()

    def tap(self, x: int, y: int) -> None:
        self.event_bus.emit(EVENT_TILE_CLICK, x=x, y=y)

    def tick(self, dt: float) -> None:
        self.event_bus.emit(EVENT_TICK, dt=dt)

    @property
    def grid(self) -> Grid:
        return get_grid(self.world)


def create_session(
    database: LevelDatabase | None = None,
    *,
    rng: random.Random | None = None,
    level: int = 0,
    event_bus: EventBus | None = None,
) -> Session:
    """Build a World and its systems and populate the board for ``level``."""
    event_bus = event_bus or EventBus()
    world = create_world(rng)
    board_system = BoardSystem(world, event_bus, getattr(world, "random"))
    match_system = MatchSystem(world, event_bus)
    resolution_system = MatchResolutionSystem(world, event_bus, board_system)
    level_system = LevelProgressSystem(
        world,
        event_bus,
        board_system,
        database or default_level_database(),
        level=level,
    )
    level_system.start()
    return Session(
        world=world,
        event_bus=event_bus,
        board_system=board_system,
        match_system=match_system,
        resolution_system=resolution_system,
        level_system=level_system,
    )
