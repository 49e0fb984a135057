import random
from typing import Optional

from esper import World

from onet.components.board_state import BoardPhase, BoardState
from onet.components.grid import Grid, Position
from onet.components.level_config import LevelConfig
from onet.constants import AVAILABLE_SYMBOLS
from onet.events.bus import (EventBus, EVENT_TILE_CLICK, EVENT_TILE_SELECTED, EVENT_TILE_DESELECTED,
                             EVENT_MATCH_REQUEST, EVENT_MATCH_FOUND, EVENT_MATCH_REJECTED,
                             EVENT_BOARD_GENERATED)
from onet.systems.board_generator import BoardGenerator
from onet.systems.board_ops import discard_board, get_grid, get_or_create_board_state, symbol_at, symbol_map
from onet.systems.compaction import CompactionEngine


class BoardSystem:
    """Owns board creation and the tap-to-select flow.

    The first tap holds a tile; a second tap on a tile with the same symbol asks the
    MatchSystem to link the pair. Taps on holes, on the held tile, or on a different
    symbol drop the selection.
    """
    def __init__(self, world: World, event_bus: EventBus, rng: Optional[random.Random] = None,
                 *, available_symbols: int = AVAILABLE_SYMBOLS):
        self.world = world
        self.event_bus = event_bus
        self.rng = rng or getattr(world, "random", None) or random.Random()
        self.available_symbols = available_symbols
        self.config: Optional[LevelConfig] = None
        self.generator: Optional[BoardGenerator] = None
        self.compaction: Optional[CompactionEngine] = None
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)
        self.event_bus.subscribe(EVENT_MATCH_FOUND, self.on_match_found)
        self.event_bus.subscribe(EVENT_MATCH_REJECTED, self.on_match_rejected)

    def start_level(self, config: LevelConfig) -> Grid:
        """Discard any previous board and populate a fresh one for config."""
        discard_board(self.world)
        state = get_or_create_board_state(self.world)
        state.enter(BoardPhase.IDLE)
        state.selected = None
        state.pending_pair = []
        state.pending_path = ()
        state.pairs_cleared = 0
        state.awaiting_shift = False
        self.config = config
        self.generator = BoardGenerator(config, self.rng, available_symbols=self.available_symbols)
        self.compaction = CompactionEngine(config)
        grid = self.generator.populate(self.world)
        self.event_bus.emit(
            EVENT_BOARD_GENERATED,
            width=grid.width,
            height=grid.height,
            symbols=sorted(set(symbol_map(self.world, grid).values())),
        )
        return grid

    @property
    def selected(self) -> Optional[Position]:
        return self._state().selected

    def on_tile_click(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        if x is None or y is None:
            return
        state = self._state()
        if state.input_locked:
            return
        grid = get_grid(self.world)
        pos = (x, y)
        held = state.selected
        symbol = symbol_at(self.world, grid, pos)
        if symbol is None:
            if held is not None:
                self._deselect('empty_cell')
            return
        if held is None:
            state.selected = pos
            self.event_bus.emit(EVENT_TILE_SELECTED, x=x, y=y)
            return
        if held == pos:
            self._deselect('toggle')
            return
        if symbol_at(self.world, grid, held) != symbol:
            self._deselect('symbol_mismatch')
            return
        self.event_bus.emit(EVENT_MATCH_REQUEST, src=held, dst=pos)

    def on_match_found(self, sender, **kwargs):
        if self._state().selected is not None:
            self._deselect('matched')

    def on_match_rejected(self, sender, **kwargs):
        if self._state().selected is not None:
            self._deselect(kwargs.get('reason', 'rejected'))

    def _deselect(self, reason: str) -> None:
        state = self._state()
        prev = state.selected
        state.selected = None
        if prev is not None:
            self.event_bus.emit(EVENT_TILE_DESELECTED, x=prev[0], y=prev[1], reason=reason)

    def _state(self) -> BoardState:
        return get_or_create_board_state(self.world)
