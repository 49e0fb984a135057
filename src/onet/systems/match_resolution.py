import logging
from typing import List

from esper import World

from onet.components.board_state import BoardPhase, BoardState
from onet.events.bus import (EventBus, EVENT_TICK, EVENT_MATCH_CLEARED, EVENT_SHIFT_APPLIED,
                             EVENT_BOARD_SHUFFLED, EVENT_BOARD_CLEARED)
from onet.systems.board import BoardSystem
from onet.systems.board_ops import get_grid, get_level_config, get_or_create_board_state, remove_tile, is_board_cleared
from onet.systems.compaction import TileMove
from onet.systems.connectivity import has_any_match

logger = logging.getLogger(__name__)


class MatchResolutionSystem:
    """Runs the sequence that follows an accepted match.

    Flow:
      - CONNECTING: the path is on screen; after ``clear_delay`` both tiles are removed.
      - on_clear_completed: an empty board ends the level, otherwise the first shift pass runs.
      - SHIFTING: staged shift modes wait ``shift_time`` before their second pass.
      - SETTLING: after ``shift_time`` the board is checked for a move and reshuffled if stuck.
      - SHUFFLING: input stays locked for ``shuffle_time`` while tiles travel.
    Every timed step can also be completed directly with ``complete_clear``/``complete_phase``.
    """
    def __init__(self, world: World, event_bus: EventBus, board_system: BoardSystem):
        self.world = world
        self.event_bus = event_bus
        self.board_system = board_system
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def _state(self) -> BoardState:
        return get_or_create_board_state(self.world)

    def on_tick(self, sender, **kwargs):
        state = self._state()
        if state.phase in (BoardPhase.IDLE, BoardPhase.CLEARED):
            return
        timing = get_level_config(self.world).timing
        state.elapsed += kwargs.get('dt', 1/60)
        if state.phase is BoardPhase.CONNECTING:
            if state.elapsed >= timing.clear_delay:
                self.complete_clear()
        elif state.phase in (BoardPhase.SHIFTING, BoardPhase.SETTLING):
            if state.elapsed >= timing.shift_time:
                self.complete_phase()
        elif state.phase is BoardPhase.SHUFFLING:
            if state.elapsed >= timing.shuffle_time:
                self.complete_phase()

    def complete_clear(self) -> bool:
        """Remove the pending pair now; returns False when no pair is pending."""
        state = self._state()
        if state.phase is not BoardPhase.CONNECTING or not state.pending_pair:
            return False
        grid = get_grid(self.world)
        positions = list(state.pending_pair)
        symbol = None
        for pos in positions:
            symbol = remove_tile(self.world, grid, pos)
        state.pending_pair = []
        state.pending_path = ()
        state.pairs_cleared += 1
        state.awaiting_shift = True
        self.event_bus.emit(EVENT_MATCH_CLEARED, positions=positions, symbol=symbol, remaining=grid.live_count())
        self.on_clear_completed()
        return True

    def on_clear_completed(self) -> bool:
        """Compact the board after ``complete_clear``; any other call is a no-op returning False."""
        state = self._state()
        if not state.awaiting_shift:
            return False
        state.awaiting_shift = False
        grid = get_grid(self.world)
        if grid.live_count() == 0:
            state.enter(BoardPhase.CLEARED)
            self.event_bus.emit(EVENT_BOARD_CLEARED, pairs=state.pairs_cleared)
            return True
        engine = self.board_system.compaction
        moves = engine.start(grid)
        if engine.phase:
            self._emit_shift(engine.phase, moves)
        state.enter(BoardPhase.SHIFTING if engine.pending else BoardPhase.SETTLING)
        return True

    def complete_phase(self) -> bool:
        """Finish the current timed phase immediately; returns False when idle."""
        state = self._state()
        if state.phase is BoardPhase.SHIFTING:
            engine = self.board_system.compaction
            moves = engine.complete_phase(get_grid(self.world))
            self._emit_shift(engine.phase, moves)
            state.enter(BoardPhase.SHIFTING if engine.pending else BoardPhase.SETTLING)
            return True
        if state.phase is BoardPhase.SETTLING:
            self._ensure_solvable()
            return True
        if state.phase is BoardPhase.SHUFFLING:
            state.enter(BoardPhase.IDLE)
            return True
        return False

    def is_board_cleared(self) -> bool:
        return is_board_cleared(self.world)

    def _ensure_solvable(self) -> None:
        state = self._state()
        grid = get_grid(self.world)
        if has_any_match(self.world, grid):
            state.enter(BoardPhase.IDLE)
            return
        logger.info("no move left with %d tiles; reshuffling", grid.live_count())
        attempts = self.board_system.generator.reshuffle(self.world, grid)
        self.event_bus.emit(
            EVENT_BOARD_SHUFFLED,
            positions=grid.occupied_positions(),
            attempts=attempts,
            reason="no_moves",
        )
        state.enter(BoardPhase.SHUFFLING)

    def _emit_shift(self, phase: int, moves: List[TileMove]) -> None:
        self.event_bus.emit(
            EVENT_SHIFT_APPLIED,
            mode=self.board_system.compaction.mode,
            phase=phase,
            moves=moves,
        )
