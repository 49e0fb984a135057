from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from esper import World

from onet.components.board_state import BoardPhase
from onet.components.grid import Position
from onet.events.bus import EventBus, EVENT_MATCH_REQUEST, EVENT_MATCH_FOUND, EVENT_MATCH_REJECTED
from onet.systems.board_ops import get_grid, get_or_create_board_state, symbol_at
from onet.systems.connectivity import Path, try_connect


@dataclass(frozen=True, slots=True)
class MatchResult:
    accepted: bool
    path: Optional[Path] = None
    reason: str = ""


def _as_position(value: Any) -> Position | None:
    try:
        x, y = value
    except (TypeError, ValueError):
        return None
    # bool is an int subclass but never a coordinate
    if type(x) is not int or type(y) is not int:
        return None
    return x, y


class MatchSystem:
    """Validates pair requests and hands accepted pairs to the resolution sequence.

    ``request_match`` never raises for bad input; every problem is reported as a
    rejected MatchResult and leaves the board untouched.
    """
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        event_bus.subscribe(EVENT_MATCH_REQUEST, self.on_match_request)

    def on_match_request(self, sender, **kwargs):
        src = kwargs.get('src')
        dst = kwargs.get('dst')
        if src is None or dst is None:
            return
        self.request_match(src, dst)

    def request_match(self, position_a, position_b) -> MatchResult:
        a = _as_position(position_a)
        b = _as_position(position_b)
        if a is None or b is None:
            return self._reject(position_a, position_b, "invalid_position")
        state = get_or_create_board_state(self.world)
        if state.input_locked:
            return self._reject(a, b, "busy")
        try:
            grid = get_grid(self.world)
        except RuntimeError:
            return self._reject(a, b, "no_board")
        if a == b:
            return self._reject(a, b, "same_cell")
        if not (grid.in_bounds(a) and grid.in_bounds(b)):
            return self._reject(a, b, "out_of_bounds")
        symbol_a = symbol_at(self.world, grid, a)
        symbol_b = symbol_at(self.world, grid, b)
        if symbol_a is None or symbol_b is None:
            return self._reject(a, b, "empty_cell")
        if symbol_a != symbol_b:
            return self._reject(a, b, "symbol_mismatch")
        path = try_connect(self.world, grid, a, b)
        if path is None:
            return self._reject(a, b, "no_path")
        state.pending_pair = [a, b]
        state.pending_path = path
        state.enter(BoardPhase.CONNECTING)
        self.event_bus.emit(EVENT_MATCH_FOUND, positions=[a, b], path=path, symbol=symbol_a)
        return MatchResult(accepted=True, path=path)

    def _reject(self, a, b, reason: str) -> MatchResult:
        self.event_bus.emit(EVENT_MATCH_REJECTED, positions=[a, b], reason=reason)
        return MatchResult(accepted=False, reason=reason)
