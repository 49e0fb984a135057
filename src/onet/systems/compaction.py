from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Dict, List, Optional, Tuple

from onet.components.grid import Grid, Position
from onet.components.level_config import LevelConfig, ShiftMode

Direction = Tuple[int, int]

UP: Direction = (0, -1)
DOWN: Direction = (0, 1)
LEFT: Direction = (-1, 0)
RIGHT: Direction = (1, 0)


@dataclass(slots=True)
class TileMove:
    entity: int
    source: Position
    target: Position


def _find_landing(grid: Grid, pos: Position, direction: Direction, stop_line: Optional[int] = None) -> Position:
    """Walk from pos in direction over empty cells and return the last one reached.

    With stop_line set, the walk also ends on the row/column with that index.
    """
    dx, dy = direction
    landing = pos
    probe = (pos[0] + dx, pos[1] + dy)
    while grid.in_bounds(probe) and grid.is_empty(probe):
        landing = probe
        if stop_line is not None and (probe[0] if dx else probe[1]) == stop_line:
            break
        probe = (probe[0] + dx, probe[1] + dy)
    return landing


def _slide(grid: Grid, pos: Position, direction: Direction, moves: List[TileMove], stop_line: Optional[int] = None) -> None:
    entity = grid.get(pos)
    if entity is None:
        return
    target = _find_landing(grid, pos, direction, stop_line)
    if target == pos:
        return
    grid.move(pos, target)
    moves.append(TileMove(entity=entity, source=pos, target=target))


def shift_toward(grid: Grid, direction: Direction) -> List[TileMove]:
    """Pack every tile against the board edge that direction points at."""
    dx, dy = direction
    # Cells nearest the destination edge settle first.
    xs = range(grid.width - 1, -1, -1) if dx > 0 else range(grid.width)
    ys = range(grid.height - 1, -1, -1) if dy > 0 else range(grid.height)
    moves: List[TileMove] = []
    for y in ys:
        for x in xs:
            _slide(grid, (x, y), direction, moves)
    return moves


def shift_center_vertical(grid: Grid) -> List[TileMove]:
    """Slide tiles toward the middle row from above and below; none crosses it."""
    center = grid.height // 2
    moves: List[TileMove] = []
    for x in range(grid.width):
        for y in range(center - 1, -1, -1):
            _slide(grid, (x, y), DOWN, moves, stop_line=center)
        for y in range(center + 1, grid.height):
            _slide(grid, (x, y), UP, moves, stop_line=center)
    return moves


def shift_center_horizontal(grid: Grid) -> List[TileMove]:
    """Slide tiles toward the middle column from both sides; none crosses it."""
    center = grid.width // 2
    moves: List[TileMove] = []
    for y in range(grid.height):
        for x in range(center - 1, -1, -1):
            _slide(grid, (x, y), RIGHT, moves, stop_line=center)
        for x in range(center + 1, grid.width):
            _slide(grid, (x, y), LEFT, moves, stop_line=center)
    return moves


ShiftPass = Callable[[Grid], List[TileMove]]


def _toward(direction: Direction) -> ShiftPass:
    return lambda grid: shift_toward(grid, direction)


SHIFT_PASSES: Dict[ShiftMode, Tuple[ShiftPass, ...]] = {
    ShiftMode.NONE: (),
    ShiftMode.UP: (_toward(UP),),
    ShiftMode.RIGHT: (_toward(RIGHT),),
    ShiftMode.DOWN: (_toward(DOWN),),
    ShiftMode.LEFT: (_toward(LEFT),),
    ShiftMode.UP_RIGHT: (_toward(UP), _toward(RIGHT)),
    ShiftMode.DOWN_RIGHT: (_toward(DOWN), _toward(RIGHT)),
    ShiftMode.DOWN_LEFT: (_toward(DOWN), _toward(LEFT)),
    ShiftMode.UP_LEFT: (_toward(UP), _toward(LEFT)),
    ShiftMode.CENTER: (shift_center_vertical, shift_center_horizontal),
}


class CompactionState(Enum):
    IDLE = auto()
    PENDING_SECOND_PASS = auto()


class CompactionEngine:
    """Runs the shift passes for a level's ShiftMode as explicit phases.

    ``start`` applies the first pass. Staged modes (diagonals and CENTER) then wait in
    PENDING_SECOND_PASS until ``complete_phase`` is called, so the second pass always
    reads the committed result of the first.
    """

    def __init__(self, config: LevelConfig):
        self.mode = config.shift_mode
        self.state = CompactionState.IDLE
        self.phase = 0
        self._remaining: List[ShiftPass] = []

    @property
    def pending(self) -> bool:
        return self.state is CompactionState.PENDING_SECOND_PASS

    def start(self, grid: Grid) -> List[TileMove]:
        if self.pending:
            raise RuntimeError("previous compaction still has a pass pending")
        passes = list(SHIFT_PASSES[self.mode])
        self.phase = 0
        self._remaining = passes[1:]
        if not passes:
            return []
        self.phase = 1
        moves = passes[0](grid)
        if self._remaining:
            self.state = CompactionState.PENDING_SECOND_PASS
        return moves

    def complete_phase(self, grid: Grid) -> List[TileMove]:
        if not self._remaining:
            return []
        next_pass = self._remaining.pop(0)
        self.phase += 1
        moves = next_pass(grid)
        if not self._remaining:
            self.state = CompactionState.IDLE
        return moves

    def run_to_completion(self, grid: Grid) -> List[TileMove]:
        """Apply every pass back to back; for callers that do not animate."""
        moves = self.start(grid)
        while self.pending:
            moves.extend(self.complete_phase(grid))
        return moves
