"""Two-turn path routing between tiles of the same symbol.

A path leaves tile A along one of its open lines, crosses to tile B's open line on
a straight bridge and reaches B along that line, so it has at most two turns. Open
lines extend one cell past the board edge, which lets a path run around the board
through the empty border strip.
"""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from esper import World

from onet.components.grid import Grid, Position
from onet.systems.board_ops import positions_by_symbol, symbol_of

Path = Tuple[Position, ...]
Axis = Tuple[int, int]

VERTICAL: Axis = (0, 1)
HORIZONTAL: Axis = (1, 0)


def open_line(grid: Grid, pos: Position, axis: Axis) -> List[Position]:
    """Return pos followed by the empty cells reachable from it along axis.

    The walk goes in the positive direction first, then the negative one. Each walk
    stops before an occupied cell, or after taking the first position off the board.
    """
    dx, dy = axis
    line = [pos]
    for sign in (1, -1):
        x, y = pos
        while True:
            x += dx * sign
            y += dy * sign
            probe = (x, y)
            if not grid.in_bounds(probe):
                line.append(probe)
                break
            if not grid.is_empty(probe):
                break
            line.append(probe)
    return line


def can_connect(grid: Grid, start: Position, end: Position) -> bool:
    """True if the straight run between start and end has no tile strictly inside it.

    Positions off the board are always passable. Raises ValueError when the two
    positions are not on a common row or column.
    """
    (sx, sy), (ex, ey) = start, end
    if sx != ex and sy != ey:
        raise ValueError(f"{start} and {end} are not on the same row or column")
    if abs(ex - sx) + abs(ey - sy) <= 1:
        return True
    step_x = (ex > sx) - (ex < sx)
    step_y = (ey > sy) - (ey < sy)
    x, y = sx + step_x, sy + step_y
    while (x, y) != end:
        if not grid.is_empty((x, y)):
            return False
        x += step_x
        y += step_y
    return True


def path_length(path: Sequence[Position]) -> int:
    return sum(abs(b[0] - a[0]) + abs(b[1] - a[1]) for a, b in zip(path, path[1:]))


def _is_straight(a: Position, b: Position, c: Position) -> bool:
    return (a[0] == b[0] == c[0]) or (a[1] == b[1] == c[1])


def _simplify(points: Sequence[Position]) -> Path:
    # Drop repeated points and middle vertices of straight runs.
    path: List[Position] = []
    for point in points:
        if path and path[-1] == point:
            continue
        if len(path) >= 2 and _is_straight(path[-2], path[-1], point):
            path[-1] = point
            continue
        path.append(point)
    return tuple(path)


def find_path(grid: Grid, start: Position, end: Position) -> Optional[Path]:
    """Route between two cells ignoring symbols.

    Candidates are bridges between the vertical open lines (matching rows) followed by
    bridges between the horizontal open lines (matching columns). The shortest path
    wins; on equal length the one with fewer turns, then the first enumerated.
    """
    best: Optional[Path] = None
    best_key: Optional[Tuple[int, int]] = None
    for axis, shared in ((VERTICAL, 1), (HORIZONTAL, 0)):
        line_end = open_line(grid, end, axis)
        for p1 in open_line(grid, start, axis):
            for p2 in line_end:
                if p1[shared] != p2[shared]:
                    continue
                if not can_connect(grid, p1, p2):
                    continue
                path = _simplify((start, p1, p2, end))
                key = (path_length(path), len(path))
                if best_key is None or key < best_key:
                    best, best_key = path, key
    return best


def try_connect(world: World, grid: Grid, a: Position, b: Position) -> Optional[Path]:
    """Return the connecting path between two live tiles of equal symbol, else None."""
    if a == b:
        return None
    entity_a = grid.get(a)
    entity_b = grid.get(b)
    if entity_a is None or entity_b is None:
        return None
    if symbol_of(world, entity_a) != symbol_of(world, entity_b):
        return None
    return find_path(grid, a, b)


def find_match(world: World, grid: Grid) -> Optional[Tuple[Position, Position, Path]]:
    """Return the first linkable same-symbol pair in scan order, or None."""
    for positions in positions_by_symbol(world, grid).values():
        for i, a in enumerate(positions[:-1]):
            for b in positions[i + 1:]:
                path = find_path(grid, a, b)
                if path is not None:
                    return a, b, path
    return None


def has_any_match(world: World, grid: Grid) -> bool:
    return find_match(world, grid) is not None
