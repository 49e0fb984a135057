from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

Position = Tuple[int, int]


@dataclass(slots=True)
class Grid:
    """Cell occupancy for one board.

    ``cells`` is indexed by ``y * width + x`` and holds the tile entity occupying the
    cell, or ``None`` for a hole. Row ``y = 0`` is the top row.
    """

    width: int
    height: int
    cells: List[Optional[int]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"grid dimensions must be positive, got {self.width}x{self.height}")
        if not self.cells:
            self.cells = [None] * (self.width * self.height)
        elif len(self.cells) != self.width * self.height:
            raise ValueError("cell list does not match grid dimensions")

    def in_bounds(self, pos: Position) -> bool:
        x, y = pos
        return 0 <= x < self.width and 0 <= y < self.height

    def in_ring(self, pos: Position) -> bool:
        """True for board cells and the one-cell border strip around the board."""
        x, y = pos
        return -1 <= x <= self.width and -1 <= y <= self.height

    def to_index(self, pos: Position) -> int:
        x, y = pos
        return y * self.width + x

    def to_position(self, index: int) -> Position:
        return index % self.width, index // self.width

    def get(self, pos: Position) -> Optional[int]:
        if not self.in_bounds(pos):
            return None
        return self.cells[self.to_index(pos)]

    def set(self, pos: Position, entity: Optional[int]) -> None:
        if not self.in_bounds(pos):
            raise IndexError(f"position {pos} outside {self.width}x{self.height} grid")
        self.cells[self.to_index(pos)] = entity

    def is_empty(self, pos: Position) -> bool:
        # Cells outside the board never hold a tile.
        return self.get(pos) is None

    def move(self, src: Position, dst: Position) -> None:
        entity = self.get(src)
        self.set(dst, entity)
        self.set(src, None)

    def positions(self) -> Iterator[Position]:
        for y in range(self.height):
            for x in range(self.width):
                yield x, y

    def occupied_positions(self) -> List[Position]:
        return [self.to_position(i) for i, entity in enumerate(self.cells) if entity is not None]

    def live_count(self) -> int:
        return sum(1 for entity in self.cells if entity is not None)
