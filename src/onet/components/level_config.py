"""Per-board configuration consumed read-only by the board systems."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from onet.constants import CLEAR_DELAY, SHIFT_TIME, SHUFFLE_TIME


class ShiftMode(Enum):
    """Compaction policy applied after every cleared pair."""
    NONE = 0
    UP = 1
    RIGHT = 2
    DOWN = 3
    LEFT = 4
    UP_RIGHT = 5
    DOWN_RIGHT = 6
    DOWN_LEFT = 7
    UP_LEFT = 8
    CENTER = 9


@dataclass(frozen=True, slots=True)
class Timing:
    clear_delay: float = CLEAR_DELAY
    shift_time: float = SHIFT_TIME
    shuffle_time: float = SHUFFLE_TIME


@dataclass(frozen=True, slots=True)
class LevelConfig:
    """Board size, symbol count, shift mode and timings for one level.

    Every symbol must appear an even number of times, otherwise a board could end
    with unpaired tiles that can never be cleared or reshuffled into a move.
    """

    width: int
    height: int
    symbol_count: int
    shift_mode: ShiftMode = ShiftMode.NONE
    timing: Timing = field(default_factory=Timing)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"board size must be positive, got {self.width}x{self.height}")
        if self.symbol_count <= 0:
            raise ValueError("symbol_count must be positive")
        if self.area % (2 * self.symbol_count) != 0:
            raise ValueError(
                f"board area {self.area} must be a multiple of twice the symbol count ({self.symbol_count})"
            )

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def copies_per_symbol(self) -> int:
        return self.area // self.symbol_count
