from __future__ import annotations

from typing import Iterable, Sequence, Tuple

from onet.components.level_config import LevelConfig, ShiftMode


_DEFAULT_LEVELS: Tuple[LevelConfig, ...] = (
    LevelConfig(width=8, height=6, symbol_count=12, shift_mode=ShiftMode.NONE),
    LevelConfig(width=8, height=6, symbol_count=12, shift_mode=ShiftMode.UP),
    LevelConfig(width=8, height=6, symbol_count=12, shift_mode=ShiftMode.DOWN),
    LevelConfig(width=10, height=6, symbol_count=15, shift_mode=ShiftMode.LEFT),
    LevelConfig(width=10, height=6, symbol_count=15, shift_mode=ShiftMode.RIGHT),
    LevelConfig(width=10, height=8, symbol_count=20, shift_mode=ShiftMode.UP_LEFT),
    LevelConfig(width=10, height=8, symbol_count=20, shift_mode=ShiftMode.DOWN_RIGHT),
    LevelConfig(width=12, height=8, symbol_count=24, shift_mode=ShiftMode.UP_RIGHT),
    LevelConfig(width=12, height=8, symbol_count=24, shift_mode=ShiftMode.DOWN_LEFT),
    LevelConfig(width=12, height=8, symbol_count=24, shift_mode=ShiftMode.CENTER),
)


class LevelDatabase:
    """Ordered level configs; level indices past the end wrap around."""

    def __init__(self, levels: Iterable[LevelConfig] | None = None):
        self._levels: Tuple[LevelConfig, ...] = tuple(levels) if levels is not None else _DEFAULT_LEVELS
        if not self._levels:
            raise ValueError("LevelDatabase needs at least one level")

    @property
    def levels(self) -> Sequence[LevelConfig]:
        return self._levels

    @property
    def level_count(self) -> int:
        return len(self._levels)

    def get(self, level: int) -> LevelConfig:
        return self._levels[level % len(self._levels)]


def default_level_database() -> LevelDatabase:
    return LevelDatabase(_DEFAULT_LEVELS)
