from __future__ import annotations

import logging
import random
from itertools import combinations
from typing import List, Sequence

from esper import World

from onet.components.grid import Grid, Position
from onet.components.level_config import LevelConfig
from onet.constants import AVAILABLE_SYMBOLS, MAX_SHUFFLE_ATTEMPTS
from onet.systems.board_ops import positions_by_symbol, spawn_tile
from onet.systems.connectivity import find_path, has_any_match

logger = logging.getLogger(__name__)


class BoardGenerator:
    """Fills a board with paired symbols and reshuffles it whenever no move is left."""

    def __init__(
        self,
        config: LevelConfig,
        rng: random.Random | None = None,
        *,
        available_symbols: int = AVAILABLE_SYMBOLS,
        max_attempts: int = MAX_SHUFFLE_ATTEMPTS,
    ):
        if config.symbol_count > available_symbols:
            raise ValueError(
                f"level needs {config.symbol_count} symbols but only {available_symbols} are available"
            )
        self.config = config
        self.rng = rng or random.Random()
        self.available_symbols = available_symbols
        self.max_attempts = max(1, max_attempts)

    def choose_symbols(self) -> List[int]:
        """Pick the level's distinct symbol ids without replacement."""
        return self.rng.sample(range(self.available_symbols), self.config.symbol_count)

    def build_symbol_pool(self, symbols: Sequence[int] | None = None) -> List[int]:
        chosen = list(symbols) if symbols is not None else self.choose_symbols()
        pool = chosen * self.config.copies_per_symbol
        self.rng.shuffle(pool)
        return pool

    def populate(self, world: World) -> Grid:
        """Create the board entity and one tile entity per cell, in scan order.

        Cells are filled row by row from the top row, left to right. A board that
        starts without a move is reshuffled before it is returned.
        """
        grid = Grid(width=self.config.width, height=self.config.height)
        world.create_entity(grid, self.config)
        pool = self.build_symbol_pool()
        for pos, symbol in zip(grid.positions(), pool):
            spawn_tile(world, grid, pos, symbol)
        logger.debug(
            "populated %dx%d board with %d symbols",
            grid.width, grid.height, self.config.symbol_count,
        )
        if not has_any_match(world, grid):
            self.reshuffle(world, grid)
        return grid

    def reshuffle(self, world: World, grid: Grid) -> int:
        """Permute live tiles among the occupied cells until a move exists.

        Holes stay holes. Returns the number of permutations tried; when
        ``max_attempts`` permutations all fail, a linkable pair is placed directly.
        """
        groups = positions_by_symbol(world, grid)
        if not any(len(positions) >= 2 for positions in groups.values()):
            raise ValueError("reshuffle needs at least one symbol with two live tiles")
        positions = grid.occupied_positions()
        entities = [grid.get(pos) for pos in positions]
        for attempt in range(1, self.max_attempts + 1):
            self.rng.shuffle(entities)
            for pos, entity in zip(positions, entities):
                grid.set(pos, entity)
            if has_any_match(world, grid):
                logger.debug("reshuffle found a move after %d attempt(s)", attempt)
                return attempt
        logger.warning(
            "no move after %d reshuffle attempts; placing a linkable pair directly",
            self.max_attempts,
        )
        self._force_pair(world, grid)
        return self.max_attempts + 1

    def _force_pair(self, world: World, grid: Grid) -> None:
        groups = positions_by_symbol(world, grid)
        first, second = next(
            (grid.get(positions[0]), grid.get(positions[1]))
            for positions in groups.values()
            if len(positions) >= 2
        )
        for a, b in combinations(grid.occupied_positions(), 2):
            if find_path(grid, a, b) is None:
                continue
            self._swap(grid, a, self._position_of(grid, first))
            self._swap(grid, b, self._position_of(grid, second))
            return
        raise RuntimeError("Unable to arrange remaining tiles into a linkable pair")

    @staticmethod
    def _position_of(grid: Grid, entity: int) -> Position:
        return grid.to_position(grid.cells.index(entity))

    @staticmethod
    def _swap(grid: Grid, a: Position, b: Position) -> None:
        if a == b:
            return
        entity_a, entity_b = grid.get(a), grid.get(b)
        grid.set(a, entity_b)
        grid.set(b, entity_a)
