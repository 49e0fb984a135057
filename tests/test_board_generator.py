import random
from collections import Counter

import pytest
from esper import World

from onet.components.level_config import LevelConfig, ShiftMode
from onet.systems.board_generator import BoardGenerator
from onet.systems.board_ops import get_grid, get_level_config, symbol_map
from onet.systems.connectivity import has_any_match
from helpers import build_grid, level, render_grid


class _NoShuffleRandom(random.Random):
    """Random source whose shuffle keeps the order, so reshuffles never help."""

    def shuffle(self, x):
        return None


def test_choose_symbols_are_distinct_and_in_range():
    generator = BoardGenerator(level(6, 4, 6), random.Random(1), available_symbols=10)
    symbols = generator.choose_symbols()
    assert len(symbols) == 6
    assert len(set(symbols)) == 6
    assert all(0 <= s < 10 for s in symbols)


def test_symbol_pool_replicates_each_symbol_evenly():
    generator = BoardGenerator(level(4, 4, 4), random.Random(2))
    pool = generator.build_symbol_pool([3, 5, 7, 9])
    assert len(pool) == 16
    assert Counter(pool) == {3: 4, 5: 4, 7: 4, 9: 4}


@pytest.mark.parametrize(
    "width, height, symbol_count",
    [(4, 4, 8), (8, 6, 12), (10, 8, 20), (6, 6, 9)],
)
def test_populate_balances_symbols(width, height, symbol_count):
    world = World()
    config = level(width, height, symbol_count)
    grid = BoardGenerator(config, random.Random(width * height)).populate(world)
    symbols = symbol_map(world, grid)
    assert len(symbols) == width * height
    counts = Counter(symbols.values())
    assert len(counts) == symbol_count
    assert set(counts.values()) == {width * height // symbol_count}
    assert has_any_match(world, grid)


def test_populate_registers_board_components():
    world = World()
    config = level(4, 4, 8, ShiftMode.LEFT)
    grid = BoardGenerator(config, random.Random(5)).populate(world)
    assert get_grid(world) is grid
    assert get_level_config(world) is config


def test_generator_rejects_more_symbols_than_available():
    with pytest.raises(ValueError):
        BoardGenerator(level(8, 6, 12), random.Random(0), available_symbols=10)


def test_level_config_rejects_unpairable_areas():
    with pytest.raises(ValueError):
        LevelConfig(width=3, height=3, symbol_count=3)
    with pytest.raises(ValueError):
        LevelConfig(width=4, height=4, symbol_count=5)
    with pytest.raises(ValueError):
        LevelConfig(width=0, height=4, symbol_count=2)


def test_reshuffle_keeps_holes_and_symbols():
    world = World()
    grid = build_grid(world, [
        "AB.C",
        ".DA.",
        "CB.D",
    ])
    occupied = set(grid.occupied_positions())
    before = Counter(symbol_map(world, grid).values())
    attempts = BoardGenerator(level(4, 3, 2), random.Random(9)).reshuffle(world, grid)
    assert attempts >= 1
    assert set(grid.occupied_positions()) == occupied
    assert Counter(symbol_map(world, grid).values()) == before
    assert has_any_match(world, grid)


def test_reshuffle_unlocks_enclosed_pair():
    world = World()
    grid = build_grid(world, [
        "BCDEF",
        "GAHAI",
        "JKLMN",
    ])
    assert not has_any_match(world, grid)
    BoardGenerator(level(5, 2, 5), random.Random(4)).reshuffle(world, grid)
    assert has_any_match(world, grid)
    assert grid.live_count() == 15


def test_reshuffle_without_any_pair_raises():
    world = World()
    grid = build_grid(world, ["AB", "CD"])
    with pytest.raises(ValueError):
        BoardGenerator(level(2, 2, 1), random.Random(0)).reshuffle(world, grid)


def test_reshuffle_falls_back_to_placing_a_pair():
    world = World()
    grid = build_grid(world, [
        "BCDEF",
        "GAHAI",
        "JKLMN",
    ])
    generator = BoardGenerator(level(5, 2, 5), _NoShuffleRandom(0), max_attempts=3)
    attempts = generator.reshuffle(world, grid)
    assert attempts == 4
    assert render_grid(world, grid) == ("AADEF", "GBHCI", "JKLMN")
    assert has_any_match(world, grid)
