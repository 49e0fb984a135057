from __future__ import annotations

import random
from types import SimpleNamespace
from typing import Dict, List, Optional, Sequence, Tuple

from esper import World

from onet.components.grid import Grid, Position
from onet.components.level_config import LevelConfig, ShiftMode, Timing
from onet.events.bus import EventBus, EVENT_TICK
from onet.systems.board import BoardSystem
from onet.systems.board_generator import BoardGenerator
from onet.systems.board_ops import get_or_create_board_state, spawn_tile, symbol_map
from onet.systems.compaction import CompactionEngine
from onet.systems.match import MatchSystem
from onet.systems.match_resolution import MatchResolutionSystem
from onet.world import create_world


def build_grid(world: World, rows: Sequence[str], config: Optional[LevelConfig] = None) -> Grid:
    """Create a board from text rows, top row first.

    Each character is one cell: '.' is a hole, any other character is a tile whose
    symbol id is the character's code point, so render_grid can print it back.
    """
    height = len(rows)
    width = len(rows[0])
    grid = Grid(width=width, height=height)
    board_entity = world.create_entity(grid)
    if config is not None:
        world.add_component(board_entity, config)
    for y, row in enumerate(rows):
        assert len(row) == width, "rows must have equal length"
        for x, char in enumerate(row):
            if char != '.':
                spawn_tile(world, grid, (x, y), ord(char))
    return grid


def render_grid(world: World, grid: Grid) -> Tuple[str, ...]:
    symbols = symbol_map(world, grid)
    return tuple(
        "".join(chr(symbols[(x, y)]) if (x, y) in symbols else "." for x in range(grid.width))
        for y in range(grid.height)
    )


def entity_positions(grid: Grid) -> Dict[int, Position]:
    return {grid.get(pos): pos for pos in grid.occupied_positions()}


def level(width: int, height: int, symbol_count: int, mode: ShiftMode = ShiftMode.NONE) -> LevelConfig:
    return LevelConfig(
        width=width,
        height=height,
        symbol_count=symbol_count,
        shift_mode=mode,
        timing=Timing(clear_delay=0.3, shift_time=0.2, shuffle_time=0.3),
    )


def drive_ticks(bus: EventBus, count: int = 60, dt: float = 0.05) -> None:
    for _ in range(count):
        bus.emit(EVENT_TICK, dt=dt)


def record_events(bus: EventBus, *names: str) -> List[Tuple[str, dict]]:
    events: List[Tuple[str, dict]] = []
    for name in names:
        bus.subscribe(name, lambda sender, _name=name, **payload: events.append((_name, payload)))
    return events


def make_board(rows: Sequence[str], config: LevelConfig, seed: int = 0) -> SimpleNamespace:
    """Wire the board systems around a hand-built grid instead of a generated one."""
    world = create_world(random.Random(seed))
    bus = EventBus()
    board_system = BoardSystem(world, bus)
    match_system = MatchSystem(world, bus)
    resolution = MatchResolutionSystem(world, bus, board_system)
    grid = build_grid(world, rows, config=config)
    board_system.config = config
    board_system.generator = BoardGenerator(config, board_system.rng)
    board_system.compaction = CompactionEngine(config)
    return SimpleNamespace(
        world=world,
        bus=bus,
        grid=grid,
        board=board_system,
        match=match_system,
        resolution=resolution,
        state=get_or_create_board_state(world),
    )
