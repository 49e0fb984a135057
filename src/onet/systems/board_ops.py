from __future__ import annotations

from typing import Dict, List

from esper import World

from onet.components.board_state import BoardState
from onet.components.grid import Grid, Position
from onet.components.level_config import LevelConfig
from onet.components.tile import Tile


def get_grid(world: World) -> Grid:
    for _, grid in world.get_component(Grid):
        return grid
    raise RuntimeError("Grid not found; populate a board first")


def get_level_config(world: World) -> LevelConfig:
    for _, config in world.get_component(LevelConfig):
        return config
    raise RuntimeError("LevelConfig not found; populate a board first")


def get_or_create_board_state(world: World) -> BoardState:
    """Return the shared BoardState component, creating it if absent."""
    existing = list(world.get_component(BoardState))
    if existing:
        return existing[0][1]
    world.create_entity(BoardState())
    return list(world.get_component(BoardState))[0][1]


def symbol_of(world: World, entity: int) -> int:
    return world.component_for_entity(entity, Tile).symbol


def symbol_at(world: World, grid: Grid, pos: Position) -> int | None:
    entity = grid.get(pos)
    if entity is None:
        return None
    return symbol_of(world, entity)


def symbol_map(world: World, grid: Grid) -> Dict[Position, int]:
    """Return mapping of occupied positions to their symbols."""
    mapping: Dict[Position, int] = {}
    for pos in grid.occupied_positions():
        mapping[pos] = symbol_of(world, grid.get(pos))
    return mapping


def positions_by_symbol(world: World, grid: Grid) -> Dict[int, List[Position]]:
    groups: Dict[int, List[Position]] = {}
    for pos, symbol in symbol_map(world, grid).items():
        groups.setdefault(symbol, []).append(pos)
    return groups


def spawn_tile(world: World, grid: Grid, pos: Position, symbol: int) -> int:
    if grid.get(pos) is not None:
        raise ValueError(f"cell {pos} is already occupied")
    entity = world.create_entity(Tile(symbol=symbol))
    grid.set(pos, entity)
    return entity


def remove_tile(world: World, grid: Grid, pos: Position) -> int | None:
    """Clear the cell at pos and destroy its tile entity; return the removed symbol."""
    entity = grid.get(pos)
    if entity is None:
        return None
    symbol = symbol_of(world, entity)
    grid.set(pos, None)
    world.delete_entity(entity, immediate=True)
    return symbol


def discard_board(world: World) -> None:
    """Delete every tile entity and the board entity holding the Grid."""
    for entity, _ in list(world.get_component(Tile)):
        world.delete_entity(entity, immediate=True)
    for entity, _ in list(world.get_component(Grid)):
        world.delete_entity(entity, immediate=True)


def is_board_cleared(world: World) -> bool:
    return get_grid(world).live_count() == 0
