from dataclasses import dataclass

@dataclass(slots=True)
class Tile:
    """Symbol carried by a live tile entity.

    The tile's location is not stored here: the Grid component on the board entity is
    the only record of which cell holds which tile entity.
    """
    symbol: int
