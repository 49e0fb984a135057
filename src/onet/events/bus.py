from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems that are not stored anywhere alive.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float


# ============================================================================
# INPUT & SELECTION
# ============================================================================
EVENT_TILE_CLICK = "tile_click"                    # payload: x, y
EVENT_TILE_SELECTED = "tile_selected"              # payload: x, y
EVENT_TILE_DESELECTED = "tile_deselected"          # payload: x, y, reason=str


# ============================================================================
# MATCHING
# ============================================================================
EVENT_MATCH_REQUEST = "match_request"              # payload: src=(x,y), dst=(x,y)
EVENT_MATCH_FOUND = "match_found"                  # payload: positions=[(x,y),(x,y)], path=tuple[(x,y),...], symbol=int
EVENT_MATCH_REJECTED = "match_rejected"            # payload: positions=[(x,y),(x,y)], reason=str
EVENT_MATCH_CLEARED = "match_cleared"              # payload: positions=[(x,y),(x,y)], symbol=int, remaining=int


# ============================================================================
# BOARD MECHANICS
# ============================================================================
EVENT_SHIFT_APPLIED = "shift_applied"              # payload: mode=ShiftMode, phase=int, moves=[TileMove,...]
EVENT_BOARD_GENERATED = "board_generated"          # payload: width, height, symbols=list[int]
EVENT_BOARD_SHUFFLED = "board_shuffled"            # payload: positions=[(x,y),...], attempts=int, reason=str
EVENT_BOARD_CLEARED = "board_cleared"              # payload: pairs=int


# ============================================================================
# PROGRESSION
# ============================================================================
EVENT_LEVEL_ADVANCED = "level_advanced"            # payload: level=int, config=LevelConfig
