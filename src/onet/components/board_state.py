from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Tuple

Position = Tuple[int, int]


class BoardPhase(Enum):
    """Where the board is in the clear -> shift -> settle -> shuffle sequence."""
    IDLE = auto()
    CONNECTING = auto()
    SHIFTING = auto()
    SETTLING = auto()
    SHUFFLING = auto()
    CLEARED = auto()


@dataclass(slots=True)
class BoardState:
    """Sequencing state shared by the board systems.

    ``elapsed`` counts seconds spent in the current timed phase. Input is only accepted
    while the phase is IDLE.
    """

    phase: BoardPhase = BoardPhase.IDLE
    elapsed: float = 0.0
    pending_pair: List[Position] = field(default_factory=list)
    pending_path: Tuple[Position, ...] = ()
    selected: Optional[Position] = None
    pairs_cleared: int = 0
    awaiting_shift: bool = False

    @property
    def input_locked(self) -> bool:
        return self.phase is not BoardPhase.IDLE

    def enter(self, phase: BoardPhase) -> None:
        self.phase = phase
        self.elapsed = 0.0
