from dataclasses import dataclass
from enum import Enum, auto


class CascadePhase(Enum):
    CHECKING = auto()
    REMOVING = auto()
    COMPACTING = auto()
    REFILLING = auto()
    DONE = auto()


@dataclass(slots=True)
class CascadeState:
    """Tracks the cascade in flight; ``active`` doubles as the swap lock."""

    active: bool = False
    phase: CascadePhase = CascadePhase.DONE
    depth: int = 0
    total_rounds: int = 0
