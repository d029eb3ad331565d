from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class GemType(Enum):
    """Closed set of gem kinds. Boards play with a prefix of this ordering."""
    PURPLE = "purple"
    PINK = "pink"
    YELLOW = "yellow"
    BLUE = "blue"
    GREEN = "green"


@dataclass(slots=True)
class Gem:
    """Per-entity gem state.

    ``position`` is the logical cell the Board stores this gem in; it never
    tracks in-flight visuals. ``matched`` lives only for one detection pass.
    ``selected`` belongs to the input layer and is ignored by matching.
    """
    type: GemType
    position: Tuple[int, int]
    matched: bool = False
    selected: bool = False
