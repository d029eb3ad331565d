from dataclasses import dataclass, field
from typing import List

from gemfall.components.gem import GemType


@dataclass(slots=True)
class GemPalette:
    """Gem types a board spawns, stored on a single registry entity.

    Order follows ``GemType`` so that a given count always selects the same kinds.
    """
    types: List[GemType] = field(default_factory=lambda: list(GemType))

    @classmethod
    def first(cls, count: int) -> "GemPalette":
        return cls(types=list(GemType)[:count])

    def __len__(self) -> int:
        return len(self.types)

    def __contains__(self, gem_type: GemType) -> bool:
        return gem_type in self.types
