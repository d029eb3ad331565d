from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

import esper

from gemfall.components.gem import Gem, GemType
from gemfall.errors import BoardInvariantError

Position = Tuple[int, int]


@dataclass(slots=True)
class Board:
    """Grid of gem entity ids indexed ``cells[col][row]``; row 0 is the ground row.

    Every other module reaches the grid through ``get``/``set``/``in_bounds``.
    Reading outside the board yields ``None`` so neighbour scans need no
    special casing at the edges.
    """
    width: int
    height: int
    cells: List[List[Optional[int]]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise BoardInvariantError(f"invalid board dimensions {self.width}x{self.height}")
        if not self.cells:
            self.cells = [[None] * self.height for _ in range(self.width)]

    def in_bounds(self, pos: Position) -> bool:
        col, row = pos
        return 0 <= col < self.width and 0 <= row < self.height

    def entity_at(self, pos: Position) -> Optional[int]:
        if not self.in_bounds(pos):
            return None
        col, row = pos
        return self.cells[col][row]

    def get(self, pos: Position) -> Optional[Gem]:
        entity = self.entity_at(pos)
        if entity is None or not esper.entity_exists(entity):
            return None
        return esper.try_component(entity, Gem)

    def set(self, pos: Position, entity: Optional[int]) -> None:
        """Place ``entity`` (or nothing) at ``pos`` and sync the gem's recorded position."""
        if not self.in_bounds(pos):
            raise BoardInvariantError(f"write outside board at {pos}")
        col, row = pos
        if entity is not None:
            gem = esper.try_component(entity, Gem) if esper.entity_exists(entity) else None
            if gem is None:
                raise BoardInvariantError(f"entity {entity} placed at {pos} carries no Gem")
            gem.position = pos
        self.cells[col][row] = entity

    def positions(self) -> Iterator[Position]:
        """Raster order: ground row first, left to right."""
        for row in range(self.height):
            for col in range(self.width):
                yield (col, row)

    def column_positions(self, col: int) -> List[Position]:
        return [(col, row) for row in range(self.height)]

    def type_map(self) -> Dict[Position, GemType]:
        mapping: Dict[Position, GemType] = {}
        for pos in self.positions():
            gem = self.get(pos)
            if gem is not None:
                mapping[pos] = gem.type
        return mapping

    def occupied_count(self) -> int:
        return sum(1 for column in self.cells for entity in column if entity is not None)

    def empty_positions(self) -> List[Position]:
        return [pos for pos in self.positions() if self.entity_at(pos) is None]

    def check_integrity(self) -> None:
        for pos in self.positions():
            entity = self.entity_at(pos)
            if entity is None:
                continue
            gem = esper.try_component(entity, Gem) if esper.entity_exists(entity) else None
            if gem is None:
                raise BoardInvariantError(f"cell {pos} references missing gem entity {entity}")
            if gem.position != pos:
                raise BoardInvariantError(
                    f"gem {entity} records position {gem.position} but sits in {pos}"
                )
