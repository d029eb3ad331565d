from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List

from gemfall.components.board import Position
from gemfall.components.cascade_state import CascadePhase
from gemfall.events.bus import (
    EventBus,
    EVENT_CASCADE_COMPLETE,
    EVENT_CASCADE_STEP,
    EVENT_GRAVITY_APPLIED,
    EVENT_MATCH_CLEARED,
    EVENT_MATCH_FOUND,
    EVENT_REFILL_COMPLETED,
)
from gemfall.systems.board_ops import destroy_gem, gem_for, get_board, get_or_create_cascade_state
from gemfall.systems.gravity import GemMove, GemSpawn, compact_columns, refill_columns
from gemfall.systems.match import find_matches_for, matched_positions
from gemfall.utils.rng import GemRandom

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RoundDelta:
    """Everything one cascade round changed, in the order it happened."""

    depth: int
    removed: List[Position] = field(default_factory=list)
    moved: List[GemMove] = field(default_factory=list)
    created: List[GemSpawn] = field(default_factory=list)

    @property
    def frontier(self) -> List[Position]:
        """Cells the next round has to re-check."""
        cells = [move.target for move in self.moved] + [spawn.position for spawn in self.created]
        return sorted(set(cells))

    @property
    def columns(self) -> List[int]:
        return sorted({col for col, _ in self.removed})


class CascadeResolver:
    """Runs remove -> compact -> refill -> re-check rounds until nothing matches.

    Rounds are produced by a generator so a presentation layer can animate
    between them; the board is whole (every cell filled, positions in sync)
    at each yield.
    """

    def __init__(self, event_bus: EventBus, rng: GemRandom, *, spawn_height: int):
        self.event_bus = event_bus
        self.rng = rng
        self.spawn_height = spawn_height

    def iter_rounds(self, frontier: Iterable[Position]) -> Iterator[RoundDelta]:
        board = get_board()
        state = get_or_create_cascade_state()
        state.active = True
        state.depth = 0
        pending = sorted(set(frontier))
        try:
            while True:
                state.phase = CascadePhase.CHECKING
                matched = find_matches_for(board, pending)
                if not matched:
                    break
                state.depth += 1
                delta = RoundDelta(depth=state.depth)
                delta.removed = matched_positions(board, matched)
                self.event_bus.emit(
                    EVENT_MATCH_FOUND, positions=delta.removed, size=len(delta.removed), depth=state.depth
                )

                state.phase = CascadePhase.REMOVING
                cleared_types = [(col, row, gem_for(board.entity_at((col, row))).type) for col, row in delta.removed]
                for pos in delta.removed:
                    destroy_gem(board, pos)
                self.event_bus.emit(EVENT_MATCH_CLEARED, positions=delta.removed, types=cleared_types)

                state.phase = CascadePhase.COMPACTING
                delta.moved = compact_columns(board, delta.columns)
                self.event_bus.emit(EVENT_GRAVITY_APPLIED, moves=delta.moved, columns=delta.columns)

                state.phase = CascadePhase.REFILLING
                delta.created = refill_columns(board, delta.columns, self.rng, spawn_height=self.spawn_height)
                self.event_bus.emit(EVENT_REFILL_COMPLETED, spawns=delta.created)

                logger.debug(
                    "Cascade round %d: removed=%d moved=%d created=%d",
                    delta.depth, len(delta.removed), len(delta.moved), len(delta.created),
                )
                self.event_bus.emit(EVENT_CASCADE_STEP, depth=delta.depth, delta=delta)
                pending = delta.frontier
                yield delta
        finally:
            state.phase = CascadePhase.DONE
            state.active = False
            state.total_rounds += state.depth
            self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=state.depth)

    def resolve(self, frontier: Iterable[Position]) -> List[RoundDelta]:
        return list(self.iter_rounds(frontier))
