from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Union

from gemfall.components.board import Board, Position
from gemfall.components.cascade_state import CascadeState
from gemfall.errors import CascadeInProgress, EmptyCellSwap, NotAdjacent, OutOfBounds, SwapError
from gemfall.events.bus import EventBus, EVENT_SWAP_COMMITTED, EVENT_SWAP_REJECTED
from gemfall.systems.board_ops import get_board, get_or_create_cascade_state, is_adjacent, swap_cells
from gemfall.systems.cascade import CascadeResolver, RoundDelta
from gemfall.systems.match import find_matches_at

logger = logging.getLogger(__name__)

NO_MATCH = "no_match"


class SwapStatus(Enum):
    COMMITTED = "committed"
    REJECTED = "rejected"


@dataclass(slots=True)
class SwapOutcome:
    status: SwapStatus
    src: Position
    dst: Position
    rounds: List[RoundDelta] = field(default_factory=list)
    error: Optional[SwapError] = None

    @property
    def committed(self) -> bool:
        return self.status is SwapStatus.COMMITTED

    @property
    def reason(self) -> Optional[str]:
        """Why the swap was rejected; None for committed swaps."""
        if self.committed:
            return None
        return self.error.reason if self.error is not None else NO_MATCH

    @property
    def frontier(self) -> List[Position]:
        return [self.src, self.dst]


class SwapController:
    """Validates a swap, applies it tentatively and commits or rolls it back.

    The tentative exchange and the decision happen inside one call, so no
    caller ever sees a half-swapped board.
    """

    def __init__(self, event_bus: EventBus, resolver: CascadeResolver):
        self.event_bus = event_bus
        self.resolver = resolver

    @staticmethod
    def validate(board: Board, state: CascadeState, src: Position, dst: Position) -> None:
        if state.active:
            raise CascadeInProgress()
        for pos in (src, dst):
            if not board.in_bounds(pos):
                raise OutOfBounds(pos, board.width, board.height)
        if not is_adjacent(src, dst):
            raise NotAdjacent(src, dst)
        for pos in (src, dst):
            if board.entity_at(pos) is None:
                raise EmptyCellSwap(pos)

    def begin_swap(self, src: Position, dst: Position) -> SwapOutcome:
        """Decide the swap. A committed outcome leaves the cascade lock held."""
        board = get_board()
        state = get_or_create_cascade_state()
        try:
            self.validate(board, state, src, dst)
        except SwapError as exc:
            logger.warning("Rejected swap %s -> %s: %s", src, dst, exc)
            return self._reject(SwapOutcome(SwapStatus.REJECTED, src, dst, error=exc))

        swap_cells(board, src, dst)
        matched = find_matches_at(board, src) | find_matches_at(board, dst)
        if not matched:
            swap_cells(board, src, dst)
            logger.debug("Swap %s -> %s made no match; rolled back", src, dst)
            return self._reject(SwapOutcome(SwapStatus.REJECTED, src, dst))

        state.active = True
        outcome = SwapOutcome(SwapStatus.COMMITTED, src, dst)
        logger.debug("Swap %s -> %s committed with %d matched gems", src, dst, len(matched))
        self.event_bus.emit(EVENT_SWAP_COMMITTED, src=src, dst=dst, outcome=outcome)
        return outcome

    def iter_swap(self, src: Position, dst: Position) -> Iterator[Union[SwapOutcome, RoundDelta]]:
        """Yield the outcome first, then each cascade round as it resolves."""
        outcome = self.begin_swap(src, dst)
        if not outcome.committed:
            yield outcome
            return
        rounds = self.resolver.iter_rounds(outcome.frontier)
        try:
            yield outcome
            for delta in rounds:
                outcome.rounds.append(delta)
                yield delta
        finally:
            # A caller that stops stepping early still gets a quiescent board.
            for delta in rounds:
                outcome.rounds.append(delta)

    def try_swap(self, src: Position, dst: Position) -> SwapOutcome:
        steps = self.iter_swap(src, dst)
        outcome = next(steps)
        for _ in steps:
            pass
        return outcome

    def _reject(self, outcome: SwapOutcome) -> SwapOutcome:
        self.event_bus.emit(
            EVENT_SWAP_REJECTED, src=outcome.src, dst=outcome.dst, outcome=outcome, reason=outcome.reason
        )
        return outcome
