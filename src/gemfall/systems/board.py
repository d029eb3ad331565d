import logging
from typing import List, Set

from gemfall.components.board import Board, Position
from gemfall.components.gem import GemType
from gemfall.events.bus import EventBus, EVENT_BOARD_READY
from gemfall.systems.board_ops import get_board, spawn_gem
from gemfall.utils.rng import GemRandom

logger = logging.getLogger(__name__)


class BoardSystem:
    """Creates the initial layout: a random fill followed by pre-match resolution."""

    def __init__(self, event_bus: EventBus, rng: GemRandom):
        self.event_bus = event_bus
        self.rng = rng

    def populate(self) -> List[int]:
        board = get_board()
        spawned = [
            spawn_gem(board, pos, self.rng.next_gem_type())
            for pos in board.positions()
            if board.entity_at(pos) is None
        ]
        self.resolve_pre_matches(board)
        logger.debug("Populated %dx%d board with %d gems", board.width, board.height, len(spawned))
        self.event_bus.emit(
            EVENT_BOARD_READY, width=board.width, height=board.height, gem_types=list(self.rng.gem_types)
        )
        return spawned

    def resolve_pre_matches(self, board: Board) -> None:
        """Redraw gem types until no two orthogonal neighbours share a type.

        That is stricter than "no run of three", and only needs a single pass
        in raster order.
        """
        for pos in board.positions():
            self._settle(board, pos)

    def _settle(self, board: Board, pos: Position) -> None:
        gem = board.get(pos)
        if gem is None:
            return
        col, row = pos
        neighbours = [(col, row + 1), (col, row - 1), (col - 1, row), (col + 1, row)]
        # Cells earlier in raster order are never revisited.
        settled = [(col - 1, row), (col, row - 1)]
        palette = set(self.rng.gem_types)
        while True:
            blocked = self._types_at(board, neighbours)
            if palette <= blocked:
                # Every kind is taken around this cell; the unsettled
                # neighbours will step aside when their turn comes.
                blocked = self._types_at(board, settled)
            if gem.type not in blocked:
                return
            gem.type = self.rng.next_gem_type()

    @staticmethod
    def _types_at(board: Board, positions: List[Position]) -> Set[GemType]:
        found: Set[GemType] = set()
        for pos in positions:
            neighbour = board.get(pos)
            if neighbour is not None:
                found.add(neighbour.type)
        return found
