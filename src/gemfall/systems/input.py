from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Tuple

from gemfall.events.bus import (
    EventBus,
    EVENT_GEM_DESELECTED,
    EVENT_GEM_SELECTED,
    EVENT_SWAP_REQUEST,
    EVENT_TILE_CLICK,
)
from gemfall.systems.board_ops import is_adjacent

if TYPE_CHECKING:
    from gemfall.game_board import GameBoard

Position = Tuple[int, int]


def cell_at_point(x: float, y: float, tile_size: float = 1.0, origin: Tuple[float, float] = (0.0, 0.0)) -> Position:
    """Map board-space coordinates to a cell; cell centres sit on whole tile multiples."""
    if tile_size <= 0:
        raise ValueError("tile_size must be positive")
    ox, oy = origin
    return round((x - ox) / tile_size), round((y - oy) / tile_size)


class SelectionSystem:
    """Turns two tile clicks into a swap request.

    First click selects a gem. A second click on a neighbour requests the
    swap, on the same cell clears the selection, anywhere else moves it.
    Clicks are ignored while a cascade resolves.
    """

    def __init__(self, game_board: GameBoard, event_bus: EventBus):
        self.game_board = game_board
        self.event_bus = event_bus
        self.selected: Optional[Position] = None
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)

    def on_tile_click(self, sender, **kwargs):
        col = kwargs.get('col')
        row = kwargs.get('row')
        if col is None or row is None:
            return
        if self.game_board.cascade_active:
            return
        pos = (col, row)
        if not self.game_board.in_bounds(pos):
            return
        if self.selected is None:
            self._select(pos)
        elif pos == self.selected:
            self._deselect('reclick')
        elif is_adjacent(self.selected, pos):
            src = self.selected
            self._deselect('swap')
            self.event_bus.emit(EVENT_SWAP_REQUEST, src=src, dst=pos, board=self.game_board.world_name)
        else:
            self._deselect('reselect')
            self._select(pos)

    def _select(self, pos: Position) -> None:
        if not self.game_board.set_selected(pos, True):
            return
        self.selected = pos
        gem = self.game_board.gem_at(pos)
        self.event_bus.emit(EVENT_GEM_SELECTED, col=pos[0], row=pos[1], gem_id=gem.gem_id if gem else None)

    def _deselect(self, reason: str) -> None:
        prev = self.selected
        if prev is None:
            return
        self.selected = None
        self.game_board.set_selected(prev, False)
        self.event_bus.emit(EVENT_GEM_DESELECTED, reason=reason, prev_col=prev[0], prev_row=prev[1])
