"""Public entry point: one GameBoard per esper world."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Union

from gemfall.components.board import Position
from gemfall.components.gem import GemType
from gemfall.errors import BoardClosed, OutOfBounds
from gemfall.events.bus import EventBus, EVENT_SWAP_REQUEST
from gemfall.settings import BoardSettings
from gemfall.systems.board import BoardSystem
from gemfall.systems.board_ops import get_board, get_or_create_cascade_state, get_palette, snapshot_rows
from gemfall.systems.cascade import CascadeResolver, RoundDelta
from gemfall.systems.match import find_all_matches, find_valid_swaps
from gemfall.systems.swap import SwapController, SwapOutcome
from gemfall.utils.rng import GemRandom
from gemfall.world import create_world, destroy_world, use_world

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GemDescriptor:
    gem_id: int
    type: GemType
    position: Position


class GameBoard:
    def __init__(
        self,
        settings: BoardSettings | None = None,
        *,
        event_bus: EventBus | None = None,
        rng: GemRandom | None = None,
    ):
        self.settings = settings or BoardSettings()
        self.event_bus = event_bus or EventBus()
        self.world_name = create_world(self.settings)
        self._closed = False
        with use_world(self.world_name):
            self.rng = rng or GemRandom(get_palette().types, self.settings.rng_seed)
            self.board_system = BoardSystem(self.event_bus, self.rng)
            self.resolver = CascadeResolver(
                self.event_bus, self.rng, spawn_height=self.settings.effective_spawn_height
            )
            self.swaps = SwapController(self.event_bus, self.resolver)
            self.board_system.populate()
        self.event_bus.subscribe(EVENT_SWAP_REQUEST, self.on_swap_request)
        logger.debug("Created board %s (%dx%d)", self.world_name, self.width, self.height)

    def _world(self):
        if self._closed:
            raise BoardClosed(self.world_name)
        return use_world(self.world_name)

    @classmethod
    def from_settings(cls, settings: BoardSettings, **kwargs) -> "GameBoard":
        return cls(settings, **kwargs)

    @property
    def width(self) -> int:
        return self.settings.width

    @property
    def height(self) -> int:
        return self.settings.height

    @property
    def gem_types(self) -> List[GemType]:
        return list(self.rng.gem_types)

    @property
    def cascade_active(self) -> bool:
        with self._world():
            return get_or_create_cascade_state().active

    def in_bounds(self, pos: Position) -> bool:
        col, row = pos
        return 0 <= col < self.width and 0 <= row < self.height

    def gem_at(self, pos: Position) -> Optional[GemDescriptor]:
        if not self.in_bounds(pos):
            raise OutOfBounds(pos, self.width, self.height)
        with self._world():
            board = get_board()
            gem = board.get(pos)
            if gem is None:
                return None
            return GemDescriptor(gem_id=board.entity_at(pos), type=gem.type, position=gem.position)

    def set_selected(self, pos: Position, selected: bool) -> bool:
        """Toggle the presentation-only selection flag; False if the cell is empty."""
        with self._world():
            gem = get_board().get(pos)
            if gem is None:
                return False
            gem.selected = selected
            return True

    def attempt_swap(self, src: Position, dst: Position) -> SwapOutcome:
        with self._world():
            return self.swaps.try_swap(tuple(src), tuple(dst))

    def iter_swap(self, src: Position, dst: Position) -> Iterator[Union[SwapOutcome, RoundDelta]]:
        """Stepwise swap: the outcome first, then one RoundDelta per cascade round.

        The board's world is re-entered on every step, so other boards can be
        used between steps. Closing the iterator early finishes the cascade.
        """
        with self._world():
            steps = self.swaps.iter_swap(tuple(src), tuple(dst))
        try:
            while True:
                with self._world():
                    try:
                        step = next(steps)
                    except StopIteration:
                        return
                yield step
        finally:
            if not self._closed:
                with self._world():
                    steps.close()

    def on_swap_request(self, sender, **kwargs):
        # Boards may share a bus; only take requests addressed to this one.
        if kwargs.get('board') != self.world_name:
            return
        src = kwargs.get('src')
        dst = kwargs.get('dst')
        if not src or not dst:
            return
        self.attempt_swap(src, dst)

    def snapshot(self) -> List[List[Optional[GemType]]]:
        """Gem types indexed ``[row][col]``, ground row first."""
        with self._world():
            return snapshot_rows(get_board())

    def occupied_count(self) -> int:
        with self._world():
            return get_board().occupied_count()

    def find_matches(self) -> List[List[Position]]:
        with self._world():
            return find_all_matches(get_board())

    def is_quiescent(self) -> bool:
        return not self.find_matches()

    def valid_swaps(self) -> List[Tuple[Position, Position]]:
        with self._world():
            return find_valid_swaps(get_board())

    def hint(self) -> Optional[Tuple[Position, Position]]:
        swaps = self.valid_swaps()
        return swaps[0] if swaps else None

    def check_integrity(self) -> None:
        with self._world():
            get_board().check_integrity()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.event_bus.unsubscribe(EVENT_SWAP_REQUEST, self.on_swap_request)
        destroy_world(self.world_name)

    def __enter__(self) -> "GameBoard":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def new_board(
    width: int,
    height: int,
    gem_type_count: int,
    rng_seed: int | None = None,
    *,
    event_bus: EventBus | None = None,
) -> GameBoard:
    """Build a quiescent board of ``width`` x ``height`` using the first ``gem_type_count`` gem types."""
    settings = BoardSettings(width=width, height=height, gem_type_count=gem_type_count, rng_seed=rng_seed)
    return GameBoard(settings, event_bus=event_bus)
