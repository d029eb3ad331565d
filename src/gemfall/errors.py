"""Exception taxonomy for the board engine.

Swap errors are caller mistakes: they are raised during swap validation and
reported back inside the ``SwapOutcome`` instead of escaping ``attempt_swap``.
Configuration and invariant errors are fatal and propagate.
"""
from __future__ import annotations

from typing import Tuple

Position = Tuple[int, int]


class GemfallError(Exception):
    """Root of every error raised by the engine."""


class SwapError(GemfallError):
    reason = "swap_error"


class OutOfBounds(SwapError):
    reason = "out_of_bounds"

    def __init__(self, position: Position, width: int, height: int):
        super().__init__(f"position {position} outside board {width}x{height}")
        self.position = position


class NotAdjacent(SwapError):
    reason = "not_adjacent"

    def __init__(self, src: Position, dst: Position):
        super().__init__(f"cells {src} and {dst} are not orthogonal neighbours")
        self.src = src
        self.dst = dst


class EmptyCellSwap(SwapError):
    reason = "empty_cell"

    def __init__(self, position: Position):
        super().__init__(f"no gem at {position}")
        self.position = position


class CascadeInProgress(SwapError):
    reason = "cascade_active"

    def __init__(self) -> None:
        super().__init__("a cascade is still resolving")


class ConfigurationError(GemfallError, ValueError):
    pass


class BoardInvariantError(GemfallError, RuntimeError):
    pass


class BoardClosed(GemfallError, RuntimeError):
    def __init__(self, world_name: str):
        super().__init__(f"board {world_name} has been closed")
        self.world_name = world_name
