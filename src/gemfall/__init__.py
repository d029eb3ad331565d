from gemfall.components.gem import GemType
from gemfall.errors import (
    BoardClosed,
    BoardInvariantError,
    CascadeInProgress,
    ConfigurationError,
    EmptyCellSwap,
    GemfallError,
    NotAdjacent,
    OutOfBounds,
    SwapError,
)
from gemfall.events.bus import EventBus
from gemfall.game_board import GameBoard, GemDescriptor, new_board
from gemfall.settings import BoardSettings, load_settings
from gemfall.systems.cascade import RoundDelta
from gemfall.systems.gravity import GemMove, GemSpawn
from gemfall.systems.swap import SwapOutcome, SwapStatus

__all__ = [
    "BoardClosed",
    "BoardInvariantError",
    "BoardSettings",
    "CascadeInProgress",
    "ConfigurationError",
    "EmptyCellSwap",
    "EventBus",
    "GameBoard",
    "GemDescriptor",
    "GemMove",
    "GemSpawn",
    "GemType",
    "GemfallError",
    "NotAdjacent",
    "OutOfBounds",
    "RoundDelta",
    "SwapError",
    "SwapOutcome",
    "SwapStatus",
    "load_settings",
    "new_board",
]
