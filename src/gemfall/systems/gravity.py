from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from gemfall.components.board import Board, Position
from gemfall.components.gem import GemType
from gemfall.systems.board_ops import move_gem, spawn_gem
from gemfall.utils.rng import GemRandom


@dataclass(slots=True)
class GemMove:
    gem_id: int
    source: Position
    target: Position


@dataclass(slots=True)
class GemSpawn:
    gem_id: int
    position: Position
    gem_type: GemType
    # Off-board cell the gem appears at before falling; presentation only.
    spawn_position: Position


def compact_column(board: Board, col: int) -> List[GemMove]:
    """Pack the column's gems toward row 0, keeping their vertical order."""
    moves: List[GemMove] = []
    lowest_free: int | None = None
    for row in range(board.height):
        source = (col, row)
        if board.entity_at(source) is None:
            if lowest_free is None:
                lowest_free = row
            continue
        if lowest_free is None:
            continue
        # Rows lowest_free..row-1 are all empty at this point.
        target = (col, lowest_free)
        entity = move_gem(board, source, target)
        moves.append(GemMove(gem_id=entity, source=source, target=target))
        lowest_free += 1
    return moves


def compact_columns(board: Board, columns: Iterable[int]) -> List[GemMove]:
    moves: List[GemMove] = []
    for col in sorted(set(columns)):
        moves.extend(compact_column(board, col))
    return moves


def refill_columns(board: Board, columns: Iterable[int], rng: GemRandom, *, spawn_height: int) -> List[GemSpawn]:
    """Fill every empty cell of the columns with an independently drawn random gem.

    No look-ahead: a refill may complete a match, which the next cascade
    round picks up.
    """
    spawns: List[GemSpawn] = []
    for col in sorted(set(columns)):
        for pos in board.column_positions(col):
            if board.entity_at(pos) is not None:
                continue
            gem_type = rng.next_gem_type()
            entity = spawn_gem(board, pos, gem_type)
            spawns.append(
                GemSpawn(
                    gem_id=entity,
                    position=pos,
                    gem_type=gem_type,
                    spawn_position=(pos[0], pos[1] + spawn_height),
                )
            )
    return spawns
