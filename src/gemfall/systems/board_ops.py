from __future__ import annotations

from typing import List, Optional

import esper

from gemfall.components.board import Board, Position
from gemfall.components.cascade_state import CascadeState
from gemfall.components.gem import Gem, GemType
from gemfall.components.gem_palette import GemPalette
from gemfall.errors import BoardInvariantError


def get_board() -> Board:
    for _, board in esper.get_component(Board):
        return board
    raise BoardInvariantError("Board component not found in the current world")


def get_palette() -> GemPalette:
    for _, palette in esper.get_component(GemPalette):
        return palette
    raise BoardInvariantError("GemPalette not found in the current world")


def get_or_create_cascade_state() -> CascadeState:
    """Return the shared CascadeState component, creating it if absent."""
    for _, state in esper.get_component(CascadeState):
        return state
    state = CascadeState()
    esper.create_entity(state)
    return state


def is_adjacent(a: Position, b: Position) -> bool:
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1


def gem_for(entity: int) -> Gem:
    return esper.component_for_entity(entity, Gem)


def spawn_gem(board: Board, pos: Position, gem_type: GemType) -> int:
    if board.entity_at(pos) is not None:
        raise BoardInvariantError(f"cannot spawn into occupied cell {pos}")
    entity = esper.create_entity(Gem(type=gem_type, position=pos))
    board.set(pos, entity)
    return entity


def destroy_gem(board: Board, pos: Position) -> Optional[int]:
    entity = board.entity_at(pos)
    if entity is None:
        return None
    board.set(pos, None)
    esper.delete_entity(entity, immediate=True)
    return entity


def move_gem(board: Board, source: Position, target: Position) -> int:
    entity = board.entity_at(source)
    if entity is None:
        raise BoardInvariantError(f"no gem to move at {source}")
    if board.entity_at(target) is not None:
        raise BoardInvariantError(f"cannot move {source} onto occupied cell {target}")
    board.set(target, entity)
    board.set(source, None)
    return entity


def swap_cells(board: Board, a: Position, b: Position) -> None:
    """Exchange placement and recorded positions of the gems at a and b."""
    ent_a = board.entity_at(a)
    ent_b = board.entity_at(b)
    board.set(a, ent_b)
    board.set(b, ent_a)


def snapshot_rows(board: Board) -> List[List[Optional[GemType]]]:
    """Gem types row by row, ground row first; empty cells are None."""
    rows: List[List[Optional[GemType]]] = []
    for row in range(board.height):
        line: List[Optional[GemType]] = []
        for col in range(board.width):
            gem = board.get((col, row))
            line.append(gem.type if gem is not None else None)
        rows.append(line)
    return rows
