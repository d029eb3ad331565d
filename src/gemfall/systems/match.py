from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, List, Optional, Set, Tuple

from gemfall.components.board import Board, Position
from gemfall.components.gem import GemType
from gemfall.systems.board_ops import gem_for, is_adjacent

MIN_MATCH = 3


class Axis(Enum):
    VERTICAL = (0, 1)
    HORIZONTAL = (1, 0)


class Direction(Enum):
    POSITIVE = 1
    NEGATIVE = -1


def scan(board: Board, origin: Position, axis: Axis, direction: Direction) -> List[int]:
    """Walk away from origin collecting gems of the origin's type.

    Stops at the first different or empty cell, or at the board edge. The
    origin itself is not part of the result.
    """
    origin_gem = board.get(origin)
    if origin_gem is None:
        return []
    step_col, step_row = axis.value
    step_col *= direction.value
    step_row *= direction.value
    col, row = origin
    run: List[int] = []
    for _ in range(max(board.width, board.height)):
        col += step_col
        row += step_row
        pos = (col, row)
        if not board.in_bounds(pos):
            break
        gem = board.get(pos)
        if gem is None or gem.type != origin_gem.type:
            break
        run.append(board.entity_at(pos))
    return run


def axis_run(board: Board, origin: Position, axis: Axis) -> List[int]:
    """Gems along one axis that extend origin to a match, or [] if they do not."""
    run = scan(board, origin, axis, Direction.NEGATIVE) + scan(board, origin, axis, Direction.POSITIVE)
    if len(run) < MIN_MATCH - 1:
        return []
    return run


def find_matches_at(board: Board, pos: Position) -> Set[int]:
    """Union of the origin with its qualifying vertical and horizontal runs.

    Every gem of a match is flagged ``matched``. L, T and plus shapes come
    back as one group because both axes share the origin.
    """
    origin = board.entity_at(pos)
    if origin is None:
        return set()
    union = {origin}
    union.update(axis_run(board, pos, Axis.VERTICAL))
    union.update(axis_run(board, pos, Axis.HORIZONTAL))
    if len(union) < MIN_MATCH:
        return set()
    for entity in union:
        gem_for(entity).matched = True
    return union


def find_matches_for(board: Board, positions: Iterable[Position]) -> Set[int]:
    matches: Set[int] = set()
    for pos in positions:
        matches |= find_matches_at(board, pos)
    return matches


def matched_positions(board: Board, entities: Iterable[int]) -> List[Position]:
    return sorted(gem_for(entity).position for entity in entities)


def _line_runs(line: List[Position], types: Dict[Position, GemType]) -> List[List[Position]]:
    runs: List[List[Position]] = []
    run: List[Position] = []
    last: Optional[GemType] = None
    for pos in line:
        tval = types.get(pos)
        if tval is not None and tval == last:
            run.append(pos)
            continue
        if len(run) >= MIN_MATCH:
            runs.append(run)
        run = [pos] if tval is not None else []
        last = tval
    if len(run) >= MIN_MATCH:
        runs.append(run)
    return runs


def find_all_matches(board: Board, *, types: Dict[Position, GemType] | None = None) -> List[List[Position]]:
    """Full-board scan for runs of three or more, overlapping runs merged."""
    tile_map = types if types is not None else board.type_map()
    if not tile_map:
        return []
    runs: List[List[Position]] = []
    for row in range(board.height):
        runs.extend(_line_runs([(col, row) for col in range(board.width)], tile_map))
    for col in range(board.width):
        runs.extend(_line_runs([(col, row) for row in range(board.height)], tile_map))
    groups = [set(run) for run in runs]
    merged: List[Set[Position]] = []
    while groups:
        first = groups.pop()
        changed = True
        while changed:
            changed = False
            for group in groups[:]:
                if first & group:
                    first |= group
                    groups.remove(group)
                    changed = True
        merged.append(first)
    return sorted(sorted(group) for group in merged)


def _has_line_match(types: Dict[Position, GemType], pos: Position) -> bool:
    tval = types.get(pos)
    if tval is None:
        return False
    col, row = pos
    for step_col, step_row in (Axis.HORIZONTAL.value, Axis.VERTICAL.value):
        length = 1
        for sign in (1, -1):
            probe = (col + step_col * sign, row + step_row * sign)
            while types.get(probe) == tval:
                length += 1
                probe = (probe[0] + step_col * sign, probe[1] + step_row * sign)
        if length >= MIN_MATCH:
            return True
    return False


def predict_swap_creates_match(
    board: Board, src: Position, dst: Position, *, types: Dict[Position, GemType] | None = None
) -> bool:
    """Return True if swapping src/dst would create a match. Never touches the board."""
    tile_map = types if types is not None else board.type_map()
    if src not in tile_map or dst not in tile_map or not is_adjacent(src, dst):
        return False
    swapped = tile_map.copy()
    swapped[src], swapped[dst] = swapped[dst], swapped[src]
    return _has_line_match(swapped, src) or _has_line_match(swapped, dst)


def find_valid_swaps(board: Board) -> List[Tuple[Position, Position]]:
    """Enumerate adjacent swaps that would produce a match."""
    tile_map = board.type_map()
    swaps: List[Tuple[Position, Position]] = []
    for pos in board.positions():
        col, row = pos
        for neighbour in ((col + 1, row), (col, row + 1)):
            if neighbour in tile_map and predict_swap_creates_match(board, pos, neighbour, types=tile_map):
                swaps.append((pos, neighbour))
    return swaps
