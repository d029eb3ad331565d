from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence

from gemfall.components.board import Board
from gemfall.components.gem import GemType
from gemfall.game_board import GameBoard
from gemfall.systems.board_ops import destroy_gem, get_board, spawn_gem
from gemfall.world import use_world

LETTERS = {
    'A': GemType.PURPLE,
    'B': GemType.PINK,
    'C': GemType.YELLOW,
    'D': GemType.BLUE,
    'E': GemType.GREEN,
}
NAMES = {gem_type: letter for letter, gem_type in LETTERS.items()}


@contextmanager
def board_context(game_board: GameBoard) -> Iterator[Board]:
    """Enter the board's esper world and hand out the raw Board component."""
    with use_world(game_board.world_name):
        yield get_board()


def paint_layout(game_board: GameBoard, rows: Sequence[str]) -> None:
    """Overwrite the board from letter rows listed top row first; '.' empties a cell."""
    assert len(rows) == game_board.height, 'Layout height does not match board'
    with board_context(game_board) as board:
        for index, line in enumerate(rows):
            row = game_board.height - 1 - index
            assert len(line) == game_board.width, f'Layout row {index} has wrong width'
            for col, letter in enumerate(line):
                pos = (col, row)
                if letter == '.':
                    destroy_gem(board, pos)
                    continue
                gem = board.get(pos)
                if gem is None:
                    spawn_gem(board, pos, LETTERS[letter])
                else:
                    gem.type = LETTERS[letter]
                    gem.matched = False


def layout_of(game_board: GameBoard) -> List[str]:
    rows = game_board.snapshot()
    return [
        ''.join(NAMES[cell] if cell is not None else '.' for cell in line)
        for line in reversed(rows)
    ]


def has_run(rows: Sequence[Sequence[Optional[GemType]]], length: int = 3) -> bool:
    """Independent scan for straight runs in a ``[row][col]`` snapshot."""
    height = len(rows)
    width = len(rows[0]) if rows else 0
    lines = [[rows[r][c] for c in range(width)] for r in range(height)]
    lines += [[rows[r][c] for r in range(height)] for c in range(width)]
    for line in lines:
        run = 1
        for prev, cur in zip(line, line[1:]):
            if cur is not None and cur == prev:
                run += 1
                if run >= length:
                    return True
            else:
                run = 1
    return False


def has_equal_neighbours(rows: Sequence[Sequence[Optional[GemType]]]) -> bool:
    return has_run(rows, length=2)


def ids_at(game_board: GameBoard, *positions):
    return [game_board.gem_at(pos).gem_id for pos in positions]


# 8x8, types A/B/C: row 0 reads "A A B C ..." and (2,1) holds an A.
ROW_COMPLETION_LAYOUT = [
    'BCABCABC',
    'ABCABCAB',
    'CABCABCA',
    'BCABCABC',
    'ABCABCAB',
    'CABCABCA',
    'BCABCABC',
    'AABCBCAB',
]

# 5x5: swapping (2,0)<->(3,0) clears row 0 cols 0-2; the fall then lines up
# C C C on row 0 cols 1-3 for a second round.
TWO_ROUND_LAYOUT = [
    'EBDAC',
    'CDBCA',
    'BEABD',
    'DCCEB',
    'AACAE',
]
