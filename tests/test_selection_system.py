import pytest

from gemfall.events.bus import (
    EVENT_GEM_DESELECTED,
    EVENT_GEM_SELECTED,
    EVENT_SWAP_COMMITTED,
    EVENT_SWAP_REQUEST,
    EVENT_TILE_CLICK,
)
from gemfall.systems.input import SelectionSystem, cell_at_point
from tests.helpers import ROW_COMPLETION_LAYOUT, board_context, paint_layout


@pytest.fixture
def selection(bus, make_board):
    game_board = make_board(8, 8, 3)
    paint_layout(game_board, ROW_COMPLETION_LAYOUT)
    return game_board, SelectionSystem(game_board, bus)


def _listen(bus, name):
    seen = []
    bus.subscribe(name, lambda sender, **payload: seen.append(payload))
    return seen


def _is_selected(game_board, pos):
    with board_context(game_board) as board:
        return board.get(pos).selected


def test_first_click_selects(bus, selection):
    game_board, system = selection
    selected = _listen(bus, EVENT_GEM_SELECTED)
    bus.emit(EVENT_TILE_CLICK, col=3, row=4)
    assert system.selected == (3, 4)
    assert _is_selected(game_board, (3, 4))
    assert selected == [{'col': 3, 'row': 4, 'gem_id': game_board.gem_at((3, 4)).gem_id}]


def test_reclick_clears_selection(bus, selection):
    game_board, system = selection
    deselected = _listen(bus, EVENT_GEM_DESELECTED)
    bus.emit(EVENT_TILE_CLICK, col=1, row=1)
    bus.emit(EVENT_TILE_CLICK, col=1, row=1)
    assert system.selected is None
    assert not _is_selected(game_board, (1, 1))
    assert deselected[0]['reason'] == 'reclick'


def test_distant_click_moves_selection(bus, selection):
    game_board, system = selection
    deselected = _listen(bus, EVENT_GEM_DESELECTED)
    requests = _listen(bus, EVENT_SWAP_REQUEST)
    bus.emit(EVENT_TILE_CLICK, col=0, row=0)
    bus.emit(EVENT_TILE_CLICK, col=5, row=5)
    assert system.selected == (5, 5)
    assert not _is_selected(game_board, (0, 0))
    assert deselected[0]['reason'] == 'reselect'
    assert requests == []


def test_adjacent_click_requests_swap(bus, selection):
    game_board, system = selection
    requests = _listen(bus, EVENT_SWAP_REQUEST)
    committed = _listen(bus, EVENT_SWAP_COMMITTED)
    bus.emit(EVENT_TILE_CLICK, col=2, row=0)
    bus.emit(EVENT_TILE_CLICK, col=2, row=1)
    assert requests == [{'src': (2, 0), 'dst': (2, 1), 'board': game_board.world_name}]
    assert system.selected is None
    assert len(committed) == 1
    assert game_board.is_quiescent()


def test_clicks_outside_board_are_ignored(bus, selection):
    _, system = selection
    bus.emit(EVENT_TILE_CLICK, col=8, row=0)
    bus.emit(EVENT_TILE_CLICK, col=0)
    assert system.selected is None


def test_clicks_ignored_during_cascade(bus, selection):
    game_board, system = selection
    steps = game_board.iter_swap((2, 0), (2, 1))
    next(steps)
    bus.emit(EVENT_TILE_CLICK, col=4, row=4)
    assert system.selected is None
    steps.close()


@pytest.mark.parametrize('point,expected', [
    ((0.2, 0.4), (0, 0)),
    ((2.7, 1.1), (3, 1)),
    ((7.0, 7.4), (7, 7)),
])
def test_cell_at_point_unit_tiles(point, expected):
    assert cell_at_point(*point) == expected


def test_cell_at_point_with_tile_size_and_origin():
    assert cell_at_point(16 + 64, 16 + 30, tile_size=32, origin=(16, 16)) == (2, 1)
    with pytest.raises(ValueError):
        cell_at_point(1, 1, tile_size=0)
