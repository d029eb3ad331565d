import sys, os

import pytest

# Ensure src (and the repo root for tests.helpers) is on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, 'src')
for path in (SRC, ROOT):
    if path not in sys.path:
        sys.path.insert(0, path)

from gemfall.events.bus import EventBus
from gemfall.game_board import new_board


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def make_board(bus):
    """Factory for boards sharing the test's bus; every board is closed afterwards."""
    created = []

    def _make(width=8, height=8, gem_type_count=5, seed=1234, **kwargs):
        kwargs.setdefault('event_bus', bus)
        board = new_board(width, height, gem_type_count, seed, **kwargs)
        created.append(board)
        return board

    yield _make
    for board in created:
        board.close()
