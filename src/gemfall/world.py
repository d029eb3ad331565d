"""esper world lifecycle for boards.

esper keeps one module-level "current world"; every GameBoard gets its own
named world and switches to it for the duration of each public call.
"""
from __future__ import annotations

import itertools
from contextlib import contextmanager
from typing import Iterator

import esper

from gemfall.components.board import Board
from gemfall.components.cascade_state import CascadeState
from gemfall.components.gem_palette import GemPalette
from gemfall.settings import BoardSettings

_world_ids = itertools.count(1)


def new_world_name(prefix: str = "board") -> str:
    return f"{prefix}-{next(_world_ids)}"


@contextmanager
def use_world(name: str) -> Iterator[str]:
    previous = esper.current_world
    esper.switch_world(name)
    try:
        yield name
    finally:
        esper.switch_world(previous)


def create_world(settings: BoardSettings, *, name: str | None = None) -> str:
    """Create a world holding the board, palette and cascade-state singletons."""
    world_name = name or new_world_name()
    with use_world(world_name):
        esper.create_entity(Board(width=settings.width, height=settings.height))
        esper.create_entity(GemPalette.first(settings.gem_type_count))
        esper.create_entity(CascadeState())
    return world_name


def destroy_world(name: str) -> None:
    if esper.current_world == name:
        esper.switch_world("default")
    try:
        esper.delete_world(name)
    except KeyError:
        pass
