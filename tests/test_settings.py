import json

import pytest

from gemfall.constants import GRID_COLS, GRID_ROWS
from gemfall.errors import ConfigurationError
from gemfall.game_board import new_board
from gemfall.settings import BoardSettings, load_settings


def test_defaults():
    settings = BoardSettings()
    assert (settings.width, settings.height) == (GRID_COLS, GRID_ROWS)
    assert settings.gem_type_count == 5
    assert settings.effective_spawn_height == GRID_ROWS


@pytest.mark.parametrize('kwargs', [
    {'gem_type_count': 2},
    {'gem_type_count': 6},
    {'width': 0},
    {'height': -3},
    {'width': True},
    {'height': 2.5},
    {'spawn_height': -1},
])
def test_invalid_settings_raise(kwargs):
    with pytest.raises(ConfigurationError):
        BoardSettings(**kwargs)


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        new_board(8, 8, 1)


def test_explicit_spawn_height():
    assert BoardSettings(height=6, spawn_height=2).effective_spawn_height == 2
    assert BoardSettings(height=6, spawn_height=0).effective_spawn_height == 0


def test_from_mapping_ignores_unknown_keys():
    settings = BoardSettings.from_mapping({'width': 5, 'height': 4, 'gem_type_count': 3, 'theme': 'dark'})
    assert (settings.width, settings.height, settings.gem_type_count) == (5, 4, 3)


def test_load_settings_from_json(tmp_path):
    path = tmp_path / 'board.json'
    path.write_text(json.dumps({'width': 6, 'height': 7, 'gem_type_count': 4, 'rng_seed': 99}), encoding='utf-8')
    settings = load_settings(path)
    assert settings == BoardSettings(width=6, height=7, gem_type_count=4, rng_seed=99)


def test_load_settings_failures(tmp_path):
    with pytest.raises(ConfigurationError):
        load_settings(tmp_path / 'missing.json')
    broken = tmp_path / 'broken.json'
    broken.write_text('{"width": ', encoding='utf-8')
    with pytest.raises(ConfigurationError):
        load_settings(broken)
    listing = tmp_path / 'list.json'
    listing.write_text('[1, 2]', encoding='utf-8')
    with pytest.raises(ConfigurationError):
        load_settings(listing)
    invalid = tmp_path / 'invalid.json'
    invalid.write_text('{"gem_type_count": 9}', encoding='utf-8')
    with pytest.raises(ConfigurationError):
        load_settings(invalid)
