"""Board configuration: defaults from ``gemfall.constants`` plus optional JSON overrides."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Optional

from gemfall.components.gem import GemType
from gemfall.constants import (
    DEFAULT_GEM_TYPE_COUNT,
    DEFAULT_SPAWN_HEIGHT,
    GRID_COLS,
    GRID_ROWS,
    MIN_GEM_TYPE_COUNT,
)
from gemfall.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BoardSettings:
    width: int = GRID_COLS
    height: int = GRID_ROWS
    gem_type_count: int = DEFAULT_GEM_TYPE_COUNT
    rng_seed: Optional[int] = None
    spawn_height: Optional[int] = DEFAULT_SPAWN_HEIGHT

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        for name in ("width", "height", "gem_type_count"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(f"board dimensions must be positive, got {self.width}x{self.height}")
        # Fewer than three kinds can cascade without end.
        if not MIN_GEM_TYPE_COUNT <= self.gem_type_count <= len(GemType):
            raise ConfigurationError(
                f"gem_type_count must be between {MIN_GEM_TYPE_COUNT} and {len(GemType)}, got {self.gem_type_count}"
            )
        if self.spawn_height is not None and self.spawn_height < 0:
            raise ConfigurationError(f"spawn_height must not be negative, got {self.spawn_height}")

    @property
    def effective_spawn_height(self) -> int:
        return self.height if self.spawn_height is None else self.spawn_height

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "BoardSettings":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.debug("Ignoring unknown board settings: %s", ", ".join(unknown))
        return cls(**{key: value for key, value in data.items() if key in known})


def load_settings(path: Path | str) -> BoardSettings:
    settings_path = Path(path)
    try:
        with settings_path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"cannot read board settings from {settings_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"board settings in {settings_path} must be a JSON object")
    return BoardSettings.from_mapping(data)
