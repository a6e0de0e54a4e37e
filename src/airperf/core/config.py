"""Airfield configuration: YAML loading and the takeoff defaults schema.

An airfield file holds the defaults a pilot would otherwise repeat on every
calculation: the engine fitted, the runway slope and the runway surface.

    takeoff:
      engine: uls            # "ul", "uls" or "rotax_912_ul(s)"
      slope_pct: 1.5         # positive uphill
      grass:                 # omit or null for a paved runway, true for dry grass
        wet: true
        soft_ground: false
      contamination: inconspicuous

Typical usage example:
    from airperf.core.config import ConfigLoader

    config = ConfigLoader.load("edfz.yaml")
    defaults = config.takeoff_defaults()
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from airperf.systems.performance.tables import Engine
from airperf.systems.performance.takeoff import GrassSurfaceCondition, SurfaceContamination

logger = logging.getLogger(__name__)

ENGINE_ALIASES = {"ul": Engine.ROTAX_912_UL, "uls": Engine.ROTAX_912_ULS}
GRASS_CONDITIONS = ("wet", "soft_ground", "damaged_turf", "high_grass")
TAKEOFF_KEYS = ("engine", "slope_pct", "grass", "contamination")


class ConfigError(Exception):
    """Raised when a configuration file cannot be loaded or holds invalid values."""


def parse_engine(value: Engine | str) -> Engine:
    """Resolve an engine from an alias ("ul", "uls") or an Engine value.

    Raises:
        ConfigError: If the name matches no engine variant.
    """
    if isinstance(value, Engine):
        return value
    key = str(value).strip().lower()
    if key in ENGINE_ALIASES:
        return ENGINE_ALIASES[key]
    try:
        return Engine(key)
    except ValueError as e:
        choices = ", ".join([*ENGINE_ALIASES, *(engine.value for engine in Engine)])
        raise ConfigError(f"Unknown engine '{value}', expected one of: {choices}") from e


def parse_contamination(value: SurfaceContamination | str) -> SurfaceContamination:
    """Resolve a contamination from its name, case-insensitive.

    Raises:
        ConfigError: If the name matches no contamination.
    """
    if isinstance(value, SurfaceContamination):
        return value
    try:
        return SurfaceContamination[str(value).strip().upper()]
    except KeyError as e:
        choices = ", ".join(c.name.lower() for c in SurfaceContamination)
        raise ConfigError(f"Unknown contamination '{value}', expected one of: {choices}") from e


def parse_grass(value: Any) -> GrassSurfaceCondition | None:
    """Resolve a grass setting.

    None or false means a paved runway, true a dry grass runway, and a
    mapping selects individual conditions.

    Raises:
        ConfigError: If the value or one of its conditions is not understood.
    """
    if value is None or value is False:
        return None
    if value is True:
        return GrassSurfaceCondition()
    if isinstance(value, GrassSurfaceCondition):
        return value
    if not isinstance(value, Mapping):
        raise ConfigError(f"Grass setting must be true, false or a mapping, got {value!r}")

    unknown = sorted(set(value) - set(GRASS_CONDITIONS))
    if unknown:
        raise ConfigError(f"Unknown grass conditions: {', '.join(map(str, unknown))}")
    for name, flag in value.items():
        if not isinstance(flag, bool):
            raise ConfigError(f"Grass condition '{name}' must be true or false, got {flag!r}")

    return GrassSurfaceCondition(**value)


@dataclass(frozen=True)
class TakeoffDefaults:
    """Per-airfield defaults for takeoff calculations.

    The built-in defaults describe a dry paved runway with the ULS engine.
    """

    engine: Engine = Engine.ROTAX_912_ULS
    slope_pct: float = 0.0
    grass: GrassSurfaceCondition | None = None
    contamination: SurfaceContamination = SurfaceContamination.INCONSPICUOUS

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "TakeoffDefaults":
        """Build defaults from a ``takeoff:`` section.

        Missing keys keep their built-in default.

        Raises:
            ConfigError: If the section has unknown keys or invalid values.
        """
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigError(f"Takeoff section must be a mapping, got {data!r}")

        unknown = sorted(set(data) - set(TAKEOFF_KEYS))
        if unknown:
            raise ConfigError(f"Unknown takeoff settings: {', '.join(map(str, unknown))}")

        slope = data.get("slope_pct", cls.slope_pct)
        if isinstance(slope, bool) or not isinstance(slope, int | float):
            raise ConfigError(f"Runway slope must be a number, got {slope!r}")

        return cls(
            engine=parse_engine(data.get("engine", cls.engine)),
            slope_pct=float(slope),
            grass=parse_grass(data.get("grass")),
            contamination=parse_contamination(data.get("contamination", cls.contamination)),
        )


class ConfigLoader:
    """Nested configuration read from YAML, with dotted key access.

    Examples:
        >>> config = ConfigLoader.load("edfz.yaml")
        >>> slope = config.get("takeoff.slope_pct", default=0.0)
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data = data or {}

    @classmethod
    def load(cls, path: str | Path) -> "ConfigLoader":
        """Read a YAML file. An empty file gives an empty configuration.

        Raises:
            ConfigError: If the file is missing, malformed or not a mapping.
        """
        path = Path(path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except Exception as e:
            raise ConfigError(f"Failed to load configuration: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration root must be a mapping: {path}")

        logger.info("Loaded configuration from: %s", path)
        return cls(data)

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a value by dotted key, e.g. ``takeoff.grass.wet``."""
        value: Any = self._data

        for part in key.split("."):
            if not isinstance(value, dict) or part not in value:
                return default
            value = value[part]

        return value

    def takeoff_defaults(self) -> TakeoffDefaults:
        """Validated defaults from the ``takeoff:`` section.

        Raises:
            ConfigError: If the section holds invalid values.
        """
        return TakeoffDefaults.from_mapping(self.get("takeoff"))

    def merge(self, other: "ConfigLoader") -> None:
        """Overlay another configuration; its values win, nested sections merge."""
        self._data = _merge_dicts(self._data, other._data)

    def to_dict(self) -> dict[str, Any]:
        """Shallow copy of the configuration data."""
        return self._data.copy()


def _merge_dicts(base: dict, override: dict) -> dict:
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = _merge_dicts(result[key], value)
        else:
            result[key] = value
    return result
