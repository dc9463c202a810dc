"""
YAML configuration for medium presets, root search and grid sampling.

Several YAML files can be merged recursively (later files override earlier
ones) on top of the built-in defaults.  Each section maps onto a small frozen
dataclass that validates its values:

- ``medium``: :class:`~seismowaves.medium.MediumParams`
- ``search``: :class:`SearchSettings`
- ``grid``: :class:`GridSettings`
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Mapping

import yaml

from .errors import ConfigurationError
from .medium import MediumParams

logger = logging.getLogger(__name__)

PRESETS: dict[str, dict[str, float]] = {
    # Continental crust over upper mantle.
    "crust_mantle": {
        "thickness": 35.0,
        "beta1": 3.5,
        "beta2": 4.5,
        "rho1": 2.6,
        "rho2": 3.4,
        "frequency": 0.08,
    },
}


def _deep_update(base: dict, override: dict) -> dict:
    out = dict(base)
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_update(out[k], v)
        else:
            out[k] = v
    return out


def _build(cls, section: str, values: Mapping[str, Any] | None):
    values = dict(values or {})
    known = {f.name for f in fields(cls)}
    unknown = set(values) - known
    if unknown:
        raise ConfigurationError(f"unknown keys in '{section}': {sorted(unknown)}")
    return cls(**values)


@dataclass(frozen=True)
class SearchSettings:
    """
    Parameters of the bracketing root search.

    Attributes
    ----------
    samples : int
        Minimum number of slowness samples across the trapped band.
    xtol : float
        Absolute slowness tolerance handed to Brent's method (s/km).
    residual_rtol : float
        Accepted |F| and |Im F| at a root, relative to max |F| over the samples.
        The real part is also allowed the change of F across +-xtol around the
        root, which dominates where the residual is steep near 1/beta1.
    min_separation : float
        Roots closer than this in phase velocity (km/s) count as one.
    """

    samples: int = 1000
    xtol: float = 1.0e-13
    residual_rtol: float = 1.0e-8
    min_separation: float = 1.0e-6

    def __post_init__(self) -> None:
        if int(self.samples) < 2:
            raise ConfigurationError("samples must be at least 2.")
        object.__setattr__(self, "samples", int(self.samples))
        for name in ("xtol", "residual_rtol"):
            if float(getattr(self, name)) <= 0.0:
                raise ConfigurationError(f"{name} must be positive.")
            object.__setattr__(self, name, float(getattr(self, name)))
        if float(self.min_separation) < 0.0:
            raise ConfigurationError("min_separation must be non-negative.")
        object.__setattr__(self, "min_separation", float(self.min_separation))


@dataclass(frozen=True)
class GridSettings:
    """
    Default sampling of the displacement plots (km, s).
    """

    nx: int = 100
    nz: int = 100
    x_min: float = -100.0
    x_max: float = 100.0
    z_max: float = 200.0
    period: float = 10.0

    def __post_init__(self) -> None:
        if int(self.nx) < 2 or int(self.nz) < 2:
            raise ConfigurationError("nx and nz must be at least 2.")
        object.__setattr__(self, "nx", int(self.nx))
        object.__setattr__(self, "nz", int(self.nz))
        for name in ("x_min", "x_max", "z_max", "period"):
            object.__setattr__(self, name, float(getattr(self, name)))
        if self.x_max <= self.x_min:
            raise ConfigurationError("x_max must exceed x_min.")
        if self.z_max <= 0.0:
            raise ConfigurationError("z_max must be positive.")
        if self.period <= 0.0:
            raise ConfigurationError("period must be positive.")

    def half_space_bottom(self, thickness: float) -> float:
        return max(float(self.z_max), 2.0 * float(thickness))


@dataclass(frozen=True)
class Config:
    medium: MediumParams
    search: SearchSettings
    grid: GridSettings

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Config":
        """
        Build a configuration from a (merged) mapping with optional sections.
        """

        unknown = set(data) - {"medium", "search", "grid"}
        if unknown:
            raise ConfigurationError(f"unknown configuration sections: {sorted(unknown)}")
        medium_values = _deep_update(PRESETS["crust_mantle"], dict(data.get("medium") or {}))
        return cls(
            medium=MediumParams.from_mapping(medium_values),
            search=_build(SearchSettings, "search", data.get("search")),
            grid=_build(GridSettings, "grid", data.get("grid")),
        )

    def to_dict(self) -> dict:
        return {
            "medium": self.medium.as_dict(),
            "search": asdict(self.search),
            "grid": asdict(self.grid),
        }


def default_config() -> Config:
    return Config.from_dict({})


def load_config(*paths: str | Path) -> Config:
    """
    Merge YAML files over the built-in defaults, later files winning.
    """

    data: dict[str, Any] = {}
    for p in paths:
        path = Path(p)
        if not path.exists():
            raise ConfigurationError(f"configuration file not found: {path}")
        with open(path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ConfigurationError(f"{path} must contain a mapping at top level.")
        data = _deep_update(data, loaded)
        logger.debug("Loaded configuration from %s", path)
    return Config.from_dict(data)


def dump_config(config: Config, path: str | Path) -> None:
    """Write the resolved configuration as YAML."""
    with open(Path(path), "w", encoding="utf-8") as f:
        yaml.safe_dump(config.to_dict(), f, sort_keys=True)
