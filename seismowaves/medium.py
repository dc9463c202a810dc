from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Mapping, Tuple

import numpy as np

from .errors import ConfigurationError


def _ensure_positive(name: str, value: float) -> float:
    value = float(value)
    if not np.isfinite(value) or value <= 0.0:
        raise ConfigurationError(f"{name} must be a positive finite number, got {value!r}.")
    return value


@dataclass(frozen=True)
class MediumParams:
    """
    Single homogeneous layer over a homogeneous half-space.

    Parameters
    ----------
    thickness : float
        Layer thickness `H` in km.
    beta1, beta2 : float
        Shear velocities of the layer and the half-space in km/s.  A trapped
        Love wave needs ``beta1 < beta2``.
    rho1, rho2 : float
        Densities in g/cm^3.
    frequency : float
        Excitation frequency in Hz, zero allowed.
    """

    thickness: float
    beta1: float
    beta2: float
    rho1: float
    rho2: float
    frequency: float = 0.0

    def __post_init__(self) -> None:
        for name in ("thickness", "beta1", "beta2", "rho1", "rho2"):
            object.__setattr__(self, name, _ensure_positive(name, getattr(self, name)))

        frequency = float(self.frequency)
        if not np.isfinite(frequency) or frequency < 0.0:
            raise ConfigurationError("frequency must be finite and non-negative.")
        object.__setattr__(self, "frequency", frequency)

        if self.beta2 <= self.beta1:
            raise ConfigurationError(
                "beta2 must exceed beta1; no trapped Love-wave band exists otherwise."
            )

    @property
    def omega(self) -> float:
        return 2.0 * np.pi * self.frequency

    @property
    def mu1(self) -> float:
        return self.rho1 * self.beta1**2

    @property
    def mu2(self) -> float:
        return self.rho2 * self.beta2**2

    @property
    def velocity_band(self) -> Tuple[float, float]:
        return self.beta1, self.beta2

    @property
    def slowness_band(self) -> Tuple[float, float]:
        """(1/beta2, 1/beta1): horizontal slownesses of trapped modes."""
        return 1.0 / self.beta2, 1.0 / self.beta1

    @property
    def max_vertical_slowness(self) -> float:
        """Top-layer vertical slowness magnitude at p = 1/beta2."""
        return float(np.sqrt(1.0 / self.beta1**2 - 1.0 / self.beta2**2))

    def with_frequency(self, frequency: float) -> "MediumParams":
        return replace(self, frequency=frequency)

    @classmethod
    def from_mapping(cls, values: Mapping[str, float]) -> "MediumParams":
        """
        Build a medium from a plain mapping such as a YAML section.
        """

        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ConfigurationError(f"unknown medium keys: {sorted(unknown)}")
        try:
            return cls(**values)
        except TypeError as exc:
            raise ConfigurationError(str(exc)) from exc

    def as_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}
