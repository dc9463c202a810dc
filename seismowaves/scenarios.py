from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Sequence

import numpy as np

from .config import PRESETS, SearchSettings
from .medium import MediumParams
from .modes import ModeSet
from .roots import find_modes


@dataclass
class LoveWaveScenario:
    """
    A medium together with the modes found at its frequency.
    """

    medium: MediumParams
    modes: ModeSet
    metadata: Dict[str, object] | None = None


def create_scenario(
    medium: MediumParams,
    settings: SearchSettings | None = None,
    name: str = "custom",
) -> LoveWaveScenario:
    modes = find_modes(medium, settings)
    return LoveWaveScenario(
        medium=medium,
        modes=modes,
        metadata={
            "name": name,
            "expected_modes": expected_mode_count(medium),
            "labels": modes.labels(),
        },
    )


def create_crust_mantle_scenario(
    frequency: float = 0.08, settings: SearchSettings | None = None
) -> LoveWaveScenario:
    """
    Crust over mantle: H = 35 km, beta = 3.5 / 4.5 km/s, rho = 2.6 / 3.4 g/cc.

    At the default 0.08 Hz the first higher mode is just above its cutoff.
    """

    values = dict(PRESETS["crust_mantle"], frequency=frequency)
    return create_scenario(MediumParams(**values), settings, name="crust_mantle")


def cutoff_frequencies(medium: MediumParams, n_modes: int) -> np.ndarray:
    """
    Analytic cutoff frequency (Hz) of modes 1..n_modes.

    Mode n becomes trapped once the layer's vertical phase at c = beta2
    exceeds (n - 1) * pi, i.e. f_n = (n - 1) / (2 H sqrt(1/beta1^2 - 1/beta2^2)).
    The fundamental mode has no cutoff.
    """

    if n_modes < 0:
        raise ValueError("n_modes must be non-negative.")
    order = np.arange(n_modes, dtype=float)
    return order / (2.0 * medium.thickness * medium.max_vertical_slowness)


def expected_mode_count(medium: MediumParams) -> int:
    """
    Number of trapped modes predicted from the cutoff frequencies.
    """

    phase_max = medium.omega * medium.thickness * medium.max_vertical_slowness
    return int(np.ceil(phase_max / np.pi))


def frequency_sweep(
    medium: MediumParams,
    frequencies: Sequence[float],
    settings: SearchSettings | None = None,
) -> dict:
    """
    Run the mode search at each frequency for a fixed medium.
    """

    frequencies = np.asarray(frequencies, dtype=float)
    if frequencies.ndim != 1:
        raise ValueError("frequencies must be 1-D.")
    velocities = []
    for f in frequencies:
        modes = find_modes(medium.with_frequency(float(f)), settings)
        velocities.append(modes.phase_velocities)
    counts = np.array([v.size for v in velocities], dtype=int)
    return {
        "frequencies": frequencies,
        "mode_counts": counts,
        "phase_velocities": velocities,
    }
