from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

import numpy as np

from .config import GridSettings
from .dispersion import DispersionRelation
from .medium import MediumParams
from .modes import Mode


def _ensure_grid(name: str, values: Sequence[float]) -> np.ndarray:
    array = np.asarray(values, dtype=float)
    if array.ndim != 1 or array.size == 0:
        raise ValueError(f"{name} must be a non-empty 1-D grid.")
    return array


@dataclass
class DisplacementGrid:
    """
    Superposed SH displacement of selected modes at one time instant.

    Coordinates follow the geophysical convention: `x` horizontal distance,
    `z` depth positive downward, both in km.  `layer` and `half_space` are
    indexed ``[depth, distance]``.
    """

    x: np.ndarray
    z_layer: np.ndarray
    z_half_space: np.ndarray
    time: float
    phase_velocities: np.ndarray
    layer: np.ndarray
    half_space: np.ndarray

    def __post_init__(self) -> None:
        if self.layer.shape != (self.z_layer.size, self.x.size):
            raise ValueError("layer array shape must match (len(z_layer), len(x)).")
        if self.half_space.shape != (self.z_half_space.size, self.x.size):
            raise ValueError("half_space array shape must match (len(z_half_space), len(x)).")

    @property
    def max_abs(self) -> float:
        return float(max(np.max(np.abs(self.layer)), np.max(np.abs(self.half_space))))

    def extent(self) -> Tuple[float, float, float, float]:
        """(x_min, x_max, z_bottom, z_top) for image plotting with depth down."""
        return (
            float(self.x[0]),
            float(self.x[-1]),
            float(self.z_half_space[-1]),
            float(self.z_layer[0]),
        )


def default_axes(
    medium: MediumParams, settings: GridSettings | None = None
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    settings = settings or GridSettings()
    x = np.linspace(settings.x_min, settings.x_max, settings.nx)
    z_layer = np.linspace(0.0, medium.thickness, settings.nz)
    z_half_space = np.linspace(
        medium.thickness, settings.half_space_bottom(medium.thickness), settings.nz
    )
    return x, z_layer, z_half_space


def displacement_grid(
    medium: MediumParams,
    modes: Iterable[Mode],
    time: float,
    x: Sequence[float] | None = None,
    z_layer: Sequence[float] | None = None,
    z_half_space: Sequence[float] | None = None,
    settings: GridSettings | None = None,
) -> DisplacementGrid:
    """
    Evaluate Re u(x, z, t) for the selected modes and superpose them.

    The wave equation is linear, so the contributions simply add.  Each mode
    uses the same mu1, mu2, H and omega as the root search, evaluated at its own
    phase velocity.  An empty selection gives zero fields.
    """

    default_x, default_z1, default_z2 = default_axes(medium, settings)
    x = default_x if x is None else _ensure_grid("x", x)
    z_layer = default_z1 if z_layer is None else _ensure_grid("z_layer", z_layer)
    z_half_space = default_z2 if z_half_space is None else _ensure_grid("z_half_space", z_half_space)

    if np.any(z_layer < 0.0) or np.any(z_layer > medium.thickness):
        raise ValueError("z_layer must lie within [0, H].")
    if np.any(z_half_space < medium.thickness):
        raise ValueError("z_half_space must lie at or below the interface depth H.")

    relation = DispersionRelation(medium)
    layer = np.zeros((z_layer.size, x.size), dtype=float)
    half_space = np.zeros((z_half_space.size, x.size), dtype=float)
    gx1, gz1 = np.meshgrid(x, z_layer)
    gx2, gz2 = np.meshgrid(x, z_half_space)

    velocities = []
    for mode in modes:
        p = mode.slowness
        layer += np.real(relation.layer_wavefield(p, gx1, gz1, time))
        half_space += np.real(relation.half_space_wavefield(p, gx2, gz2, time))
        velocities.append(mode.phase_velocity)

    return DisplacementGrid(
        x=x,
        z_layer=z_layer,
        z_half_space=z_half_space,
        time=float(time),
        phase_velocities=np.asarray(velocities, dtype=float),
        layer=layer,
        half_space=half_space,
    )


def frame_times(n_frames: int, period: float = 10.0, dt: float = 0.1) -> np.ndarray:
    """
    Sampling instants of a looping animation clock ticking every `dt` seconds.
    """

    if n_frames < 1:
        raise ValueError("n_frames must be at least 1.")
    if period <= 0.0 or dt <= 0.0:
        raise ValueError("period and dt must be positive.")
    return np.mod(np.arange(n_frames) * dt, period)


def animation_frames(
    medium: MediumParams,
    modes: Iterable[Mode],
    times: Sequence[float],
    settings: GridSettings | None = None,
) -> List[DisplacementGrid]:
    """
    Displacement grids for successive times on a shared spatial grid.
    """

    settings = settings or GridSettings()
    modes = list(modes)
    times = np.mod(np.asarray(times, dtype=float), settings.period)
    x, z_layer, z_half_space = default_axes(medium, settings)
    return [
        displacement_grid(medium, modes, t, x=x, z_layer=z_layer, z_half_space=z_half_space)
        for t in times
    ]
