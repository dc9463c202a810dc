"""
Far-field P and S radiation from a point source in a homogeneous medium.

The source is a (not necessarily symmetric) moment tensor, optionally with
extra single body forces.  Element M[j, k] is a couple of forces along axis
`j` separated along axis `k`.  Only the direction of the far-field
displacement matters here, so the overall amplitude factor 1/(4 pi rho v^3)
is dropped (Aki & Richards, eq. 4.29):

    P:  u_i = M_jk g_i g_j g_k / r             + F_j g_i g_j / r
    S:  u_i = M_jk (d_ij - g_i g_j) g_k / r    + F_j (d_ij - g_i g_j) / r

with direction cosines g = x / r.  The P displacement is parallel to the ray
and the S displacement perpendicular to it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

import numpy as np


class WaveType(Enum):
    P = "P"
    S = "S"


class Axis(Enum):
    X = 0
    Y = 1
    Z = 2


class Plane(Enum):
    XY = (Axis.X, Axis.Y)
    YZ = (Axis.Y, Axis.Z)
    XZ = (Axis.X, Axis.Z)

    @property
    def axes(self) -> Tuple[Axis, Axis]:
        return self.value

    @property
    def normal(self) -> Axis:
        (missing,) = set(Axis) - set(self.value)
        return missing


@dataclass(frozen=True)
class MomentTensorSource:
    """
    Point source: 3x3 moment tensor plus any number of body forces (N, 3).
    """

    moment_tensor: np.ndarray
    body_forces: np.ndarray = field(default_factory=lambda: np.zeros((0, 3)))

    def __post_init__(self) -> None:
        tensor = np.asarray(self.moment_tensor, dtype=float)
        if tensor.shape != (3, 3):
            raise ValueError("moment_tensor must be shaped (3, 3).")
        forces = np.asarray(self.body_forces, dtype=float)
        if forces.size == 0:
            forces = np.zeros((0, 3))
        elif forces.shape == (3,):
            forces = forces.reshape(1, 3)
        if forces.ndim != 2 or forces.shape[1] != 3:
            raise ValueError("body_forces must be shaped (N, 3).")
        object.__setattr__(self, "moment_tensor", tensor)
        object.__setattr__(self, "body_forces", forces)

    @property
    def is_symmetric(self) -> bool:
        return bool(np.allclose(self.moment_tensor, self.moment_tensor.T))

    @property
    def net_force(self) -> np.ndarray:
        return self.body_forces.sum(axis=0)


def double_couple(strike: float, dip: float, rake: float, moment: float = 1.0) -> np.ndarray:
    """
    Moment tensor of a shear dislocation, angles in degrees.

    Axes are x north, y east, z down (Aki & Richards, box 4.4).
    """

    phi, delta, lam = np.deg2rad([strike, dip, rake])
    sd, cd = np.sin(delta), np.cos(delta)
    s2d, c2d = np.sin(2 * delta), np.cos(2 * delta)
    sl, cl = np.sin(lam), np.cos(lam)
    sp, cp = np.sin(phi), np.cos(phi)
    s2p, c2p = np.sin(2 * phi), np.cos(2 * phi)

    mxx = -(sd * cl * s2p + s2d * sl * sp**2)
    mxy = sd * cl * c2p + 0.5 * s2d * sl * s2p
    mxz = -(cd * cl * cp + c2d * sl * sp)
    myy = sd * cl * s2p - s2d * sl * cp**2
    myz = -(cd * cl * sp - c2d * sl * cp)
    mzz = s2d * sl
    return moment * np.array(
        [
            [mxx, mxy, mxz],
            [mxy, myy, myz],
            [mxz, myz, mzz],
        ]
    )


def equivalent_body_forces(
    source: MomentTensorSource, half_distance: float = 0.5
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Force couples equivalent to each moment-tensor element.

    Returns (locations, strengths), both shaped (18, 3): for element M[j, k]
    a force +M[j, k] along `j` at +half_distance along `k` and its opposite at
    -half_distance.
    """

    locations = []
    strengths = []
    eye = np.eye(3)
    for j in range(3):
        for k in range(3):
            for sign in (1.0, -1.0):
                locations.append(sign * half_distance * eye[k])
                strengths.append(sign * source.moment_tensor[j, k] * eye[j])
    return np.array(locations), np.array(strengths)


def _direction_cosines(points: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    points = np.atleast_2d(np.asarray(points, dtype=float))
    if points.ndim != 2 or points.shape[1] != 3:
        raise ValueError("points must be shaped (N, 3).")
    r = np.linalg.norm(points, axis=1)
    if np.any(r == 0.0):
        raise ValueError("far-field displacement is undefined at the source location.")
    return points / r[:, np.newaxis], r


def far_field_displacement(
    source: MomentTensorSource, wave: WaveType, points: np.ndarray
) -> np.ndarray:
    """
    Far-field displacement vectors (N, 3) at receiver `points` (N, 3).
    """

    gamma, r = _direction_cosines(points)
    # Green's tensor direction factor per receiver: (N, 3, 3)
    radial = np.einsum("ni,nj->nij", gamma, gamma)
    if wave is WaveType.P:
        green = radial
    elif wave is WaveType.S:
        green = np.eye(3)[np.newaxis, :, :] - radial
    else:
        raise ValueError(f"unsupported wave type {wave!r}")

    from_tensor = np.einsum("nij,jk,nk->ni", green, source.moment_tensor, gamma)
    from_forces = np.einsum("nij,j->ni", green, source.net_force)
    return (from_tensor + from_forces) / r[:, np.newaxis]


def plane_points(plane: Plane, n: int = 50, radius: float = 1.0) -> Tuple[np.ndarray, np.ndarray]:
    """
    Receivers on a circle in `plane`, azimuths uniformly spaced in [-pi, pi].

    Returns (azimuths, points) with points shaped (n, 3).
    """

    if n < 2:
        raise ValueError("n must be at least 2.")
    theta = np.linspace(-np.pi, np.pi, n)
    first, second = plane.axes
    points = np.zeros((n, 3))
    points[:, first.value] = radius * np.sin(theta)
    points[:, second.value] = radius * np.cos(theta)
    return theta, points


def project(displacement: np.ndarray, plane: Plane) -> Tuple[np.ndarray, np.ndarray]:
    """In-plane components of displacement vectors (N, 3)."""
    first, second = plane.axes
    displacement = np.asarray(displacement, dtype=float)
    return displacement[:, first.value], displacement[:, second.value]


def sphere_points(n: int = 384) -> np.ndarray:
    """
    Quasi-uniform points on the unit sphere (Fibonacci lattice), shaped (n, 3).
    """

    if n < 1:
        raise ValueError("n must be positive.")
    golden = np.pi * (3.0 - np.sqrt(5.0))
    index = np.arange(n) + 0.5
    z = 1.0 - 2.0 * index / n
    rho = np.sqrt(1.0 - z * z)
    azimuth = golden * index
    return np.column_stack([rho * np.cos(azimuth), rho * np.sin(azimuth), z])


def radiation_pattern_2d(
    source: MomentTensorSource, wave: WaveType, plane: Plane, n: int = 50, radius: float = 1.0
) -> dict:
    """
    Displacement on a circle in `plane`, with in-plane components for arrow plots.
    """

    theta, points = plane_points(plane, n=n, radius=radius)
    displacement = far_field_displacement(source, wave, points)
    u1, u2 = project(displacement, plane)
    p1, p2 = project(points, plane)
    return {
        "azimuth": theta,
        "points": points,
        "displacement": displacement,
        "in_plane_points": (p1, p2),
        "in_plane_displacement": (u1, u2),
        "amplitude": np.linalg.norm(displacement, axis=1),
    }


def radiation_pattern_3d(source: MomentTensorSource, wave: WaveType, n: int = 384) -> dict:
    points = sphere_points(n)
    displacement = far_field_displacement(source, wave, points)
    return {
        "points": points,
        "displacement": displacement,
        "amplitude": np.linalg.norm(displacement, axis=1),
    }


def polarity(source: MomentTensorSource, points: np.ndarray) -> np.ndarray:
    """
    Sign of the radial P displacement: +1 compressional, -1 dilatational.
    """

    gamma, _ = _direction_cosines(points)
    radial = np.einsum("ni,ni->n", far_field_displacement(source, WaveType.P, points), gamma)
    return np.sign(radial)
