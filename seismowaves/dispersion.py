"""
Closed-form Love-wave dispersion relation for a layer over a half-space.

The trial SH displacement in each medium is

    u = (A exp(-w eta z) + B exp(w eta z)) exp(i w (t - p x))

with horizontal slowness `p` and vertical slowness `eta`.  A stress-free
surface forces A1 = B1, the half-space keeps only the decaying term (B2 = 0),
and continuity of traction and displacement at z = H give two expressions for
the half-space amplitude A2.  A mode exists where they agree.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from .medium import MediumParams


def vertical_slowness(p, beta: float):
    """
    Vertical slowness sqrt(p^2 - 1/beta^2) with an explicit branch choice.

    A non-negative radicand gives a real, non-negative root (evanescent in
    depth); a negative radicand gives +i*sqrt(-radicand) (oscillatory in depth).
    """

    p = np.asarray(p, dtype=float)
    radicand = p * p - 1.0 / beta**2
    magnitude = np.sqrt(np.abs(radicand))
    eta = np.where(radicand >= 0.0, magnitude + 0.0j, 1.0j * magnitude)
    return eta[()]


@dataclass(frozen=True)
class DispersionRelation:
    """
    Residual F(p) between the traction- and displacement-derived half-space
    amplitudes, both multiplied by mu2 * eta2 * exp(-w eta2 H) / A1:

        F(p) = -mu1 eta1 (e+ - e-) - mu2 eta2 (e+ + e-),  e+- = exp(+-w eta1 H)

    The common factor removes the 1/eta2 pole, so F is continuous over the
    whole slowness band and vanishes exactly at a mode.
    """

    medium: MediumParams

    def eta1(self, p):
        return vertical_slowness(p, self.medium.beta1)

    def eta2(self, p):
        return vertical_slowness(p, self.medium.beta2)

    def _layer_exponentials(self, p) -> Tuple[np.ndarray, np.ndarray]:
        phase = self.medium.omega * self.eta1(p) * self.medium.thickness
        return np.exp(phase), np.exp(-phase)

    def traction_branch(self, p):
        """Normalized A2 from continuity of traction at z = H."""
        e_plus, e_minus = self._layer_exponentials(p)
        return -self.medium.mu1 * self.eta1(p) * (e_plus - e_minus)

    def displacement_branch(self, p):
        """Normalized A2 from continuity of displacement at z = H."""
        e_plus, e_minus = self._layer_exponentials(p)
        return self.medium.mu2 * self.eta2(p) * (e_plus + e_minus)

    def __call__(self, p):
        return self.traction_branch(p) - self.displacement_branch(p)

    def residual_at_velocity(self, c):
        c = np.asarray(c, dtype=float)
        return self(1.0 / c)

    def traction_amplitude(self, p):
        """
        Half-space amplitude A2 (with A1 = 1) implied by traction continuity.
        Undefined at p = 1/beta2 where eta2 vanishes.
        """

        eta2 = self.eta2(p)
        with np.errstate(divide="ignore", invalid="ignore"):
            return (
                self.traction_branch(p)
                * np.exp(self.medium.omega * eta2 * self.medium.thickness)
                / (self.medium.mu2 * eta2)
            )

    def displacement_amplitude(self, p):
        """Half-space amplitude A2 (with A1 = 1) implied by displacement continuity."""
        e_plus, e_minus = self._layer_exponentials(p)
        eta2 = self.eta2(p)
        return (e_plus + e_minus) * np.exp(self.medium.omega * eta2 * self.medium.thickness)

    def _propagator(self, p, x, t):
        omega = self.medium.omega
        return np.exp(1.0j * omega * (np.asarray(t, dtype=float) - p * np.asarray(x, dtype=float)))

    def layer_wavefield(self, p: float, x, z, t):
        """Complex displacement in 0 <= z <= H with A1 = B1 = 1."""
        scaled = self.medium.omega * self.eta1(p) * np.asarray(z, dtype=float)
        return (np.exp(-scaled) + np.exp(scaled)) * self._propagator(p, x, t)

    def half_space_wavefield(self, p: float, x, z, t):
        """
        Complex displacement in z >= H using the traction-derived A2.

        A2 exp(-w eta2 z) is evaluated as (A2 exp(-w eta2 H)) exp(-w eta2 (z - H))
        so large H does not overflow the intermediate exponential.
        """

        omega = self.medium.omega
        eta2 = self.eta2(p)
        with np.errstate(divide="ignore", invalid="ignore"):
            amplitude_at_interface = self.traction_branch(p) / (self.medium.mu2 * eta2)
        depth_below = np.asarray(z, dtype=float) - self.medium.thickness
        return amplitude_at_interface * np.exp(-omega * eta2 * depth_below) * self._propagator(
            p, x, t
        )

    def residual_curve(self, velocities: Sequence[float]) -> dict:
        """
        Sample both normalized amplitude branches over phase velocities.

        The curves are the "graphical solution": modes sit where the real
        parts cross inside (beta1, beta2).
        """

        velocities = np.asarray(velocities, dtype=float)
        if np.any(velocities <= 0.0):
            raise ValueError("phase velocities must be positive.")
        p = 1.0 / velocities
        traction = np.asarray(self.traction_branch(p))
        displacement = np.asarray(self.displacement_branch(p))
        return {
            "velocities": velocities,
            "traction": traction,
            "displacement": displacement,
            "residual": traction - displacement,
            "beta1": self.medium.beta1,
            "beta2": self.medium.beta2,
        }

    def residual_ranges(self, n_samples: int = 100, margin: float = 0.5) -> Tuple[np.ndarray, ...]:
        """
        Velocity ranges below, inside and above the trapped band.
        """

        b1, b2 = self.medium.velocity_band
        below = np.linspace(max(b1 - margin, 1e-3), b1, n_samples)
        inside = np.linspace(b1, b2, n_samples)
        above = np.linspace(b2, b2 + margin, n_samples)
        return below, inside, above
