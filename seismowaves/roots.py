from __future__ import annotations

import logging
import warnings
from typing import List, Tuple

import numpy as np
from scipy.optimize import brentq

from .config import SearchSettings
from .dispersion import DispersionRelation
from .errors import NumericalWarning
from .medium import MediumParams
from .modes import Mode, ModeSet

logger = logging.getLogger(__name__)

# Distinct roots are at least pi/2 apart in the layer's vertical phase;
# sampling at pi/8 keeps every bracket to at most one root.
_PHASE_STEP = np.pi / 8.0


def slowness_samples(medium: MediumParams, n_samples: int) -> np.ndarray:
    """
    Slowness samples over [1/beta2, 1/beta1], uniform in vertical phase.

    The phase w*H*sqrt(1/beta1^2 - p^2) sweeps the oscillations of the
    dispersion residual evenly, so closely spaced roots near 1/beta2 at high
    frequency still land in separate brackets.  Both endpoints are included.
    """

    q_max = medium.max_vertical_slowness
    phase_max = medium.omega * medium.thickness * q_max
    n = max(int(n_samples), int(np.ceil(phase_max / _PHASE_STEP)) + 1)
    q = np.linspace(0.0, q_max, n)
    p = np.sqrt(np.clip(1.0 / medium.beta1**2 - q * q, 0.0, None))
    p[0] = 1.0 / medium.beta1
    p[-1] = 1.0 / medium.beta2
    return p[::-1]


def _brackets(values: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Indices of exact zeros and of sign changes between adjacent samples.
    """

    exact = np.flatnonzero(values == 0.0)
    signs = np.sign(values)
    change = np.flatnonzero(signs[:-1] * signs[1:] < 0.0)
    return exact, change


def _refine(
    relation: DispersionRelation, left: float, right: float, xtol: float
) -> float | None:
    def real_residual(p: float) -> float:
        return float(np.real(relation(p)))

    f_left, f_right = real_residual(left), real_residual(right)
    if f_left == 0.0:
        return float(left)
    if f_right == 0.0:
        return float(right)
    if np.sign(f_left) == np.sign(f_right):
        # Sign flip seen on the vectorised samples but not on scalar re-evaluation.
        logger.debug("Bracket [%.12g, %.12g] lost its sign change", left, right)
        return None
    return float(brentq(real_residual, left, right, xtol=xtol))


def _discard(p: float, reason: str) -> None:
    message = f"discarded root at c={1.0 / p:.6f} km/s: {reason}"
    logger.warning(message)
    warnings.warn(message, NumericalWarning, stacklevel=4)


def _accept(
    relation: DispersionRelation,
    p: float,
    tolerance: float,
    xtol: float,
) -> bool:
    medium = relation.medium
    low, high = medium.slowness_band
    if not low < p < high:
        logger.debug("Rejected root p=%.12g on the band edge", p)
        return False

    value = complex(relation(p))
    if abs(value.imag) > tolerance:
        _discard(p, f"|Im F|={abs(value.imag):.3e} exceeds tolerance {tolerance:.3e}")
        return False

    # Brent only pins the root to within xtol in p; near 1/beta1 the residual
    # is steep enough that this step alone moves F far past `tolerance`.
    step = xtol + 4.0 * np.finfo(float).eps * p
    lo, hi = max(p - step, low), min(p + step, high)
    bound = tolerance + abs(float(np.real(relation(hi))) - float(np.real(relation(lo))))
    if abs(value.real) > bound:
        _discard(p, f"|Re F|={abs(value.real):.3e} exceeds tolerance {bound:.3e}")
        return False
    return True


def find_modes(medium: MediumParams, settings: SearchSettings | None = None) -> ModeSet:
    """
    Find the Love-wave modes of `medium` at its frequency.

    Parameters
    ----------
    medium:
        Validated layer/half-space description.
    settings:
        Sampling density and tolerances; defaults to :class:`SearchSettings`.

    Returns
    -------
    ModeSet
        Modes sorted by ascending phase velocity, strictly inside
        (beta1, beta2).  Empty when no trapped mode exists, including f = 0
        where the fundamental mode degenerates to c = beta2.
    """

    settings = settings or SearchSettings()
    if medium.omega == 0.0:
        logger.info("Zero frequency: no trapped Love-wave modes in (beta1, beta2).")
        return ModeSet()

    relation = DispersionRelation(medium)
    p_samples = slowness_samples(medium, settings.samples)
    sampled = np.asarray(relation(p_samples))
    values = np.real(sampled)
    tolerance = settings.residual_rtol * max(float(np.max(np.abs(sampled))), np.finfo(float).tiny)

    exact, change = _brackets(values)
    logger.debug(
        "Root search over %d samples: %d exact zeros, %d sign changes",
        p_samples.size,
        exact.size,
        change.size,
    )

    candidates: List[float] = [float(p_samples[i]) for i in exact]
    for i in change:
        root = _refine(relation, float(p_samples[i]), float(p_samples[i + 1]), settings.xtol)
        if root is not None:
            candidates.append(root)

    velocities = sorted(
        1.0 / p for p in candidates if _accept(relation, p, tolerance, settings.xtol)
    )

    kept: List[float] = []
    for c in velocities:
        if kept and c - kept[-1] < settings.min_separation:
            continue
        kept.append(c)

    modes = ModeSet(
        Mode(index=i, phase_velocity=c, medium=medium) for i, c in enumerate(kept, start=1)
    )
    logger.info(
        "Found %d Love-wave mode(s) at f=%.4g Hz: %s",
        len(modes),
        medium.frequency,
        ", ".join(f"{c:.4f}" for c in modes.phase_velocities),
    )
    return modes
