from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Sequence, Tuple

import numpy as np

from .dispersion import DispersionRelation
from .medium import MediumParams


@dataclass(frozen=True)
class Mode:
    """
    One Love-wave eigen-solution at the medium's frequency.

    `index` starts at 1 for the fundamental mode, which has the smallest phase
    velocity above beta1.
    """

    index: int
    phase_velocity: float
    medium: MediumParams = field(repr=False, compare=False)

    @property
    def slowness(self) -> float:
        return 1.0 / self.phase_velocity

    @property
    def label(self) -> str:
        truncated = math.floor(self.phase_velocity * 100.0) / 100.0
        return f"{self.index}) {truncated}"

    def eigenfunction(self, x, z, t) -> np.ndarray:
        """
        Real displacement u(x, z, t): layer solution for z <= H, half-space below.
        """

        relation = DispersionRelation(self.medium)
        x, z, t = np.broadcast_arrays(
            np.asarray(x, dtype=float), np.asarray(z, dtype=float), np.asarray(t, dtype=float)
        )
        if np.any(z < 0.0):
            raise ValueError("depth must be non-negative (z positive downward).")
        in_layer = z <= self.medium.thickness
        u = np.where(
            in_layer,
            relation.layer_wavefield(self.slowness, x, np.where(in_layer, z, 0.0), t),
            relation.half_space_wavefield(
                self.slowness, x, np.where(in_layer, self.medium.thickness, z), t
            ),
        )
        return np.real(u)[()]


class ModeSet(Sequence[Mode]):
    """
    Immutable, ascending-by-phase-velocity collection of modes.
    """

    def __init__(self, modes: Iterable[Mode] = ()) -> None:
        ordered = sorted(modes, key=lambda mode: mode.phase_velocity)
        self._modes: Tuple[Mode, ...] = tuple(ordered)

    def __getitem__(self, item):
        if isinstance(item, slice):
            return ModeSet(self._modes[item])
        return self._modes[item]

    def __len__(self) -> int:
        return len(self._modes)

    def __iter__(self) -> Iterator[Mode]:
        return iter(self._modes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModeSet):
            return NotImplemented
        return self.pairs() == other.pairs()

    def __repr__(self) -> str:
        return f"ModeSet({self.pairs()!r})"

    @property
    def phase_velocities(self) -> np.ndarray:
        return np.array([mode.phase_velocity for mode in self._modes], dtype=float)

    @property
    def indices(self) -> List[int]:
        return [mode.index for mode in self._modes]

    def pairs(self) -> List[Tuple[int, float]]:
        """(index, phase_velocity) for every mode, fundamental first."""
        return [(mode.index, mode.phase_velocity) for mode in self._modes]

    def labels(self) -> List[str]:
        return [mode.label for mode in self._modes]

    def select(self, indices: Iterable[int]) -> "ModeSet":
        """
        Sub-set of modes by 1-based mode index.
        """

        by_index = {mode.index: mode for mode in self._modes}
        chosen = []
        for index in indices:
            if index not in by_index:
                raise IndexError(f"mode {index} not in set {sorted(by_index)}.")
            chosen.append(by_index[index])
        return ModeSet(chosen)
