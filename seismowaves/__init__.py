"""
Numerical kernels behind interactive seismology teaching notebooks.

The package covers plane Love waves in a single layer over a half-space
(closed-form dispersion relation, bracketing root search for the modal phase
velocities, and displacement wavefields for animation) as well as far-field
P/S radiation patterns of a point moment-tensor source.  Results are plain
NumPy arrays so any plotting front end can consume them.
"""

from .config import (
    PRESETS,
    Config,
    GridSettings,
    SearchSettings,
    default_config,
    dump_config,
    load_config,
)
from .dispersion import DispersionRelation, vertical_slowness
from .errors import ConfigurationError, NumericalWarning
from .field import DisplacementGrid, animation_frames, displacement_grid, frame_times
from .logging_config import setup_logging
from .medium import MediumParams
from .modes import Mode, ModeSet
from .radiation import (
    Axis,
    MomentTensorSource,
    Plane,
    WaveType,
    double_couple,
    equivalent_body_forces,
    far_field_displacement,
    polarity,
    radiation_pattern_2d,
    radiation_pattern_3d,
)
from .roots import find_modes
from .scenarios import (
    LoveWaveScenario,
    create_crust_mantle_scenario,
    create_scenario,
    cutoff_frequencies,
    expected_mode_count,
    frequency_sweep,
)

__all__ = [
    "PRESETS",
    "Config",
    "GridSettings",
    "SearchSettings",
    "default_config",
    "dump_config",
    "load_config",
    "DispersionRelation",
    "vertical_slowness",
    "ConfigurationError",
    "NumericalWarning",
    "DisplacementGrid",
    "animation_frames",
    "displacement_grid",
    "frame_times",
    "MediumParams",
    "Mode",
    "ModeSet",
    "Axis",
    "MomentTensorSource",
    "Plane",
    "WaveType",
    "double_couple",
    "equivalent_body_forces",
    "far_field_displacement",
    "polarity",
    "radiation_pattern_2d",
    "radiation_pattern_3d",
    "setup_logging",
    "find_modes",
    "LoveWaveScenario",
    "create_crust_mantle_scenario",
    "create_scenario",
    "cutoff_frequencies",
    "expected_mode_count",
    "frequency_sweep",
]
