"""
Shared fixtures: the crust/mantle medium and the modes found in it.
"""

from pathlib import Path

import pytest

from seismowaves import DispersionRelation, MediumParams, find_modes


@pytest.fixture
def crust_mantle():
    """Crust over mantle at 0.08 Hz, just above the first higher-mode cutoff."""
    return MediumParams(
        thickness=35.0, beta1=3.5, beta2=4.5, rho1=2.6, rho2=3.4, frequency=0.08
    )


@pytest.fixture
def relation(crust_mantle):
    return DispersionRelation(crust_mantle)


@pytest.fixture
def crust_mantle_modes(crust_mantle):
    return find_modes(crust_mantle)


@pytest.fixture
def config_dir():
    return Path(__file__).resolve().parents[1] / "config"
