"""
Top-level package for the interactive seismology notebooks.

The code is intentionally lightweight: closed-form Love-wave dispersion with a
bracketing root search, modal displacement fields on regular grids, and
far-field radiation patterns, exposed as plain functions a notebook or UI can
call directly.
"""

from .seismowaves import *  # noqa: F401,F403
