# MIT License (see LICENSE)
"""Exceptions raised by the simulation package."""
from __future__ import annotations


class ConfigurationError(ValueError):
    """
    Invalid construction-time input.

    Raised for an empty body set, non-positive mass/radius/G/timestep,
    negative softening, a bad sample interval, or controller parameters
    outside their documented range. Never raised from Engine.step().
    """
