# MIT License (see LICENSE)
"""
Playback substep policy for real-time drivers.

A presentation loop runs one frame per display refresh. At playback speed s
one frame covers s · base_dt of simulated time, split into ceil(2 s) equal
substeps so the per-step dt never exceeds base_dt / 2 (for s ≥ 1) and large
speed multipliers do not blow up close encounters.

The engine itself enforces none of this; it is the driver's choice.
"""
from __future__ import annotations
import math

from .engine import Engine

# Substeps per unit of playback speed.
SUBSTEPS_PER_SPEED = 2


def plan_substeps(speed: float, base_dt: float) -> tuple[int, float]:
    """
    Split one frame into substeps.

    Args:
        speed: Playback multiplier (> 0).
        base_dt: Simulated time of one frame at speed 1 (> 0).

    Returns:
        Tuple (steps, dt) with steps · dt == speed · base_dt.

    Raises:
        ValueError: speed or base_dt is not a finite positive number.
    """
    if not (math.isfinite(speed) and speed > 0):
        raise ValueError(f"speed must be a finite positive number, got {speed}")
    if not (math.isfinite(base_dt) and base_dt > 0):
        raise ValueError(f"base_dt must be a finite positive number, got {base_dt}")
    steps = max(1, math.ceil(speed * SUBSTEPS_PER_SPEED))
    return steps, (base_dt * speed) / steps


def advance_frame(engine: Engine, speed: float = 1.0, base_dt: float | None = None) -> int:
    """
    Advance engine by one playback frame.

    Args:
        engine: Engine to step.
        speed: Playback multiplier (> 0).
        base_dt: Frame duration at speed 1; engine.config.time_step if None.

    Returns:
        Number of substeps taken.
    """
    if base_dt is None:
        base_dt = engine.config.time_step
    steps, dt = plan_substeps(speed, base_dt)
    for _ in range(steps):
        engine.step(dt)
    return steps
