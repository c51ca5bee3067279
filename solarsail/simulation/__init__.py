"""Simulation module for segmented solar sail propagation.

Chains fixed-attitude control segments into a continuous trajectory.

Example:
    >>> from solarsail.simulation import ControlSegment, propagate_schedule
    >>>
    >>> controls = [ControlSegment.from_degrees(35.0, 5.0), ControlSegment.from_degrees(-35.0, 2.0)]
    >>> trajectory = propagate_schedule(0.1, 1.0, [1.0, 0.0, 0.0, 1.0], 0.0, controls)
    >>> trajectory.final_state
"""

from solarsail.simulation.propagator import (
    DEFAULT_SAMPLES,
    ControlSegment,
    PropagatorConfig,
    Trajectory,
    control_schedule,
    propagate_schedule,
    propagate_sail,
)

__all__ = [
    "DEFAULT_SAMPLES",
    "ControlSegment",
    "PropagatorConfig",
    "Trajectory",
    "control_schedule",
    "propagate_schedule",
    "propagate_sail",
]
