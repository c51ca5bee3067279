"""Solarsail - Planar solar sail trajectory propagation.

This package propagates the heliocentric trajectory of a flat solar sail in
polar coordinates, flown as a sequence of constant-attitude control segments
and integrated with a fixed-step RK4 scheme.

Example:
    >>> from solarsail import propagate_sail
    >>>
    >>> trajectory = propagate_sail(
    ...     beta=0.1,
    ...     mu=1.0,
    ...     y0=[1.0, 0.0, 0.0, 1.0],
    ...     t0=0.0,
    ...     angles=[0.6155, -0.6155, 1.5707963],
    ...     durations=[5.0, 2.0, 1.0],
    ... )
    >>> print(f"Final radius: {trajectory.final_state[0]:.3f} AU")
"""

__version__ = "0.1.0"

# Dynamics and integration
from solarsail.dynamics import (
    SS2D_DEFAULTS,
    SailParameters,
    SailState,
    SingularStateError,
    TimeHistory,
    checked_sail2d_ode,
    rk4,
    rk4_step,
    sail2d_ode,
)

# Data export
from solarsail.export import export_trajectory_to_json

# Visualization
from solarsail.plotting import (
    plot_state_history,
    plot_trajectory,
    polar_to_cartesian,
)

# Segmented propagation
from solarsail.simulation import (
    DEFAULT_SAMPLES,
    ControlSegment,
    PropagatorConfig,
    Trajectory,
    propagate_schedule,
    propagate_sail,
)

__all__ = [
    # Version
    "__version__",
    # Dynamics
    "SailParameters",
    "SailState",
    "SS2D_DEFAULTS",
    "SingularStateError",
    "sail2d_ode",
    "checked_sail2d_ode",
    # Integration
    "TimeHistory",
    "rk4",
    "rk4_step",
    # Propagation
    "DEFAULT_SAMPLES",
    "ControlSegment",
    "PropagatorConfig",
    "Trajectory",
    "propagate_sail",
    "propagate_schedule",
    # Plotting
    "plot_trajectory",
    "plot_state_history",
    "polar_to_cartesian",
    # Export
    "export_trajectory_to_json",
]
