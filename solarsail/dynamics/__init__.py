"""Dynamics module for planar solar sail propagation.

This module provides the polar equations of motion of a flat solar sail and
the fixed-step RK4 integrator used to propagate them.

Example:
    >>> from solarsail.dynamics import SailParameters, rk4, sail2d_ode
    >>>
    >>> params = SailParameters(beta=0.1, mu=1.0, sia=0.6155)
    >>> times, states = rk4(sail2d_ode, [1.0, 0.0, 0.0, 1.0], 0.0, 5.0, 100, params)
"""

from solarsail.dynamics.integrators import (
    TimeHistory,
    rk4,
    rk4_step,
)
from solarsail.dynamics.sail import (
    SS2D_DEFAULTS,
    SailParameters,
    SingularStateError,
    checked_sail2d_ode,
    radiation_acceleration,
    sail2d_ode,
)
from solarsail.dynamics.state import (
    STATE_COMPONENTS,
    STATE_SIZE,
    SailState,
    as_state_array,
)

__all__ = [
    # State
    "SailState",
    "STATE_SIZE",
    "STATE_COMPONENTS",
    "as_state_array",
    # Sail dynamics
    "SailParameters",
    "SS2D_DEFAULTS",
    "SingularStateError",
    "sail2d_ode",
    "checked_sail2d_ode",
    "radiation_acceleration",
    # Integration
    "TimeHistory",
    "rk4",
    "rk4_step",
]
