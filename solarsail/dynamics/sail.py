"""Planar solar sail equations of motion in polar coordinates.

The sail moves under the central body's point-mass gravity plus the thrust of
an ideal flat sail. With lightness number beta and sun-incidence angle sia,
the radiation-pressure acceleration is

    a_srp = beta * mu / r^2 * cos(sia)^2 * [ |cos(sia)| , sin(sia) ]

in (radial, tangential) components. Combined with the polar kinematics:

    dr/dt     = v_r
    dtheta/dt = v_t / r
    dv_r/dt   = v_t^2 / r + mu * (beta * cos(sia)^2 * |cos(sia)| - 1) / r^2
    dv_t/dt   = mu * beta * cos(sia)^2 * sin(sia) / r^2 - v_r * v_t / r

The dynamics are singular at r = 0. ``sail2d_ode`` leaves ``r != 0`` as an
unchecked precondition and lets inf/nan propagate; ``checked_sail2d_ode``
raises ``SingularStateError`` instead.

Example:
    >>> params = SailParameters(beta=0.1, mu=1.0, sia=0.6155)
    >>> ydot = sail2d_ode(0.0, np.array([1.0, 0.0, 0.0, 1.0]), params)
"""

from dataclasses import dataclass

import numpy as np
from numba import njit
from numpy.typing import NDArray

from solarsail._typecheck import StateLike, typecheck

# =============================================================================
# Parameters
# =============================================================================


@typecheck
@dataclass(frozen=True)
class SailParameters:
    """Physical parameters held constant over one control segment.

    Attributes:
        beta: Sail lightness number (SRP / gravitational acceleration) [-]
        mu: Gravitational parameter of the central body [length^3/time^2]
        sia: Sun-incidence angle of the sail normal [rad]
    """
    beta: float
    mu: float
    sia: float = 0.0

    def __post_init__(self) -> None:
        """Validate parameters."""
        for name in ("beta", "mu", "sia"):
            value = getattr(self, name)
            if not np.isfinite(value):
                raise ValueError(f"{name} must be finite, got {value}")
        if self.beta < 0:
            raise ValueError(f"Lightness number must be non-negative, got {self.beta}")
        if self.mu <= 0:
            raise ValueError(f"Gravitational parameter must be positive, got {self.mu}")


# Reference values; immutable so no caller can change them for another
SS2D_DEFAULTS = SailParameters(beta=0.01, mu=1.0, sia=0.0)


class SingularStateError(ValueError):
    """Radial distance reached the singular region of the polar dynamics."""

    def __init__(self, time: float, radius: float, min_radius: float = 0.0) -> None:
        self.time = time
        self.radius = radius
        self.min_radius = min_radius
        super().__init__(
            f"Radial distance r={radius!r} at t={time!r} is not above {min_radius!r}; "
            "polar dynamics are undefined"
        )


# =============================================================================
# Numba Kernel
# =============================================================================


@njit(cache=True, error_model="numpy")
def _sail2d_derivatives(
    r: float, v_r: float, v_t: float,
    beta: float, mu: float, sia: float,
) -> tuple[float, float, float, float]:
    """Numba-compiled polar sail dynamics (IEEE division semantics)."""
    co = np.cos(sia)
    si = np.sin(sia)
    co2 = co * co
    r2 = r * r

    return (
        v_r,
        v_t / r,
        v_t * v_t / r + mu * (beta * co2 * abs(co) - 1.0) / r2,
        mu * beta * co2 * si / r2 - v_r * v_t / r,
    )


# =============================================================================
# Equations of Motion
# =============================================================================


@typecheck
def radiation_acceleration(params: SailParameters, r: float) -> tuple[float, float]:
    """Radiation-pressure acceleration of the sail.

    Args:
        params: Sail parameters for the current segment
        r: Radial distance [length]

    Returns:
        Tuple of (radial, tangential) acceleration [length/time^2]
    """
    co = np.cos(params.sia)
    scale = params.mu * params.beta * co**2 / r**2
    return float(scale * abs(co)), float(scale * np.sin(params.sia))


@typecheck
def sail2d_ode(t: float, y: StateLike, params: SailParameters) -> NDArray[np.float64]:
    """Compute the state derivative of the planar sail.

    The dynamics are autonomous; ``t`` is accepted so the function can be
    handed directly to the integrator.

    Args:
        t: Time (unused)
        y: State [r, theta, v_r, v_t]; r must be nonzero
        params: Sail parameters for the current segment

    Returns:
        Derivative [dr/dt, dtheta/dt, dv_r/dt, dv_t/dt]
    """
    r, _theta, v_r, v_t = y
    return np.array(
        _sail2d_derivatives(
            float(r), float(v_r), float(v_t),
            float(params.beta), float(params.mu), float(params.sia),
        ),
        dtype=np.float64,
    )


@typecheck
def checked_sail2d_ode(
    t: float,
    y: StateLike,
    params: SailParameters,
    min_radius: float = 0.0,
) -> NDArray[np.float64]:
    """Same as ``sail2d_ode`` but refuses states at or inside ``min_radius``.

    Raises:
        SingularStateError: If r <= min_radius or r is not finite.
    """
    r = float(y[0])
    if not (np.isfinite(r) and r > min_radius):
        raise SingularStateError(t, r, min_radius)
    return sail2d_ode(t, y, params)
