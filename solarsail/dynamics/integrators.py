"""Fixed-step classical Runge-Kutta integration.

The integrator is generic: it works with any derivative function of the form
``f(t, y, params) -> dy/dt`` and any state dimension. ``params`` is passed
through untouched to every evaluation.

There is no error control or step adaptation; ``nt`` samples are produced at
a uniform spacing h = (tf - t0) / (nt - 1).

Example:
    >>> from solarsail.dynamics import SailParameters, rk4, sail2d_ode
    >>> params = SailParameters(beta=0.0, mu=1.0)
    >>> times, states = rk4(sail2d_ode, [1.0, 0.0, 0.0, 1.0], 0.0, 2 * np.pi, 100, params)
"""

from collections.abc import Callable
from typing import Any, NamedTuple

import numpy as np
from numpy.typing import NDArray

from solarsail._typecheck import StateLike, typecheck

DerivativeFn = Callable[[float, NDArray[np.float64], Any], Any]


class TimeHistory(NamedTuple):
    """Sampled solution of one integration call.

    Unpacks as ``times, states = history``. Both arrays are read-only.

    Attributes:
        times: Sample times, shape (nt,)
        states: States index-aligned with ``times``, shape (nt, N)
    """
    times: NDArray[np.float64]
    states: NDArray[np.float64]

    @property
    def initial_state(self) -> NDArray[np.float64]:
        return self.states[0]

    @property
    def final_state(self) -> NDArray[np.float64]:
        return self.states[-1]

    @property
    def final_time(self) -> float:
        return float(self.times[-1])

    @property
    def step_size(self) -> float:
        """Uniform spacing between samples."""
        return float(self.times[1] - self.times[0])


@typecheck
def rk4_step(
    f: DerivativeFn,
    t: float,
    y: NDArray[np.float64],
    h: float,
    params: Any = None,
) -> NDArray[np.float64]:
    """Perform one RK4 integration step.

    Args:
        f: Derivative function f(t, y, params)
        t: Current time
        y: Current state
        h: Step size (may be zero or negative)
        params: Opaque value forwarded to ``f``

    Returns:
        State at t + h
    """
    k1 = np.asarray(f(t, y, params), dtype=np.float64)
    k2 = np.asarray(f(t + h/2, y + h/2 * k1, params), dtype=np.float64)
    k3 = np.asarray(f(t + h/2, y + h/2 * k2, params), dtype=np.float64)
    k4 = np.asarray(f(t + h, y + h * k3, params), dtype=np.float64)

    return y + h/6 * (k1 + 2*k2 + 2*k3 + k4)


@typecheck
def rk4(
    f: DerivativeFn,
    y0: StateLike,
    t0: float,
    tf: float,
    nt: int,
    params: Any = None,
) -> TimeHistory:
    """Integrate ``f`` from ``t0`` to ``tf`` with ``nt`` uniformly spaced samples.

    Sample 0 is ``(t0, y0)`` as given; every later sample is the result of one
    RK4 step from the previous one.

    Sample times are ``linspace(t0, tf, nt)`` rather than a running sum of
    ``h``, so the last time is exactly ``tf``. Each step starts from the grid
    time ``times[i-1]``; a time-dependent ``f`` therefore sees stage times
    that can differ from ``t0 + k*h`` in the last bits.

    Args:
        f: Derivative function f(t, y, params)
        y0: Initial state (any length)
        t0: Initial time
        tf: Final time
        nt: Number of samples including both end points (>= 2)
        params: Opaque value forwarded to every call of ``f``

    Returns:
        TimeHistory with ``nt`` samples spanning [t0, tf]

    Raises:
        ValueError: If nt < 2, the times are not finite, or y0 is not 1D
    """
    if nt < 2:
        raise ValueError(f"Sample count must be at least 2, got {nt}")
    if not (np.isfinite(t0) and np.isfinite(tf)):
        raise ValueError(f"Integration interval must be finite, got [{t0}, {tf}]")

    y = np.array(y0, dtype=np.float64)
    if y.ndim != 1 or y.size == 0:
        raise ValueError(f"Initial state must be a non-empty 1D vector, got shape {y.shape}")

    h = (tf - t0) / (nt - 1)

    # Grid end points are exact so chained segments share boundary times
    times = np.linspace(t0, tf, nt, dtype=np.float64)
    states = np.empty((nt, y.size), dtype=np.float64)
    states[0] = y

    for i in range(1, nt):
        y = rk4_step(f, float(times[i - 1]), y, h, params)
        states[i] = y

    times.flags.writeable = False
    states.flags.writeable = False
    return TimeHistory(times=times, states=states)
