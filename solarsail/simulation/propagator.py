"""Segmented trajectory propagation for solar sails.

A sail trajectory is flown as a sequence of control segments. Within one
segment the sun-incidence angle is held constant; between segments only the
attitude changes, so position and velocity are continuous:

    segment i:    integrate [t0_i, t0_i + duration_i] from y0_i
    segment i+1:  t0_{i+1} = t0_i + duration_i,  y0_{i+1} = last state of i

The polar angle is never wrapped between segments.

Example:
    >>> from solarsail.simulation import propagate_sail
    >>>
    >>> trajectory = propagate_sail(
    ...     beta=0.1, mu=1.0, y0=[1.0, 0.0, 0.0, 1.0], t0=0.0,
    ...     angles=[0.6155, -0.6155, 1.5707963], durations=[5.0, 2.0, 1.0],
    ... )
    >>> len(trajectory)
    3
"""

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, replace
from functools import partial

import numpy as np
from numpy.typing import NDArray

from solarsail._typecheck import FloatSequence, StateLike, typecheck
from solarsail.dynamics.integrators import TimeHistory, rk4
from solarsail.dynamics.sail import SailParameters, checked_sail2d_ode, sail2d_ode
from solarsail.dynamics.state import STATE_COMPONENTS, STATE_SIZE, as_state_array

logger = logging.getLogger(__name__)

# Samples per segment, independent of segment duration
DEFAULT_SAMPLES = 100

# =============================================================================
# Configuration
# =============================================================================


@typecheck
@dataclass(frozen=True)
class PropagatorConfig:
    """Propagation configuration.

    Attributes:
        n_samples: Samples per control segment, including both end points
        check_singularity: Raise SingularStateError when r drops to min_radius
        min_radius: Smallest admissible radial distance when checking
    """
    n_samples: int = DEFAULT_SAMPLES
    check_singularity: bool = False
    min_radius: float = 0.0

    def __post_init__(self) -> None:
        if self.n_samples < 2:
            raise ValueError(f"n_samples must be at least 2, got {self.n_samples}")
        if not np.isfinite(self.min_radius) or self.min_radius < 0:
            raise ValueError(f"min_radius must be finite and non-negative, got {self.min_radius}")


# =============================================================================
# Controls
# =============================================================================


@typecheck
@dataclass(frozen=True)
class ControlSegment:
    """Constant sail attitude held for a fixed duration.

    Attributes:
        angle: Sun-incidence angle [rad]
        duration: Segment length [time]
    """
    angle: float
    duration: float

    def __post_init__(self) -> None:
        if not np.isfinite(self.angle):
            raise ValueError(f"Control angle must be finite, got {self.angle}")
        if not np.isfinite(self.duration):
            raise ValueError(f"Control duration must be finite, got {self.duration}")

    @classmethod
    def from_degrees(cls, angle_deg: float, duration: float) -> "ControlSegment":
        """Create a segment from an incidence angle in degrees."""
        return cls(angle=float(np.radians(angle_deg)), duration=duration)

    @property
    def angle_deg(self) -> float:
        """Sun-incidence angle [deg]."""
        return float(np.degrees(self.angle))


@typecheck
def control_schedule(angles: FloatSequence, durations: FloatSequence) -> list[ControlSegment]:
    """Pair up parallel angle and duration lists.

    Raises:
        ValueError: If the two sequences differ in length
    """
    if len(angles) != len(durations):
        raise ValueError(
            f"Control schedule mismatch: {len(angles)} angles but {len(durations)} durations"
        )
    return [ControlSegment(angle=float(a), duration=float(d)) for a, d in zip(angles, durations)]


# =============================================================================
# Results
# =============================================================================


@dataclass(frozen=True, eq=False)
class Trajectory(Sequence):
    """Propagated sail trajectory, one time history per control segment.

    Behaves as a read-only sequence of ``TimeHistory`` objects.

    Attributes:
        initial_time: Start time of the first segment
        initial_state: State the propagation started from
        segments: Per-segment time histories, in control order
        controls: Control segment that produced each history
    """
    initial_time: float
    initial_state: NDArray[np.float64]
    segments: tuple[TimeHistory, ...] = ()
    controls: tuple[ControlSegment, ...] = ()

    def __len__(self) -> int:
        return len(self.segments)

    def __getitem__(self, index: int | slice) -> TimeHistory | tuple[TimeHistory, ...]:
        return self.segments[index]

    def __iter__(self) -> Iterator[TimeHistory]:
        return iter(self.segments)

    @property
    def times(self) -> NDArray[np.float64]:
        """All sample times, segments concatenated (boundaries appear twice)."""
        if not self.segments:
            return np.empty(0, dtype=np.float64)
        return np.concatenate([seg.times for seg in self.segments])

    @property
    def states(self) -> NDArray[np.float64]:
        """All states, segments concatenated, shape (N, 4)."""
        if not self.segments:
            return np.empty((0, STATE_SIZE), dtype=np.float64)
        return np.vstack([seg.states for seg in self.segments])

    @property
    def segment_index(self) -> NDArray[np.int64]:
        """Segment number of each row in ``times``/``states``."""
        if not self.segments:
            return np.empty(0, dtype=np.int64)
        return np.concatenate([
            np.full(len(seg.times), i, dtype=np.int64) for i, seg in enumerate(self.segments)
        ])

    @property
    def final_time(self) -> float:
        if not self.segments:
            return self.initial_time
        return self.segments[-1].final_time

    @property
    def final_state(self) -> NDArray[np.float64]:
        if not self.segments:
            return self.initial_state.copy()
        return self.segments[-1].final_state.copy()

    @property
    def max_radius(self) -> float:
        """Largest radial distance reached, including the initial state."""
        r_max = float(self.initial_state[0])
        for seg in self.segments:
            r_max = max(r_max, float(np.max(seg.states[:, 0])))
        return r_max

    def to_dataframe(self):
        """Convert to Polars DataFrame, one row per sample."""
        import polars as pl

        states = self.states
        index = self.segment_index
        angles = np.array([c.angle for c in self.controls], dtype=np.float64)

        columns = {
            "segment": index,
            "time": self.times,
            "sia": angles[index] if len(index) else np.empty(0, dtype=np.float64),
        }
        for i, name in enumerate(STATE_COMPONENTS):
            columns[name] = states[:, i]
        return pl.DataFrame(columns)


# =============================================================================
# Propagation
# =============================================================================


@typecheck
def propagate_schedule(
    beta: float,
    mu: float,
    y0: StateLike,
    t0: float,
    controls: Sequence[ControlSegment],
    config: PropagatorConfig | None = None,
) -> Trajectory:
    """Propagate a sail through an ordered list of control segments.

    Args:
        beta: Sail lightness number [-]
        mu: Gravitational parameter of the central body
        y0: Initial state [r, theta, v_r, v_t]
        t0: Initial time
        controls: Control segments, flown in order
        config: Propagation configuration (defaults to PropagatorConfig())

    Returns:
        Trajectory with one TimeHistory per control segment

    Raises:
        ValueError: On non-finite parameters or a malformed initial state
        SingularStateError: If singularity checking is enabled and r
            reaches ``config.min_radius``
    """
    config = config or PropagatorConfig()
    if not np.isfinite(t0):
        raise ValueError(f"Initial time must be finite, got {t0}")

    base = SailParameters(beta=beta, mu=mu)
    y0 = as_state_array(y0)
    y0.flags.writeable = False

    if config.check_singularity:
        ode = partial(checked_sail2d_ode, min_radius=config.min_radius)
    else:
        ode = sail2d_ode

    t0_i = float(t0)
    y0_i = y0
    histories = []
    for i, control in enumerate(controls):
        params = replace(base, sia=control.angle)
        tf_i = t0_i + control.duration

        history = rk4(ode, y0_i, t0_i, tf_i, config.n_samples, params)
        histories.append(history)
        logger.debug(
            "Segment %d: sia=%.4f rad, t=[%g, %g], final r=%.6g",
            i, control.angle, t0_i, tf_i, history.final_state[0],
        )

        y0_i = history.final_state
        t0_i = tf_i

    return Trajectory(
        initial_time=float(t0),
        initial_state=y0,
        segments=tuple(histories),
        controls=tuple(controls),
    )


@typecheck
def propagate_sail(
    beta: float,
    mu: float,
    y0: StateLike,
    t0: float,
    angles: FloatSequence,
    durations: FloatSequence,
    config: PropagatorConfig | None = None,
) -> Trajectory:
    """Propagate a sail through parallel lists of attitudes and durations.

    Args:
        beta: Sail lightness number [-]
        mu: Gravitational parameter of the central body
        y0: Initial state [r, theta, v_r, v_t]
        t0: Initial time
        angles: Sun-incidence angle of each segment [rad]
        durations: Length of each segment [time]
        config: Propagation configuration (defaults to PropagatorConfig())

    Returns:
        Trajectory with one TimeHistory per control segment

    Raises:
        ValueError: If ``angles`` and ``durations`` differ in length, or on
            any non-finite input
    """
    return propagate_schedule(beta, mu, y0, t0, control_schedule(angles, durations), config)
