"""Unit tests for segmented sail propagation.

Tests segment chaining, control validation, and the Trajectory result.
"""

import logging

import numpy as np
import polars as pl
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from solarsail.dynamics import SailParameters, SingularStateError, rk4, sail2d_ode
from solarsail.simulation import (
    DEFAULT_SAMPLES,
    ControlSegment,
    PropagatorConfig,
    Trajectory,
    control_schedule,
    propagate_sail,
    propagate_schedule,
)

BETA = 0.1
MU = 1.0
Y0 = [1, 0, 0, 1]
ANGLES = [0.6155, -0.6155, 1.5707963]
DURATIONS = [5, 2, 1]


@pytest.fixture
def reference_trajectory() -> Trajectory:
    """The three-segment reference scenario."""
    return propagate_sail(BETA, MU, Y0, 0, ANGLES, DURATIONS)


# =============================================================================
# Control Tests
# =============================================================================


class TestControlSegment:
    """Test control segment construction."""

    def test_from_degrees(self):
        seg = ControlSegment.from_degrees(90.0, 1.5)
        assert_allclose(seg.angle, np.pi / 2)
        assert seg.duration == 1.5
        assert_allclose(seg.angle_deg, 90.0)

    @pytest.mark.parametrize("angle, duration", [(np.nan, 1.0), (0.0, np.inf)])
    def test_non_finite_rejected(self, angle, duration):
        with pytest.raises(ValueError, match="finite"):
            ControlSegment(angle=angle, duration=duration)

    def test_schedule_pairs_in_order(self):
        schedule = control_schedule([0.1, 0.2], [3.0, 4.0])
        assert schedule == [ControlSegment(0.1, 3.0), ControlSegment(0.2, 4.0)]

    def test_schedule_accepts_arrays(self):
        schedule = control_schedule(np.array([0.1, 0.2]), np.array([3.0, 4.0]))
        assert len(schedule) == 2

    def test_schedule_accepts_integer_arrays(self):
        schedule = control_schedule(np.array([0, 1]), np.array([3, 4]))
        assert schedule == [ControlSegment(0.0, 3.0), ControlSegment(1.0, 4.0)]
        assert all(isinstance(seg.angle, float) for seg in schedule)

    def test_schedule_length_mismatch(self):
        with pytest.raises(ValueError, match="mismatch"):
            control_schedule([0.1, 0.2, 0.3], [1.0, 2.0])


class TestPropagatorConfig:
    """Test configuration defaults and validation."""

    def test_default_samples(self):
        assert DEFAULT_SAMPLES == 100
        assert PropagatorConfig().n_samples == 100

    def test_too_few_samples(self):
        with pytest.raises(ValueError):
            PropagatorConfig(n_samples=1)

    def test_negative_min_radius(self):
        with pytest.raises(ValueError):
            PropagatorConfig(min_radius=-1.0)


# =============================================================================
# Propagation Tests
# =============================================================================


class TestPropagateSail:
    """Test segmented propagation."""

    def test_reference_scenario_shape(self, reference_trajectory):
        """Three segments with 100 samples each."""
        assert len(reference_trajectory) == 3
        for times, states in reference_trajectory:
            assert times.shape == (100,)
            assert states.shape == (100, 4)

    def test_segment_chaining(self, reference_trajectory):
        """Each segment starts exactly at the previous segment's final state."""
        segs = reference_trajectory.segments
        for prev, nxt in zip(segs[:-1], segs[1:]):
            assert_array_equal(nxt.states[0], prev.states[-1])

    def test_segment_start_times(self, reference_trajectory):
        """Segment i starts at t0 + sum of earlier durations."""
        starts = [seg.times[0] for seg in reference_trajectory]
        assert starts == [0.0, 5.0, 7.0]
        assert_allclose(reference_trajectory.final_time, 8.0, rtol=1e-12)

    def test_global_time_monotonic(self, reference_trajectory):
        """Time increases within segments and never decreases across them."""
        times = reference_trajectory.times
        assert len(times) == 300
        assert np.all(np.diff(times) >= 0)
        for seg in reference_trajectory:
            assert np.all(np.diff(seg.times) > 0)

    def test_first_state_is_initial_condition(self, reference_trajectory):
        assert_array_equal(reference_trajectory[0].states[0], [1.0, 0.0, 0.0, 1.0])
        assert_array_equal(reference_trajectory.initial_state, [1.0, 0.0, 0.0, 1.0])

    def test_segments_match_direct_integration(self, reference_trajectory):
        """Each segment equals a standalone RK4 run from its initial state."""
        t0 = 0.0
        y0 = np.array([1.0, 0.0, 0.0, 1.0])
        for seg, angle, duration in zip(reference_trajectory, ANGLES, DURATIONS):
            params = SailParameters(beta=BETA, mu=MU, sia=angle)
            expected = rk4(sail2d_ode, y0, t0, t0 + duration, 100, params)
            assert_array_equal(seg.states, expected.states)
            y0 = expected.final_state
            t0 += duration

    def test_theta_continuous_and_unwrapped(self, reference_trajectory):
        """Polar angle accumulates across segments without wrap-around."""
        theta = reference_trajectory.states[:, 1]
        assert np.all(np.diff(theta) >= 0)
        for seg in reference_trajectory:
            assert np.all(np.diff(seg.states[:, 1]) > 0)
        assert theta[-1] > np.pi

    def test_sail_raises_orbit(self, reference_trajectory):
        """Prograde thrust in the first segment moves the sail outward."""
        first = reference_trajectory[0]
        assert first.final_state[0] > 1.0

    def test_empty_schedule(self):
        """No controls is a valid, empty trajectory."""
        trajectory = propagate_sail(BETA, MU, Y0, 0.0, [], [])
        assert len(trajectory) == 0
        assert trajectory.times.shape == (0,)
        assert trajectory.states.shape == (0, 4)
        assert_array_equal(trajectory.final_state, Y0)
        assert trajectory.final_time == 0.0

    def test_mismatched_lengths_rejected(self):
        with pytest.raises(ValueError, match="mismatch"):
            propagate_sail(BETA, MU, Y0, 0.0, [0.1, 0.2], [1.0])

    def test_custom_sample_count(self):
        trajectory = propagate_sail(
            BETA, MU, Y0, 0.0, [0.2], [1.0], config=PropagatorConfig(n_samples=11),
        )
        assert trajectory[0].times.shape == (11,)

    def test_non_finite_beta_rejected(self):
        with pytest.raises(ValueError, match="finite"):
            propagate_sail(np.nan, MU, Y0, 0.0, [0.1], [1.0])

    def test_non_finite_duration_rejected(self):
        with pytest.raises(ValueError, match="finite"):
            propagate_sail(BETA, MU, Y0, 0.0, [0.1], [np.nan])

    def test_bad_initial_state_rejected(self):
        with pytest.raises(ValueError, match="shape"):
            propagate_sail(BETA, MU, [1.0, 0.0, 1.0], 0.0, [0.1], [1.0])

    def test_integer_array_inputs(self, reference_trajectory):
        """Integer numpy arrays are accepted wherever integer lists are."""
        trajectory = propagate_sail(
            BETA, MU, np.array([1, 0, 0, 1]), 0, np.array(ANGLES), np.array(DURATIONS),
        )
        assert_array_equal(trajectory.states, reference_trajectory.states)

    def test_integer_array_controls(self):
        trajectory = propagate_sail(BETA, MU, Y0, 0.0, np.array([0, 1]), np.array([1, 2]))
        assert len(trajectory) == 2
        assert_allclose(trajectory.final_time, 3.0)

    def test_caller_state_not_modified(self):
        y0 = np.array([1.0, 0.0, 0.0, 1.0])
        propagate_sail(BETA, MU, y0, 0.0, [0.3], [2.0])
        assert_array_equal(y0, [1.0, 0.0, 0.0, 1.0])

    def test_zero_beta_keeps_circular_orbit(self):
        """Without a sail, attitude changes have no effect."""
        trajectory = propagate_sail(0.0, MU, Y0, 0.0, [0.3, -1.0], [np.pi, np.pi])
        r, theta, v_r, v_t = trajectory.final_state
        assert_allclose([r, v_r, v_t], [1.0, 0.0, 1.0], atol=1e-4)
        assert_allclose(theta, 2 * np.pi, atol=1e-4)

    def test_schedule_equivalent_to_lists(self, reference_trajectory):
        controls = [ControlSegment(a, d) for a, d in zip(ANGLES, DURATIONS)]
        trajectory = propagate_schedule(BETA, MU, Y0, 0.0, controls)
        assert_array_equal(trajectory.states, reference_trajectory.states)
        assert trajectory.controls == tuple(controls)

    def test_debug_logging(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="solarsail"):
            propagate_sail(BETA, MU, Y0, 0.0, [0.1, 0.2], [1.0, 1.0])
        assert sum("Segment" in r.getMessage() for r in caplog.records) == 2


class TestSingularityCheck:
    """Test the optional radial singularity guard."""

    # Radial free fall from rest, no sail
    FALL = dict(beta=0.0, mu=1.0, y0=[1.0, 0.0, 0.0, 0.0], t0=0.0, angles=[0.0], durations=[1.0])

    def test_unchecked_by_default(self):
        """Starting at r = 0 propagates non-finite values instead of raising."""
        trajectory = propagate_sail(BETA, MU, [0.0, 0.0, 0.0, 1.0], 0.0, [0.0], [1.0])
        assert not np.all(np.isfinite(trajectory.final_state))

    def test_checked_raises_at_origin(self):
        config = PropagatorConfig(check_singularity=True)
        with pytest.raises(SingularStateError) as excinfo:
            propagate_sail(BETA, MU, [0.0, 0.0, 0.0, 1.0], 0.0, [0.0], [1.0], config=config)
        assert excinfo.value.radius == 0.0

    def test_min_radius_trips_during_fall(self):
        """The guard fires once the falling sail crosses min_radius."""
        config = PropagatorConfig(check_singularity=True, min_radius=0.5)
        with pytest.raises(SingularStateError) as excinfo:
            propagate_sail(**self.FALL, config=config)
        assert 0.0 < excinfo.value.radius <= 0.5
        assert 0.0 < excinfo.value.time < 1.0

    def test_fall_above_min_radius_passes(self):
        """A short fall that stays outside min_radius completes normally."""
        config = PropagatorConfig(check_singularity=True, min_radius=0.5)
        fall = dict(self.FALL, durations=[0.3])
        trajectory = propagate_sail(**fall, config=config)
        assert trajectory.final_state[0] > 0.5

    def test_checked_nominal_path_identical(self, reference_trajectory):
        """Checking does not change numerics when r stays positive."""
        config = PropagatorConfig(check_singularity=True)
        trajectory = propagate_sail(BETA, MU, Y0, 0, ANGLES, DURATIONS, config=config)
        assert_array_equal(trajectory.states, reference_trajectory.states)


# =============================================================================
# Result Tests
# =============================================================================


class TestTrajectory:
    """Test Trajectory accessors."""

    def test_sequence_protocol(self, reference_trajectory):
        assert reference_trajectory[-1] is reference_trajectory.segments[-1]
        assert len(list(reference_trajectory)) == 3

    def test_slicing_returns_segments(self, reference_trajectory):
        head = reference_trajectory[:2]
        assert isinstance(head, tuple)
        assert head == reference_trajectory.segments[:2]

    def test_segment_index(self, reference_trajectory):
        index = reference_trajectory.segment_index
        assert index.shape == (300,)
        assert_array_equal(np.bincount(index), [100, 100, 100])

    def test_final_state_is_copy(self, reference_trajectory):
        final = reference_trajectory.final_state
        final[0] = -1.0
        assert reference_trajectory.final_state[0] != -1.0

    def test_max_radius(self, reference_trajectory):
        assert_allclose(reference_trajectory.max_radius, reference_trajectory.states[:, 0].max())
        assert reference_trajectory.max_radius > 1.0

    def test_to_dataframe(self, reference_trajectory):
        df = reference_trajectory.to_dataframe()
        assert isinstance(df, pl.DataFrame)
        assert df.columns == ["segment", "time", "sia", "r", "theta", "v_r", "v_t"]
        assert df.height == 300
        assert_allclose(df["sia"].unique().sort().to_numpy(), sorted(ANGLES))

    def test_empty_to_dataframe(self):
        df = propagate_sail(BETA, MU, Y0, 0.0, [], []).to_dataframe()
        assert df.height == 0
