"""
Unit Tests for the Trajectory Calculator
========================================
Tests core kinematics for correctness.
Run: python -m pytest tests/ -v
"""

import sys
import os
import math
import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from kinematics.parameters import (
    SimulationParameters, DEFAULT_PARAMETERS, PROJECTILE, FREE_FALL,
)
from kinematics.calculator import (
    compute_trajectory, time_of_flight, FLIGHT_TIME_MARGIN,
)
from kinematics.validation import closed_form_reference


SCENARIO_A = SimulationParameters(initial_velocity=10.0, angle=45.0, initial_height=1.0,
                                  gravity=9.8, time_step=0.1, mode=PROJECTILE)
SCENARIO_B = SimulationParameters(initial_velocity=0.0, angle=0.0, initial_height=10.0,
                                  gravity=9.8, time_step=0.1, mode=FREE_FALL)
SCENARIO_C = SimulationParameters(initial_velocity=10.0, angle=0.0, initial_height=0.0,
                                  gravity=9.8, time_step=0.1, mode=PROJECTILE)

LAUNCHES = [
    SCENARIO_A, SCENARIO_B, SCENARIO_C,
    SimulationParameters(initial_velocity=25.0, angle=70.0, initial_height=0.0),
    SimulationParameters(initial_velocity=3.0, angle=10.0, initial_height=50.0, time_step=0.05),
    SimulationParameters(initial_velocity=40.0, angle=90.0, initial_height=2.0, gravity=1.62),
    SimulationParameters(initial_velocity=5.0, angle=30.0, initial_height=0.0, time_step=0.5),
]


class TestTimeOfFlight:
    """Analytic impact time and its fallbacks."""

    def test_projectile_positive_root(self):
        vy0 = 10 * np.sin(np.radians(45))
        expected = (vy0 + math.sqrt(vy0 ** 2 + 2 * 9.8 * 1.0)) / 9.8
        assert abs(time_of_flight(SCENARIO_A) - expected) < 1e-12

    def test_free_fall(self):
        assert abs(time_of_flight(SCENARIO_B) - math.sqrt(2 * 10 / 9.8)) < 1e-12

    def test_free_fall_ignores_angle_and_velocity(self):
        p = SimulationParameters(initial_velocity=30.0, angle=60.0, initial_height=10.0,
                                 mode=FREE_FALL)
        assert p.velocity_components() == (0.0, 0.0)
        assert time_of_flight(p) == time_of_flight(SCENARIO_B)

    def test_ground_launch_with_upward_velocity(self):
        p = SimulationParameters(initial_velocity=20.0, angle=30.0, initial_height=0.0)
        assert abs(time_of_flight(p) - 2 * 10.0 / 9.8) < 1e-9

    def test_flat_ground_launch_resolves_to_one_step(self):
        t = time_of_flight(SCENARIO_C)
        assert t > 0
        assert not math.isnan(t)
        assert t == SCENARIO_C.time_step

    @pytest.mark.parametrize('gravity', [0.0, -9.8, float('nan')])
    def test_degenerate_gravity_is_infinite(self, gravity):
        p = SimulationParameters(gravity=gravity)
        assert math.isinf(time_of_flight(p))
        assert time_of_flight(p) == compute_trajectory(p).time_of_flight


class TestScenarios:
    """Documented reference launches against closed-form kinematics."""

    def test_default_launch(self):
        result = compute_trajectory(SCENARIO_A)
        ref = closed_form_reference(SCENARIO_A)
        assert abs(result.time_of_flight - ref.time_of_flight) / ref.time_of_flight < 0.01
        assert abs(result.max_height - ref.max_height) / ref.max_height < 0.01
        assert abs(result.distance - ref.distance) / ref.distance < 0.01
        assert abs(result.max_height - 3.55) < 0.05

    def test_default_parameters_are_scenario_a(self):
        assert DEFAULT_PARAMETERS == SCENARIO_A

    def test_free_fall_drop(self):
        result = compute_trajectory(SCENARIO_B)
        assert abs(result.time_of_flight - 1.428) < 1e-3
        assert result.distance == 0
        assert result.max_height == 10

    def test_flat_ground_launch(self):
        result = compute_trajectory(SCENARIO_C)
        assert result.time_of_flight > 0
        assert result.is_finite
        assert len(result.samples) == 2
        assert result.samples[-1].x == pytest.approx(10.0 * SCENARIO_C.time_step)


class TestInvariants:
    """Properties that hold for every well-formed launch."""

    @pytest.mark.parametrize('params', LAUNCHES)
    def test_deterministic(self, params):
        assert compute_trajectory(params) == compute_trajectory(params)

    @pytest.mark.parametrize('params', LAUNCHES)
    def test_time_strictly_increasing(self, params):
        times = compute_trajectory(params).time
        assert np.all(np.diff(times) > 0)

    @pytest.mark.parametrize('params', LAUNCHES)
    def test_starts_at_launch_and_ends_on_ground(self, params):
        result = compute_trajectory(params)
        first, last = result.samples[0], result.samples[-1]
        assert first.t == 0.0
        assert first.y == params.initial_height
        assert last.y == 0.0
        assert last.t == result.time_of_flight

    @pytest.mark.parametrize('params', LAUNCHES)
    def test_height_floor(self, params):
        result = compute_trajectory(params)
        assert result.max_height >= params.initial_height
        assert result.distance >= 0

    @pytest.mark.parametrize('params', LAUNCHES)
    def test_no_sample_below_ground(self, params):
        assert np.all(compute_trajectory(params).y >= 0)

    def test_free_fall_has_no_horizontal_motion(self):
        p = SimulationParameters(initial_velocity=12.0, angle=40.0, initial_height=25.0,
                                 mode=FREE_FALL)
        result = compute_trajectory(p)
        assert np.all(result.x == 0)
        assert result.distance == 0

    def test_samples_on_time_grid(self):
        result = compute_trajectory(SCENARIO_A)
        sampled = result.time[:-1]
        steps = sampled / SCENARIO_A.time_step
        assert np.allclose(steps, np.round(steps))

    def test_sampling_stays_inside_margin(self):
        result = compute_trajectory(SCENARIO_A)
        assert result.time.max() <= result.time_of_flight * FLIGHT_TIME_MARGIN

    def test_impact_point_is_exact(self):
        result = compute_trajectory(SCENARIO_A)
        vx0, _ = SCENARIO_A.velocity_components()
        last = result.samples[-1]
        assert last.x == vx0 * result.time_of_flight
        assert result.distance == last.x


class TestSamplingDensity:
    """Summary values come from closed form, not the sample grid."""

    @pytest.mark.parametrize('params', [SCENARIO_A, SCENARIO_B, LAUNCHES[3]])
    def test_halving_timestep(self, params):
        coarse = compute_trajectory(params)
        fine = compute_trajectory(SimulationParameters(
            **{**params.as_dict(), 'time_step': params.time_step / 2}))

        assert fine.time_of_flight == coarse.time_of_flight
        assert fine.distance == pytest.approx(coarse.distance)
        # Apex sampling error is bounded by g·dt²/8
        tol = params.gravity * params.time_step ** 2 / 8
        assert abs(fine.max_height - coarse.max_height) <= tol
        assert len(fine.samples) > len(coarse.samples)


class TestDegenerateInputs:
    """Numeric degeneracies come back as results, never as exceptions."""

    @pytest.mark.parametrize('gravity', [0.0, -9.8])
    def test_non_positive_gravity(self, gravity):
        p = SimulationParameters(initial_velocity=10.0, angle=45.0, initial_height=1.0,
                                 gravity=gravity)
        result = compute_trajectory(p)
        assert not result.is_finite
        assert math.isinf(result.time_of_flight)
        assert len(result.samples) == 1
        assert result.samples[0].y == 1.0

    def test_zero_gravity_free_fall_keeps_finite_distance(self):
        p = SimulationParameters(initial_height=5.0, gravity=0.0, mode=FREE_FALL)
        result = compute_trajectory(p)
        assert result.distance == 0.0
        assert result.max_height == 5.0
        assert not result.is_finite

    def test_nan_input(self):
        p = SimulationParameters(initial_velocity=float('nan'))
        result = compute_trajectory(p)
        assert not result.is_finite

    def test_free_fall_from_ground_is_single_point(self):
        p = SimulationParameters(initial_height=0.0, mode=FREE_FALL)
        result = compute_trajectory(p)
        assert len(result.samples) == 1
        assert result.samples[0].t == 0.0
        assert result.samples[0].y == 0.0
        assert result.time_of_flight == 0.0
        assert result.is_finite

    def test_negative_height_is_not_finite(self):
        p = SimulationParameters(initial_velocity=1.0, angle=10.0, initial_height=-50.0)
        result = compute_trajectory(p)
        assert not result.is_finite
        assert len(result.samples) >= 1

    def test_non_positive_timestep(self):
        p = SimulationParameters(time_step=0.0)
        result = compute_trajectory(p)
        assert len(result.samples) == 2
        assert result.samples[0].t == 0.0
        assert result.samples[-1].y == 0.0


class TestResult:
    """Derived views on TrajectoryResult."""

    def test_arrays_match_samples(self):
        result = compute_trajectory(SCENARIO_A)
        assert len(result.x) == len(result.y) == len(result.time) == len(result.samples)

    def test_apex(self):
        result = compute_trajectory(SCENARIO_A)
        assert result.apex.y == result.max_height

    def test_summary_mentions_values(self):
        text = compute_trajectory(SCENARIO_A).summary()
        assert 'PROJECTILE' in text
        assert 'Flight time' in text

    def test_result_is_immutable(self):
        result = compute_trajectory(SCENARIO_A)
        with pytest.raises(Exception):
            result.max_height = 0.0


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
