"""Unit tests for the force balance and the explicit Euler step."""

from __future__ import annotations

import math
import unittest

from chargedup.simulation.config import TrackConfig
from chargedup.simulation.forces import (
    air_drag_force,
    force_balance,
    friction_force,
    motor_force,
)
from chargedup.simulation.integrator import advance_state, effective_throttle
from chargedup.simulation.state import SimulationState
from tests.helpers import frictionless_parameters, sample_parameters


class ForceBalanceTests(unittest.TestCase):
    """Tests for the individual force contributions."""

    def test_full_throttle_motor_force(self) -> None:
        """Convert wheel torque into tractive force with efficiency."""
        self.assertAlmostEqual(motor_force(sample_parameters(), 1.0), 3.5)
        self.assertEqual(motor_force(sample_parameters(), 0.0), 0.0)

    def test_friction_only_acts_while_moving(self) -> None:
        """Apply Coulomb friction only for positive speed."""
        parameters = sample_parameters()
        self.assertEqual(friction_force(parameters, 0.0), 0.0)
        self.assertAlmostEqual(friction_force(parameters, 1.0), -0.3 * 0.5 * 9.81)

    def test_drag_is_quadratic_and_opposes_motion(self) -> None:
        """Scale drag with the square of speed."""
        parameters = sample_parameters()
        self.assertAlmostEqual(air_drag_force(parameters, 2.0), -0.2)
        self.assertAlmostEqual(air_drag_force(parameters, 4.0), -0.8)

    def test_net_force_sums_contributions(self) -> None:
        """Sum motor, friction and drag into the net force."""
        forces = force_balance(sample_parameters(), 2.0, 1.0)
        self.assertAlmostEqual(forces.net, 3.5 - 1.4715 - 0.2)


class AdvanceStateTests(unittest.TestCase):
    """Tests for one integration step."""

    def setUp(self) -> None:
        """Create the default track per test."""
        self.track = TrackConfig()

    def test_step_from_rest_at_full_throttle(self) -> None:
        """Integrate velocity first, then position from the new velocity."""
        parameters = sample_parameters(throttle=1.0)
        state = advance_state(SimulationState(), parameters, self.track, 0.1)

        self.assertAlmostEqual(state.acceleration, 7.0)
        self.assertAlmostEqual(state.velocity, 0.7)
        self.assertAlmostEqual(state.position, 0.07)
        self.assertAlmostEqual(state.lap_time, 0.1)
        self.assertAlmostEqual(state.total_energy, 0.6)
        self.assertAlmostEqual(state.battery_charge, 100.0 - 0.6 / 43200.0 * 100.0)

    def test_velocity_is_clamped_at_zero(self) -> None:
        """Stop instead of reversing when friction exceeds the speed."""
        state = advance_state(
            SimulationState(velocity=0.1), sample_parameters(), self.track, 0.1
        )
        self.assertEqual(state.velocity, 0.0)
        self.assertLess(state.acceleration, 0.0)
        self.assertAlmostEqual(state.position, 0.0)

    def test_lap_wrap_keeps_overshoot(self) -> None:
        """Wrap the position and restart the lap clock at a boundary."""
        start = SimulationState(position=19.999, velocity=0.02, lap_time=5.0)
        state = advance_state(start, frictionless_parameters(), self.track, 0.1)

        self.assertAlmostEqual(state.position, 0.001, places=9)
        self.assertEqual(state.lap_count, 1)
        self.assertEqual(state.best_lap_time, 5.0)
        self.assertAlmostEqual(state.lap_time, 0.1)
        self.assertTrue(state.has_best_lap)

    def test_slower_lap_keeps_previous_best(self) -> None:
        """Only replace the best lap with a faster one."""
        start = SimulationState(
            position=19.999, velocity=0.02, lap_time=5.0, best_lap_time=4.0, lap_count=1
        )
        state = advance_state(start, frictionless_parameters(), self.track, 0.1)
        self.assertEqual(state.best_lap_time, 4.0)
        self.assertEqual(state.lap_count, 2)

    def test_zero_lap_time_is_not_recorded(self) -> None:
        """Ignore a zero-length lap when updating the best lap."""
        start = SimulationState(position=19.999, velocity=0.02, lap_time=0.0)
        state = advance_state(start, frictionless_parameters(), self.track, 0.1)
        self.assertTrue(math.isinf(state.best_lap_time))

    def test_idle_throttle_draws_no_energy(self) -> None:
        """Leave energy and charge untouched at zero throttle."""
        start = SimulationState(velocity=3.0, total_energy=12.0, battery_charge=80.0)
        state = advance_state(start, sample_parameters(), self.track, 0.05)
        self.assertEqual(state.total_energy, 12.0)
        self.assertEqual(state.battery_charge, 80.0)

    def test_depleted_battery_cuts_motor(self) -> None:
        """Coast without motor force or drain once the charge is gone."""
        parameters = sample_parameters(throttle=1.0)
        start = SimulationState(velocity=2.0, battery_charge=0.0, total_energy=43200.0)

        self.assertEqual(effective_throttle(start, parameters), 0.0)
        state = advance_state(start, parameters, self.track, 0.05)
        self.assertLess(state.velocity, 2.0)
        self.assertEqual(state.total_energy, 43200.0)
        self.assertEqual(state.battery_charge, 0.0)

    def test_charge_floors_at_zero(self) -> None:
        """Never report negative charge when the last step overshoots."""
        parameters = sample_parameters(throttle=1.0, battery_capacity=1.0)
        start = SimulationState(total_energy=21.5, battery_charge=0.5)
        state = advance_state(start, parameters, self.track, 0.1)
        self.assertEqual(state.battery_charge, 0.0)
        self.assertTrue(state.is_battery_depleted)

    def test_zero_step_changes_nothing_but_acceleration(self) -> None:
        """Keep kinematic and energy state for a zero-width step."""
        start = SimulationState(position=3.0, velocity=1.0, lap_time=2.0, total_energy=5.0)
        state = advance_state(start, sample_parameters(throttle=1.0), self.track, 0.0)
        self.assertEqual(state.position, 3.0)
        self.assertEqual(state.velocity, 1.0)
        self.assertEqual(state.lap_time, 2.0)
        self.assertEqual(state.total_energy, 5.0)


if __name__ == "__main__":
    unittest.main()
