"""Unit tests for the stateful vehicle simulator."""

from __future__ import annotations

import unittest

import numpy as np

from chargedup.chemistry.battery import BatteryCalculator
from chargedup.chemistry.presets import get_battery_preset
from chargedup.simulation.config import TrackConfig
from chargedup.simulation.simulator import VehicleSimulator
from chargedup.simulation.state import SimulationState
from chargedup.utils.exceptions import ConfigurationError
from tests.helpers import running_simulator, sample_parameters


class SimulatorLifecycleTests(unittest.TestCase):
    """Tests for start, stop, reset and ticking."""

    def test_new_simulator_is_at_rest(self) -> None:
        """Start stopped, at rest, with a full battery."""
        simulator = VehicleSimulator()
        state = simulator.get_state()
        self.assertEqual(state, SimulationState())
        self.assertFalse(simulator.is_running)
        self.assertEqual(simulator.track.length, 20.0)

    def test_tick_is_noop_while_stopped(self) -> None:
        """Return the unchanged state when not running."""
        simulator = VehicleSimulator(parameters=sample_parameters(throttle=1.0))
        before = simulator.get_state()
        self.assertIs(simulator.tick(0.05), before)

    def test_start_and_stop_toggle_progress(self) -> None:
        """Advance only between start and stop."""
        simulator = running_simulator(throttle=1.0)
        self.assertTrue(simulator.is_running)
        moving = simulator.tick(0.05)
        self.assertGreater(moving.velocity, 0.0)

        simulator.stop()
        frozen = simulator.get_state()
        simulator.tick(0.05)
        self.assertEqual(simulator.get_state().position, frozen.position)
        self.assertFalse(simulator.is_running)

    def test_invalid_step_is_rejected(self) -> None:
        """Raise configuration errors for negative or non-finite steps."""
        simulator = running_simulator()
        for dt in (-0.01, float("nan"), float("inf")):
            with self.subTest(dt=dt), self.assertRaises(ConfigurationError):
                simulator.tick(dt)

    def test_reset_is_idempotent(self) -> None:
        """Restore the same rest state and zero throttle on repeated resets."""
        simulator = running_simulator(throttle=1.0)
        for _ in range(120):
            simulator.tick(1.0 / 60.0)

        simulator.reset()
        first_state = simulator.get_state()
        first_parameters = simulator.parameters
        simulator.reset()

        self.assertEqual(first_state, SimulationState())
        self.assertEqual(simulator.get_state(), first_state)
        self.assertEqual(simulator.parameters, first_parameters)
        self.assertEqual(simulator.parameters.throttle, 0.0)
        self.assertEqual(simulator.parameters.mass, 0.5)

    def test_invalid_track_is_rejected(self) -> None:
        """Raise a configuration error for an invalid track at construction."""
        with self.assertRaises(ConfigurationError):
            VehicleSimulator(track=TrackConfig(length=-1.0))

    def test_energy_and_charge_are_monotonic(self) -> None:
        """Never decrease energy or increase charge under varying input."""
        rng = np.random.default_rng(7)
        simulator = running_simulator(battery_capacity=5.0)
        energy = []
        charge = []
        for _ in range(400):
            simulator.set_parameters(throttle=float(rng.uniform(-0.2, 1.2)))
            state = simulator.tick(float(rng.uniform(0.0, 0.1)))
            self.assertGreaterEqual(state.velocity, 0.0)
            self.assertGreaterEqual(state.position, 0.0)
            self.assertLess(state.position, simulator.track.length)
            energy.append(state.total_energy)
            charge.append(state.battery_charge)

        self.assertTrue(np.all(np.diff(energy) >= 0.0))
        self.assertTrue(np.all(np.diff(charge) <= 0.0))
        self.assertTrue(np.all(np.asarray(charge) >= 0.0))


class SimulatorParameterTests(unittest.TestCase):
    """Tests for parameter updates and the battery transfer."""

    def test_throttle_is_clamped(self) -> None:
        """Clamp throttle requests into the unit interval."""
        simulator = VehicleSimulator()
        self.assertEqual(simulator.set_parameters(throttle=1.5).throttle, 1.0)
        self.assertEqual(simulator.set_parameters(throttle=-0.2).throttle, 0.0)
        self.assertEqual(simulator.set_parameters(throttle=0.25).throttle, 0.25)
        with self.assertRaises(ConfigurationError):
            simulator.set_parameters(throttle=float("nan"))

    def test_non_numeric_updates_raise_configuration_errors(self) -> None:
        """Reject strings and other non-real values with configuration errors."""
        simulator = VehicleSimulator()
        before = simulator.parameters
        for updates in ({"mass": "x"}, {"throttle": "x"}, {"throttle": None}, {"throttle": True}):
            with self.subTest(updates=updates), self.assertRaises(ConfigurationError):
                simulator.set_parameters(**updates)
        with self.assertRaises(ConfigurationError):
            running_simulator().tick("0.1")  # type: ignore[arg-type]
        self.assertIs(simulator.parameters, before)

    def test_numpy_scalars_are_accepted(self) -> None:
        """Accept numpy scalars as parameter values."""
        simulator = VehicleSimulator()
        parameters = simulator.set_parameters(throttle=np.float64(0.4), mass=np.float32(0.75))
        self.assertAlmostEqual(parameters.throttle, 0.4)
        self.assertAlmostEqual(parameters.mass, 0.75)

    def test_invalid_update_leaves_parameters_untouched(self) -> None:
        """Apply updates atomically and reject invalid ones entirely."""
        simulator = VehicleSimulator()
        before = simulator.parameters
        with self.assertRaises(ConfigurationError):
            simulator.set_parameters(throttle=0.5, mass=0.0)
        with self.assertRaises(ConfigurationError):
            simulator.set_parameters(spoiler_angle=12.0)
        self.assertIs(simulator.parameters, before)

    def test_battery_transfer_updates_only_battery_fields(self) -> None:
        """Copy a pack analysis into the battery parameters."""
        analysis = BatteryCalculator().analyze_preset(get_battery_preset("4aa-nimh"), 0.8)
        simulator = VehicleSimulator(parameters=sample_parameters(mass=0.8))

        parameters = simulator.apply_battery_transfer(analysis.physics_transfer())

        self.assertAlmostEqual(parameters.battery_voltage, 4.8)
        self.assertAlmostEqual(parameters.battery_current, 0.8)
        self.assertAlmostEqual(parameters.internal_resistance, 0.08)
        self.assertAlmostEqual(parameters.battery_capacity, 2000.0)
        self.assertEqual(parameters.mass, 0.8)

    def test_battery_transfer_rejects_foreign_fields(self) -> None:
        """Refuse to set non-battery parameters through the transfer."""
        simulator = VehicleSimulator()
        with self.assertRaises(ConfigurationError):
            simulator.apply_battery_transfer({"battery_voltage": 6.0, "mass": 2.0})


class SimulatorDiagnosticsTests(unittest.TestCase):
    """Tests for derived force and power readouts."""

    def test_diagnostics_at_rest_with_full_throttle(self) -> None:
        """Report motor force, power and battery sag at standstill."""
        diagnostics = VehicleSimulator(parameters=sample_parameters(throttle=1.0)).diagnostics()
        self.assertAlmostEqual(diagnostics.motor_force, 3.5)
        self.assertEqual(diagnostics.friction_force, 0.0)
        self.assertEqual(diagnostics.drag_force, 0.0)
        self.assertAlmostEqual(diagnostics.net_force, 3.5)
        self.assertAlmostEqual(diagnostics.electrical_power, 6.0)
        self.assertAlmostEqual(diagnostics.loaded_voltage, 4.8)
        self.assertAlmostEqual(diagnostics.power_loss, 1.2)
        self.assertEqual(diagnostics.speed_kmh, 0.0)

    def test_depleted_battery_keeps_configured_throttle(self) -> None:
        """Report zero effective throttle without changing the setting."""
        simulator = running_simulator(throttle=1.0, battery_capacity=0.1)
        for _ in range(60):
            simulator.tick(0.1)

        self.assertTrue(simulator.get_state().is_battery_depleted)
        self.assertEqual(simulator.parameters.throttle, 1.0)
        diagnostics = simulator.diagnostics()
        self.assertEqual(diagnostics.throttle, 0.0)
        self.assertEqual(diagnostics.motor_force, 0.0)
        self.assertEqual(diagnostics.electrical_power, 0.0)


if __name__ == "__main__":
    unittest.main()
