"""Shared test helpers."""

from __future__ import annotations

from typing import Any

from chargedup.simulation.config import SimulationParameters, build_simulation_parameters
from chargedup.simulation.simulator import VehicleSimulator


def sample_parameters(**overrides: Any) -> SimulationParameters:
    """Create the default 500 g RC-car parameter set with overrides.

    Args:
        **overrides: Parameter values replacing the defaults.

    Returns:
        Validated parameter set used by unit and integration tests.
    """
    return build_simulation_parameters(**overrides)


def frictionless_parameters(**overrides: Any) -> SimulationParameters:
    """Create parameters without friction or drag for kinematic checks.

    Args:
        **overrides: Parameter values replacing the defaults.

    Returns:
        Validated parameter set with zero resistive forces.
    """
    values: dict[str, Any] = {"friction_coefficient": 0.0, "air_resistance": 0.0}
    values.update(overrides)
    return build_simulation_parameters(**values)


def running_simulator(**overrides: Any) -> VehicleSimulator:
    """Create a started simulator with the given parameter overrides.

    Args:
        **overrides: Parameter values replacing the defaults.

    Returns:
        Simulator in the running state.
    """
    simulator = VehicleSimulator(parameters=sample_parameters(**overrides))
    simulator.start()
    return simulator
