"""Simulation parameter and track configuration dataclasses."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, fields
from typing import Any

from chargedup.utils.exceptions import ConfigurationError

DEFAULT_TRACK_LENGTH = 20.0
DEFAULT_MASS = 0.5
DEFAULT_WHEEL_RADIUS = 0.02
DEFAULT_MOTOR_EFFICIENCY = 0.7
DEFAULT_FRICTION_COEFFICIENT = 0.3
DEFAULT_AIR_RESISTANCE = 0.05
DEFAULT_MAX_TORQUE = 0.1
DEFAULT_BATTERY_VOLTAGE = 6.0
DEFAULT_BATTERY_CURRENT = 1.0
DEFAULT_BATTERY_CAPACITY = 2000.0
DEFAULT_INTERNAL_RESISTANCE = 1.2
MIN_THROTTLE = 0.0
MAX_THROTTLE = 1.0


@dataclass(frozen=True)
class TrackConfig:
    """Closed-loop track definition.

    Args:
        length: Lap length along the racing line [m].
    """

    length: float = DEFAULT_TRACK_LENGTH

    def validate(self) -> None:
        """Validate track settings.

        Raises:
            chargedup.utils.exceptions.ConfigurationError: If the track
                length is not positive.
        """
        length = self.length
        if (
            isinstance(length, bool)
            or not isinstance(length, numbers.Real)
            or not math.isfinite(length)
            or length <= 0.0
        ):
            msg = "track length must be positive"
            raise ConfigurationError(msg)


@dataclass(frozen=True)
class SimulationParameters:
    """Externally adjustable car, motor and battery inputs.

    Args:
        mass: Car mass [kg].
        wheel_radius: Driven wheel radius [m].
        motor_efficiency: Motor-to-wheel efficiency in [0, 1].
        friction_coefficient: Sliding friction coefficient (-).
        air_resistance: Quadratic drag coefficient [kg/m].
        max_torque: Motor torque at full throttle [N*m].
        battery_voltage: Pack voltage [V].
        battery_current: Motor current at full throttle [A].
        battery_capacity: Pack capacity [mAh].
        internal_resistance: Pack internal resistance [ohm].
        throttle: Throttle position in [0, 1].
    """

    mass: float = DEFAULT_MASS
    wheel_radius: float = DEFAULT_WHEEL_RADIUS
    motor_efficiency: float = DEFAULT_MOTOR_EFFICIENCY
    friction_coefficient: float = DEFAULT_FRICTION_COEFFICIENT
    air_resistance: float = DEFAULT_AIR_RESISTANCE
    max_torque: float = DEFAULT_MAX_TORQUE
    battery_voltage: float = DEFAULT_BATTERY_VOLTAGE
    battery_current: float = DEFAULT_BATTERY_CURRENT
    battery_capacity: float = DEFAULT_BATTERY_CAPACITY
    internal_resistance: float = DEFAULT_INTERNAL_RESISTANCE
    throttle: float = 0.0

    @classmethod
    def field_names(cls) -> frozenset[str]:
        """Names of all adjustable parameters.

        Returns:
            Set of dataclass field names.
        """
        return frozenset(item.name for item in fields(cls))

    def validate(self) -> None:
        """Validate parameter bounds before they reach the integrator.

        Raises:
            chargedup.utils.exceptions.ConfigurationError: If any parameter
                is not a finite real number or violates its defined bound.
        """
        for item in fields(self):
            value = getattr(self, item.name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                msg = f"{item.name} must be a real number, got: {value!r}"
                raise ConfigurationError(msg)
            if not math.isfinite(value):
                msg = f"{item.name} must be finite"
                raise ConfigurationError(msg)

        if self.mass <= 0.0:
            msg = "mass must be positive"
            raise ConfigurationError(msg)
        if self.wheel_radius <= 0.0:
            msg = "wheel_radius must be positive"
            raise ConfigurationError(msg)
        if not 0.0 <= self.motor_efficiency <= 1.0:
            msg = "motor_efficiency must be between 0 and 1"
            raise ConfigurationError(msg)
        if self.friction_coefficient < 0.0:
            msg = "friction_coefficient must be non-negative"
            raise ConfigurationError(msg)
        if self.air_resistance < 0.0:
            msg = "air_resistance must be non-negative"
            raise ConfigurationError(msg)
        if self.max_torque < 0.0:
            msg = "max_torque must be non-negative"
            raise ConfigurationError(msg)
        if self.battery_voltage <= 0.0:
            msg = "battery_voltage must be positive"
            raise ConfigurationError(msg)
        if self.battery_current <= 0.0:
            msg = "battery_current must be positive"
            raise ConfigurationError(msg)
        if self.battery_capacity <= 0.0:
            msg = "battery_capacity must be positive"
            raise ConfigurationError(msg)
        if self.internal_resistance < 0.0:
            msg = "internal_resistance must be non-negative"
            raise ConfigurationError(msg)
        if not MIN_THROTTLE <= self.throttle <= MAX_THROTTLE:
            msg = f"throttle must be between {MIN_THROTTLE} and {MAX_THROTTLE}"
            raise ConfigurationError(msg)


def build_simulation_parameters(**overrides: Any) -> SimulationParameters:
    """Build validated simulation parameters from defaults and overrides.

    Args:
        **overrides: Parameter values replacing the defaults.

    Returns:
        Fully validated parameter set.

    Raises:
        chargedup.utils.exceptions.ConfigurationError: If an override names
            an unknown parameter or violates its bound.
    """
    unknown = set(overrides) - SimulationParameters.field_names()
    if unknown:
        msg = f"unknown simulation parameters: {sorted(unknown)}"
        raise ConfigurationError(msg)
    parameters = SimulationParameters(**overrides)
    parameters.validate()
    return parameters
