"""Stateful RC-car simulator owning parameters and integrator state."""

from __future__ import annotations

import logging
import math
import numbers
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

import numpy as np

from chargedup.chemistry.battery import BatteryCalculator
from chargedup.simulation.config import (
    MAX_THROTTLE,
    MIN_THROTTLE,
    SimulationParameters,
    TrackConfig,
)
from chargedup.simulation.forces import force_balance
from chargedup.simulation.integrator import advance_state, effective_throttle, electrical_power
from chargedup.simulation.state import SimulationState
from chargedup.utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

MPS_TO_KMH = 3.6
TRANSFER_FIELDS = frozenset(
    {"battery_voltage", "battery_current", "battery_capacity", "internal_resistance"}
)


@dataclass(frozen=True)
class SimulationDiagnostics:
    """Derived readouts for the current state and parameters.

    Args:
        motor_force: Tractive force [N].
        friction_force: Friction force [N].
        drag_force: Air drag force [N].
        net_force: Net longitudinal force [N].
        throttle: Effective throttle in [0, 1].
        electrical_power: Battery power drawn [W].
        loaded_voltage: Battery terminal voltage under the drawn current [V].
        power_loss: Resistive loss inside the battery [W].
        speed_kmh: Current speed [km/h].
    """

    motor_force: float
    friction_force: float
    drag_force: float
    net_force: float
    throttle: float
    electrical_power: float
    loaded_voltage: float
    power_loss: float
    speed_kmh: float


class VehicleSimulator:
    """RC car lapping a closed track under motor, friction and drag forces.

    The simulator is the only writer of :class:`SimulationState`. Callers
    adjust inputs through :meth:`set_parameters` and read immutable
    snapshots through :meth:`get_state` between ticks.
    """

    def __init__(
        self,
        parameters: SimulationParameters | None = None,
        track: TrackConfig | None = None,
        battery: BatteryCalculator | None = None,
    ) -> None:
        """Create a simulator at rest.

        Args:
            parameters: Initial parameters; defaults describe a 500 g car on
                a 4xAA alkaline pack.
            track: Track configuration; defaults to a 20 m lap.
            battery: Battery calculator used for diagnostics.

        Raises:
            chargedup.utils.exceptions.ConfigurationError: If parameters or
                track configuration are invalid.
        """
        self._parameters = parameters or SimulationParameters()
        self._parameters.validate()
        self._track = track or TrackConfig()
        self._track.validate()
        self._battery = battery or BatteryCalculator()
        self._state = SimulationState()

    @property
    def parameters(self) -> SimulationParameters:
        """Current parameter set.

        Returns:
            Immutable parameter snapshot.
        """
        return self._parameters

    @property
    def track(self) -> TrackConfig:
        """Track configuration.

        Returns:
            Track the car is lapping.
        """
        return self._track

    @property
    def state(self) -> SimulationState:
        """Current state snapshot.

        Returns:
            Immutable state snapshot.
        """
        return self._state

    @property
    def is_running(self) -> bool:
        """Whether ticks currently advance the state.

        Returns:
            Running flag of the current state.
        """
        return self._state.is_running

    def get_state(self) -> SimulationState:
        """Return a consistent snapshot for rendering.

        Returns:
            Immutable state snapshot.
        """
        return self._state

    def set_parameters(self, **updates: Any) -> SimulationParameters:
        """Apply a validated partial parameter update.

        Throttle values are clamped to ``[0, 1]``; every other field is
        validated against its bound. The update is applied atomically.

        Args:
            **updates: Parameter names and their new values.

        Returns:
            Updated parameter set.

        Raises:
            chargedup.utils.exceptions.ConfigurationError: If a name is
                unknown or a value violates its bound.
        """
        unknown = set(updates) - SimulationParameters.field_names()
        if unknown:
            msg = f"unknown simulation parameters: {sorted(unknown)}"
            raise ConfigurationError(msg)

        if "throttle" in updates:
            throttle = updates["throttle"]
            if (
                isinstance(throttle, bool)
                or not isinstance(throttle, numbers.Real)
                or math.isnan(throttle)
            ):
                msg = f"throttle must be a real number, got: {throttle!r}"
                raise ConfigurationError(msg)
            updates["throttle"] = float(np.clip(throttle, MIN_THROTTLE, MAX_THROTTLE))

        candidate = replace(self._parameters, **updates)
        candidate.validate()
        self._parameters = candidate
        logger.debug("Parameters updated: %s", sorted(updates))
        return candidate

    def apply_battery_transfer(self, transfer: Mapping[str, float]) -> SimulationParameters:
        """Copy battery-calculator results into the simulation parameters.

        Args:
            transfer: Payload from
                :meth:`chargedup.chemistry.battery.BatteryPackAnalysis.physics_transfer`.

        Returns:
            Updated parameter set.

        Raises:
            chargedup.utils.exceptions.ConfigurationError: If the payload
                contains non-battery fields or invalid values.
        """
        foreign = set(transfer) - TRANSFER_FIELDS
        if foreign:
            msg = f"battery transfer may only set {sorted(TRANSFER_FIELDS)}, got: {sorted(foreign)}"
            raise ConfigurationError(msg)
        logger.info(
            "Applying battery transfer: %.2f V, %.2f A",
            transfer.get("battery_voltage", self._parameters.battery_voltage),
            transfer.get("battery_current", self._parameters.battery_current),
        )
        return self.set_parameters(**dict(transfer))

    def start(self) -> None:
        """Let subsequent ticks advance the state."""
        if not self._state.is_running:
            logger.debug("Simulation started")
        self._state = replace(self._state, is_running=True)

    def stop(self) -> None:
        """Freeze the state; ticks become no-ops."""
        if self._state.is_running:
            logger.debug("Simulation stopped")
        self._state = replace(self._state, is_running=False)

    def reset(self) -> None:
        """Restore the rest state and release the throttle."""
        self._state = SimulationState()
        self._parameters = replace(self._parameters, throttle=0.0)
        logger.debug("Simulation reset")

    def tick(self, dt: float) -> SimulationState:
        """Advance the simulation by one step if running.

        Args:
            dt: Step width [s]; callers bound it to avoid unstable steps.

        Returns:
            State after the step, unchanged when stopped.

        Raises:
            chargedup.utils.exceptions.ConfigurationError: If ``dt`` is
                negative or not finite.
        """
        if not isinstance(dt, numbers.Real) or not math.isfinite(dt) or dt < 0.0:
            msg = "dt must be a finite, non-negative step"
            raise ConfigurationError(msg)
        if not self._state.is_running:
            return self._state

        previous = self._state
        self._state = advance_state(previous, self._parameters, self._track, dt)

        if self._state.lap_count > previous.lap_count:
            logger.debug("Lap %d completed", self._state.lap_count)
        if self._state.is_battery_depleted and not previous.is_battery_depleted:
            logger.info("Battery depleted after %.1f J", self._state.total_energy)
        return self._state

    def diagnostics(self) -> SimulationDiagnostics:
        """Evaluate forces and electrical readouts for the current state.

        Returns:
            Derived force and power values.
        """
        parameters = self._parameters
        throttle = effective_throttle(self._state, parameters)
        forces = force_balance(parameters, self._state.velocity, throttle)
        current = parameters.battery_current * throttle
        loaded = self._battery.calculate_loaded_voltage(
            parameters.battery_voltage, current, parameters.internal_resistance
        )
        return SimulationDiagnostics(
            motor_force=forces.motor,
            friction_force=forces.friction,
            drag_force=forces.drag,
            net_force=forces.net,
            throttle=throttle,
            electrical_power=electrical_power(parameters, throttle),
            loaded_voltage=loaded.loaded_voltage,
            power_loss=loaded.power_loss,
            speed_kmh=self._state.velocity * MPS_TO_KMH,
        )
