"""Fixed-step explicit Euler update of the car state."""

from __future__ import annotations

from dataclasses import replace

from chargedup.chemistry.battery import full_capacity_energy, remaining_charge_percent
from chargedup.simulation.config import SimulationParameters, TrackConfig
from chargedup.simulation.forces import force_balance
from chargedup.simulation.state import SimulationState


def effective_throttle(state: SimulationState, parameters: SimulationParameters) -> float:
    """Throttle actually applied to the motor.

    Args:
        state: Current simulation state.
        parameters: Configured parameters.

    Returns:
        Configured throttle, or zero once the battery is depleted.
    """
    if state.is_battery_depleted:
        return 0.0
    return parameters.throttle


def electrical_power(parameters: SimulationParameters, throttle: float) -> float:
    """Battery power drawn at a throttle position.

    Args:
        parameters: Battery parameters.
        throttle: Effective throttle in [0, 1].

    Returns:
        Power ``V * I * throttle`` [W].
    """
    return parameters.battery_voltage * parameters.battery_current * throttle


def advance_state(
    state: SimulationState,
    parameters: SimulationParameters,
    track: TrackConfig,
    dt: float,
) -> SimulationState:
    """Advance the car by one time step.

    The step integrates velocity from the force balance, then position from
    the new velocity. A lap boundary wraps the position while keeping the
    overshoot, records the finished lap time and restarts the lap clock.
    Battery drain is accumulated only while throttle is applied.

    ``dt`` is expected to be bounded by the caller (see
    :data:`chargedup.simulation.runner.MAX_FRAME_STEP`); the position is
    wrapped at most once per step.

    Args:
        state: State at the start of the step.
        parameters: Validated car, motor and battery parameters.
        track: Validated track configuration.
        dt: Step width [s].

    Returns:
        State at the end of the step.
    """
    throttle = effective_throttle(state, parameters)

    forces = force_balance(parameters, state.velocity, throttle)
    acceleration = forces.net / parameters.mass

    velocity = max(0.0, state.velocity + acceleration * dt)
    position = state.position + velocity * dt

    lap_count = state.lap_count
    lap_time = state.lap_time
    best_lap_time = state.best_lap_time
    if position >= track.length:
        position -= track.length
        lap_count += 1
        if 0.0 < lap_time < best_lap_time:
            best_lap_time = lap_time
        lap_time = 0.0
    lap_time += dt

    total_energy = state.total_energy
    battery_charge = state.battery_charge
    if throttle > 0.0:
        total_energy += electrical_power(parameters, throttle) * dt
        full_energy = full_capacity_energy(
            parameters.battery_voltage, parameters.battery_capacity
        )
        # Charge never recovers when capacity or voltage change mid-run.
        battery_charge = min(
            battery_charge, remaining_charge_percent(total_energy, full_energy)
        )

    return replace(
        state,
        position=position,
        velocity=velocity,
        acceleration=acceleration,
        battery_charge=battery_charge,
        lap_count=lap_count,
        lap_time=lap_time,
        best_lap_time=best_lap_time,
        total_energy=total_energy,
    )
