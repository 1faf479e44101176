"""Longitudinal force balance of the RC car."""

from __future__ import annotations

from dataclasses import dataclass

from chargedup.simulation.config import SimulationParameters
from chargedup.utils.constants import GRAVITY


@dataclass(frozen=True)
class ForceBalance:
    """Forces acting on the car at one instant.

    Args:
        motor: Tractive force at the wheel [N].
        friction: Sliding friction, zero when stopped [N].
        drag: Quadratic air drag opposing motion [N].
    """

    motor: float
    friction: float
    drag: float

    @property
    def net(self) -> float:
        """Sum of all longitudinal forces.

        Returns:
            Net force [N].
        """
        return self.motor + self.friction + self.drag


def motor_force(parameters: SimulationParameters, throttle: float) -> float:
    """Tractive force ``(tau_max * throttle / r) * eta``.

    Args:
        parameters: Car and motor parameters.
        throttle: Effective throttle in [0, 1].

    Returns:
        Forward motor force [N].
    """
    torque = parameters.max_torque * throttle
    return torque / parameters.wheel_radius * parameters.motor_efficiency


def friction_force(parameters: SimulationParameters, velocity: float) -> float:
    """Coulomb friction ``-mu m g`` while moving.

    Args:
        parameters: Car parameters.
        velocity: Current speed [m/s].

    Returns:
        Friction force [N]; zero once the car is at rest.
    """
    if velocity <= 0.0:
        return 0.0
    return -parameters.friction_coefficient * parameters.mass * GRAVITY


def air_drag_force(parameters: SimulationParameters, velocity: float) -> float:
    """Quadratic drag ``-k v |v|``.

    Args:
        parameters: Car parameters.
        velocity: Current speed [m/s].

    Returns:
        Drag force opposing the direction of motion [N].
    """
    return -parameters.air_resistance * velocity * abs(velocity)


def force_balance(
    parameters: SimulationParameters,
    velocity: float,
    throttle: float,
) -> ForceBalance:
    """Evaluate all forces for one state.

    Args:
        parameters: Car and motor parameters.
        velocity: Current speed [m/s].
        throttle: Effective throttle in [0, 1].

    Returns:
        Motor, friction and drag contributions.
    """
    return ForceBalance(
        motor=motor_force(parameters, throttle),
        friction=friction_force(parameters, velocity),
        drag=air_drag_force(parameters, velocity),
    )
