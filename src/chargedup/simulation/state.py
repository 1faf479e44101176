"""Kinematic, lap and battery state of the simulated car."""

from __future__ import annotations

import math
from dataclasses import dataclass

FULL_CHARGE_PERCENT = 100.0


@dataclass(frozen=True)
class SimulationState:
    """Immutable snapshot of the integrator state.

    Args:
        position: Distance along the current lap [m].
        velocity: Forward speed, never negative [m/s].
        acceleration: Net acceleration of the last step [m/s^2].
        battery_charge: Remaining battery charge in percent.
        lap_count: Number of completed laps.
        lap_time: Elapsed time in the lap in progress [s].
        best_lap_time: Fastest completed lap [s], ``inf`` before the first.
        total_energy: Energy drawn from the battery [J].
        is_running: Whether ticks advance the state.
    """

    position: float = 0.0
    velocity: float = 0.0
    acceleration: float = 0.0
    battery_charge: float = FULL_CHARGE_PERCENT
    lap_count: int = 0
    lap_time: float = 0.0
    best_lap_time: float = math.inf
    total_energy: float = 0.0
    is_running: bool = False

    @property
    def has_best_lap(self) -> bool:
        """Whether at least one lap time has been recorded.

        Returns:
            ``True`` once ``best_lap_time`` is finite.
        """
        return math.isfinite(self.best_lap_time)

    @property
    def is_battery_depleted(self) -> bool:
        """Whether the battery can no longer drive the motor.

        Returns:
            ``True`` at zero charge.
        """
        return self.battery_charge <= 0.0

    @property
    def energy_per_lap(self) -> float | None:
        """Average battery energy per completed lap.

        Returns:
            Energy per lap [J], or ``None`` before the first lap.
        """
        if self.lap_count == 0:
            return None
        return self.total_energy / self.lap_count
