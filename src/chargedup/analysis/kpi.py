"""Summary metrics for recorded simulation runs."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from chargedup.simulation.runner import SimulationTrace
from chargedup.utils.constants import SECONDS_PER_HOUR


@dataclass(frozen=True)
class RunSummary:
    """Aggregated metrics of one simulation run.

    Args:
        duration: Simulated time [s].
        lap_count: Completed laps.
        best_lap_time: Fastest completed lap [s], ``None`` without laps.
        mean_speed: Time-averaged speed [m/s].
        max_speed: Peak speed [m/s].
        max_acceleration: Peak forward acceleration [m/s^2].
        total_energy: Battery energy drawn [J].
        total_energy_wh: Battery energy drawn [Wh].
        energy_per_lap: Energy per completed lap [J], ``None`` without laps.
        final_battery_charge: Battery charge at the end of the run [%].
    """

    duration: float
    lap_count: int
    best_lap_time: float | None
    mean_speed: float
    max_speed: float
    max_acceleration: float
    total_energy: float
    total_energy_wh: float
    energy_per_lap: float | None
    final_battery_charge: float


def compute_run_summary(trace: SimulationTrace) -> RunSummary:
    """Compute lap, speed and energy metrics from a recorded run.

    Args:
        trace: Per-frame trace returned by
            :func:`chargedup.simulation.runner.run_simulation`.

    Returns:
        Aggregated run summary.
    """
    final = trace.final_state
    dt = np.diff(trace.time, prepend=0.0)
    duration = float(trace.time[-1])
    mean_speed = float(np.sum(trace.velocity * dt) / duration) if duration > 0.0 else 0.0

    return RunSummary(
        duration=duration,
        lap_count=int(final.lap_count),
        best_lap_time=float(final.best_lap_time) if final.has_best_lap else None,
        mean_speed=mean_speed,
        max_speed=float(np.max(trace.velocity)),
        max_acceleration=float(np.max(trace.acceleration)),
        total_energy=float(final.total_energy),
        total_energy_wh=float(final.total_energy / SECONDS_PER_HOUR),
        energy_per_lap=final.energy_per_lap,
        final_battery_charge=float(final.battery_charge),
    )
