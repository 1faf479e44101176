"""Fixed-cadence driver loop recording simulation traces."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from chargedup.simulation._progress import maybe_emit_time_progress
from chargedup.simulation.simulator import VehicleSimulator
from chargedup.simulation.state import SimulationState
from chargedup.utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_FRAME_STEP = 1.0 / 60.0
MAX_FRAME_STEP = 0.1
STEP_COUNT_TOLERANCE = 1e-6

ThrottleSchedule = Callable[[float], float]


@dataclass(frozen=True)
class SimulationTrace:
    """Per-frame simulation output arrays.

    Args:
        time: Simulated time at the end of each frame [s].
        position: Lap position [m].
        velocity: Speed [m/s].
        acceleration: Net acceleration [m/s^2].
        battery_charge: Remaining battery charge [%].
        lap_count: Completed laps.
        total_energy: Cumulative battery energy drawn [J].
        throttle: Configured throttle during each frame.
        final_state: State after the last frame.
    """

    time: np.ndarray
    position: np.ndarray
    velocity: np.ndarray
    acceleration: np.ndarray
    battery_charge: np.ndarray
    lap_count: np.ndarray
    total_energy: np.ndarray
    throttle: np.ndarray
    final_state: SimulationState

    @property
    def frame_count(self) -> int:
        """Number of recorded frames.

        Returns:
            Length of the trace arrays.
        """
        return int(self.time.size)


def clamp_frame_step(elapsed: float) -> float:
    """Bound a wall-clock frame delta to a stable integration step.

    Stalled frames (e.g. a backgrounded tab or a debugger pause) would
    otherwise produce one huge step.

    Args:
        elapsed: Raw elapsed time since the previous frame [s].

    Returns:
        Step width in ``[0, MAX_FRAME_STEP]`` [s].
    """
    if math.isnan(elapsed):
        return 0.0
    return float(np.clip(elapsed, 0.0, MAX_FRAME_STEP))


def run_simulation(
    simulator: VehicleSimulator,
    duration: float,
    frame_step: float = DEFAULT_FRAME_STEP,
    throttle_schedule: ThrottleSchedule | None = None,
    progress_prefix: str | None = None,
) -> SimulationTrace:
    """Drive the simulator at a fixed cadence and record every frame.

    Args:
        simulator: Simulator to advance; started if currently stopped.
        duration: Simulated time to cover [s].
        frame_step: Nominal frame step [s], clamped to ``MAX_FRAME_STEP``.
        throttle_schedule: Optional function mapping elapsed time [s] to a
            throttle position, applied before each frame.
        progress_prefix: Prefix for a stderr progress bar; ``None`` disables
            progress output.

    Returns:
        Recorded per-frame trace.

    Raises:
        chargedup.utils.exceptions.ConfigurationError: If ``duration`` or
            ``frame_step`` is not positive.
    """
    if not math.isfinite(duration) or duration <= 0.0:
        msg = "duration must be positive"
        raise ConfigurationError(msg)
    if not frame_step > 0.0:
        msg = "frame_step must be positive"
        raise ConfigurationError(msg)

    step = clamp_frame_step(frame_step)
    step_count = max(1, math.ceil(duration / step - STEP_COUNT_TOLERANCE))

    time = np.zeros(step_count, dtype=float)
    position = np.zeros(step_count, dtype=float)
    velocity = np.zeros(step_count, dtype=float)
    acceleration = np.zeros(step_count, dtype=float)
    battery_charge = np.zeros(step_count, dtype=float)
    lap_count = np.zeros(step_count, dtype=int)
    total_energy = np.zeros(step_count, dtype=float)
    throttle = np.zeros(step_count, dtype=float)

    simulator.start()
    logger.info("Running %.2f s of simulated time in %d frames", duration, step_count)

    elapsed = 0.0
    next_progress = 0.0
    for idx in range(step_count):
        if throttle_schedule is not None:
            simulator.set_parameters(throttle=throttle_schedule(elapsed))
        dt = max(0.0, min(step, duration - elapsed))
        state = simulator.tick(dt)
        elapsed += dt

        time[idx] = elapsed
        position[idx] = state.position
        velocity[idx] = state.velocity
        acceleration[idx] = state.acceleration
        battery_charge[idx] = state.battery_charge
        lap_count[idx] = state.lap_count
        total_energy[idx] = state.total_energy
        throttle[idx] = simulator.parameters.throttle

        next_progress = maybe_emit_time_progress(
            progress_prefix=progress_prefix,
            elapsed=elapsed if idx < step_count - 1 else duration,
            duration=duration,
            next_fraction_threshold=next_progress,
        )

    final_state = simulator.get_state()
    logger.info(
        "Run finished: %d laps, %.1f J drawn, %.1f%% battery left",
        final_state.lap_count,
        final_state.total_energy,
        final_state.battery_charge,
    )
    return SimulationTrace(
        time=time,
        position=position,
        velocity=velocity,
        acceleration=acceleration,
        battery_charge=battery_charge,
        lap_count=lap_count,
        total_energy=total_energy,
        throttle=throttle,
        final_state=final_state,
    )
