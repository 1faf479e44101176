"""Vehicle physics simulator, integrator and fixed-cadence driver."""

from __future__ import annotations

from chargedup.simulation.config import (
    SimulationParameters,
    TrackConfig,
    build_simulation_parameters,
)
from chargedup.simulation.forces import ForceBalance, force_balance
from chargedup.simulation.integrator import advance_state
from chargedup.simulation.runner import (
    MAX_FRAME_STEP,
    SimulationTrace,
    clamp_frame_step,
    run_simulation,
)
from chargedup.simulation.simulator import SimulationDiagnostics, VehicleSimulator
from chargedup.simulation.state import SimulationState

__all__ = [
    "MAX_FRAME_STEP",
    "ForceBalance",
    "SimulationDiagnostics",
    "SimulationParameters",
    "SimulationState",
    "SimulationTrace",
    "TrackConfig",
    "VehicleSimulator",
    "advance_state",
    "build_simulation_parameters",
    "clamp_frame_step",
    "force_balance",
    "run_simulation",
]
