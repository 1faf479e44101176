"""Export helpers for simulation outputs."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path

import numpy as np

from chargedup.analysis.kpi import RunSummary
from chargedup.simulation.runner import SimulationTrace

TRACE_CSV_HEADER = (
    "time_s,position_m,velocity_mps,acceleration_mps2,"
    "battery_charge_pct,lap_count,total_energy_j,throttle"
)


def export_summary_json(summary: RunSummary, path: str | Path) -> None:
    """Persist a run summary as JSON.

    Args:
        summary: Summary returned by :func:`chargedup.analysis.kpi.compute_run_summary`.
        path: Output file path for the JSON document.
    """
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(asdict(summary), indent=2), encoding="utf-8")


def export_trace_csv(trace: SimulationTrace, path: str | Path) -> None:
    """Export per-frame traces for post-processing.

    Args:
        trace: Recorded simulation trace.
        path: Destination CSV path.
    """
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    table = np.column_stack(
        (
            trace.time,
            trace.position,
            trace.velocity,
            trace.acceleration,
            trace.battery_charge,
            trace.lap_count,
            trace.total_energy,
            trace.throttle,
        )
    )
    np.savetxt(out, table, delimiter=",", header=TRACE_CSV_HEADER, comments="")
