"""Plot generation for recorded simulation runs."""

from __future__ import annotations

from pathlib import Path

import matplotlib
import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from chargedup.simulation.runner import SimulationTrace

matplotlib.use("Agg")


def _save_dual_format(fig: Figure, out_base: Path) -> None:
    """Write a figure to PNG and PDF with a shared base path.

    Args:
        fig: Figure object to persist.
        out_base: Output path without suffix.
    """
    out_base.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_base.with_suffix(".png"), dpi=180, bbox_inches="tight")
    fig.savefig(out_base.with_suffix(".pdf"), bbox_inches="tight")


def plot_speed_trace(trace: SimulationTrace, out_base: Path) -> None:
    """Plot speed over time.

    Args:
        trace: Recorded simulation trace.
        out_base: Output path without suffix.
    """
    fig, ax = plt.subplots(figsize=(9, 4))
    ax.plot(trace.time, trace.velocity * 3.6, lw=2.0)
    ax.set_xlabel("t [s]")
    ax.set_ylabel("Speed [km/h]")
    ax.set_title("Speed Trace")
    ax.grid(True, alpha=0.3)
    _save_dual_format(fig, out_base)
    plt.close(fig)


def plot_battery_trace(trace: SimulationTrace, out_base: Path) -> None:
    """Plot remaining battery charge over time.

    Args:
        trace: Recorded simulation trace.
        out_base: Output path without suffix.
    """
    fig, ax = plt.subplots(figsize=(9, 4))
    ax.plot(trace.time, trace.battery_charge, lw=2.0, color="tab:green")
    ax.set_xlabel("t [s]")
    ax.set_ylabel("Battery [%]")
    ax.set_ylim(0.0, 105.0)
    ax.set_title("Battery Charge")
    ax.grid(True, alpha=0.3)
    _save_dual_format(fig, out_base)
    plt.close(fig)


def plot_energy_trace(trace: SimulationTrace, out_base: Path) -> None:
    """Plot cumulative battery energy with lap completions marked.

    Args:
        trace: Recorded simulation trace.
        out_base: Output path without suffix.
    """
    fig, ax = plt.subplots(figsize=(9, 4))
    ax.plot(trace.time, trace.total_energy, lw=2.0, color="tab:orange")
    lap_frames = trace.lap_count[1:] > trace.lap_count[:-1]
    for t_lap in trace.time[1:][lap_frames]:
        ax.axvline(t_lap, color="0.6", lw=0.8, ls="--")
    ax.set_xlabel("t [s]")
    ax.set_ylabel("Energy [J]")
    ax.set_title("Cumulative Battery Energy")
    ax.grid(True, alpha=0.3)
    _save_dual_format(fig, out_base)
    plt.close(fig)


def export_standard_plots(trace: SimulationTrace, output_dir: str | Path) -> None:
    """Create the standard plot set for a recorded run.

    Args:
        trace: Recorded simulation trace.
        output_dir: Directory receiving PNG and PDF files.
    """
    out_dir = Path(output_dir)
    plot_speed_trace(trace, out_dir / "speed_trace")
    plot_battery_trace(trace, out_dir / "battery_trace")
    plot_energy_trace(trace, out_dir / "energy_trace")
