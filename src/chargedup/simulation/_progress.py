"""Simulated-time progress bar for long fixed-cadence runs."""

from __future__ import annotations

import sys

import numpy as np

PROGRESS_BAR_WIDTH = 30
PROGRESS_FRACTION_STEP = 0.10


def maybe_emit_time_progress(
    *,
    progress_prefix: str | None,
    elapsed: float,
    duration: float,
    next_fraction_threshold: float,
    fraction_step: float = PROGRESS_FRACTION_STEP,
) -> float:
    """Redraw the stderr progress bar once a new fraction of the run is covered.

    The bar is redrawn in place; the final update at full completion ends
    the line.

    Args:
        progress_prefix: Label shown before the bar; ``None`` disables output.
        elapsed: Simulated time covered so far [s].
        duration: Total simulated time requested [s].
        next_fraction_threshold: Completion fraction that triggers the next
            redraw.
        fraction_step: Fraction between two redraws.

    Returns:
        Threshold for the next redraw.
    """
    if progress_prefix is None or duration <= 0.0:
        return next_fraction_threshold

    fraction = float(np.clip(elapsed / duration, 0.0, 1.0))
    done = fraction >= 1.0
    if fraction < next_fraction_threshold and not done:
        return next_fraction_threshold

    filled = int(fraction * PROGRESS_BAR_WIDTH)
    bar = "#" * filled + "-" * (PROGRESS_BAR_WIDTH - filled)
    sys.stderr.write(
        f"\r{progress_prefix} [{bar}] {100.0 * fraction:5.1f}% "
        f"t={elapsed:.1f}/{duration:.1f} s" + ("\n" if done else "")
    )
    sys.stderr.flush()

    threshold = next_fraction_threshold
    while threshold <= fraction:
        threshold += fraction_step
    return threshold
