"""Logging setup for scripts and examples driving the simulator."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
NOISY_LOGGERS = ("matplotlib", "PIL")


def configure_logging(
    level: int = logging.INFO,
    *,
    third_party_level: int = logging.WARNING,
) -> None:
    """Route ``chargedup`` log records to stderr for command-line runs.

    Plotting libraries log font and image handling at DEBUG; they are held
    at ``third_party_level`` so a verbose run shows simulator records only.

    Args:
        level: Root logger level, e.g. ``logging.DEBUG`` to see per-lap
            records.
        third_party_level: Level applied to the plotting stack's loggers.
    """
    logging.basicConfig(level=level, format=LOG_FORMAT)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, third_party_level))
