"""Utility helpers."""

from chargedup.utils.constants import FARADAY, GRAVITY, MU_0
from chargedup.utils.exceptions import ChargedUpError, ConfigurationError
from chargedup.utils.logging import configure_logging

__all__ = [
    "FARADAY",
    "GRAVITY",
    "MU_0",
    "ChargedUpError",
    "ConfigurationError",
    "configure_logging",
]
