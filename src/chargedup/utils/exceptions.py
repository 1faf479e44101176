"""Custom exceptions for the RC-car physics core."""


class ChargedUpError(Exception):
    """Base exception for calculator and simulation errors."""


class ConfigurationError(ChargedUpError):
    """Raised when calculator inputs or simulation parameters are invalid."""
