"""Magnetic field formulas and DC motor estimates."""

from chargedup.electromagnetism.field import (
    FieldResult,
    MagneticFieldCalculator,
    calculate_field,
    resolve_relative_permeability,
)
from chargedup.electromagnetism.motor import (
    MOTOR_PRESETS,
    LoadedCurrentResult,
    MotorPreset,
    MotorSpeedEstimator,
    SpeedEstimate,
    estimate_motor_speed,
    get_motor_preset,
)

__all__ = [
    "MOTOR_PRESETS",
    "FieldResult",
    "LoadedCurrentResult",
    "MagneticFieldCalculator",
    "MotorPreset",
    "MotorSpeedEstimator",
    "SpeedEstimate",
    "calculate_field",
    "estimate_motor_speed",
    "get_motor_preset",
    "resolve_relative_permeability",
]
