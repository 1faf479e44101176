"""Battery chemistry calculators and presets."""

from chargedup.chemistry.battery import (
    BatteryCalculator,
    BatteryPackAnalysis,
    CommercialCapacityResult,
    LoadedVoltageResult,
    RuntimeEstimate,
    StoichiometryResult,
    calculate_battery,
    full_capacity_energy,
    pack_internal_resistance,
    remaining_charge_percent,
)
from chargedup.chemistry.presets import BATTERY_PRESETS, BatteryPreset, get_battery_preset

__all__ = [
    "BATTERY_PRESETS",
    "BatteryCalculator",
    "BatteryPackAnalysis",
    "BatteryPreset",
    "CommercialCapacityResult",
    "LoadedVoltageResult",
    "RuntimeEstimate",
    "StoichiometryResult",
    "calculate_battery",
    "full_capacity_energy",
    "get_battery_preset",
    "pack_internal_resistance",
    "remaining_charge_percent",
]
