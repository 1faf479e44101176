"""RC-car electrochemistry, electromagnetism and lap simulation core."""

from chargedup.chemistry.battery import BatteryCalculator, calculate_battery
from chargedup.electromagnetism.field import MagneticFieldCalculator, calculate_field
from chargedup.electromagnetism.motor import MotorSpeedEstimator, estimate_motor_speed
from chargedup.simulation.runner import run_simulation
from chargedup.simulation.simulator import VehicleSimulator

__all__ = [
    "BatteryCalculator",
    "MagneticFieldCalculator",
    "MotorSpeedEstimator",
    "VehicleSimulator",
    "calculate_battery",
    "calculate_field",
    "estimate_motor_speed",
    "run_simulation",
]
