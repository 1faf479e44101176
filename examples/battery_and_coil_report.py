"""Report battery capacity, motor speed and coil field for one setup."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from pathlib import Path

from chargedup.chemistry import BatteryCalculator
from chargedup.electromagnetism import MagneticFieldCalculator, MotorSpeedEstimator, get_motor_preset
from chargedup.utils import configure_logging

DEFAULT_OUTPUT_PATH = Path(__file__).resolve().parent / "output" / "battery_and_coil_report.json"


def _parse_args() -> argparse.Namespace:
    """Parse command-line options for the report.

    Returns:
        Parsed command-line namespace.
    """
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--zinc-mass", type=float, default=1.0, help="Zinc mass [g].")
    parser.add_argument("--mno2-mass", type=float, default=2.0, help="MnO2 mass [g].")
    parser.add_argument("--series", type=int, default=4, help="Cells in series.")
    parser.add_argument("--motor", default="small-dc-motor")
    parser.add_argument("--core", default="air", help="Coil core material.")
    parser.add_argument("--output", type=Path, default=DEFAULT_OUTPUT_PATH)
    return parser.parse_args()


def main() -> None:
    """Compute the report and write it as JSON."""
    args = _parse_args()
    configure_logging(logging.INFO)
    logger = logging.getLogger("battery_coil_report")

    calculator = BatteryCalculator()
    cell = calculator.calculate_from_mass(args.zinc_mass, args.mno2_mass)
    logger.info(
        "Cell: %s limiting, %.0f C, %.0f mAh, %.3f Wh",
        cell.limiting_reagent,
        cell.charge,
        cell.capacity_mah,
        cell.energy_wh,
    )

    pack = calculator.calculate_from_capacity(cell.capacity_mah, cell.voltage, args.series)
    motor = MotorSpeedEstimator(get_motor_preset(args.motor))
    loaded = motor.compute_loaded_current(pack.pack_voltage, motor.preset.armature_resistance)
    speed = motor.estimate_speed(loaded.current, pack.pack_voltage)
    runtime = calculator.estimate_runtime(pack.pack_capacity_mah, loaded.current)
    field = MagneticFieldCalculator().solenoid(
        motor.preset.coil_turns,
        loaded.current,
        motor.preset.coil_length,
        material=args.core,
    )

    if speed.rpm is not None:
        logger.info("Motor: %.0f rpm at %.2f A", speed.rpm, loaded.current)
    logger.info("Runtime: %.1f min", runtime.minutes)
    logger.info("Coil field: %.3f mT (%s)", field.millitesla, field.formula)

    report = {
        "cell": asdict(cell),
        "pack": asdict(pack),
        "loaded_current": asdict(loaded),
        "speed": asdict(speed),
        "runtime": asdict(runtime),
        "field": asdict(field),
    }
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(json.dumps(report, indent=2), encoding="utf-8")


if __name__ == "__main__":
    main()
