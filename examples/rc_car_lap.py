"""Size a battery pack, hand it to the RC car and record a lapping run."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from chargedup.analysis import (
    compute_run_summary,
    export_standard_plots,
    export_summary_json,
    export_trace_csv,
)
from chargedup.chemistry import BATTERY_PRESETS, BatteryCalculator, get_battery_preset
from chargedup.electromagnetism import MOTOR_PRESETS, MotorSpeedEstimator, get_motor_preset
from chargedup.simulation import VehicleSimulator, build_simulation_parameters, run_simulation
from chargedup.utils import configure_logging

DEFAULT_OUTPUT_DIR = Path(__file__).resolve().parent / "output" / "rc_car_lap"


def _parse_args() -> argparse.Namespace:
    """Parse command-line options for the lapping example.

    Returns:
        Parsed command-line namespace.
    """
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--battery", choices=sorted(BATTERY_PRESETS), default="4aa-alkaline")
    parser.add_argument("--motor", choices=sorted(MOTOR_PRESETS), default="small-dc-motor")
    parser.add_argument("--throttle", type=float, default=1.0)
    parser.add_argument("--duration", type=float, default=60.0, help="Simulated time [s].")
    parser.add_argument("--output-dir", type=Path, default=DEFAULT_OUTPUT_DIR)
    parser.add_argument("--progress", action="store_true", help="Show a progress bar.")
    return parser.parse_args()


def main() -> None:
    """Run one battery-sized lapping session and export plots, CSV and JSON."""
    args = _parse_args()
    configure_logging(logging.INFO)
    logger = logging.getLogger("rc_car_example")

    battery = get_battery_preset(args.battery)
    motor = MotorSpeedEstimator(get_motor_preset(args.motor))
    loaded = motor.compute_loaded_current(
        battery.pack_voltage,
        motor.preset.armature_resistance,
        battery.internal_resistance,
    )
    analysis = BatteryCalculator().analyze_preset(battery, loaded.current)
    logger.info(
        "%s on %s: %.2f A loaded current, %.2f V under load",
        motor.preset.name,
        battery.name,
        loaded.current,
        analysis.loaded.loaded_voltage if analysis.loaded is not None else battery.pack_voltage,
    )

    simulator = VehicleSimulator(parameters=build_simulation_parameters())
    simulator.apply_battery_transfer(analysis.physics_transfer())
    simulator.set_parameters(throttle=args.throttle)

    trace = run_simulation(
        simulator,
        duration=args.duration,
        progress_prefix="rc-car" if args.progress else None,
    )
    summary = compute_run_summary(trace)

    export_standard_plots(trace, args.output_dir)
    export_summary_json(summary, args.output_dir / "summary.json")
    export_trace_csv(trace, args.output_dir / "trace.csv")

    logger.info("Laps: %d", summary.lap_count)
    if summary.best_lap_time is not None:
        logger.info("Best lap: %.2f s", summary.best_lap_time)
    logger.info(
        "Mean speed: %.2f km/h | Max speed: %.2f km/h",
        summary.mean_speed * 3.6,
        summary.max_speed * 3.6,
    )
    logger.info(
        "Energy drawn: %.1f J (%.3f Wh) | Battery left: %.1f%%",
        summary.total_energy,
        summary.total_energy_wh,
        summary.final_battery_charge,
    )


if __name__ == "__main__":
    main()
