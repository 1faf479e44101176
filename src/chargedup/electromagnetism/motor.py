"""Simplified brushed DC motor current and speed estimates.

The speed model is an educational proportional approximation,
``rpm ~ (V - I R_a)``, scaled by the supply-to-rated voltage ratio. It makes
no claim to physical accuracy; its coefficients are kept fixed so that
results stay comparable across presets.
"""

from __future__ import annotations

from dataclasses import dataclass

from chargedup.utils.exceptions import ConfigurationError

MAX_VOLTAGE_RATIO = 1.5
GAUGE_FALLBACK_RPM = 6000.0
SPEED_NOTE = "Simple proportional model: RPM ~ (V - IR)"
NOT_A_MOTOR_NOTE = "Not a rotating motor"
INVALID_RESISTANCE_NOTE = "Invalid resistance"
LOADED_CURRENT_NOTE = "Simplified steady-state model (ignores back-EMF at startup)"


@dataclass(frozen=True)
class MotorPreset:
    """Motor or coil configuration preset.

    Args:
        name: Human-readable preset name.
        armature_resistance: Armature winding resistance [ohm].
        coil_turns: Number of coil turns.
        coil_radius: Coil radius [m].
        coil_length: Coil length [m].
        rated_voltage: Rated supply voltage [V].
        no_load_rpm: No-load speed at rated voltage [rpm], ``None`` for
            non-rotating coils.
        description: Short description of the preset.
    """

    name: str
    armature_resistance: float
    coil_turns: int
    coil_radius: float
    coil_length: float
    rated_voltage: float
    no_load_rpm: float | None
    description: str = ""

    @property
    def is_motor(self) -> bool:
        """Whether the preset describes a rotating motor.

        Returns:
            ``True`` if a positive no-load speed is defined.
        """
        return bool(self.no_load_rpm)

    def validate(self) -> None:
        """Validate preset values before estimation.

        Raises:
            chargedup.utils.exceptions.ConfigurationError: If the rated
                voltage is not positive or the armature resistance is
                negative.
        """
        if self.rated_voltage <= 0.0:
            msg = "rated_voltage must be positive"
            raise ConfigurationError(msg)
        if self.armature_resistance < 0.0:
            msg = "armature_resistance must be non-negative"
            raise ConfigurationError(msg)


MOTOR_PRESETS: dict[str, MotorPreset] = {
    "small-dc-motor": MotorPreset(
        name="Small Brushed DC Motor (RC Toy)",
        armature_resistance=3.0,
        coil_turns=50,
        coil_radius=0.01,
        coil_length=0.02,
        rated_voltage=6.0,
        no_load_rpm=6000.0,
        description="Typical motor found in small RC cars",
    ),
    "hobby-motor": MotorPreset(
        name="Hobby Motor (540 size)",
        armature_resistance=0.5,
        coil_turns=30,
        coil_radius=0.018,
        coil_length=0.035,
        rated_voltage=7.2,
        no_load_rpm=15000.0,
        description="Common in 1:10 scale RC vehicles",
    ),
    "demo-solenoid": MotorPreset(
        name="Demo Coil/Solenoid",
        armature_resistance=2.0,
        coil_turns=100,
        coil_radius=0.015,
        coil_length=0.05,
        rated_voltage=6.0,
        no_load_rpm=None,
        description="For B-field demonstration",
    ),
}
DEFAULT_MOTOR_PRESET = "small-dc-motor"


def get_motor_preset(key: str) -> MotorPreset:
    """Look up a motor preset by key.

    Args:
        key: Preset slug, e.g. ``"hobby-motor"``.

    Returns:
        Matching motor preset.

    Raises:
        chargedup.utils.exceptions.ConfigurationError: If ``key`` is unknown.
    """
    try:
        return MOTOR_PRESETS[key]
    except KeyError as exc:
        msg = f"unknown motor preset {key!r}, expected one of {sorted(MOTOR_PRESETS)}"
        raise ConfigurationError(msg) from exc


@dataclass(frozen=True)
class LoadedCurrentResult:
    """Steady-state current through motor and battery resistance.

    Args:
        current: Circuit current [A]; zero for a degenerate circuit.
        supply_voltage: Supply voltage [V].
        motor_resistance: Motor winding resistance [ohm].
        internal_resistance: Battery internal resistance [ohm].
        total_resistance: Series resistance of the circuit [ohm].
        motor_power: Power dissipated in the motor winding [W].
        power_loss: Power lost inside the battery [W].
        is_degenerate: ``True`` when the total resistance is not positive.
        note: Explanation attached to the result.
    """

    current: float
    supply_voltage: float
    motor_resistance: float
    internal_resistance: float
    total_resistance: float
    motor_power: float = 0.0
    power_loss: float = 0.0
    is_degenerate: bool = False
    note: str = LOADED_CURRENT_NOTE


@dataclass(frozen=True)
class SpeedEstimate:
    """Approximate motor speed.

    Args:
        rpm: Estimated speed [rpm], ``None`` when the preset is not a motor.
        speed_ratio: Effective-to-rated voltage ratio, clamped at zero.
        voltage_ratio: Supply-to-rated voltage ratio, capped at 1.5.
        effective_voltage: Supply voltage minus armature drop [V].
        back_emf_voltage: Armature drop ``I * R_a`` [V].
        note: Model caveat.
    """

    rpm: float | None
    speed_ratio: float | None = None
    voltage_ratio: float | None = None
    effective_voltage: float | None = None
    back_emf_voltage: float | None = None
    note: str = SPEED_NOTE

    @property
    def speed_percent(self) -> float | None:
        """Speed ratio expressed in percent.

        Returns:
            Percentage of rated no-load speed, or ``None`` for non-motors.
        """
        if self.speed_ratio is None:
            return None
        return self.speed_ratio * 100.0


class MotorSpeedEstimator:
    """Loaded-current and speed estimator bound to one motor preset.

    Args:
        preset: Motor preset used for speed estimation.
    """

    def __init__(self, preset: MotorPreset | None = None) -> None:
        """Bind the estimator to a preset.

        Args:
            preset: Motor preset; defaults to the small RC-toy motor.
        """
        self.preset = preset or MOTOR_PRESETS[DEFAULT_MOTOR_PRESET]
        self.preset.validate()

    def compute_loaded_current(
        self,
        supply_voltage: float,
        motor_resistance: float,
        internal_resistance: float = 0.0,
    ) -> LoadedCurrentResult:
        """Compute ``I = V / (R_motor + R_internal)``.

        Args:
            supply_voltage: Supply voltage [V].
            motor_resistance: Motor winding resistance [ohm].
            internal_resistance: Battery internal resistance [ohm].

        Returns:
            Loaded current. A non-positive total resistance yields a
            zero-current result flagged as degenerate.
        """
        total_resistance = motor_resistance + internal_resistance
        if total_resistance <= 0.0:
            return LoadedCurrentResult(
                current=0.0,
                supply_voltage=supply_voltage,
                motor_resistance=motor_resistance,
                internal_resistance=internal_resistance,
                total_resistance=total_resistance,
                is_degenerate=True,
                note=INVALID_RESISTANCE_NOTE,
            )

        current = supply_voltage / total_resistance
        return LoadedCurrentResult(
            current=current,
            supply_voltage=supply_voltage,
            motor_resistance=motor_resistance,
            internal_resistance=internal_resistance,
            total_resistance=total_resistance,
            motor_power=current * current * motor_resistance,
            power_loss=current * current * internal_resistance,
        )

    def estimate_speed(self, current: float, supply_voltage: float) -> SpeedEstimate:
        """Estimate motor speed with the proportional back-EMF model.

        Args:
            current: Motor current [A].
            supply_voltage: Supply voltage [V].

        Returns:
            Speed estimate; ``rpm`` is ``None`` for presets without a
            no-load speed.
        """
        preset = self.preset
        if not preset.is_motor:
            return SpeedEstimate(rpm=None, note=NOT_A_MOTOR_NOTE)

        voltage_ratio = min(supply_voltage / preset.rated_voltage, MAX_VOLTAGE_RATIO)
        back_emf_voltage = current * preset.armature_resistance
        effective_voltage = supply_voltage - back_emf_voltage
        speed_ratio = max(0.0, effective_voltage / preset.rated_voltage)
        rpm = float(preset.no_load_rpm or 0.0) * speed_ratio * voltage_ratio

        return SpeedEstimate(
            rpm=rpm,
            speed_ratio=speed_ratio,
            voltage_ratio=voltage_ratio,
            effective_voltage=effective_voltage,
            back_emf_voltage=back_emf_voltage,
        )

    def gauge_angle(self, rpm: float) -> float:
        """Map a speed onto a half-circle dial.

        Args:
            rpm: Motor speed [rpm].

        Returns:
            Dial angle in degrees, from -90 (stopped) to 90 (no-load speed).
        """
        max_rpm = self.preset.no_load_rpm or GAUGE_FALLBACK_RPM
        ratio = min(rpm / max_rpm, 1.0)
        return -90.0 + ratio * 180.0


def estimate_motor_speed(
    current: float,
    supply_voltage: float,
    preset: MotorPreset | str = DEFAULT_MOTOR_PRESET,
) -> SpeedEstimate:
    """Estimate motor speed for a preset without keeping an estimator.

    Args:
        current: Motor current [A].
        supply_voltage: Supply voltage [V].
        preset: Motor preset or preset key.

    Returns:
        Speed estimate for the preset.

    Raises:
        chargedup.utils.exceptions.ConfigurationError: If the preset key is
            unknown or the preset is invalid.
    """
    resolved = get_motor_preset(preset) if isinstance(preset, str) else preset
    return MotorSpeedEstimator(resolved).estimate_speed(current, supply_voltage)
