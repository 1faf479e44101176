"""Battery charge, energy and voltage-sag calculations.

Two independent computation paths are provided. The stoichiometric path
derives charge from reactant masses of the alkaline reaction
``Zn + 2 MnO2 -> ZnO + Mn2O3``; the commercial path converts a rated
capacity in mAh into charge and energy for a series/parallel pack.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Any

from chargedup.chemistry.presets import BatteryPreset
from chargedup.utils.constants import (
    FARADAY,
    MAH_TO_COULOMB,
    MOLAR_MASS_MNO2,
    MOLAR_MASS_ZN,
    SECONDS_PER_HOUR,
)
from chargedup.utils.exceptions import ConfigurationError

ZINC = "Zn"
MANGANESE_DIOXIDE = "MnO2"
DEFAULT_ELECTRONS_PER_REACTION = 2
DEFAULT_CELL_VOLTAGE = 1.5
DEFAULT_TRANSFER_CURRENT = 0.5
STOICHIOMETRY_METHOD = "stoichiometry"
COMMERCIAL_METHOD = "commercial"
VALID_METHODS = (STOICHIOMETRY_METHOD, COMMERCIAL_METHOD)
RUNTIME_NOTE = "Approximate - actual runtime depends on discharge curve and cutoff voltage"


@dataclass(frozen=True)
class StoichiometryResult:
    """Charge and energy derived from reactant masses.

    Args:
        moles_zinc: Amount of zinc [mol].
        moles_manganese_dioxide: Amount of manganese dioxide [mol].
        limiting_reagent: Identifier of the limiting reagent.
        excess_reagent: Identifier of the reagent left over.
        excess_moles: Leftover amount of the excess reagent [mol].
        moles_reaction: Reaction extent [mol].
        moles_electrons: Electrons transferred [mol].
        charge: Total charge [C].
        voltage: Cell voltage used for the energy estimate [V].
        energy: Stored energy [J].
        capacity_mah: Equivalent capacity [mAh].
        electrons_per_reaction: Electrons transferred per reaction event.
    """

    moles_zinc: float
    moles_manganese_dioxide: float
    limiting_reagent: str
    excess_reagent: str
    excess_moles: float
    moles_reaction: float
    moles_electrons: float
    charge: float
    voltage: float
    energy: float
    capacity_mah: float
    electrons_per_reaction: int

    @property
    def energy_wh(self) -> float:
        """Stored energy in watt-hours.

        Returns:
            Energy [Wh].
        """
        return self.energy / SECONDS_PER_HOUR


@dataclass(frozen=True)
class CommercialCapacityResult:
    """Charge and energy of a pack built from commercially rated cells.

    Args:
        cell_capacity_mah: Rated capacity of one cell [mAh].
        cell_voltage: Nominal cell voltage [V].
        series_count: Number of cells in series.
        parallel_count: Number of parallel strings.
        pack_voltage: Nominal pack voltage [V].
        pack_capacity_mah: Pack capacity [mAh].
        charge: Pack charge [C].
        energy: Pack energy [J].
    """

    cell_capacity_mah: float
    cell_voltage: float
    series_count: int
    parallel_count: int
    pack_voltage: float
    pack_capacity_mah: float
    charge: float
    energy: float

    @property
    def cell_count(self) -> int:
        """Total number of cells in the pack.

        Returns:
            Product of series and parallel counts.
        """
        return self.series_count * self.parallel_count

    @property
    def energy_wh(self) -> float:
        """Pack energy in watt-hours.

        Returns:
            Energy [Wh].
        """
        return self.energy / SECONDS_PER_HOUR


@dataclass(frozen=True)
class LoadedVoltageResult:
    """Terminal voltage of a pack under load.

    Args:
        open_circuit_voltage: Unloaded pack voltage [V].
        loaded_voltage: Terminal voltage under load, floored at zero [V].
        voltage_drop: Drop across the internal resistance [V].
        current: Load current [A].
        internal_resistance: Pack internal resistance [ohm].
        power_loss: Resistive loss inside the pack [W].
    """

    open_circuit_voltage: float
    loaded_voltage: float
    voltage_drop: float
    current: float
    internal_resistance: float
    power_loss: float


@dataclass(frozen=True)
class RuntimeEstimate:
    """Constant-current runtime estimate.

    Args:
        hours: Runtime [h], ``inf`` when no current is drawn.
        minutes: Runtime [min], ``inf`` when no current is drawn.
        capacity_mah: Capacity used for the estimate [mAh].
        current: Load current [A].
        note: Caveat shown alongside the estimate.
    """

    hours: float
    minutes: float
    capacity_mah: float
    current: float
    note: str = RUNTIME_NOTE

    @property
    def is_unbounded(self) -> bool:
        """Whether the estimate represents an idle, non-draining pack.

        Returns:
            ``True`` if the runtime is infinite.
        """
        return math.isinf(self.hours)


@dataclass(frozen=True)
class BatteryPackAnalysis:
    """Combined pack result used to populate a battery results panel.

    Args:
        method: Calculation path, ``stoichiometry`` or ``commercial``.
        result: Result of the selected calculation path.
        pack_voltage: Nominal pack voltage [V].
        pack_capacity_mah: Capacity used for runtime estimation [mAh].
        pack_internal_resistance: Pack internal resistance [ohm].
        motor_current: Assumed motor current [A], zero when unknown.
        loaded: Loaded-voltage result, ``None`` without motor current.
        runtime: Runtime estimate, ``None`` without motor current.
    """

    method: str
    result: StoichiometryResult | CommercialCapacityResult
    pack_voltage: float
    pack_capacity_mah: float
    pack_internal_resistance: float
    motor_current: float
    loaded: LoadedVoltageResult | None
    runtime: RuntimeEstimate | None

    def physics_transfer(self) -> dict[str, float]:
        """Build the one-way payload copied into simulation parameters.

        Returns:
            Mapping of simulation parameter names to values. The motor
            current falls back to ``DEFAULT_TRANSFER_CURRENT`` when none was
            supplied.
        """
        current = self.motor_current if self.motor_current > 0.0 else DEFAULT_TRANSFER_CURRENT
        transfer = {
            "battery_voltage": self.pack_voltage,
            "battery_current": current,
            "internal_resistance": self.pack_internal_resistance,
        }
        if self.pack_capacity_mah > 0.0:
            transfer["battery_capacity"] = self.pack_capacity_mah
        return transfer


def _is_real(value: object) -> bool:
    """Check for a real scalar, excluding booleans.

    Args:
        value: Candidate input.

    Returns:
        ``True`` for Python and numpy real numbers.
    """
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _validate_non_negative(name: str, value: float) -> None:
    """Validate that a scalar input is finite and not negative.

    Args:
        name: Parameter name used in error messages.
        value: Parameter value to validate.

    Raises:
        chargedup.utils.exceptions.ConfigurationError: If ``value`` is
            not a finite, non-negative real number.
    """
    if not _is_real(value) or not math.isfinite(value) or value < 0.0:
        msg = f"{name} must be a finite, non-negative number"
        raise ConfigurationError(msg)


def _validate_positive(name: str, value: float) -> None:
    """Validate that a scalar input is finite and strictly positive.

    Args:
        name: Parameter name used in error messages.
        value: Parameter value to validate.

    Raises:
        chargedup.utils.exceptions.ConfigurationError: If ``value`` is not
            a strictly positive real number.
    """
    if not _is_real(value) or not math.isfinite(value) or value <= 0.0:
        msg = f"{name} must be positive"
        raise ConfigurationError(msg)


def _validate_count(name: str, value: int) -> None:
    """Validate a positive integer count.

    Args:
        name: Parameter name used in error messages.
        value: Count to validate.

    Raises:
        chargedup.utils.exceptions.ConfigurationError: If ``value`` is not a
            positive integer.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 1:
        msg = f"{name} must be a positive integer"
        raise ConfigurationError(msg)


def full_capacity_energy(voltage: float, capacity_mah: float) -> float:
    """Energy stored in a full pack.

    Args:
        voltage: Pack voltage [V].
        capacity_mah: Pack capacity [mAh].

    Returns:
        Full-charge energy ``V * mAh * 3.6`` [J].
    """
    return voltage * capacity_mah * MAH_TO_COULOMB


def remaining_charge_percent(consumed_energy: float, full_energy: float) -> float:
    """State of charge after drawing energy from a full pack.

    Args:
        consumed_energy: Energy drawn since the pack was full [J].
        full_energy: Full-charge energy [J].

    Returns:
        Remaining charge in percent, floored at zero.
    """
    return max(0.0, 100.0 - consumed_energy / full_energy * 100.0)


def pack_internal_resistance(
    cell_resistance: float,
    series_count: int,
    parallel_count: int,
) -> float:
    """Internal resistance of a series/parallel pack.

    Args:
        cell_resistance: Internal resistance of one cell [ohm].
        series_count: Number of cells in series.
        parallel_count: Number of parallel strings.

    Returns:
        Pack internal resistance [ohm].
    """
    return cell_resistance * series_count / parallel_count


class BatteryCalculator:
    """Stateless battery calculator with stoichiometric and commercial paths."""

    def calculate_from_mass(
        self,
        zinc_mass: float,
        manganese_dioxide_mass: float,
        voltage: float = DEFAULT_CELL_VOLTAGE,
        electrons_per_reaction: int = DEFAULT_ELECTRONS_PER_REACTION,
    ) -> StoichiometryResult:
        """Compute charge and energy from reactant masses.

        Zinc and manganese dioxide react in a 1:2 ratio. Zinc is treated as
        limiting when ``moles_zinc <= moles_manganese_dioxide / 2``, so an
        exact stoichiometric match resolves to zinc.

        Args:
            zinc_mass: Zinc mass [g].
            manganese_dioxide_mass: Manganese dioxide mass [g].
            voltage: Cell voltage [V].
            electrons_per_reaction: Electrons transferred per reaction event.

        Returns:
            Stoichiometric charge, energy and capacity.

        Raises:
            chargedup.utils.exceptions.ConfigurationError: If a mass is
                negative, the voltage is not positive, or the electron count
                is not a positive integer.
        """
        _validate_non_negative("zinc_mass", zinc_mass)
        _validate_non_negative("manganese_dioxide_mass", manganese_dioxide_mass)
        _validate_positive("voltage", voltage)
        _validate_count("electrons_per_reaction", electrons_per_reaction)
        electrons_per_reaction = int(electrons_per_reaction)

        moles_zinc = zinc_mass / MOLAR_MASS_ZN
        moles_mno2 = manganese_dioxide_mass / MOLAR_MASS_MNO2

        zinc_needed = moles_mno2 / 2.0
        if moles_zinc <= zinc_needed:
            limiting, excess = ZINC, MANGANESE_DIOXIDE
            moles_reaction = moles_zinc
            excess_moles = moles_mno2 - 2.0 * moles_zinc
        else:
            limiting, excess = MANGANESE_DIOXIDE, ZINC
            moles_reaction = moles_mno2 / 2.0
            excess_moles = moles_zinc - zinc_needed

        moles_electrons = moles_reaction * electrons_per_reaction
        charge = moles_electrons * FARADAY

        return StoichiometryResult(
            moles_zinc=moles_zinc,
            moles_manganese_dioxide=moles_mno2,
            limiting_reagent=limiting,
            excess_reagent=excess,
            excess_moles=excess_moles,
            moles_reaction=moles_reaction,
            moles_electrons=moles_electrons,
            charge=charge,
            voltage=voltage,
            energy=voltage * charge,
            capacity_mah=charge / MAH_TO_COULOMB,
            electrons_per_reaction=electrons_per_reaction,
        )

    def calculate_from_capacity(
        self,
        capacity_mah: float,
        cell_voltage: float,
        series_count: int = 1,
        parallel_count: int = 1,
    ) -> CommercialCapacityResult:
        """Compute pack charge and energy from a rated cell capacity.

        Args:
            capacity_mah: Rated cell capacity [mAh].
            cell_voltage: Nominal cell voltage [V].
            series_count: Number of cells in series.
            parallel_count: Number of parallel strings.

        Returns:
            Pack voltage, capacity, charge and energy.

        Raises:
            chargedup.utils.exceptions.ConfigurationError: If the capacity is
                negative, the voltage is not positive, or a count is invalid.
        """
        _validate_non_negative("capacity_mah", capacity_mah)
        _validate_positive("cell_voltage", cell_voltage)
        _validate_count("series_count", series_count)
        _validate_count("parallel_count", parallel_count)
        series_count, parallel_count = int(series_count), int(parallel_count)

        cell_charge = capacity_mah / 1000.0 * SECONDS_PER_HOUR
        pack_voltage = cell_voltage * series_count
        pack_charge = cell_charge * parallel_count

        return CommercialCapacityResult(
            cell_capacity_mah=capacity_mah,
            cell_voltage=cell_voltage,
            series_count=series_count,
            parallel_count=parallel_count,
            pack_voltage=pack_voltage,
            pack_capacity_mah=capacity_mah * parallel_count,
            charge=pack_charge,
            energy=pack_voltage * pack_charge,
        )

    def calculate_loaded_voltage(
        self,
        open_circuit_voltage: float,
        current: float,
        internal_resistance: float,
    ) -> LoadedVoltageResult:
        """Compute terminal voltage under load (voltage sag).

        Args:
            open_circuit_voltage: Unloaded pack voltage [V].
            current: Load current [A].
            internal_resistance: Pack internal resistance [ohm].

        Returns:
            Loaded voltage, clamped at zero for a collapsed pack, and the
            resistive power loss.
        """
        voltage_drop = current * internal_resistance
        return LoadedVoltageResult(
            open_circuit_voltage=open_circuit_voltage,
            loaded_voltage=max(0.0, open_circuit_voltage - voltage_drop),
            voltage_drop=voltage_drop,
            current=current,
            internal_resistance=internal_resistance,
            power_loss=current * current * internal_resistance,
        )

    def estimate_runtime(self, capacity_mah: float, current: float) -> RuntimeEstimate:
        """Estimate runtime at constant current.

        Args:
            capacity_mah: Available capacity [mAh].
            current: Load current [A].

        Returns:
            Runtime estimate. A non-positive current yields an unbounded
            estimate instead of an error.
        """
        if current <= 0.0:
            return RuntimeEstimate(
                hours=math.inf,
                minutes=math.inf,
                capacity_mah=capacity_mah,
                current=current,
            )
        hours = capacity_mah / 1000.0 / current
        return RuntimeEstimate(
            hours=hours,
            minutes=hours * 60.0,
            capacity_mah=capacity_mah,
            current=current,
        )

    def analyze_pack(
        self,
        *,
        method: str,
        cell_voltage: float,
        series_count: int = 1,
        parallel_count: int = 1,
        cell_internal_resistance: float = 0.0,
        motor_current: float = 0.0,
        capacity_mah: float | None = None,
        zinc_mass: float | None = None,
        manganese_dioxide_mass: float | None = None,
    ) -> BatteryPackAnalysis:
        """Run one calculation path and derive pack-level load figures.

        Args:
            method: ``stoichiometry`` or ``commercial``.
            cell_voltage: Nominal cell voltage [V].
            series_count: Number of cells in series.
            parallel_count: Number of parallel strings.
            cell_internal_resistance: Internal resistance of one cell [ohm].
            motor_current: Expected motor current [A]; loaded voltage and
                runtime are only computed when positive.
            capacity_mah: Rated cell capacity [mAh] for the commercial path.
            zinc_mass: Zinc mass [g] for the stoichiometric path.
            manganese_dioxide_mass: MnO2 mass [g] for the stoichiometric path.

        Returns:
            Combined pack analysis.

        Raises:
            chargedup.utils.exceptions.ConfigurationError: If the method is
                unknown or its required inputs are missing or invalid.
        """
        _validate_count("series_count", series_count)
        _validate_count("parallel_count", parallel_count)
        series_count, parallel_count = int(series_count), int(parallel_count)
        _validate_non_negative("cell_internal_resistance", cell_internal_resistance)

        result: StoichiometryResult | CommercialCapacityResult
        if method == STOICHIOMETRY_METHOD:
            if zinc_mass is None or manganese_dioxide_mass is None:
                msg = "stoichiometry method requires zinc_mass and manganese_dioxide_mass"
                raise ConfigurationError(msg)
            result = self.calculate_from_mass(zinc_mass, manganese_dioxide_mass, cell_voltage)
            pack_capacity = result.capacity_mah
        elif method == COMMERCIAL_METHOD:
            if capacity_mah is None:
                msg = "commercial method requires capacity_mah"
                raise ConfigurationError(msg)
            result = self.calculate_from_capacity(
                capacity_mah, cell_voltage, series_count, parallel_count
            )
            pack_capacity = result.pack_capacity_mah
        else:
            msg = f"method must be one of {VALID_METHODS}, got: {method!r}"
            raise ConfigurationError(msg)

        pack_voltage = cell_voltage * series_count
        pack_resistance = pack_internal_resistance(
            cell_internal_resistance, series_count, parallel_count
        )

        loaded = None
        runtime = None
        if motor_current > 0.0:
            loaded = self.calculate_loaded_voltage(pack_voltage, motor_current, pack_resistance)
            runtime = self.estimate_runtime(pack_capacity, motor_current)

        return BatteryPackAnalysis(
            method=method,
            result=result,
            pack_voltage=pack_voltage,
            pack_capacity_mah=pack_capacity,
            pack_internal_resistance=pack_resistance,
            motor_current=max(motor_current, 0.0),
            loaded=loaded,
            runtime=runtime,
        )

    def analyze_preset(
        self,
        preset: BatteryPreset,
        motor_current: float = 0.0,
    ) -> BatteryPackAnalysis:
        """Analyze a named battery preset.

        Args:
            preset: Battery preset to analyze.
            motor_current: Expected motor current [A].

        Returns:
            Combined pack analysis for the preset.
        """
        cell_resistance = (
            preset.internal_resistance * preset.parallel_count / preset.series_count
        )
        return self.analyze_pack(
            method=STOICHIOMETRY_METHOD if preset.uses_stoichiometry else COMMERCIAL_METHOD,
            cell_voltage=preset.cell_voltage,
            series_count=preset.series_count,
            parallel_count=preset.parallel_count,
            cell_internal_resistance=cell_resistance,
            motor_current=motor_current,
            capacity_mah=preset.capacity_mah,
            zinc_mass=preset.zinc_mass,
            manganese_dioxide_mass=preset.manganese_dioxide_mass,
        )


def calculate_battery(
    method: str,
    calculator: BatteryCalculator | None = None,
    **inputs: Any,
) -> StoichiometryResult | CommercialCapacityResult:
    """Dispatch a battery calculation by method name.

    Args:
        method: ``stoichiometry`` or ``commercial``.
        calculator: Optional calculator instance; a fresh one is used if
            omitted.
        **inputs: Keyword arguments of the selected calculation path.

    Returns:
        Result of the selected calculation path.

    Raises:
        chargedup.utils.exceptions.ConfigurationError: If ``method`` is
            unknown or its inputs are invalid.
    """
    engine = calculator or BatteryCalculator()
    if method == STOICHIOMETRY_METHOD:
        return engine.calculate_from_mass(**inputs)
    if method == COMMERCIAL_METHOD:
        return engine.calculate_from_capacity(**inputs)
    msg = f"method must be one of {VALID_METHODS}, got: {method!r}"
    raise ConfigurationError(msg)
