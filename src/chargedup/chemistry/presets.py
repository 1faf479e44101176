"""Named battery presets for AA alkaline and NiMH packs."""

from __future__ import annotations

from dataclasses import dataclass

from chargedup.utils.constants import (
    AA_CAPACITY_MAH,
    ALKALINE_CELL_VOLTAGE,
    ALKALINE_INTERNAL_RESISTANCE,
    NIMH_CELL_VOLTAGE,
    NIMH_INTERNAL_RESISTANCE,
)
from chargedup.utils.exceptions import ConfigurationError


@dataclass(frozen=True)
class BatteryPreset:
    """Battery configuration preset.

    Args:
        name: Human-readable preset name.
        chemistry: Cell chemistry identifier (``alkaline`` or ``nimh``).
        series_count: Number of cells in series.
        parallel_count: Number of parallel strings.
        cell_voltage: Nominal cell voltage [V].
        capacity_mah: Commercial cell capacity [mAh], ``None`` for
            stoichiometry presets.
        internal_resistance: Pack internal resistance [ohm].
        zinc_mass: Zinc anode mass [g], ``None`` for commercial presets.
        manganese_dioxide_mass: MnO2 cathode mass [g], ``None`` for
            commercial presets.
    """

    name: str
    chemistry: str
    series_count: int
    parallel_count: int
    cell_voltage: float
    capacity_mah: float | None
    internal_resistance: float
    zinc_mass: float | None = None
    manganese_dioxide_mass: float | None = None

    @property
    def cell_count(self) -> int:
        """Total number of cells in the pack.

        Returns:
            Product of series and parallel counts.
        """
        return self.series_count * self.parallel_count

    @property
    def pack_voltage(self) -> float:
        """Nominal open-circuit pack voltage.

        Returns:
            Cell voltage times series count [V].
        """
        return self.cell_voltage * self.series_count

    @property
    def uses_stoichiometry(self) -> bool:
        """Whether the preset is defined by reactant masses.

        Returns:
            ``True`` if the preset carries zinc mass data.
        """
        return self.zinc_mass is not None


BATTERY_PRESETS: dict[str, BatteryPreset] = {
    "single-aa-alkaline": BatteryPreset(
        name="Single AA Alkaline",
        chemistry="alkaline",
        series_count=1,
        parallel_count=1,
        cell_voltage=ALKALINE_CELL_VOLTAGE,
        capacity_mah=AA_CAPACITY_MAH,
        internal_resistance=ALKALINE_INTERNAL_RESISTANCE,
    ),
    "4aa-alkaline": BatteryPreset(
        name="4xAA Alkaline Pack (Series)",
        chemistry="alkaline",
        series_count=4,
        parallel_count=1,
        cell_voltage=ALKALINE_CELL_VOLTAGE,
        capacity_mah=AA_CAPACITY_MAH,
        internal_resistance=4 * ALKALINE_INTERNAL_RESISTANCE,
    ),
    "4aa-nimh": BatteryPreset(
        name="4xAA NiMH Pack (Series)",
        chemistry="nimh",
        series_count=4,
        parallel_count=1,
        cell_voltage=NIMH_CELL_VOLTAGE,
        capacity_mah=AA_CAPACITY_MAH,
        internal_resistance=4 * NIMH_INTERNAL_RESISTANCE,
    ),
    "stoichiometry-example": BatteryPreset(
        name="Stoichiometry Example (1g Zn, 2g MnO2)",
        chemistry="alkaline",
        series_count=1,
        parallel_count=1,
        cell_voltage=ALKALINE_CELL_VOLTAGE,
        capacity_mah=None,
        internal_resistance=ALKALINE_INTERNAL_RESISTANCE,
        zinc_mass=1.0,
        manganese_dioxide_mass=2.0,
    ),
}


def get_battery_preset(key: str) -> BatteryPreset:
    """Look up a battery preset by key.

    Args:
        key: Preset slug, e.g. ``"4aa-alkaline"``.

    Returns:
        Matching battery preset.

    Raises:
        chargedup.utils.exceptions.ConfigurationError: If ``key`` is unknown.
    """
    try:
        return BATTERY_PRESETS[key]
    except KeyError as exc:
        msg = f"unknown battery preset {key!r}, expected one of {sorted(BATTERY_PRESETS)}"
        raise ConfigurationError(msg) from exc
