"""Magnetic flux density of simple current-carrying configurations."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from chargedup.utils.constants import MU_0, RELATIVE_PERMEABILITY
from chargedup.utils.exceptions import ConfigurationError

SOLENOID = "solenoid"
LOOP = "loop"
WIRE = "wire"
VALID_CONFIGURATIONS = (SOLENOID, LOOP, WIRE)
DEFAULT_MATERIAL = "air"


@dataclass(frozen=True)
class FieldResult:
    """Magnetic field magnitude with display conversions.

    Args:
        tesla: Flux density [T].
        configuration: Geometry the field was computed for.
        formula: Formula used, for display.
        relative_permeability: Core relative permeability (-).
        note: Validity note for approximate formulas.
    """

    tesla: float
    configuration: str
    formula: str
    relative_permeability: float = 1.0
    note: str = ""

    @property
    def millitesla(self) -> float:
        """Flux density in millitesla.

        Returns:
            Flux density [mT].
        """
        return self.tesla * 1e3

    @property
    def microtesla(self) -> float:
        """Flux density in microtesla.

        Returns:
            Flux density [uT].
        """
        return self.tesla * 1e6


def resolve_relative_permeability(material: str | float) -> float:
    """Resolve a core material into its relative permeability.

    Args:
        material: Material name or explicit relative permeability value.

    Returns:
        Relative permeability; unknown material names fall back to ``1.0``.
    """
    if isinstance(material, str):
        return RELATIVE_PERMEABILITY.get(material, 1.0)
    return float(material)


def _validate_positive(name: str, value: float) -> None:
    """Reject non-positive geometric dimensions.

    Args:
        name: Parameter name used in error messages.
        value: Dimension to validate.

    Raises:
        chargedup.utils.exceptions.ConfigurationError: If ``value`` is not
            strictly positive.
    """
    if not value > 0.0:
        msg = f"{name} must be positive"
        raise ConfigurationError(msg)


class MagneticFieldCalculator:
    """Closed-form B-field formulas using the permeability of free space."""

    def solenoid(
        self,
        turns: float,
        current: float,
        length: float,
        material: str | float = DEFAULT_MATERIAL,
    ) -> FieldResult:
        """Field at the center of a long solenoid, ``B = mu0 mur N I / L``.

        Args:
            turns: Number of turns.
            current: Coil current [A].
            length: Solenoid length [m].
            material: Core material name or relative permeability.

        Returns:
            Field at the solenoid center.

        Raises:
            chargedup.utils.exceptions.ConfigurationError: If ``length`` is
                not positive.
        """
        _validate_positive("length", length)
        mu_r = resolve_relative_permeability(material)
        return FieldResult(
            tesla=MU_0 * mu_r * turns * current / length,
            configuration=SOLENOID,
            formula="B = mu0 * mur * N * I / L",
            relative_permeability=mu_r,
        )

    def loop(self, turns: float, current: float, radius: float) -> FieldResult:
        """Field at the center of a flat coil, ``B = mu0 N I / (2 r)``.

        Args:
            turns: Number of turns.
            current: Coil current [A].
            radius: Loop radius [m].

        Returns:
            Field at the loop center.

        Raises:
            chargedup.utils.exceptions.ConfigurationError: If ``radius`` is
                not positive.
        """
        _validate_positive("radius", radius)
        return FieldResult(
            tesla=MU_0 * turns * current / (2.0 * radius),
            configuration=LOOP,
            formula="B = mu0 * N * I / (2r)",
            note="Approximation valid at center of loop",
        )

    def wire(self, current: float, distance: float) -> FieldResult:
        """Field around an infinite straight wire, ``B = mu0 I / (2 pi r)``.

        Args:
            current: Wire current [A].
            distance: Radial distance from the wire [m].

        Returns:
            Field at the given distance.

        Raises:
            chargedup.utils.exceptions.ConfigurationError: If ``distance``
                is not positive.
        """
        _validate_positive("distance", distance)
        return FieldResult(
            tesla=MU_0 * current / (2.0 * math.pi * distance),
            configuration=WIRE,
            formula="B = mu0 * I / (2 pi r)",
            note="From Ampere's law for infinite straight wire",
        )


def calculate_field(
    configuration: str,
    calculator: MagneticFieldCalculator | None = None,
    **inputs: Any,
) -> FieldResult:
    """Dispatch a field calculation by configuration name.

    Args:
        configuration: ``solenoid``, ``loop`` or ``wire``.
        calculator: Optional calculator instance; a fresh one is used if
            omitted.
        **inputs: Keyword arguments of the selected formula.

    Returns:
        Field result of the selected configuration.

    Raises:
        chargedup.utils.exceptions.ConfigurationError: If ``configuration``
            is unknown or a dimension is invalid.
    """
    engine = calculator or MagneticFieldCalculator()
    if configuration == SOLENOID:
        return engine.solenoid(**inputs)
    if configuration == LOOP:
        return engine.loop(**inputs)
    if configuration == WIRE:
        return engine.wire(**inputs)
    msg = f"configuration must be one of {VALID_CONFIGURATIONS}, got: {configuration!r}"
    raise ConfigurationError(msg)
