"""Physical constants and nominal cell data used across the library."""

import math

GRAVITY: float = 9.81
FARADAY: float = 96485.0
MOLAR_MASS_ZN: float = 65.38
MOLAR_MASS_MNO2: float = 86.936
MU_0: float = 4.0 * math.pi * 1e-7

# Relative permeability of common core materials (-).
RELATIVE_PERMEABILITY: dict[str, float] = {
    "air": 1.0,
    "ferrite": 2000.0,
    "iron": 4000.0,
    "steel": 4500.0,
}

SECONDS_PER_HOUR: float = 3600.0
MAH_TO_COULOMB: float = 3.6

ALKALINE_CELL_VOLTAGE: float = 1.5
NIMH_CELL_VOLTAGE: float = 1.2
ALKALINE_INTERNAL_RESISTANCE: float = 0.3
NIMH_INTERNAL_RESISTANCE: float = 0.02
AA_CAPACITY_MAH: float = 2000.0
