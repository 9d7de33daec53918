"""
Value types shared by the region models and the IAPWS-95 engine.
"""

from dataclasses import dataclass
from typing import NamedTuple

import numpy as np


class DensitySolution(NamedTuple):
    """ Outcome of a Newton density solve. Never raised, always inspected """
    rho: float  # kg/m3
    converged: bool
    iterations: int
    residual: float  # Final pressure residual (MPa)


@dataclass(frozen=True)
class RegionResult:
    """ Partial state from a single (T, P) region evaluation """
    region: int
    temperature: float  # K
    pressure: float  # MPa
    density: float  # kg/m3
    specific_volume: float  # m3/kg
    enthalpy: float  # kJ/kg
    entropy: float  # kJ/kg/K
    cp: float  # kJ/kg/K
    cv: float  # kJ/kg/K
    internal_energy: float  # kJ/kg
    speed_of_sound: float = np.nan  # m/s
    converged: bool = True
