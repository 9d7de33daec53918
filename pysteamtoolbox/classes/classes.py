#!/usr/bin/python3
# -*- coding: utf-8 -*-

"""
    pysteamtoolbox - A collection of Water and Steam Property Utilities
              Copyright (C) 2022, Mark Burgoyne

    This program is free software: you can redistribute it and/or modify
    it under the terms of the GNU General Public License as published by
    the Free Software Foundation, either version 3 of the License, or
    (at your option) any later version.

    This program is distributed in the hope that it will be useful,
    but WITHOUT ANY WARRANTY; without even the implied warranty of
    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
    GNU General Public License for more details.

    The GNU General Public License can be found in the LICENSE directory,
    and at  <https://www.gnu.org/licenses/>.

          Contact author at mark.w.burgoyne@gmail.com
"""

from enum import Enum

class input_mode(Enum):  # Pair of independent properties supplied to the solver
    TP = 0  # Temperature (K), Pressure (MPa)
    TX = 1  # Temperature (K), Quality (-)
    PX = 2  # Pressure (MPa), Quality (-)
    PH = 3  # Pressure (MPa), Enthalpy (kJ/kg)
    PS = 4  # Pressure (MPa), Entropy (kJ/kg/K)
    TS = 5  # Temperature (K), Entropy (kJ/kg/K)

class phase(Enum):  # Phase label of a resolved state
    COMPRESSED_LIQUID = 'compressed_liquid'
    SUPERHEATED_VAPOR = 'superheated_vapor'
    DENSE_FLUID = 'dense_fluid'
    SATURATED_LIQUID = 'saturated_liquid'
    SATURATED_VAPOR = 'saturated_vapor'
    TWO_PHASE = 'two_phase'
    HIGH_TEMPERATURE_STEAM = 'high_temperature_steam'

class engine(Enum):  # Single-phase property engine
    IF97 = 0
    IAPWS95 = 1

# Phases on which quality is defined
SATURATION_PHASES = (phase.SATURATED_LIQUID, phase.SATURATED_VAPOR, phase.TWO_PHASE)

# Phase label of each single-phase IF97 region
REGION_PHASE = {
    1: phase.COMPRESSED_LIQUID,
    2: phase.SUPERHEATED_VAPOR,
    3: phase.DENSE_FLUID,
    5: phase.HIGH_TEMPERATURE_STEAM,
}

class_dic = {
    "mode": input_mode,
    "engine": engine,
}
