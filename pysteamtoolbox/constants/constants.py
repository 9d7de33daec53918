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

# Internal units: T (K), P (MPa), h (kJ/kg), s, cp, cv (kJ/kg/K), rho (kg/m3)

# Constants
R = 0.461526  # Specific gas constant for water, kJ/(kg.K)
TC = 647.096  # Critical temperature (K)
PC = 22.064  # Critical pressure (MPa)
RHOC = 322.0  # Critical density (kg/m3)
T_TRIPLE = 273.16  # Triple point temperature (K)
P_TRIPLE = 0.000611657  # Triple point pressure (MPa)
T_ZERO = 273.15  # 0 deg C (K)
P_ATM = 0.101325  # Standard atmosphere (MPa)

# IF97 region boundaries
T_R1_MAX = 623.15  # Upper temperature of Region 1 (K)
T_R2_MAX = 1073.15  # Upper temperature of Region 2 (K)
T_R5_MIN = 1073.15  # Lower temperature of Region 5 (K)
P_R5_MAX = 50.0  # Upper pressure of Region 5 (MPa)
T_B23_MAX = 863.15  # B23 boundary reaches 100 MPa here (K)
P_B23_MIN = 16.5291643  # B23 boundary pressure at 623.15 K (MPa)
B23_N = (0.34805185628969e3, -0.11671859879975e1, 0.10192970039326e-2,
         0.57254459862746e3, 0.13918839778870e2)

# Supported envelope (all engines)
T_MIN = 173.15  # K
T_MAX = 2273.15  # K
P_MIN = 1e-6  # MPa
P_MAX = 100.0  # MPa

# Solver tolerances
SAT_EPS = 1e-6  # Saturation band half-width (MPa)
T_TOL = 1e-7  # Bisection tolerance on temperature (K)
P_TOL = 1e-10  # Bisection tolerance on pressure (MPa)
MAX_IT = 200  # Bisection iteration cap
MAX_EXPAND = 60  # Bracket growth attempts
T_BRACKET = (273.15, 2273.15)  # Default temperature bracket (K)
R3_MAX_ITER = 50  # Region 3 Newton iteration cap
R3_TOL = 1e-7  # Region 3 pressure residual (MPa)
