"""
IAPWS-IF97 water and steam formulation.

Regions 1, 2, 3 and 5 give single-phase properties from (T, P), Region 4 is
the saturation curve. selector.evaluate_tp dispatches to the right region.

Units: T in K, P in MPa, h in kJ/kg, s in kJ/kg/K, rho in kg/m3
"""

from .result import RegionResult, DensitySolution
from .region1 import region1
from .region2 import region2
from .region3 import region3, region3_props, region3_density, region3_pressure
from .region4 import psat, tsat, in_saturation_band
from .region5 import region5
from .saturation import (saturation_states, saturation_states_p, latent_heat, fusion_heat, sublimation_heat,
                         rho_f, rho_g, h_f, h_g, s_f, s_g, cp_f, cp_g, cv_f, cv_g)
from .selector import select_region, evaluate_tp, p_b23, t_b23, region3_guess
