"""
Saturated liquid and vapor properties along the IF97 saturation curve.

Region 4 (region4.py) locates the curve; this module evaluates the two
endpoints on it:
    T <= 623.15 K          liquid from Region 1, vapor from Region 2
    623.15 K < T < T_c     both from Region 3, Newton-solved at P_sat(T) from
                           the auxiliary saturated density equations

Provides:
    - saturation_states(T): (liquid, vapor) RegionResults
    - rho_f, rho_g, h_f, h_g, s_f, s_g, cp_f, cp_g, cv_f, cv_g: endpoint values at T
    - latent_heat(T=None, P=None): h_g - h_f in kJ/kg
    - fusion_heat(T): enthalpy of melting of ice in kJ/kg
    - sublimation_heat(T=None, P=None): fusion_heat + latent_heat in kJ/kg

Reference (auxiliary densities):
    Wagner, W. and Pruss, A. (1993). "International Equations for the
    Saturation Properties of Ordinary Water Substance. Revised According to
    the International Temperature Scale of 1990." J. Phys. Chem. Ref. Data 22, 783.

Units: T in K, P in MPa
"""

import numpy as np

from pysteamtoolbox.constants import TC, RHOC, T_R1_MAX, T_MIN, T_ZERO
from pysteamtoolbox.errors import DomainRangeError
from .region1 import gibbs_region1
from .region2 import gibbs_region2
from .region3 import region3, region3_props
from .region4 import psat, tsat

_B = [1.99274064, 1.09965342, -0.510839303, -1.75493479, -45.5170352, -6.74694450e5]
_B_EXP = [1 / 3, 2 / 3, 5 / 3, 16 / 3, 43 / 3, 110 / 3]
_C = [-2.03150240, -2.68302940, -5.38626492, -17.2991605, -44.7586581, -63.9201063]
_C_EXP = [2 / 6, 4 / 6, 8 / 6, 18 / 6, 37 / 6, 71 / 6]


def rho_liquid_aux(T):
    """ Approximate saturated liquid density (kg/m3), used to seed Region 3 """
    theta = max(1 - T / TC, 0.0)
    return RHOC * (1 + sum(b * theta ** e for b, e in zip(_B, _B_EXP)))


def rho_vapor_aux(T):
    """ Approximate saturated vapor density (kg/m3), used to seed Region 3 """
    theta = max(1 - T / TC, 0.0)
    return RHOC * np.exp(sum(c * theta ** e for c, e in zip(_C, _C_EXP)))


def saturation_states(T):
    """
    Saturated liquid and vapor states at temperature T.

    Parameters:
        T: temperature in K (173.15 - 647.096)

    Returns:
        (liquid, vapor) RegionResult tuple, both at P = psat(T)
    """
    T = float(T)
    P = psat(T)  # Raises outside [T_MIN, TC]
    if T <= T_R1_MAX:
        return gibbs_region1(T, P), gibbs_region2(T, P)
    if T >= TC:
        crit = region3_props(TC, RHOC)
        return crit, crit
    return region3(T, P, rho_liquid_aux(T)), region3(T, P, rho_vapor_aux(T))


def saturation_states_p(P):
    """ Saturated liquid and vapor states at pressure P (MPa) """
    return saturation_states(tsat(P))


def rho_f(T):
    return saturation_states(T)[0].density


def rho_g(T):
    return saturation_states(T)[1].density


def h_f(T):
    return saturation_states(T)[0].enthalpy


def h_g(T):
    return saturation_states(T)[1].enthalpy


def s_f(T):
    return saturation_states(T)[0].entropy


def s_g(T):
    return saturation_states(T)[1].entropy


def cp_f(T):
    return saturation_states(T)[0].cp


def cp_g(T):
    return saturation_states(T)[1].cp


def cv_f(T):
    return saturation_states(T)[0].cv


def cv_g(T):
    return saturation_states(T)[1].cv


def latent_heat(T=None, P=None):
    """
    Enthalpy of vaporization h_fg = h_g - h_f.

    Parameters:
        T: saturation temperature in K, or
        P: saturation pressure in MPa

    Returns:
        h_fg in kJ/kg
    """
    if T is None and P is None:
        raise DomainRangeError('latent_heat requires either T or P', name='temperature')
    if T is None:
        T = tsat(P)
    liquid, vapor = saturation_states(T)
    return vapor.enthalpy - liquid.enthalpy


H_FUSION_0 = 333.55  # Enthalpy of fusion at 0 deg C, kJ/kg
H_FUSION_SLOPE = -0.6  # kJ/kg/K, linear about 0 deg C


def fusion_heat(T):
    """
    Enthalpy of fusion (ice to liquid), linear about 0 deg C.

    Parameters:
        T: temperature in K (173.15 - 647.096), meaningful near the melting line

    Returns:
        h_if in kJ/kg
    """
    if not T_MIN <= T <= TC:
        raise DomainRangeError(f'Temperature {T} K is outside {T_MIN} - {TC} K', name='temperature',
                               value=T, bound=(T_MIN, TC))
    return H_FUSION_0 + H_FUSION_SLOPE * (T - T_ZERO)


def sublimation_heat(T=None, P=None):
    """
    Enthalpy of sublimation (ice to vapor), h_if + h_fg.

    Parameters:
        T: saturation temperature in K, or
        P: saturation pressure in MPa

    Returns:
        h_ig in kJ/kg
    """
    if T is None and P is None:
        raise DomainRangeError('sublimation_heat requires either T or P', name='temperature')
    if T is None:
        T = tsat(P)
    return fusion_heat(T) + latent_heat(T)
