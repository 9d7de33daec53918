"""
IAPWS-IF97 region determination for a (T, P) pair.

Decision order:
    (a) T > 1073.15 K and P <= 50 MPa       -> Region 5
    (b) |P - P_sat(T)| < sat_eps, T <= T_c  -> Region 4 (saturation, quality required)
    (c) T <= 623.15 K                       -> Region 1 if P > P_sat(T), else Region 2
    (d) T > 623.15 K                        -> Region 3 if P > P_B23(T), else Region 2

Region 1 and Region 2 are never evaluated from here inside the saturation band.

Units: T in K, P in MPa
"""

import logging
import numpy as np

from pysteamtoolbox.constants import TC, RHOC, T_R1_MAX, T_R5_MIN, P_R5_MAX, B23_N, SAT_EPS
from pysteamtoolbox.errors import SaturationLockError
from pysteamtoolbox.validate import check_envelope
from .region1 import region1
from .region2 import region2
from .region3 import region3
from .region4 import psat, in_saturation_band
from .region5 import region5
from .saturation import rho_liquid_aux, rho_vapor_aux

logger = logging.getLogger(__name__)


def p_b23(T):
    """ Pressure (MPa) on the Region 2-3 boundary at temperature T (K) """
    n = B23_N
    return n[0] + n[1] * T + n[2] * T ** 2


def t_b23(P):
    """ Temperature (K) on the Region 2-3 boundary at pressure P (MPa) """
    n = B23_N
    return n[3] + np.sqrt((P - n[4]) / n[2])


def select_region(T, P, sat_eps=SAT_EPS):
    """
    Authoritative IF97 region for (T, P).

    Parameters:
        T: temperature in K
        P: pressure in MPa
        sat_eps: half-width of the saturation band in MPa

    Returns:
        1, 2, 3, 4 or 5
    """
    check_envelope(T, P)
    if T > T_R5_MIN and P <= P_R5_MAX:
        return 5
    if in_saturation_band(T, P, sat_eps):
        return 4
    if T <= T_R1_MAX:
        return 1 if P > psat(T) else 2
    return 3 if P > p_b23(T) else 2


def region3_guess(T, P):
    """ Starting density for a Region 3 solve: the saturated density on the correct side below T_c """
    if T < TC:
        return rho_liquid_aux(T) if P > psat(T) else rho_vapor_aux(T)
    return RHOC


def evaluate_tp(T, P, sat_eps=SAT_EPS):
    """
    Single-phase IF97 properties at (T, P).

    Returns:
        RegionResult from the authoritative region model

    Raises:
        SaturationLockError if (T, P) lies on the saturation curve
        DomainRangeError if (T, P) is outside the supported envelope
    """
    T, P = float(T), float(P)
    region = select_region(T, P, sat_eps)
    logger.debug('T=%g K, P=%g MPa -> region %d', T, P, region)
    if region == 1:
        return region1(T, P, sat_eps)
    if region == 2:
        return region2(T, P, sat_eps)
    if region == 3:
        return region3(T, P, region3_guess(T, P))
    if region == 5:
        return region5(T, P)
    raise SaturationLockError(
        f'T={T} K, P={P} MPa lies on the saturation curve; a quality is required',
        name='pressure', value=P, bound=psat(T))
