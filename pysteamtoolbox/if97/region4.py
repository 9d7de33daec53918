"""
IAPWS-IF97 Region 4: The saturation curve.

Provides:
    - psat(T): saturation pressure in MPa
    - tsat(P): saturation temperature in K
    - in_saturation_band(T, P): True if P lies within sat_eps of psat(T)

The two equations are exact algebraic inverses of the same quadratic in
(beta, theta), so psat(tsat(P)) == P to round-off.

Valid range:
    273.15 K <= T <= 647.096 K (extrapolated here down to 173.15 K)

Units: T in K, P in MPa
"""

import numpy as np

from pysteamtoolbox.constants import TC, PC, T_MIN, SAT_EPS
from pysteamtoolbox.errors import DomainRangeError

_N = [
    0.11670521452767e4,
    -0.72421316703206e6,
    -0.17073846940092e2,
    0.12020824702470e5,
    -0.32325550322333e7,
    0.14915108613530e2,
    -0.48232657361591e4,
    0.40511340542057e6,
    -0.23855557567849,
    0.65017534844798e3,
]


def _psat(T):
    n = _N
    theta = T + n[8] / (T - n[9])
    A = theta ** 2 + n[0] * theta + n[1]
    B = n[2] * theta ** 2 + n[3] * theta + n[4]
    C = n[5] * theta ** 2 + n[6] * theta + n[7]
    return (2 * C / (-B + np.sqrt(B ** 2 - 4 * A * C))) ** 4


P_MIN_SAT = _psat(T_MIN)  # Saturation pressure at the lowest supported temperature


def psat(T):
    """
    Saturation pressure.

    Parameters:
        T: temperature in K (173.15 - 647.096)

    Returns:
        pressure in MPa
    """
    T = float(T)
    if not T_MIN <= T <= TC:
        raise DomainRangeError(
            f'Saturation temperature {T} K outside [{T_MIN}, {TC}] K',
            name='temperature', value=T, bound=TC if T > TC else T_MIN)
    return float(_psat(T))


def tsat(P):
    """
    Saturation temperature.

    Parameters:
        P: pressure in MPa (P_sat(173.15 K) - 22.064)

    Returns:
        temperature in K
    """
    P = float(P)
    if not P_MIN_SAT <= P <= PC:
        raise DomainRangeError(
            f'Saturation pressure {P} MPa outside [{P_MIN_SAT:.6g}, {PC}] MPa',
            name='pressure', value=P, bound=PC if P > PC else P_MIN_SAT)
    n = _N
    beta = P ** 0.25
    E = beta ** 2 + n[2] * beta + n[5]
    F = n[0] * beta ** 2 + n[3] * beta + n[6]
    G = n[1] * beta ** 2 + n[4] * beta + n[7]
    D = 2 * G / (-F - np.sqrt(F ** 2 - 4 * E * G))
    return float((n[9] + D - np.sqrt((n[9] + D) ** 2 - 4 * (n[8] + n[9] * D))) / 2)


def in_saturation_band(T, P, sat_eps=SAT_EPS):
    """ True if (T, P) lies on the saturation curve to within sat_eps MPa """
    if not T_MIN <= T <= TC:
        return False
    return abs(P - _psat(T)) < sat_eps
