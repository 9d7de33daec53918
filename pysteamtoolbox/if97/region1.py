"""
IAPWS-IF97 Region 1: Compressed liquid water.

Provides:
    - region1(T, P): full property set, refusing points inside the saturation band
    - gibbs_region1(T, P): unguarded evaluator, used for saturated liquid values

Valid range (Region 1):
    273.15 K <= T <= 623.15 K  (0-350 C)
    P_sat(T) <= P <= 100 MPa

Reference:
    Wagner, W. et al. (2000). "The IAPWS Industrial Formulation 1997
    for the Thermodynamic Properties of Water and Steam."
    ASME J. Eng. Gas Turbines Power, 122(1), 150-182.

Units: T in K, P in MPa
"""

import numpy as np

from pysteamtoolbox.constants import R, SAT_EPS
from .result import RegionResult
from .guard import assert_outside_saturation

P_STAR = 16.53           # Reference pressure [MPa]
T_STAR = 1386.0          # Reference temperature [K]

# Region 1 coefficients (Table 2 of IAPWS-IF97)
# Each row: (I_i, J_i, n_i)
_REGION1_IJN = [
    (0,  -2,   0.14632971213167e+00),
    (0,  -1,  -0.84548187169114e+00),
    (0,   0,  -0.37563603672040e+01),
    (0,   1,   0.33855169168385e+01),
    (0,   2,  -0.95791963387872e+00),
    (0,   3,   0.15772038513228e+00),
    (0,   4,  -0.16616417199501e-01),
    (0,   5,   0.81214629983568e-03),
    (1,  -9,   0.28319080123804e-03),
    (1,  -7,  -0.60706301565874e-03),
    (1,  -1,  -0.18990068218419e-01),
    (1,   0,  -0.32529748770505e-01),
    (1,   1,  -0.21841717175414e-01),
    (1,   3,  -0.52838357969930e-04),
    (2,  -3,  -0.47184321073267e-03),
    (2,   0,  -0.30001780793026e-03),
    (2,   1,   0.47661393906987e-04),
    (2,   3,  -0.44141845330846e-05),
    (2,  17,  -0.72694996297594e-15),
    (3,  -4,  -0.31679644845054e-04),
    (3,   0,  -0.28270797985312e-05),
    (3,   6,  -0.85205128120103e-09),
    (4,  -5,  -0.22425281908000e-05),
    (4,  -2,  -0.65171222895601e-06),
    (4,  10,  -0.14341729937924e-12),
    (5,  -8,  -0.40516996860117e-06),
    (8, -11,  -0.12734301741641e-08),
    (8,  -6,  -0.17424871230634e-09),
    (21, -29, -0.68762131295531e-18),
    (23, -31,  0.14478307828521e-19),
    (29, -38,  0.26335781662795e-22),
    (30, -39, -0.11947622640071e-22),
    (31, -40,  0.18228094581404e-23),
    (32, -41, -0.93537087292458e-25),
]

_I = np.array([row[0] for row in _REGION1_IJN], dtype=float)
_J = np.array([row[1] for row in _REGION1_IJN], dtype=float)
_N = np.array([row[2] for row in _REGION1_IJN])


def _gamma_derivatives(pi, tau):
    """
    Dimensionless Gibbs free energy of Region 1 and its derivatives.

    gamma = sum( n_i * (7.1 - pi)^I_i * (tau - 1.222)^J_i )

    Returns:
        (gamma, gamma_pi, gamma_pipi, gamma_tau, gamma_tautau, gamma_pitau)
    """
    a = 7.1 - pi
    b = tau - 1.222

    aI = a ** _I
    bJ = b ** _J

    g = np.sum(_N * aI * bJ)
    gp = np.sum(-_N * _I * aI / a * bJ)
    gpp = np.sum(_N * _I * (_I - 1) * aI / a ** 2 * bJ)
    gt = np.sum(_N * aI * _J * bJ / b)
    gtt = np.sum(_N * aI * _J * (_J - 1) * bJ / b ** 2)
    gpt = np.sum(-_N * _I * aI / a * _J * bJ / b)

    return g, gp, gpp, gt, gtt, gpt


def gibbs_region1(T, P):
    """
    Region 1 properties without the saturation-band check.

    Parameters:
        T: temperature in K
        P: pressure in MPa

    Returns:
        RegionResult
    """
    pi = P / P_STAR
    tau = T_STAR / T
    g, gp, gpp, gt, gtt, gpt = _gamma_derivatives(pi, tau)

    v = R * T * pi * gp / (P * 1000)  # m3/kg
    h = R * T * tau * gt
    s = R * (tau * gt - g)
    u = R * T * (tau * gt - pi * gp)
    cp = -R * tau ** 2 * gtt
    cv = R * (-tau ** 2 * gtt + (gp - tau * gpt) ** 2 / gpp)
    w2 = 1000 * R * T * gp ** 2 / ((gp - tau * gpt) ** 2 / (tau ** 2 * gtt) - gpp)

    return RegionResult(
        region=1, temperature=T, pressure=P,
        density=1 / v, specific_volume=v,
        enthalpy=h, entropy=s, cp=cp, cv=cv,
        internal_energy=u, speed_of_sound=np.sqrt(w2) if w2 > 0 else np.nan,
    )


def region1(T, P, sat_eps=SAT_EPS):
    """
    Compressed liquid properties from IAPWS-IF97 Region 1.

    Parameters:
        T: temperature in K (273.15 - 623.15)
        P: pressure in MPa (P_sat(T) - 100)
        sat_eps: half-width of the saturation band in MPa

    Returns:
        RegionResult

    Raises:
        SaturationLockError if |P - P_sat(T)| < sat_eps
    """
    assert_outside_saturation(1, T, P, sat_eps)
    return gibbs_region1(float(T), float(P))
