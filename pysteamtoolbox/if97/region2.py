"""
IAPWS-IF97 Region 2: Superheated vapor.

Provides:
    - region2(T, P): full property set, refusing points inside the saturation band
    - gibbs_region2(T, P): unguarded evaluator, used for saturated vapor values

Valid range (Region 2):
    273.15 K <= T <= 623.15 K   0 < P <= P_sat(T)
    623.15 K <  T <= 863.15 K   0 < P <= P_B23(T)
    863.15 K <  T <= 1073.15 K  0 < P <= 100 MPa

Reference:
    Wagner, W. et al. (2000). "The IAPWS Industrial Formulation 1997
    for the Thermodynamic Properties of Water and Steam."

Units: T in K, P in MPa
"""

import numpy as np

from pysteamtoolbox.constants import R, SAT_EPS
from .result import RegionResult
from .guard import assert_outside_saturation

P_STAR = 1.0             # Reference pressure [MPa]
T_STAR = 540.0           # Reference temperature [K]

# Ideal-gas part (Table 10). Each row: (J0_i, n0_i)
_IDEAL_JN = [
    (0,  -0.96927686500217e+01),
    (1,   0.10086655968018e+02),
    (-5, -0.56087911283020e-02),
    (-4,  0.71452738081455e-01),
    (-3, -0.40710498223928e+00),
    (-2,  0.14240819171444e+01),
    (-1, -0.43839511319450e+01),
    (2,  -0.28408632460772e+00),
    (3,   0.21268463753307e-01),
]

# Residual part (Table 11). Each row: (I_i, J_i, n_i)
_RESIDUAL_IJN = [
    (1,   0, -0.17731742473213e-02),
    (1,   1, -0.17834862292358e-01),
    (1,   2, -0.45996013696365e-01),
    (1,   3, -0.57581259083432e-01),
    (1,   6, -0.50325278727930e-01),
    (2,   1, -0.33032641670203e-04),
    (2,   2, -0.18948987516315e-03),
    (2,   4, -0.39392777243355e-02),
    (2,   7, -0.43797295650573e-01),
    (2,  36, -0.26674547914087e-04),
    (3,   0,  0.20481737692309e-07),
    (3,   1,  0.43870667284435e-06),
    (3,   3, -0.32277677238570e-04),
    (3,   6, -0.15033924542148e-02),
    (3,  35, -0.40668253562649e-01),
    (4,   1, -0.78847309559367e-09),
    (4,   2,  0.12790717852285e-07),
    (4,   3,  0.48225372718507e-06),
    (5,   7,  0.22922076337661e-05),
    (6,   3, -0.16714766451061e-10),
    (6,  16, -0.21171472321355e-02),
    (6,  35, -0.23895741934104e+02),
    (7,   0, -0.59059564324270e-17),
    (7,  11, -0.12621808899101e-05),
    (7,  25, -0.38946842435739e-01),
    (8,   8,  0.11256211360459e-10),
    (8,  36, -0.82311340897998e+01),
    (9,  13,  0.19809712802088e-07),
    (10,  4,  0.10406965210174e-18),
    (10, 10, -0.10234747095929e-12),
    (10, 14, -0.10018179379511e-08),
    (16, 29, -0.80882908646985e-10),
    (16, 50,  0.10693031879409e+00),
    (18, 57, -0.33662250574171e+00),
    (20, 20,  0.89185845355421e-24),
    (20, 35,  0.30629316876232e-12),
    (20, 48, -0.42002467698208e-05),
    (21, 21, -0.59056029685639e-25),
    (22, 53,  0.37826947613457e-05),
    (23, 39, -0.12768608934681e-14),
    (24, 26,  0.73087610595061e-28),
    (24, 40,  0.55414715350778e-16),
    (24, 58, -0.94369707241210e-06),
]

_J0 = np.array([row[0] for row in _IDEAL_JN], dtype=float)
_N0 = np.array([row[1] for row in _IDEAL_JN])
_I = np.array([row[0] for row in _RESIDUAL_IJN], dtype=float)
_J = np.array([row[1] for row in _RESIDUAL_IJN], dtype=float)
_N = np.array([row[2] for row in _RESIDUAL_IJN])


def ideal_gamma(pi, tau, J0, N0):
    """
    Ideal-gas Gibbs energy gamma0 = ln(pi) + sum( n0_i * tau^J0_i ) and derivatives.
    Shared with Region 5.

    Returns:
        (g0, g0_pi, g0_pipi, g0_tau, g0_tautau)
    """
    tJ = tau ** J0
    g0 = np.log(pi) + np.sum(N0 * tJ)
    g0t = np.sum(N0 * J0 * tJ / tau)
    g0tt = np.sum(N0 * J0 * (J0 - 1) * tJ / tau ** 2)
    return g0, 1 / pi, -1 / pi ** 2, g0t, g0tt


def residual_gamma(pi, tau, I, J, N, tau_shift=0.5):
    """
    Residual Gibbs energy gammar = sum( n_i * pi^I_i * (tau - tau_shift)^J_i ) and derivatives.
    Shared with Region 5 (tau_shift = 0).

    Returns:
        (gr, gr_pi, gr_pipi, gr_tau, gr_tautau, gr_pitau)
    """
    b = tau - tau_shift
    pI = pi ** I
    bJ = b ** J
    gr = np.sum(N * pI * bJ)
    grp = np.sum(N * I * pI / pi * bJ)
    grpp = np.sum(N * I * (I - 1) * pI / pi ** 2 * bJ)
    if b == 0:
        # Only J = 0 and J = 1 terms survive at tau = tau_shift
        grt = np.sum(N * pI * (J == 1))
        grtt = np.sum(N * pI * 2 * (J == 2))
        grpt = np.sum(N * I * pI / pi * (J == 1))
    else:
        grt = np.sum(N * pI * J * bJ / b)
        grtt = np.sum(N * pI * J * (J - 1) * bJ / b ** 2)
        grpt = np.sum(N * I * pI / pi * J * bJ / b)
    return gr, grp, grpp, grt, grtt, grpt


def gibbs_properties(region, T, P, pi, tau, ideal, residual):
    """ Builds a RegionResult from the ideal and residual Gibbs derivatives of Regions 2 and 5 """
    g0, g0p, g0pp, g0t, g0tt = ideal
    gr, grp, grpp, grt, grtt, grpt = residual

    v = R * T * pi * (g0p + grp) / (P * 1000)  # m3/kg
    h = R * T * tau * (g0t + grt)
    s = R * (tau * (g0t + grt) - (g0 + gr))
    u = R * T * (tau * (g0t + grt) - pi * (g0p + grp))
    cp = -R * tau ** 2 * (g0tt + grtt)
    x = 1 + pi * grp - tau * pi * grpt
    cv = R * (-tau ** 2 * (g0tt + grtt) - x ** 2 / (1 - pi ** 2 * grpp))
    w2 = 1000 * R * T * (1 + 2 * pi * grp + pi ** 2 * grp ** 2) / (
        (1 - pi ** 2 * grpp) + x ** 2 / (tau ** 2 * (g0tt + grtt)))

    return RegionResult(
        region=region, temperature=T, pressure=P,
        density=1 / v, specific_volume=v,
        enthalpy=h, entropy=s, cp=cp, cv=cv,
        internal_energy=u, speed_of_sound=np.sqrt(w2) if w2 > 0 else np.nan,
    )


def gibbs_region2(T, P):
    """
    Region 2 properties without the saturation-band check.

    Parameters:
        T: temperature in K
        P: pressure in MPa

    Returns:
        RegionResult
    """
    pi = P / P_STAR
    tau = T_STAR / T
    return gibbs_properties(2, T, P, pi, tau,
                            ideal_gamma(pi, tau, _J0, _N0),
                            residual_gamma(pi, tau, _I, _J, _N))


def region2(T, P, sat_eps=SAT_EPS):
    """
    Superheated vapor properties from IAPWS-IF97 Region 2.

    Parameters:
        T: temperature in K (273.15 - 1073.15)
        P: pressure in MPa
        sat_eps: half-width of the saturation band in MPa

    Returns:
        RegionResult

    Raises:
        SaturationLockError if |P - P_sat(T)| < sat_eps
    """
    assert_outside_saturation(2, T, P, sat_eps)
    return gibbs_region2(float(T), float(P))
