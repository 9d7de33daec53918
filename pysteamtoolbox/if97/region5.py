"""
IAPWS-IF97 Region 5: High-temperature steam (2007 revision).

Valid range (Region 5):
    1073.15 K <= T <= 2273.15 K, 0 < P <= 50 MPa

Same Gibbs-energy structure as Region 2 with its own coefficient set,
so the derivative sums are shared with region2.

Units: T in K, P in MPa
"""

import numpy as np

from .region2 import ideal_gamma, residual_gamma, gibbs_properties

P_STAR = 1.0             # Reference pressure [MPa]
T_STAR = 1000.0          # Reference temperature [K]

# Ideal-gas part. Each row: (J0_i, n0_i)
_IDEAL_JN = [
    (0,  -0.13179983674201e+02),
    (1,   0.68540841634434e+01),
    (-3, -0.24805148933466e-01),
    (-2,  0.36901534980333e+00),
    (-1, -0.31161318213925e+01),
    (2,  -0.32961626538917e+00),
]

# Residual part. Each row: (I_i, J_i, n_i)
_RESIDUAL_IJN = [
    (1, 1,  0.15736404855259e-02),
    (1, 2,  0.90153761673944e-03),
    (1, 3, -0.50270077677648e-02),
    (2, 3,  0.22440037409485e-05),
    (2, 9, -0.41163275453471e-05),
    (3, 7,  0.37919454822955e-07),
]

_J0 = np.array([row[0] for row in _IDEAL_JN], dtype=float)
_N0 = np.array([row[1] for row in _IDEAL_JN])
_I = np.array([row[0] for row in _RESIDUAL_IJN], dtype=float)
_J = np.array([row[1] for row in _RESIDUAL_IJN], dtype=float)
_N = np.array([row[2] for row in _RESIDUAL_IJN])


def region5(T, P):
    """
    High-temperature steam properties from IAPWS-IF97 Region 5.

    Parameters:
        T: temperature in K (1073.15 - 2273.15)
        P: pressure in MPa (up to 50)

    Returns:
        RegionResult
    """
    T, P = float(T), float(P)
    pi = P / P_STAR
    tau = T_STAR / T
    return gibbs_properties(5, T, P, pi, tau,
                            ideal_gamma(pi, tau, _J0, _N0),
                            residual_gamma(pi, tau, _I, _J, _N, tau_shift=0.0))
