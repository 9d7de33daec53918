"""
IAPWS-IF97 Region 3: Dense fluid near the critical point.

Region 3 is formulated in terms of the dimensionless Helmholtz free energy
phi(delta, tau), with delta = rho / rho_c and tau = T_c / T, so density must
be solved for when (T, P) is given.

Provides:
    - region3_props(T, rho): full property set at given temperature and density
    - region3_density(T, P, rho_guess): Newton-Raphson density solve
    - region3(T, P, rho_guess): both of the above

Valid range (Region 3):
    623.15 K <= T <= T_B23(P), P_B23(T) <= P <= 100 MPa

Units: T in K, P in MPa, rho in kg/m3
"""

import logging
from dataclasses import replace
import numpy as np

from pysteamtoolbox.constants import R, TC, RHOC, R3_MAX_ITER, R3_TOL
from .result import RegionResult, DensitySolution

logger = logging.getLogger(__name__)

N1 = 0.10658070028513e+01  # Coefficient of the ln(delta) term

# Table 30 of IAPWS-IF97, terms 2-40. Each row: (I_i, J_i, n_i)
_REGION3_IJN = [
    (0,   0, -0.15732845290239e+02),
    (0,   1,  0.20944396974307e+02),
    (0,   2, -0.76867707878716e+01),
    (0,   7,  0.26185947787954e+01),
    (0,  10, -0.28080781148620e+01),
    (0,  12,  0.12053369696517e+01),
    (0,  23, -0.84566812812502e-02),
    (1,   2, -0.12654315477714e+01),
    (1,   6, -0.11524407806681e+01),
    (1,  15,  0.88521043984318e+00),
    (1,  17, -0.64207765181607e+00),
    (2,   0,  0.38493460186671e+00),
    (2,   2, -0.85214708824206e+00),
    (2,   6,  0.48972281541877e+01),
    (2,   7, -0.30502617256965e+01),
    (2,  22,  0.39420536879154e-01),
    (2,  26,  0.12558408424308e+00),
    (3,   0, -0.27999329698710e+00),
    (3,   2,  0.13899799569460e+01),
    (3,   4, -0.20189915023570e+01),
    (3,  16, -0.82147637173963e-02),
    (3,  26, -0.47596035734923e+00),
    (4,   0,  0.43984074473500e-01),
    (4,   2, -0.44476435428739e+00),
    (4,   4,  0.90572070719733e+00),
    (4,  26,  0.70522450087967e+00),
    (5,   1,  0.10770512626332e+00),
    (5,   3, -0.32913623258954e+00),
    (5,  26, -0.50871062041158e+00),
    (6,   0, -0.22175400873096e-01),
    (6,   2,  0.94260751665092e-01),
    (6,  26,  0.16436278447961e+00),
    (7,   2, -0.13503372241348e-01),
    (8,  26, -0.14834345352472e-01),
    (9,   2,  0.57922953628084e-03),
    (9,  26,  0.32308904703711e-02),
    (10,  0,  0.80964802996215e-04),
    (10,  1, -0.16557679795037e-03),
    (11, 26, -0.44923899061815e-04),
]

_I = np.array([row[0] for row in _REGION3_IJN], dtype=float)
_J = np.array([row[1] for row in _REGION3_IJN], dtype=float)
_N = np.array([row[2] for row in _REGION3_IJN])


def _phi_derivatives(delta, tau):
    """
    phi = n1 * ln(delta) + sum( n_i * delta^I_i * tau^J_i )

    Returns:
        (phi, phi_d, phi_dd, phi_t, phi_tt, phi_dt)
    """
    dI = delta ** _I
    tJ = tau ** _J
    term = _N * dI * tJ

    phi = N1 * np.log(delta) + np.sum(term)
    phi_d = N1 / delta + np.sum(_I * term) / delta
    phi_dd = -N1 / delta ** 2 + np.sum(_I * (_I - 1) * term) / delta ** 2
    phi_t = np.sum(_J * term) / tau
    phi_tt = np.sum(_J * (_J - 1) * term) / tau ** 2
    phi_dt = np.sum(_I * _J * term) / (delta * tau)
    return phi, phi_d, phi_dd, phi_t, phi_tt, phi_dt


def _pressure_and_slope(T, rho):
    """ Returns (p [MPa], dp/drho [MPa.m3/kg]) """
    delta = rho / RHOC
    tau = TC / T
    _, phi_d, phi_dd, _, _, _ = _phi_derivatives(delta, tau)
    p = rho * R * T * delta * phi_d / 1000
    dpdrho = R * T * (2 * delta * phi_d + delta ** 2 * phi_dd) / 1000
    return p, dpdrho


def region3_pressure(T, rho):
    """ Pressure in MPa at temperature T (K) and density rho (kg/m3) """
    return float(_pressure_and_slope(float(T), float(rho))[0])


def region3_props(T, rho, converged=True):
    """
    Region 3 properties at given temperature and density.

    Parameters:
        T: temperature in K
        rho: density in kg/m3

    Returns:
        RegionResult (pressure computed from the equation of state)
    """
    T, rho = float(T), float(rho)
    delta = rho / RHOC
    tau = TC / T
    phi, phi_d, phi_dd, phi_t, phi_tt, phi_dt = _phi_derivatives(delta, tau)

    p = rho * R * T * delta * phi_d / 1000
    u = R * T * tau * phi_t
    h = R * T * (tau * phi_t + delta * phi_d)
    s = R * (tau * phi_t - phi)
    cv = -R * tau ** 2 * phi_tt
    x = delta * phi_d - delta * tau * phi_dt
    y = 2 * delta * phi_d + delta ** 2 * phi_dd
    cp = cv + R * x ** 2 / y
    w2 = 1000 * R * T * (y - x ** 2 / (tau ** 2 * phi_tt))

    return RegionResult(
        region=3, temperature=T, pressure=float(p),
        density=rho, specific_volume=1 / rho,
        enthalpy=h, entropy=s, cp=cp, cv=cv,
        internal_energy=u, speed_of_sound=np.sqrt(w2) if w2 > 0 else np.nan,
        converged=converged,
    )


def region3_density(T, P, rho_guess=RHOC, max_iter=R3_MAX_ITER, tol=R3_TOL):
    """
    Solves p(T, rho) = P for rho by Newton-Raphson.

    Each step is limited to half the current density, which keeps rho positive.
    Iteration stops when |p - P| < tol, when the slope dp/drho is not positive
    and finite, or after max_iter steps. The outcome is reported through the
    converged flag rather than raised.

    Parameters:
        T: temperature in K
        P: pressure in MPa
        rho_guess: starting density in kg/m3, defaults to the critical density

    Returns:
        DensitySolution(rho, converged, iterations, residual)
    """
    T, P = float(T), float(P)
    rho = float(rho_guess)
    for iternum in range(max_iter + 1):
        p, dpdrho = _pressure_and_slope(T, rho)
        err = p - P
        if abs(err) < tol:
            return DensitySolution(rho, True, iternum, float(err))
        if iternum == max_iter:
            break
        if not (np.isfinite(dpdrho) and dpdrho > 0):
            logger.warning('Region 3 density solve stopped at T=%g K, P=%g MPa: dp/drho=%g', T, P, dpdrho)
            return DensitySolution(rho, False, iternum, float(err))
        step = err / dpdrho
        step = max(min(step, 0.5 * rho), -0.5 * rho)
        rho -= step
    logger.warning('Region 3 density solve hit %d iterations at T=%g K, P=%g MPa (residual %g MPa)',
                   max_iter, T, P, err)
    return DensitySolution(rho, False, max_iter, float(err))


def region3(T, P, rho_guess=RHOC):
    """
    Dense fluid properties from IAPWS-IF97 Region 3.

    Parameters:
        T: temperature in K
        P: pressure in MPa
        rho_guess: starting density for the Newton solve in kg/m3

    Returns:
        RegionResult, with converged=False if the density solve hit its cap
    """
    sol = region3_density(T, P, rho_guess)
    res = region3_props(T, sol.rho, converged=sol.converged)
    # Report the requested pressure, the residual is carried by the converged flag
    return replace(res, pressure=float(P))
