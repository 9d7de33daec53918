"""
IAPWS-95 Helmholtz-energy equation of state (truncated residual).

The ideal-gas part is complete. The residual part keeps the seven polynomial
terms and the first four exponential terms of the 1995 release, which
reproduces the dilute and moderately dense vapor well. It is wrong for the dense
liquid: under engine.IAPWS95 the solver evaluates Region 1 and liquid-side
Region 3 states with IAPWS-IF97 instead.

Provides:
    - pressure(T, rho), dp_drho(T, rho)
    - properties(T, rho): dict of p, h, s, u, cp, cv, w
    - solve_density(T, P, rho_guess, strict): damped Newton density solve
    - state(T, P, rho_guess, region, strict): RegionResult at (T, P)

Reference:
    Wagner, W. and Pruss, A. (2002). "The IAPWS Formulation 1995 for the
    Thermodynamic Properties of Ordinary Water Substance for General and
    Scientific Use." J. Phys. Chem. Ref. Data 31, 387-535.

Units: T in K, P in MPa, rho in kg/m3, energies in kJ/kg
"""

import logging
import numpy as np

from pysteamtoolbox.constants import TC, RHOC
from pysteamtoolbox.errors import ConvergenceError
from pysteamtoolbox.if97.result import RegionResult, DensitySolution

logger = logging.getLogger(__name__)

R95 = 0.46151805  # Specific gas constant of IAPWS-95, kJ/(kg.K)
MAX_ITER = 30
TOL = 1e-8  # Relative pressure residual

# Ideal-gas part
_N0 = [-8.3204464837497, 6.6832105275932, 3.00632]
_N0_EXP = np.array([0.012436, 0.97315, 1.27950, 0.96956, 0.24873])
_GAMMA0 = np.array([1.28728967, 3.53734222, 7.74073708, 9.24437796, 27.5075105])

# Residual polynomial terms. Each row: (d_i, t_i, n_i)
_POLY_DTN = [
    (1, -0.5,   0.12533547935523e-01),
    (1,  0.875, 0.78957634722828e+01),
    (1,  1.0,  -0.87803203303561e+01),
    (2,  0.5,   0.31802509345418e+00),
    (2,  0.75, -0.26145533859358e+00),
    (3,  0.375, -0.78199751687981e-02),
    (4,  1.0,   0.88089493102134e-02),
]

# Residual exponential terms. Each row: (c_i, d_i, t_i, n_i)
_EXP_CDTN = [
    (1, 1,  4.0, -0.66856572307965e+00),
    (1, 1,  6.0,  0.20433810950965e+00),
    (1, 1, 12.0, -0.66212605039687e-04),
    (1, 2,  1.0, -0.19232721156002e+00),
]

_PD = np.array([row[0] for row in _POLY_DTN], dtype=float)
_PT = np.array([row[1] for row in _POLY_DTN])
_PN = np.array([row[2] for row in _POLY_DTN])
_EC = np.array([row[0] for row in _EXP_CDTN], dtype=float)
_ED = np.array([row[1] for row in _EXP_CDTN], dtype=float)
_ET = np.array([row[2] for row in _EXP_CDTN])
_EN = np.array([row[3] for row in _EXP_CDTN])


def _ideal(delta, tau):
    """ Returns (a0, a0_tau, a0_tautau) """
    e = np.exp(-_GAMMA0 * tau)
    a0 = np.log(delta) + _N0[0] + _N0[1] * tau + _N0[2] * np.log(tau) + np.sum(_N0_EXP * np.log(1 - e))
    a0_t = _N0[1] + _N0[2] / tau + np.sum(_N0_EXP * _GAMMA0 * (1 / (1 - e) - 1))
    a0_tt = -_N0[2] / tau ** 2 - np.sum(_N0_EXP * _GAMMA0 ** 2 * e / (1 - e) ** 2)
    return a0, a0_t, a0_tt


def _residual(delta, tau):
    """ Returns (ar, ar_d, ar_dd, ar_t, ar_tt, ar_dt) """
    poly = _PN * delta ** _PD * tau ** _PT
    dc = delta ** _EC
    ex = _EN * delta ** _ED * tau ** _ET * np.exp(-dc)
    k = _ED - _EC * dc

    ar = np.sum(poly) + np.sum(ex)
    ar_d = (np.sum(_PD * poly) + np.sum(ex * k)) / delta
    ar_dd = (np.sum(_PD * (_PD - 1) * poly) + np.sum(ex * (k * (k - 1) - _EC ** 2 * dc))) / delta ** 2
    ar_t = (np.sum(_PT * poly) + np.sum(_ET * ex)) / tau
    ar_tt = (np.sum(_PT * (_PT - 1) * poly) + np.sum(_ET * (_ET - 1) * ex)) / tau ** 2
    ar_dt = (np.sum(_PD * _PT * poly) + np.sum(_ET * ex * k)) / (delta * tau)
    return ar, ar_d, ar_dd, ar_t, ar_tt, ar_dt


def pressure(T, rho):
    """ Pressure in MPa at temperature T (K) and density rho (kg/m3) """
    delta, tau = rho / RHOC, TC / T
    _, ar_d, _, _, _, _ = _residual(delta, tau)
    return float(rho * R95 * T * (1 + delta * ar_d) / 1000)


def dp_drho(T, rho):
    """ Isothermal density derivative of pressure, MPa.m3/kg """
    delta, tau = rho / RHOC, TC / T
    _, ar_d, ar_dd, _, _, _ = _residual(delta, tau)
    return float(R95 * T * (1 + 2 * delta * ar_d + delta ** 2 * ar_dd) / 1000)


def properties(T, rho):
    """
    Thermodynamic properties from the Helmholtz energy.

    Parameters:
        T: temperature in K
        rho: density in kg/m3

    Returns:
        dict with pressure (MPa), enthalpy, internal_energy (kJ/kg),
        entropy, cp, cv (kJ/kg/K) and speed_of_sound (m/s)
    """
    T, rho = float(T), float(rho)
    delta, tau = rho / RHOC, TC / T
    a0, a0_t, a0_tt = _ideal(delta, tau)
    ar, ar_d, ar_dd, ar_t, ar_tt, ar_dt = _residual(delta, tau)

    x = 1 + delta * ar_d - delta * tau * ar_dt
    y = 1 + 2 * delta * ar_d + delta ** 2 * ar_dd
    cv = -R95 * tau ** 2 * (a0_tt + ar_tt)
    w2 = 1000 * R95 * T * (y - x ** 2 / (tau ** 2 * (a0_tt + ar_tt)))
    return {
        'pressure': rho * R95 * T * (1 + delta * ar_d) / 1000,
        'enthalpy': R95 * T * (1 + tau * (a0_t + ar_t) + delta * ar_d),
        'internal_energy': R95 * T * tau * (a0_t + ar_t),
        'entropy': R95 * (tau * (a0_t + ar_t) - a0 - ar),
        'cv': cv,
        'cp': cv + R95 * x ** 2 / y,
        'speed_of_sound': np.sqrt(w2) if w2 > 0 else np.nan,
    }


def solve_density(T, P, rho_guess=None, strict=False, max_iter=MAX_ITER, tol=TOL):
    """
    Solves pressure(T, rho) = P for rho by damped Newton iteration.

    Each step f/f' is limited to half the current density so the iterate stays
    positive. Converged when |p - P| / P < tol.

    Parameters:
        T: temperature in K
        P: pressure in MPa
        rho_guess: starting density in kg/m3. Defaults to the ideal-gas density
        strict: raise ConvergenceError instead of returning converged=False

    Returns:
        DensitySolution(rho, converged, iterations, residual)
    """
    T, P = float(T), float(P)
    rho = float(rho_guess) if rho_guess is not None else P * 1000 / (R95 * T)
    err = np.nan
    for iternum in range(max_iter + 1):
        err = pressure(T, rho) - P
        if abs(err) / P < tol:
            return DensitySolution(rho, True, iternum, err)
        if iternum == max_iter:
            break
        slope = dp_drho(T, rho)
        if not (np.isfinite(slope) and slope > 0):
            msg = f'IAPWS-95 density solve stopped at T={T} K, P={P} MPa: dp/drho={slope}'
            if strict:
                raise ConvergenceError(msg, iterations=iternum, residual=err)
            logger.warning(msg)
            return DensitySolution(rho, False, iternum, err)
        step = err / slope
        step = max(min(step, 0.5 * rho), -0.5 * rho)
        rho -= step
    msg = f'IAPWS-95 density solve did not converge in {max_iter} iterations at T={T} K, P={P} MPa'
    if strict:
        raise ConvergenceError(msg, iterations=max_iter, residual=err)
    logger.warning(msg)
    return DensitySolution(rho, False, max_iter, err)


def state(T, P, rho_guess=None, region=0, strict=False):
    """
    IAPWS-95 properties at (T, P).

    Parameters:
        T: temperature in K
        P: pressure in MPa
        rho_guess: starting density in kg/m3 (an IF97 density is a good choice)
        region: IF97 region label carried on the result
        strict: raise ConvergenceError if the density solve fails

    Returns:
        RegionResult
    """
    sol = solve_density(T, P, rho_guess, strict=strict)
    props = properties(T, sol.rho)
    return RegionResult(
        region=region, temperature=float(T), pressure=float(P),
        density=sol.rho, specific_volume=1 / sol.rho,
        enthalpy=props['enthalpy'], entropy=props['entropy'],
        cp=props['cp'], cv=props['cv'],
        internal_energy=props['internal_energy'],
        speed_of_sound=props['speed_of_sound'],
        converged=sol.converged,
    )
