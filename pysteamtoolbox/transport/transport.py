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

import numpy as np
import numpy.typing as npt

from pysteamtoolbox.constants import TC, RHOC
from pysteamtoolbox.shared_fns import convert_to_numpy, process_output

# IAPWS 2008 viscosity. Dilute-gas coefficients H_i
_H0 = np.array([1.67752, 2.20462, 0.6366564, -0.241605])
# Residual coefficients H_ij, row i on (1/Tr - 1), column j on (rhor - 1)
_H1 = np.array([
    [0.520094, 0.222531, -0.281378, 0.161913, -0.0325372, 0.0, 0.0],
    [0.0850895, 0.999115, -0.906851, 0.257399, 0.0, 0.0, 0.0],
    [-1.08374, 1.88797, -0.772479, 0.0, 0.0, 0.0, 0.0],
    [-0.289555, 1.26613, -0.489837, 0.0, 0.0698452, 0.0, -0.00435673],
    [0.0, 0.0, -0.25704, 0.0, 0.0, 0.00872102, 0.0],
    [0.0, 0.120573, 0.0, 0.0, 0.0, 0.0, -0.000593264],
])

# IAPWS 2011 thermal conductivity. Dilute-gas coefficients L_k
_L0 = np.array([2.443221e-3, 1.323095e-2, 6.770357e-3, -3.454586e-3, 4.096266e-4])
# Residual coefficients L_ij, row i on (1/Tr - 1), column j on (rhor - 1)
_L1 = np.array([
    [1.60397357, -0.646013523, 0.111443906, 0.102997357, -0.0504123634, 0.00609859258],
    [2.33771842, -2.78843778, 1.53616167, -0.463045512, 0.0832827019, -0.00719201245],
    [2.19650529, -4.54580785, 3.55777244, -1.40944978, 0.275418278, -0.0205938816],
    [-1.21051378, 1.60812989, -0.621178141, 0.0716373224, 0.0, 0.0],
    [-2.7203370, 4.57586331, -3.18369245, 1.1168348, -0.19268305, 0.012913842],
])


def _residual_factor(coeffs, tr, rhor):
    """ exp(rhor * sum_ij c_ij (1/tr - 1)^i (rhor - 1)^j) evaluated elementwise """
    ni, nj = coeffs.shape
    a = (1 / tr - 1)[..., None] ** np.arange(ni)
    b = (rhor - 1)[..., None] ** np.arange(nj)
    total = np.einsum('...i,ij,...j->...', a, coeffs, b)
    return np.exp(rhor * total)


def viscosity(T: npt.ArrayLike, rho: npt.ArrayLike) -> np.ndarray:
    """ Returns dynamic viscosity of water (Pa.s), IAPWS 2008 without the critical enhancement
        T: Temperature (K)
        rho: Density (kg/m3)
        Accepts scalars or arrays, returning float or array accordingly
    """
    is_list = not np.isscalar(T) or not np.isscalar(rho)
    T, rho = np.broadcast_arrays(convert_to_numpy(T).astype(float), convert_to_numpy(rho).astype(float))
    tr, rhor = T / TC, rho / RHOC

    mu0 = 100 * np.sqrt(tr) / np.sum(_H0 / tr[..., None] ** np.arange(4), axis=-1)  # uPa.s
    mu1 = _residual_factor(_H1, tr, rhor)
    return process_output(mu0 * mu1 * 1e-6, is_list)


def thermal_conductivity(T: npt.ArrayLike, rho: npt.ArrayLike) -> np.ndarray:
    """ Returns thermal conductivity of water (W/m/K), IAPWS 2011 without the critical enhancement
        T: Temperature (K)
        rho: Density (kg/m3)
        Accepts scalars or arrays, returning float or array accordingly
    """
    is_list = not np.isscalar(T) or not np.isscalar(rho)
    T, rho = np.broadcast_arrays(convert_to_numpy(T).astype(float), convert_to_numpy(rho).astype(float))
    tr, rhor = T / TC, rho / RHOC

    lam0 = np.sqrt(tr) / np.sum(_L0 / tr[..., None] ** np.arange(5), axis=-1)  # mW/m/K
    lam1 = _residual_factor(_L1, tr, rhor)
    return process_output(lam0 * lam1 * 1e-3, is_list)
