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

import logging
import numpy as np
import numpy.typing as npt
from typing import Callable, Optional, Tuple

from pysteamtoolbox.constants import MAX_IT, MAX_EXPAND
from pysteamtoolbox.errors import BracketingError, ConvergenceError

logger = logging.getLogger(__name__)

def bisect_solve(
    args,
    f: Callable,
    xmin: float,
    xmax: float,
    tol: float,
    limits: Optional[Tuple[float, float]] = None,
    max_iter: int = MAX_IT,
    max_expand: int = MAX_EXPAND,
    mode: str = '',
    target: Optional[float] = None,
) -> float:
    """ Returns x such that f(args, x) = 0, found by bisection
        args: Passed through unchanged as first argument of f
        f: Error function, f(args, x)
        xmin, xmax: Initial bracket
        tol: Absolute tolerance on x
        limits: (lo, hi) the bracket may grow to. Defaults to the initial bracket
        max_iter: Bisection iteration cap
        max_expand: Number of times the bracket width may be doubled when the root is not enclosed
        mode, target: Reported in the BracketingError raised if no sign change can be found
    """
    lo, hi = min(xmin, xmax), max(xmin, xmax)
    if limits is None:
        limits = (lo, hi)
    lim_lo, lim_hi = limits
    lo, hi = max(lo, lim_lo), min(hi, lim_hi)

    err_lo, err_hi = f(args, lo), f(args, hi)
    nexpand = 0
    while True:
        if not (np.isfinite(err_lo) and np.isfinite(err_hi)):
            raise BracketingError(f'{mode}: error function not finite on bracket [{lo}, {hi}]', mode=mode, target=target)
        if err_lo == 0:
            return lo
        if err_hi == 0:
            return hi
        if err_lo * err_hi < 0:
            break
        at_limits = lo <= lim_lo and hi >= lim_hi
        if at_limits or nexpand >= max_expand:
            raise BracketingError(
                f'{mode}: could not bracket target {target} within [{lo}, {hi}] after {nexpand} expansions',
                mode=mode, target=target)
        width = hi - lo
        lo, hi = max(lim_lo, lo - width / 2), min(lim_hi, hi + width / 2)
        err_lo, err_hi = f(args, lo), f(args, hi)
        nexpand += 1

    if nexpand > 0:
        logger.debug('%s: bracket grown %d times to [%g, %g]', mode, nexpand, lo, hi)

    for iternum in range(max_iter):
        mid_val = (lo + hi) / 2
        if (hi - lo) / 2 < tol:
            logger.debug('%s: bisection converged in %d iterations', mode, iternum)
            return mid_val
        err_mid = f(args, mid_val)
        if err_mid == 0:
            return mid_val
        if err_lo * err_mid < 0:  # Solution lies below mid_val
            hi, err_hi = mid_val, err_mid
        else:
            lo, err_lo = mid_val, err_mid
    raise ConvergenceError(f'{mode}: bisection did not converge in {max_iter} iterations', iterations=max_iter, residual=hi - lo)

def clamp(x: float, lo: float = 0.0, hi: float = 1.0) -> float:
    """ Clamps x to [lo, hi]. Non-finite values pass through as NaN """
    if not np.isfinite(x):
        return np.nan
    return min(max(x, lo), hi)

def convert_to_numpy(input_data):
    # Convert input data to a numpy array ensuring it is always sizeable
    if isinstance(input_data, np.ndarray):
        return input_data
    else:
        # Ensuring even scalars become arrays with one element
        return np.atleast_1d(input_data)

def process_output(output_data: npt.ArrayLike, is_list: bool):
    # Return a float for a single input value, otherwise an array
    output_data = np.asarray(output_data, dtype=float)
    if not is_list and output_data.size == 1:
        return float(output_data.item())
    return output_data
