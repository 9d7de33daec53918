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
import threading

import numpy as np
import pandas as pd

from pysteamtoolbox.errors import TableLookupError

logger = logging.getLogger(__name__)

# Column headers as exported by the NIST webbook, mapped to short names
NIST_HEADERS = {
    'Temperature\r\nK': 'T',
    'Pressure\r\nMPa': 'P',
    'Density\r\nkg/m^3': 'rho',
    'Volume \r\nm^3 /kg': 'v',
    'Enthalpy\r\nkJ/kg': 'h',
    'Entropy\r\nkJ/(kg K)': 's',
    'Cp\r\nkJ/(kg K)': 'cp',
    'Cv\r\nkJ/(kg K)': 'cv',
    'Therm. cond.\r\nW/(m K)': 'k',
    'Viscosity\r\nµPa s': 'mu',
}
PROPERTY_KEYS = ['rho', 'v', 'h', 's', 'cp', 'cv', 'k', 'mu']

def lerp(x, x0, x1, f0, f1):
    return f0 + (f1 - f0) * (x - x0) / (x1 - x0)

def quad1(x, xs, fs):
    """ 3-point Lagrange interpolation through (xs[i], fs[i]) """
    x0, x1, x2 = xs
    L0 = (x - x1) * (x - x2) / ((x0 - x1) * (x0 - x2))
    L1 = (x - x0) * (x - x2) / ((x1 - x0) * (x1 - x2))
    L2 = (x - x0) * (x - x1) / ((x2 - x0) * (x2 - x1))
    return L0 * fs[0] + L1 * fs[1] + L2 * fs[2]

def interp_1d(xs, fs, x):
    """ Interpolates sorted (xs, fs) at x. Quadratic over the local three-point stencil
        when at least three points are available, linear otherwise. Returns NaN outside [xs[0], xs[-1]]
    """
    n = len(xs)
    if n == 0 or x < xs[0] or x > xs[-1]:
        return np.nan
    if n == 1:
        return fs[0]
    if n >= 3:
        if x <= xs[1]:
            i = 0
        elif x >= xs[n - 2]:
            i = n - 3
        else:
            i = int(np.searchsorted(xs, x, side='right')) - 1
            i = min(max(i, 1), n - 3)
        return quad1(x, xs[i:i + 3], fs[i:i + 3])
    return lerp(x, xs[0], xs[1], fs[0], fs[1])


class CompressedLiquidTable:
    """ Tabulated compressed liquid properties, interpolated in T per pressure slice and then in P

        source: Path to a JSON array of row records, a DataFrame, or a list of row dicts.
                Row keys are either the NIST webbook headers (eg "Temperature\\r\\nK") or
                the short names T, P, rho, v, h, s, cp, cv, k, mu. Viscosity is read in uPa.s.

        The source is read at most once, on first lookup, and is read-only thereafter.
    """
    def __init__(self, source):
        self.source = source
        self._lock = threading.Lock()
        self._slices = None  # {P: DataFrame sorted by T}
        self._pressures = None
        self.load_count = 0

    @property
    def loaded(self) -> bool:
        return self._slices is not None

    def _read(self) -> pd.DataFrame:
        if isinstance(self.source, pd.DataFrame):
            df = self.source.copy()
        elif isinstance(self.source, (list, tuple)):
            df = pd.DataFrame(list(self.source))
        else:
            try:
                df = pd.read_json(self.source, orient='records', convert_dates=False)
            except (OSError, ValueError) as e:
                raise TableLookupError(f'Could not read compressed liquid table {self.source!r}: {e}') from e
        df = df.rename(columns=NIST_HEADERS)
        missing = [c for c in ['T', 'P'] + PROPERTY_KEYS if c not in df.columns]
        if missing:
            raise TableLookupError(f'Compressed liquid table is missing columns {missing}')
        df = df[['T', 'P'] + PROPERTY_KEYS].astype(float)
        df['mu'] = df['mu'] * 1e-6  # uPa.s -> Pa.s
        return df

    def load(self):
        """ Reads and slices the table if that has not already happened """
        if self._slices is not None:
            return
        with self._lock:
            if self._slices is not None:
                return
            df = self._read()
            slices = {p: grp.sort_values('T').reset_index(drop=True) for p, grp in df.groupby('P')}
            self._pressures = np.array(sorted(slices))
            self.load_count += 1
            logger.debug('Loaded compressed liquid table: %d rows in %d pressure slices', len(df), len(slices))
            self._slices = slices

    @property
    def pressure_range(self):
        self.load()
        return float(self._pressures[0]), float(self._pressures[-1])

    def lookup(self, T: float, P: float) -> dict:
        """ Returns dict of rho, v, h, s, cp, cv, k, mu interpolated at T (K) and P (MPa)
            Raises TableLookupError if (T, P) is not covered by the table
        """
        self.load()
        pmin, pmax = self.pressure_range
        if not pmin <= P <= pmax:
            raise TableLookupError(f'Compressed liquid pressure {P} MPa outside table range [{pmin}, {pmax}] MPa')

        out = {}
        for key in PROPERTY_KEYS:
            pvals, vals = [], []
            for p in self._pressures:
                grid = self._slices[p]
                val = interp_1d(grid['T'].values, grid[key].values, T)
                if not np.isfinite(val):
                    continue  # Slice does not cover T
                pvals.append(p)
                vals.append(val)
            if not pvals:
                tmin = min(g['T'].iloc[0] for g in self._slices.values())
                tmax = max(g['T'].iloc[-1] for g in self._slices.values())
                raise TableLookupError(f'Compressed liquid table has no data at T={T} K (covers {tmin} - {tmax} K)')
            if not pvals[0] <= P <= pvals[-1]:
                raise TableLookupError(
                    f'Compressed liquid table covers T={T} K only between {pvals[0]} and {pvals[-1]} MPa, not at {P} MPa')
            out[key] = float(interp_1d(np.array(pvals), np.array(vals), P))
        return out
