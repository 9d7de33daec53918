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

import threading
from dataclasses import dataclass, field, fields
from typing import Optional

from tabulate import tabulate

from pysteamtoolbox.classes import input_mode, phase, engine as engine_type, SATURATION_PHASES
from pysteamtoolbox.constants import SAT_EPS, T_TOL, P_TOL, MAX_IT, MAX_EXPAND
from pysteamtoolbox.errors import InvalidModeError, TableLookupError
from pysteamtoolbox.tables import CompressedLiquidTable
from pysteamtoolbox.validate import validate_methods

# Property names accepted in place of primary/secondary by InputSpec.from_dict
MODE_KEYS = {
    input_mode.TP: ('T', 'P'),
    input_mode.TX: ('T', 'x'),
    input_mode.PX: ('P', 'x'),
    input_mode.PH: ('P', 'h'),
    input_mode.PS: ('P', 's'),
    input_mode.TS: ('T', 's'),
}

_UNITS = {
    'temperature': 'K',
    'pressure': 'MPa',
    'quality': '-',
    'density': 'kg/m3',
    'specific_volume': 'm3/kg',
    'enthalpy': 'kJ/kg',
    'entropy': 'kJ/kg/K',
    'cp': 'kJ/kg/K',
    'cv': 'kJ/kg/K',
    'internal_energy': 'kJ/kg',
    'speed_of_sound': 'm/s',
    'viscosity': 'Pa.s',
    'thermal_conductivity': 'W/m/K',
}


@dataclass(frozen=True)
class ThermodynamicState:
    """ Fully resolved state of water or steam """
    temperature: float  # K
    pressure: float  # MPa
    phase: phase
    region: int  # IF97 region, 4 for saturated and two-phase states
    quality: Optional[float]  # None unless saturated or two-phase
    density: float  # kg/m3
    specific_volume: float  # m3/kg
    enthalpy: float  # kJ/kg
    entropy: float  # kJ/kg/K
    cp: float  # kJ/kg/K, NaN when two-phase
    cv: float  # kJ/kg/K, NaN when two-phase
    internal_energy: float  # kJ/kg
    speed_of_sound: float  # m/s, NaN when two-phase
    viscosity: float  # Pa.s, NaN when two-phase
    thermal_conductivity: float  # W/m/K, NaN when two-phase
    converged: bool = True
    engine: engine_type = engine_type.IF97

    def as_dict(self) -> dict:
        """ Field values keyed by name, with the phase and engine as plain strings """
        out = {f.name: getattr(self, f.name) for f in fields(self)}
        out['phase'] = self.phase.value
        out['engine'] = self.engine.name
        return out

    @property
    def saturated(self) -> bool:
        """ True for saturated and two-phase states, where quality is defined """
        return self.phase in SATURATION_PHASES

    def summary(self) -> str:
        """ Plain text table of the state, with quality listed only for saturated states """
        table = [['phase', self.phase.value, ''], ['region', self.region, '']]
        for name, unit in _UNITS.items():
            if name == 'quality' and not self.saturated:
                continue
            table.append([name, getattr(self, name), unit])
        table.append(['converged', self.converged, ''])
        table.append(['engine', self.engine.name, ''])
        return tabulate(table, headers=['Property', 'Value', 'Unit'], floatfmt='.6g')


@dataclass(frozen=True)
class InputSpec:
    """ Solver input: a mode plus its two independent values, in K, MPa, kJ/kg and kJ/kg/K
        mode: input_mode member or case-insensitive string ('TP', 'Tx', 'Px', 'Ph', 'Ps', 'Ts')
    """
    mode: input_mode
    primary: float
    secondary: float

    def __post_init__(self):
        object.__setattr__(self, 'mode', validate_methods(['mode'], [self.mode]))
        object.__setattr__(self, 'primary', float(self.primary))
        object.__setattr__(self, 'secondary', float(self.secondary))

    @classmethod
    def from_dict(cls, d: dict) -> 'InputSpec':
        """ Builds an InputSpec from {"mode": "Ph", "primary": 1.0, "secondary": 2800.0}
            or with the named keys of the mode, eg {"mode": "Ph", "P": 1.0, "h": 2800.0}
        """
        if 'mode' not in d:
            raise InvalidModeError('Input dictionary has no mode')
        mode = validate_methods(['mode'], [d['mode']])
        if 'primary' in d and 'secondary' in d:
            return cls(mode, d['primary'], d['secondary'])
        k1, k2 = MODE_KEYS[mode]
        if k1 in d and k2 in d:
            return cls(mode, d[k1], d[k2])
        raise InvalidModeError(f"{mode.name} input requires 'primary' and 'secondary' (or '{k1}' and '{k2}')")

    @property
    def names(self):
        return MODE_KEYS[self.mode]


@dataclass
class SolverContext:
    """ Solver configuration and the lazily loaded compressed liquid table
        engine: Single-phase property engine, engine.IF97 (default) or engine.IAPWS95
        strict: Raise ConvergenceError when a Newton density solve misses tolerance
        sat_eps: Half width of the saturation band (MPa)
        t_tol, p_tol: Bisection tolerances (K, MPa)
        max_iter: Bisection iteration cap
        max_expand: Bracket doubling cap
        table_path: JSON compressed liquid table used by compressed_liquid()
    """
    engine: engine_type = engine_type.IF97
    strict: bool = False
    sat_eps: float = SAT_EPS
    t_tol: float = T_TOL
    p_tol: float = P_TOL
    max_iter: int = MAX_IT
    max_expand: int = MAX_EXPAND
    table_path: Optional[str] = None
    _table: Optional[CompressedLiquidTable] = field(default=None, init=False, repr=False, compare=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False, compare=False)

    def __post_init__(self):
        self.engine = validate_methods(['engine'], [self.engine])

    @property
    def table(self) -> CompressedLiquidTable:
        """ Compressed liquid table, created and loaded once on first use """
        if self.table_path is None:
            raise TableLookupError('No compressed liquid table configured (set SolverContext.table_path)')
        if self._table is None:
            with self._lock:
                if self._table is None:
                    self._table = CompressedLiquidTable(self.table_path)
        self._table.load()
        return self._table


_default_context = None
_default_lock = threading.Lock()

def default_context() -> SolverContext:
    """ Shared SolverContext used when none is passed """
    global _default_context
    if _default_context is None:
        with _default_lock:
            if _default_context is None:
                _default_context = SolverContext()
    return _default_context
