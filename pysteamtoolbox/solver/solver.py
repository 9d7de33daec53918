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
from typing import Optional, Union

import numpy as np
import numpy.typing as npt
import pandas as pd

from pysteamtoolbox.classes import input_mode, phase, engine, REGION_PHASE
from pysteamtoolbox.constants import TC, PC, RHOC, T_MIN, P_MIN, P_MAX, T_R1_MAX, T_R5_MIN, P_R5_MAX, T_BRACKET
from pysteamtoolbox.errors import ConvergenceError, DomainRangeError, SaturationLockError
from pysteamtoolbox.if97 import (evaluate_tp, select_region, region3, region3_guess, psat, tsat,
                                 in_saturation_band, saturation_states, RegionResult)
from pysteamtoolbox.if97.region4 import P_MIN_SAT
import pysteamtoolbox.iapws95 as iapws95
from pysteamtoolbox.shared_fns import bisect_solve, clamp, convert_to_numpy
from pysteamtoolbox.transport import viscosity, thermal_conductivity
from pysteamtoolbox.validate import check_envelope, check_temperature, check_pressure, check_quality, t_max_at
from .state import ThermodynamicState, InputSpec, SolverContext, default_context

logger = logging.getLogger(__name__)

# Properties reported by compare_to_if97
COMPARABLE_KEYS = ['density', 'specific_volume', 'enthalpy', 'entropy', 'cp', 'cv', 'internal_energy',
                   'speed_of_sound', 'viscosity', 'thermal_conductivity']

#=======================================================================
# State construction
#=======================================================================
def _iapws95_applies(res: RegionResult) -> bool:
    """ True for vapor-side single-phase states, where the truncated IAPWS-95 residual holds """
    return res.region in (2, 5) or (res.region == 3 and res.density <= RHOC)

def _forward(T: float, P: float, ctx: SolverContext):
    """ Single-phase properties at (T, P) and the engine that produced them
        Under engine.IAPWS95, Region 1 and liquid-side Region 3 states stay with IF97
    """
    if T > T_R1_MAX and in_saturation_band(T, P, ctx.sat_eps):
        # Only reachable at the critical point, where liquid and vapor coincide
        res = region3(T, P, region3_guess(T, P))
    else:
        res = evaluate_tp(T, P, ctx.sat_eps)
    if ctx.engine == engine.IAPWS95 and _iapws95_applies(res):
        return iapws95.state(T, P, rho_guess=res.density, region=res.region, strict=ctx.strict), engine.IAPWS95
    if ctx.strict and not res.converged:
        raise ConvergenceError(f'Region 3 density solve did not converge at T={T} K, P={P} MPa')
    return res, engine.IF97

def _single_state(res: RegionResult, source: engine = engine.IF97, state_phase: Optional[phase] = None,
                  quality: Optional[float] = None, region: Optional[int] = None) -> ThermodynamicState:
    """ ThermodynamicState from a single-phase or saturated endpoint RegionResult """
    return ThermodynamicState(
        temperature=res.temperature, pressure=res.pressure,
        phase=REGION_PHASE[res.region] if state_phase is None else state_phase,
        region=res.region if region is None else region,
        quality=quality,
        density=res.density, specific_volume=1 / res.density,
        enthalpy=res.enthalpy, entropy=res.entropy, cp=res.cp, cv=res.cv,
        internal_energy=res.internal_energy, speed_of_sound=res.speed_of_sound,
        viscosity=viscosity(res.temperature, res.density),
        thermal_conductivity=thermal_conductivity(res.temperature, res.density),
        converged=res.converged, engine=source,
    )

def _state_at(T: float, P: float, ctx: SolverContext) -> ThermodynamicState:
    res, source = _forward(T, P, ctx)
    return _single_state(res, source)

def _mix(T: float, P: float, liquid: RegionResult, vapor: RegionResult, x: float,
         ctx: SolverContext) -> ThermodynamicState:
    """ Saturated or two-phase state at quality x from the IF97 saturated endpoints at T """
    if ctx.strict and not (liquid.converged and vapor.converged):
        raise ConvergenceError(f'Saturated density solve did not converge at T={T} K')
    x = clamp(x)
    if x == 0:
        return _single_state(liquid, engine.IF97, phase.SATURATED_LIQUID, 0.0, region=4)
    if x == 1:
        return _single_state(vapor, engine.IF97, phase.SATURATED_VAPOR, 1.0, region=4)
    v = (1 - x) * liquid.specific_volume + x * vapor.specific_volume
    return ThermodynamicState(
        temperature=T, pressure=P, phase=phase.TWO_PHASE, region=4, quality=x,
        density=1 / v, specific_volume=v,
        enthalpy=(1 - x) * liquid.enthalpy + x * vapor.enthalpy,
        entropy=(1 - x) * liquid.entropy + x * vapor.entropy,
        cp=np.nan, cv=np.nan,
        internal_energy=(1 - x) * liquid.internal_energy + x * vapor.internal_energy,
        speed_of_sound=np.nan, viscosity=np.nan, thermal_conductivity=np.nan,
        converged=liquid.converged and vapor.converged, engine=engine.IF97,
    )

def _quality(target, f_liq, f_vap):
    return clamp((target - f_liq) / (f_vap - f_liq))

#=======================================================================
# Direct modes
#=======================================================================
def _solve_tp(T, P, ctx):
    check_envelope(T, P)
    if select_region(T, P, ctx.sat_eps) == 4:
        raise SaturationLockError(
            f'T={T} K, P={P} MPa lies on the saturation line, where temperature and pressure do not fix the state. '
            'Supply a quality instead (Tx or Px mode)', name='quality', value=P, bound=psat(T))
    return _state_at(T, P, ctx)

def _solve_tx(T, x, ctx):
    check_temperature(T)
    if T > TC:
        raise DomainRangeError(f'Temperature {T} K is above the critical temperature of {TC} K',
                               name='temperature', value=T, bound=TC)
    check_quality(x)
    liquid, vapor = saturation_states(T)
    return _mix(T, psat(T), liquid, vapor, x, ctx)

def _solve_px(P, x, ctx):
    check_pressure(P)
    if P > PC:
        raise DomainRangeError(f'Pressure {P} MPa is above the critical pressure of {PC} MPa',
                               name='pressure', value=P, bound=PC)
    check_quality(x)
    T = tsat(P)
    liquid, vapor = saturation_states(T)
    return _mix(T, P, liquid, vapor, x, ctx)

#=======================================================================
# Inverse modes
#=======================================================================
def _t_error(args, T):
    P, target, prop, ctx = args
    return getattr(_forward(T, P, ctx)[0], prop) - target

def _p_error(args, P):
    T, target, prop, ctx = args
    return getattr(_forward(T, P, ctx)[0], prop) - target

def _solve_at_pressure(P, target, prop, mode, ctx):
    """ Resolves the state at pressure P with enthalpy or entropy equal to target """
    check_pressure(P)
    t_top = t_max_at(P)
    args = (P, target, prop, ctx)
    kwargs = dict(max_iter=ctx.max_iter, max_expand=ctx.max_expand, mode=mode, target=target)

    if P >= PC:
        T = bisect_solve(args, _t_error, T_BRACKET[0], min(T_BRACKET[1], t_top), ctx.t_tol,
                         limits=(T_MIN, t_top), **kwargs)
        return _state_at(T, P, ctx)

    Ts = tsat(P)
    liquid, vapor = saturation_states(Ts)
    f_liq, f_vap = getattr(liquid, prop), getattr(vapor, prop)
    if f_liq <= target <= f_vap:
        return _mix(Ts, P, liquid, vapor, (target - f_liq) / (f_vap - f_liq), ctx)

    if target < f_liq:  # Liquid side, T below Tsat(P)
        if P - 2 * ctx.sat_eps < P_MIN_SAT:
            raise DomainRangeError(f'No liquid states resolvable at {P} MPa', name='pressure', value=P, bound=P_MIN_SAT)
        t_edge = tsat(P - 2 * ctx.sat_eps)
        if _t_error(args, t_edge) < 0:
            return _mix(Ts, P, liquid, vapor, _quality(target, f_liq, f_vap), ctx)
        t_lo = T_BRACKET[0] if T_BRACKET[0] < t_edge else T_MIN
        T = bisect_solve(args, _t_error, t_lo, t_edge, ctx.t_tol, limits=(T_MIN, t_edge), **kwargs)
    else:  # Vapor side, T above Tsat(P)
        t_edge = tsat(min(P + 2 * ctx.sat_eps, PC))
        if _t_error(args, t_edge) > 0:
            return _mix(Ts, P, liquid, vapor, _quality(target, f_liq, f_vap), ctx)
        T = bisect_solve(args, _t_error, t_edge, min(T_BRACKET[1], t_top), ctx.t_tol,
                         limits=(t_edge, t_top), **kwargs)

    if in_saturation_band(T, P, ctx.sat_eps):
        return _mix(Ts, P, liquid, vapor, _quality(target, f_liq, f_vap), ctx)
    return _state_at(T, P, ctx)

def _solve_ts(T, s, ctx):
    """ Resolves the state at temperature T with entropy s, searching in pressure
        Liquid entropy rises with pressure below the density maximum (about 277 K), so there
        (T, s) is ambiguous and an s between s_f and s_g resolves as two-phase
    """
    check_temperature(T)
    p_top = P_MAX if T <= T_R5_MIN else P_R5_MAX
    args = (T, s, 'entropy', ctx)
    kwargs = dict(max_iter=ctx.max_iter, max_expand=ctx.max_expand, mode='Ts', target=s)

    if T >= TC:
        P = bisect_solve(args, _p_error, P_MIN, p_top, ctx.p_tol, limits=(P_MIN, p_top), **kwargs)
        return _state_at(T, P, ctx)

    Ps = psat(T)
    liquid, vapor = saturation_states(T)
    s_liq, s_vap = liquid.entropy, vapor.entropy
    if s_liq <= s <= s_vap:
        return _mix(T, Ps, liquid, vapor, (s - s_liq) / (s_vap - s_liq), ctx)

    if s < s_liq:  # Liquid side, entropy falls as pressure rises above about 277 K
        p_edge = Ps + 2 * ctx.sat_eps
        if _p_error(args, p_edge) < 0:
            return _mix(T, Ps, liquid, vapor, _quality(s, s_liq, s_vap), ctx)
        P = bisect_solve(args, _p_error, p_edge, p_top, ctx.p_tol, limits=(p_edge, p_top), **kwargs)
    else:  # Vapor side
        p_edge = Ps - 2 * ctx.sat_eps
        if p_edge < P_MIN:
            raise DomainRangeError(f'No vapor states resolvable at {T} K above the minimum pressure of {P_MIN} MPa',
                                   name='pressure', value=p_edge, bound=P_MIN)
        if _p_error(args, p_edge) > 0:
            return _mix(T, Ps, liquid, vapor, _quality(s, s_liq, s_vap), ctx)
        P = bisect_solve(args, _p_error, P_MIN, p_edge, ctx.p_tol, limits=(P_MIN, p_edge), **kwargs)

    if in_saturation_band(T, P, ctx.sat_eps):
        return _mix(T, Ps, liquid, vapor, _quality(s, s_liq, s_vap), ctx)
    return _state_at(T, P, ctx)

#=======================================================================
# Public interface
#=======================================================================
def solve(spec: Union[InputSpec, dict], context: Optional[SolverContext] = None) -> ThermodynamicState:
    """ Returns the ThermodynamicState fixed by a pair of independent properties

        spec: InputSpec, or a dict accepted by InputSpec.from_dict
              eg {"mode": "Ph", "primary": 1.0, "secondary": 2800.0}
        context: SolverContext. Defaults to the shared IF97 context
                 With engine.IAPWS95, vapor-side single-phase states come from IAPWS-95; liquid
                 and saturated states stay with IF97 and report engine IF97

        Modes (primary, secondary):
            TP: Temperature (K), Pressure (MPa)
            Tx: Temperature (K), Quality (-)
            Px: Pressure (MPa), Quality (-)
            Ph: Pressure (MPa), Enthalpy (kJ/kg)
            Ps: Pressure (MPa), Entropy (kJ/kg/K)
            Ts: Temperature (K), Entropy (kJ/kg/K)
                Below about 277 K liquid entropy rises with pressure and a (T, s) pair can
                match both a compressed liquid and a two-phase state. The two-phase state is returned

        Raises DomainRangeError for inputs outside the supported envelope, SaturationLockError for a
        TP pair on the saturation line, BracketingError if an inverse solve cannot enclose a root and,
        with context.strict, ConvergenceError if a density iteration misses tolerance
    """
    if isinstance(spec, dict):
        spec = InputSpec.from_dict(spec)
    ctx = default_context() if context is None else context
    a, b = spec.primary, spec.secondary
    logger.debug('Solving %s with (%g, %g) using %s', spec.mode.name, a, b, ctx.engine.name)

    if spec.mode == input_mode.TP:
        return _solve_tp(a, b, ctx)
    if spec.mode == input_mode.TX:
        return _solve_tx(a, b, ctx)
    if spec.mode == input_mode.PX:
        return _solve_px(a, b, ctx)
    if spec.mode == input_mode.PH:
        return _solve_at_pressure(a, b, 'enthalpy', 'Ph', ctx)
    if spec.mode == input_mode.PS:
        return _solve_at_pressure(a, b, 'entropy', 'Ps', ctx)
    return _solve_ts(a, b, ctx)

def compute_quality(T: float, h: Optional[float] = None, s: Optional[float] = None,
                    v: Optional[float] = None) -> float:
    """ Returns vapor quality at saturation temperature T (K), clamped to [0, 1]
        Provide one of h (kJ/kg), s (kJ/kg/K) or v (m3/kg)
    """
    liquid, vapor = saturation_states(T)
    if h is not None:
        return _quality(h, liquid.enthalpy, vapor.enthalpy)
    if s is not None:
        return _quality(s, liquid.entropy, vapor.entropy)
    if v is not None:
        return _quality(v, liquid.specific_volume, vapor.specific_volume)
    raise DomainRangeError('Quality requires one of enthalpy, entropy or specific volume', name='quality')

def water_table(mode, primary: npt.ArrayLike, secondary: npt.ArrayLike,
                context: Optional[SolverContext] = None) -> pd.DataFrame:
    """ Returns a DataFrame with one solved state per row
        mode: input_mode member or string, eg 'Ph'
        primary, secondary: Scalars or arrays, broadcast against each other
    """
    a, b = np.broadcast_arrays(convert_to_numpy(primary), convert_to_numpy(secondary))
    rows = [solve(InputSpec(mode, x, y), context).as_dict() for x, y in zip(a.ravel(), b.ravel())]
    return pd.DataFrame(rows)

def compare_to_if97(T: float, P: float, props: Union[dict, ThermodynamicState]) -> pd.DataFrame:
    """ Returns a DataFrame comparing supplied properties with the IF97 values at (T, P)
        Columns: model, IF97, abs_error, rel_error_percent (NaN where the reference is ~0)
        Only properties that are finite in both are reported
    """
    if isinstance(props, ThermodynamicState):
        props = props.as_dict()
    ref = _solve_tp(float(T), float(P), SolverContext()).as_dict()
    rows = {}
    for key in COMPARABLE_KEYS:
        model_val, ref_val = props.get(key), ref[key]
        if model_val is None or not (np.isfinite(model_val) and np.isfinite(ref_val)):
            continue
        abs_err = model_val - ref_val
        rel_err = abs_err / ref_val * 100 if abs(ref_val) > 1e-12 else np.nan
        rows[key] = {'model': model_val, 'IF97': ref_val, 'abs_error': abs_err, 'rel_error_percent': rel_err}
    return pd.DataFrame.from_dict(rows, orient='index', columns=['model', 'IF97', 'abs_error', 'rel_error_percent'])

def compressed_liquid(T: float, P: float, context: Optional[SolverContext] = None) -> dict:
    """ Returns tabulated compressed liquid properties (rho, v, h, s, cp, cv, k, mu) at T (K), P (MPa)
        Uses the table at context.table_path, loaded on first use
    """
    ctx = default_context() if context is None else context
    return ctx.table.lookup(T, P)
