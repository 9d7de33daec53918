#!/usr/bin/env python3
"""
Validation tests for the multi-mode state solver.
Run with: python3 -m pytest pysteamtoolbox/tests/ -v
Or standalone: python3 pysteamtoolbox/tests/test_solver.py
"""

import sys
import os
import numpy as np
import pandas as pd

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))
import pysteamtoolbox.solver as solver
import pysteamtoolbox.if97 as if97
from pysteamtoolbox.classes import input_mode, phase, engine
from pysteamtoolbox.constants import P_ATM
from pysteamtoolbox.errors import (DomainRangeError, SaturationLockError, InvalidModeError,
                                   WaterPropertiesError, TableLookupError)

RTOL = 0.02
T_ROUNDTRIP = 1e-4  # K

def tp(T, P, context=None):
    return solver.solve(solver.InputSpec('TP', T, P), context)

# =============================================================================
# Direct modes
# =============================================================================

def test_saturated_liquid_one_atmosphere():
    """Px at 1 atm and x = 0 gives saturated liquid near 373.15 K"""
    st = solver.solve({"mode": "Px", "primary": P_ATM, "secondary": 0.0})
    assert st.phase == phase.SATURATED_LIQUID
    assert st.quality == 0
    assert abs(st.temperature - 373.15) < 0.05, f"T={st.temperature}"
    assert abs(st.enthalpy - 419.0) / 419.0 < RTOL, f"h={st.enthalpy}"
    assert np.isfinite(st.cp) and np.isfinite(st.viscosity)

def test_two_phase_mix():
    """Px at 1 MPa, x = 0.5 mixes the saturated endpoints linearly"""
    st = solver.solve({"mode": "Px", "P": 1.0, "x": 0.5})
    liquid, vapor = if97.saturation_states_p(1.0)
    assert st.phase == phase.TWO_PHASE
    assert st.quality == 0.5
    assert st.region == 4
    v_mean = (liquid.specific_volume + vapor.specific_volume) / 2
    assert abs(st.specific_volume - v_mean) < 1e-12, f"v={st.specific_volume}, expected {v_mean}"
    assert abs(st.enthalpy - (liquid.enthalpy + vapor.enthalpy) / 2) < 1e-9
    assert np.isnan(st.cp) and np.isnan(st.cv) and np.isnan(st.speed_of_sound)
    assert np.isnan(st.viscosity) and np.isnan(st.thermal_conductivity)

def test_tx_endpoints():
    T = 450.0
    liquid, vapor = if97.saturation_states(T)
    st0 = solver.solve({"mode": "Tx", "T": T, "x": 0})
    st1 = solver.solve({"mode": "TX", "T": T, "x": 1})
    assert st0.phase == phase.SATURATED_LIQUID and st0.quality == 0.0
    assert st1.phase == phase.SATURATED_VAPOR and st1.quality == 1.0
    assert st0.enthalpy == liquid.enthalpy
    assert st1.enthalpy == vapor.enthalpy
    assert abs(st0.pressure - if97.psat(T)) < 1e-12

def test_tx_invalid_inputs():
    for T, x, name in [(700.0, 0.5, 'temperature'), (400.0, 1.5, 'quality'), (400.0, -0.1, 'quality')]:
        try:
            solver.solve({"mode": "Tx", "T": T, "x": x})
            assert False, f"Tx({T}, {x}) should have raised"
        except DomainRangeError as e:
            assert e.name == name, f"Tx({T}, {x}) named {e.name}"

def test_px_above_critical():
    try:
        solver.solve({"mode": "Px", "P": 25.0, "x": 0.5})
        assert False, "Px above Pc should have raised"
    except DomainRangeError as e:
        assert e.name == 'pressure'

def test_superheated_vapor():
    """TP at 500 K and 1 MPa is superheated vapor"""
    st = tp(500, 1)
    assert st.phase == phase.SUPERHEATED_VAPOR
    assert st.region == 2
    assert st.quality is None
    assert abs(st.enthalpy - 2891) / 2891 < 0.01, f"h={st.enthalpy}"
    assert abs(st.density * st.specific_volume - 1) < 1e-12
    assert st.converged

def test_tp_phases():
    assert tp(300, 3).phase == phase.COMPRESSED_LIQUID
    assert tp(650, 25).phase == phase.DENSE_FLUID
    assert tp(1500, 10).phase == phase.HIGH_TEMPERATURE_STEAM

def test_tp_below_temperature_bound():
    """TP at 50 K is outside the envelope"""
    try:
        tp(50, 1)
        assert False, "Should have raised DomainRangeError"
    except DomainRangeError as e:
        assert e.name == 'temperature'
        assert 'temperature' in str(e).lower()
        assert isinstance(e, ValueError)

def test_tp_on_saturation_line():
    """A TP pair on the saturation curve needs a quality"""
    T = if97.tsat(1.0)
    try:
        tp(T, if97.psat(T))
        assert False, "Should have raised SaturationLockError"
    except SaturationLockError as e:
        assert 'quality' in str(e)

# =============================================================================
# Inverse modes
# =============================================================================

def test_ph_roundtrip():
    """TP -> h -> Ph returns the original temperature"""
    for T, P in [(300, 3), (400, 1), (600, 1), (630, 20), (660, 30), (700, 30), (1500, 10), (1200, 0.01)]:
        h = tp(T, P).enthalpy
        st = solver.solve({"mode": "Ph", "P": P, "h": h})
        assert abs(st.temperature - T) < T_ROUNDTRIP, f"Ph({P}, {h}): T={st.temperature}, expected {T}"

def test_ps_roundtrip():
    for T, P in [(300, 3), (450, 0.5), (650, 25), (900, 5), (1500, 1)]:
        s = tp(T, P).entropy
        st = solver.solve({"mode": "Ps", "P": P, "s": s})
        assert abs(st.temperature - T) < T_ROUNDTRIP, f"Ps({P}, {s}): T={st.temperature}, expected {T}"

def test_ts_roundtrip():
    for T, P in [(400, 10), (500, 0.5), (700, 15), (1500, 5)]:
        s = tp(T, P).entropy
        st = solver.solve({"mode": "Ts", "T": T, "s": s})
        assert abs(st.pressure - P) / P < 1e-5, f"Ts({T}, {s}): P={st.pressure}, expected {P}"

def test_ph_two_phase():
    P = 1.0
    liquid, vapor = if97.saturation_states_p(P)
    h = 0.25 * liquid.enthalpy + 0.75 * vapor.enthalpy
    st = solver.solve({"mode": "Ph", "P": P, "h": h})
    assert st.phase == phase.TWO_PHASE
    assert abs(st.quality - 0.75) < 1e-12
    assert abs(st.temperature - if97.tsat(P)) < 1e-12

def test_ph_saturation_endpoints():
    P = 2.0
    liquid, vapor = if97.saturation_states_p(P)
    st = solver.solve({"mode": "Ph", "P": P, "h": liquid.enthalpy})
    assert st.phase == phase.SATURATED_LIQUID and st.quality == 0
    st = solver.solve({"mode": "Ph", "P": P, "h": vapor.enthalpy})
    assert st.phase == phase.SATURATED_VAPOR and st.quality == 1

def test_ts_two_phase():
    T = 480.0
    liquid, vapor = if97.saturation_states(T)
    s = 0.5 * (liquid.entropy + vapor.entropy)
    st = solver.solve({"mode": "Ts", "T": T, "s": s})
    assert st.phase == phase.TWO_PHASE
    assert abs(st.quality - 0.5) < 1e-12

def test_ts_below_density_maximum():
    """Near 0 C liquid entropy rises with pressure; an s just above s_f resolves as two-phase"""
    T = 275.0
    s_liq, s_vap = if97.s_f(T), if97.s_g(T)
    assert tp(T, 10.0).entropy > s_liq
    s = s_liq + 1e-4
    st = solver.solve({"mode": "Ts", "T": T, "s": s})
    assert st.phase == phase.TWO_PHASE
    assert abs(st.quality - 1e-4 / (s_vap - s_liq)) < 1e-12

def test_ph_out_of_reach():
    """An enthalpy above anything reachable at this pressure cannot be bracketed"""
    try:
        solver.solve({"mode": "Ph", "P": 1.0, "h": 1e5})
        assert False, "Should have raised"
    except WaterPropertiesError as e:
        assert getattr(e, 'mode', None) == 'Ph'
        assert e.target == 1e5

# =============================================================================
# Quality
# =============================================================================

def test_quality_monotonic():
    T = 420.0
    liquid, vapor = if97.saturation_states(T)
    hs = np.linspace(liquid.enthalpy, vapor.enthalpy, 21)
    xs = [solver.compute_quality(T, h=h) for h in hs]
    assert xs[0] == 0, f"quality(h_f)={xs[0]}"
    assert xs[-1] == 1, f"quality(h_g)={xs[-1]}"
    assert all(np.diff(xs) > 0), "Quality should increase with enthalpy"

def test_quality_clamped():
    T = 420.0
    assert solver.compute_quality(T, s=-1.0) == 0
    assert solver.compute_quality(T, v=1e3) == 1
    try:
        solver.compute_quality(T)
        assert False, "Should have raised without a property"
    except DomainRangeError:
        pass

# =============================================================================
# Inputs and context
# =============================================================================

def test_input_spec_parsing():
    spec = solver.InputSpec.from_dict({"mode": "tx", "primary": 400, "secondary": 0.3})
    assert spec.mode == input_mode.TX
    assert spec.names == ('T', 'x')
    assert solver.InputSpec(input_mode.PH, 1, 2800).mode == input_mode.PH
    for bad in [{"mode": "Hs", "primary": 1, "secondary": 2}, {"primary": 1, "secondary": 2},
                {"mode": "Ph", "P": 1}]:
        try:
            solver.InputSpec.from_dict(bad)
            assert False, f"{bad} should have raised"
        except InvalidModeError as e:
            assert isinstance(e, ValueError)

def test_default_context_shared():
    assert solver.default_context() is solver.default_context()
    assert solver.default_context().engine == engine.IF97

def test_context_engine_from_string():
    ctx = solver.SolverContext(engine='iapws95')
    assert ctx.engine == engine.IAPWS95
    try:
        solver.SolverContext(engine='nope')
        assert False, "Should have raised"
    except InvalidModeError:
        pass

def test_iapws95_engine_vapor():
    """IAPWS-95 engine agrees with IF97 for dilute steam"""
    ctx = solver.SolverContext(engine=engine.IAPWS95)
    st95 = tp(600, 0.01, ctx)
    st97 = tp(600, 0.01)
    assert st95.engine == engine.IAPWS95
    assert st95.phase == phase.SUPERHEATED_VAPOR
    assert st95.converged
    assert abs(st95.density - st97.density) / st97.density < 0.005, f"{st95.density} vs {st97.density}"

def test_iapws95_engine_liquid_stays_if97():
    """Liquid states under the IAPWS-95 engine are evaluated with IF97"""
    ctx = solver.SolverContext(engine=engine.IAPWS95)
    for T, P in [(300, 1.0), (640, 25.0)]:
        st95 = tp(T, P, ctx)
        st97 = tp(T, P)
        assert st95.engine == engine.IF97, f"({T}, {P}) evaluated with {st95.engine}"
        assert st95.density == st97.density and st95.enthalpy == st97.enthalpy, f"({T}, {P})"
    assert abs(tp(300, 1.0, ctx).density - 996.96) < 0.1

    st95 = solver.solve({"mode": "Ph", "P": 1.0, "h": 300.0}, ctx)
    st97 = solver.solve({"mode": "Ph", "P": 1.0, "h": 300.0})
    assert st95.phase == phase.COMPRESSED_LIQUID
    assert abs(st95.temperature - st97.temperature) < T_ROUNDTRIP, f"T={st95.temperature}, expected {st97.temperature}"

    st = solver.solve({"mode": "Px", "P": 1.0, "x": 0.5}, ctx)
    assert st.engine == engine.IF97

def test_compressed_liquid_without_table():
    try:
        solver.compressed_liquid(300, 10, solver.SolverContext())
        assert False, "Should have raised TableLookupError"
    except TableLookupError:
        pass

# =============================================================================
# Tables and reports
# =============================================================================

def test_water_table():
    df = solver.water_table('TP', [300, 500, 1500], 1.0)
    assert isinstance(df, pd.DataFrame)
    assert len(df) == 3
    assert list(df['phase']) == ['compressed_liquid', 'superheated_vapor', 'high_temperature_steam']
    assert df['enthalpy'].is_monotonic_increasing

def test_compare_to_if97():
    st = tp(400, 5)
    df = solver.compare_to_if97(400, 5, st)
    assert 'enthalpy' in df.index
    assert (df['abs_error'].abs() < 1e-12).all()
    df = solver.compare_to_if97(400, 5, {'enthalpy': st.enthalpy * 1.01, 'cp': np.nan})
    assert list(df.index) == ['enthalpy']
    assert abs(df.loc['enthalpy', 'rel_error_percent'] - 1.0) < 1e-9

def test_state_summary():
    st = tp(500, 1)
    text = st.summary()
    assert 'superheated_vapor' in text
    assert 'enthalpy' in text and 'kJ/kg' in text
    assert st.saturated is False
    assert 'quality' not in text
    wet = solver.solve({"mode": "Px", "P": 1.0, "x": 0.5})
    assert wet.saturated
    assert 'quality' in wet.summary()
    d = st.as_dict()
    assert d['phase'] == 'superheated_vapor'
    assert d['engine'] == 'IF97'
    assert d['temperature'] == 500

if __name__ == '__main__':
    print("=" * 70)
    print("STATE SOLVER VALIDATION TESTS")
    print("=" * 70)

    tests = [v for k, v in globals().items() if k.startswith('test_')]
    passed = 0
    failed = 0
    errors = []

    for test in tests:
        try:
            test()
            passed += 1
            print(f"  PASS: {test.__name__}")
        except Exception as e:
            failed += 1
            errors.append((test.__name__, str(e)))
            print(f"  FAIL: {test.__name__}: {e}")

    print(f"\n{'=' * 70}")
    print(f"Results: {passed} passed, {failed} failed out of {passed + failed}")

    print("=" * 70)
    sys.exit(1 if failed > 0 else 0)
