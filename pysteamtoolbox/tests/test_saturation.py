#!/usr/bin/env python3
"""
Validation tests for saturation properties.
Run with: python3 -m pytest pysteamtoolbox/tests/ -v
Or standalone: python3 pysteamtoolbox/tests/test_saturation.py
"""

import sys
import os
import numpy as np

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))
import pysteamtoolbox.if97 as if97
from pysteamtoolbox.errors import DomainRangeError
from pysteamtoolbox.constants import P_ATM, T_TRIPLE, P_TRIPLE, T_ZERO

RTOL = 0.02  # 2% against steam table values
RT_TOL = 1e-9  # Saturation round trip

# =============================================================================
# Round trips
# =============================================================================

def test_psat_tsat_roundtrip():
    """tsat(psat(T)) == T across the saturation curve"""
    for T in np.linspace(200, 647.0, 25):
        T_back = if97.tsat(if97.psat(T))
        assert abs(T_back - T) / T < RT_TOL, f"T={T} -> {T_back}"

def test_tsat_psat_roundtrip():
    """psat(tsat(P)) == P across the saturation curve"""
    for P in np.geomspace(1e-5, 22.0, 25):
        P_back = if97.psat(if97.tsat(P))
        assert abs(P_back - P) / P < RT_TOL, f"P={P} -> {P_back}"

# =============================================================================
# Endpoint properties
# =============================================================================

def test_normal_boiling_point():
    """Saturation at one atmosphere"""
    T = if97.tsat(P_ATM)
    assert abs(T - 373.124) < 0.01, f"Tsat(1 atm)={T}"
    assert abs(if97.h_f(T) - 419.1) / 419.1 < RTOL, f"h_f={if97.h_f(T)}"
    assert abs(if97.h_g(T) - 2675.6) / 2675.6 < RTOL, f"h_g={if97.h_g(T)}"
    assert abs(if97.rho_f(T) - 958.4) / 958.4 < RTOL, f"rho_f={if97.rho_f(T)}"

def test_latent_heat():
    hfg = if97.latent_heat(P=P_ATM)
    assert abs(hfg - 2256.5) / 2256.5 < 0.01, f"h_fg={hfg}"
    assert abs(if97.latent_heat(T=373.124) - hfg) < 0.01
    try:
        if97.latent_heat()
        assert False, "latent_heat with no inputs should raise"
    except DomainRangeError:
        pass

def test_triple_point():
    assert abs(if97.psat(T_TRIPLE) - P_TRIPLE) / P_TRIPLE < 1e-3, f"psat(T_triple)={if97.psat(T_TRIPLE)}"

def test_fusion_heat():
    assert abs(if97.fusion_heat(T_ZERO) - 333.55) < 1e-12
    assert if97.fusion_heat(263.15) > if97.fusion_heat(T_ZERO) > if97.fusion_heat(283.15)
    for T in [100.0, 700.0]:
        try:
            if97.fusion_heat(T)
            assert False, f"fusion_heat({T}) should have raised"
        except DomainRangeError as e:
            assert e.name == 'temperature'

def test_sublimation_heat():
    """h_sub = h_if + h_fg, about 2834 kJ/kg at the triple point"""
    h_sub = if97.sublimation_heat(T=T_TRIPLE)
    assert abs(h_sub - 2834.0) / 2834.0 < 0.01, f"h_sub={h_sub}"
    assert abs(h_sub - if97.fusion_heat(T_TRIPLE) - if97.latent_heat(T=T_TRIPLE)) < 1e-9
    assert abs(if97.sublimation_heat(P=if97.psat(T_TRIPLE)) - h_sub) < 1e-6
    try:
        if97.sublimation_heat()
        assert False, "sublimation_heat with no inputs should raise"
    except DomainRangeError:
        pass

def test_liquid_vapor_ordering():
    """Liquid is denser and lower in enthalpy and entropy than vapor below Tc"""
    for T in [280.0, 400.0, 550.0, 623.0, 630.0, 640.0]:
        liquid, vapor = if97.saturation_states(T)
        assert liquid.density > vapor.density, f"T={T}"
        assert liquid.enthalpy < vapor.enthalpy, f"T={T}"
        assert liquid.entropy < vapor.entropy, f"T={T}"
        assert liquid.cp > 0 and vapor.cp > 0, f"T={T}"

def test_region3_saturation_densities():
    """Above 623.15 K the endpoints come from Region 3 at Psat(T)"""
    liquid, vapor = if97.saturation_states(640.0)
    assert liquid.region == 3 and vapor.region == 3
    assert liquid.converged and vapor.converged
    assert abs(liquid.density - 481.5) / 481.5 < RTOL, f"rho_f={liquid.density}"
    assert abs(vapor.density - 177.2) / 177.2 < 0.05, f"rho_g={vapor.density}"
    assert abs(liquid.pressure - if97.psat(640.0)) < 1e-12

def test_saturation_continuity_at_623K():
    """Switching from Regions 1/2 to Region 3 does not jump"""
    below = if97.saturation_states(623.14)
    above = if97.saturation_states(623.16)
    for side in range(2):
        assert abs(below[side].enthalpy - above[side].enthalpy) < 2.0, \
            f"side {side}: {below[side].enthalpy} vs {above[side].enthalpy}"
        assert abs(below[side].density - above[side].density) / below[side].density < 0.01

def test_critical_point():
    """Both endpoints coincide at Tc"""
    liquid, vapor = if97.saturation_states(647.096)
    assert liquid.density == vapor.density == 322.0
    assert liquid.enthalpy == vapor.enthalpy

def test_saturation_states_p():
    liquid, vapor = if97.saturation_states_p(1.0)
    assert abs(liquid.temperature - 453.035632) < 1e-5
    assert abs(if97.h_f(453.035632) - liquid.enthalpy) < 1e-6
    assert abs(if97.s_g(453.035632) - vapor.entropy) < 1e-9

def test_endpoint_accessors():
    T = 500.0
    liquid, vapor = if97.saturation_states(T)
    assert if97.rho_f(T) == liquid.density
    assert if97.rho_g(T) == vapor.density
    assert if97.s_f(T) == liquid.entropy
    assert if97.cp_g(T) == vapor.cp
    assert if97.cv_f(T) == liquid.cv
    assert if97.cv_g(T) == vapor.cv
    assert if97.cp_f(T) == liquid.cp

if __name__ == '__main__':
    print("=" * 70)
    print("SATURATION VALIDATION TESTS")
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
