#!/usr/bin/env python3
"""
Self-consistency tests for the IAPWS-95 engine.
Run with: python3 -m pytest pysteamtoolbox/tests/ -v
Or standalone: python3 pysteamtoolbox/tests/test_iapws95.py
"""

import sys
import os
import numpy as np

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))
import pysteamtoolbox.iapws95 as iapws95
import pysteamtoolbox.if97 as if97
from pysteamtoolbox.errors import ConvergenceError

RTOL_P = 1e-8  # Density solve tolerance on pressure

def test_ideal_gas_limit():
    """Pressure tends to rho.R.T as density vanishes"""
    T, rho = 800.0, 1e-6
    p_ideal = rho * iapws95.R95 * T / 1000
    assert abs(iapws95.pressure(T, rho) - p_ideal) / p_ideal < 1e-6

def test_solve_density_roundtrip():
    for T, P in [(500, 0.1), (600, 0.01), (800, 1.0), (1200, 5.0)]:
        sol = iapws95.solve_density(T, P)
        assert sol.converged, f"({T}, {P}) did not converge: {sol}"
        assert sol.iterations <= iapws95.MAX_ITER
        assert abs(iapws95.pressure(T, sol.rho) - P) / P < RTOL_P, f"({T}, {P})"

def test_vapor_density_against_if97():
    """Dilute steam densities agree with IF97"""
    for T, P in [(500, 0.1), (700, 0.5), (1000, 1.0)]:
        rho95 = iapws95.solve_density(T, P).rho
        rho97 = if97.evaluate_tp(T, P).density
        assert abs(rho95 - rho97) / rho97 < 0.01, f"({T}, {P}): {rho95} vs {rho97}"

def test_dp_drho_matches_finite_difference():
    T, rho = 700.0, 50.0
    d = 1e-4
    fd = (iapws95.pressure(T, rho + d) - iapws95.pressure(T, rho - d)) / (2 * d)
    assert abs(iapws95.dp_drho(T, rho) - fd) / fd < 1e-6

def test_properties_consistency():
    """cp > cv > 0, h = u + p/rho and a finite speed of sound in the vapor"""
    T, rho = 700.0, 5.0
    props = iapws95.properties(T, rho)
    assert props['cp'] > props['cv'] > 0
    h_check = props['internal_energy'] + props['pressure'] * 1000 / rho
    assert abs(props['enthalpy'] - h_check) < 1e-8, f"h={props['enthalpy']}, u+pv={h_check}"
    assert np.isfinite(props['speed_of_sound']) and props['speed_of_sound'] > 0

def test_entropy_temperature_derivative():
    """(ds/dT) at constant density equals cv/T"""
    T, rho, d = 800.0, 3.0, 1e-3
    ds = (iapws95.properties(T + d, rho)['entropy'] - iapws95.properties(T - d, rho)['entropy']) / (2 * d)
    cv = iapws95.properties(T, rho)['cv']
    assert abs(ds - cv / T) / (cv / T) < 1e-6

def test_state_carries_region_and_flag():
    res = iapws95.state(900, 2.0, rho_guess=if97.evaluate_tp(900, 2.0).density, region=2)
    assert res.region == 2
    assert res.converged
    assert abs(res.pressure - 2.0) < 1e-12
    assert abs(res.density * res.specific_volume - 1) < 1e-12

def test_strict_convergence():
    """A capped solve raises only in strict mode"""
    sol = iapws95.solve_density(500, 0.1, rho_guess=5.0, max_iter=1)
    assert not sol.converged
    try:
        iapws95.solve_density(500, 0.1, rho_guess=5.0, max_iter=1, strict=True)
        assert False, "Should have raised ConvergenceError"
    except ConvergenceError as e:
        assert e.iterations == 1
        assert np.isfinite(e.residual)

if __name__ == '__main__':
    print("=" * 70)
    print("IAPWS-95 ENGINE TESTS")
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
