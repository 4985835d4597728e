import numpy as np
import pytest

from screenot.analysis.marchenko_pastur import (
    marchenko_pastur_singular_values,
    optimal_white_noise_threshold,
)
from screenot.errors import ThresholdSearchError
from screenot.thresholding.functionals import f_functional
from screenot.thresholding.solver import SolverOptions, compute_opt_threshold


@pytest.mark.parametrize("gamma", [1.0, 0.5])
def test_root_of_functional(gamma):
    fz = marchenko_pastur_singular_values(1000, gamma)
    t = compute_opt_threshold(fz, gamma)
    assert t > fz.max()
    assert abs(f_functional(t, fz, gamma) + 4) < 1e-4

def test_root_with_tight_tolerance():
    rng = np.random.default_rng(3)
    fz = rng.uniform(0.0, 1.0, size=300)
    t = compute_opt_threshold(fz, 0.25, options=SolverOptions(tol=1e-10))
    assert abs(f_functional(t, fz, 0.25) + 4) < 1e-6

@pytest.mark.parametrize("gamma", [1.0, 0.5, 0.1])
def test_matches_white_noise_threshold(gamma):
    fz = marchenko_pastur_singular_values(2000, gamma)
    t = compute_opt_threshold(fz, gamma)
    assert t == pytest.approx(optimal_white_noise_threshold(gamma), rel=0.02)

def test_deterministic():
    fz = marchenko_pastur_singular_values(500, 0.3)
    assert compute_opt_threshold(fz, 0.3) == compute_opt_threshold(fz, 0.3)

def test_order_of_spectrum_is_irrelevant():
    fz = marchenko_pastur_singular_values(500, 0.8)
    assert compute_opt_threshold(fz[::-1], 0.8) == pytest.approx(compute_opt_threshold(fz, 0.8), abs=2e-5)

def test_scale_equivariance():
    fz = marchenko_pastur_singular_values(500, 1.0)
    t = compute_opt_threshold(fz, 1.0)
    # The large spectrum needs several bracket doublings.
    t_big = compute_opt_threshold(1000 * fz, 1.0)
    assert t_big == pytest.approx(1000 * t, abs=0.05)
    assert abs(f_functional(t_big, 1000 * fz, 1.0) + 4) < 1e-4

def test_zero_spectrum_collapses():
    # F = -2 everywhere when fZ is identically zero.
    t = compute_opt_threshold(np.zeros(10), 1.0)
    assert 0 < t < 1e-4

def test_bracket_cap():
    fz = 1e6 * marchenko_pastur_singular_values(200, 1.0)
    with pytest.raises(ThresholdSearchError, match="bracket"):
        compute_opt_threshold(fz, 1.0, options=SolverOptions(max_expansions=0))

def test_non_finite_spectrum():
    with pytest.raises(ThresholdSearchError):
        compute_opt_threshold(np.array([0.5, np.nan, 0.2]), 1.0)

def test_is_runtime_error():
    with pytest.raises(RuntimeError):
        compute_opt_threshold(np.array([np.inf]), 1.0)

@pytest.mark.parametrize("kwargs", [
    {"tol": 0.0},
    {"initial_width": -1.0},
    {"max_expansions": -1},
    {"target": float("nan")},
])
def test_invalid_options(kwargs):
    with pytest.raises(ValueError):
        SolverOptions(**kwargs)

def test_custom_target():
    fz = marchenko_pastur_singular_values(500, 1.0)
    t4 = compute_opt_threshold(fz, 1.0)
    t3 = compute_opt_threshold(fz, 1.0, options=SolverOptions(target=-3.0))
    # F is increasing, so a higher level is reached further out.
    assert t3 > t4
    assert abs(f_functional(t3, fz, 1.0) + 3) < 1e-4
