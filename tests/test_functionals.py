import numpy as np
import pytest

from screenot.analysis.marchenko_pastur import marchenko_pastur_singular_values
from screenot.thresholding.functionals import (
    d_transform,
    d_transform_prime,
    f_functional,
    f_functional_curve,
    phi,
    phi_prime,
)


@pytest.fixture
def fz():
    rng = np.random.default_rng(11)
    return np.sort(rng.uniform(0.0, 1.0, size=200))


def test_phi_matches_mean(fz):
    y = 1.7
    expected = np.mean(y / (y**2 - fz**2))
    assert phi(y, fz) == pytest.approx(expected, rel=1e-12)

def test_phi_prime_matches_mean(fz):
    y = 1.7
    expected = np.mean(-(y**2 + fz**2) / (y**2 - fz**2) ** 2)
    assert phi_prime(y, fz) == pytest.approx(expected, rel=1e-12)

@pytest.mark.parametrize("y", [1.05, 1.5, 4.0])
def test_phi_prime_is_derivative(fz, y):
    h = 1e-6
    numeric = (phi(y + h, fz) - phi(y - h, fz)) / (2 * h)
    assert phi_prime(y, fz) == pytest.approx(numeric, rel=1e-5)

@pytest.mark.parametrize("gamma", [1.0, 0.5, 0.1])
def test_d_transform(fz, gamma):
    y = 1.3
    ph = np.mean(y / (y**2 - fz**2))
    assert d_transform(y, fz, gamma) == pytest.approx(ph * (gamma * ph + (1 - gamma) / y), rel=1e-12)

@pytest.mark.parametrize("gamma", [1.0, 0.5, 0.1])
@pytest.mark.parametrize("y", [1.05, 1.5, 4.0])
def test_d_transform_prime_is_derivative(fz, gamma, y):
    h = 1e-6
    numeric = (d_transform(y + h, fz, gamma) - d_transform(y - h, fz, gamma)) / (2 * h)
    assert d_transform_prime(y, fz, gamma) == pytest.approx(numeric, rel=1e-5)

def test_f_functional_definition(fz):
    y, gamma = 1.4, 0.3
    expected = y * d_transform_prime(y, fz, gamma) / d_transform(y, fz, gamma)
    assert f_functional(y, fz, gamma) == pytest.approx(expected, rel=1e-12)

@pytest.mark.parametrize("gamma", [1.0, 0.5, 0.2])
def test_f_increasing_above_edge(gamma):
    fz = marchenko_pastur_singular_values(400, gamma)[::-1]
    edge = fz.max()
    ys = np.linspace(edge * 1.001, edge * 5, 300)
    values = f_functional_curve(ys, fz, gamma)
    assert np.all(np.diff(values) > 0)

def test_f_diverges_at_edge(fz):
    edge = fz.max()
    assert f_functional(edge * (1 + 1e-7), fz, 1.0) < -100

def test_f_limit_at_infinity(fz):
    # Phi ~ 1/y and D ~ 1/y² far from the spectrum, so F -> -2.
    assert f_functional(1e4, fz, 0.7) == pytest.approx(-2.0, abs=1e-4)

def test_f_is_scale_invariant(fz):
    y, gamma = 1.6, 0.4
    assert f_functional(10 * y, 10 * fz, gamma) == pytest.approx(f_functional(y, fz, gamma), rel=1e-10)

def test_curve_matches_pointwise(fz):
    ys = np.array([1.1, 1.5, 2.5])
    curve = f_functional_curve(ys, fz, 0.5)
    np.testing.assert_allclose(curve, [f_functional(y, fz, 0.5) for y in ys], rtol=1e-14)

def test_accepts_lists():
    assert phi(2.0, [0.0, 1.0]) == pytest.approx((0.5 + 2.0 / 3.0) / 2)

@pytest.mark.parametrize("gamma", [0.0, -0.5, 1.5])
def test_invalid_gamma(fz, gamma):
    with pytest.raises(ValueError):
        f_functional(2.0, fz, gamma)

def test_empty_spectrum():
    with pytest.raises(ValueError):
        phi(1.0, np.array([]))
