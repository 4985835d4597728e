import numpy as np
import pytest

from screenot.simulation.noise import correlated_noise, spiked_matrix, white_noise


def test_white_noise_bulk_edge():
    Z = white_noise((400, 400), rng=0)
    s = np.linalg.svd(Z, compute_uv=False)
    assert s[0] == pytest.approx(2.0, abs=0.1)

def test_white_noise_seeded():
    np.testing.assert_array_equal(white_noise((5, 7), rng=3), white_noise((5, 7), rng=3))

def test_white_noise_sigma():
    Z = white_noise((300, 600), sigma=2.0, rng=1)
    # Entry variance is sigma² / max(shape).
    assert np.var(Z) == pytest.approx(4.0 / 600, rel=0.05)

def test_correlated_noise_columns():
    rho = 0.6
    Z = correlated_noise((20000, 4), rho=rho, rng=2)
    corr = np.corrcoef(Z, rowvar=False)
    assert corr[0, 1] == pytest.approx(rho, abs=0.03)
    assert corr[1, 3] == pytest.approx(rho**2, abs=0.03)

@pytest.mark.parametrize("rho", [-1.0, 1.0, 2.0])
def test_correlated_noise_invalid_rho(rho):
    with pytest.raises(ValueError):
        correlated_noise((10, 10), rho=rho)

def test_spiked_matrix_signal():
    spikes = [5.0, 3.0, 1.0]
    noise = white_noise((50, 80), rng=4)
    Y, X = spiked_matrix((50, 80), spikes, noise=noise, rng=4)
    s = np.linalg.svd(X, compute_uv=False)
    np.testing.assert_allclose(s[:3], spikes, rtol=1e-10)
    np.testing.assert_allclose(Y - X, noise, atol=1e-12)

def test_spiked_matrix_checks():
    with pytest.raises(ValueError):
        spiked_matrix((3, 5), [1.0, 1.0, 1.0, 1.0])
    with pytest.raises(ValueError):
        spiked_matrix((10, 10), [1.0], noise=np.zeros((5, 5)))
    with pytest.raises(ValueError):
        white_noise((0, 3))
