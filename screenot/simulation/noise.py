from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from scipy.linalg import cholesky, toeplitz


def _rng(rng: np.random.Generator | int | None) -> np.random.Generator:
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)

def _check_shape(shape: tuple[int, int]) -> tuple[int, int]:
    n_rows: int
    n_cols: int
    n_rows, n_cols = (int(s) for s in shape)
    if n_rows < 1 or n_cols < 1:
        raise ValueError("shape must have positive dimensions")
    return n_rows, n_cols


def white_noise(
        shape: tuple[int, int],
        *,
        sigma: float = 1.0,
        rng: np.random.Generator | int | None = None,
    ) -> NDArray[np.floating]:
    """
    I.i.d. Gaussian noise with entries of variance sigma² / max(shape).

    With this scaling the singular value bulk ends at sigma∙(1 + √gamma).
    """

    n_rows: int
    n_cols: int
    n_rows, n_cols = _check_shape(shape)
    if sigma < 0:
        raise ValueError("sigma must be >= 0")

    Z: NDArray[np.floating] = _rng(rng).standard_normal((n_rows, n_cols))
    return (float(sigma) / np.sqrt(max(n_rows, n_cols))) * Z

def correlated_noise(
        shape: tuple[int, int],
        *,
        rho: float = 0.5,
        sigma: float = 1.0,
        rng: np.random.Generator | int | None = None,
    ) -> NDArray[np.floating]:
    """
    Gaussian noise whose columns are correlated as an AR(1) process.

    Each row is drawn with covariance C_ij = rho^|i - j| (times
    sigma² / max(shape)), applied through the Cholesky factor of C. The
    resulting singular value bulk no longer follows the Marchenko-Pastur law.
    """

    n_rows: int
    n_cols: int
    n_rows, n_cols = _check_shape(shape)
    if not (-1.0 < rho < 1.0):
        raise ValueError("rho must be in (-1, 1)")

    cov: NDArray[np.floating] = toeplitz(float(rho) ** np.arange(n_cols))
    L: NDArray[np.floating] = cholesky(cov, lower=True)

    Z: NDArray[np.floating] = white_noise((n_rows, n_cols), sigma=sigma, rng=rng)
    return Z @ L.T

def spiked_matrix(
        shape: tuple[int, int],
        spikes: NDArray[np.floating] | list[float],
        *,
        noise: NDArray[np.floating] | None = None,
        rng: np.random.Generator | int | None = None,
    ) -> tuple[NDArray[np.floating], NDArray[np.floating]]:
    """
    Low-rank signal X = U diag(spikes) Vᵀ with random orthonormal U, V, plus noise.

    Parameters
    ----------
    shape : tuple[int, int]
        Shape of the matrices.
    spikes : NDArray[np.floating] | list[float]
        Signal singular values.
    noise : NDArray[np.floating] | None, optional
        Noise matrix to add. By default white_noise(shape, rng=rng).
    rng : np.random.Generator | int | None, optional
        Random generator or seed.

    Returns
    -------
    tuple[NDArray[np.floating], NDArray[np.floating]]
        The observed matrix Y = X + noise and the signal X.
    """

    n_rows: int
    n_cols: int
    n_rows, n_cols = _check_shape(shape)
    s: NDArray[np.floating] = np.asarray(spikes, dtype=float).reshape(-1)
    r: int = s.size
    if r > min(n_rows, n_cols):
        raise ValueError("more spikes than min(shape)")
    if np.any(s < 0):
        raise ValueError("spikes must be non-negative")

    gen: np.random.Generator = _rng(rng)
    U, _ = np.linalg.qr(gen.standard_normal((n_rows, r)))
    V, _ = np.linalg.qr(gen.standard_normal((n_cols, r)))
    X: NDArray[np.floating] = (U * s) @ V.T

    if noise is None:
        noise = white_noise((n_rows, n_cols), rng=gen)
    else:
        noise = np.asarray(noise, dtype=float)
        if noise.shape != (n_rows, n_cols):
            raise ValueError(f"noise shape {noise.shape} does not match {(n_rows, n_cols)}")

    return X + noise, X
