"""
Spectral functionals of an empirical noise distribution.

For a counting measure defined by the pseudo-noise singular values fZ and
aspect ratio gamma (0 < gamma <= 1):

    Phi(y)  = mean[ y / (y² - fZ²) ]
    Phi'(y) = mean[ -(y² + fZ²) / (y² - fZ²)² ]
    D(y)    = Phi(y) ∙ (gamma∙Phi(y) + (1 - gamma) / y)
    D'(y)   = Phi'(y) ∙ (gamma∙Phi(y) + (1 - gamma) / y)
              + Phi(y) ∙ (gamma∙Phi'(y) - (1 - gamma) / y²)
    F(y)    = y ∙ D'(y) / D(y)

F is increasing on (max(fZ), ∞) and tends to -∞ as y → max(fZ)⁺. The
MSE-optimal hard threshold is the unique y with F(y) = -4.

All functions assume y > max(fZ); no guard is applied at the singular points.

(1) Donoho, D. L.; Gavish, M.; Romanov, E.
    ScreeNOT: Exact MSE-Optimal Singular Value Thresholding in Correlated Noise.
    Ann. Statist. 2023, 51 (1), 122-148.
    https://doi.org/10.1214/22-AOS2232.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from numba import njit


@njit(error_model="numpy")
def _phi_moments(y: float, fz: NDArray[np.float64]) -> tuple[float, float]:
    # Single pass over fZ accumulating Phi and Phi'.
    y2 = y * y
    phi = 0.0
    phid = 0.0
    for i in range(fz.shape[0]):
        z2 = fz[i] * fz[i]
        denom = y2 - z2
        phi += y / denom
        phid -= (y2 + z2) / (denom * denom)
    n = fz.shape[0]
    return phi / n, phid / n


def _as_spectrum(fz: NDArray[np.floating]) -> NDArray[np.float64]:
    arr: NDArray[np.float64] = np.ascontiguousarray(fz, dtype=np.float64).reshape(-1)
    if arr.size == 0:
        raise ValueError("fz must be non-empty")
    return arr

def _check_gamma(gamma: float) -> float:
    g: float = float(gamma)
    if not (0.0 < g <= 1.0):
        raise ValueError("gamma must be in (0, 1]")
    return g


def phi(y: float, fz: NDArray[np.floating]) -> float:
    """Phi(y; fZ), the Stieltjes-type transform of the counting measure of fZ."""
    return _phi_moments(float(y), _as_spectrum(fz))[0]

def phi_prime(y: float, fz: NDArray[np.floating]) -> float:
    """Phi'(y; fZ), derivative of Phi with respect to y."""
    return _phi_moments(float(y), _as_spectrum(fz))[1]

def _d_pair(y: float, fz: NDArray[np.float64], gamma: float) -> tuple[float, float]:
    ph: float
    phd: float
    ph, phd = _phi_moments(y, fz)
    inner: float = gamma * ph + (1 - gamma) / y
    d: float = ph * inner
    dd: float = phd * inner + ph * (gamma * phd - (1 - gamma) / y**2)
    return d, dd

def d_transform(y: float, fz: NDArray[np.floating], gamma: float) -> float:
    """D_gamma(y; fZ)."""
    return _d_pair(float(y), _as_spectrum(fz), _check_gamma(gamma))[0]

def d_transform_prime(y: float, fz: NDArray[np.floating], gamma: float) -> float:
    """D_gamma'(y; fZ), derivative of D_gamma with respect to y."""
    return _d_pair(float(y), _as_spectrum(fz), _check_gamma(gamma))[1]

def f_functional(y: float, fz: NDArray[np.floating], gamma: float) -> float:
    """
    F_gamma(y; fZ) = y ∙ D'(y) / D(y).

    Parameters
    ----------
    y : float
        Point of evaluation, y > max(fZ).
    fz : NDArray[np.floating]
        Pseudo-noise singular values defining the counting measure.
    gamma : float
        Aspect ratio, 0 < gamma <= 1.

    Returns
    -------
    float
        The value of F at y.
    """

    y = float(y)
    d: float
    dd: float
    d, dd = _d_pair(y, _as_spectrum(fz), _check_gamma(gamma))
    return y * dd / d

def f_functional_curve(
        ys: NDArray[np.floating],
        fz: NDArray[np.floating],
        gamma: float,
    ) -> NDArray[np.floating]:
    """Evaluate F at every point of ys (each must exceed max(fZ))."""

    spectrum: NDArray[np.float64] = _as_spectrum(fz)
    g: float = _check_gamma(gamma)
    grid: NDArray[np.floating] = np.asarray(ys, dtype=float).reshape(-1)
    out: NDArray[np.floating] = np.empty_like(grid)
    for i, y in enumerate(grid):
        d, dd = _d_pair(float(y), spectrum, g)
        out[i] = y * dd / d
    return out
