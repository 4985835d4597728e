"""
Marchenko-Pastur reference quantities for white noise.

For an n x m matrix (n <= m) of i.i.d. entries with variance sigma² / m, the
squared singular values follow the Marchenko-Pastur law with ratio
gamma = n / m, supported on [sigma²(1 - √gamma)², sigma²(1 + √gamma)²]. The
functions here describe the unit-variance case and serve as the white-noise
baseline against which adaptive thresholds are compared.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from scipy.interpolate import PchipInterpolator


def _check_gamma(gamma: float) -> float:
    g: float = float(gamma)
    if not (0.0 < g <= 1.0):
        raise ValueError("gamma must be in (0, 1]")
    return g


def minmax_eigenvalues(
        gamma: float
    ) -> tuple[float, float]:
    """
    Calculate the min and max eigenvalues for a Marchenko-Pastur distribution.

    Parameters
    ----------
    gamma : float
        Aspect ratio, 0 < gamma <= 1.

    Returns
    -------
    tuple[float, float]
        Minimum and maximum eigenvalues.
    """

    g: float = _check_gamma(gamma)
    min_eigenvalue: float = (1 - np.sqrt(g)) ** 2
    max_eigenvalue: float = (1 + np.sqrt(g)) ** 2

    return min_eigenvalue, max_eigenvalue

def bulk_edge(gamma: float) -> float:
    """Upper edge of the singular value bulk, 1 + √gamma."""
    return float(1 + np.sqrt(_check_gamma(gamma)))

def marchenko_pastur_pdf(
        x: NDArray[np.floating],
        gamma: float
    ) -> NDArray[np.floating]:
    """
    Marchenko-Pastur probability density of the eigenvalues.

    p(x) = √((b - x)(x - a)) / (2π∙gamma∙x) for a < x < b, 0 otherwise.

    Parameters
    ----------
    x : NDArray[np.floating]
        Values at which to evaluate the density.
    gamma : float
        Aspect ratio, 0 < gamma <= 1.

    Returns
    -------
    NDArray[np.floating]
        The values of the PDF over x.
    """

    lamminus: float
    lamplus: float
    lamminus, lamplus = minmax_eigenvalues(gamma)
    x = np.asarray(x, dtype=float)
    lamprod: NDArray[np.floating] = (lamplus - x) * (x - lamminus)
    inside: NDArray[np.bool_] = (lamprod > 0) & (x > 0)

    distribution: NDArray[np.floating] = np.zeros_like(x)
    distribution[inside] = (
        np.sqrt(lamprod[inside]) / (2 * np.pi * gamma * x[inside])
    )

    return distribution

def marchenko_pastur_cdf(
        x: NDArray[np.floating],
        gamma: float,
    ) -> NDArray[np.floating]:
    """
    Marchenko-Pastur cumulative distribution of the eigenvalues.

    With a and b the smallest and largest eigenvalues, for a < z < b:
    P(z) = (1 / 2π∙gamma) ∙ {2√(ab) ∙ [tan⁻¹((a(b - z) / b(z - a))¹ᐟ²) - π / 2]
        + ((a + b) / 2) ∙ [tan⁻¹((z - ½(a + b)) / ((b - z)(z - a))¹ᐟ²) + π / 2]
        + ((b - z)(z - a))¹ᐟ²}
    and P = 0 below a, P = 1 above b.

    (1) Epps, B. P.; Krivitzky, E. M.
        Singular Value Decomposition of Noisy Data:
        Mode Corruption. Exp Fluids 2019, 60 (8), 121.
        https://doi.org/10.1007/s00348-019-2761-y.

    Parameters
    ----------
    x : NDArray[np.floating]
        Values at which to evaluate the CDF.
    gamma : float
        Aspect ratio, 0 < gamma <= 1.

    Returns
    -------
    NDArray[np.floating]
        The values of the CDF over x.
    """

    lamminus: float
    lamplus: float
    lamminus, lamplus = minmax_eigenvalues(gamma)
    z: NDArray[np.floating] = np.asarray(x, dtype=float)

    cdf: NDArray[np.floating] = np.where(z >= lamplus, 1.0, 0.0)
    inside: NDArray[np.bool_] = (z > lamminus) & (z < lamplus)
    zi: NDArray[np.floating] = z[inside]

    sqrt_ab: NDArray[np.floating] = np.sqrt((lamplus - zi) * (zi - lamminus))
    fraction1: NDArray[np.floating] = (
        (lamminus * (lamplus - zi)) / (lamplus * (zi - lamminus))
    )
    inv_tangent1: NDArray[np.floating] = (
        2 * np.sqrt(lamplus * lamminus)
        * (np.arctan(np.sqrt(fraction1)) - (np.pi / 2))
    )
    inv_tangent2: NDArray[np.floating] = (
        ((lamplus + lamminus) / 2)
        * (np.arctan((zi - ((lamplus + lamminus) / 2)) / sqrt_ab) + (np.pi / 2))
    )

    cdf[inside] = (1 / (2 * np.pi * gamma)) * (inv_tangent1 + inv_tangent2 + sqrt_ab)

    return np.clip(cdf, 0.0, 1.0)

def marchenko_pastur_singular_values(
        num_singulars: int,
        gamma: float,
        *,
        sigma: float = 1.0,
    ) -> NDArray[np.floating]:
    """
    Quantile-spaced singular values of a white noise matrix.

    The eigenvalue CDF is tabulated between the bulk edges and inverted with a
    monotone (PCHIP) interpolant at the mid-point levels (i + ½) / n. The
    square roots of those eigenvalues are an idealized, noise-free version of
    the singular values of an n x (n / gamma) matrix with entries of variance
    sigma² / (n / gamma).

    Parameters
    ----------
    num_singulars : int
        Number of singular values to produce.
    gamma : float
        Aspect ratio, 0 < gamma <= 1.
    sigma : float, optional
        Noise level. By default 1.

    Returns
    -------
    NDArray[np.floating]
        Singular values in descending order.
    """

    n: int = int(num_singulars)
    if n < 1:
        raise ValueError("num_singulars must be >= 1")

    lamminus: float
    lamplus: float
    lamminus, lamplus = minmax_eigenvalues(gamma)

    # Range over which to interpolate.
    eigen_range: NDArray[np.floating] = np.linspace(lamminus, lamplus, max(64, 8 * n))
    cdf: NDArray[np.floating] = marchenko_pastur_cdf(eigen_range, gamma)

    # PCHIP needs strictly increasing abscissae.
    keep: NDArray[np.bool_] = np.concatenate(([True], np.diff(cdf) > 0))
    levels: NDArray[np.floating] = (np.arange(n, dtype=float)[::-1] + 0.5) / n

    eigens: NDArray[np.floating] = PchipInterpolator(cdf[keep], eigen_range[keep])(levels)
    eigens = np.clip(eigens, lamminus, lamplus)

    return float(sigma) * np.sqrt(eigens)

def optimal_white_noise_threshold(
        gamma: float,
        sigma: float = 1.0,
    ) -> float:
    """
    Optimal hard threshold for singular values in white noise of known level.

    λ*(gamma) = √(2(gamma + 1) + 8∙gamma / ((gamma + 1) + √(gamma² + 14∙gamma + 1)))

    which is 4/√3 for square matrices.

    (1) Gavish, M.; Donoho, D. L.
        The Optimal Hard Threshold for Singular Values is 4/√3.
        IEEE Trans. Inf. Theory 2014, 60 (8), 5040-5053.
        https://doi.org/10.1109/TIT.2014.2323359.

    Parameters
    ----------
    gamma : float
        Aspect ratio, 0 < gamma <= 1.
    sigma : float, optional
        Noise level. By default 1.

    Returns
    -------
    float
        The threshold sigma∙λ*(gamma).
    """

    g: float = _check_gamma(gamma)
    lam: float = np.sqrt(
        2 * (g + 1) + (8 * g) / ((g + 1) + np.sqrt(g**2 + 14 * g + 1))
    )
    return float(sigma) * float(lam)
