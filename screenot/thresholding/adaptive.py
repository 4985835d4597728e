from __future__ import annotations

import warnings

import numpy as np
from numpy.typing import NDArray

from screenot.thresholding.pseudo_noise import (
    Strategy,
    create_pseudo_noise,
    normalize_strategy,
    validate_bound,
)
from screenot.thresholding.results import ThresholdResult
from screenot.thresholding.solver import SolverOptions, compute_opt_threshold


def aspect_ratio(shape: tuple[int, int]) -> float:
    """gamma = min(n, m) / max(n, m)."""
    n_rows: int
    n_cols: int
    n_rows, n_cols = (int(s) for s in shape)
    if n_rows <= 0 or n_cols <= 0:
        raise ValueError("shape must have positive dimensions")
    return min(n_rows, n_cols) / max(n_rows, n_cols)


def _solve(
        fY: NDArray[np.floating],
        shape: tuple[int, int],
        k: int,
        strategy: Strategy | str,
        options: SolverOptions | None,
        stacklevel: int,
    ) -> tuple[NDArray[np.floating], float, float, int]:
    # stacklevel is the warnings stacklevel as seen from the caller of _solve.

    gamma: float = aspect_ratio(shape)
    fZ: NDArray[np.floating] = create_pseudo_noise(fY, k, strategy=strategy)
    if not np.any(fZ):
        warnings.warn(
            "Pseudo-noise spectrum is identically zero; the threshold collapses to ~0.",
            RuntimeWarning,
            stacklevel=stacklevel + 1,
        )
    Topt: float = compute_opt_threshold(fZ, gamma, options=options)
    r: int = int(np.sum(fY > Topt))
    return fZ, gamma, Topt, r


def optimal_threshold(
        singular_values: NDArray[np.floating],
        shape: tuple[int, int],
        k: int,
        *,
        strategy: Strategy | str = "i",
        options: SolverOptions | None = None,
    ) -> ThresholdResult:
    """
    Adaptive threshold from the singular values alone, without reconstruction.

    Parameters
    ----------
    singular_values : NDArray[np.floating]
        Singular values of the data matrix, length min(shape).
    shape : tuple[int, int]
        Shape of the data matrix, used for the aspect ratio.
    k : int
        Upper bound on the signal rank.
    strategy : str, optional
        Noise bulk reconstruction, '0', 'w' or 'i'. By default 'i'.
    options : SolverOptions | None, optional
        Root search settings.

    Returns
    -------
    ThresholdResult
        Result with Xest=None.
    """

    fY: NDArray[np.floating] = np.sort(np.asarray(singular_values, dtype=float).reshape(-1))[::-1]
    if fY.size != min(int(s) for s in shape):
        raise ValueError(f"expected min(shape)={min(shape)} singular values, got {fY.size}")

    tag: Strategy = normalize_strategy(strategy)
    fZ, gamma, Topt, r = _solve(fY, shape, k, tag, options, stacklevel=2)

    return ThresholdResult(
        Xest=None,
        Topt=Topt,
        r=r,
        singular_values=fY,
        pseudo_noise=fZ,
        gamma=gamma,
        k=int(k),
        strategy=tag,
        shape=(int(shape[0]), int(shape[1])),
    )


def adaptive_hard_thresholding_svd(
        U: NDArray[np.floating],
        s: NDArray[np.floating],
        Vt: NDArray[np.floating],
        k: int,
        *,
        strategy: Strategy | str = "i",
        shape: tuple[int, int] | None = None,
        options: SolverOptions | None = None,
    ) -> ThresholdResult:
    """
    Adaptive hard thresholding from a precomputed thin SVD, Y = U diag(s) Vt.

    Parameters
    ----------
    U : NDArray[np.floating]
        Left singular vectors, (n, p).
    s : NDArray[np.floating]
        Singular values, (p,). Any order matching the columns of U.
    Vt : NDArray[np.floating]
        Right singular vectors (transposed), (p, m).
    k : int
        Upper bound on the signal rank.
    strategy : str, optional
        Noise bulk reconstruction, '0', 'w' or 'i'. By default 'i'.
    shape : tuple[int, int] | None, optional
        Shape of Y. By default (U.shape[0], Vt.shape[1]).
    options : SolverOptions | None, optional
        Root search settings.

    Returns
    -------
    ThresholdResult
        Reconstruction, threshold and retained rank.
    """

    return _threshold_svd(U, s, Vt, k, strategy, shape, options, stacklevel=3)


def _threshold_svd(
        U: NDArray[np.floating],
        s: NDArray[np.floating],
        Vt: NDArray[np.floating],
        k: int,
        strategy: Strategy | str,
        shape: tuple[int, int] | None,
        options: SolverOptions | None,
        stacklevel: int,
    ) -> ThresholdResult:

    U = np.asarray(U)
    Vt = np.asarray(Vt)
    fY: NDArray[np.floating] = np.asarray(s, dtype=float).reshape(-1)
    if U.ndim != 2 or Vt.ndim != 2:
        raise ValueError("U and Vt must be 2D")
    if U.shape[1] != fY.size or Vt.shape[0] != fY.size:
        raise ValueError(
            f"SVD factors do not match: U={U.shape}, s={fY.shape}, Vt={Vt.shape}"
        )
    if shape is None:
        shape = (U.shape[0], Vt.shape[1])
    if fY.size != min(int(d) for d in shape):
        raise ValueError(f"expected min(shape)={min(shape)} singular values, got {fY.size}")

    tag: Strategy = normalize_strategy(strategy)
    fZ, gamma, Topt, r = _solve(fY, shape, k, tag, options, stacklevel=stacklevel)

    fY_new: NDArray[np.floating] = fY * (fY > Topt)
    Xest: NDArray[np.floating] = (U * fY_new) @ Vt

    order: NDArray[np.intp] = np.argsort(fY)[::-1]
    return ThresholdResult(
        Xest=Xest,
        Topt=Topt,
        r=r,
        singular_values=fY[order],
        pseudo_noise=fZ,
        gamma=gamma,
        k=int(k),
        strategy=tag,
        shape=(int(shape[0]), int(shape[1])),
    )


def adaptive_hard_thresholding(
        Y: NDArray[np.floating],
        k: int,
        strategy: Strategy | str = "i",
        *,
        options: SolverOptions | None = None,
    ) -> ThresholdResult:
    """
    Performs optimal adaptive hard thresholding on the input matrix Y.

    The noise bulk is estimated from the singular values of Y after
    discarding (at most) k signal components, and the threshold is the one
    minimizing the asymptotic Frobenius error of the reconstruction for that
    noise bulk. The i-th principal component of Y is retained if and only if
    its singular value y_i satisfies y_i > Topt.

    (1) Donoho, D. L.; Gavish, M.; Romanov, E.
        ScreeNOT: Exact MSE-Optimal Singular Value Thresholding in Correlated Noise.
        Ann. Statist. 2023, 51 (1), 122-148.
        https://doi.org/10.1214/22-AOS2232.

    Parameters
    ----------
    Y : NDArray[np.floating]
        2D data matrix.
    k : int
        Upper bound (potentially loose) on the latent signal rank.
    strategy : str, optional
        Method for reconstructing the noise bulk: '0' (transport to zero),
        'w' (winsorization) or 'i' (imputation). By default 'i'.
    options : SolverOptions | None, optional
        Root search settings.

    Returns
    -------
    ThresholdResult
        Xest (thresholded reconstruction of Y), Topt (threshold) and
        r (number of retained components, the rank of Xest).

    Examples
    --------
    >>> rng = np.random.default_rng(0)
    >>> Y = rng.standard_normal((1000, 1000)) / np.sqrt(1000)
    >>> Xest, Topt, r = adaptive_hard_thresholding(Y, 10)
    >>> abs(Topt - 4 / np.sqrt(3)) < 0.1
    True
    """

    D: NDArray[np.floating] = np.asarray(Y, dtype=float)
    if D.ndim != 2:
        raise ValueError("Y must be 2D")
    if not np.all(np.isfinite(D)):
        raise ValueError("Y contains non-finite values")

    # Reject a bad k or strategy before paying for the SVD.
    validate_bound(k, min(D.shape), strategy)

    U, s, Vt = np.linalg.svd(D, full_matrices=False)
    return _threshold_svd(U, s, Vt, k, strategy, D.shape, options, stacklevel=3)
