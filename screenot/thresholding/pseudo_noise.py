from __future__ import annotations

from typing import Literal
import numbers
import warnings

import numpy as np
from numpy.typing import NDArray

from screenot.errors import InvalidBoundError, UnknownStrategyError

# Strategy tags: '0' transport to zero, 'w' winsorization, 'i' imputation.

Strategy = Literal["0", "w", "i"]

STRATEGIES: tuple[str, ...] = ("0", "w", "i")
_ALIASES: dict[str, str] = {
    "zero": "0",
    "winsorize": "w",
    "impute": "i",
}


def normalize_strategy(strategy: object) -> Strategy:
    """
    Map a strategy tag (or one of its long spellings) onto '0', 'w' or 'i'.

    Raises
    ------
    UnknownStrategyError
        If the tag is not recognized.
    """

    if isinstance(strategy, str):
        if strategy in STRATEGIES:
            return strategy
        key: str = strategy.casefold().strip()
        if key in STRATEGIES:
            return key
        if key in _ALIASES:
            return _ALIASES[key]

    raise UnknownStrategyError(strategy, STRATEGIES + tuple(_ALIASES))


def imputation_weights(k: int) -> NDArray[np.floating]:
    """
    Interpolation weights a(l) = (1 - ((l - 1) / k)^(2/3)) / (2^(2/3) - 1), l = 1..k.

    a(1) is the weight of the largest imputed value, so the weights decrease
    with l.
    """

    l: NDArray[np.floating] = np.arange(1, k + 1, dtype=float)
    return (1 - ((l - 1) / k) ** (2 / 3)) / (2 ** (2 / 3) - 1)


def validate_bound(k: object, p: int, strategy: Strategy | str = "i") -> int:
    """
    Check the rank bound k against a spectrum of length p and return it as int.

    Raises
    ------
    InvalidBoundError
        If k is negative, not an integer, k >= p, or 2k + 1 >= p for imputation
        (k > 0 only).
    UnknownStrategyError
        If the strategy tag is not recognized.
    """

    if isinstance(k, bool) or not isinstance(k, numbers.Integral):
        raise InvalidBoundError(f"k must be a non-negative integer, got {k!r}")
    k = int(k)
    if k < 0:
        raise InvalidBoundError(f"k must be a non-negative integer, got {k}")
    if k >= p:
        raise InvalidBoundError(
            f"k too large. procedure requires k < min(n,p) (k={k}, min(n,p)={p})"
        )
    tag: Strategy = normalize_strategy(strategy)
    if tag == "i" and k > 0 and 2 * k + 1 >= p:
        raise InvalidBoundError(
            f"k too large. imputation requires 2*k+1 < min(n,p) (k={k}, min(n,p)={p})"
        )
    return k


def create_pseudo_noise(
        singular_values: NDArray[np.floating],
        k: int,
        strategy: Strategy | str = "i",
    ) -> NDArray[np.floating]:
    """
    Creates a "pseudo-noise" spectrum from the observed singular values.

    The spectrum is sorted into increasing order and the k largest values,
    which are assumed to be contaminated by signal, are replaced so that the
    result approximates the singular values of the noise alone.

    Strategies
    ----------
    '0' : transport to zero
        The k largest values are set to 0.
    'w' : winsorization
        The k largest values are set to the largest remaining value.
    'i' : imputation
        With z the sorted spectrum (1-indexed, length p), base = z[p-k] and
        diff = z[p-k] - z[p-2k], the l-th largest value becomes
        base + a(l) * diff, which continues the bulk edge with a 2/3 power law
        instead of flattening it. Requires 2k + 1 < p.

    Parameters
    ----------
    singular_values : NDArray[np.floating]
        Observed singular values, in any order. Not modified.
    k : int
        Upper bound on the number of signal components, 0 <= k < p.
    strategy : str, optional
        One of '0', 'w', 'i' (or 'zero', 'winsorize', 'impute'). By default 'i'.

    Returns
    -------
    NDArray[np.floating]
        The pseudo-noise spectrum, sorted ascending, same length as the input.

    Raises
    ------
    InvalidBoundError
        If k is negative, not an integer, k >= p, or 2k + 1 >= p for imputation.
    UnknownStrategyError
        If the strategy tag is not recognized.
    """

    fY: NDArray[np.floating] = np.asarray(singular_values, dtype=float)
    if fY.ndim != 1:
        raise ValueError("singular_values must be 1D")
    if fY.size == 0:
        raise ValueError("singular_values must be non-empty")
    if not np.all(np.isfinite(fY)):
        raise ValueError("singular_values contains non-finite values")

    # np.sort returns a copy; the caller's array is never touched.
    fZ: NDArray[np.floating] = np.sort(fY)
    p: int = fZ.size
    k = validate_bound(k, p, strategy)
    tag: Strategy = normalize_strategy(strategy)

    if k == 0:
        return fZ

    if tag == "0":
        fZ[p - k:] = 0.0

    elif tag == "w":
        fZ[p - k:] = fZ[p - k - 1]

    else:
        base: float = float(fZ[p - k - 1])
        diff: float = base - float(fZ[p - 2 * k - 1])
        if diff == 0.0:
            warnings.warn(
                "Flat bulk edge: imputation reduces to winsorization for this spectrum.",
                RuntimeWarning,
                stacklevel=2,
            )
        # l = 1 is the top entry (index p - 1), l = k the lowest replaced one.
        fZ[p - k:] = (base + imputation_weights(k) * diff)[::-1]

    return fZ
