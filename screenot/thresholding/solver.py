from __future__ import annotations

from dataclasses import dataclass
import math

import numpy as np
from numpy.typing import NDArray

from screenot.errors import ThresholdSearchError
from screenot.thresholding.functionals import _as_spectrum, _check_gamma, _d_pair


@dataclass(frozen=True)
class SolverOptions:
    target: float = -4.0                # F(T*) = target defines the threshold
    initial_width: float = 2.0          # first bracket is [max(fZ), max(fZ) + initial_width]
    tol: float = 1e-5                   # absolute tolerance of the bisection
    max_expansions: int = 1024          # cap on bracket doublings

    def __post_init__(self) -> None:
        if not math.isfinite(self.target):
            raise ValueError("target must be finite")
        if not (self.initial_width > 0):
            raise ValueError("initial_width must be > 0")
        if not (self.tol > 0):
            raise ValueError("tol must be > 0")
        if int(self.max_expansions) < 0:
            raise ValueError("max_expansions must be >= 0")


DEFAULT_OPTIONS: SolverOptions = SolverOptions()


def compute_opt_threshold(
        fz: NDArray[np.floating],
        gamma: float,
        *,
        options: SolverOptions | None = None,
    ) -> float:
    """
    Computes the optimal hard threshold for the noise distribution fZ.

    The threshold t* is the unique number satisfying F_gamma(t*; fZ) = -4.
    F is increasing on (max(fZ), ∞), so the root is bracketed by doubling an
    interval starting at max(fZ) and then refined by bisection down to an
    absolute width of options.tol.

    Parameters
    ----------
    fz : NDArray[np.floating]
        Pseudo-noise singular values defining the counting measure.
    gamma : float
        Aspect ratio of the data matrix, 0 < gamma <= 1.
    options : SolverOptions | None, optional
        Search settings. By default SolverOptions().

    Returns
    -------
    float
        The threshold t*.

    Raises
    ------
    ThresholdSearchError
        If F evaluates to a non-finite value during the search, or the root
        cannot be bracketed within options.max_expansions doublings.
    """

    opts: SolverOptions = DEFAULT_OPTIONS if options is None else options
    spectrum: NDArray[np.float64] = _as_spectrum(fz)
    g: float = _check_gamma(gamma)

    def F(y: float) -> float:
        d, dd = _d_pair(y, spectrum, g)
        value: float = y * dd / d if d != 0.0 else math.nan
        if not math.isfinite(value):
            raise ThresholdSearchError(
                f"F evaluated to {value} at y={y!r}; the pseudo-noise spectrum is degenerate"
            )
        return value

    low: float = float(np.max(spectrum))
    high: float = low + opts.initial_width

    n_expansions: int = 0
    while F(high) < opts.target:
        n_expansions += 1
        if n_expansions > opts.max_expansions:
            raise ThresholdSearchError(
                f"could not bracket F(y) = {opts.target} within "
                f"{opts.max_expansions} doublings (last y={high!r})"
            )
        low = high
        high = 2 * high

    # F is increasing, do binary search.
    mid: float = (high + low) / 2
    while high - low > opts.tol:
        mid = (high + low) / 2
        if F(mid) < opts.target:
            low = mid
        else:
            high = mid

    return mid
