from __future__ import annotations

from typing import Any
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
import numpy as np
from numpy.typing import NDArray

from screenot.thresholding.functionals import f_functional_curve
from screenot.thresholding.results import ThresholdResult


def plot_scree(
        result: ThresholdResult | NDArray[np.floating],
        *,
        threshold: float | None = None,
        ax: Axes | None = None,
        log: bool = False,
        threshold_kwargs: dict[str, Any] | None = None,
        **kwargs: Any
    ) -> Axes:
    """
    Scree plot: singular values against their index, with the threshold line.

    result may be a ThresholdResult (its threshold is drawn unless threshold
    is given) or a plain array of singular values.
    """

    if isinstance(result, ThresholdResult):
        values: NDArray[np.floating] = np.asarray(result.singular_values, dtype=float)
        if threshold is None:
            threshold = result.Topt
    else:
        values = np.sort(np.asarray(result, dtype=float).reshape(-1))[::-1]

    if ax is None:
        _, ax = plt.subplots()

    kwargs.setdefault("marker", "o")
    kwargs.setdefault("linestyle", "none")
    ax.plot(np.arange(1, values.size + 1), values, **kwargs)

    if threshold is not None:
        line_kwargs: dict[str, Any] = {"color": "0.3", "linestyle": "--"}
        line_kwargs.update(threshold_kwargs or {})
        ax.axhline(float(threshold), **line_kwargs)

    if log:
        ax.set_yscale("log")

    ax.set_xlabel("index")
    ax.set_ylabel("singular value")
    return ax

def plot_functional(
        fz: NDArray[np.floating],
        gamma: float,
        *,
        ax: Axes | None = None,
        target: float = -4.0,
        n_points: int = 400,
        y_max: float | None = None,
        **kwargs: Any
    ) -> Axes:
    """Plot F_gamma(y; fZ) above the pseudo-noise edge together with its target level."""

    spectrum: NDArray[np.floating] = np.asarray(fz, dtype=float).reshape(-1)
    edge: float = float(np.max(spectrum))
    if y_max is None:
        y_max = 2 * edge if edge > 0 else 2.0
    if y_max <= edge:
        raise ValueError("y_max must exceed max(fz)")

    # Skip the singular point at the edge itself.
    ys: NDArray[np.floating] = np.linspace(edge, y_max, int(n_points) + 1)[1:]
    values: NDArray[np.floating] = f_functional_curve(ys, spectrum, gamma)

    if ax is None:
        _, ax = plt.subplots()

    ax.plot(ys, values, **kwargs)
    ax.axhline(float(target), color="0.3", linestyle="--")
    ax.set_xlabel("y")
    ax.set_ylabel("F(y)")
    return ax
