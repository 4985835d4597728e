from __future__ import annotations
from typing import TYPE_CHECKING

from screenot.errors import (
    InvalidBoundError,
    ScreeNOTError,
    ThresholdSearchError,
    UnknownStrategyError,
)

__version__ = "0.1.0"

__all__ = [
    "adaptive_hard_thresholding",
    "adaptive_hard_thresholding_svd",
    "optimal_threshold",
    "ThresholdResult",
    "SolverOptions",
    "ScreeNOTError",
    "InvalidBoundError",
    "UnknownStrategyError",
    "ThresholdSearchError",
]

if TYPE_CHECKING:
    from screenot.thresholding.adaptive import adaptive_hard_thresholding as adaptive_hard_thresholding
    from screenot.thresholding.adaptive import adaptive_hard_thresholding_svd as adaptive_hard_thresholding_svd
    from screenot.thresholding.adaptive import optimal_threshold as optimal_threshold
    from screenot.thresholding.results import ThresholdResult as ThresholdResult
    from screenot.thresholding.solver import SolverOptions as SolverOptions

def __getattr__(name: str):
    if name in {"adaptive_hard_thresholding", "adaptive_hard_thresholding_svd", "optimal_threshold"}:
        from screenot.thresholding import adaptive
        return getattr(adaptive, name)
    if name == "ThresholdResult":
        from screenot.thresholding.results import ThresholdResult
        return ThresholdResult
    if name == "SolverOptions":
        from screenot.thresholding.solver import SolverOptions
        return SolverOptions
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
