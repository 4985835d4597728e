from __future__ import annotations
from typing import TYPE_CHECKING

__all__ = [
    "create_pseudo_noise",
    "compute_opt_threshold",
    "adaptive_hard_thresholding",
]

if TYPE_CHECKING:
    from .pseudo_noise import create_pseudo_noise as create_pseudo_noise
    from .solver import compute_opt_threshold as compute_opt_threshold
    from .adaptive import adaptive_hard_thresholding as adaptive_hard_thresholding

def __getattr__(name: str):
    if name == "create_pseudo_noise":
        from .pseudo_noise import create_pseudo_noise
        return create_pseudo_noise
    if name == "compute_opt_threshold":
        from .solver import compute_opt_threshold
        return compute_opt_threshold
    if name == "adaptive_hard_thresholding":
        from .adaptive import adaptive_hard_thresholding
        return adaptive_hard_thresholding
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
