from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Literal

import numpy as np
from numpy.typing import NDArray

from screenot.utils.print_utils import _block_header, _fmt_float, _fmt_values, _kv_line

SummaryStyle = Literal["brief", "technical"]

_STRATEGY_NAMES: dict[str, str] = {
    "0": "transport to zero",
    "w": "winsorization",
    "i": "imputation",
}


@dataclass(frozen=True)
class ThresholdResult:
    # Public, stable
    Xest: NDArray[np.floating] | None        # (n, m) reconstruction, None if only a spectrum was given
    Topt: float
    r: int

    # Inputs and intermediates of the procedure
    singular_values: NDArray[np.floating]    # observed, descending
    pseudo_noise: NDArray[np.floating]       # fZ, ascending except the zeroed top block under '0'
    gamma: float
    k: int
    strategy: str
    shape: tuple[int, int]

    @property
    def threshold(self) -> float:
        return self.Topt

    @property
    def rank(self) -> int:
        return self.r

    @property
    def estimate(self) -> NDArray[np.floating] | None:
        return self.Xest

    @property
    def retained(self) -> NDArray[np.floating]:
        """Singular values strictly above the threshold."""
        return self.singular_values[self.singular_values > self.Topt]

    def __iter__(self) -> Iterator[Any]:
        # Allows ``Xest, Topt, r = result``.
        return iter((self.Xest, self.Topt, self.r))

    def summary(
            self,
            *,
            style: SummaryStyle = "brief",
            digits: int = 4,
            width: int = 72,
        ) -> str:
        """
        Human-readable summary string.

        Styles:
          - brief: threshold, retained rank and the leading singular values
          - technical: adds the pseudo-noise spectrum and procedure settings
        """

        style: str = str(style).casefold().strip()
        if style not in {"brief", "technical"}:
            raise ValueError("style must be one of: 'brief', 'technical'")

        n_rows: int
        n_cols: int
        n_rows, n_cols = self.shape

        lines: list[str] = []
        lines.append(_block_header("Adaptive Hard Thresholding", width))
        lines.append(_kv_line("Shape", f"{n_rows} x {n_cols} (gamma={_fmt_float(self.gamma, digits)})", width))
        lines.append(_kv_line("Rank bound k", str(self.k), width))
        lines.append(_kv_line("Strategy", _STRATEGY_NAMES.get(self.strategy, self.strategy), width))
        lines.append(_kv_line("Threshold Topt", _fmt_float(self.Topt, digits), width))
        lines.append(_kv_line("Retained rank r", str(self.r), width))
        if self.r:
            lines.append(_kv_line("Retained values", _fmt_values(self.retained, digits), width))

        if style == "technical":
            fz: NDArray[np.floating] = self.pseudo_noise
            lines.append(_block_header("Pseudo-noise spectrum", width))
            lines.append(_kv_line("Length", str(fz.size), width))
            lines.append(
                _kv_line(
                    "Range",
                    f"min={_fmt_float(float(fz.min()), digits)}, "
                    f"median={_fmt_float(float(np.median(fz)), digits)}, "
                    f"max={_fmt_float(float(fz.max()), digits)}",
                    width,
                )
            )
            lines.append(_kv_line("Top values", _fmt_values(np.sort(fz)[::-1], digits), width))
            lines.append(_kv_line("Reconstruction", "available" if self.Xest is not None else "not computed", width))

        lines.append("-" * width)
        return "\n".join(lines)
