from __future__ import annotations


class ScreeNOTError(Exception):
    """Base class for errors raised by screenot."""


class InvalidBoundError(ScreeNOTError, ValueError):
    """The rank bound k is incompatible with the length of the spectrum."""


class UnknownStrategyError(ScreeNOTError, ValueError):
    """The requested noise bulk reconstruction strategy is not recognized."""

    def __init__(self, strategy: object, accepted: tuple[str, ...]) -> None:
        self.strategy = strategy
        self.accepted = accepted
        super().__init__(
            f"unknown strategy, should be one of {', '.join(map(repr, accepted))}. "
            f"given: {strategy!r}"
        )


class ThresholdSearchError(ScreeNOTError, RuntimeError):
    """The root search for the optimal threshold could not be completed."""
