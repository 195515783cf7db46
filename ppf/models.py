"""Data models — all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Quote:
    """Latest stored rate for a canonical pair.

    ``observed_at == 0`` means the pair was never recorded.
    """

    rate: int = 0
    observed_at: int = 0

    @property
    def is_set(self) -> bool:
        return self.observed_at != 0


UNSET = Quote()


@dataclass(frozen=True)
class RateUpdate:
    """An update as the operator signs it, in the caller's orientation."""

    base: str
    quote: str
    rate: int
    timestamp: int


@dataclass(frozen=True)
class RateUpdated:
    """Emitted after a rate is accepted."""

    base: str
    quote: str
    rate: int
    timestamp: int


@dataclass(frozen=True)
class OperatorChanged:
    operator: str


@dataclass(frozen=True)
class OperatorOwnerChanged:
    operator_owner: str


OracleEvent = RateUpdated | OperatorChanged | OperatorOwnerChanged
