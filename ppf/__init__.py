"""PPF oracle — operator-signed latest-rate price feed."""
from .errors import (
    BadSignature,
    BatchMismatch,
    InvalidOrdering,
    NullCredential,
    OracleError,
    StaleOrFutureTimestamp,
    Unauthorized,
    ZeroRate,
)
from .fixed_point import ONE
from .services import PriceFeedOracle

__all__ = [
    "BadSignature",
    "BatchMismatch",
    "InvalidOrdering",
    "NullCredential",
    "ONE",
    "OracleError",
    "PriceFeedOracle",
    "StaleOrFutureTimestamp",
    "Unauthorized",
    "ZeroRate",
]
