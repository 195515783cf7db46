"""Oracle error taxonomy — every rejection is caller-visible and atomic."""
from __future__ import annotations


class OracleError(Exception):
    """Base class for rejected oracle calls.

    ``code`` is a stable machine-readable identifier, safe to expose over the
    wire; the message is for humans.
    """

    code: str = "PPF_ERROR"

    def __init__(self, message: str = "", code: str | None = None) -> None:
        super().__init__(message or self.__class__.__name__)
        if code is not None:
            self.code = code


class InvalidOrdering(OracleError):
    """Base and quote are the same asset."""

    code = "PPF_EQUAL_BASE_QUOTE_ADDRESSES"


class StaleOrFutureTimestamp(OracleError):
    """Timestamp is not newer than the stored one, or lies in the future."""

    code = "PPF_BAD_TIMESTAMP"


class ZeroRate(OracleError):
    code = "PPF_BAD_RATE"


class BadSignature(OracleError):
    """Signature is malformed or was not produced by the operator."""

    code = "PPF_BAD_SIGNATURE"


class Unauthorized(OracleError):
    code = "PPF_UNAUTHORIZED"


class NullCredential(OracleError):
    code = "PPF_OPERATOR_ADDRESS_ZERO"


class BatchMismatch(OracleError):
    """Batch update arguments are empty or have inconsistent lengths."""

    code = "PPF_BATCH_LENGTH_MISMATCH"
