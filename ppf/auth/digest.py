"""Update digests — the exact bytes an operator signs. No I/O."""
from __future__ import annotations

from ..address import address_bytes
from ..fixed_point import MAX_RATE, MAX_TIMESTAMP
from ..hashing import keccak256

# Bump the tag for every encoding change so old signatures stop validating.
PROTOCOL_VERSION = "PPF-v1"
VERSION_TAG = keccak256(PROTOCOL_VERSION.encode())

RATE_BYTES = 16
TIMESTAMP_BYTES = 8

_SIGNED_MESSAGE_PREFIX = b"\x19Ethereum Signed Message:\n32"


def update_digest(base: str, quote: str, rate: int, timestamp: int) -> bytes:
    """Hash of an update in the caller's orientation.

    Layout (packed, no delimiters)::

        VERSION_TAG (32) ‖ base (20) ‖ quote (20) ‖ rate (16) ‖ timestamp (8)

    Integers are big-endian.

    Raises:
        ValueError: if ``rate`` does not fit u128 or ``timestamp`` u64.
    """
    if not 0 <= rate <= MAX_RATE:
        raise ValueError(f"Rate out of u128 range: {rate}")
    if not 0 <= timestamp <= MAX_TIMESTAMP:
        raise ValueError(f"Timestamp out of u64 range: {timestamp}")
    return keccak256(
        VERSION_TAG
        + address_bytes(base)
        + address_bytes(quote)
        + rate.to_bytes(RATE_BYTES, "big")
        + timestamp.to_bytes(TIMESTAMP_BYTES, "big")
    )


def signed_message_hash(digest: bytes) -> bytes:
    """Wrap a 32-byte digest in the personal-message prefix before signing."""
    if len(digest) != 32:
        raise ValueError(f"Digest must be 32 bytes, got {len(digest)}")
    return keccak256(_SIGNED_MESSAGE_PREFIX + digest)
