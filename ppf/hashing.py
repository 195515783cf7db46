"""Keccak-256, the hash behind pair identities, digests and addresses."""
from __future__ import annotations

from Crypto.Hash import keccak as _keccak


def keccak256(data: bytes) -> bytes:
    """Return the 32-byte Keccak-256 digest (pre-NIST padding, as Ethereum)."""
    h = _keccak.new(digest_bits=256)
    h.update(data)
    return h.digest()
