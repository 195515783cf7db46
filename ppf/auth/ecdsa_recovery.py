"""secp256k1 signer recovery backed by the ``ecdsa`` package."""
from __future__ import annotations

import logging
from hashlib import sha256

from ecdsa import SECP256k1, VerifyingKey
from ecdsa.util import sigdecode_string

from ..address import to_address
from ..hashing import keccak256

logger = logging.getLogger(__name__)

SIGNATURE_BYTES = 65
CURVE_ORDER = SECP256k1.order


def public_key_to_address(public_key: VerifyingKey) -> str:
    """Address of a public key: last 20 bytes of keccak256(x ‖ y)."""
    return to_address(keccak256(public_key.to_string())[-20:])


def split_signature(signature: bytes) -> tuple[int, int, int] | None:
    """Split ``r ‖ s ‖ v`` into ``(r, s, recovery_id)``.

    ``v`` may be 0/1 or 27/28. Returns None for anything else, including a
    wrong length or r/s outside ``[1, n-1]``.
    """
    if len(signature) != SIGNATURE_BYTES:
        return None
    r = int.from_bytes(signature[:32], "big")
    s = int.from_bytes(signature[32:64], "big")
    v = signature[64]
    if v >= 27:
        v -= 27
    if v not in (0, 1):
        return None
    if not (0 < r < CURVE_ORDER and 0 < s < CURVE_ORDER):
        return None
    return r, s, v


class EcdsaRecovery:
    """Recover signer addresses from 65-byte recoverable ECDSA signatures."""

    def recover(self, message_hash: bytes, signature: bytes) -> str | None:
        parts = split_signature(signature)
        if parts is None:
            logger.debug("Rejecting structurally invalid signature")
            return None
        _, _, recovery_id = parts

        try:
            # Candidates come back ordered by the parity of R.y: even first.
            candidates = VerifyingKey.from_public_key_recovery_with_digest(
                signature[:64],
                message_hash,
                curve=SECP256k1,
                hashfunc=sha256,
                sigdecode=sigdecode_string,
            )
            return public_key_to_address(candidates[recovery_id])
        except Exception as e:
            logger.debug("Signature recovery failed: %s", e)
            return None
