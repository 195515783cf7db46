"""Operator-side signing of rate updates."""
from __future__ import annotations

from hashlib import sha256

from ecdsa import SECP256k1, SigningKey, VerifyingKey
from ecdsa.util import sigdecode_string, sigencode_string_canonize

from ..models import RateUpdate
from .digest import signed_message_hash, update_digest
from .ecdsa_recovery import public_key_to_address


class OperatorSigner:
    """Holds an operator's secp256k1 key and signs updates with it."""

    def __init__(self, private_key: SigningKey) -> None:
        self._key = private_key
        self.address = public_key_to_address(private_key.get_verifying_key())

    @classmethod
    def from_hex(cls, private_key_hex: str) -> "OperatorSigner":
        raw = private_key_hex[2:] if private_key_hex.startswith("0x") else private_key_hex
        return cls(SigningKey.from_string(bytes.fromhex(raw), curve=SECP256k1))

    @classmethod
    def generate(cls) -> "OperatorSigner":
        return cls(SigningKey.generate(curve=SECP256k1))

    def sign_hash(self, message_hash: bytes) -> bytes:
        """Sign a 32-byte hash, returning ``r ‖ s ‖ v`` with ``v`` in {27, 28}.

        Nonces are deterministic (RFC 6979) and ``s`` is normalized low.
        """
        rs = self._key.sign_digest_deterministic(
            message_hash, hashfunc=sha256, sigencode=sigencode_string_canonize
        )
        candidates = VerifyingKey.from_public_key_recovery_with_digest(
            rs, message_hash, curve=SECP256k1, hashfunc=sha256,
            sigdecode=sigdecode_string,
        )
        own = self._key.get_verifying_key().to_string()
        for recovery_id, candidate in enumerate(candidates):
            if candidate.to_string() == own:
                return rs + bytes([27 + recovery_id])
        raise RuntimeError("Could not derive a recovery id for own signature")

    def sign(self, base: str, quote: str, rate: int, timestamp: int) -> bytes:
        """Sign an update exactly as the oracle will verify it."""
        return self.sign_hash(
            signed_message_hash(update_digest(base, quote, rate, timestamp))
        )

    def sign_update(self, update: RateUpdate) -> bytes:
        return self.sign(update.base, update.quote, update.rate, update.timestamp)
