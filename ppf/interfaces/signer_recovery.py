"""Signer recovery protocol — detached-signature backend abstraction."""
from typing import Protocol


class SignerRecovery(Protocol):
    """Recover the address that signed a 32-byte message hash.

    Implementations return None for any malformed or unrecoverable
    signature instead of raising.
    """

    def recover(self, message_hash: bytes, signature: bytes) -> str | None: ...
