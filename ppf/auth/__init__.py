"""Update Authenticator: digests, signer recovery and verification."""
from __future__ import annotations

from ..address import to_address
from ..interfaces.signer_recovery import SignerRecovery
from .digest import (
    PROTOCOL_VERSION,
    VERSION_TAG,
    signed_message_hash,
    update_digest,
)
from .ecdsa_recovery import EcdsaRecovery, public_key_to_address
from .signer import OperatorSigner


def verify(
    digest: bytes,
    signature: bytes,
    expected_signer: str,
    recovery: SignerRecovery | None = None,
) -> bool:
    """Check that ``signature`` over ``digest`` was made by ``expected_signer``.

    The digest is wrapped with the personal-message prefix first. Malformed
    signatures are reported as False, never raised.
    """
    backend = recovery or EcdsaRecovery()
    signer = backend.recover(signed_message_hash(digest), bytes(signature))
    return signer is not None and to_address(signer) == to_address(expected_signer)


__all__ = [
    "EcdsaRecovery",
    "OperatorSigner",
    "PROTOCOL_VERSION",
    "VERSION_TAG",
    "public_key_to_address",
    "signed_message_hash",
    "update_digest",
    "verify",
]
