"""Pure pair functions — canonical ordering, identity hashing, orientation. No I/O."""
from __future__ import annotations

from ..address import address_bytes, to_address
from ..fixed_point import invert
from ..hashing import keccak256


def canonicalize(base: str, quote: str) -> tuple[str, str, bool]:
    """Order a pair so the smaller identifier comes first.

    Returns:
        ``(ordered_base, ordered_quote, was_swapped)`` where ``was_swapped``
        is True when the caller's order differs from canonical order.
    """
    base = to_address(base)
    quote = to_address(quote)
    # Normalized addresses share one width, so string order is numeric order.
    if base <= quote:
        return base, quote, False
    return quote, base, True


def pair_identity(base: str, quote: str) -> bytes:
    """Order-independent 32-byte fingerprint of an asset pair.

    ``keccak256(ordered_base ‖ ordered_quote)`` over the raw 20-byte
    identifiers, so ``pair_identity(A, B) == pair_identity(B, A)``.
    """
    ordered_base, ordered_quote, _ = canonicalize(base, quote)
    return keccak256(address_bytes(ordered_base) + address_bytes(ordered_quote))


def orient_rate(requested_base: str, requested_quote: str, rate: int) -> int:
    """Express ``rate`` in the requested orientation.

    A canonical request gets ``rate`` unchanged; a reversed one gets the
    truncated fixed-point inverse. ``rate`` must be non-zero.
    """
    _, _, swapped = canonicalize(requested_base, requested_quote)
    return invert(rate) if swapped else rate
