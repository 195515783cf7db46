"""Asset and operator identifiers — 20-byte addresses as normalized hex strings."""
from __future__ import annotations

import re

from .hashing import keccak256

ADDRESS_BYTES = 20
ZERO_ADDRESS = "0x" + "00" * ADDRESS_BYTES

_HEX_RE = re.compile(r"^[0-9a-fA-F]{1,40}$")


def to_address(value: str | bytes) -> str:
    """Normalize an identifier to lowercase ``0x`` + 40 hex digits.

    Short hex strings are left-padded with zeros, the way a 160-bit value is
    ABI-encoded, so ``"0x1234"`` and ``"0x0000…1234"`` name the same asset.

    Raises:
        ValueError: if the value is not valid hex or is wider than 20 bytes.
    """
    if isinstance(value, (bytes, bytearray)):
        if len(value) > ADDRESS_BYTES:
            raise ValueError(f"Address too long: {len(value)} bytes")
        return "0x" + bytes(value).rjust(ADDRESS_BYTES, b"\x00").hex()

    raw = value[2:] if value[:2] in ("0x", "0X") else value
    if not _HEX_RE.match(raw):
        raise ValueError(f"Invalid address: {value!r}")
    return "0x" + raw.lower().rjust(ADDRESS_BYTES * 2, "0")


def address_bytes(address: str) -> bytes:
    """Return the 20 raw bytes of an address."""
    return bytes.fromhex(to_address(address)[2:])


def is_zero_address(address: str | None) -> bool:
    if not address:
        return True
    return to_address(address) == ZERO_ADDRESS


def to_checksum_address(address: str) -> str:
    """Render an address with EIP-55 mixed-case checksum.

    Examples:
        "0x7e5f4552091a69125d5dfcb7b8c2659029395bdf"
            → "0x7E5F4552091A69125d5DfCb7b8C2659029395Bdf"
    """
    hex_addr = to_address(address)[2:]
    hashed = keccak256(hex_addr.encode("ascii")).hex()
    return "0x" + "".join(
        ch.upper() if int(hashed[i], 16) >= 8 else ch
        for i, ch in enumerate(hex_addr)
    )
