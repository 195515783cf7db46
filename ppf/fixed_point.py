"""Fixed-point rate math — ``ONE`` (10^18) encodes the decimal value 1.0."""
from __future__ import annotations

from decimal import ROUND_DOWN, Decimal, InvalidOperation, localcontext

ONE = 10**18
MAX_RATE = 2**128 - 1
MAX_TIMESTAMP = 2**64 - 1


def invert(rate: int) -> int:
    """Multiplicative inverse in fixed point: ``ONE * ONE // rate``.

    Truncates toward zero. Inverting twice may drift from the original value
    by the rounding of the two divisions; callers must not rely on exact
    round-trips.
    """
    if rate <= 0:
        raise ValueError(f"Cannot invert non-positive rate {rate}")
    return ONE * ONE // rate


def format_rate(value: Decimal | str | int | float) -> int:
    """Convert a human decimal rate to its fixed-point integer.

    Digits beyond 18 decimal places are truncated. Floats go through ``str``
    so that ``format_rate(0.1)`` is exactly ``10**17``.

    Examples:
        format_rate("2")    → 2000000000000000000
        format_rate("0.5")  → 500000000000000000
    """
    if isinstance(value, float):
        value = str(value)
    try:
        with localcontext() as ctx:
            ctx.prec = 80
            scaled = (Decimal(value) * ONE).to_integral_value(rounding=ROUND_DOWN)
    except InvalidOperation as e:
        raise ValueError(f"Invalid rate: {value!r}") from e
    if not scaled.is_finite():
        raise ValueError(f"Invalid rate: {value!r}")
    if scaled < 0:
        raise ValueError(f"Rate must not be negative: {value}")
    return int(scaled)


def parse_rate(rate: int) -> Decimal:
    """Convert a fixed-point rate back to an exact ``Decimal``."""
    with localcontext() as ctx:
        ctx.prec = 80
        return Decimal(rate) / ONE
