"""Price feed oracle — validated updates, oriented reads, operator rotation."""
from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Sequence

from ..address import is_zero_address, to_address
from ..auth import EcdsaRecovery, update_digest, verify
from ..auth.ecdsa_recovery import SIGNATURE_BYTES
from ..errors import (
    BadSignature,
    BatchMismatch,
    InvalidOrdering,
    NullCredential,
    StaleOrFutureTimestamp,
    Unauthorized,
    ZeroRate,
)
from ..events import LoggingEventSink
from ..feed import FeedStore, orient_rate, pair_identity
from ..fixed_point import ONE
from ..interfaces.event_sink import EventSink
from ..interfaces.signer_recovery import SignerRecovery
from ..models import OperatorChanged, OperatorOwnerChanged, Quote, RateUpdated

logger = logging.getLogger(__name__)


def _system_clock() -> int:
    return int(time.time())


class PriceFeedOracle:
    """Latest-rate oracle gated by a single operator signature.

    Every mutating call runs under one instance-wide lock, so updates and
    credential changes are applied one at a time. Reads take no lock.
    """

    def __init__(
        self,
        operator: str,
        operator_owner: str,
        *,
        recovery: SignerRecovery | None = None,
        events: EventSink | None = None,
        clock: Callable[[], int] | None = None,
        store: FeedStore | None = None,
    ) -> None:
        if is_zero_address(operator):
            raise NullCredential("Operator must not be the zero address")
        if is_zero_address(operator_owner):
            raise NullCredential("Operator owner must not be the zero address")

        self._operator = to_address(operator)
        self._operator_owner = to_address(operator_owner)
        self._recovery: SignerRecovery = recovery or EcdsaRecovery()
        self._events: EventSink = events or LoggingEventSink()
        self._clock = clock or _system_clock
        self._store = store or FeedStore()
        self._lock = threading.RLock()

        logger.info(
            "Oracle ready (operator=%s, owner=%s)",
            self._operator,
            self._operator_owner,
        )

    # ------------------------------------------------------------------
    # Credentials
    # ------------------------------------------------------------------

    @property
    def operator(self) -> str:
        return self._operator

    @property
    def operator_owner(self) -> str:
        return self._operator_owner

    def set_operator(self, new_operator: str, caller: str) -> None:
        """Rotate the signing key. Allowed for the operator or its owner."""
        with self._lock:
            if is_zero_address(new_operator):
                raise NullCredential("Operator must not be the zero address")
            sender = to_address(caller)
            if sender not in (self._operator, self._operator_owner):
                raise Unauthorized(
                    f"{sender} may not set the operator",
                    code="PPF_CAN_NOT_SET_OPERATOR",
                )
            self._operator = to_address(new_operator)
            logger.info("Operator changed to %s by %s", self._operator, sender)
            self._events.emit(OperatorChanged(operator=self._operator))

    def set_operator_owner(self, new_owner: str, caller: str) -> None:
        """Hand over ownership. Only the current owner may do this."""
        with self._lock:
            if is_zero_address(new_owner):
                raise NullCredential("Operator owner must not be the zero address")
            sender = to_address(caller)
            if sender != self._operator_owner:
                raise Unauthorized(
                    f"{sender} may not set the operator owner",
                    code="PPF_CAN_NOT_SET_OPERATOR_OWNER",
                )
            self._operator_owner = to_address(new_owner)
            logger.info("Operator owner changed to %s", self._operator_owner)
            self._events.emit(
                OperatorOwnerChanged(operator_owner=self._operator_owner)
            )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def pair_count(self) -> int:
        return len(self._store)

    def get(self, base: str, quote: str) -> tuple[int, int]:
        """Rate of ``base`` in units of ``quote`` and when it was observed.

        Returns ``(0, 0)`` for a pair that was never updated, and ``(ONE, now)``
        when both sides are the same asset.
        """
        if to_address(base) == to_address(quote):
            return ONE, self._clock()
        return self._store.get(base, quote)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def update(
        self, base: str, quote: str, rate: int, timestamp: int, signature: bytes
    ) -> None:
        """Accept one operator-signed rate.

        Raises:
            InvalidOrdering: base and quote are the same asset.
            StaleOrFutureTimestamp: not newer than the stored rate, or ahead
                of the clock.
            ZeroRate: rate is zero, or its stored inverse truncates to zero.
            BadSignature: signature does not recover to the operator.
        """
        with self._lock:
            event, _, _ = self._apply(base, quote, rate, timestamp, signature)
            self._events.emit(event)

    def update_many(
        self,
        bases: Sequence[str],
        quotes: Sequence[str],
        rates: Sequence[int],
        timestamps: Sequence[int],
        signatures: bytes,
    ) -> None:
        """Accept a batch of updates, all or nothing.

        ``signatures`` is the concatenation of one 65-byte signature per
        entry. If any entry is rejected, entries already written by this
        batch are rolled back and no event is emitted.
        """
        count = len(bases)
        if count == 0:
            raise BatchMismatch("Batch must contain at least one update")
        if len(quotes) != count:
            raise BatchMismatch(
                "bases and quotes differ in length",
                code="PPF_BASE_QUOTE_LENGTH_MISMATCH",
            )
        if len(rates) != count:
            raise BatchMismatch(
                "rates length mismatch", code="PPF_RATES_LENGTH_MISMATCH"
            )
        if len(timestamps) != count:
            raise BatchMismatch(
                "timestamps length mismatch", code="PPF_WHENS_LENGTH_MISMATCH"
            )
        if len(signatures) != count * SIGNATURE_BYTES:
            raise BatchMismatch(
                f"expected {count * SIGNATURE_BYTES} signature bytes, "
                f"got {len(signatures)}",
                code="PPF_SIGNATURES_LENGTH_MISMATCH",
            )

        with self._lock:
            journal: list[tuple[bytes, Quote | None]] = []
            pending: list[RateUpdated] = []
            try:
                for i in range(count):
                    sig = signatures[i * SIGNATURE_BYTES : (i + 1) * SIGNATURE_BYTES]
                    event, pair_id, previous = self._apply(
                        bases[i], quotes[i], rates[i], timestamps[i], sig
                    )
                    journal.append((pair_id, previous))
                    pending.append(event)
            except Exception:
                for pair_id, previous in reversed(journal):
                    self._store.restore(pair_id, previous)
                logger.warning(
                    "Batch rejected at entry %d of %d; rolled back", len(journal) + 1, count
                )
                raise

            for event in pending:
                self._events.emit(event)

    def _apply(
        self, base: str, quote: str, rate: int, timestamp: int, signature: bytes
    ) -> tuple[RateUpdated, bytes, Quote | None]:
        """Validate and store one update; caller holds the lock."""
        base = to_address(base)
        quote = to_address(quote)
        if base == quote:
            raise InvalidOrdering(f"Base and quote are both {base}")

        pair_id = pair_identity(base, quote)
        previous = self._store.quote_for(pair_id)
        last_seen = previous.observed_at if previous is not None else 0
        now = self._clock()
        if timestamp <= last_seen or timestamp > now:
            logger.debug(
                "Rejecting %s/%s at %d (last=%d, now=%d)",
                base, quote, timestamp, last_seen, now,
            )
            raise StaleOrFutureTimestamp(
                f"Timestamp {timestamp} must be in ({last_seen}, {now}]"
            )

        if rate == 0:
            raise ZeroRate("Rate must be positive")

        digest = update_digest(base, quote, rate, timestamp)
        if orient_rate(base, quote, rate) == 0:
            raise ZeroRate(f"Rate {rate} inverts to zero in canonical order")

        if not verify(digest, signature, self._operator, self._recovery):
            logger.warning("Bad signature for %s/%s at %d", base, quote, timestamp)
            raise BadSignature("Signature does not recover to the operator")

        self._store.put(base, quote, rate, timestamp)
        logger.info("Rate %s/%s = %d at %d", base, quote, rate, timestamp)
        return (
            RateUpdated(base=base, quote=quote, rate=rate, timestamp=timestamp),
            pair_id,
            previous,
        )
