"""Feed Store — canonical storage of the latest quote per asset pair."""
from __future__ import annotations

import logging

from ..models import UNSET, Quote
from .pairs import orient_rate, pair_identity

logger = logging.getLogger(__name__)


class FeedStore:
    """Mapping of pair identity to the latest ``Quote``.

    Rates are stored oriented to the pair's canonical order, so a read in
    either direction is at most one fixed-point inversion. The store performs
    no validation; the owning oracle checks every invariant before ``put``.

    Each entry is an immutable ``Quote`` replaced by a single assignment, so
    lock-free readers never observe a half-written value.
    """

    def __init__(self) -> None:
        self._feed: dict[bytes, Quote] = {}

    def __len__(self) -> int:
        return len(self._feed)

    def quote_for(self, pair_id: bytes) -> Quote | None:
        """Return the stored quote for a pair identity, or None if unset."""
        return self._feed.get(pair_id)

    def get(self, base: str, quote: str) -> tuple[int, int]:
        """Return ``(rate, timestamp)`` oriented as requested; ``(0, 0)`` if unset."""
        stored = self._feed.get(pair_identity(base, quote), UNSET)
        if not stored.is_set:
            return 0, 0
        return orient_rate(base, quote, stored.rate), stored.observed_at

    def put(self, base: str, quote: str, rate: int, timestamp: int) -> bytes:
        """Overwrite the canonical entry for the pair and return its identity."""
        pair_id = pair_identity(base, quote)
        self._feed[pair_id] = Quote(
            rate=orient_rate(base, quote, rate), observed_at=timestamp
        )
        logger.debug("Stored %s at %d", pair_id.hex(), timestamp)
        return pair_id

    def restore(self, pair_id: bytes, previous: Quote | None) -> None:
        """Put back a pair's earlier quote (None removes a fresh entry)."""
        if previous is None:
            self._feed.pop(pair_id, None)
        else:
            self._feed[pair_id] = previous
