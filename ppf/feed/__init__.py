"""Feed Store: pair identity, orientation and storage."""
from .pairs import canonicalize, orient_rate, pair_identity
from .store import FeedStore

__all__ = ["FeedStore", "canonicalize", "orient_rate", "pair_identity"]
