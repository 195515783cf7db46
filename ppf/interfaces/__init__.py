"""Protocol interfaces for the price feed oracle."""
from .event_sink import EventSink
from .signer_recovery import SignerRecovery

__all__ = ["EventSink", "SignerRecovery"]
