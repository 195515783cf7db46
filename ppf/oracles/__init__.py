"""Clients for remote oracle services."""
from .remote import RemoteFeedClient, RemoteOracleError

__all__ = ["RemoteFeedClient", "RemoteOracleError"]
