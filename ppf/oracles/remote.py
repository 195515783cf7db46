"""HTTP client for a remote PPF oracle service."""
import logging
import ssl

import aiohttp
import certifi

from ..config import ServerConfig
from ..models import RateUpdate

logger = logging.getLogger(__name__)


class RemoteOracleError(RuntimeError):
    """The remote oracle rejected a request or could not be reached."""

    def __init__(self, message: str, status: int = 0, error: str = "") -> None:
        super().__init__(message)
        self.status = status
        self.error = error


class RemoteFeedClient:
    """Read rates from and push signed updates to an oracle HTTP API."""

    def __init__(self, config: ServerConfig) -> None:
        self.base_url = config.url.rstrip("/")
        self.timeout = config.timeout

    def _session(self) -> aiohttp.ClientSession:
        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)
        return aiohttp.ClientSession(
            connector=connector,
            timeout=aiohttp.ClientTimeout(total=self.timeout),
        )

    async def fetch_rate(self, base: str, quote: str) -> tuple[int, int]:
        """Fetch ``(rate, timestamp)`` for a pair; ``(0, 0)`` means unset."""
        url = f"{self.base_url}/rates/{base}/{quote}"
        async with self._session() as session:
            async with session.get(url) as response:
                data = await response.json(content_type=None)
                if response.status != 200:
                    raise self._error(response.status, data)
                rate, timestamp = int(data["rate"]), int(data["timestamp"])

        logger.info("Fetched %s/%s: %d at %d", base, quote, rate, timestamp)
        return rate, timestamp

    async def push_update(self, update: RateUpdate, signature: bytes) -> None:
        """Submit one signed update."""
        payload = {
            "base": update.base,
            "quote": update.quote,
            "rate": str(update.rate),
            "timestamp": update.timestamp,
            "signature": "0x" + signature.hex(),
        }
        async with self._session() as session:
            async with session.post(f"{self.base_url}/rates", json=payload) as response:
                if response.status != 200:
                    raise self._error(
                        response.status, await response.json(content_type=None)
                    )

        logger.info(
            "Pushed %s/%s = %d at %d",
            update.base,
            update.quote,
            update.rate,
            update.timestamp,
        )

    @staticmethod
    def _error(status: int, data: dict) -> RemoteOracleError:
        error = data.get("error", "") if isinstance(data, dict) else ""
        detail = data.get("detail", "") if isinstance(data, dict) else ""
        logger.error("Oracle request failed: HTTP %s %s %s", status, error, detail)
        return RemoteOracleError(
            f"HTTP {status}: {error or 'error'} {detail}".strip(),
            status=status,
            error=error,
        )
