"""Integration tests for the remote oracle client — HTTP session mocked."""
from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from ppf.config import ServerConfig
from ppf.fixed_point import ONE
from ppf.models import RateUpdate
from ppf.oracles import RemoteFeedClient, RemoteOracleError


@pytest.fixture()
def client() -> RemoteFeedClient:
    return RemoteFeedClient(ServerConfig(url="https://oracle.example.com/", timeout=3))


def _mock_session(method: str, status: int, data: dict) -> AsyncMock:
    mock_response = AsyncMock()
    mock_response.status = status
    mock_response.json = AsyncMock(return_value=data)
    mock_response.__aenter__ = AsyncMock(return_value=mock_response)
    mock_response.__aexit__ = AsyncMock(return_value=None)

    mock_session = AsyncMock()
    setattr(mock_session, method, MagicMock(return_value=mock_response))
    mock_session.__aenter__ = AsyncMock(return_value=mock_session)
    mock_session.__aexit__ = AsyncMock(return_value=None)
    return mock_session


class TestFetchRate:
    @pytest.mark.asyncio
    async def test_parses_rate(self, client: RemoteFeedClient) -> None:
        mock_session = _mock_session(
            "get",
            200,
            {"base": "0x1", "quote": "0x2", "rate": str(2 * ONE), "timestamp": 7},
        )

        with patch("ppf.oracles.remote.aiohttp.ClientSession", return_value=mock_session):
            with patch("ppf.oracles.remote.aiohttp.TCPConnector"):
                rate, when = await client.fetch_rate("0x1", "0x2")

        assert (rate, when) == (2 * ONE, 7)
        url = mock_session.get.call_args[0][0]
        assert url == "https://oracle.example.com/rates/0x1/0x2"

    @pytest.mark.asyncio
    async def test_http_error_raises(self, client: RemoteFeedClient) -> None:
        mock_session = _mock_session(
            "get", 400, {"error": "InvalidInput", "detail": "Invalid address"}
        )

        with patch("ppf.oracles.remote.aiohttp.ClientSession", return_value=mock_session):
            with patch("ppf.oracles.remote.aiohttp.TCPConnector"):
                with pytest.raises(RemoteOracleError) as exc_info:
                    await client.fetch_rate("0xzz", "0x2")

        assert exc_info.value.status == 400
        assert exc_info.value.error == "InvalidInput"


class TestPushUpdate:
    @pytest.mark.asyncio
    async def test_posts_payload(self, client: RemoteFeedClient) -> None:
        mock_session = _mock_session("post", 200, {})
        update = RateUpdate(base="0x1", quote="0x2", rate=3 * ONE, timestamp=9)

        with patch("ppf.oracles.remote.aiohttp.ClientSession", return_value=mock_session):
            with patch("ppf.oracles.remote.aiohttp.TCPConnector"):
                await client.push_update(update, b"\xab" * 65)

        call = mock_session.post.call_args
        assert call[0][0] == "https://oracle.example.com/rates"
        assert call.kwargs["json"] == {
            "base": "0x1",
            "quote": "0x2",
            "rate": str(3 * ONE),
            "timestamp": 9,
            "signature": "0x" + "ab" * 65,
        }

    @pytest.mark.asyncio
    async def test_rejection_raises(self, client: RemoteFeedClient) -> None:
        mock_session = _mock_session(
            "post", 401, {"error": "BadSignature", "detail": "nope"}
        )
        update = RateUpdate(base="0x1", quote="0x2", rate=ONE, timestamp=1)

        with patch("ppf.oracles.remote.aiohttp.ClientSession", return_value=mock_session):
            with patch("ppf.oracles.remote.aiohttp.TCPConnector"):
                with pytest.raises(RemoteOracleError, match="BadSignature"):
                    await client.push_update(update, b"\x00" * 65)
