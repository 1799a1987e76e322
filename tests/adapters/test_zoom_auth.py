"""Unit tests for ZoomTokenClient."""

import asyncio
import json
from unittest.mock import patch

import aiohttp
import pytest

from zoombot.adapters.zoom.auth import SAFETY_MARGIN, ZoomTokenClient
from zoombot.config import ZOOM_OAUTH_TOKEN_URL, ZoomConfig
from zoombot.errors import ConfigurationError, TokenExchangeError

SESSION = "zoombot.adapters.zoom.auth.aiohttp.ClientSession"


class FakeResponse:
    def __init__(self, status=200, data=None, text=None):
        self.status = status
        if text is None:
            text = "" if data is None else json.dumps(data)
        self._text = text

    async def json(self, content_type="application/json"):
        return json.loads(self._text)

    async def text(self):
        return self._text

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        pass


def make_session(responses, calls=None):
    """Return a class replacing aiohttp.ClientSession.

    responses: list of FakeResponse (or exceptions to raise), consumed in
    order by successive post() calls. Each call is appended to ``calls``.
    """
    responses = list(responses)
    if calls is None:
        calls = []

    class FakeSession:
        def __init__(self, *args, **kwargs):
            pass

        def post(self, url, **kwargs):
            calls.append({"url": url, **kwargs})
            resp = responses.pop(0)
            if isinstance(resp, Exception):
                raise resp
            return resp

        async def __aenter__(self):
            return self

        async def __aexit__(self, *args):
            pass

    return FakeSession


class FakeClock:
    def __init__(self, now=1_000_000.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def zoom_config():
    return ZoomConfig(client_id="cid", client_secret="secret", account_id="acc1")


def _token(token="tok-1", expires_in=3600):
    return FakeResponse(200, {"access_token": token, "token_type": "bearer", "expires_in": expires_in})


class TestIsConfigured:
    def test_configured(self, zoom_config):
        assert ZoomTokenClient(zoom_config).is_configured is True

    @pytest.mark.parametrize("cid,secret", [("", "secret"), ("cid", ""), ("", "")])
    def test_partial(self, cid, secret):
        client = ZoomTokenClient(ZoomConfig(client_id=cid, client_secret=secret))
        assert client.is_configured is False


class TestFetch:
    @pytest.mark.asyncio
    async def test_request_shape(self, zoom_config, clock):
        calls = []
        client = ZoomTokenClient(zoom_config, clock=clock)
        with patch(SESSION, make_session([_token()], calls)):
            assert await client.get_token() == "tok-1"

        assert len(calls) == 1
        call = calls[0]
        assert call["url"] == ZOOM_OAUTH_TOKEN_URL
        assert call["params"] == {"grant_type": "client_credentials", "account_id": "acc1"}
        assert call["auth"] == aiohttp.BasicAuth("cid", "secret")
        assert call["headers"]["Content-Type"] == "application/x-www-form-urlencoded"

    @pytest.mark.asyncio
    async def test_no_account_id(self, clock):
        calls = []
        client = ZoomTokenClient(ZoomConfig(client_id="cid", client_secret="s"), clock=clock)
        with patch(SESSION, make_session([_token()], calls)):
            await client.get_token()
        assert calls[0]["params"] == {"grant_type": "client_credentials"}

    @pytest.mark.asyncio
    async def test_expiry_includes_safety_margin(self, zoom_config, clock):
        client = ZoomTokenClient(zoom_config, clock=clock)
        with patch(SESSION, make_session([_token(expires_in=3600)])):
            await client.get_token()
        assert client.expires_at == clock.now + 3600 - SAFETY_MARGIN


    @pytest.mark.asyncio
    async def test_default_lifetime_when_absent(self, zoom_config, clock):
        client = ZoomTokenClient(zoom_config, clock=clock)
        with patch(SESSION, make_session([FakeResponse(200, {"access_token": "tok-1"})])):
            await client.get_token()
        assert client.expires_at == clock.now + 3600 - SAFETY_MARGIN

    @pytest.mark.asyncio
    async def test_zero_lifetime_is_not_cached(self, zoom_config, clock):
        calls = []
        client = ZoomTokenClient(zoom_config, clock=clock)
        with patch(SESSION, make_session([_token("tok-1", 0), _token("tok-2")], calls)):
            assert await client.get_token() == "tok-1"
            assert client.expires_at == clock.now - SAFETY_MARGIN
            assert await client.get_token() == "tok-2"
        assert len(calls) == 2


class TestCache:
    @pytest.mark.asyncio
    async def test_cached_before_expiry(self, zoom_config, clock):
        calls = []
        client = ZoomTokenClient(zoom_config, clock=clock)
        with patch(SESSION, make_session([_token("tok-1")], calls)):
            first = await client.get_token()
            clock.now += 3600 - SAFETY_MARGIN - 1
            second = await client.get_token()
        assert first == second == "tok-1"
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_refetch_after_expiry(self, zoom_config, clock):
        calls = []
        client = ZoomTokenClient(zoom_config, clock=clock)
        with patch(SESSION, make_session([_token("tok-1"), _token("tok-2")], calls)):
            assert await client.get_token() == "tok-1"
            clock.now += 3600 - SAFETY_MARGIN
            assert await client.get_token() == "tok-2"
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_invalidate_forces_refetch(self, zoom_config, clock):
        calls = []
        client = ZoomTokenClient(zoom_config, clock=clock)
        with patch(SESSION, make_session([_token("tok-1"), _token("tok-2")], calls)):
            await client.get_token()
            client.invalidate()
            assert client.has_valid_token() is False
            assert await client.get_token() == "tok-2"
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_concurrent_callers_share_one_fetch(self, zoom_config, clock):
        calls = []
        client = ZoomTokenClient(zoom_config, clock=clock)
        with patch(SESSION, make_session([_token("tok-1")], calls)):
            tokens = await asyncio.gather(*(client.get_token() for _ in range(5)))
        assert tokens == ["tok-1"] * 5
        assert len(calls) == 1


class TestErrors:
    @pytest.mark.asyncio
    async def test_missing_credentials(self, clock):
        calls = []
        client = ZoomTokenClient(ZoomConfig(), clock=clock)
        with patch(SESSION, make_session([], calls)):
            with pytest.raises(ConfigurationError):
                await client.get_token()
        assert calls == []

    @pytest.mark.asyncio
    async def test_rejected(self, zoom_config, clock):
        resp = FakeResponse(401, {"reason": "Invalid client_id or client_secret", "error": "invalid_client"})
        client = ZoomTokenClient(zoom_config, clock=clock)
        with patch(SESSION, make_session([resp])):
            with pytest.raises(TokenExchangeError) as exc_info:
                await client.get_token()
        assert exc_info.value.status == 401
        assert "invalid_client" in exc_info.value.body
        assert client.has_valid_token() is False

    @pytest.mark.asyncio
    async def test_no_token_in_response(self, zoom_config, clock):
        client = ZoomTokenClient(zoom_config, clock=clock)
        with patch(SESSION, make_session([FakeResponse(200, {"expires_in": 3600})])):
            with pytest.raises(TokenExchangeError, match="No access token"):
                await client.get_token()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("expires_in", ["soon", [3600], {"s": 1}])
    async def test_invalid_lifetime(self, zoom_config, clock, expires_in):
        resp = FakeResponse(200, {"access_token": "tok-1", "expires_in": expires_in})
        client = ZoomTokenClient(zoom_config, clock=clock)
        with patch(SESSION, make_session([resp])):
            with pytest.raises(TokenExchangeError, match="Invalid expires_in"):
                await client.get_token()
        assert client.has_valid_token() is False

    @pytest.mark.asyncio
    async def test_network_error(self, zoom_config, clock):
        client = ZoomTokenClient(zoom_config, clock=clock)
        with patch(SESSION, make_session([aiohttp.ClientConnectionError("connection refused")])):
            with pytest.raises(TokenExchangeError) as exc_info:
                await client.get_token()
        assert exc_info.value.status is None
        assert exc_info.value.describe().startswith("Network Error")
