"""Tests for the asynchronous document fetcher."""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
import pytest

from oaslint import __version__
from oaslint.client import SpecFetcher
from oaslint.exceptions import LoadError
from oaslint.models import FetchConfig

URL = "https://api.example.com/openapi.json"


def _transport_from_handler(handler):
    """Create an httpx.MockTransport from a handler function."""
    return httpx.MockTransport(handler)


def _fetch(handler, config: FetchConfig | None = None, url: str = URL) -> Any:
    async def _run() -> Any:
        async with SpecFetcher(config, transport=_transport_from_handler(handler)) as fetcher:
            return await fetcher.fetch(url)

    return asyncio.run(_run())


class TestPayloads:
    def test_json_body_is_decoded(self) -> None:
        payload = _fetch(lambda request: httpx.Response(200, json={"openapi": "3.0.0"}))
        assert payload == {"openapi": "3.0.0"}

    def test_vendor_json_content_type(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                content=b'{"swagger": "2.0"}',
                headers={"content-type": "application/vnd.oai.openapi+json;version=3.0"},
            )

        assert _fetch(handler) == {"swagger": "2.0"}

    def test_text_body_is_returned_as_is(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="openapi: 3.0.0\n")

        assert _fetch(handler) == "openapi: 3.0.0\n"

    def test_mislabelled_json_falls_back_to_text(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200, content=b"openapi: 3.0.0", headers={"content-type": "application/json"}
            )

        assert _fetch(handler) == "openapi: 3.0.0"


class TestRequest:
    def test_default_headers(self) -> None:
        seen: dict[str, str] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(request.headers)
            return httpx.Response(200, json={})

        _fetch(handler)
        assert seen["user-agent"] == f"oaslint/{__version__}"
        assert "application/json" in seen["accept"]

    def test_custom_user_agent(self) -> None:
        seen: dict[str, str] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(request.headers)
            return httpx.Response(200, json={})

        _fetch(handler, FetchConfig(user_agent="ci-bot/1.0"))
        assert seen["user-agent"] == "ci-bot/1.0"

    def test_follows_redirects(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/old.json":
                return httpx.Response(301, headers={"location": "https://api.example.com/new.json"})
            return httpx.Response(200, json={"moved": True})

        assert _fetch(handler, url="https://api.example.com/old.json") == {"moved": True}

    def test_redirect_not_followed_when_disabled(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(302, headers={"location": "https://api.example.com/new.json"})

        # A 3xx is not a success status, so raise_for_status reports it.
        with pytest.raises(LoadError, match="HTTP 302"):
            _fetch(handler, FetchConfig(follow_redirects=False))


class TestFailures:
    def test_status_error(self) -> None:
        with pytest.raises(LoadError) as exc_info:
            _fetch(lambda request: httpx.Response(500))
        assert exc_info.value.message == f"Failed to fetch specification: HTTP 500 from {URL}"

    def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(LoadError, match="Failed to fetch specification: timed out"):
            _fetch(handler)

    def test_error_without_message_uses_type_name(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("", request=request)

        with pytest.raises(LoadError, match="ConnectError"):
            _fetch(handler)

    def test_fetch_outside_context_manager(self) -> None:
        with pytest.raises(LoadError, match="not open"):
            asyncio.run(SpecFetcher().fetch(URL))

    def test_load_error_exit_code(self) -> None:
        with pytest.raises(LoadError) as exc_info:
            _fetch(lambda request: httpx.Response(404))
        assert exc_info.value.exit_code == 6
