"""Asynchronous document fetcher backed by :class:`httpx.AsyncClient`.

:class:`SpecFetcher` performs the single HTTP GET behind a
:class:`~oaslint.models.UrlSource`. It applies the timeout, TLS verification
and redirect settings from :class:`~oaslint.models.FetchConfig`, maps every
transport or status failure to :class:`~oaslint.exceptions.LoadError`, and
decodes JSON bodies up front so the pipeline can skip its own parse step.

There are no retries: a failed fetch is reported once, as-is.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from oaslint import __version__
from oaslint.exceptions import LoadError
from oaslint.models import FetchConfig

logger = logging.getLogger(__name__)

_ERROR_PREFIX = "Failed to fetch specification"


class SpecFetcher:
    """Fetch OpenAPI documents over HTTP.

    Must be used as an async context manager so the underlying connection
    pool is closed when the fetch completes.

    Args:
        config: Request settings. Defaults to :class:`FetchConfig` defaults.
        transport: Optional httpx transport, used by tests to plug in
            :class:`httpx.MockTransport`.

    Example::

        async with SpecFetcher(FetchConfig(timeout=10)) as fetcher:
            payload = await fetcher.fetch("https://example.com/openapi.json")
    """

    def __init__(
        self,
        config: Optional[FetchConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._config = config or FetchConfig()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    # ------------------------------------------------------------------ #
    # Async context manager
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> SpecFetcher:
        headers = {
            "Accept": "application/json, application/yaml, text/yaml, */*",
            "User-Agent": self._config.user_agent or f"oaslint/{__version__}",
        }
        self._client = httpx.AsyncClient(
            timeout=self._config.timeout,
            verify=self._config.verify_ssl,
            follow_redirects=self._config.follow_redirects,
            headers=headers,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *args: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    async def fetch(self, url: str) -> Any:
        """GET *url* and return its payload.

        Returns:
            The decoded JSON value when the response declares a JSON content
            type and its body decodes; the body text otherwise.

        Raises:
            LoadError: On a non-2xx status, a network or timeout failure, or
                when called outside the context manager.
        """
        if self._client is None:
            raise LoadError(f"{_ERROR_PREFIX}: fetcher is not open")

        logger.debug("GET %s", url)
        try:
            response = await self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise LoadError(
                f"{_ERROR_PREFIX}: HTTP {exc.response.status_code} from {url}"
            ) from exc
        except httpx.InvalidURL as exc:
            raise LoadError(f"{_ERROR_PREFIX}: invalid URL {url!r} ({exc})") from exc
        except httpx.HTTPError as exc:
            raise LoadError(f"{_ERROR_PREFIX}: {str(exc) or type(exc).__name__}") from exc

        return _decode_payload(response)


def _decode_payload(response: httpx.Response) -> Any:
    """Return the JSON value for JSON responses, the text body otherwise."""
    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        try:
            return response.json()
        except ValueError:
            # Mislabelled body; the format parser gets a second go at it.
            logger.debug("Response labelled %s did not decode as JSON", content_type)
    return response.text
