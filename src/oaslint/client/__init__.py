"""HTTP client module for oaslint.

Provides :class:`SpecFetcher`, an async wrapper around
:class:`httpx.AsyncClient` that fetches a document for a
:class:`~oaslint.models.UrlSource` and maps transport failures to
:class:`~oaslint.exceptions.LoadError`.
"""

from oaslint.client.fetcher import SpecFetcher

__all__ = ["SpecFetcher"]
