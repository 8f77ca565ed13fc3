"""Load OpenAPI documents from a file or URL and parse them into dictionaries.

This module handles all I/O for obtaining a raw document and converting it
into a Python dictionary. It has two halves:

* **Content loading** -- :func:`load_content` reads a
  :class:`~oaslint.models.FileSource` (in-memory buffer or local path) or
  fetches a :class:`~oaslint.models.UrlSource` through
  :class:`~oaslint.client.SpecFetcher`. URL responses that already decoded
  as JSON are returned as structured values; everything else is text.
* **Format parsing** -- :func:`parse_content` tries :func:`parse_json` and,
  only if that fails, :func:`parse_yaml`, then checks that the root is an
  object with :func:`ensure_mapping`.

Failures raise :class:`~oaslint.exceptions.LoadError` or
:class:`~oaslint.exceptions.ParseError`; the validation pipeline turns them
into report entries.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Optional, Union

import httpx
import yaml

from oaslint.client.fetcher import SpecFetcher
from oaslint.exceptions import LoadError, ParseError
from oaslint.models import FetchConfig, FileSource, UrlSource

logger = logging.getLogger(__name__)

INVALID_FORMAT_MESSAGE = "Invalid specification format. Must be valid JSON or YAML."


# --- Content loading ---


async def load_content(
    source: Union[FileSource, UrlSource],
    config: Optional[FetchConfig] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Any:
    """Obtain the raw document for *source*.

    Args:
        source: Where to read the document from.
        config: HTTP settings for URL sources.
        transport: Optional httpx transport for URL sources (tests).

    Returns:
        Text for file sources and non-JSON responses; the decoded JSON value
        for URL responses served as JSON.

    Raises:
        LoadError: If the file cannot be read or decoded, is empty, or the
            URL cannot be fetched.
    """
    if isinstance(source, UrlSource):
        async with SpecFetcher(config, transport=transport) as fetcher:
            return await fetcher.fetch(source.url)
    return await _read_file(source)


async def _read_file(source: FileSource) -> str:
    """Read a file source as text. Local paths are read off the event loop."""
    if source.path is not None:
        try:
            raw: Union[bytes, str, None] = await asyncio.to_thread(source.path.read_bytes)
        except OSError as exc:
            detail = exc.strerror or str(exc)
            raise LoadError(f"Failed to read file {source.path}: {detail}") from exc
    else:
        raw = source.content
    return decode_file_content(raw, source.label)


def decode_file_content(raw: Union[bytes, str, None], label: str = "<upload>") -> str:
    """Decode file bytes as UTF-8 text, dropping a leading byte-order mark.

    Raises:
        LoadError: If the bytes are not UTF-8, or the content is empty or
            whitespace only.
    """
    if raw is None:
        raise LoadError(f"Failed to read file {label}: no content")
    if isinstance(raw, bytes):
        try:
            text = raw.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise LoadError(
                f"Failed to read file {label}: not valid UTF-8 "
                f"({exc.reason} at byte {exc.start})"
            ) from exc
    else:
        text = raw.removeprefix("\ufeff")

    if not text.strip():
        raise LoadError(f"Failed to read file {label}: file is empty")
    return text


# --- Format parsing ---


def parse_json(content: str) -> Any:
    """Parse *content* as JSON.

    Raises:
        ParseError: If the content is not valid JSON.
    """
    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise ParseError(f"Invalid JSON: {exc}") from exc


def parse_yaml(content: str) -> Any:
    """Parse *content* as a single YAML document using the safe loader.

    Raises:
        ParseError: If the content is not valid YAML.
    """
    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise ParseError(f"Invalid YAML: {exc}") from exc


def parse_content(content: str) -> dict[Any, Any]:
    """Parse *content* as JSON, falling back to YAML.

    JSON is tried first because it is the stricter format; YAML is attempted
    only when JSON fails. When both fail a single :class:`ParseError` with
    :data:`INVALID_FORMAT_MESSAGE` is raised and the two underlying errors
    are logged at debug level.

    Returns:
        The parsed document. Its root is always a mapping.

    Raises:
        ParseError: If neither parser accepts the content, or the root is
            not an object.
    """
    try:
        value = parse_json(content)
    except ParseError as json_error:
        try:
            value = parse_yaml(content)
        except ParseError as yaml_error:
            logger.debug("JSON parse failed: %s", json_error)
            logger.debug("YAML parse failed: %s", yaml_error)
            raise ParseError(INVALID_FORMAT_MESSAGE) from yaml_error
    return ensure_mapping(value)


def ensure_mapping(value: Any) -> dict[Any, Any]:
    """Return *value* if it is a dict, otherwise raise :class:`ParseError`.

    Applied to parser output and to JSON values decoded by the fetcher alike.
    """
    if isinstance(value, dict):
        return value
    raise ParseError(
        f"Specification root must be an object (got {_describe(value)})"
    )


def _describe(value: Any) -> str:
    if value is None:
        return "an empty document"
    if isinstance(value, bool):
        return "a boolean"
    if isinstance(value, (int, float)):
        return "a number"
    if isinstance(value, str):
        return "a string"
    if isinstance(value, list):
        return "an array"
    return type(value).__name__
