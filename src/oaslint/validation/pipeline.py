"""Validation orchestrator: load, parse, classify, validate, check, count.

:func:`validate` is the single entry point of the library. It walks one
document through :class:`PipelineState` in order::

    LOADING -> PARSING -> RESOLVING_VERSION -> VALIDATING
            -> CHECKING_STRUCTURE -> COLLECTING_STATS -> DONE

and always returns a :class:`~oaslint.models.ValidationResult`; nothing is
raised to the caller. How each failure is folded into the result:

* **Load / parse failure** -- one error at ``/``, zeroed stats, no document.
* **No version key** -- one error at ``""`` followed by the structural
  findings; document attached; zero counts, version ``"unknown"``.
* **Unsupported version** -- one error at ``""`` followed by the structural
  findings; document attached; counts computed, version is the literal.
* **Supported version** -- meta-schema findings, then structural findings,
  concatenated without deduplication; counts always computed.

Invocations share no mutable state, so several may run concurrently under
:func:`asyncio.gather`.
"""

from __future__ import annotations

import asyncio
import enum
import logging
from typing import Any, Optional, Union

import httpx

from oaslint.exceptions import LoadError, ParseError, VersionError
from oaslint.models import (
    FetchConfig,
    FileSource,
    ResolvedVersion,
    UrlSource,
    ValidationError,
    ValidationResult,
    ValidationStats,
)
from oaslint.parser.loader import ensure_mapping, load_content, parse_content
from oaslint.parser.version import require_supported, resolve_version
from oaslint.validation.schema import validate_schema
from oaslint.validation.stats import collect_stats
from oaslint.validation.structure import check_structure

logger = logging.getLogger(__name__)

DOCUMENT_ERROR_PATH = "/"
VERSION_ERROR_PATH = ""


class PipelineState(str, enum.Enum):
    """Stages of one validation run."""

    LOADING = "loading"
    PARSING = "parsing"
    RESOLVING_VERSION = "resolving-version"
    VALIDATING = "validating"
    CHECKING_STRUCTURE = "checking-structure"
    COLLECTING_STATS = "collecting-stats"
    DONE = "done"
    FAILED = "failed"


async def validate(
    source: Union[FileSource, UrlSource],
    config: Optional[FetchConfig] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ValidationResult:
    """Validate the OpenAPI / Swagger document behind *source*.

    Args:
        source: A file buffer, local path or URL.
        config: HTTP settings for URL sources. Defaults to
            :class:`~oaslint.models.FetchConfig` defaults.
        transport: Optional httpx transport for URL sources (tests).

    Returns:
        The validation report. Never raises for bad input: load, parse and
        version problems are reported as errors inside the result.

    Example::

        result = await validate(UrlSource(url="https://example.com/openapi.json"))
        if not result.valid:
            for err in result.errors:
                print(err.path, err.message)
    """
    run = _Run(source)
    try:
        return await run.execute(config, transport)
    except Exception as exc:
        logger.exception("Unexpected error while validating %s", source.label)
        run.enter(PipelineState.FAILED)
        return ValidationResult.failure(
            DOCUMENT_ERROR_PATH, f"Unknown error during validation: {exc}"
        )


def validate_sync(
    source: Union[FileSource, UrlSource],
    config: Optional[FetchConfig] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ValidationResult:
    """Blocking wrapper around :func:`validate` for callers without an event loop."""
    return asyncio.run(validate(source, config, transport=transport))


class _Run:
    """State for a single invocation of :func:`validate`."""

    def __init__(self, source: Union[FileSource, UrlSource]) -> None:
        self._source = source
        self.state: Optional[PipelineState] = None

    def enter(self, state: PipelineState) -> None:
        logger.debug("%s: %s", self._source.label, state.value)
        self.state = state

    async def execute(
        self,
        config: Optional[FetchConfig],
        transport: Optional[httpx.AsyncBaseTransport],
    ) -> ValidationResult:
        self.enter(PipelineState.LOADING)
        try:
            payload = await load_content(self._source, config, transport)
        except LoadError as exc:
            return self._fail(exc)

        try:
            document = self._parse(payload)
        except ParseError as exc:
            return self._fail(exc)

        self.enter(PipelineState.RESOLVING_VERSION)
        version = resolve_version(document)
        try:
            require_supported(version)
        except VersionError as exc:
            return self._version_failure(document, version, exc)

        self.enter(PipelineState.VALIDATING)
        errors = validate_schema(document, version.kind)

        self.enter(PipelineState.CHECKING_STRUCTURE)
        errors.extend(check_structure(document))

        self.enter(PipelineState.COLLECTING_STATS)
        stats = collect_stats(document, version)

        self.enter(PipelineState.DONE)
        logger.debug(
            "%s: %d error(s), %d endpoint(s), %d schema(s)",
            self._source.label, len(errors), stats.endpoints, stats.schemas,
        )
        return ValidationResult.build(errors, stats, document)

    def _parse(self, payload: Any) -> dict[Any, Any]:
        if isinstance(payload, str):
            self.enter(PipelineState.PARSING)
            return parse_content(payload)
        # Already decoded by the fetcher; only the root shape is left to check.
        return ensure_mapping(payload)

    def _fail(self, exc: Union[LoadError, ParseError]) -> ValidationResult:
        logger.debug("%s: %s failed: %s", self._source.label, self.state.value, exc)
        self.enter(PipelineState.FAILED)
        return ValidationResult.failure(DOCUMENT_ERROR_PATH, exc.message)

    def _version_failure(
        self, document: dict[Any, Any], version: ResolvedVersion, exc: VersionError
    ) -> ValidationResult:
        self.enter(PipelineState.CHECKING_STRUCTURE)
        errors = [ValidationError(path=VERSION_ERROR_PATH, message=exc.message)]
        errors.extend(check_structure(document))

        if version.detected:
            stats = collect_stats(document, version)
        else:
            stats = ValidationStats(version=version.display)

        self.enter(PipelineState.FAILED)
        return ValidationResult.build(errors, stats, document)
