"""Classify a parsed document as OpenAPI 3.0, OpenAPI 3.1, Swagger 2.0 or unknown.

The ``openapi`` key wins over ``swagger`` when both are present. Only
``3.0.x`` and ``3.1.x`` (matched by :data:`OPENAPI_VERSION_PATTERN`) and the
string ``"2.0"`` map to a meta-model; any other declared value, including a
number such as unquoted YAML ``2.0``, resolves to
:attr:`~oaslint.models.SpecVersion.UNKNOWN` but keeps its literal text for
display, so the report can say *which* version was not supported.
"""

from __future__ import annotations

import re
from typing import Any, Optional

from oaslint.exceptions import VersionError
from oaslint.models import ResolvedVersion, SpecVersion
from oaslint.parser.document import get_value, is_missing

OPENAPI_VERSION_PATTERN = re.compile(r"^3\.(\d+)\.(\d+)$")

NO_VERSION_MESSAGE = "Invalid OpenAPI document: no version detected"

_OPENAPI_MINORS = {
    0: SpecVersion.OPENAPI_3_0,
    1: SpecVersion.OPENAPI_3_1,
}


def resolve_version(document: Any) -> ResolvedVersion:
    """Inspect the ``openapi`` / ``swagger`` key of *document*.

    Args:
        document: The parsed document (a mapping).

    Returns:
        The classification together with the declared literal.

    Example::

        >>> resolve_version({"openapi": "3.1.0"}).kind
        <SpecVersion.OPENAPI_3_1: 'openapi-3.1'>
        >>> resolve_version({"swagger": "1.2"}).display
        '1.2'
    """
    declared = get_value(document, "openapi")
    openapi = _literal(declared)
    if openapi is not None:
        match = OPENAPI_VERSION_PATTERN.match(declared) if isinstance(declared, str) else None
        kind = SpecVersion.UNKNOWN
        if match:
            kind = _OPENAPI_MINORS.get(int(match.group(1)), SpecVersion.UNKNOWN)
        return ResolvedVersion(kind=kind, literal=openapi)

    declared = get_value(document, "swagger")
    swagger = _literal(declared)
    if swagger is not None:
        kind = SpecVersion.SWAGGER_2_0 if declared == "2.0" else SpecVersion.UNKNOWN
        return ResolvedVersion(kind=kind, literal=swagger)

    return ResolvedVersion(kind=SpecVersion.UNKNOWN)


def _literal(value: Any) -> Optional[str]:
    """Render a declared version as text; ``None`` and ``""`` count as undeclared.

    Unquoted YAML such as ``swagger: 2.0`` loads as a float. It renders as
    ``"2.0"`` for display but never matches a supported version.
    """
    if is_missing(value):
        return None
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


def require_supported(version: ResolvedVersion) -> None:
    """Raise :class:`~oaslint.exceptions.VersionError` unless *version* has a meta-model."""
    if not version.detected:
        raise VersionError(NO_VERSION_MESSAGE)
    if not version.supported:
        raise VersionError(f"Unsupported OpenAPI version: {version.literal}")
