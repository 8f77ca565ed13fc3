"""Summary statistics and listings for a parsed document.

Counts are independent of validity: they are computed for malformed
documents too, with absent or malformed sections counting as zero. The
listings (:func:`list_endpoints`, :func:`list_schemas`) back the
``oaslint inspect`` commands.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from oaslint.models import (
    EndpointSummary,
    ResolvedVersion,
    SchemaSummary,
    ValidationStats,
)
from oaslint.parser.document import (
    get_mapping,
    get_path,
    get_value,
    iter_operations,
    iter_path_items,
)


def collect_stats(document: Mapping[Any, Any], version: ResolvedVersion) -> ValidationStats:
    """Count endpoints and schemas in *document*.

    Args:
        document: The parsed, mapping-rooted document.
        version: The resolved version; its display text becomes
            ``stats.version``.
    """
    return ValidationStats(
        endpoints=count_endpoints(document),
        schemas=count_schemas(document),
        version=version.display,
    )


def count_endpoints(document: Any) -> int:
    """Number of recognised HTTP-method keys across all path items."""
    return sum(
        sum(1 for _ in iter_operations(item)) for _, item in iter_path_items(document)
    )


def count_schemas(document: Any) -> int:
    """Entries in ``components.schemas`` (3.x), else ``definitions`` (2.0), else 0.

    The two sections are never summed: the first one that is a mapping wins.
    """
    section = _schema_section(document)
    return len(section) if section is not None else 0


def list_endpoints(document: Any) -> list[EndpointSummary]:
    """One row per operation, in document order of paths then method order."""
    rows = []
    for path, item in iter_path_items(document):
        for method, operation in iter_operations(item):
            rows.append(
                EndpointSummary(
                    method=method.upper(),
                    path=path,
                    operation_id=_text(get_value(operation, "operationId")),
                    summary=_text(get_value(operation, "summary")),
                    deprecated=get_value(operation, "deprecated") is True,
                )
            )
    return rows


def list_schemas(document: Any) -> list[SchemaSummary]:
    """One row per named schema, sorted by name."""
    section = _schema_section(document)
    if section is None:
        return []

    rows = []
    for name, schema in section.items():
        schema_type = get_value(schema, "type")
        if isinstance(schema_type, list):
            # 3.1 allows a list of types, e.g. ["string", "null"]
            schema_type = " | ".join(str(t) for t in schema_type)
        elif not isinstance(schema_type, str):
            schema_type = "object" if isinstance(schema, Mapping) else "unknown"
        properties = get_mapping(schema, "properties") or {}
        required = get_value(schema, "required")
        rows.append(
            SchemaSummary(
                name=str(name),
                type=schema_type,
                properties=[str(p) for p in properties],
                required=[str(r) for r in required] if isinstance(required, list) else [],
            )
        )
    return sorted(rows, key=lambda row: row.name)


def _schema_section(document: Any) -> Optional[Mapping[Any, Any]]:
    schemas = get_path(document, "components", "schemas")
    if isinstance(schemas, Mapping):
        return schemas
    return get_mapping(document, "definitions")


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None
