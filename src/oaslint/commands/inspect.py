"""Inspect commands -- list what a document defines.

``oaslint inspect paths`` and ``oaslint inspect schemas`` load and parse a
document without validating it, so they also work on documents that would
fail validation.
"""

from __future__ import annotations

import asyncio
from typing import Any

import typer

from oaslint.commands import fail, resolve_settings
from oaslint.exceptions import OaslintError
from oaslint.models import source_from_argument
from oaslint.output import get_output, info
from oaslint.parser import ensure_mapping, load_content, parse_content
from oaslint.validation import list_endpoints, list_schemas


inspect_app = typer.Typer(no_args_is_help=True)


def _load_document(ctx: typer.Context, source: str) -> dict[Any, Any]:
    """Load and parse *source*, exiting with the error's code on failure."""
    config = resolve_settings(ctx)
    try:
        payload = asyncio.run(load_content(source_from_argument(source), config.fetch))
        if isinstance(payload, str):
            return parse_content(payload)
        return ensure_mapping(payload)
    except OaslintError as exc:
        fail(exc)


@inspect_app.command("paths")
def inspect_paths(
    ctx: typer.Context,
    source: str = typer.Argument(help="Path or http(s) URL of the document."),
) -> None:
    """List every operation with its method, path, operation ID and summary.

    Example::

        oaslint inspect paths openapi.yaml
    """
    document = _load_document(ctx, source)
    endpoints = list_endpoints(document)
    if not endpoints:
        info("No operations defined in this document.")
        return

    rows = [
        [
            ep.method,
            ep.path,
            ep.operation_id or "-",
            ep.summary or "-",
            "Yes" if ep.deprecated else "",
        ]
        for ep in endpoints
    ]
    get_output().print_table(
        ["Method", "Path", "Operation ID", "Summary", "Deprecated"],
        rows,
        title=f"Paths ({len(rows)})",
    )


@inspect_app.command("schemas")
def inspect_schemas(
    ctx: typer.Context,
    source: str = typer.Argument(help="Path or http(s) URL of the document."),
) -> None:
    """List named schemas (``components.schemas`` or ``definitions``).

    Example::

        oaslint inspect schemas swagger.json
    """
    document = _load_document(ctx, source)
    schemas = list_schemas(document)
    if not schemas:
        info("No schemas defined in this document.")
        return

    rows = []
    for schema in schemas:
        props = ", ".join(schema.properties[:5])
        if len(schema.properties) > 5:
            props += "..."
        rows.append([schema.name, schema.type, props, ", ".join(schema.required)])
    get_output().print_table(
        ["Schema", "Type", "Properties", "Required"],
        rows,
        title=f"Schemas ({len(rows)})",
    )
