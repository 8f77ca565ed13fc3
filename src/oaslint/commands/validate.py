"""``oaslint validate`` -- validate one OpenAPI / Swagger document.

The report (version, endpoint and schema counts, error list) goes to
stdout in the active output format; the exit code tells scripts whether
the document passed.
"""

from __future__ import annotations

import typer

from oaslint.commands import resolve_settings
from oaslint.exit_codes import EXIT_VALIDATION_FAILED
from oaslint.models import source_from_argument
from oaslint.output import debug, get_output, success, warning
from oaslint.validation import validate_sync


def validate_command(
    ctx: typer.Context,
    source: str = typer.Argument(help="Path or http(s) URL of the document."),
) -> None:
    """Validate an OpenAPI 3.0/3.1 or Swagger 2.0 document.

    Exits 0 when the document is valid and 3 when it is not.

    Example::

        oaslint validate openapi.yaml
        oaslint --json validate https://petstore3.swagger.io/api/v3/openapi.json
    """
    config = resolve_settings(ctx)
    spec_source = source_from_argument(source)
    debug(f"Validating {spec_source.label} (timeout {config.fetch.timeout}s)")

    result = validate_sync(spec_source, config.fetch)
    get_output().print_report(result, spec_source.label)

    if result.valid:
        success("Document is valid.")
        return
    warning(f"{len(result.errors)} problem(s) found.")
    raise typer.Exit(code=EXIT_VALIDATION_FAILED)
