"""Built-in CLI sub-commands for oaslint.

* :mod:`~oaslint.commands.validate` -- validate one document and print the
  report.
* :mod:`~oaslint.commands.inspect` -- list the paths or schemas a document
  defines.
* :mod:`~oaslint.commands.config` -- view and modify global settings.

The helpers below are shared by the commands that read a document: they
resolve the effective configuration for the invocation and turn library
errors into a diagnostic plus the matching exit code.
"""

from __future__ import annotations

from typing import NoReturn

import typer

from oaslint.exceptions import OaslintError
from oaslint.models import GlobalConfig
from oaslint.output import OutputFormat, OutputManager, error, get_output, set_output


def resolve_settings(ctx: typer.Context) -> GlobalConfig:
    """Resolve the effective config for this invocation.

    Reads ``--timeout`` and the output flags stored by
    :func:`~oaslint.app.main_callback`. When no output flag was given, the
    configured ``output.format`` replaces the ``auto`` manager installed at
    startup.
    """
    from oaslint.config import resolve_config

    obj = ctx.obj or {}
    try:
        config = resolve_config(
            cli_timeout=obj.get("timeout"),
            cli_format=obj.get("format"),
        )
    except OaslintError as exc:
        fail(exc)

    if obj.get("format") is None and config.output.format != OutputFormat.AUTO.value:
        current = get_output()
        set_output(
            OutputManager(
                format=OutputFormat(config.output.format),
                no_color=obj.get("no_color", False),
                quiet=current.is_quiet,
                verbose=current.is_verbose,
            )
        )
    return config


def fail(exc: OaslintError) -> NoReturn:
    """Report *exc* on stderr and exit with its exit code."""
    error(exc.message)
    raise typer.Exit(code=exc.exit_code)
