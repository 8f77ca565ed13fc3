"""Typer application and CLI entry point for oaslint.

Registers the built-in sub-commands (``validate``, ``inspect``,
``config``) on the root application. :func:`main` is the console-script
entry point declared in ``pyproject.toml``: it invokes the app, maps
:class:`~oaslint.exceptions.OaslintError` to its exit code and writes a
crash log under the data directory for anything unexpected.

See Also:
    :mod:`oaslint.config`: Configuration resolution.
    :mod:`oaslint.output`: The output manager installed by :func:`main_callback`.
"""

from __future__ import annotations

import logging
import sys
import traceback
from datetime import datetime
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from oaslint import __version__
from oaslint.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="oaslint",
    help="Validate OpenAPI 3.0/3.1 and Swagger 2.0 documents.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"oaslint {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool, no_color: bool) -> None:
    """Route library DEBUG logs to stderr through Rich when ``--verbose`` is set."""
    logger = logging.getLogger("oaslint")
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    if not verbose:
        logger.setLevel(logging.NOTSET)
        return

    handler = RichHandler(
        console=Console(stderr=True, no_color=no_color),
        show_time=False,
        show_path=False,
    )
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", min=0.001, help="HTTP timeout in seconds for URL sources."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~oaslint.output.OutputManager` from the
    output flags and stores the settings that take part in config
    resolution (``format``, ``timeout``) in ``ctx.obj``.
    """
    from oaslint.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))
    _configure_logging(verbose, no_color)

    ctx.ensure_object(dict)
    ctx.obj["format"] = None if fmt == OutputFormat.AUTO else fmt.value
    ctx.obj["timeout"] = timeout
    ctx.obj["no_color"] = no_color


from oaslint.commands.config import config_app  # noqa: E402
from oaslint.commands.inspect import inspect_app  # noqa: E402
from oaslint.commands.validate import validate_command  # noqa: E402

app.command("validate")(validate_command)
app.add_typer(inspect_app, name="inspect", help="List paths or schemas in a document.")
app.add_typer(config_app, name="config", help="Configuration management.")


def _write_crash_log(exc: Exception) -> str:
    """Write the current traceback to the data directory and return its path."""
    from oaslint.config import get_data_dir

    log_path = get_data_dir() / "logs" / f"crash-{datetime.now():%Y%m%d-%H%M%S}.log"
    log_path.parent.mkdir(parents=True, exist_ok=True)
    log_path.write_text(
        f"oaslint {__version__}\n{type(exc).__name__}: {exc}\n\n{traceback.format_exc()}",
        encoding="utf-8",
    )
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``oaslint`` console script.

    Unhandled :class:`~oaslint.exceptions.OaslintError` instances cause a
    clean exit with the error's ``exit_code``. All other exceptions produce
    a crash log and a generic failure exit.
    """
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from oaslint.exceptions import OaslintError
        from oaslint.output import error

        if isinstance(exc, OaslintError):
            error(exc.message)
            sys.exit(exc.exit_code)
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
