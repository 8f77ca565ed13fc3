"""Config commands -- view and modify the global configuration.

``oaslint config show|set|reset`` operate on the user-level file only
(``~/.config/oaslint/config.json`` on Linux); project files and
environment variables are read at validation time, not edited here.
"""

from __future__ import annotations

import typer

from oaslint.commands import fail
from oaslint.exceptions import InvalidUsageError, OaslintError
from oaslint.output import get_output, info, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show() -> None:
    """Show the stored configuration.

    Example::

        oaslint config show
        oaslint --json config show
    """
    from oaslint.config import get_config_dir, load_global_config

    try:
        config = load_global_config()
    except OaslintError as exc:
        fail(exc)
    info(f"Config directory: {get_config_dir()}")
    get_output().format_response(config.model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(help="Config key in dot notation, e.g. 'fetch.timeout'."),
    value: str = typer.Argument(help="Value to set."),
) -> None:
    """Set a configuration value.

    The value is coerced to the type of the existing field and the result
    is validated before it is saved.

    Example::

        oaslint config set fetch.timeout 10
        oaslint config set fetch.verify_ssl false
        oaslint config set output.format json
    """
    from pydantic import ValidationError as ModelValidationError

    from oaslint.config import load_global_config, save_global_config
    from oaslint.models import GlobalConfig

    try:
        config = load_global_config()
    except OaslintError as exc:
        fail(exc)
    data = config.model_dump(mode="json")

    *parents, final_key = key.split(".")
    target = data
    for k in parents:
        if not isinstance(target.get(k), dict):
            fail(InvalidUsageError(f"Invalid config key: {key}"))
        target = target[k]
    if final_key not in target or isinstance(target[final_key], dict):
        fail(InvalidUsageError(f"Unknown config key: {key}"))

    current = target[final_key]
    if isinstance(current, bool):
        coerced: object = value.lower() in ("true", "1", "yes")
    elif isinstance(current, float):
        try:
            coerced = float(value)
        except ValueError:
            fail(InvalidUsageError(f"Expected a number for {key}, got: {value}"))
    else:
        coerced = value
    target[final_key] = coerced

    try:
        new_config = GlobalConfig.model_validate(data)
    except ModelValidationError as exc:
        fail(InvalidUsageError(f"Validation error: {exc}"))

    save_global_config(new_config)
    success(f"Set {key} = {coerced}")


@config_app.command("reset")
def config_reset(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation."),
) -> None:
    """Reset the configuration to defaults.

    Example::

        oaslint config reset --force
    """
    from oaslint.config import save_global_config
    from oaslint.models import GlobalConfig

    if not force and not typer.confirm("Reset all config to defaults?"):
        info("Cancelled.")
        raise typer.Exit()

    save_global_config(GlobalConfig())
    success("Configuration reset to defaults.")
