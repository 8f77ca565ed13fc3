"""Where oaslint keeps its settings and how the effective settings are chosen.

* **Directories** -- XDG base directories on Linux/BSD (``~/.config/oaslint``,
  ``~/.local/share/oaslint``), ``~/.oaslint/`` elsewhere; see
  :func:`get_config_dir` and :func:`get_data_dir`.
* **User config** -- one :class:`~oaslint.models.GlobalConfig` JSON file
  with the HTTP fetch settings and the default output format.
* **Layering** -- :func:`resolve_config` stacks the user file, the project
  file, environment variables and CLI flags.

The user file is replaced through :func:`_atomic_write` (temp file in the
same directory, then ``os.replace``), so a crash never leaves it half written.

The validation library itself never reads these files: callers pass a
:class:`~oaslint.models.FetchConfig` explicitly. Only the CLI resolves one
from disk.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError as ModelValidationError

from oaslint.exceptions import ConfigError
from oaslint.models import GlobalConfig

_APP_NAME = "oaslint"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "oaslint.json"

ENV_TIMEOUT = "OASLINT_TIMEOUT"
ENV_FORMAT = "OASLINT_FORMAT"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    system = platform.system()
    return system == "Linux" or system.endswith("BSD")


def _fallback_base_dir() -> Path:
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """$XDG_* if set and non-empty, else the default under the home directory."""
    override = os.environ.get(env_var)
    return Path(override) if override else Path.home().joinpath(*default_segments)


def get_config_dir() -> Path:
    """Config directory (created on first use).

    On Linux/BSD: ``$XDG_CONFIG_HOME/oaslint/`` (default ``~/.config/oaslint/``).
    On macOS/Windows: ``~/.oaslint/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Data directory for crash logs (created on first use).

    On Linux/BSD: ``$XDG_DATA_HOME/oaslint/`` (default ``~/.local/share/oaslint/``).
    On macOS/Windows: ``~/.oaslint/data/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "data"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Replace *path* with *data* in one step; the temp file is removed on failure."""
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = tempfile.NamedTemporaryFile(
        mode="w",
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
        delete=False,
        encoding="utf-8",
    )
    try:
        with fd:
            fd.write(data)
            fd.flush()
            os.fsync(fd.fileno())
        os.replace(fd.name, path)
    except BaseException:
        Path(fd.name).unlink(missing_ok=True)
        raise


# --- Global config ---


def global_config_path() -> Path:
    """Location of the user-level ``config.json``."""
    return get_config_dir() / _CONFIG_FILENAME


def _read_json(path: Path, what: str) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ConfigError(f"Invalid {what} at {path}: {exc}") from exc


def load_global_config() -> GlobalConfig:
    """Load the global configuration from the config directory.

    Returns:
        The deserialised :class:`~oaslint.models.GlobalConfig`, or a default
        instance when the file does not exist.

    Raises:
        ConfigError: If the file is unreadable, not JSON, or rejected by the
            model.
    """
    path = global_config_path()
    if not path.is_file():
        return GlobalConfig()
    data = _read_json(path, "global config")
    try:
        return GlobalConfig.model_validate(data)
    except ModelValidationError as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    """Persist the global configuration atomically to disk."""
    data = config.model_dump(mode="json")
    _atomic_write(global_config_path(), json.dumps(data, indent=2) + "\n")


# --- Project-local config ---


def load_project_config() -> Optional[dict[str, Any]]:
    """Load project-local overrides from ``./oaslint.json``.

    The file holds the same sections as the global config (``fetch``,
    ``output``); any section it sets replaces the user-level values key by
    key.

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file is not valid JSON or not a JSON object.
    """
    path = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    data = _read_json(path, "project config")
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


# --- Precedence resolution ---


def resolve_config(
    cli_timeout: Optional[float] = None,
    cli_format: Optional[str] = None,
) -> GlobalConfig:
    """Resolve the effective configuration.

    Precedence (high to low):
        1. CLI flags (``cli_timeout``, ``cli_format``)
        2. Environment variables (``OASLINT_TIMEOUT``, ``OASLINT_FORMAT``)
        3. Project config (``./oaslint.json``)
        4. User config (``~/.config/oaslint/config.json``)
        5. Defaults

    Raises:
        ConfigError: If any layer holds an invalid value.
    """
    # 5 + 4
    data = load_global_config().model_dump(mode="json")

    # 3
    project = load_project_config()
    if project is not None:
        for section in ("fetch", "output"):
            overrides = project.get(section)
            if isinstance(overrides, dict):
                data[section].update(overrides)

    # 2
    env_timeout = os.environ.get(ENV_TIMEOUT)
    if env_timeout:
        try:
            data["fetch"]["timeout"] = float(env_timeout)
        except ValueError:
            raise ConfigError(
                f"{ENV_TIMEOUT} must be a number of seconds, got: {env_timeout}"
            ) from None
    env_format = os.environ.get(ENV_FORMAT)
    if env_format:
        data["output"]["format"] = env_format

    # 1
    if cli_timeout is not None:
        data["fetch"]["timeout"] = cli_timeout
    if cli_format is not None:
        data["output"]["format"] = cli_format

    try:
        return GlobalConfig.model_validate(data)
    except ModelValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
