"""Shared test fixtures for oaslint.

Provides document fixtures, an isolated config environment, output state
management and a CLI runner. Discovered automatically by pytest.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from oaslint.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When CliRunner redirects those streams and the test
    finishes, the cached references go stale.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Document fixtures
# ---------------------------------------------------------------------------


def _load(name: str) -> dict[str, Any]:
    with open(FIXTURES_DIR / name, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def petstore_30_raw() -> dict[str, Any]:
    """OpenAPI 3.0 petstore: 4 operations, 3 schemas."""
    return _load("petstore_3.0.json")


@pytest.fixture
def petstore_31_raw() -> dict[str, Any]:
    """OpenAPI 3.1 petstore: 2 operations, 2 schemas."""
    return _load("petstore_3.1.json")


@pytest.fixture
def swagger_20_raw() -> dict[str, Any]:
    """Swagger 2.0 user service: 3 operations, 2 definitions."""
    return _load("swagger_2.0.json")


@pytest.fixture
def invalid_30_raw() -> dict[str, Any]:
    """OpenAPI 3.0 document missing info.title and one operation's operationId/responses."""
    return _load("invalid_3.0.json")


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points XDG_CONFIG_HOME and XDG_DATA_HOME into tmp_path, forces the XDG
    layout on every platform, clears OASLINT_* variables and changes the
    working directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setattr("oaslint.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in ("OASLINT_TIMEOUT", "OASLINT_FORMAT", "NO_COLOR"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN, quiet OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True, no_color=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
