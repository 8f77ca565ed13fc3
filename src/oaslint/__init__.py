"""oaslint -- validate OpenAPI 3.0/3.1 and Swagger 2.0 documents.

This package loads an API description from a file or URL, parses it as JSON
or YAML, works out which specification version it declares, validates it
against the matching meta-model, adds structural checks of its own, and
reports the outcome together with endpoint and schema counts.

Typical usage::

    from oaslint import FileSource, validate_sync

    result = validate_sync(FileSource(path="openapi.yaml"))
    print(result.valid, result.stats.endpoints)

or, from the shell::

    oaslint validate openapi.yaml

Modules:
    app: Typer application factory and CLI entry point.
    models: Pydantic models shared across the entire package.
    config: XDG-aware configuration with precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
    parser: Loading, format parsing and version detection.
    validation: The validation pipeline and its components.
"""

__version__ = "0.1.0"

from oaslint.models import (  # noqa: E402
    FileSource,
    UrlSource,
    ValidationError,
    ValidationResult,
    ValidationStats,
)
from oaslint.validation import validate, validate_sync  # noqa: E402

__all__ = [
    "FileSource",
    "UrlSource",
    "ValidationError",
    "ValidationResult",
    "ValidationStats",
    "validate",
    "validate_sync",
    "__version__",
]
