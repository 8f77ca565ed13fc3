"""Exception hierarchy for oaslint.

All exceptions inherit from :class:`OaslintError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`oaslint.exit_codes`.

Inside the validation pipeline these exceptions never reach the caller:
:func:`~oaslint.validation.pipeline.validate` catches each one where it
originates and folds it into the returned
:class:`~oaslint.models.ValidationResult`. They escape only from the lower
level helpers (``load_content``, ``parse_content``, ``validate_schema``) and
from configuration handling, where the CLI's top-level handler maps them to
an exit code.

Subclass hierarchy::

    OaslintError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- LoadError           (exit 6)
    +-- ParseError          (exit 7)
    +-- VersionError        (exit 7)
    +-- ConfigError         (exit 1)
"""

from oaslint.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_LOAD_ERROR,
    EXIT_PARSE_ERROR,
)


class OaslintError(Exception):
    """Base exception for all oaslint errors.

    Args:
        message: Human-readable error description. The pipeline copies it
            verbatim into the report's error list.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code

    @property
    def message(self) -> str:
        return str(self)


class InvalidUsageError(OaslintError):
    """Raised for invalid CLI arguments or malformed source descriptors."""

    exit_code = EXIT_INVALID_USAGE


class LoadError(OaslintError):
    """Raised when a file cannot be read or a URL cannot be fetched."""

    exit_code = EXIT_LOAD_ERROR


class ParseError(OaslintError):
    """Raised when content is neither JSON nor YAML, or its root is not an object."""

    exit_code = EXIT_PARSE_ERROR


class VersionError(OaslintError):
    """Raised when a document declares no version, or one with no meta-model."""

    exit_code = EXIT_PARSE_ERROR


class ConfigError(OaslintError):
    """Raised for configuration problems (invalid JSON, bad values in config files)."""

    exit_code = EXIT_GENERIC_FAILURE
