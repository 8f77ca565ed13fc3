"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific outcome of an ``oaslint`` invocation and is
referenced by the corresponding :class:`~oaslint.exceptions.OaslintError`
subclass. CI scripts can gate on the exit code without parsing the report.

Example::

    $ oaslint validate openapi.yaml
    $ echo $?
    3   # EXIT_VALIDATION_FAILED -- the document has errors
"""

EXIT_SUCCESS = 0
"""The document is valid (or the command completed successfully)."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_VALIDATION_FAILED = 3
"""The document was validated and the report contains at least one error."""

EXIT_LOAD_ERROR = 6
"""The document could not be read from disk or fetched from its URL."""

EXIT_PARSE_ERROR = 7
"""The document is neither JSON nor YAML, or declares no supported version."""
