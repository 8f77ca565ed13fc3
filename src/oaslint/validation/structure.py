"""Hand-written structural checks that run alongside meta-schema validation.

The meta-model tells whether a document is shaped like an OpenAPI document;
these checks enforce what oaslint additionally requires of every document it
accepts, whatever its version: an ``info`` object with a title and a version,
a ``paths`` object, and an ``operationId`` plus ``responses`` on every
operation.

:func:`check_structure` never raises on a mapping-rooted document, however
odd its contents. Overlap with meta-schema findings is expected and kept.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from oaslint.models import ValidationError
from oaslint.parser.document import (
    get_value,
    is_mapping,
    is_missing,
    iter_operations,
)


def check_structure(document: Mapping[Any, Any]) -> list[ValidationError]:
    """Run the structural checks over *document*.

    Returns:
        Findings in document order: info, then paths, then each path item's
        operations in :data:`~oaslint.parser.document.OPERATION_METHODS`
        order. Empty when nothing is wrong.
    """
    errors: list[ValidationError] = []
    errors.extend(_check_info(document))
    errors.extend(_check_paths(document))
    return errors


def _check_info(document: Mapping[Any, Any]) -> list[ValidationError]:
    info = get_value(document, "info")
    if is_missing(info) or not is_mapping(info):
        return [ValidationError(path="/info", message="Required info object is missing")]

    errors = []
    if is_missing(get_value(info, "title")):
        errors.append(ValidationError(path="/info/title", message="API title is required"))
    if is_missing(get_value(info, "version")):
        errors.append(ValidationError(path="/info/version", message="API version is required"))
    return errors


def _check_paths(document: Mapping[Any, Any]) -> list[ValidationError]:
    paths = get_value(document, "paths")
    if is_missing(paths):
        return [ValidationError(path="/paths", message="Required paths object is missing")]
    if not is_mapping(paths):
        return [ValidationError(path="/paths", message="Paths must be an object")]

    errors = []
    for path, item in paths.items():
        pointer = f"/paths/{path}"
        if not is_mapping(item):
            errors.append(ValidationError(path=pointer, message="Path item must be an object"))
            continue
        for method, operation in iter_operations(item):
            if is_missing(get_value(operation, "operationId")):
                errors.append(
                    ValidationError(path=f"{pointer}/{method}", message="Operation ID is missing")
                )
            if is_missing(get_value(operation, "responses")):
                errors.append(
                    ValidationError(
                        path=f"{pointer}/{method}/responses",
                        message="Responses object is missing",
                    )
                )
    return errors
