"""Meta-schema validation of a parsed document with :mod:`jsonschema`.

Each supported :class:`~oaslint.models.SpecVersion` has a JSON Schema
meta-model shipped as package data under ``oaslint/schemas/``. The draft is
picked from the meta-model's own ``$schema`` via
:func:`jsonschema.validators.validator_for` (draft-04 for Swagger 2.0 and
OpenAPI 3.0, 2020-12 for OpenAPI 3.1). Validators are built once per version
and reused; they hold no per-run state.

Every :class:`jsonschema.exceptions.ValidationError` is normalised into an
:class:`~oaslint.models.ValidationError`:

* ``path`` -- the JSON pointer of the offending instance location
  (``/paths/~1pets/get``); when that is empty (a root-level finding such as a
  missing required key), the schema location as ``#/required``; ``""`` if
  both are empty.
* ``message`` -- the validator's message, or ``"Unknown validation error"``.

A value nested inside itself through a YAML alias is reported once, at the
pointer where it repeats, after the meta-model findings.
"""

from __future__ import annotations

import functools
import json
import logging
from collections.abc import Iterable, Mapping
from importlib import resources
from typing import Any, Optional

from jsonschema import validators
from jsonschema.exceptions import ValidationError as SchemaViolation
from jsonschema.protocols import Validator

from oaslint.exceptions import VersionError
from oaslint.models import SpecVersion, ValidationError

logger = logging.getLogger(__name__)

META_MODELS: dict[SpecVersion, str] = {
    SpecVersion.OPENAPI_3_0: "openapi-3.0.json",
    SpecVersion.OPENAPI_3_1: "openapi-3.1.json",
    SpecVersion.SWAGGER_2_0: "swagger-2.0.json",
}

UNKNOWN_ERROR_MESSAGE = "Unknown validation error"
RECURSIVE_ALIAS_MESSAGE = "Value contains itself through a recursive alias"


def load_meta_model(version: SpecVersion) -> dict[str, Any]:
    """Return the bundled meta-model for *version* as a dict.

    Raises:
        VersionError: If no meta-model exists for *version*.
    """
    filename = META_MODELS.get(version)
    if filename is None:
        raise VersionError(f"No meta-model for {version.value}")
    resource = resources.files("oaslint") / "schemas" / filename
    return json.loads(resource.read_text(encoding="utf-8"))


@functools.lru_cache(maxsize=None)
def get_validator(version: SpecVersion) -> Validator:
    """Build (once) the jsonschema validator for *version*."""
    schema = load_meta_model(version)
    cls = validators.validator_for(schema)
    logger.debug("Using %s for %s", cls.__name__, version.value)
    return cls(schema)


def validate_schema(document: Mapping[Any, Any], version: SpecVersion) -> list[ValidationError]:
    """Validate *document* against the meta-model for *version*.

    Args:
        document: The parsed, mapping-rooted document.
        version: A supported version (not :attr:`SpecVersion.UNKNOWN`).

    Returns:
        Findings ordered by instance location, then schema location. Empty
        when the document conforms.

    Raises:
        VersionError: If *version* has no meta-model. The pipeline never
            calls this function for such versions.
    """
    if version not in META_MODELS:
        raise VersionError(f"No meta-model for {version.value}")
    validator = get_validator(version)
    cycles: list[str] = []
    instance = to_json_compatible(document, cycles)
    errors = [_normalise(v) for v in _stable_order(validator.iter_errors(instance))]
    errors.extend(
        ValidationError(path=pointer, message=RECURSIVE_ALIAS_MESSAGE) for pointer in cycles
    )
    return errors


def to_json_compatible(node: Any, cycles: Optional[list[str]] = None) -> Any:
    """Copy *node* with every mapping key rendered as a string.

    YAML allows non-string keys (``200:`` loads as an int); JSON Schema
    keywords such as ``patternProperties`` expect string keys.

    A YAML alias can nest a mapping or list inside itself (``&a`` ... ``*a``).
    The inner repeat is copied as an empty container of the same kind and its
    JSON pointer is appended to *cycles* when a list is given.
    """
    return _copy(node, (), set(), cycles if cycles is not None else [])


def _copy(node: Any, location: tuple[str, ...], active: set[int], cycles: list[str]) -> Any:
    if not isinstance(node, (Mapping, list)):
        return node
    if id(node) in active:
        cycles.append(json_pointer(location))
        return {} if isinstance(node, Mapping) else []

    active.add(id(node))
    try:
        if isinstance(node, Mapping):
            copied: dict[str, Any] = {}
            for key, value in node.items():
                text = key if isinstance(key, str) else _key_text(key)
                copied[text] = _copy(value, location + (text,), active, cycles)
            return copied
        return [_copy(item, location + (str(i),), active, cycles) for i, item in enumerate(node)]
    finally:
        active.discard(id(node))


def json_pointer(parts: Iterable[Any]) -> str:
    """Render path segments as an RFC 6901 JSON pointer (``""`` for the root)."""
    return "".join(
        "/" + str(part).replace("~", "~0").replace("/", "~1") for part in parts
    )


def _key_text(key: Any) -> str:
    if isinstance(key, bool):
        return str(key).lower()
    if key is None:
        return "null"
    return str(key)


def _stable_order(violations: Iterable[SchemaViolation]) -> list[SchemaViolation]:
    return sorted(
        violations,
        key=lambda v: (json_pointer(v.absolute_path), json_pointer(v.absolute_schema_path)),
    )


def _normalise(violation: SchemaViolation) -> ValidationError:
    path = json_pointer(violation.absolute_path)
    if not path:
        schema_path = json_pointer(violation.absolute_schema_path)
        path = f"#{schema_path}" if schema_path else ""
    return ValidationError(path=path, message=violation.message or UNKNOWN_ERROR_MESSAGE)
