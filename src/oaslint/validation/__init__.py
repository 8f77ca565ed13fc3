"""Validation pipeline -- meta-schema validation, structural checks and statistics.

Sub-modules:

* :mod:`~oaslint.validation.pipeline` -- :func:`validate`, the orchestrator
  that turns a source into a :class:`~oaslint.models.ValidationResult`.
* :mod:`~oaslint.validation.schema` -- :mod:`jsonschema` integration against
  the bundled meta-models.
* :mod:`~oaslint.validation.structure` -- hand-written structural checks.
* :mod:`~oaslint.validation.stats` -- endpoint / schema counts and listings.
"""

from oaslint.validation.pipeline import PipelineState, validate, validate_sync
from oaslint.validation.schema import validate_schema
from oaslint.validation.stats import collect_stats, list_endpoints, list_schemas
from oaslint.validation.structure import check_structure

__all__ = [
    "PipelineState",
    "validate",
    "validate_sync",
    "validate_schema",
    "check_structure",
    "collect_stats",
    "list_endpoints",
    "list_schemas",
]
