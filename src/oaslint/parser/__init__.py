"""Document parser -- load, parse, and classify OpenAPI / Swagger documents.

This sub-package covers the first half of the oaslint pipeline: turning a
file buffer, local path or URL into a mapping-rooted dictionary and working
out which specification version it declares.

Typical usage::

    from oaslint.parser import parse_content, resolve_version

    document = parse_content(text)
    version = resolve_version(document)

Sub-modules:

* :mod:`~oaslint.parser.loader` -- I/O layer (file buffer, path, URL) plus
  the JSON-then-YAML format parser.
* :mod:`~oaslint.parser.version` -- ``openapi`` / ``swagger`` key
  classification.
* :mod:`~oaslint.parser.document` -- safe accessors shared by every reader
  of the parsed tree.
"""

from oaslint.parser.loader import ensure_mapping, load_content, parse_content
from oaslint.parser.version import resolve_version

__all__ = ["load_content", "parse_content", "ensure_mapping", "resolve_version"]
