"""Safe accessors over a parsed document tree.

A parsed document is the plain ``dict`` / ``list`` / scalar tree produced by
:mod:`json` or PyYAML. The version resolver, the structural checker and the
statistics collector all read it through these helpers, which return
``None`` (or an empty iterator) instead of raising when a key is missing or a
node has the wrong shape.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any, Optional

OPERATION_METHODS: tuple[str, ...] = (
    "get",
    "post",
    "put",
    "delete",
    "patch",
    "options",
    "head",
)
"""HTTP methods counted as operations under a path item, in reporting order."""


def is_mapping(node: Any) -> bool:
    """Return ``True`` if *node* is a mapping (a JSON object / YAML map)."""
    return isinstance(node, Mapping)


def get_value(node: Any, key: str) -> Any:
    """Return ``node[key]`` when *node* is a mapping holding *key*, else ``None``."""
    if not isinstance(node, Mapping):
        return None
    return node.get(key)


def get_mapping(node: Any, key: str) -> Optional[Mapping[Any, Any]]:
    """Return ``node[key]`` only if it is itself a mapping."""
    value = get_value(node, key)
    return value if isinstance(value, Mapping) else None


def get_path(node: Any, *keys: str) -> Any:
    """Follow *keys* down nested mappings, returning ``None`` at the first gap."""
    for key in keys:
        node = get_value(node, key)
        if node is None:
            return None
    return node


def is_missing(value: Any) -> bool:
    """Return ``True`` for values that count as absent: ``None`` and ``""``.

    Empty mappings and lists are *present*: ``responses: {}`` declares a
    responses object, it just has no entries.
    """
    return value is None or (isinstance(value, str) and value == "")


def iter_path_items(document: Any) -> Iterator[tuple[str, Any]]:
    """Yield ``(path, path_item)`` pairs from ``document["paths"]``.

    Yields nothing when ``paths`` is absent or not a mapping. Path items are
    yielded as-is, whatever their type.
    """
    paths = get_mapping(document, "paths")
    if paths is None:
        return
    for path, item in paths.items():
        yield str(path), item


def iter_operations(path_item: Any) -> Iterator[tuple[str, Any]]:
    """Yield ``(method, operation)`` for each recognised method key in *path_item*.

    Presence of the key is what counts; the operation value is yielded even
    when it is ``null`` or not a mapping.
    """
    if not isinstance(path_item, Mapping):
        return
    for method in OPERATION_METHODS:
        if method in path_item:
            yield method, path_item[method]
