"""
document.py - the document model the validators operate on.

Documents are plain JSON-like Python trees: mappings, lists/tuples, ``str``,
``int``/``float``, ``bool`` and ``None``. This module is the only place that
inspects them directly.

Public API
----------
NodeKind
    The kind of a document node (object, array, string, number, ...).

kind_of(node) -> NodeKind
find_key(obj, key, *, ignore_case=False) -> str | None
as_text(node) -> str | None
load_document(source) -> Any
extract_invalid_node(error, document) -> Any
"""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Sequence

import pandas as pd

from .errors import ValidationError

__all__ = [
    "NodeKind",
    "kind_of",
    "find_key",
    "as_text",
    "load_document",
    "extract_invalid_node",
]


class NodeKind(str, Enum):
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    UNKNOWN = "unknown"


# --------------------------------------------------------------------------- #
# Introspection                                                               #
# --------------------------------------------------------------------------- #

def kind_of(node: Any) -> NodeKind:
    """Classify *node*. ``bool`` is checked before numbers since it subclasses int."""
    if node is None:
        return NodeKind.NULL
    if isinstance(node, bool):
        return NodeKind.BOOLEAN
    if isinstance(node, (int, float)):
        return NodeKind.NUMBER
    if isinstance(node, str):
        return NodeKind.STRING
    if isinstance(node, Mapping):
        return NodeKind.OBJECT
    if isinstance(node, Sequence) and not isinstance(node, (bytes, bytearray)):
        return NodeKind.ARRAY
    return NodeKind.UNKNOWN


def is_object(node: Any) -> bool:
    return kind_of(node) is NodeKind.OBJECT


def is_array(node: Any) -> bool:
    return kind_of(node) is NodeKind.ARRAY


def find_key(obj: Mapping[str, Any], key: str, *, ignore_case: bool = False) -> str | None:
    """Return the key of *obj* matching *key*, or ``None``.

    An exact match always wins; with *ignore_case* the first key that is
    equal under ``str.casefold`` is used otherwise.
    """
    if key in obj:
        return key
    if ignore_case:
        folded = key.casefold()
        for candidate in obj:
            if isinstance(candidate, str) and candidate.casefold() == folded:
                return candidate
    return None


def as_text(node: Any) -> str | None:
    """Coerce a scalar node to the string it would have in JSON source.

    Containers and ``null`` have no text value and return ``None``.
    """
    kind = kind_of(node)
    if kind is NodeKind.STRING:
        return node
    if kind is NodeKind.BOOLEAN:
        return "true" if node else "false"
    if kind is NodeKind.NUMBER:
        return json.dumps(node)
    return None


# --------------------------------------------------------------------------- #
# Loading                                                                     #
# --------------------------------------------------------------------------- #

def _read(path: Path) -> Any:
    """Read & parse a JSON document, raising crisp errors on failure."""
    try:
        with path.open(encoding="utf-8") as fd:
            return json.load(fd)
    except FileNotFoundError as exc:
        raise FileNotFoundError(f"Document not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc


def load_document(source: Any) -> Any:
    """Convert *source* into a document tree (no validation).

    Supported variants:
    * ``pandas.DataFrame`` - an array with one object per row.
    * ``Mapping`` / ``list`` / ``tuple`` - returned unchanged.
    * ``Path`` - JSON file on disk.
    * ``str``  - existing file path → load; otherwise parsed as a JSON literal.
    """
    if isinstance(source, pd.DataFrame):
        return json.loads(source.to_json(orient="records", date_format="iso"))

    if isinstance(source, (Mapping, list, tuple)):
        return source

    if isinstance(source, Path):
        return _read(source)

    if isinstance(source, str):
        p = Path(source)
        try:
            if p.is_file():
                return _read(p)
        except OSError:
            pass  # not a usable path (e.g. too long); treat as JSON text
        try:
            return json.loads(source)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Source is neither a JSON file nor a JSON literal: {exc}") from exc

    raise TypeError(f"Unsupported type for load_document: {type(source)}")


# --------------------------------------------------------------------------- #
# Error location                                                              #
# --------------------------------------------------------------------------- #

def extract_invalid_node(error: ValidationError, document: Any) -> Any:
    """Follow *error*'s path through *document* and return the node it names.

    Object keys are matched exactly where possible, else ignoring case (paths
    carry the schema's spelling of a key); array segments are parsed as
    integer indices. When the path cannot be followed further, the last node
    reached is returned.
    """
    node = document
    for segment in error.path:
        if is_object(node):
            key = find_key(node, segment, ignore_case=True)
            if key is None:
                break
            node = node[key]
            continue
        if is_array(node):
            try:
                index = int(segment)
            except ValueError:
                break
            if 0 <= index < len(node):
                node = node[index]
                continue
        break
    return node
