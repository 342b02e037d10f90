"""
loader.py - build :class:`SchemaOptions` from a JSON configuration.

Public API
----------
load_options(source, *models) -> SchemaOptions
    *source* is a path to a JSON file or an already-parsed mapping::

        {
          "enum_ignore_case": false,
          "allow_extra_fields": false,
          "required":   ["Person.age"],
          "optional":   ["Team.budget"],
          "min_counts": {"Team.members": 1},
          "max_counts": {"Team.members": 10}
        }

    Selectors are ``"<Model>.<field>"``; ``<Model>`` is matched against the
    ``__name__`` or canonical name of one of *models*.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping

from .descriptors import model_descriptor
from .errors import SchemaError
from .options import SchemaOptions

__all__ = ["load_options"]

log = logging.getLogger(__name__)

_KNOWN_KEYS = {
    "enum_ignore_case", "allow_extra_fields",
    "required", "optional", "min_counts", "max_counts",
}

# --------------------------------------------------------------------------- #
# Helpers                                                                     #
# --------------------------------------------------------------------------- #

def _read(path: Path) -> Mapping[str, Any]:
    """Read & parse a JSON options file, raising crisp errors on failure."""
    try:
        with path.open(encoding="utf-8") as fd:
            return json.load(fd)
    except FileNotFoundError as exc:
        raise FileNotFoundError(f"Options file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc


def _resolve(selector: str, models: Mapping[str, type]) -> tuple[type, str]:
    type_part, sep, field_name = selector.rpartition(".")
    if not sep or not type_part or not field_name:
        raise SchemaError(f"Selector '{selector}' must look like 'Model.field'")
    try:
        return models[type_part], field_name
    except KeyError:
        raise SchemaError(
            f"Selector '{selector}' names unknown model '{type_part}'; "
            f"known: {sorted(models)}"
        ) from None


def _flag(data: Mapping[str, Any], key: str) -> bool:
    value = data[key]
    if not isinstance(value, bool):
        raise SchemaError(f"Option '{key}' must be true or false, got {value!r}")
    return value


def _selectors(data: Mapping[str, Any], key: str) -> list[str]:
    value = data.get(key, [])
    if not isinstance(value, list) or not all(isinstance(s, str) for s in value):
        raise SchemaError(f"Option '{key}' must be a list of 'Model.field' strings, got {value!r}")
    return value


def _counts(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key, {})
    if not isinstance(value, Mapping) or not all(isinstance(s, str) for s in value):
        raise SchemaError(f"Option '{key}' must be an object of 'Model.field': count, got {value!r}")
    return value


def _index(models: tuple[type, ...]) -> dict[str, type]:
    out: dict[str, type] = {}
    for m in models:
        descriptor = model_descriptor(m)
        out[m.__name__] = m
        out[descriptor.name] = m
    return out


# --------------------------------------------------------------------------- #
# Public utilities                                                            #
# --------------------------------------------------------------------------- #

def load_options(source: str | Path | Mapping[str, Any], *models: type) -> SchemaOptions:
    data = source if isinstance(source, Mapping) else _read(Path(source))
    if not isinstance(data, Mapping):
        raise SchemaError(f"Options must be a JSON object, got {type(data).__name__}")

    unknown = set(data) - _KNOWN_KEYS
    if unknown:
        raise SchemaError(f"Unknown option key(s): {sorted(unknown)}")

    by_name = _index(models)
    options = SchemaOptions.EMPTY

    if "enum_ignore_case" in data:
        options = options.set_enum_ignore_case(_flag(data, "enum_ignore_case"))
    if "allow_extra_fields" in data:
        options = options.set_allow_extra_fields(_flag(data, "allow_extra_fields"))

    for selector in _selectors(data, "required"):
        options = options.set_required(*_resolve(selector, by_name))
    for selector in _selectors(data, "optional"):
        options = options.set_optional(*_resolve(selector, by_name))
    for selector, count in _counts(data, "min_counts").items():
        options = options.set_min_count(*_resolve(selector, by_name), count)
    for selector, count in _counts(data, "max_counts").items():
        options = options.set_max_count(*_resolve(selector, by_name), count)

    log.debug("Loaded schema options: %s", options)
    return options
