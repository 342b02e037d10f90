"""
descriptors.py - what a Python annotation means for validation.

:func:`describe` turns an annotation (``int``, ``list[Person]``,
``dict[str, Tag] | None``, a dataclass, an ``Enum`` ...) into one
:class:`TypeDescriptor` variant. The inference engine only ever looks at
descriptors, never at the annotations themselves.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses
import datetime as _dt
import decimal
import enum
import fractions
import functools
import types
import typing
import uuid
from dataclasses import dataclass
from typing import Any

from .document import NodeKind
from .errors import SchemaError

__all__ = [
    "TypeDescriptor",
    "ScalarType",
    "AnyType",
    "EnumType",
    "NullableType",
    "ArrayType",
    "MapType",
    "ModelType",
    "FieldDescriptor",
    "describe",
    "model_descriptor",
    "type_name",
]

_NUMBER_TYPES = (int, float, decimal.Decimal, fractions.Fraction)
_STRING_TYPES = (str, _dt.datetime, _dt.date, _dt.time, _dt.timedelta, uuid.UUID)

_ARRAY_ORIGINS = (
    list, tuple, set, frozenset,
    cabc.Sequence, cabc.MutableSequence, cabc.Set, cabc.MutableSet,
    cabc.Collection, cabc.Iterable,
)
_MAP_ORIGINS = (dict, cabc.Mapping, cabc.MutableMapping)


# --------------------------------------------------------------------------- #
# Descriptor variants                                                         #
# --------------------------------------------------------------------------- #

class TypeDescriptor:
    """Base of the descriptor variants."""


@dataclass(frozen=True)
class ScalarType(TypeDescriptor):
    kind: NodeKind


@dataclass(frozen=True)
class AnyType(TypeDescriptor):
    pass


@dataclass(frozen=True)
class EnumType(TypeDescriptor):
    name: str
    members: tuple[str, ...]


@dataclass(frozen=True)
class NullableType(TypeDescriptor):
    inner: TypeDescriptor


@dataclass(frozen=True)
class ArrayType(TypeDescriptor):
    inner: TypeDescriptor


@dataclass(frozen=True)
class MapType(TypeDescriptor):
    inner: TypeDescriptor


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    type: TypeDescriptor

    @property
    def is_nullable(self) -> bool:
        return isinstance(self.type, NullableType)


@dataclass(frozen=True)
class ModelType(TypeDescriptor):
    """A dataclass. Fields are resolved on demand so cyclic models can be described."""

    name: str
    cls: type = dataclasses.field(compare=False, repr=False)

    def fields(self) -> tuple[FieldDescriptor, ...]:
        return _model_fields(self.cls)

    def field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in dataclasses.fields(self.cls))


# --------------------------------------------------------------------------- #
# Resolution                                                                  #
# --------------------------------------------------------------------------- #

def type_name(cls: type) -> str:
    """Canonical, module-qualified name of a model type."""
    return f"{cls.__module__}.{cls.__qualname__}"


def model_descriptor(model: Any) -> ModelType:
    """Return the :class:`ModelType` for a dataclass, or raise :class:`SchemaError`."""
    if not (isinstance(model, type) and dataclasses.is_dataclass(model)):
        raise SchemaError(f"{model!r} is not a dataclass model type")
    return ModelType(type_name(model), model)


@functools.lru_cache(maxsize=None)
def _model_fields(cls: type) -> tuple[FieldDescriptor, ...]:
    try:
        hints = typing.get_type_hints(cls)
    except NameError as exc:
        raise SchemaError(f"Cannot resolve annotations of {type_name(cls)}: {exc}") from exc
    out = []
    for f in dataclasses.fields(cls):
        try:
            out.append(FieldDescriptor(f.name, describe(hints.get(f.name, Any))))
        except SchemaError as exc:
            raise SchemaError(f"{type_name(cls)}.{f.name}: {exc}") from exc
    return tuple(out)


def describe(annotation: Any) -> TypeDescriptor:
    """Resolve *annotation* into a :class:`TypeDescriptor`."""
    if annotation is Any or annotation is object:
        return AnyType()
    if annotation is None or annotation is type(None):
        return ScalarType(NodeKind.NULL)
    if isinstance(annotation, (str, typing.ForwardRef)):
        raise SchemaError(f"Unresolved forward reference {annotation!r}")

    origin = typing.get_origin(annotation)
    args = typing.get_args(annotation)

    if origin is typing.Annotated:
        return describe(args[0])

    if origin is typing.Union or origin is types.UnionType:
        inner = [a for a in args if a is not type(None)]
        if len(inner) != 1:
            raise SchemaError(f"Union types are not supported: {annotation!r}")
        if len(inner) == len(args):
            return describe(inner[0])
        return NullableType(describe(inner[0]))

    if origin is typing.Literal:
        if not all(isinstance(a, str) for a in args):
            raise SchemaError(f"Only string literals are supported: {annotation!r}")
        return EnumType(repr(annotation), tuple(args))

    if origin is not None:
        if origin in _MAP_ORIGINS:
            key, value = args if args else (str, Any)
            if key is not str:
                raise SchemaError(f"Mapping keys must be str: {annotation!r}")
            return MapType(describe(value))
        if origin in _ARRAY_ORIGINS:
            if origin is tuple and args and not (len(args) == 2 and args[1] is Ellipsis):
                raise SchemaError(f"Only homogeneous tuples (tuple[X, ...]) are supported: {annotation!r}")
            return ArrayType(describe(args[0]) if args else AnyType())
        raise SchemaError(f"Unsupported generic type {annotation!r}")

    if not isinstance(annotation, type):
        raise SchemaError(f"Unsupported annotation {annotation!r}")

    if issubclass(annotation, (bytes, bytearray)):
        raise SchemaError(f"Binary types are not supported: {type_name(annotation)}")
    # bool before numbers: bool subclasses int
    if issubclass(annotation, bool):
        return ScalarType(NodeKind.BOOLEAN)
    if issubclass(annotation, enum.Enum):
        return EnumType(type_name(annotation), tuple(annotation.__members__))
    if issubclass(annotation, _NUMBER_TYPES):
        return ScalarType(NodeKind.NUMBER)
    if issubclass(annotation, _STRING_TYPES):
        return ScalarType(NodeKind.STRING)
    if dataclasses.is_dataclass(annotation):
        return model_descriptor(annotation)
    if issubclass(annotation, _MAP_ORIGINS):
        return MapType(AnyType())
    if issubclass(annotation, _ARRAY_ORIGINS):
        return ArrayType(AnyType())
    raise SchemaError(f"Unsupported type {type_name(annotation)}")
