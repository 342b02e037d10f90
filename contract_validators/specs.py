"""
specs.py - data-only descriptions of validators and schemas.

A :class:`ValidatorSpec` says *how* a value should be validated without
being a validator itself, so a derived schema can be inspected, compared and
recompiled. :class:`TypeRefSpec` refers to another type by name only; the
named type's fields live in exactly one :class:`TypeSchema` of the
enclosing :class:`Schema`, which is what lets schemas describe cycles.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterator

from .errors import SchemaError

if TYPE_CHECKING:
    from .validator import Validator

__all__ = [
    "SpecKind",
    "ValidatorSpec",
    "AnythingSpec",
    "NumberSpec",
    "StringSpec",
    "BooleanSpec",
    "NullSpec",
    "OneOfSpec",
    "RegexSpec",
    "TypeRefSpec",
    "ArraySpec",
    "DictionarySpec",
    "FieldSpec",
    "TypeSchema",
    "Schema",
]


class SpecKind(str, Enum):
    ANYTHING = "anything"
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    NULL = "null"
    ONE_OF = "one_of"
    REGEX = "regex"
    TYPE = "type"
    ARRAY = "array"
    DICTIONARY = "dictionary"


# --------------------------------------------------------------------------- #
# Validator specs                                                             #
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class ValidatorSpec:
    """Base of the closed set of spec variants below."""

    kind = SpecKind.ANYTHING

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value}

    def children(self) -> Iterator["ValidatorSpec"]:
        """Directly nested specs (element specs of collections)."""
        return iter(())

    def walk(self) -> Iterator["ValidatorSpec"]:
        """This spec followed by every spec nested inside it, depth first."""
        yield self
        for child in self.children():
            yield from child.walk()


@dataclass(frozen=True)
class AnythingSpec(ValidatorSpec):
    kind = SpecKind.ANYTHING


@dataclass(frozen=True)
class NumberSpec(ValidatorSpec):
    kind = SpecKind.NUMBER


@dataclass(frozen=True)
class StringSpec(ValidatorSpec):
    kind = SpecKind.STRING


@dataclass(frozen=True)
class BooleanSpec(ValidatorSpec):
    kind = SpecKind.BOOLEAN


@dataclass(frozen=True)
class NullSpec(ValidatorSpec):
    kind = SpecKind.NULL


@dataclass(frozen=True)
class OneOfSpec(ValidatorSpec):
    options: tuple[str, ...]
    ignore_case: bool = True

    kind = SpecKind.ONE_OF

    def __post_init__(self):
        object.__setattr__(self, "options", tuple(self.options))

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "options": list(self.options),
                "ignore_case": self.ignore_case}


@dataclass(frozen=True)
class RegexSpec(ValidatorSpec):
    pattern: str

    kind = SpecKind.REGEX

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "pattern": self.pattern}


@dataclass(frozen=True)
class TypeRefSpec(ValidatorSpec):
    name: str

    kind = SpecKind.TYPE

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "name": self.name}


@dataclass(frozen=True)
class ArraySpec(ValidatorSpec):
    element: ValidatorSpec
    min_count: int | None = None
    max_count: int | None = None

    kind = SpecKind.ARRAY

    def children(self) -> Iterator[ValidatorSpec]:
        yield self.element

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "element": self.element.to_dict(),
                "min_count": self.min_count, "max_count": self.max_count}


@dataclass(frozen=True)
class DictionarySpec(ValidatorSpec):
    element: ValidatorSpec
    min_count: int | None = None
    max_count: int | None = None

    kind = SpecKind.DICTIONARY

    def children(self) -> Iterator[ValidatorSpec]:
        yield self.element

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "element": self.element.to_dict(),
                "min_count": self.min_count, "max_count": self.max_count}


# --------------------------------------------------------------------------- #
# Schemas                                                                     #
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class FieldSpec:
    name: str
    required: bool
    spec: ValidatorSpec

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "required": self.required, "spec": self.spec.to_dict()}


@dataclass(frozen=True)
class TypeSchema:
    """Validation blueprint for one model type."""

    name: str
    allow_extra_fields: bool
    fields: tuple[FieldSpec, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "fields", tuple(self.fields))

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    @property
    def required_field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields if f.required)

    def get_field(self, name: str) -> FieldSpec | None:
        return next((f for f in self.fields if f.name == name), None)

    def references(self) -> Iterator[str]:
        """Names of every type this schema's fields refer to."""
        for f in self.fields:
            for spec in f.spec.walk():
                if isinstance(spec, TypeRefSpec):
                    yield spec.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "allow_extra_fields": self.allow_extra_fields,
            "fields": [f.to_dict() for f in self.fields],
        }


@dataclass(frozen=True)
class Schema:
    """A root type plus every type it transitively refers to.

    ``all_types`` contains ``root`` and each referenced type exactly once.
    """

    root: TypeSchema
    all_types: tuple[TypeSchema, ...] = field(default=())

    def __post_init__(self):
        types = tuple(self.all_types) or (self.root,)
        names = [t.name for t in types]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise SchemaError(f"Duplicate type names in schema: {duplicates}")
        if self.root.name not in names:
            raise SchemaError(f"Root type '{self.root.name}' is missing from all_types")
        object.__setattr__(self, "all_types", types)

    @property
    def type_names(self) -> tuple[str, ...]:
        return tuple(t.name for t in self.all_types)

    def get_type(self, name: str) -> TypeSchema | None:
        return next((t for t in self.all_types if t.name == name), None)

    def get_validator(self, ignore_case: bool = True) -> "Validator":
        """Compile this schema; see :func:`contract_validators.compiler.compile_schema`."""
        from .compiler import compile_schema

        return compile_schema(self, ignore_case=ignore_case)

    def to_dict(self) -> dict[str, Any]:
        return {
            "root": self.root.name,
            "types": [t.to_dict() for t in self.all_types],
        }
