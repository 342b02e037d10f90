"""
inference.py - derive a :class:`Schema` from a dataclass model type.

Public API
----------
build_schema(model, options=None) -> Schema
    Walk *model* and every model type reachable from its fields, producing
    one :class:`TypeSchema` per distinct type.

Nested model types are never embedded: a field whose type is a model becomes
a :class:`TypeRefSpec` holding the type's name. A type is expanded the first
time it is met; later references, including references from inside its own
expansion (self or mutual recursion), only produce the name. This keeps the
walk linear in the number of distinct types and fields and guarantees it
terminates on cyclic models.
"""

from __future__ import annotations

import logging
from typing import Any

from .descriptors import (
    AnyType,
    ArrayType,
    EnumType,
    MapType,
    ModelType,
    NullableType,
    ScalarType,
    TypeDescriptor,
    model_descriptor,
)
from .document import NodeKind
from .errors import SchemaError
from .options import SchemaOptions
from .specs import (
    AnythingSpec,
    ArraySpec,
    BooleanSpec,
    DictionarySpec,
    FieldSpec,
    NullSpec,
    NumberSpec,
    OneOfSpec,
    Schema,
    StringSpec,
    TypeRefSpec,
    TypeSchema,
    ValidatorSpec,
)

__all__ = ["build_schema"]

log = logging.getLogger(__name__)

_SCALAR_SPECS = {
    NodeKind.NUMBER: NumberSpec,
    NodeKind.STRING: StringSpec,
    NodeKind.BOOLEAN: BooleanSpec,
    NodeKind.NULL: NullSpec,
}


def build_schema(model: Any, options: SchemaOptions | None = None) -> Schema:
    """Return the schema for dataclass *model*.

    ``Schema.all_types`` lists every distinct model type reachable from
    *model* once, each after the types it expanded, with the root last.
    """
    builder = _SchemaBuilder(options or SchemaOptions.EMPTY)
    root = builder.expand(model_descriptor(model))
    log.debug("Built schema for %s with %d type(s)", root.name, len(builder.types))
    return Schema(root, tuple(builder.types))


class _SchemaBuilder:
    """State for one :func:`build_schema` call; not shared between calls."""

    def __init__(self, options: SchemaOptions):
        self.options = options
        self.visiting: list[str] = []
        self.types: list[TypeSchema] = []
        self._emitted: set[str] = set()

    def expand(self, model: ModelType) -> TypeSchema:
        log.debug("Expanding type %s", model.name)
        self.visiting.append(model.name)
        try:
            fields = tuple(
                FieldSpec(
                    f.name,
                    self.options.is_required(model.name, f.name, f.is_nullable),
                    self.build_spec(f.type, model.name, f.name),
                )
                for f in model.fields()
            )
        finally:
            self.visiting.pop()
        schema = TypeSchema(model.name, self.options.allow_extra_fields, fields)
        self.types.append(schema)
        self._emitted.add(model.name)
        return schema

    def build_spec(self, descriptor: TypeDescriptor, owner: str | None,
                   field_name: str | None) -> ValidatorSpec:
        if isinstance(descriptor, ScalarType):
            return _SCALAR_SPECS[descriptor.kind]()

        if isinstance(descriptor, AnyType):
            return AnythingSpec()

        if isinstance(descriptor, EnumType):
            return OneOfSpec(descriptor.members, self.options.enum_ignore_case)

        if isinstance(descriptor, MapType):
            # count overrides only apply to the field's own collection
            return DictionarySpec(
                self.build_spec(descriptor.inner, None, None),
                self.options.get_min_count(owner, field_name),
                self.options.get_max_count(owner, field_name),
            )

        if isinstance(descriptor, ArrayType):
            return ArraySpec(
                self.build_spec(descriptor.inner, None, None),
                self.options.get_min_count(owner, field_name),
                self.options.get_max_count(owner, field_name),
            )

        if isinstance(descriptor, NullableType):
            return self.build_spec(descriptor.inner, owner, field_name)

        if isinstance(descriptor, ModelType):
            if descriptor.name in self.visiting or descriptor.name in self._emitted:
                log.debug("Referencing %s by name from %s.%s", descriptor.name, owner, field_name)
            else:
                self.expand(descriptor)
            return TypeRefSpec(descriptor.name)

        raise SchemaError(f"Unknown type descriptor {descriptor!r}")
