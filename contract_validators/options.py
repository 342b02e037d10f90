"""
options.py - per-type / per-field overrides for schema inference.

``SchemaOptions`` is immutable; every ``set_*`` method returns a new
instance, so option sets can be shared and extended freely::

    options = (SchemaOptions.EMPTY
               .set_allow_extra_fields(False)
               .set_optional(Property, "people")
               .set_min_count(Team, "members", 1))

Fields are selected by model class and field name. Selecting a field the
model does not declare raises :class:`SchemaError` straight away.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, ClassVar, Mapping

from .descriptors import model_descriptor
from .errors import SchemaError

__all__ = ["SchemaOptions", "FieldKey"]

FieldKey = tuple[str, str]  # (canonical type name, field name)


def field_key(model: Any, field_name: str) -> FieldKey:
    """Resolve ``(model, field_name)`` to a key, failing fast on unknown fields."""
    descriptor = model_descriptor(model)
    if field_name not in descriptor.field_names():
        raise SchemaError(
            f"'{field_name}' is not a field of {descriptor.name}; "
            f"known fields: {list(descriptor.field_names())}"
        )
    return descriptor.name, field_name


@dataclass(frozen=True)
class SchemaOptions:
    enum_ignore_case: bool = True
    allow_extra_fields: bool = True
    required: frozenset[FieldKey] = frozenset()
    optional: frozenset[FieldKey] = frozenset()
    min_counts: Mapping[FieldKey, int] = field(default_factory=lambda: MappingProxyType({}), hash=False)
    max_counts: Mapping[FieldKey, int] = field(default_factory=lambda: MappingProxyType({}), hash=False)

    EMPTY: ClassVar["SchemaOptions"]

    # ------------------------------------------------------------------ #
    # Builders                                                           #
    # ------------------------------------------------------------------ #
    def set_enum_ignore_case(self, value: bool) -> "SchemaOptions":
        return replace(self, enum_ignore_case=value)

    def set_allow_extra_fields(self, value: bool) -> "SchemaOptions":
        return replace(self, allow_extra_fields=value)

    def set_required(self, model: Any, field_name: str) -> "SchemaOptions":
        return replace(self, required=self.required | {field_key(model, field_name)})

    def set_optional(self, model: Any, field_name: str) -> "SchemaOptions":
        return replace(self, optional=self.optional | {field_key(model, field_name)})

    def set_min_count(self, model: Any, field_name: str, count: int) -> "SchemaOptions":
        _check_count(count)
        return replace(self, min_counts=_with(self.min_counts, field_key(model, field_name), count))

    def set_max_count(self, model: Any, field_name: str, count: int) -> "SchemaOptions":
        _check_count(count)
        return replace(self, max_counts=_with(self.max_counts, field_key(model, field_name), count))

    # ------------------------------------------------------------------ #
    # Lookups                                                            #
    # ------------------------------------------------------------------ #
    def is_required(self, type_name: str, field_name: str, nullable: bool) -> bool:
        """Explicit required, then explicit optional, then nullability decides."""
        key = (type_name, field_name)
        if key in self.required:
            return True
        if key in self.optional:
            return False
        return not nullable

    def get_min_count(self, type_name: str | None, field_name: str | None) -> int | None:
        return self.min_counts.get((type_name, field_name))

    def get_max_count(self, type_name: str | None, field_name: str | None) -> int | None:
        return self.max_counts.get((type_name, field_name))


def _check_count(count: int) -> None:
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        raise SchemaError(f"count must be a non-negative int, got {count!r}")


def _with(counts: Mapping[FieldKey, int], key: FieldKey, count: int) -> Mapping[FieldKey, int]:
    return MappingProxyType({**counts, key: count})


SchemaOptions.EMPTY = SchemaOptions()
