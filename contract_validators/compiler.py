"""
compiler.py - turn a :class:`Schema` into an executable :class:`Validator`.

Public API
----------
compile_schema(schema, *, ignore_case=True) -> Validator
    Compile every type of *schema* and return the root type's validator.

compile_type(type_schema, table, *, ignore_case=True) -> Validator
compile_spec(spec, table) -> Validator
    Building blocks used by :func:`compile_schema`; ``table`` maps type names
    to validators compiled so far and is owned by the caller.

A type reference whose target is already in the table compiles to that
validator directly. Otherwise (the target is the type being compiled, or
one compiled later) it compiles to a :class:`Delayed` lookup in the same
table, resolved when a document is validated.
"""

from __future__ import annotations

import logging

from .errors import UnresolvedReferenceError
from .specs import (
    AnythingSpec,
    ArraySpec,
    BooleanSpec,
    DictionarySpec,
    NullSpec,
    NumberSpec,
    OneOfSpec,
    RegexSpec,
    Schema,
    StringSpec,
    TypeRefSpec,
    TypeSchema,
    ValidatorSpec,
)
from .validator import (
    IS_ANYTHING,
    IS_BOOLEAN,
    IS_NULL,
    IS_NUMBER,
    IS_OBJECT,
    IS_STRING,
    And,
    ArrayOf,
    Delayed,
    DictionaryOf,
    DiveInto,
    MatchesRegex,
    OneOf,
    RequiredKeys,
    ValidKeys,
    Validator,
)

__all__ = ["compile_schema", "compile_type", "compile_spec"]

log = logging.getLogger(__name__)

ValidatorTable = dict[str, Validator]

_SIMPLE = {
    AnythingSpec: IS_ANYTHING,
    NumberSpec: IS_NUMBER,
    StringSpec: IS_STRING,
    BooleanSpec: IS_BOOLEAN,
    NullSpec: IS_NULL,
}


def compile_schema(schema: Schema, *, ignore_case: bool = True) -> Validator:
    """Compile *schema*; *ignore_case* controls how object keys are compared.

    Raises :class:`UnresolvedReferenceError` if any type reference names a
    type missing from ``schema.all_types``.
    """
    _check_references(schema)
    table: ValidatorTable = {}
    for type_schema in schema.all_types:
        table[type_schema.name] = compile_type(type_schema, table, ignore_case=ignore_case)
    log.debug("Compiled %d type(s) for %s", len(table), schema.root.name)
    return table[schema.root.name]


def compile_type(type_schema: TypeSchema, table: ValidatorTable, *,
                 ignore_case: bool = True) -> Validator:
    validators: list[Validator] = [IS_OBJECT]
    if not type_schema.allow_extra_fields:
        validators.append(ValidKeys(type_schema.field_names, ignore_case))
    validators.append(RequiredKeys(type_schema.required_field_names, ignore_case))
    for f in type_schema.fields:
        validators.append(DiveInto(f.name, compile_spec(f.spec, table), ignore_case))
    return And(*validators, name=type_schema.name)


def compile_spec(spec: ValidatorSpec, table: ValidatorTable) -> Validator:
    simple = _SIMPLE.get(type(spec))
    if simple is not None:
        return simple
    if isinstance(spec, OneOfSpec):
        return OneOf(spec.options, spec.ignore_case)
    if isinstance(spec, RegexSpec):
        return MatchesRegex(spec.pattern)
    if isinstance(spec, ArraySpec):
        return ArrayOf(compile_spec(spec.element, table), spec.min_count, spec.max_count)
    if isinstance(spec, DictionarySpec):
        return DictionaryOf(compile_spec(spec.element, table), spec.min_count, spec.max_count)
    if isinstance(spec, TypeRefSpec):
        if spec.name in table:
            return table[spec.name]
        name = spec.name
        return Delayed(lambda: _lookup(table, name))
    raise TypeError(f"Unsupported validator spec {spec!r}")


def _lookup(table: ValidatorTable, name: str) -> Validator:
    try:
        return table[name]
    except KeyError:
        raise UnresolvedReferenceError(name) from None


def _check_references(schema: Schema) -> None:
    known = set(schema.type_names)
    for type_schema in schema.all_types:
        for name in type_schema.references():
            if name not in known:
                raise UnresolvedReferenceError(name, type_schema.name)
