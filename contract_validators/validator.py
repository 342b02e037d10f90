"""
validator.py - composable validators over document nodes
========================================================

Every validator answers one question about a node and reports *all* the ways
the node fails it as :class:`~contract_validators.errors.ValidationError`
values. Nothing here raises for a malformed document; only invalid
construction (e.g. a negative count bound) raises :class:`SchemaError`.

Public API
----------
Validator
    Base class. ``iter_errors(node)`` is a lazy generator, ``validate(node)``
    returns the materialised list, ``is_valid(node)`` stops at the first error.

Atomic checks
    ``Anything``, ``TypeCheck``, ``OneOf``, ``MatchesRegex``, ``Custom``.

Structural combinators
    ``And``, ``Or``, ``HasKey``, ``DiveInto``, ``RequiredKeys``, ``ValidKeys``,
    ``ArrayOf``, ``DictionaryOf``, ``Delayed``.

Shorthands
    ``IS_ANYTHING``, ``IS_NUMBER``, ``IS_STRING``, ``IS_BOOLEAN``, ``IS_NULL``,
    ``IS_OBJECT``, ``IS_ARRAY`` and the snake_case factories at the bottom of
    the module. Key comparisons in the factories ignore case by default.

Example
-------
>>> v = all_of(IS_OBJECT, has_required_keys("a"), dive_into("a", IS_NUMBER))
>>> [str(e) for e in v.validate({"a": "x"})]
['a: Not a number.']
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, Iterator

from .document import NodeKind, as_text, find_key, kind_of
from .errors import SchemaError, ValidationError

__all__ = [
    "Validator",
    "Anything",
    "TypeCheck",
    "OneOf",
    "MatchesRegex",
    "Custom",
    "And",
    "Or",
    "HasKey",
    "DiveInto",
    "RequiredKeys",
    "ValidKeys",
    "ArrayOf",
    "DictionaryOf",
    "Delayed",
    "IS_ANYTHING",
    "IS_NUMBER",
    "IS_STRING",
    "IS_BOOLEAN",
    "IS_NULL",
    "IS_OBJECT",
    "IS_ARRAY",
    "is_one_of",
    "matches_regex",
    "custom",
    "is_array_of",
    "is_dictionary_of",
    "has_key",
    "dive_into",
    "has_valid_keys",
    "has_required_keys",
    "all_of",
    "any_of",
    "delayed",
]


# --------------------------------------------------------------------------- #
# Base class                                                                  #
# --------------------------------------------------------------------------- #

class Validator(ABC):
    """A rule over a document node producing zero or more errors."""

    @property
    @abstractmethod
    def object_name(self) -> str:
        """Human readable description of what a valid node looks like."""

    @abstractmethod
    def iter_errors(self, node: Any) -> Iterator[ValidationError]:
        """Lazily yield every violation of this rule by *node*."""

    def validate(self, node: Any) -> list[ValidationError]:
        return list(self.iter_errors(node))

    def is_valid(self, node: Any) -> bool:
        return next(iter(self.iter_errors(node)), None) is None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.object_name}>"


def _check_bounds(min_count: int | None, max_count: int | None) -> None:
    for label, bound in (("min_count", min_count), ("max_count", max_count)):
        if bound is not None and bound < 0:
            raise SchemaError(f"{label} must be non-negative, got {bound}")
    if min_count is not None and max_count is not None and min_count > max_count:
        raise SchemaError(f"min_count {min_count} is greater than max_count {max_count}")


def _contains(keys: Iterable[str], key: str, ignore_case: bool) -> bool:
    if ignore_case:
        folded = key.casefold()
        return any(k.casefold() == folded for k in keys)
    return key in keys


# --------------------------------------------------------------------------- #
# Atomic checks                                                               #
# --------------------------------------------------------------------------- #

class Anything(Validator):
    @property
    def object_name(self) -> str:
        return "anything"

    def iter_errors(self, node: Any) -> Iterator[ValidationError]:
        return iter(())


class TypeCheck(Validator):
    """Accepts nodes whose :class:`NodeKind` is one of *kinds*."""

    def __init__(self, kinds: Iterable[NodeKind | str], name: str | None = None,
                 message: str | None = None):
        self._kinds = frozenset(NodeKind(k) for k in kinds)
        if not self._kinds:
            raise SchemaError("TypeCheck needs at least one node kind")
        ordered = sorted(k.value for k in self._kinds)
        self._name = name or " or ".join(ordered)
        self._message = message or f"Not {self._name}."

    @property
    def kinds(self) -> frozenset[NodeKind]:
        return self._kinds

    @property
    def object_name(self) -> str:
        return self._name

    def iter_errors(self, node: Any) -> Iterator[ValidationError]:
        if kind_of(node) not in self._kinds:
            yield ValidationError(self._message)


class OneOf(Validator):
    """The node's text value must equal one of *options*."""

    def __init__(self, options: Iterable[str], ignore_case: bool = True):
        self._options = tuple(options)
        self._ignore_case = ignore_case

    @property
    def object_name(self) -> str:
        quoted = ", ".join(f'"{o}"' for o in self._options)
        return f"one of ({quoted})"

    def iter_errors(self, node: Any) -> Iterator[ValidationError]:
        text = as_text(node)
        if text is None or not _contains(self._options, text, self._ignore_case):
            yield ValidationError(f"Not {self.object_name}.")


class MatchesRegex(Validator):
    """The node's text value must match *pattern* in full."""

    def __init__(self, pattern: str | re.Pattern[str]):
        try:
            self._regex = re.compile(pattern)
        except re.error as exc:
            raise SchemaError(f"Invalid regex {pattern!r}: {exc}") from exc

    @property
    def pattern(self) -> str:
        return self._regex.pattern

    @property
    def object_name(self) -> str:
        return f"match for regex {self._regex.pattern}"

    def iter_errors(self, node: Any) -> Iterator[ValidationError]:
        text = as_text(node)
        if self._regex.fullmatch(text if text is not None else "") is None:
            yield ValidationError(f"Not a {self.object_name}.")


class Custom(Validator):
    """Wraps a plain predicate; *name* describes what the predicate accepts."""

    def __init__(self, name: str, predicate: Callable[[Any], bool]):
        if not callable(predicate):
            raise SchemaError(f"predicate for '{name}' is not callable")
        self._name = name
        self._predicate = predicate

    @property
    def object_name(self) -> str:
        return self._name

    def iter_errors(self, node: Any) -> Iterator[ValidationError]:
        if not self._predicate(node):
            yield ValidationError(f"Not {self._name}.")


# --------------------------------------------------------------------------- #
# Logical combinators                                                         #
# --------------------------------------------------------------------------- #

class And(Validator):
    """Runs every child in order and concatenates their errors."""

    def __init__(self, *children: Validator, name: str | None = None):
        self._children = tuple(children)
        self._name = name

    @property
    def children(self) -> tuple[Validator, ...]:
        return self._children

    @property
    def object_name(self) -> str:
        if self._name is not None:
            return self._name
        return f"all of ({', '.join(c.object_name for c in self._children)})"

    def iter_errors(self, node: Any) -> Iterator[ValidationError]:
        for child in self._children:
            yield from child.iter_errors(node)


class Or(Validator):
    """Passes when any child passes; otherwise reports one summary error."""

    def __init__(self, *children: Validator):
        self._children = tuple(children)

    @property
    def children(self) -> tuple[Validator, ...]:
        return self._children

    @property
    def object_name(self) -> str:
        return f"one of ({', '.join(c.object_name for c in self._children)})"

    def iter_errors(self, node: Any) -> Iterator[ValidationError]:
        for child in self._children:
            if child.is_valid(node):
                return
        yield ValidationError(f"Not {self.object_name}.")


class Delayed(Validator):
    """Looks up the real validator only when it is used.

    Needed to close reference cycles: the validator for a recursive type does
    not exist yet while its own fields are being compiled.
    """

    def __init__(self, supplier: Callable[[], Validator]):
        self._supplier = supplier
        self._naming = False

    @property
    def object_name(self) -> str:
        # a cycle of unnamed validators reaches this again while naming itself
        if self._naming:
            return "..."
        self._naming = True
        try:
            return self._supplier().object_name
        finally:
            self._naming = False

    def iter_errors(self, node: Any) -> Iterator[ValidationError]:
        return self._supplier().iter_errors(node)


# --------------------------------------------------------------------------- #
# Object combinators                                                          #
# --------------------------------------------------------------------------- #

class HasKey(Validator):
    def __init__(self, key: str, ignore_case: bool = True):
        self._key = key
        self._ignore_case = ignore_case

    @property
    def object_name(self) -> str:
        return f"has property {self._key}"

    def iter_errors(self, node: Any) -> Iterator[ValidationError]:
        if kind_of(node) is not NodeKind.OBJECT:
            yield ValidationError("Not an object.")
        elif find_key(node, self._key, ignore_case=self._ignore_case) is None:
            yield ValidationError(f"Doesn't have key '{self._key}'.")


class DiveInto(Validator):
    """Validates the value under *key*, if there is one.

    A missing key or a non-object node is not this validator's concern; pair
    it with :class:`RequiredKeys` and ``IS_OBJECT``.
    """

    def __init__(self, key: str, child: Validator, ignore_case: bool = True):
        self._key = key
        self._child = child
        self._ignore_case = ignore_case

    @property
    def key(self) -> str:
        return self._key

    @property
    def object_name(self) -> str:
        return f"value for '{self._key}' satisfies {self._child.object_name}"

    def iter_errors(self, node: Any) -> Iterator[ValidationError]:
        if kind_of(node) is not NodeKind.OBJECT:
            return
        actual = find_key(node, self._key, ignore_case=self._ignore_case)
        if actual is None:
            return
        for error in self._child.iter_errors(node[actual]):
            yield error.wrap(self._key)


class RequiredKeys(Validator):
    def __init__(self, keys: Iterable[str], ignore_case: bool = True):
        self._keys = tuple(keys)
        self._ignore_case = ignore_case

    @property
    def keys(self) -> tuple[str, ...]:
        return self._keys

    @property
    def object_name(self) -> str:
        return f"object with required keys: [{', '.join(repr(k) for k in self._keys)}]"

    def iter_errors(self, node: Any) -> Iterator[ValidationError]:
        if kind_of(node) is not NodeKind.OBJECT:
            return
        present = [k for k in node if isinstance(k, str)]
        for key in self._keys:
            if not _contains(present, key, self._ignore_case):
                yield ValidationError(f"Key '{key}' is missing.")


class ValidKeys(Validator):
    def __init__(self, keys: Iterable[str], ignore_case: bool = True):
        self._keys = tuple(keys)
        self._ignore_case = ignore_case

    @property
    def keys(self) -> tuple[str, ...]:
        return self._keys

    @property
    def object_name(self) -> str:
        return f"object with valid keys: [{', '.join(repr(k) for k in self._keys)}]"

    def iter_errors(self, node: Any) -> Iterator[ValidationError]:
        if kind_of(node) is not NodeKind.OBJECT:
            yield ValidationError("Not an object.")
            return
        for key in node:
            if not _contains(self._keys, str(key), self._ignore_case):
                yield ValidationError(f"Key '{key}' is not valid.")


# --------------------------------------------------------------------------- #
# Collection combinators                                                      #
# --------------------------------------------------------------------------- #

class ArrayOf(Validator):
    def __init__(self, element: Validator, min_count: int | None = None,
                 max_count: int | None = None):
        _check_bounds(min_count, max_count)
        self._element = element
        self._min_count = min_count
        self._max_count = max_count

    @property
    def object_name(self) -> str:
        return f"array of {self._element.object_name}"

    def iter_errors(self, node: Any) -> Iterator[ValidationError]:
        if kind_of(node) is not NodeKind.ARRAY:
            yield ValidationError("Not an array.")
            return
        count = len(node)
        if self._min_count is not None and count < self._min_count:
            yield ValidationError(
                f"Array count is {count}, but should be at least {self._min_count}.")
        if self._max_count is not None and count > self._max_count:
            yield ValidationError(
                f"Array count is {count}, but should be at most {self._max_count}.")
        for index, item in enumerate(node):
            for error in self._element.iter_errors(item):
                yield error.wrap(index)


class DictionaryOf(Validator):
    def __init__(self, element: Validator, min_count: int | None = None,
                 max_count: int | None = None):
        _check_bounds(min_count, max_count)
        self._element = element
        self._min_count = min_count
        self._max_count = max_count

    @property
    def object_name(self) -> str:
        return f"dictionary of (string, {self._element.object_name})"

    def iter_errors(self, node: Any) -> Iterator[ValidationError]:
        if kind_of(node) is not NodeKind.OBJECT:
            yield ValidationError("Not an object.")
            return
        count = len(node)
        if self._min_count is not None and count < self._min_count:
            yield ValidationError(
                f"Object property count is {count}, but should be at least {self._min_count}.")
        if self._max_count is not None and count > self._max_count:
            yield ValidationError(
                f"Object property count is {count}, but should be at most {self._max_count}.")
        for key, value in node.items():
            for error in self._element.iter_errors(value):
                yield error.wrap(key)


# --------------------------------------------------------------------------- #
# Shorthands                                                                  #
# --------------------------------------------------------------------------- #

IS_ANYTHING = Anything()
IS_NUMBER = TypeCheck([NodeKind.NUMBER], "number", "Not a number.")
IS_STRING = TypeCheck([NodeKind.STRING], "string", "Not a string.")
IS_BOOLEAN = TypeCheck([NodeKind.BOOLEAN], "boolean", "Not a boolean.")
IS_NULL = TypeCheck([NodeKind.NULL], "null", "Not 'null'.")
IS_OBJECT = TypeCheck([NodeKind.OBJECT], "object", "Not an object.")
IS_ARRAY = TypeCheck([NodeKind.ARRAY], "array", "Not an array.")


def is_one_of(*options: str, ignore_case: bool = True) -> Validator:
    return OneOf(options, ignore_case)


def matches_regex(pattern: str | re.Pattern[str]) -> Validator:
    return MatchesRegex(pattern)


def custom(name: str, predicate: Callable[[Any], bool]) -> Validator:
    return Custom(name, predicate)


def is_array_of(element: Validator, min_count: int | None = None,
                max_count: int | None = None) -> Validator:
    return ArrayOf(element, min_count, max_count)


def is_dictionary_of(element: Validator, min_count: int | None = None,
                     max_count: int | None = None) -> Validator:
    return DictionaryOf(element, min_count, max_count)


def has_key(key: str, *, ignore_case: bool = True) -> Validator:
    return HasKey(key, ignore_case)


def dive_into(key: str, child: Validator, *, ignore_case: bool = True) -> Validator:
    return DiveInto(key, child, ignore_case)


def has_valid_keys(*keys: str, ignore_case: bool = True) -> Validator:
    return ValidKeys(keys, ignore_case)


def has_required_keys(*keys: str, ignore_case: bool = True) -> Validator:
    return RequiredKeys(keys, ignore_case)


def all_of(*children: Validator) -> Validator:
    return And(*children)


def any_of(*children: Validator) -> Validator:
    return Or(*children)


def delayed(supplier: Callable[[], Validator]) -> Validator:
    return Delayed(supplier)
