"""Dataclass model types shared by the schema tests."""
from __future__ import annotations

import datetime as _dt
import decimal
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal, Mapping, Optional


class PersonKind(Enum):
    FIRST_KIND = 1
    SECOND_KIND = 2


@dataclass
class Person:
    name: str
    kind: PersonKind
    age: int
    is_admin: Optional[bool] = None
    date_of_birth: Optional[_dt.datetime] = None


@dataclass
class Property:
    name: str
    value: Any
    people: list[Person] = field(default_factory=list)


@dataclass
class Team:
    lead: Person
    members: list[Person]
    budget: decimal.Decimal | None
    creation_date: _dt.datetime
    properties: dict[str, Property]


@dataclass
class Simple:
    name: str
    age: int


@dataclass
class ContainsNullableString:
    value: str | None = None


@dataclass
class SelfCycle:
    parent: SelfCycle | None
    name: str
    size: int


@dataclass
class MutualCycle1:
    other2: MutualCycle2 | None
    name: str


@dataclass
class MutualCycle2:
    other1: MutualCycle1 | None
    size: int


@dataclass
class Tree:
    label: str
    children: list[Tree]
    index: Mapping[str, Tree]


@dataclass
class Collections:
    tags: tuple[str, ...]
    scores: Mapping[str, float]
    matrix: list[list[int]]
    flags: frozenset[bool]
    level: Literal["low", "high"]


@dataclass
class Unsupported:
    value: int | str


@dataclass
class IntKeys:
    lookup: dict[int, str]
