"""
errors.py - validation error records and the exception hierarchy.

Public API
----------
ValidationError
    Immutable record of one shape violation: a message plus the path (root to
    leaf) of the offending node. Returned as data, never raised.

SchemaError
    Exception raised for contract violations detected while *building*
    schemas, options or validators (programmer errors, not data errors).

UnresolvedReferenceError
    A named type reference that no type in the schema satisfies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

__all__ = [
    "ValidationError",
    "SchemaError",
    "UnresolvedReferenceError",
]

# --------------------------------------------------------------------------- #
# Exceptions                                                                  #
# --------------------------------------------------------------------------- #

class SchemaError(ValueError):
    """Raised when a schema, option set or validator is built incorrectly."""


class UnresolvedReferenceError(SchemaError):
    """Raised when a type reference names a type the schema does not define."""

    def __init__(self, name: str, referenced_from: str | None = None):
        self.name = name
        self.referenced_from = referenced_from
        where = f" (referenced from '{referenced_from}')" if referenced_from else ""
        super().__init__(f"Type '{name}' is not defined in the schema{where}.")


# --------------------------------------------------------------------------- #
# Validation error record                                                     #
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class ValidationError:
    """A single violation found in a document.

    ``path`` is stored root-to-leaf: ``("members", "0", "name")`` points at
    ``doc["members"][0]["name"]``. Combinators that descend into a child call
    :meth:`wrap` exactly once per level, prepending their own segment.
    """

    message: str
    path: tuple[str, ...] = ()

    def wrap(self, segment: Any) -> "ValidationError":
        """Return a copy of this error one level further from the leaf."""
        return ValidationError(self.message, (str(segment), *self.path))

    def render(self) -> str:
        if self.path:
            return f"{'.'.join(self.path)}: {self.message}"
        return self.message

    def __str__(self) -> str:
        return self.render()
