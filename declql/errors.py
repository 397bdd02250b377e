"""Error taxonomy for declql.

Synthesis-time errors derive from :class:`GenerationError` and abort only the
declaration being processed. Runtime errors are raised by the accessors baked
into generated descriptors, when a query actually executes.
"""
from __future__ import annotations

from typing import Optional

__all__ = [
    'GenerationError',
    'TypeInferenceError',
    'InvalidUsageError',
    'EmptyUnionError',
    'MissingResolverError',
    'InvalidEnumValueError',
]


class GenerationError(Exception):
    """Base class for failures while synthesizing a declaration."""


class TypeInferenceError(GenerationError):
    """No inference rule matched the declared type of a member."""

    def __init__(self, owner: str, member: str, type_name: str, reason: Optional[str] = None):
        self.owner = owner
        self.member = member
        self.type_name = type_name
        message = f"Cannot infer the GraphQL type for field {owner}.{member} (type={type_name})."
        if reason:
            message = f"{message} {reason}"
        super().__init__(message)


class InvalidUsageError(GenerationError):
    """A structurally disallowed combination of markers or types."""


class EmptyUnionError(InvalidUsageError):
    """A union marker resolved to zero member types."""


class MissingResolverError(LookupError):
    """Raised by generated code when no resolver is registered for a dispatch key."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Missing resolver for {key}")


class InvalidEnumValueError(ValueError):
    """Raised by generated code when a stored wire string matches no enum constant."""

    def __init__(self, enum_name: str, raw: object):
        self.enum_name = enum_name
        self.raw = raw
        super().__init__(f"Invalid enum {enum_name} value: {raw}")
