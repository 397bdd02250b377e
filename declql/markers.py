"""Marker annotations attached to declarations.

These mirror the annotations a host build pipeline discovers on source
declarations. They are plain data: the core only checks for their presence
and reads their fields.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional, Tuple

__all__ = [
    'GraphQLClass',
    'GraphQLInputClass',
    'GraphQLUnion',
    'GraphQLResolver',
    'GraphQLDocumentation',
    'JsonKey',
    'JsonSerializable',
    'Deprecated',
]


@dataclass(frozen=True)
class GraphQLClass:
    """Marks a class as a GraphQL output type, or an enum as a GraphQL enum."""


@dataclass(frozen=True)
class GraphQLInputClass:
    """Marks a class as a GraphQL input object type."""


@dataclass(frozen=True)
class GraphQLUnion:
    """Marks a class as a GraphQL union of the listed member types.

    Attributes:
        types: Member declarations (``ClassDecl`` or ``TypeRef``). Entries that
            do not resolve to a class are skipped.
        name: Optional SDL name overriding the derived one.
    """

    types: Tuple[Any, ...] = ()
    name: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'types', tuple(self.types))


@dataclass(frozen=True)
class GraphQLResolver:
    """Exposes a method as a GraphQL field backed by a registered resolver."""


@dataclass(frozen=True)
class GraphQLDocumentation:
    description: Optional[str] = None


@dataclass(frozen=True)
class JsonKey:
    """Serialization directive on a field.

    ``name`` overrides the wire name. ``include_from_json=False`` hides the
    field from input types, ``include_to_json=False`` from output types, and
    ``ignore=True`` from both.
    """

    name: Optional[str] = None
    include_from_json: Optional[bool] = None
    include_to_json: Optional[bool] = None
    ignore: bool = False


@dataclass(frozen=True)
class JsonSerializable:
    """Marks a class as a general-purpose serializable data class."""


@dataclass(frozen=True)
class Deprecated:
    message: Optional[str] = None
