from __future__ import annotations

import logging
from typing import List, Optional

from ..config import GeneratorOptions
from ..declarations import ClassDecl, TypeRef
from ..errors import EmptyUnionError
from ..markers import GraphQLUnion
from . import descriptors as d
from .classifier import declaration_of
from .inference import TypeCache
from .naming import description_for, graphql_type_name_for, reference_name_for

__all__ = ['build_union_descriptor']

_logger = logging.getLogger("declql")


async def build_union_descriptor(
    clazz: ClassDecl,
    annotation: GraphQLUnion,
    options: Optional[GeneratorOptions] = None,
    cache: Optional[TypeCache] = None,
) -> d.UnionDescriptor:
    """Build a union over the member types listed on ``annotation``.

    Members are referenced by name. Name-only entries are resolved through
    ``cache``; entries that do not resolve to a class are skipped.

    Raises:
        EmptyUnionError: no member resolves to a class.
    """
    options = options or GeneratorOptions()
    cache = cache or TypeCache()
    sdl_name = annotation.name or graphql_type_name_for(
        clazz.name, is_input=False, prefix=options.type_name_prefix
    )
    members: List[d.ObjectRef] = []
    for entry in annotation.types:
        decl = None
        if isinstance(entry, TypeRef):
            decl = await cache.declaration(entry)
        elif isinstance(entry, ClassDecl):
            decl = declaration_of(entry)
        if not isinstance(decl, ClassDecl):
            _logger.warning("skipping non-class member %r of union %s", entry, clazz.name)
            continue
        members.append(d.ObjectRef(reference_name_for(decl)))
    if not members:
        raise EmptyUnionError(
            f"@GraphQLUnion(types: [...]) on {clazz.name} must contain at least one class type."
        )
    return d.UnionDescriptor(sdl_name, tuple(members), description=description_for(clazz), source_name=clazz.name)
