"""Type inference: map declared types to schema-type expressions.

Inference is async because resolving a forward reference may suspend on the
host's declaration lookup. Each synthesis pass owns one :class:`TypeCache`;
nothing here is shared between passes.
"""
from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Dict, Optional, Protocol

from ..declarations import ClassDecl, Declaration, TypeRef
from ..errors import InvalidUsageError, TypeInferenceError
from . import descriptors as d
from .classifier import (
    TypeKind,
    classify,
    is_future,
    is_self_type,
    iterable_element_type,
    primitive_scalar,
)
from .naming import reference_name_for

__all__ = [
    'Direction',
    'DeclarationResolver',
    'TypeCache',
    'unwrap_future',
    'wrap_nullability',
    'infer_schema_type',
    'infer_field_type',
    'infer_input_field_type',
    'bind_self_references',
]

_logger = logging.getLogger("declql")


class Direction(Enum):
    OUTPUT = 'output'
    INPUT = 'input'


class DeclarationResolver(Protocol):
    async def resolve(self, name: str) -> Optional[Declaration]: ...


class TypeCache:
    """Pass-scoped memo of cross-type resolutions, keyed by referenced type name.

    Stores one future per name so concurrent lookups of the same name within a
    pass share a single resolution. Also memoizes forward-reference lookups
    against the pass's :class:`DeclarationResolver`.
    """

    def __init__(self, resolver: Optional[DeclarationResolver] = None):
        self.resolver = resolver
        self._references: Dict[str, 'asyncio.Future[d.SchemaType]'] = {}
        self._declarations: Dict[str, 'asyncio.Future[Optional[Declaration]]'] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._references

    def __len__(self) -> int:
        return len(self._references)

    async def reference(self, name: str, compute: Callable[[], Awaitable[d.SchemaType]]) -> d.SchemaType:
        entry = self._references.get(name)
        if entry is None:
            entry = asyncio.ensure_future(compute())
            self._references[name] = entry
        else:
            _logger.debug("type cache hit for %s", name)
        return await entry

    async def declaration(self, type_ref: TypeRef) -> Optional[Declaration]:
        if type_ref.declaration is not None:
            return type_ref.declaration
        if self.resolver is None:
            return None
        entry = self._declarations.get(type_ref.name)
        if entry is None:
            entry = asyncio.ensure_future(self.resolver.resolve(type_ref.name))
            self._declarations[type_ref.name] = entry
        return await entry


def unwrap_future(type_ref: TypeRef) -> TypeRef:
    """``Awaitable[T]`` becomes ``T``; anything else is returned unchanged."""
    if is_future(type_ref) and type_ref.arguments:
        return type_ref.arguments[0]
    return type_ref


def wrap_nullability(schema_type: d.SchemaType, source: TypeRef) -> d.SchemaType:
    if source.nullable or isinstance(schema_type, d.NonNull):
        return schema_type
    return d.NonNull(schema_type)


async def _resolved(owner: str, member: str, type_ref: TypeRef, cache: TypeCache) -> TypeRef:
    if type_ref.declaration is not None:
        return type_ref
    decl = await cache.declaration(type_ref)
    if decl is None:
        raise TypeInferenceError(owner, member, str(type_ref), "The referenced declaration could not be resolved.")
    return TypeRef(type_ref.name, type_ref.nullable, type_ref.arguments, decl)


def _named_reference(kind: TypeKind, decl: Declaration) -> d.SchemaType:
    if kind is TypeKind.ENUM:
        return d.EnumRef(decl.name)
    if kind is TypeKind.OBJECT:
        return d.ObjectRef(reference_name_for(decl))
    if kind is TypeKind.INPUT:
        return d.InputRef(decl.name)
    return d.UnionRef(decl.name)


async def infer_schema_type(
    owner: str,
    member: str,
    type_ref: TypeRef,
    direction: Direction,
    cache: TypeCache,
    *,
    unwrap_async: bool = False,
) -> d.SchemaType:
    """Infer the schema type of ``owner.member`` declared as ``type_ref``.

    Nullability of ``type_ref`` itself is left to the caller; element types of
    lists are wrapped here since no call site sees them.

    Raises:
        TypeInferenceError: no rule matches, or a forward reference cannot be resolved.
        InvalidUsageError: a union is used in input direction.
    """
    if unwrap_async:
        type_ref = unwrap_future(type_ref)
    type_ref = await _resolved(owner, member, type_ref, cache)
    kind = classify(type_ref)

    if kind is TypeKind.SCALAR:
        return primitive_scalar(type_ref)

    if kind is TypeKind.LIST:
        element = iterable_element_type(type_ref)
        if element is None:
            raise TypeInferenceError(owner, member, str(type_ref), "Iterable types need an element type.")
        inner = await infer_schema_type(owner, member, element, direction, cache)
        return d.ListOf(wrap_nullability(inner, element))

    if kind is TypeKind.UNKNOWN:
        raise TypeInferenceError(
            owner,
            member,
            str(type_ref),
            "Missing @GraphQLClass, @GraphQLInputClass, or @GraphQLUnion annotation.",
        )

    decl = type_ref.declaration
    if decl.name == owner:
        result = _named_reference(kind, decl)
    else:
        async def compute() -> d.SchemaType:
            return _named_reference(kind, decl)
        result = await cache.reference(decl.name, compute)

    if isinstance(result, d.UnionRef) and direction is Direction.INPUT:
        raise InvalidUsageError(f"Union types are not allowed in input fields ({owner}.{member}).")
    return result


async def infer_field_type(
    owner: str,
    member: str,
    type_ref: TypeRef,
    direction: Direction,
    cache: TypeCache,
    *,
    unwrap_async: bool = False,
) -> d.SchemaType:
    """Inference plus the non-null wrapping every call site applies."""
    source = unwrap_future(type_ref) if unwrap_async else type_ref
    inferred = await infer_schema_type(owner, member, source, direction, cache)
    return wrap_nullability(inferred, source)


async def infer_input_field_type(clazz: ClassDecl, member: str, type_ref: TypeRef, cache: TypeCache) -> d.SchemaType:
    """Input-direction inference that turns references to ``clazz`` into :class:`SelfRef`."""
    element = iterable_element_type(type_ref)
    if element is not None and is_self_type(element, clazz):
        return wrap_nullability(d.ListOf(wrap_nullability(d.SelfRef(), element)), type_ref)
    if is_self_type(type_ref, clazz):
        return wrap_nullability(d.SelfRef(), type_ref)
    return await infer_field_type(clazz.name, member, type_ref, Direction.INPUT, cache)


def bind_self_references(schema_type: d.SchemaType, target: d.InputObjectDescriptor) -> d.SchemaType:
    """Replace :class:`SelfRef` placeholders with a reference to ``target`` itself."""
    if isinstance(schema_type, d.SelfRef):
        return d.InputRef(target.source_name or target.name, target=target)
    if isinstance(schema_type, d.ListOf):
        return d.ListOf(bind_self_references(schema_type.of_type, target))
    if isinstance(schema_type, d.NonNull):
        return d.NonNull(bind_self_references(schema_type.of_type, target))
    return schema_type
