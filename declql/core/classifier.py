"""Type classifier: pure predicates over declarations and type references.

Every function accepts either a :class:`~declql.declarations.TypeRef` or a
declaration. A reference whose target is not resolved yet has "insufficient
information": predicates answer ``False`` and extractors ``None``.
"""
from __future__ import annotations
from enum import Enum
from typing import Any, Iterator, Optional, Type, TypeVar, Union

from ..declarations import (
    BOOL,
    DATETIME,
    FLOAT,
    FUTURE,
    INT,
    ITERABLE,
    OBJECT,
    STRING,
    ClassDecl,
    Declaration,
    EnumDecl,
    MethodDecl,
    TypeRef,
)
from ..markers import GraphQLClass, GraphQLInputClass, GraphQLResolver, GraphQLUnion, JsonSerializable
from . import descriptors as d

__all__ = [
    'TypeKind',
    'declaration_of',
    'has_annotation',
    'first_annotation',
    'iter_supertypes',
    'is_assignable_to',
    'is_enum',
    'is_iterable',
    'is_future',
    'is_object_supertype',
    'is_self_type',
    'is_self_or_list_of_self',
    'is_marked_output_type',
    'is_marked_input_type',
    'is_marked_union',
    'is_marked_resolver',
    'is_serializable',
    'is_interface_kind',
    'iterable_element_type',
    'primitive_scalar',
    'classify',
]

M = TypeVar('M')
Typeish = Union[TypeRef, Declaration, None]

_PRIMITIVES = (
    (STRING, d.STRING),
    (INT, d.INT),
    (FLOAT, d.FLOAT),
    (BOOL, d.BOOLEAN),
    (DATETIME, d.DATE),
)


class TypeKind(Enum):
    SCALAR = 'scalar'
    LIST = 'list'
    ENUM = 'enum'
    OBJECT = 'object'
    INPUT = 'input'
    UNION = 'union'
    UNKNOWN = 'unknown'


def declaration_of(t: Typeish) -> Optional[Declaration]:
    if isinstance(t, TypeRef):
        return t.declaration
    return t


def has_annotation(element: Any, marker: Type[Any]) -> bool:
    return first_annotation(element, marker) is not None


def first_annotation(element: Any, marker: Type[M]) -> Optional[M]:
    for ann in getattr(element, 'annotations', None) or ():
        if isinstance(ann, marker):
            return ann
    return None


def iter_supertypes(decl: Optional[ClassDecl]) -> Iterator[ClassDecl]:
    """Yield ``decl`` and its ancestors, stopping before the universal root."""
    search = decl
    while search is not None and not is_object_supertype(search):
        yield search
        search = search.supertype


def is_assignable_to(t: Typeish, target: ClassDecl) -> bool:
    decl = declaration_of(t)
    if not isinstance(decl, ClassDecl):
        return False
    return any(s is target for s in iter_supertypes(decl))


def is_enum(t: Typeish) -> bool:
    return isinstance(declaration_of(t), EnumDecl)


def is_iterable(t: Typeish) -> bool:
    return is_assignable_to(t, ITERABLE)


def is_future(t: Typeish) -> bool:
    return is_assignable_to(t, FUTURE)


def is_object_supertype(t: Typeish) -> bool:
    return declaration_of(t) is OBJECT


def is_self_type(t: Typeish, owner: ClassDecl) -> bool:
    """True when ``t`` targets exactly ``owner``.

    An unresolved reference spelling the owner's name also counts: a class
    cannot hold a resolved reference to itself before it exists.
    """
    if isinstance(t, TypeRef) and t.declaration is None:
        return t.name == owner.name
    return declaration_of(t) is owner


def is_self_or_list_of_self(t: Typeish, owner: ClassDecl) -> bool:
    if is_self_type(t, owner):
        return True
    element = iterable_element_type(t)
    return element is not None and is_self_type(element, owner)


def is_marked_output_type(t: Typeish) -> bool:
    """Output-type marker on the class or any of its ancestors."""
    decl = declaration_of(t)
    if not isinstance(decl, ClassDecl):
        return False
    return any(has_annotation(s, GraphQLClass) for s in iter_supertypes(decl))


def is_marked_input_type(t: Typeish) -> bool:
    return has_annotation(declaration_of(t), GraphQLInputClass)


def is_marked_union(t: Typeish) -> bool:
    return has_annotation(declaration_of(t), GraphQLUnion)


def is_marked_resolver(method: MethodDecl) -> bool:
    return has_annotation(method, GraphQLResolver)


def is_serializable(t: Typeish) -> bool:
    return has_annotation(declaration_of(t), JsonSerializable)


def is_interface_kind(clazz: ClassDecl) -> bool:
    # Serializable abstract classes are concrete data shapes, not interfaces.
    return clazz.is_abstract and not is_serializable(clazz)


def iterable_element_type(t: Typeish) -> Optional[TypeRef]:
    if not isinstance(t, TypeRef) or not is_iterable(t) or not t.arguments:
        return None
    return t.arguments[0]


def primitive_scalar(t: Typeish) -> Optional[d.Scalar]:
    for builtin, scalar in _PRIMITIVES:
        if is_assignable_to(t, builtin):
            return scalar
    return None


def classify(t: Typeish) -> TypeKind:
    """Single classification point used by inference and the synthesizer."""
    if primitive_scalar(t) is not None:
        return TypeKind.SCALAR
    if is_iterable(t):
        return TypeKind.LIST
    if is_enum(t):
        return TypeKind.ENUM
    if is_marked_output_type(t):
        return TypeKind.OBJECT
    if is_marked_input_type(t):
        return TypeKind.INPUT
    if is_marked_union(t):
        return TypeKind.UNION
    return TypeKind.UNKNOWN
