"""Construction API used by generated source.

Every generated binding is a call into these helpers, which build the same
descriptors the synthesizer produces in memory. Applications register their
resolver-method implementations in :data:`resolver_registry` at startup.
"""
from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence

from .core import descriptors as d
from .core.resolvers import FieldAccessor, RegistryDispatch, ValueKind, resolver_registry

__all__ = [
    'graphql_string',
    'graphql_int',
    'graphql_float',
    'graphql_boolean',
    'graphql_date',
    'list_of',
    'non_null',
    'enum_ref',
    'object_ref',
    'input_ref',
    'union_ref',
    'self_ref',
    'field',
    'method_field',
    'field_input',
    'input_field',
    'object_type',
    'input_object_type',
    'union_type',
    'enum_value',
    'enum_type',
    'enum_type_from_strings',
    'FieldAccessor',
    'RegistryDispatch',
    'ValueKind',
    'resolver_registry',
]

graphql_string = d.STRING
graphql_int = d.INT
graphql_float = d.FLOAT
graphql_boolean = d.BOOLEAN
graphql_date = d.DATE


def list_of(of_type: d.SchemaType) -> d.ListOf:
    return d.ListOf(of_type)


def non_null(of_type: d.SchemaType) -> d.NonNull:
    return d.NonNull(of_type)


def enum_ref(name: str) -> d.EnumRef:
    return d.EnumRef(name)


def object_ref(name: str) -> d.ObjectRef:
    return d.ObjectRef(name)


def input_ref(name: str) -> d.InputRef:
    return d.InputRef(name)


def union_ref(name: str) -> d.UnionRef:
    return d.UnionRef(name)


def self_ref(target: d.InputObjectDescriptor) -> d.InputRef:
    """Reference from a deferred input type's field back to the type itself."""
    return d.InputRef(target.source_name or target.name, target=target)


def field(name: str, type_: d.SchemaType, *, description: Optional[str] = None,
          deprecation_reason: Optional[str] = None, resolve=None) -> d.FieldDescriptor:
    return d.FieldDescriptor(name, type_, description, deprecation_reason, resolve)


def method_field(name: str, type_: d.SchemaType, *, inputs: Sequence[d.InputArgDescriptor] = (),
                 description: Optional[str] = None, deprecation_reason: Optional[str] = None,
                 resolve=None) -> d.MethodFieldDescriptor:
    return d.MethodFieldDescriptor(name, type_, tuple(inputs), description, deprecation_reason, resolve)


def field_input(name: str, type_: d.SchemaType) -> d.InputArgDescriptor:
    return d.InputArgDescriptor(name, type_)


def input_field(name: str, type_: d.SchemaType, *, description: Optional[str] = None,
                deprecation_reason: Optional[str] = None) -> d.InputFieldDescriptor:
    return d.InputFieldDescriptor(name, type_, description, deprecation_reason)


def object_type(name: str, *, fields: Iterable = (), description: Optional[str] = None,
                is_interface: bool = False, interfaces: Iterable[d.ObjectRef] = (),
                source_name: Optional[str] = None) -> d.ObjectDescriptor:
    return d.ObjectDescriptor(
        name,
        tuple(fields),
        description=description,
        is_interface=is_interface,
        interfaces=tuple(interfaces),
        source_name=source_name,
    )


def input_object_type(name: str, *, fields: Iterable[d.InputFieldDescriptor] = (),
                      description: Optional[str] = None, source_name: Optional[str] = None,
                      deferred: bool = False) -> d.InputObjectDescriptor:
    return d.InputObjectDescriptor(
        name, tuple(fields), description=description, source_name=source_name, deferred=deferred
    )


def union_type(name: str, types: Iterable[d.ObjectRef], *, description: Optional[str] = None,
               source_name: Optional[str] = None) -> d.UnionDescriptor:
    return d.UnionDescriptor(name, tuple(types), description=description, source_name=source_name)


def enum_value(name: str, value: Any = None, *, description: Optional[str] = None,
               deprecation_reason: Optional[str] = None) -> d.EnumValueDescriptor:
    return d.EnumValueDescriptor(name, name if value is None else value, description, deprecation_reason)


def enum_type(name: str, values: Iterable[d.EnumValueDescriptor], *, description: Optional[str] = None,
              source_name: Optional[str] = None) -> d.EnumTypeDescriptor:
    return d.EnumTypeDescriptor(name, tuple(values), description=description, source_name=source_name)


def enum_type_from_strings(name: str, names: Iterable[str], *, description: Optional[str] = None) -> d.EnumTypeDescriptor:
    """Weakly typed enum whose backing values are the names themselves."""
    return enum_type(name, [enum_value(n) for n in names], description=description, source_name=name)
