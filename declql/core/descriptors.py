"""Produced model: schema-type expressions and type descriptors.

Descriptors reference each other by name (see :class:`~declql.registry.DescriptorRegistry`),
never by embedding, with one exception: a self-referential input type's
fields point back at the very descriptor they are attached to.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Sequence, Tuple, Union

from ..errors import InvalidUsageError
from ..naming import to_camel_case

__all__ = [
    'SchemaType',
    'Scalar',
    'ListOf',
    'NonNull',
    'NamedRef',
    'EnumRef',
    'ObjectRef',
    'InputRef',
    'UnionRef',
    'SelfRef',
    'STRING',
    'INT',
    'FLOAT',
    'BOOLEAN',
    'DATE',
    'binding_name',
    'FieldDescriptor',
    'InputArgDescriptor',
    'MethodFieldDescriptor',
    'InputFieldDescriptor',
    'ObjectDescriptor',
    'InputObjectDescriptor',
    'UnionDescriptor',
    'EnumValueDescriptor',
    'EnumTypeDescriptor',
    'TypeDescriptor',
]


def binding_name(type_name: str, *, is_input: bool = False) -> str:
    """Name of the top-level binding that holds a generated descriptor.

    ``User`` -> ``userGraphQLType``, input ``Address`` -> ``addressInputGraphQLType``.
    """
    return f"{to_camel_case(type_name)}{'Input' if is_input else ''}GraphQLType"


class SchemaType:
    """Base of the schema-type expression variants."""

    @property
    def named_type(self) -> 'SchemaType':
        return self


@dataclass(frozen=True)
class Scalar(SchemaType):
    name: str


@dataclass(frozen=True)
class ListOf(SchemaType):
    of_type: SchemaType

    @property
    def named_type(self) -> SchemaType:
        return self.of_type.named_type


@dataclass(frozen=True)
class NonNull(SchemaType):
    of_type: SchemaType

    @property
    def named_type(self) -> SchemaType:
        return self.of_type.named_type


class NamedRef(SchemaType):
    """Reference to another generated descriptor by its host type name."""

    name: str
    is_input = False

    @property
    def binding(self) -> str:
        return binding_name(self.name, is_input=self.is_input)


@dataclass(frozen=True)
class EnumRef(NamedRef):
    name: str


@dataclass(frozen=True)
class ObjectRef(NamedRef):
    name: str


@dataclass(frozen=True)
class UnionRef(NamedRef):
    name: str


@dataclass(frozen=True)
class InputRef(NamedRef):
    name: str
    # Set only for the self-reference of a deferred input type.
    target: Optional['InputObjectDescriptor'] = field(default=None, compare=False, repr=False)
    is_input = True


@dataclass(frozen=True)
class SelfRef(SchemaType):
    """Placeholder for the enclosing input type while its fields are built."""


STRING = Scalar('String')
INT = Scalar('Int')
FLOAT = Scalar('Float')
BOOLEAN = Scalar('Boolean')
DATE = Scalar('Date')


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    type: SchemaType
    description: Optional[str] = None
    deprecation_reason: Optional[str] = None
    resolve: Optional[Callable[[Any, Any], Any]] = None


@dataclass(frozen=True)
class InputArgDescriptor:
    name: str
    type: SchemaType


@dataclass(frozen=True)
class MethodFieldDescriptor:
    name: str
    type: SchemaType
    inputs: Tuple[InputArgDescriptor, ...] = ()
    description: Optional[str] = None
    deprecation_reason: Optional[str] = None
    resolve: Optional[Callable[[Any, Any], Any]] = None


@dataclass(frozen=True)
class InputFieldDescriptor:
    name: str
    type: SchemaType
    description: Optional[str] = None
    deprecation_reason: Optional[str] = None


@dataclass(frozen=True)
class ObjectDescriptor:
    name: str
    fields: Tuple[Union[FieldDescriptor, MethodFieldDescriptor], ...] = ()
    description: Optional[str] = None
    is_interface: bool = False
    interfaces: Tuple[ObjectRef, ...] = ()
    source_name: Optional[str] = None


@dataclass(frozen=True)
class InputObjectDescriptor:
    """An input object type.

    Built either in one step with its fields, or deferred: created empty with
    ``deferred=True`` and completed exactly once by :meth:`attach_fields`, so
    that field types can refer to this instance.
    """

    name: str
    fields: Tuple[InputFieldDescriptor, ...] = ()
    description: Optional[str] = None
    source_name: Optional[str] = None
    deferred: bool = field(default=False, compare=False, repr=False)

    def attach_fields(self, fields: Sequence[InputFieldDescriptor]) -> 'InputObjectDescriptor':
        if not self.deferred or getattr(self, '_sealed', False):
            raise InvalidUsageError(f"Input type {self.name} already has its fields")
        object.__setattr__(self, 'fields', tuple(fields))
        object.__setattr__(self, '_sealed', True)
        return self


@dataclass(frozen=True)
class UnionDescriptor:
    name: str
    types: Tuple[ObjectRef, ...]
    description: Optional[str] = None
    source_name: Optional[str] = None


@dataclass(frozen=True)
class EnumValueDescriptor:
    name: str
    value: Any
    description: Optional[str] = None
    deprecation_reason: Optional[str] = None


@dataclass(frozen=True)
class EnumTypeDescriptor:
    name: str
    values: Tuple[EnumValueDescriptor, ...]
    description: Optional[str] = None
    source_name: Optional[str] = None


TypeDescriptor = Union[ObjectDescriptor, InputObjectDescriptor, UnionDescriptor, EnumTypeDescriptor]
