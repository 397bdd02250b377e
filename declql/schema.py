"""Assemble an executable graphql-core schema from generated descriptors.

Descriptors only reference each other by name; :class:`SchemaAssembler`
resolves those names through a :class:`~declql.registry.DescriptorRegistry`
and builds the graphql-core types lazily (thunks), so cyclic references
between types are fine.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Dict, Optional

from graphql import (
    GraphQLArgument,
    GraphQLBoolean,
    GraphQLEnumType,
    GraphQLEnumValue,
    GraphQLError,
    GraphQLField,
    GraphQLFloat,
    GraphQLInputField,
    GraphQLInputObjectType,
    GraphQLInt,
    GraphQLInterfaceType,
    GraphQLList,
    GraphQLNamedType,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLScalarType,
    GraphQLSchema,
    GraphQLString,
    GraphQLUnionType,
    StringValueNode,
)

from .core import descriptors as d
from .core.resolvers import parse_datetime
from .errors import InvalidUsageError
from .registry import DescriptorRegistry

__all__ = ['GraphQLDate', 'WireEnumType', 'SchemaAssembler']

_logger = logging.getLogger("declql")


def _serialize_date(value: Any) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, str):
        return parse_datetime(value).isoformat()
    raise GraphQLError(f"Date cannot represent value: {value!r}")


def _parse_date(value: Any) -> datetime:
    try:
        return parse_datetime(value)
    except (TypeError, ValueError) as e:
        raise GraphQLError(f"Date cannot represent value: {value!r}") from e


def _parse_date_literal(node, _variables=None) -> datetime:
    if not isinstance(node, StringValueNode):
        raise GraphQLError("Date cannot represent a non-string value.")
    return _parse_date(node.value)


GraphQLDate = GraphQLScalarType(
    name='Date',
    description='ISO-8601 date-time.',
    serialize=_serialize_date,
    parse_value=_parse_date,
    parse_literal=_parse_date_literal,
)

_SCALARS = {
    d.STRING: GraphQLString,
    d.INT: GraphQLInt,
    d.FLOAT: GraphQLFloat,
    d.BOOLEAN: GraphQLBoolean,
    d.DATE: GraphQLDate,
}


class WireEnumType(GraphQLEnumType):
    """Enum type that also serializes values already in wire form.

    Field accessors project enum constants read from instances to their names,
    so a name must serialize even when the backing values are live constants.
    """

    def serialize(self, output_value: Any) -> Any:
        if isinstance(output_value, str) and output_value in self.values:
            return output_value
        return super().serialize(output_value)


def _adapt(accessor):
    if accessor is None:
        return None

    def resolve(root, info, **args):
        return accessor(root, args)

    return resolve


class SchemaAssembler:
    """Builds graphql-core types for the descriptors of one registry."""

    def __init__(self, registry: DescriptorRegistry):
        self.registry = registry
        self._types: Dict[str, GraphQLNamedType] = {}
        self._sdl_by_source: Dict[str, str] = {
            desc.source_name: desc.name
            for _, desc in registry.items()
            if isinstance(desc, d.ObjectDescriptor) and desc.source_name
        }

    # ------------------------------------------------------------ entry

    def build_schema(self, query_binding: str, mutation_binding: Optional[str] = None) -> GraphQLSchema:
        query = self._root(query_binding)
        mutation = self._root(mutation_binding) if mutation_binding else None
        types = [self.named_type(desc) for _, desc in self.registry.items()]
        _logger.debug("assembled schema with %d generated types", len(types))
        return GraphQLSchema(query=query, mutation=mutation, types=types)

    def _root(self, binding: str) -> GraphQLObjectType:
        desc = self.registry.get(binding)
        if not isinstance(desc, d.ObjectDescriptor) or desc.is_interface:
            raise InvalidUsageError(f"Root binding '{binding}' is not a generated object type")
        return self.named_type(desc)

    # ------------------------------------------------------------ types

    def named_type(self, desc: d.TypeDescriptor) -> GraphQLNamedType:
        existing = self._types.get(desc.name)
        if existing is not None:
            return existing
        if isinstance(desc, d.ObjectDescriptor):
            built = self._object(desc)
        elif isinstance(desc, d.InputObjectDescriptor):
            built = GraphQLInputObjectType(
                desc.name,
                lambda: {f.name: self._input_field(f) for f in desc.fields},
                description=desc.description,
            )
        elif isinstance(desc, d.UnionDescriptor):
            built = GraphQLUnionType(
                desc.name,
                lambda: [self._lookup(t) for t in desc.types],
                resolve_type=self._resolve_type,
                description=desc.description,
            )
        elif isinstance(desc, d.EnumTypeDescriptor):
            built = WireEnumType(
                desc.name,
                {
                    v.name: GraphQLEnumValue(
                        v.value, description=v.description, deprecation_reason=v.deprecation_reason
                    )
                    for v in desc.values
                },
                description=desc.description,
            )
        else:
            raise InvalidUsageError(f"Unsupported descriptor {type(desc).__name__}")
        self._types[desc.name] = built
        return built

    def _object(self, desc: d.ObjectDescriptor) -> GraphQLNamedType:
        def fields():
            return {f.name: self._field(f) for f in desc.fields}

        def interfaces():
            result = []
            for ref in desc.interfaces:
                iface = self._lookup(ref)
                if not isinstance(iface, GraphQLInterfaceType):
                    raise InvalidUsageError(f"{desc.name} implements {ref.name}, which is not an interface")
                result.append(iface)
            return result

        if desc.is_interface:
            return GraphQLInterfaceType(
                desc.name, fields, interfaces=interfaces,
                resolve_type=self._resolve_type, description=desc.description,
            )
        return GraphQLObjectType(desc.name, fields, interfaces=interfaces, description=desc.description)

    def _field(self, f) -> GraphQLField:
        args = None
        if isinstance(f, d.MethodFieldDescriptor):
            args = {a.name: GraphQLArgument(self.type_of(a.type)) for a in f.inputs}
        return GraphQLField(
            self.type_of(f.type),
            args=args,
            resolve=_adapt(f.resolve),
            description=f.description,
            deprecation_reason=f.deprecation_reason,
        )

    def _input_field(self, f: d.InputFieldDescriptor) -> GraphQLInputField:
        return GraphQLInputField(
            self.type_of(f.type), description=f.description, deprecation_reason=f.deprecation_reason
        )

    def _lookup(self, ref: d.NamedRef) -> GraphQLNamedType:
        return self.named_type(self.registry.lookup(ref))

    def type_of(self, t: d.SchemaType):
        if isinstance(t, d.Scalar):
            try:
                return _SCALARS[t]
            except KeyError:
                raise InvalidUsageError(f"Unknown scalar {t.name}") from None
        if isinstance(t, d.ListOf):
            return GraphQLList(self.type_of(t.of_type))
        if isinstance(t, d.NonNull):
            return GraphQLNonNull(self.type_of(t.of_type))
        if isinstance(t, d.NamedRef):
            return self._lookup(t)
        raise InvalidUsageError(f"Unbound schema type {t!r}")

    # ------------------------------------------------------- abstract types

    def _resolve_type(self, value: Any, info, abstract_type) -> Optional[str]:
        if isinstance(value, Mapping):
            name = value.get('__typename')
        else:
            name = type(value).__name__
        if name is None:
            return None
        return self._sdl_by_source.get(name, name)
