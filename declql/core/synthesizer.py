"""Descriptor synthesizer for annotated classes.

One call handles one class in one direction. Output mode yields an
:class:`~declql.core.descriptors.ObjectDescriptor` whose fields carry value
accessors and whose resolver methods dispatch through the resolver registry.
Input mode yields an :class:`~declql.core.descriptors.InputObjectDescriptor`,
built in two phases when a field refers back to the class itself.

Every member is inferred before any descriptor is constructed, so a failure
leaves nothing behind.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from ..declarations import DATETIME, ClassDecl, EnumDecl, FieldDecl, MethodDecl, TypeRef
from . import descriptors as d
from .classifier import (
    is_assignable_to,
    is_enum,
    is_interface_kind,
    is_marked_output_type,
    is_self_or_list_of_self,
    iterable_element_type,
)
from .collector import collect_fields, collect_resolver_methods
from .context import BuildContext
from .inference import (
    Direction,
    bind_self_references,
    infer_field_type,
    infer_input_field_type,
)
from .naming import (
    deprecation_reason_for,
    description_for,
    graphql_type_name_for,
    is_exposed,
    reference_name_for,
    wire_name_for,
)
from .resolvers import FieldAccessor, RegistryDispatch, ValueKind, dispatch_key

__all__ = ['build_class_descriptor', 'build_object_descriptor', 'build_input_descriptor']

_logger = logging.getLogger("declql")


async def build_class_descriptor(clazz: ClassDecl, ctx: BuildContext, direction: Direction) -> d.TypeDescriptor:
    if direction is Direction.INPUT:
        return await build_input_descriptor(clazz, ctx)
    return await build_object_descriptor(clazz, ctx)


# ---------------------------------------------------------------- output


async def build_object_descriptor(clazz: ClassDecl, ctx: BuildContext) -> d.ObjectDescriptor:
    type_name = graphql_type_name_for(clazz.name, is_input=False, prefix=ctx.options.type_name_prefix)
    interfaces = tuple(
        d.ObjectRef(reference_name_for(i)) for i in clazz.interfaces if is_marked_output_type(i)
    )

    entries: List[object] = []
    for f in collect_fields(clazz):
        if not is_exposed(f, is_input=False):
            _logger.debug("%s.%s excluded from output type", clazz.name, f.name)
            continue
        entries.append(await _output_field(clazz, f, ctx))
    for m in collect_resolver_methods(clazz):
        entries.append(await _method_field(clazz, m, ctx))

    descriptor = d.ObjectDescriptor(
        type_name,
        tuple(entries),
        description=description_for(clazz),
        is_interface=is_interface_kind(clazz),
        interfaces=interfaces,
        source_name=clazz.name,
    )
    _logger.debug("synthesized object type %s from %s (%d fields)", type_name, clazz.name, len(entries))
    return descriptor


async def _output_field(clazz: ClassDecl, f: FieldDecl, ctx: BuildContext) -> d.FieldDescriptor:
    wire = wire_name_for(f, ctx.name_converter)
    schema_type = await infer_field_type(clazz.name, f.name, f.type, Direction.OUTPUT, ctx.cache)
    return d.FieldDescriptor(
        wire,
        schema_type,
        description=description_for(f),
        deprecation_reason=deprecation_reason_for(f),
        resolve=await _field_accessor(clazz, f, wire, ctx),
    )


async def _resolved(type_ref: TypeRef, ctx: BuildContext) -> TypeRef:
    if type_ref.declaration is not None:
        return type_ref
    decl = await ctx.cache.declaration(type_ref)
    return TypeRef(type_ref.name, type_ref.nullable, type_ref.arguments, decl)


async def _field_accessor(clazz: ClassDecl, f: FieldDecl, wire: str, ctx: BuildContext) -> FieldAccessor:
    type_ref = await _resolved(f.type, ctx)
    kind = ValueKind.PLAIN
    enum: Optional[EnumDecl] = None
    if is_assignable_to(type_ref, DATETIME):
        kind = ValueKind.DATE
    elif is_enum(type_ref):
        kind = ValueKind.ENUM
        enum = type_ref.declaration
    else:
        element = iterable_element_type(type_ref)
        if element is not None and is_enum(await _resolved(element, ctx)):
            kind = ValueKind.ENUM_LIST

    if enum is None:
        return FieldAccessor(wire, f.name, clazz.name, kind)
    live = ctx.options.live_enums
    return FieldAccessor(
        wire,
        f.name,
        clazz.name,
        kind,
        enum_type=enum.name,
        enum_names=tuple(v.name for v in enum.values if not v.is_synthetic),
        enum_host=enum.host_type if live else None,
        live_enums=live,
    )


async def _method_field(clazz: ClassDecl, m: MethodDecl, ctx: BuildContext) -> d.MethodFieldDescriptor:
    return_type = await infer_field_type(
        clazz.name, m.name, m.return_type, Direction.OUTPUT, ctx.cache, unwrap_async=True
    )
    inputs = []
    for p in m.parameters:
        arg_type = await infer_field_type(clazz.name, f"{m.name}.{p.name}", p.type, Direction.INPUT, ctx.cache)
        inputs.append(d.InputArgDescriptor(p.name, arg_type))
    return d.MethodFieldDescriptor(
        m.name,
        return_type,
        tuple(inputs),
        description=description_for(m),
        deprecation_reason=deprecation_reason_for(m),
        resolve=RegistryDispatch(dispatch_key(clazz.name, m.name)),
    )


# ----------------------------------------------------------------- input


async def build_input_descriptor(clazz: ClassDecl, ctx: BuildContext) -> d.InputObjectDescriptor:
    type_name = graphql_type_name_for(clazz.name, is_input=True, prefix=ctx.options.type_name_prefix)
    description = description_for(clazz)

    specs: List[Tuple[FieldDecl, str, d.SchemaType]] = []
    has_self_reference = False
    for f in collect_fields(clazz):
        if not is_exposed(f, is_input=True):
            _logger.debug("%s.%s excluded from input type", clazz.name, f.name)
            continue
        has_self_reference = has_self_reference or is_self_or_list_of_self(f.type, clazz)
        schema_type = await infer_input_field_type(clazz, f.name, f.type, ctx.cache)
        specs.append((f, wire_name_for(f, ctx.name_converter), schema_type))

    if not has_self_reference:
        fields = tuple(_input_field(f, wire, t) for f, wire, t in specs)
        _logger.debug("synthesized input type %s from %s (%d fields)", type_name, clazz.name, len(fields))
        return d.InputObjectDescriptor(type_name, fields, description=description, source_name=clazz.name)

    # Self-referential: the empty descriptor exists first so its fields can point at it.
    descriptor = d.InputObjectDescriptor(type_name, description=description, source_name=clazz.name, deferred=True)
    descriptor.attach_fields(
        [_input_field(f, wire, bind_self_references(t, descriptor)) for f, wire, t in specs]
    )
    _logger.debug("synthesized self-referential input type %s from %s", type_name, clazz.name)
    return descriptor


def _input_field(f: FieldDecl, wire: str, schema_type: d.SchemaType) -> d.InputFieldDescriptor:
    return d.InputFieldDescriptor(
        wire,
        schema_type,
        description=description_for(f),
        deprecation_reason=deprecation_reason_for(f),
    )
