from __future__ import annotations

import logging
from typing import Any, Optional

from ..config import EnumRepresentation, GeneratorOptions
from ..declarations import EnumDecl, EnumValueDecl
from . import descriptors as d
from .naming import clean_description, deprecation_reason_for, description_for

__all__ = ['build_enum_descriptor', 'backing_value']

_logger = logging.getLogger("declql")


def backing_value(enum: EnumDecl, value: EnumValueDecl, representation: EnumRepresentation) -> Any:
    """Live constant for strongly typed runtimes, else the constant's name."""
    if representation is EnumRepresentation.MEMBERS and enum.host_type is not None:
        return enum.host_type[value.name]
    return value.name


def build_enum_descriptor(enum: EnumDecl, options: Optional[GeneratorOptions] = None) -> d.EnumTypeDescriptor:
    """Build the enum type descriptor, one value per real constant.

    The type description comes from an explicit ``GraphQLDocumentation`` or
    the enum's documentation; value descriptions are flattened to one line.
    """
    options = options or GeneratorOptions()
    if options.live_enums and enum.host_type is None:
        _logger.debug("enum %s has no host type; backing values fall back to names", enum.name)
    values = tuple(
        d.EnumValueDescriptor(
            v.name,
            backing_value(enum, v, options.enum_values),
            description=clean_description(description_for(v)),
            deprecation_reason=deprecation_reason_for(v),
        )
        for v in enum.values
        if not v.is_synthetic
    )
    return d.EnumTypeDescriptor(
        enum.name,
        values,
        description=clean_description(description_for(enum)),
        source_name=enum.name,
    )
