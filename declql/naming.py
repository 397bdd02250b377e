"""Common naming utilities for declql.

Casing helpers used for binding names and wire names, plus strawberry
``NameConverter`` variants that act as the project-wide field naming
convention handed to the generators.
"""
from __future__ import annotations

import re

from strawberry.schema.name_converter import NameConverter

__all__ = [
    "camel_to_snake",
    "snake_to_camel",
    "to_camel_case",
    "NameConverter",
    "SnakeCaseNameConverter",
    "IdentityNameConverter",
]


def camel_to_snake(name: str) -> str:
    """Convert camelCase or PascalCase identifier to snake_case.

    Idempotent for already snake_case input. Handles sequences of capitals.
    """
    if not isinstance(name, str) or not name:
        return name  # type: ignore
    s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", name)
    s2 = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1)
    return s2.lower()


def snake_to_camel(name: str, upper_first: bool = False) -> str:
    """Convert snake_case identifier to camelCase or PascalCase.

    upper_first=False returns lowerCamelCase (default), True returns UpperCamelCase.
    Idempotent for already camelCase strings without underscores.
    """
    if not isinstance(name, str) or not name:
        return name  # type: ignore
    if '_' not in name:
        if upper_first:
            return name[0].upper() + name[1:]
        return name
    parts = [p for p in name.split('_') if p]
    if not parts:
        return ''
    first = parts[0].lower() if not upper_first else parts[0].capitalize()
    rest = ''.join(p.capitalize() for p in parts[1:])
    return first + rest


def to_camel_case(name: str) -> str:
    """lowerCamelCase for any identifier style: ``TodoItem`` -> ``todoItem``."""
    return snake_to_camel(camel_to_snake(name))


class IdentityNameConverter(NameConverter):
    """Keeps field identifiers as declared."""

    def __init__(self) -> None:
        super().__init__(auto_camel_case=False)


class SnakeCaseNameConverter(NameConverter):
    """Maps field identifiers to snake_case wire names: ``fullName`` -> ``full_name``."""

    def __init__(self) -> None:
        super().__init__(auto_camel_case=False)

    def apply_naming_config(self, name: str) -> str:
        return camel_to_snake(name)
