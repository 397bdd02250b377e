"""Generator options.

Options are passed explicitly to the build step; hosts that read a build
configuration file hand its mapping to :meth:`GeneratorOptions.from_mapping`.
"""
from __future__ import annotations
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Mapping, Optional

from .errors import InvalidUsageError

__all__ = ['EnumRepresentation', 'GeneratorOptions']


class EnumRepresentation(Enum):
    # Runtime stores and serves enum values as their wire-form names.
    STRINGS = 'strings'
    # Runtime works with live enum constants.
    MEMBERS = 'members'


@dataclass(frozen=True)
class GeneratorOptions:
    """Knobs shared by every generator of a build.

    Attributes:
        type_name_prefix: Conventional prefix token stripped from class names
            when deriving SDL type names (``BmcUser`` -> ``_User``).
        enum_values: How enum values are represented at runtime.
        fail_fast: Whether :class:`~declql.generators.SharedPartBuilder`
            re-raises the first failing declaration or logs and continues.
    """

    type_name_prefix: Optional[str] = None
    enum_values: EnumRepresentation = EnumRepresentation.STRINGS
    fail_fast: bool = True

    @property
    def live_enums(self) -> bool:
        return self.enum_values is EnumRepresentation.MEMBERS

    @classmethod
    def from_mapping(cls, options: Optional[Mapping[str, Any]]) -> 'GeneratorOptions':
        if not options:
            return cls()
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise InvalidUsageError(f"Unknown generator options: {', '.join(unknown)}")
        values = dict(options)
        if 'enum_values' in values and not isinstance(values['enum_values'], EnumRepresentation):
            try:
                values['enum_values'] = EnumRepresentation(str(values['enum_values']).lower())
            except ValueError:
                raise InvalidUsageError(
                    f"Invalid enum_values option '{values['enum_values']}'. Use strings or members"
                ) from None
        if 'fail_fast' in values:
            values['fail_fast'] = _parse_bool('fail_fast', values['fail_fast'])
        return cls(**values)


_TRUE = {'true', 'yes', 'on', '1'}
_FALSE = {'false', 'no', 'off', '0'}


def _parse_bool(option: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in _TRUE | _FALSE:
        return value.strip().lower() in _TRUE
    raise InvalidUsageError(f"Invalid {option} option '{value}'. Use true or false")
