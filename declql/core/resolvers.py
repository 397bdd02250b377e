"""Field accessors baked into generated descriptors.

Accessors are callable data: the synthesizer builds them, the emitter renders
them back to source, and the schema runtime calls them as
``accessor(source, args)`` where ``source`` is either a keyed record or a typed
instance.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, MutableMapping, Optional, Tuple

from ..errors import InvalidEnumValueError, MissingResolverError

__all__ = [
    'ValueKind',
    'ResolverFn',
    'resolver_registry',
    'FieldAccessor',
    'RegistryDispatch',
    'dispatch_key',
    'wire_form',
    'parse_datetime',
]

ResolverFn = Callable[[Any, Dict[str, Any]], Any]

# Process-wide resolver registry, populated by application startup code.
# Generated code only reads it.
resolver_registry: Dict[str, ResolverFn] = {}


class ValueKind(Enum):
    PLAIN = 'plain'
    DATE = 'date'
    ENUM = 'enum'
    ENUM_LIST = 'enum_list'


def wire_form(value: Any) -> Any:
    """Wire-form string of an enum constant; other values pass through."""
    if isinstance(value, Enum):
        return value.name
    return value


def parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    s = str(value)
    if s.endswith('Z'):
        s = s[:-1] + '+00:00'
    return datetime.fromisoformat(s)


def dispatch_key(class_name: str, method_name: str) -> str:
    return f"{class_name}.{method_name}"


@dataclass(frozen=True)
class FieldAccessor:
    """Two-branch value accessor for one output field.

    Records are read by ``wire_name``; instances by ``attribute``. Enum
    values read from instances are always projected to their wire-form name.
    Enum values read from records are returned as stored, unless
    ``live_enums`` is set, in which case they are looked up among
    ``enum_names`` (and ``enum_host`` members when a host enum is known).
    """

    wire_name: str
    attribute: str
    owner: str
    kind: ValueKind = ValueKind.PLAIN
    enum_type: Optional[str] = None
    enum_names: Tuple[str, ...] = ()
    enum_host: Optional[type] = None
    live_enums: bool = False

    def __call__(self, source: Any, args: Optional[Dict[str, Any]] = None) -> Any:
        if isinstance(source, Mapping):
            return self._from_record(source)
        return self._from_instance(source)

    def _from_record(self, record: Mapping) -> Any:
        raw = record.get(self.wire_name)
        if self.kind is ValueKind.DATE:
            return parse_datetime(raw)
        if self.kind is ValueKind.ENUM and self.live_enums:
            return self._enum_constant(raw)
        return raw

    def _from_instance(self, instance: Any) -> Any:
        value = getattr(instance, self.attribute)
        if self.kind is ValueKind.ENUM:
            return wire_form(value)
        if self.kind is ValueKind.ENUM_LIST:
            if value is None:
                return None
            return [wire_form(v) for v in value]
        return value

    def _enum_constant(self, raw: Any) -> Any:
        if raw is None:
            return None
        key = wire_form(raw)
        if key not in self.enum_names:
            raise InvalidEnumValueError(self.enum_type or self.owner, raw)
        if self.enum_host is not None:
            return self.enum_host[key]
        return key


@dataclass(frozen=True)
class RegistryDispatch:
    """Forwards a resolver-marked method field to the callback registered under ``key``.

    ``registry`` defaults to the process-wide :data:`resolver_registry`,
    looked up on every call so registration may happen after generation.
    """

    key: str
    registry: Optional[MutableMapping[str, ResolverFn]] = field(default=None, compare=False, repr=False)

    def __call__(self, source: Any, args: Optional[Dict[str, Any]] = None) -> Any:
        registry = resolver_registry if self.registry is None else self.registry
        fn = registry.get(self.key)
        if fn is None:
            raise MissingResolverError(self.key)
        return fn(source, args if args is not None else {})
