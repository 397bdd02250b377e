"""Name-keyed registry of generated descriptors.

Declarations are synthesized independently and out of order, so descriptors
never embed each other: a reference carries a name, and consumers look the
target up here by binding name once every declaration has been processed.
"""
from __future__ import annotations

from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

from .core import descriptors as d
from .errors import InvalidUsageError

__all__ = ['DescriptorRegistry']

_DESCRIPTOR_TYPES = (d.ObjectDescriptor, d.InputObjectDescriptor, d.UnionDescriptor, d.EnumTypeDescriptor)


class DescriptorRegistry:
    def __init__(self, descriptors: Optional[Mapping[str, d.TypeDescriptor]] = None):
        self._by_binding: Dict[str, d.TypeDescriptor] = {}
        for binding, descriptor in (descriptors or {}).items():
            self.register(binding, descriptor)

    @classmethod
    def from_namespace(cls, namespace: Mapping[str, Any]) -> 'DescriptorRegistry':
        """Collect every descriptor bound in a module namespace (e.g. executed generated source)."""
        return cls({k: v for k, v in namespace.items() if isinstance(v, _DESCRIPTOR_TYPES)})

    def register(self, binding: str, descriptor: d.TypeDescriptor) -> d.TypeDescriptor:
        existing = self._by_binding.get(binding)
        if existing is not None and existing is not descriptor:
            raise InvalidUsageError(f"Duplicate generated binding '{binding}' ({existing.name} and {descriptor.name})")
        self._by_binding[binding] = descriptor
        return descriptor

    def get(self, binding: str) -> Optional[d.TypeDescriptor]:
        return self._by_binding.get(binding)

    def lookup(self, reference: d.NamedRef) -> d.TypeDescriptor:
        """Resolve a by-name reference; self references resolve to their target directly."""
        target = getattr(reference, 'target', None)
        if target is not None:
            return target
        descriptor = self._by_binding.get(reference.binding)
        if descriptor is None:
            raise InvalidUsageError(
                f"Unknown generated type '{reference.name}' (binding {reference.binding}). "
                "Ensure its declaration was generated."
            )
        return descriptor

    def items(self) -> Tuple[Tuple[str, d.TypeDescriptor], ...]:
        return tuple(self._by_binding.items())

    def __contains__(self, binding: object) -> bool:
        return binding in self._by_binding

    def __iter__(self) -> Iterator[str]:
        return iter(self._by_binding)

    def __len__(self) -> int:
        return len(self._by_binding)
