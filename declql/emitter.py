"""Render descriptors as Python source.

Each descriptor becomes one unit: a top-level ``Final`` binding whose value is
a call into :mod:`declql.runtime`. Units are appended into a single generated
part by :class:`~declql.generators.SharedPartBuilder`; they reference each
other only by name, so their order does not matter.
"""
from __future__ import annotations

from dataclasses import MISSING, dataclass, fields
from enum import Enum
from typing import Any, Iterable, List, Optional, Set, Tuple

from . import runtime
from .core import descriptors as d
from .core.resolvers import FieldAccessor, RegistryDispatch, ValueKind
from .errors import InvalidUsageError

__all__ = ['GeneratedUnit', 'SourceEmitter', 'part_header']

_INDENT = '    '

_SCALARS = {
    d.STRING: 'graphql_string',
    d.INT: 'graphql_int',
    d.FLOAT: 'graphql_float',
    d.BOOLEAN: 'graphql_boolean',
    d.DATE: 'graphql_date',
}


@dataclass(frozen=True)
class GeneratedUnit:
    """Source emitted for one declaration."""

    binding: str
    descriptor: d.TypeDescriptor
    source: str
    generator: str = ''
    imports: Tuple[str, ...] = ()


def part_header(imports: Iterable[str] = ()) -> str:
    names = ',\n'.join(f"{_INDENT}{name}" for name in runtime.__all__)
    lines = [
        '# GENERATED CODE - DO NOT MODIFY BY HAND',
        '',
        'from typing import Final',
        '',
        f"from declql.runtime import (\n{names},\n)",
    ]
    extra = sorted(set(imports))
    if extra:
        lines.append('')
        lines.extend(f"import {module}" for module in extra)
    return '\n'.join(lines) + '\n'


class SourceEmitter:
    """Renders one descriptor per :meth:`emit` call, collecting needed imports."""

    def __init__(self):
        self._imports: Set[str] = set()

    def emit(self, binding: str, descriptor: d.TypeDescriptor, *, source_name: str, generator: str = '') -> GeneratedUnit:
        self._imports = set()
        doc = f"# Auto-generated from [{source_name}]."
        if isinstance(descriptor, d.ObjectDescriptor):
            body = f"{binding}: Final = {self._object(descriptor)}"
        elif isinstance(descriptor, d.InputObjectDescriptor):
            body = self._input_object(binding, descriptor)
        elif isinstance(descriptor, d.UnionDescriptor):
            doc = f"# Auto-generated union from @GraphQLUnion on {source_name}."
            body = f"{binding}: Final = {self._union(descriptor)}"
        elif isinstance(descriptor, d.EnumTypeDescriptor):
            body = f"{binding}: Final = {self._enum(descriptor)}"
        else:
            raise InvalidUsageError(f"Cannot emit {type(descriptor).__name__}")
        return GeneratedUnit(binding, descriptor, f"{doc}\n{body}\n", generator, tuple(sorted(self._imports)))

    # -------------------------------------------------------------- types

    def _object(self, desc: d.ObjectDescriptor) -> str:
        entries = [self._output_entry(f) for f in desc.fields]
        return self._call('object_type', [repr(desc.name)], [
            ('description', self._opt(desc.description)),
            ('is_interface', repr(desc.is_interface)),
            ('interfaces', self._list(self._type(i) for i in desc.interfaces)),
            ('source_name', self._opt(desc.source_name)),
            ('fields', self._block(entries, 1)),
        ])

    def _output_entry(self, entry) -> str:
        if isinstance(entry, d.MethodFieldDescriptor):
            inputs = [self._call('field_input', [repr(a.name), self._type(a.type)]) for a in entry.inputs]
            return self._call('method_field', [repr(entry.name), self._type(entry.type)], [
                ('inputs', self._list(inputs) if inputs else None),
                ('description', self._opt(entry.description)),
                ('deprecation_reason', self._opt(entry.deprecation_reason)),
                ('resolve', self._accessor(entry.resolve)),
            ])
        return self._call('field', [repr(entry.name), self._type(entry.type)], [
            ('description', self._opt(entry.description)),
            ('deprecation_reason', self._opt(entry.deprecation_reason)),
            ('resolve', self._accessor(entry.resolve)),
        ])

    def _input_object(self, binding: str, desc: d.InputObjectDescriptor) -> str:
        head = [
            ('description', self._opt(desc.description)),
            ('source_name', self._opt(desc.source_name)),
        ]
        if not desc.deferred:
            fields_src = self._block([self._input_entry(f) for f in desc.fields], 1)
            return f"{binding}: Final = " + self._call('input_object_type', [repr(desc.name)], head + [('fields', fields_src)])

        builder = f"_build_{binding}"
        create = self._call('input_object_type', [repr(desc.name)], head + [('deferred', 'True')])
        attach = self._block([self._input_entry(f, self_var='t') for f in desc.fields], 1)
        return '\n'.join([
            f"def {builder}():",
            f"{_INDENT}t = {create}",
            f"{_INDENT}t.attach_fields({attach})",
            f"{_INDENT}return t",
            '',
            '',
            f"{binding}: Final = {builder}()",
        ])

    def _input_entry(self, f: d.InputFieldDescriptor, self_var: Optional[str] = None) -> str:
        return self._call('input_field', [repr(f.name), self._type(f.type, self_var)], [
            ('description', self._opt(f.description)),
            ('deprecation_reason', self._opt(f.deprecation_reason)),
        ])

    def _union(self, desc: d.UnionDescriptor) -> str:
        return self._call('union_type', [repr(desc.name), self._list(self._type(t) for t in desc.types)], [
            ('description', self._opt(desc.description)),
            ('source_name', self._opt(desc.source_name)),
        ])

    def _enum(self, desc: d.EnumTypeDescriptor) -> str:
        values = [
            self._call('enum_value', [repr(v.name), self._literal(v.value)], [
                ('description', self._opt(v.description)),
                ('deprecation_reason', self._opt(v.deprecation_reason)),
            ])
            for v in desc.values
        ]
        return self._call('enum_type', [repr(desc.name), self._block(values, 1)], [
            ('description', self._opt(desc.description)),
            ('source_name', self._opt(desc.source_name)),
        ])

    # -------------------------------------------------------- expressions

    def _type(self, t: d.SchemaType, self_var: Optional[str] = None) -> str:
        if isinstance(t, d.Scalar):
            if t not in _SCALARS:
                raise InvalidUsageError(f"Unknown scalar {t.name}")
            return _SCALARS[t]
        if isinstance(t, d.ListOf):
            return f"list_of({self._type(t.of_type, self_var)})"
        if isinstance(t, d.NonNull):
            return f"non_null({self._type(t.of_type, self_var)})"
        if isinstance(t, d.InputRef) and t.target is not None:
            if self_var is None:
                raise InvalidUsageError(f"Self reference to {t.name} outside its deferred input type")
            return f"self_ref({self_var})"
        if isinstance(t, d.EnumRef):
            return f"enum_ref({t.name!r})"
        if isinstance(t, d.ObjectRef):
            return f"object_ref({t.name!r})"
        if isinstance(t, d.InputRef):
            return f"input_ref({t.name!r})"
        if isinstance(t, d.UnionRef):
            return f"union_ref({t.name!r})"
        raise InvalidUsageError(f"Cannot emit schema type {t!r}")

    def _accessor(self, accessor: Any) -> Optional[str]:
        if accessor is None:
            return None
        if isinstance(accessor, RegistryDispatch):
            return f"RegistryDispatch({accessor.key!r})"
        if isinstance(accessor, FieldAccessor):
            args = [repr(accessor.wire_name), repr(accessor.attribute), repr(accessor.owner)]
            kwargs = []
            for f in fields(accessor)[3:]:
                value = getattr(accessor, f.name)
                if f.default is not MISSING and value == f.default:
                    continue
                kwargs.append((f.name, self._literal(value)))
            return self._call('FieldAccessor', args, kwargs)
        raise InvalidUsageError(f"Cannot emit resolver {accessor!r}; only generated accessors are supported")

    def _literal(self, value: Any) -> str:
        if isinstance(value, ValueKind):
            return f"ValueKind.{value.name}"
        if isinstance(value, Enum):
            return f"{self._host_path(type(value))}.{value.name}"
        if isinstance(value, type):
            return self._host_path(value)
        if isinstance(value, tuple):
            inner = ', '.join(self._literal(v) for v in value)
            return f"({inner},)" if len(value) == 1 else f"({inner})"
        if value is None or isinstance(value, (str, int, float, bool)):
            return repr(value)
        raise InvalidUsageError(f"Cannot emit literal {value!r}")

    def _host_path(self, host: type) -> str:
        module = host.__module__
        if module == '__main__' or '<locals>' in host.__qualname__:
            raise InvalidUsageError(f"Host type {host.__qualname__} is not importable from generated code")
        self._imports.add(module)
        return f"{module}.{host.__qualname__}"

    # ------------------------------------------------------------- layout

    @staticmethod
    def _opt(value: Optional[str]) -> Optional[str]:
        return None if value is None else repr(value)

    @staticmethod
    def _list(items: Iterable[str]) -> str:
        return '[' + ', '.join(items) + ']'

    @staticmethod
    def _block(items: List[str], depth: int) -> str:
        if not items:
            return '[]'
        pad = _INDENT * (depth + 1)
        return '[\n' + ''.join(f"{pad}{item},\n" for item in items) + _INDENT * depth + ']'

    @staticmethod
    def _call(fn: str, args: List[str], kwargs: Iterable[Tuple[str, Optional[str]]] = ()) -> str:
        parts = list(args) + [f"{k}={v}" for k, v in kwargs if v is not None]
        return f"{fn}({', '.join(parts)})"
