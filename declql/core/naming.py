"""Schema naming rules: SDL type names, wire names, descriptions.

These are the shared rules every builder applies, kept apart from the generic
casing helpers in :mod:`declql.naming`.
"""
from __future__ import annotations

import re
from typing import Any, Optional

from ..declarations import Declaration, FieldDecl
from ..markers import Deprecated, GraphQLDocumentation, JsonKey
from ..naming import NameConverter
from .classifier import first_annotation, is_serializable

__all__ = [
    'graphql_type_name_for',
    'model_class_name',
    'reference_name_for',
    'wire_name_for',
    'is_exposed',
    'description_for',
    'clean_description',
    'deprecation_reason_for',
]

_DOC_COMMENT = re.compile(r'^[ \t]*(///|#)[ \t]?', re.MULTILINE)
_INPUT_SUFFIX = 'Input'


def graphql_type_name_for(name: str, *, is_input: bool, prefix: Optional[str] = None) -> str:
    """Derive the SDL-visible type name from a host class name.

    ``PrefixFoo`` -> ``_Foo``; as input ``PrefixFoo`` and ``PrefixFooInput``
    both give ``_FooInput``.
    """
    base = name[len(prefix):] if prefix and name.startswith(prefix) else name
    if is_input:
        if base.endswith(_INPUT_SUFFIX):
            base = base[:-len(_INPUT_SUFFIX)]
        base = f"{base}{_INPUT_SUFFIX}"
    return base if base.startswith('_') else f"_{base}"


def model_class_name(clazz: Declaration) -> str:
    """Host name with a private leading underscore removed, used for binding names."""
    name = clazz.name
    return name[1:] if name.startswith('_') else name


def reference_name_for(clazz: Declaration) -> str:
    """Name used when another declaration references an output type.

    A serializable class may be declared with a private leading underscore;
    its generated descriptor is bound under the public name.
    """
    name = clazz.name
    if is_serializable(clazz) and name.startswith('_'):
        return name[1:]
    return name


def wire_name_for(field: FieldDecl, name_converter: Optional[NameConverter]) -> str:
    """Wire name of a field: an explicit ``JsonKey(name=...)`` beats the naming convention."""
    name = field.name
    if name_converter is not None:
        name = name_converter.apply_naming_config(field.name) or field.name
    key = first_annotation(field, JsonKey)
    if key is not None and key.name:
        name = key.name
    return name


def is_exposed(field: FieldDecl, *, is_input: bool) -> bool:
    key = first_annotation(field, JsonKey)
    if key is None:
        return True
    if key.ignore:
        return False
    flag = key.include_from_json if is_input else key.include_to_json
    return flag is not False


def _strip_comment_markup(doc: str) -> str:
    return _DOC_COMMENT.sub('', doc).strip()


def description_for(element: Any) -> Optional[str]:
    """Explicit ``GraphQLDocumentation`` first, then the documentation comment."""
    ann = first_annotation(element, GraphQLDocumentation)
    doc = ann.description if ann is not None else None
    if doc is None:
        doc = getattr(element, 'documentation', None)
    if doc is None:
        return None
    return _strip_comment_markup(doc) or None


def clean_description(doc: Optional[str]) -> Optional[str]:
    """Single-line description: comment markers dropped, lines joined by spaces."""
    if doc is None:
        return None
    lines = (_DOC_COMMENT.sub('', line).strip() for line in doc.split('\n'))
    return ' '.join(line for line in lines if line) or None


def deprecation_reason_for(element: Any) -> Optional[str]:
    ann = first_annotation(element, Deprecated)
    if ann is None:
        return None
    return ann.message or 'Deprecated.'
