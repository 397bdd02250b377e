"""Collect the fields and resolver methods a class exposes.

Walks from the class itself up its supertype chain, stopping at the universal
root. The most derived member of a given name wins, and the returned order
(derived-to-base, declaration order within a level) is the wire order of the
generated schema fields.
"""
from __future__ import annotations
from typing import List

from ..declarations import ClassDecl, FieldDecl, MethodDecl
from .classifier import is_marked_resolver, iter_supertypes

__all__ = ['collect_fields', 'collect_resolver_methods']


def collect_fields(clazz: ClassDecl) -> List[FieldDecl]:
    collected: List[FieldDecl] = []
    seen = set()
    for level in iter_supertypes(clazz):
        for f in level.fields:
            if f.is_static or f.is_synthetic:
                continue
            if f.name in seen:
                continue
            seen.add(f.name)
            collected.append(f)
    return collected


def collect_resolver_methods(clazz: ClassDecl) -> List[MethodDecl]:
    collected: List[MethodDecl] = []
    seen = set()
    for level in iter_supertypes(clazz):
        for m in level.methods:
            if m.is_static or not is_marked_resolver(m):
                continue
            if m.name in seen:
                continue
            seen.add(m.name)
            collected.append(m)
    return collected
