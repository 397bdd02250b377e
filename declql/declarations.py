"""Declaration model consumed by the schema compiler.

A host pipeline (source analyzer, plugin, hand-written fixture) resolves its
annotated declarations into these objects and hands them to the generators.
The core never mutates them.

Declarations compare by identity so that a host can wire cyclic graphs, e.g.
a tree node whose field references the node class itself.
"""
from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

__all__ = [
    'TypeRef',
    'FieldDecl',
    'ParameterDecl',
    'MethodDecl',
    'ClassDecl',
    'EnumValueDecl',
    'EnumDecl',
    'Declaration',
    'OBJECT',
    'STRING',
    'INT',
    'FLOAT',
    'BOOL',
    'DATETIME',
    'ITERABLE',
    'LIST',
    'SET',
    'FUTURE',
    'BUILTINS',
    'ref',
    'list_of',
    'future_of',
    'DeclarationIndex',
]


@dataclass(frozen=True)
class TypeRef:
    """A declared type as written on a field, parameter or return value.

    ``declaration`` is the resolved target. When it is ``None`` the reference
    is a forward reference by ``name`` and is resolved lazily through the
    pass's :class:`DeclarationIndex`.
    """

    name: str
    nullable: bool = False
    arguments: Tuple['TypeRef', ...] = ()
    declaration: Optional['Declaration'] = field(default=None, repr=False)

    def as_nullable(self) -> 'TypeRef':
        return replace(self, nullable=True)

    def as_non_null(self) -> 'TypeRef':
        return replace(self, nullable=False)

    def __str__(self) -> str:
        text = self.name
        if self.arguments:
            text += '[' + ', '.join(str(a) for a in self.arguments) + ']'
        return f"{text}?" if self.nullable else text


@dataclass(eq=False)
class FieldDecl:
    name: str
    type: TypeRef
    is_static: bool = False
    is_synthetic: bool = False
    documentation: Optional[str] = None
    annotations: List[Any] = field(default_factory=list)


@dataclass(eq=False)
class ParameterDecl:
    name: str
    type: TypeRef


@dataclass(eq=False)
class MethodDecl:
    name: str
    return_type: TypeRef
    parameters: List[ParameterDecl] = field(default_factory=list)
    is_static: bool = False
    documentation: Optional[str] = None
    annotations: List[Any] = field(default_factory=list)


@dataclass(eq=False)
class ClassDecl:
    """A class declaration with its members and marker annotations.

    ``supertype`` links the inheritance chain; walking stops at ``None`` or at
    :data:`OBJECT`. ``interfaces`` lists the directly implemented interface
    declarations.
    """

    name: str
    fields: List[FieldDecl] = field(default_factory=list)
    methods: List[MethodDecl] = field(default_factory=list)
    supertype: Optional['ClassDecl'] = None
    interfaces: List['ClassDecl'] = field(default_factory=list)
    is_abstract: bool = False
    documentation: Optional[str] = None
    annotations: List[Any] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"ClassDecl({self.name!r})"


@dataclass(eq=False)
class EnumValueDecl:
    name: str
    documentation: Optional[str] = None
    annotations: List[Any] = field(default_factory=list)
    # Accessors such as a generated ``values`` list are not real constants.
    is_synthetic: bool = False


@dataclass(eq=False)
class EnumDecl:
    """An enum declaration.

    ``host_type`` optionally carries the live :class:`enum.Enum` class whose
    members back the values when the runtime is strongly typed.
    """

    name: str
    values: List[EnumValueDecl] = field(default_factory=list)
    documentation: Optional[str] = None
    annotations: List[Any] = field(default_factory=list)
    host_type: Optional[type] = None

    def __repr__(self) -> str:
        return f"EnumDecl({self.name!r})"


Declaration = Union[ClassDecl, EnumDecl]

# Builtins. Assignability is decided by walking ``supertype`` chains, so a
# host's own ``DateTime`` subclass only needs ``supertype=DATETIME``.
OBJECT = ClassDecl('object')
STRING = ClassDecl('str', supertype=OBJECT)
INT = ClassDecl('int', supertype=OBJECT)
FLOAT = ClassDecl('float', supertype=OBJECT)
BOOL = ClassDecl('bool', supertype=OBJECT)
DATETIME = ClassDecl('datetime', supertype=OBJECT)
ITERABLE = ClassDecl('Iterable', supertype=OBJECT, is_abstract=True)
LIST = ClassDecl('list', supertype=ITERABLE)
SET = ClassDecl('set', supertype=ITERABLE)
FUTURE = ClassDecl('Awaitable', supertype=OBJECT, is_abstract=True)

BUILTINS: Tuple[ClassDecl, ...] = (OBJECT, STRING, INT, FLOAT, BOOL, DATETIME, ITERABLE, LIST, SET, FUTURE)


def ref(declaration: Declaration, *arguments: TypeRef, nullable: bool = False) -> TypeRef:
    """Build a resolved :class:`TypeRef` pointing at ``declaration``."""
    return TypeRef(declaration.name, nullable=nullable, arguments=tuple(arguments), declaration=declaration)


def list_of(element: TypeRef, *, nullable: bool = False) -> TypeRef:
    return ref(LIST, element, nullable=nullable)


def future_of(result: TypeRef) -> TypeRef:
    return ref(FUTURE, result)


class DeclarationIndex:
    """Name-keyed table of every declaration visible to a build.

    Acts as the resolver for forward references: :meth:`resolve` is async so a
    host can back it with a lookup that suspends (another compilation unit,
    a remote analyzer). Builtins are always present.
    """

    def __init__(self, declarations: Iterable[Declaration] = ()):
        self._by_name: Dict[str, Declaration] = {b.name: b for b in BUILTINS}
        for decl in declarations:
            self.add(decl)

    def add(self, declaration: Declaration) -> Declaration:
        self._by_name[declaration.name] = declaration
        return declaration

    def get(self, name: str) -> Optional[Declaration]:
        return self._by_name.get(name)

    async def resolve(self, name: str) -> Optional[Declaration]:
        return self._by_name.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self):
        return iter(self._by_name.values())

    def __len__(self) -> int:
        return len(self._by_name)
