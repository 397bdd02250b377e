"""declql public API.

Compile-time GraphQL schema generation from annotated declarations.

Exposes:
- Declaration model: ClassDecl, FieldDecl, MethodDecl, EnumDecl, TypeRef, DeclarationIndex
- Markers: GraphQLClass, GraphQLInputClass, GraphQLUnion, GraphQLResolver, JsonKey, ...
- Generators: GraphQLGenerator, GraphQLInputGenerator, GraphQLUnionGenerator, SharedPartBuilder
- Runtime bridge: DescriptorRegistry, SchemaAssembler (graphql-core), resolver_registry
"""
from __future__ import annotations

from .config import EnumRepresentation, GeneratorOptions
from .core.resolvers import resolver_registry
from .declarations import (
    ClassDecl,
    DeclarationIndex,
    EnumDecl,
    EnumValueDecl,
    FieldDecl,
    MethodDecl,
    ParameterDecl,
    TypeRef,
)
from .errors import (
    EmptyUnionError,
    GenerationError,
    InvalidEnumValueError,
    InvalidUsageError,
    MissingResolverError,
    TypeInferenceError,
)
from .generators import (
    BuildStep,
    GeneratedPart,
    GraphQLGenerator,
    GraphQLInputGenerator,
    GraphQLUnionGenerator,
    SharedPartBuilder,
)
from .markers import (
    Deprecated,
    GraphQLClass,
    GraphQLDocumentation,
    GraphQLInputClass,
    GraphQLResolver,
    GraphQLUnion,
    JsonKey,
    JsonSerializable,
)
from .naming import IdentityNameConverter, SnakeCaseNameConverter
from .registry import DescriptorRegistry
from .schema import SchemaAssembler

__all__ = [
    'EnumRepresentation',
    'GeneratorOptions',
    'resolver_registry',
    'ClassDecl',
    'DeclarationIndex',
    'EnumDecl',
    'EnumValueDecl',
    'FieldDecl',
    'MethodDecl',
    'ParameterDecl',
    'TypeRef',
    'EmptyUnionError',
    'GenerationError',
    'InvalidEnumValueError',
    'InvalidUsageError',
    'MissingResolverError',
    'TypeInferenceError',
    'BuildStep',
    'GeneratedPart',
    'GraphQLGenerator',
    'GraphQLInputGenerator',
    'GraphQLUnionGenerator',
    'SharedPartBuilder',
    'Deprecated',
    'GraphQLClass',
    'GraphQLDocumentation',
    'GraphQLInputClass',
    'GraphQLResolver',
    'GraphQLUnion',
    'JsonKey',
    'JsonSerializable',
    'IdentityNameConverter',
    'SnakeCaseNameConverter',
    'DescriptorRegistry',
    'SchemaAssembler',
]

__version__ = '0.1.0'
