"""Per-marker generators and the shared part builder.

A host pipeline discovers annotated declarations and calls
:meth:`Generator.generate_for_annotated_element` once per declaration, or hands
the whole batch to :class:`SharedPartBuilder`, which runs every generator whose
marker is present and joins the emitted units into one generated part.
"""
from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Sequence, Tuple, Type

from .config import GeneratorOptions
from .core import descriptors as d
from .core.classifier import first_annotation
from .core.context import BuildContext
from .core.enums import build_enum_descriptor
from .core.inference import Direction
from .core.synthesizer import build_class_descriptor
from .core.unions import build_union_descriptor
from .declarations import ClassDecl, Declaration, DeclarationIndex, EnumDecl
from .emitter import GeneratedUnit, SourceEmitter, part_header
from .errors import GenerationError, InvalidUsageError
from .markers import GraphQLClass, GraphQLInputClass, GraphQLUnion
from .naming import IdentityNameConverter, NameConverter
from .registry import DescriptorRegistry

__all__ = [
    'BuildStep',
    'Generator',
    'GraphQLGenerator',
    'GraphQLInputGenerator',
    'GraphQLUnionGenerator',
    'GeneratedPart',
    'SharedPartBuilder',
    'default_generators',
]

_logger = logging.getLogger("declql")


@dataclass
class BuildStep:
    """Host-supplied state for one build.

    ``descriptors`` is populated as declarations succeed; a failed declaration
    never reaches it.
    """

    index: DeclarationIndex = field(default_factory=DeclarationIndex)
    name_converter: NameConverter = field(default_factory=IdentityNameConverter)
    options: GeneratorOptions = field(default_factory=GeneratorOptions)
    descriptors: DescriptorRegistry = field(default_factory=DescriptorRegistry)

    def context_for(self, declaration: Declaration) -> BuildContext:
        return BuildContext(
            declaration,
            name_converter=self.name_converter,
            options=self.options,
            resolver=self.index,
        )


class Generator(ABC):
    """Base for generators triggered by one marker annotation type."""

    marker: Type[Any]

    @property
    def name(self) -> str:
        return type(self).__name__

    async def generate_for_annotated_element(
        self, element: Declaration, annotation: Any, build_step: BuildStep
    ) -> GeneratedUnit:
        binding, descriptor = await self.build(element, annotation, build_step)
        unit = SourceEmitter().emit(binding, descriptor, source_name=element.name, generator=self.name)
        build_step.descriptors.register(binding, descriptor)
        return unit

    @abstractmethod
    async def build(
        self, element: Declaration, annotation: Any, build_step: BuildStep
    ) -> Tuple[str, d.TypeDescriptor]:
        """Return the binding name and descriptor for ``element``."""


class GraphQLGenerator(Generator):
    """Output object types for ``@GraphQLClass`` classes, enum types for enums."""

    marker = GraphQLClass

    async def build(self, element, annotation, build_step):
        if isinstance(element, ClassDecl):
            ctx = build_step.context_for(element)
            descriptor = await build_class_descriptor(element, ctx, Direction.OUTPUT)
            return d.binding_name(ctx.model_class_name), descriptor
        if isinstance(element, EnumDecl):
            descriptor = build_enum_descriptor(element, build_step.options)
            return d.binding_name(element.name), descriptor
        raise InvalidUsageError('@GraphQLClass() is only supported on classes or enums.')


class GraphQLInputGenerator(Generator):
    marker = GraphQLInputClass

    async def build(self, element, annotation, build_step):
        if not isinstance(element, ClassDecl):
            raise InvalidUsageError('@GraphQLInputClass() is only supported on classes.')
        ctx = build_step.context_for(element)
        descriptor = await build_class_descriptor(element, ctx, Direction.INPUT)
        return d.binding_name(ctx.model_class_name, is_input=True), descriptor


class GraphQLUnionGenerator(Generator):
    marker = GraphQLUnion

    async def build(self, element, annotation, build_step):
        if not isinstance(element, ClassDecl):
            raise InvalidUsageError('@GraphQLUnion() is only supported on classes.')
        ctx = build_step.context_for(element)
        descriptor = await build_union_descriptor(element, annotation, build_step.options, ctx.cache)
        return d.binding_name(element.name), descriptor


def default_generators() -> List[Generator]:
    return [GraphQLGenerator(), GraphQLInputGenerator(), GraphQLUnionGenerator()]


@dataclass
class GeneratedPart:
    """All units generated for one compilation unit, plus per-declaration failures."""

    units: List[GeneratedUnit]
    errors: List[Tuple[str, GenerationError]] = field(default_factory=list)

    @property
    def source(self) -> str:
        imports = [module for unit in self.units for module in unit.imports]
        chunks = [part_header(imports)]
        for unit in self.units:
            chunks.append(
                '\n# ' + '*' * 74 + f"\n# {unit.generator}\n# " + '*' * 74 + '\n\n' + unit.source
            )
        return '\n'.join(chunks)


class SharedPartBuilder:
    """Runs generators over a batch of declarations and joins their output.

    Declarations are processed concurrently; each gets its own context and
    type cache. Units keep the order of ``declarations`` (and of
    ``generators`` within one declaration) so the output is deterministic.
    """

    def __init__(self, generators: Optional[Sequence[Generator]] = None):
        self.generators = list(generators) if generators is not None else default_generators()

    def _jobs(self, declarations: Iterable[Declaration]):
        for decl in declarations:
            for generator in self.generators:
                annotation = first_annotation(decl, generator.marker)
                if annotation is not None:
                    yield decl, generator, annotation

    async def build(self, declarations: Iterable[Declaration], build_step: Optional[BuildStep] = None) -> GeneratedPart:
        build_step = build_step or BuildStep()
        declarations = list(declarations)
        for decl in declarations:
            if decl.name not in build_step.index:
                build_step.index.add(decl)

        jobs = list(self._jobs(declarations))
        results = await asyncio.gather(
            *(g.generate_for_annotated_element(decl, ann, build_step) for decl, g, ann in jobs),
            return_exceptions=True,
        )

        part = GeneratedPart(units=[])
        for (decl, generator, _), result in zip(jobs, results):
            if isinstance(result, GenerationError):
                if build_step.options.fail_fast:
                    raise result
                _logger.error("%s failed for %s: %s", generator.name, decl.name, result)
                part.errors.append((decl.name, result))
                continue
            if isinstance(result, BaseException):
                raise result
            part.units.append(result)
        _logger.debug("generated %d units (%d failed)", len(part.units), len(part.errors))
        return part
