import logging

import pytest

from declql.config import GeneratorOptions
from declql.core import descriptors as d
from declql.declarations import STRING, ClassDecl, FieldDecl, TypeRef, ref
from declql.errors import EmptyUnionError, InvalidUsageError, TypeInferenceError
from declql.generators import (
    BuildStep,
    Generator,
    GraphQLGenerator,
    GraphQLInputGenerator,
    GraphQLUnionGenerator,
    SharedPartBuilder,
)
from declql.markers import GraphQLClass, GraphQLInputClass, GraphQLUnion
from declql.registry import DescriptorRegistry

from tests.models import ALL, SEARCH_RESULT, SETTINGS, STATUS, TREE_NODE, USER, make_index

EXPECTED_BINDINGS = [
    'statusGraphQLType',
    'nodeGraphQLType',
    'settingsGraphQLType',
    'addressGraphQLType',
    'userGraphQLType',
    'postGraphQLType',
    'searchResultGraphQLType',
    'treeNodeInputGraphQLType',
    'userFilterInputInputGraphQLType',
    'queryGraphQLType',
    'mutationGraphQLType',
]


@pytest.mark.asyncio
async def test_output_generator_handles_classes_and_enums(build_step):
    unit = await GraphQLGenerator().generate_for_annotated_element(USER, GraphQLClass(), build_step)
    assert unit.binding == 'userGraphQLType'
    assert isinstance(unit.descriptor, d.ObjectDescriptor)
    assert unit.generator == 'GraphQLGenerator'

    enum_unit = await GraphQLGenerator().generate_for_annotated_element(STATUS, GraphQLClass(), build_step)
    assert enum_unit.binding == 'statusGraphQLType'
    assert isinstance(enum_unit.descriptor, d.EnumTypeDescriptor)
    assert set(build_step.descriptors) == {'userGraphQLType', 'statusGraphQLType'}


@pytest.mark.asyncio
async def test_private_serializable_binding(build_step):
    unit = await GraphQLGenerator().generate_for_annotated_element(SETTINGS, GraphQLClass(), build_step)
    assert unit.binding == 'settingsGraphQLType'
    assert '# Auto-generated from [_Settings].' in unit.source


@pytest.mark.asyncio
async def test_input_and_union_generators(build_step):
    tree = await GraphQLInputGenerator().generate_for_annotated_element(TREE_NODE, GraphQLInputClass(), build_step)
    assert tree.binding == 'treeNodeInputGraphQLType'
    union = await GraphQLUnionGenerator().generate_for_annotated_element(
        SEARCH_RESULT, SEARCH_RESULT.annotations[0], build_step
    )
    assert union.binding == 'searchResultGraphQLType'
    assert isinstance(union.descriptor, d.UnionDescriptor)


@pytest.mark.asyncio
async def test_generators_reject_unsupported_elements(build_step):
    with pytest.raises(InvalidUsageError, match='only supported on classes or enums'):
        await GraphQLGenerator().generate_for_annotated_element(FieldDecl('x', ref(STRING)), GraphQLClass(), build_step)
    with pytest.raises(InvalidUsageError, match='only supported on classes'):
        await GraphQLInputGenerator().generate_for_annotated_element(STATUS, GraphQLInputClass(), build_step)
    with pytest.raises(InvalidUsageError, match='only supported on classes'):
        await GraphQLUnionGenerator().generate_for_annotated_element(STATUS, GraphQLUnion(), build_step)
    assert len(build_step.descriptors) == 0


@pytest.mark.asyncio
async def test_failed_declaration_is_not_registered(build_step):
    with pytest.raises(EmptyUnionError):
        await GraphQLUnionGenerator().generate_for_annotated_element(ClassDecl('Empty'), GraphQLUnion(), build_step)
    assert len(build_step.descriptors) == 0


@pytest.mark.asyncio
async def test_shared_part_contains_every_unit(generated_part, build_step):
    assert [u.binding for u in generated_part.units] == EXPECTED_BINDINGS
    assert generated_part.errors == []
    assert list(build_step.descriptors) == EXPECTED_BINDINGS

    source = generated_part.source
    assert source.startswith('# GENERATED CODE - DO NOT MODIFY BY HAND')
    assert '# GraphQLInputGenerator' in source
    assert '# Auto-generated union from @GraphQLUnion on SearchResult.' in source


@pytest.mark.asyncio
async def test_executed_part_matches_synthesized_descriptors(generated_part, build_step):
    namespace = {}
    exec(generated_part.source, namespace)
    executed = DescriptorRegistry.from_namespace(namespace)
    assert list(executed) == EXPECTED_BINDINGS
    for binding, descriptor in build_step.descriptors.items():
        assert executed.get(binding) == descriptor


@pytest.mark.asyncio
async def test_fail_fast_raises_first_failure():
    broken = ClassDecl('Broken', fields=[FieldDecl('bad', TypeRef('Nowhere'))], annotations=[GraphQLClass()])
    step = BuildStep(index=make_index())
    with pytest.raises(TypeInferenceError):
        await SharedPartBuilder().build(ALL + (broken,), step)


@pytest.mark.asyncio
async def test_lenient_build_logs_and_continues(caplog):
    caplog.set_level(logging.ERROR, logger="declql")
    broken = ClassDecl('Broken', fields=[FieldDecl('bad', TypeRef('Nowhere'))], annotations=[GraphQLClass()])
    empty = ClassDecl('Empty', annotations=[GraphQLUnion()])
    step = BuildStep(index=make_index(), options=GeneratorOptions(fail_fast=False))

    part = await SharedPartBuilder().build(ALL + (broken, empty), step)

    assert [u.binding for u in part.units] == EXPECTED_BINDINGS
    assert [name for name, _ in part.errors] == ['Broken', 'Empty']
    assert 'brokenGraphQLType' not in step.descriptors
    assert any('GraphQLGenerator failed for Broken' in r.getMessage() for r in caplog.records)


@pytest.mark.asyncio
async def test_builder_registers_unknown_declarations_in_index():
    step = BuildStep()
    extra = ClassDecl('Extra', fields=[FieldDecl('peer', TypeRef('Peer'))], annotations=[GraphQLClass()])
    peer = ClassDecl('Peer', fields=[FieldDecl('name', ref(STRING))], annotations=[GraphQLClass()])
    part = await SharedPartBuilder().build([extra, peer], step)
    assert 'Extra' in step.index and 'Peer' in step.index
    assert part.units[0].descriptor.fields[0].type == d.NonNull(d.ObjectRef('Peer'))


@pytest.mark.asyncio
async def test_class_with_two_markers_yields_two_units():
    both = ClassDecl('Point', fields=[FieldDecl('x', ref(STRING))], annotations=[GraphQLClass(), GraphQLInputClass()])
    part = await SharedPartBuilder().build([both])
    assert [u.binding for u in part.units] == ['pointGraphQLType', 'pointInputGraphQLType']
    assert [u.descriptor.name for u in part.units] == ['_Point', '_PointInput']


def test_generator_without_build_cannot_be_created():
    class Incomplete(Generator):
        marker = GraphQLClass

    with pytest.raises(TypeError):
        Incomplete()
