import pytest

from declql.core import descriptors as d
from declql.core.inference import Direction
from declql.core.synthesizer import build_class_descriptor, build_input_descriptor
from declql.declarations import STRING, ClassDecl, FieldDecl, ref
from declql.errors import InvalidUsageError
from declql.markers import GraphQLInputClass

from tests.models import SEARCH_RESULT, TREE_NODE, USER_FILTER


@pytest.mark.asyncio
async def test_direct_construction_without_self_reference(make_context):
    desc = await build_input_descriptor(USER_FILTER, make_context(USER_FILTER))
    assert desc.name == '_UserFilterInput'
    assert desc.source_name == 'UserFilterInput'
    assert desc.deferred is False
    assert [(f.name, f.type) for f in desc.fields] == [
        ('nameContains', d.STRING),
        ('status', d.EnumRef('Status')),
        ('statusIn', d.ListOf(d.NonNull(d.EnumRef('Status')))),
        ('createdAfter', d.DATE),
    ]


@pytest.mark.asyncio
async def test_input_fields_carry_no_resolvers(make_context):
    desc = await build_input_descriptor(USER_FILTER, make_context(USER_FILTER))
    assert all(isinstance(f, d.InputFieldDescriptor) for f in desc.fields)
    assert not any(hasattr(f, 'resolve') for f in desc.fields)


@pytest.mark.asyncio
async def test_self_referential_input_points_at_itself(make_context):
    desc = await build_class_descriptor(TREE_NODE, make_context(TREE_NODE), Direction.INPUT)
    assert desc.name == '_TreeNodeInput'
    assert desc.deferred is True
    fields = {f.name: f for f in desc.fields}
    assert fields['label'].type == d.NonNull(d.STRING)

    parent = fields['parent'].type
    assert isinstance(parent, d.InputRef)
    assert parent.target is desc

    children = fields['children'].type
    assert isinstance(children, d.ListOf)
    assert children.of_type.of_type.target is desc


@pytest.mark.asyncio
async def test_no_placeholder_leaks(make_context):
    desc = await build_input_descriptor(TREE_NODE, make_context(TREE_NODE))

    def walk(t):
        assert not isinstance(t, d.SelfRef)
        if isinstance(t, (d.ListOf, d.NonNull)):
            walk(t.of_type)

    for f in desc.fields:
        walk(f.type)


@pytest.mark.asyncio
async def test_deferred_fields_attach_once(make_context):
    desc = await build_input_descriptor(TREE_NODE, make_context(TREE_NODE))
    with pytest.raises(InvalidUsageError):
        desc.attach_fields([])
    direct = d.InputObjectDescriptor('_X')
    with pytest.raises(InvalidUsageError):
        direct.attach_fields([])


@pytest.mark.asyncio
async def test_union_field_rejected_in_input(make_context):
    bad = ClassDecl(
        'SearchFilter',
        fields=[FieldDecl('term', ref(STRING)), FieldDecl('hit', ref(SEARCH_RESULT))],
        annotations=[GraphQLInputClass()],
    )
    with pytest.raises(InvalidUsageError, match='SearchFilter.hit'):
        await build_input_descriptor(bad, make_context(bad))
