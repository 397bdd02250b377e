from declql.core import descriptors as d
from declql.core.classifier import (
    TypeKind,
    classify,
    is_interface_kind,
    is_marked_output_type,
    is_object_supertype,
    is_self_or_list_of_self,
    is_self_type,
    iter_supertypes,
    iterable_element_type,
    primitive_scalar,
)
from declql.declarations import (
    DATETIME,
    INT,
    OBJECT,
    SET,
    STRING,
    ClassDecl,
    TypeRef,
    list_of,
    ref,
)
from declql.markers import GraphQLClass

from tests.models import (
    ADDRESS,
    NODE,
    POST,
    SEARCH_RESULT,
    SETTINGS,
    STATUS,
    TIMESTAMPED,
    TREE_NODE,
    USER,
    USER_FILTER,
)


def test_classify_covers_every_kind():
    assert classify(ref(STRING)) is TypeKind.SCALAR
    assert classify(list_of(ref(INT))) is TypeKind.LIST
    assert classify(ref(STATUS)) is TypeKind.ENUM
    assert classify(ref(USER)) is TypeKind.OBJECT
    assert classify(ref(TREE_NODE)) is TypeKind.INPUT
    assert classify(ref(SEARCH_RESULT)) is TypeKind.UNION
    assert classify(ref(TIMESTAMPED)) is TypeKind.UNKNOWN


def test_unresolved_reference_has_insufficient_information():
    forward = TypeRef('User')
    assert classify(forward) is TypeKind.UNKNOWN
    assert primitive_scalar(forward) is None
    assert iterable_element_type(forward) is None
    assert not is_marked_output_type(forward)


def test_datetime_subclass_is_date_scalar():
    instant = ClassDecl('Instant', supertype=DATETIME)
    assert primitive_scalar(ref(instant)) == d.DATE
    assert primitive_scalar(ref(DATETIME)) == d.DATE


def test_set_is_iterable_and_exposes_element():
    tags = ref(SET, ref(STRING))
    assert classify(tags) is TypeKind.LIST
    assert iterable_element_type(tags).declaration is STRING
    # bare iterable without a type argument
    assert iterable_element_type(ref(SET)) is None


def test_supertype_walk_stops_before_root():
    chain = list(iter_supertypes(USER))
    assert chain == [USER, TIMESTAMPED]
    assert is_object_supertype(OBJECT)
    assert not is_object_supertype(USER)


def test_output_marker_is_inherited():
    admin = ClassDecl('Admin', supertype=USER)
    assert is_marked_output_type(admin)
    assert classify(ref(admin)) is TypeKind.OBJECT


def test_self_type_detection():
    assert is_self_type(ref(TREE_NODE), TREE_NODE)
    assert is_self_type(TypeRef('TreeNode'), TREE_NODE)
    assert not is_self_type(ref(USER), TREE_NODE)
    assert is_self_or_list_of_self(list_of(TypeRef('TreeNode')), TREE_NODE)
    assert not is_self_or_list_of_self(list_of(ref(STRING)), TREE_NODE)
    # only one level of nesting counts
    assert not is_self_or_list_of_self(list_of(list_of(ref(TREE_NODE))), TREE_NODE)


def test_interface_kind_excludes_serializable_abstract_classes():
    assert is_interface_kind(NODE)
    assert not is_interface_kind(SETTINGS)
    assert not is_interface_kind(USER)


def test_marker_presence_without_chain_for_input():
    sub = ClassDecl('SpecialFilter', supertype=USER_FILTER)
    assert classify(ref(sub)) is TypeKind.UNKNOWN
    tagged = ClassDecl('Tagged', annotations=[GraphQLClass()])
    assert classify(ref(tagged)) is TypeKind.OBJECT
    assert classify(ref(ADDRESS)) is TypeKind.OBJECT
    assert classify(ref(POST)) is TypeKind.OBJECT
