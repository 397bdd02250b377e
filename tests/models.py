"""Sample declarations shared by the test-suite.

A small account/search domain: an interface, an enum backed by a live Enum
class, output and input classes (one self-referential), a union, a private
serializable class and Query/Mutation roots with resolver methods.
"""
import enum

from declql.declarations import (
    BOOL,
    DATETIME,
    FLOAT,
    INT,
    STRING,
    ClassDecl,
    DeclarationIndex,
    EnumDecl,
    EnumValueDecl,
    FieldDecl,
    MethodDecl,
    ParameterDecl,
    TypeRef,
    future_of,
    list_of,
    ref,
)
from declql.markers import (
    Deprecated,
    GraphQLClass,
    GraphQLDocumentation,
    GraphQLInputClass,
    GraphQLResolver,
    GraphQLUnion,
    JsonKey,
    JsonSerializable,
)


class Status(enum.Enum):
    ACTIVE = 'active'
    SUSPENDED = 'suspended'
    CLOSED = 'closed'


STATUS = EnumDecl(
    'Status',
    [
        EnumValueDecl('ACTIVE', documentation='/// Can sign in.'),
        EnumValueDecl('SUSPENDED', documentation='/// Temporarily locked.\n/// Reviewed weekly.'),
        EnumValueDecl('CLOSED', annotations=[Deprecated()]),
        EnumValueDecl('values', is_synthetic=True),
    ],
    documentation='/// Account lifecycle state.',
    annotations=[GraphQLClass()],
    host_type=Status,
)

NODE = ClassDecl(
    'Node',
    fields=[FieldDecl('id', ref(STRING))],
    is_abstract=True,
    documentation='/// Anything addressable by id.',
    annotations=[GraphQLClass()],
)

# Unmarked base: contributes fields through the supertype chain only.
TIMESTAMPED = ClassDecl(
    'Timestamped',
    fields=[
        FieldDecl('createdAt', ref(DATETIME)),
        FieldDecl('id', ref(INT)),
    ],
)

SETTINGS = ClassDecl(
    '_Settings',
    fields=[FieldDecl('theme', ref(STRING))],
    is_abstract=True,
    annotations=[GraphQLClass(), JsonSerializable()],
)

ADDRESS = ClassDecl(
    'Address',
    fields=[
        FieldDecl('street', ref(STRING)),
        FieldDecl('zipCode', ref(STRING, nullable=True), annotations=[JsonKey(name='zip')]),
    ],
    annotations=[GraphQLClass()],
)

USER = ClassDecl(
    'User',
    fields=[
        FieldDecl('id', ref(STRING)),
        FieldDecl('fullName', ref(STRING), documentation='/// Display name.'),
        FieldDecl('age', ref(INT, nullable=True)),
        FieldDecl('score', ref(FLOAT)),
        FieldDecl('isAdmin', ref(BOOL)),
        FieldDecl('status', ref(STATUS)),
        FieldDecl('pastStatuses', list_of(ref(STATUS)), annotations=[JsonKey(include_from_json=False)]),
        FieldDecl('address', ref(ADDRESS, nullable=True)),
        FieldDecl('settings', ref(SETTINGS, nullable=True)),
        FieldDecl('tags', list_of(ref(STRING, nullable=True), nullable=True)),
        FieldDecl('password', ref(STRING), annotations=[JsonKey(include_to_json=False)]),
        FieldDecl('cache', ref(STRING), annotations=[JsonKey(ignore=True)]),
        FieldDecl('nickname', ref(STRING, nullable=True), annotations=[Deprecated('Use fullName.')]),
        FieldDecl('instances', ref(INT), is_static=True),
        FieldDecl('hashCode', ref(INT), is_synthetic=True),
    ],
    methods=[
        MethodDecl(
            'friends',
            future_of(list_of(TypeRef('User'))),
            [ParameterDecl('first', ref(INT, nullable=True))],
            documentation='/// People this user follows.',
            annotations=[GraphQLResolver()],
        ),
        MethodDecl('toJson', ref(STRING)),
        MethodDecl('create', ref(STRING), is_static=True, annotations=[GraphQLResolver()]),
    ],
    supertype=TIMESTAMPED,
    interfaces=[NODE],
    documentation='/// A registered account.',
    annotations=[GraphQLClass()],
)

POST = ClassDecl(
    'Post',
    fields=[
        FieldDecl('id', ref(STRING)),
        FieldDecl('title', ref(STRING)),
        FieldDecl('publishedAt', ref(DATETIME, nullable=True)),
    ],
    interfaces=[NODE],
    annotations=[GraphQLClass(), GraphQLDocumentation('A published article.')],
)

SEARCH_RESULT = ClassDecl(
    'SearchResult',
    annotations=[GraphQLUnion(types=[USER, ref(POST), ref(STATUS), 'Comment'])],
)

TREE_NODE = ClassDecl('TreeNode', annotations=[GraphQLInputClass()])
TREE_NODE.fields = [
    FieldDecl('label', ref(STRING)),
    FieldDecl('parent', ref(TREE_NODE, nullable=True)),
    FieldDecl('children', list_of(TypeRef('TreeNode'), nullable=True)),
]

USER_FILTER = ClassDecl(
    'UserFilterInput',
    fields=[
        FieldDecl('nameContains', ref(STRING, nullable=True)),
        FieldDecl('status', ref(STATUS, nullable=True)),
        FieldDecl('statusIn', list_of(ref(STATUS), nullable=True)),
        FieldDecl('createdAfter', ref(DATETIME, nullable=True)),
        FieldDecl('pastStatuses', list_of(ref(STATUS)), annotations=[JsonKey(include_from_json=False)]),
    ],
    annotations=[GraphQLInputClass()],
)

QUERY = ClassDecl(
    'Query',
    methods=[
        MethodDecl('me', ref(USER), annotations=[GraphQLResolver()]),
        MethodDecl(
            'user',
            ref(USER, nullable=True),
            [ParameterDecl('id', ref(STRING))],
            annotations=[GraphQLResolver()],
        ),
        MethodDecl(
            'users',
            future_of(list_of(ref(USER))),
            [ParameterDecl('filter', ref(USER_FILTER, nullable=True))],
            annotations=[GraphQLResolver()],
        ),
        MethodDecl(
            'search',
            list_of(ref(SEARCH_RESULT)),
            [ParameterDecl('term', ref(STRING))],
            annotations=[GraphQLResolver()],
        ),
        MethodDecl('nodes', list_of(ref(NODE)), annotations=[GraphQLResolver()]),
        MethodDecl(
            'depth',
            ref(INT),
            [ParameterDecl('tree', ref(TREE_NODE))],
            annotations=[GraphQLResolver()],
        ),
    ],
    annotations=[GraphQLClass()],
)

MUTATION = ClassDecl(
    'Mutation',
    methods=[
        MethodDecl(
            'setStatus',
            ref(USER),
            [ParameterDecl('id', ref(STRING)), ParameterDecl('status', ref(STATUS))],
            annotations=[GraphQLResolver()],
        ),
    ],
    annotations=[GraphQLClass()],
)

ALL = (STATUS, NODE, SETTINGS, ADDRESS, USER, POST, SEARCH_RESULT, TREE_NODE, USER_FILTER, QUERY, MUTATION)


def make_index() -> DeclarationIndex:
    return DeclarationIndex(ALL + (TIMESTAMPED,))
