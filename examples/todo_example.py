"""
Todo example for declql.

This example demonstrates:
- Declaring an annotated class with a resolver method
- Generating the shared part (printed to stdout)
- Executing the generated source and serving queries through graphql-core
"""

import asyncio
import logging
from dataclasses import dataclass

from graphql import graphql

from declql import (
    BuildStep,
    ClassDecl,
    DescriptorRegistry,
    FieldDecl,
    GraphQLClass,
    GraphQLResolver,
    MethodDecl,
    SchemaAssembler,
    SharedPartBuilder,
    resolver_registry,
)
from declql.declarations import BOOL, STRING, future_of, list_of, ref


TODO_ITEM = ClassDecl(
    'TodoItem',
    fields=[
        FieldDecl('text', ref(STRING)),
        FieldDecl('isComplete', ref(BOOL)),
    ],
    annotations=[GraphQLClass()],
)

QUERY = ClassDecl(
    'Query',
    methods=[MethodDecl('todos', future_of(list_of(ref(TODO_ITEM))), annotations=[GraphQLResolver()])],
    annotations=[GraphQLClass()],
)


@dataclass
class TodoItem:
    text: str
    isComplete: bool = False


async def load_todos(source, args):
    # Typed instances and raw records are both accepted by generated accessors
    return [TodoItem('Clean your room'), {'text': 'Take out the trash', 'isComplete': True}]


async def main():
    logging.basicConfig(level=logging.INFO)

    part = await SharedPartBuilder().build([TODO_ITEM, QUERY], BuildStep())
    print(part.source)

    namespace = {}
    exec(part.source, namespace)
    registry = DescriptorRegistry.from_namespace(namespace)

    resolver_registry['Query.todos'] = load_todos
    schema = SchemaAssembler(registry).build_schema('queryGraphQLType')

    result = await graphql(schema, '{ todos { text isComplete } }')
    if result.errors:
        for error in result.errors:
            print(f"Error: {error}")
    else:
        print(result.data)


if __name__ == "__main__":
    asyncio.run(main())
