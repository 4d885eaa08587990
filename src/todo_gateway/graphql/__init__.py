"""GraphQL schema for the Todo Gateway"""

from pathlib import Path

import ariadne
from graphql import GraphQLError, GraphQLSchema

from .queries import Query
from .utils import SchemaLoadError, load_type_defs, response_key_resolvers

resolvers = [Query]


def make_schema(type_defs: str) -> GraphQLSchema:
    """Bind the resolvers to the given type definitions

    Raise SchemaLoadError if the type definitions don't make a valid schema.
    """
    try:
        return ariadne.make_executable_schema(
            type_defs, *resolvers, response_key_resolvers
        )
    except (GraphQLError, TypeError, ValueError) as error:
        raise SchemaLoadError(str(error)) from error


def load_schema(path: str | Path) -> GraphQLSchema:
    """Load the type definitions at path and return the executable schema"""
    return make_schema(load_type_defs(path))
