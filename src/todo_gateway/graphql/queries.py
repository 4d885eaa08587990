"""Resolvers for the GraphQL Query type"""

from typing import Any

from ariadne import ObjectType

from .utils import Info

Query = ObjectType("Query")

# pylint: disable=missing-function-docstring


@Query.field("todoes")
def _(_obj: Any, info: Info, **args: Any) -> Any:
    return info.context.db.query.todoes(args, info)
