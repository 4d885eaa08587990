"""graphql sub-package utilities"""

from __future__ import annotations

from pathlib import Path
from typing import Any, TypeAlias

import ariadne
from graphql import GraphQLError, GraphQLResolveInfo, GraphQLSchema

Info: TypeAlias = GraphQLResolveInfo


class SchemaLoadError(Exception):
    """The gateway's type definitions could not be loaded"""


def load_type_defs(path: str | Path) -> str:
    """Read and validate the type definitions at the given path

    Raise SchemaLoadError if the file cannot be read or is not valid SDL.
    """
    try:
        return ariadne.gql(Path(path).read_text(encoding="UTF-8"))
    except (OSError, UnicodeDecodeError, GraphQLError) as error:
        raise SchemaLoadError(f"{path}: {error}") from error


def resolve_response_key(obj: Any, info: Info, **_kwargs: Any) -> Any:
    """Resolve a field from a forwarded result

    Forwarded results are keyed by the client's response keys (aliases included), not
    by field names.
    """
    if isinstance(obj, dict):
        return obj.get(info.path.key)

    return getattr(obj, info.field_name, None)


class ResponseKeyResolvers(ariadne.SchemaBindable):
    """Bindable setting `resolve_response_key` on fields with no resolver"""

    def bind_to_schema(self, schema: GraphQLSchema) -> None:
        for name, graphql_type in schema.type_map.items():
            if name.startswith("__") or graphql_type is schema.query_type:
                continue

            for field in getattr(graphql_type, "fields", {}).values():
                if getattr(field, "resolve", False) is None:
                    field.resolve = resolve_response_key


response_key_resolvers = ResponseKeyResolvers()
