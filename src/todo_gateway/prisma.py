"""Prisma binding for the Todo Gateway

A binding is a client that treats a remote Prisma service's schema as its own data
source. Root fields of the remote schema are available as methods:

    >>> db = Prisma.from_settings(settings)
    >>> db.query.todoes({"where": {"done": False}}, info)
    >>> db.mutation.createTodo({"data": {"text": "milk"}}, "{ id }")
    >>> db.exists.Todo({"text_contains": "milk"})

When given the resolver's `info`, the selection set of the field being resolved is
forwarded so the remote service returns exactly what the client asked for.
"""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from functools import cache, partial
from pathlib import Path
from typing import Any, Iterable, Self

import jwt
import requests
from graphql import (
    FieldNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    GraphQLError,
    GraphQLField,
    GraphQLObjectType,
    GraphQLResolveInfo,
    GraphQLSchema,
    SelectionSetNode,
    VariableNode,
    Visitor,
    build_schema,
    get_named_type,
    get_nullable_type,
    is_leaf_type,
    is_list_type,
    is_object_type,
    parse,
    print_ast,
    validate,
    visit,
)
from yarl import URL

from todo_gateway.settings import DEFAULT_PRISMA_TYPE_DEFS, Settings
from todo_gateway.utils import request_and_raise

logger = logging.getLogger(__name__)

DEFAULT_SERVICE = "default"
DEFAULT_STAGE = "default"
TOKEN_ALGORITHM = "HS256"
OPERATIONS = ("query", "mutation")

type Selection = GraphQLResolveInfo | str | None


class PrismaError(GraphQLError):
    """The remote service rejected or failed the request"""


class RemoteSchemaError(PrismaError):
    """The remote type definitions could not be loaded"""


@cache
def load_remote_schema(path: Path) -> GraphQLSchema:
    """Read and build the remote (generated) type definitions

    Schemas are cached by path. They are immutable once built.
    """
    try:
        return build_schema(path.read_text(encoding="UTF-8"))
    except (OSError, GraphQLError, TypeError) as error:
        raise RemoteSchemaError(
            f"Cannot load remote type definitions {path}: {error}"
        ) from error


@dataclass(frozen=True, slots=True)
class PrismaConfig:
    """Configuration for a Prisma binding"""

    endpoint: URL
    type_defs: Path = DEFAULT_PRISMA_TYPE_DEFS
    secret: str | None = None
    debug: bool = False
    requests_timeout: int = 10  # seconds
    token_ttl: int = 3600  # seconds

    @classmethod
    def from_settings(cls: type[Self], settings: Settings) -> Self:
        """Return config given settings"""
        return cls(
            endpoint=URL(settings.PRISMA_ENDPOINT),
            type_defs=Path(settings.PRISMA_TYPE_DEFS),
            secret=settings.PRISMA_SECRET or None,
            debug=settings.PRISMA_DEBUG,
            requests_timeout=settings.PRISMA_TIMEOUT,
            token_ttl=settings.PRISMA_TOKEN_TTL,
        )

    @property
    def service(self) -> str:
        """The "service@stage" the endpoint points to

        Prisma endpoints look like https://host[/workspace]/service/stage
        """
        segments = [part for part in self.endpoint.parts if part not in ("", "/")]
        match segments:
            case []:
                service, stage = DEFAULT_SERVICE, DEFAULT_STAGE
            case [service]:
                stage = DEFAULT_STAGE
            case [*_, service, stage]:
                pass

        return f"{service}@{stage}"

    def token(self, now: dt.datetime | None = None) -> str | None:
        """Return a service token signed with the secret

        Return `None` when there is no secret (unauthenticated service).
        """
        if not self.secret:
            return None

        now = now or dt.datetime.now(tz=dt.UTC)
        payload = {
            "data": {"service": self.service, "roles": ["admin"]},
            "iat": now,
            "exp": now + dt.timedelta(seconds=self.token_ttl),
        }
        return jwt.encode(payload, self.secret, algorithm=TOKEN_ALGORITHM)

    def headers(self) -> dict[str, str]:
        """HTTP headers for requests to the service"""
        if token := self.token():
            return {"Authorization": f"Bearer {token}"}

        return {}


class Delegator:
    """Exposes the root fields of one operation type as callables

    Not meant to be used directly. See `Prisma.query` and `Prisma.mutation`.
    """

    def __init__(self, binding: Prisma, operation: str) -> None:
        self.binding = binding
        self.operation = operation

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_") or name not in self.binding.root_fields(
            self.operation
        ):
            raise AttributeError(repr(name))

        return partial(self.binding.delegate, self.operation, name)

    def __dir__(self) -> Iterable[str]:
        return [*self.binding.root_fields(self.operation)]


class Exists:
    """db.exists.Type(where) -> bool"""

    def __init__(self, binding: Prisma) -> None:
        self.binding = binding

    def __getattr__(self, type_name: str) -> Any:
        if type_name.startswith("_"):
            raise AttributeError(repr(type_name))

        field_name = self.binding.list_field_for(type_name)

        def exists(where: dict[str, Any] | None = None) -> bool:
            nodes = self.binding.delegate(
                "query", field_name, {"where": where or {}}, "{ id }"
            )
            return bool(nodes)

        return exists


class Prisma:
    """Interface to a remote Prisma service

    Constructing a binding does no I/O. The remote type definitions are read on first
    use and the first HTTP request happens on the first delegated call.
    """

    def __init__(self, config: PrismaConfig) -> None:
        self.config = config
        session = requests.Session()
        setattr(  # setattr confuses mypy so as not to give warning
            session,
            "request",
            partial(session.request, timeout=config.requests_timeout),
        )
        self.session = session
        self.query = Delegator(self, "query")
        self.mutation = Delegator(self, "mutation")
        self.exists = Exists(self)

    @classmethod
    def from_settings(cls: type[Prisma], settings: Settings) -> Prisma:
        """Return a Prisma binding given settings"""
        return cls(PrismaConfig.from_settings(settings))

    @property
    def schema(self) -> GraphQLSchema:
        """The remote service's schema"""
        return load_remote_schema(self.config.type_defs)

    def root_type(self, operation: str) -> GraphQLObjectType:
        """Return the remote root type for the given operation"""
        root_types = {
            "query": self.schema.query_type,
            "mutation": self.schema.mutation_type,
        }
        if (root_type := root_types.get(operation)) is None:
            raise PrismaError(f"Remote schema does not support {operation}")

        return root_type

    def root_fields(self, operation: str) -> dict[str, GraphQLField]:
        """Return the remote root fields for the given operation"""
        return self.root_type(operation).fields

    def list_field_for(self, type_name: str) -> str:
        """Return the name of the query field listing nodes of the given type"""
        for name, field in self.root_fields("query").items():
            field_type = get_nullable_type(field.type)
            if not is_list_type(field_type):
                continue
            if get_named_type(field_type).name == type_name:
                return name

        raise AttributeError(repr(type_name))

    def delegate(
        self,
        operation: str,
        field_name: str,
        args: dict[str, Any] | None = None,
        info: Selection = None,
    ) -> Any:
        """Execute the root field `field_name` on the remote service

        `info` determines the selection set:

            * the resolver's GraphQLResolveInfo: the selection of the field being
              resolved (and the fragments it uses) is forwarded
            * a string: used as-is, e.g. "{ id text }"
            * None: all scalar fields of the return type
        """
        if operation not in OPERATIONS:
            raise ValueError(operation)

        field = self.root_fields(operation).get(field_name)
        if field is None:
            raise PrismaError(f"Remote {operation} has no field {field_name!r}")

        query, variables = build_operation(operation, field_name, field, args, info)
        document = parse(query)

        if errors := validate(self.schema, document):
            raise PrismaError("; ".join(error.message for error in errors))

        logger.debug(
            "Forwarding %s %s to %s", operation, field_name, self.config.service
        )
        data = self.request(query, variables)

        if field_name not in data:
            raise self.invalid_response()

        return data[field_name]

    def request(
        self, query: str, variables: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """Send the query to the service and return the response's data

        Raise PrismaError if the service responds with errors or with something that
        is not a GraphQL result.
        """
        if self.config.debug:
            logger.info("Prisma request: %s variables=%s", query, variables)

        http_response = request_and_raise(
            self.session.post,
            self.config.endpoint,
            json={"query": query, "variables": variables or {}},
            headers=self.config.headers(),
        )

        try:
            json = http_response.json()
        except ValueError as error:
            raise self.invalid_response() from error

        if not isinstance(json, dict):
            raise self.invalid_response()

        if errors := json.get("errors"):
            raise PrismaError(
                "; ".join(error.get("message", str(error)) for error in errors),
                extensions={"remote": errors},
            )

        if not isinstance(data := json.get("data"), dict):
            raise self.invalid_response()

        return data

    def invalid_response(self) -> PrismaError:
        """The error for a response that is not a GraphQL result"""
        return PrismaError(f"Invalid response from {self.config.service}")


def build_operation(
    operation: str,
    field_name: str,
    field: GraphQLField,
    args: dict[str, Any] | None,
    info: Selection,
) -> tuple[str, dict[str, Any]]:
    """Build the query text and variables to forward the given root field"""
    args = args or {}
    definitions: list[str] = []
    arguments: list[str] = []
    variables: dict[str, Any] = {}

    for num, (name, value) in enumerate(args.items()):
        if (arg := field.args.get(name)) is None:
            raise PrismaError(f"Unknown argument {name!r} for {field_name!r}")
        variable = f"_v{num}_{name}"
        definitions.append(f"${variable}: {arg.type}")
        arguments.append(f"{name}: ${variable}")
        variables[variable] = value

    fragments: list[str] = []
    if isinstance(info, GraphQLResolveInfo):
        selection_set, fragments, client_vars = forwarded_selection(info)
        for definition in client_vars:
            definitions.append(print_ast(definition))
            name = definition.variable.name.value
            if name in info.variable_values:
                variables[name] = info.variable_values[name]
    elif isinstance(info, str):
        selection_set = info
    else:
        selection_set = default_selection(field)

    text = operation
    if definitions:
        text += f" ({', '.join(definitions)})"
    text += f" {{ {field_name}"
    if arguments:
        text += f"({', '.join(arguments)})"
    text += f" {selection_set} }}"

    return "\n".join([text, *fragments]), variables


def default_selection(field: GraphQLField) -> str:
    """Select every scalar field of the field's return type"""
    named_type = get_named_type(field.type)

    if is_leaf_type(named_type) or not is_object_type(named_type):
        return ""

    names = [
        name
        for name, subfield in named_type.fields.items()
        if is_leaf_type(get_named_type(subfield.type))
    ]
    return f"{{ {' '.join(names)} }}"


class VariableCollector(Visitor):
    """Collect the names of variables referenced in an AST"""

    def __init__(self) -> None:
        super().__init__()
        self.names: set[str] = set()

    def enter_variable(self, node: VariableNode, *_args: Any) -> None:
        """Record the variable"""
        self.names.add(node.name.value)


def forwarded_selection(info: GraphQLResolveInfo) -> tuple[str, list[str], list[Any]]:
    """Return the selection set, fragments and variables to forward for info's field

    The variables returned are the client's variable definitions referenced by the
    selection (e.g. in @include directives).
    """
    selections = [
        selection
        for node in info.field_nodes
        if node.selection_set
        for selection in node.selection_set.selections
    ]
    if not selections:
        return "", [], []

    selection_set = SelectionSetNode(selections=tuple(selections))
    used = fragments_used(selection_set, info.fragments)
    fragments = [print_ast(info.fragments[name]) for name in sorted(used)]

    collector = VariableCollector()
    visit(selection_set, collector)
    for name in used:
        visit(info.fragments[name], collector)

    client_vars = [
        definition
        for definition in info.operation.variable_definitions or ()
        if definition.variable.name.value in collector.names
    ]
    return print_ast(selection_set), fragments, client_vars


def fragments_used(
    node: SelectionSetNode | None,
    fragments: dict[str, FragmentDefinitionNode],
    seen: set[str] | None = None,
) -> set[str]:
    """Return the names of fragments spread (directly or not) in the selection set"""
    seen = set() if seen is None else seen

    if node is None:
        return seen

    for selection in node.selections:
        if isinstance(selection, FragmentSpreadNode):
            name = selection.name.value
            if name not in seen and name in fragments:
                seen.add(name)
                fragments_used(fragments[name].selection_set, fragments, seen)
        elif isinstance(selection, FieldNode):
            fragments_used(selection.selection_set, fragments, seen)
        else:  # inline fragment
            fragments_used(getattr(selection, "selection_set", None), fragments, seen)

    return seen
