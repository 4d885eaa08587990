"""helpers for writing tests"""

# pylint: disable=missing-docstring
from __future__ import annotations

import copy
import io
import json
from dataclasses import dataclass, field
from typing import Any

from django.test.client import Client
from graphql import GraphQLResolveInfo, graphql_sync
from requests import Response, Session

from todo_gateway.prisma import load_remote_schema
from todo_gateway.settings import DEFAULT_PRISMA_TYPE_DEFS

ENDPOINT = "https://prisma.invalid/todo-user/todo-graphql/dev"
SECRET = "9R37avfvQx8d-not-real"

TODOES: list[dict[str, Any]] = [
    {
        "id": "cjo7mqz2f00010a36b4xtxmkt",
        "text": "Buy milk",
        "done": False,
        "createdAt": "2025-10-08T09:12:44.000Z",
        "updatedAt": "2025-10-08T09:12:44.000Z",
    },
    {
        "id": "cjo7mr5jr00030a36qz4lfb3d",
        "text": "Walk the dog",
        "done": True,
        "createdAt": "2025-10-08T09:13:02.000Z",
        "updatedAt": "2025-10-09T17:40:10.000Z",
    },
    {
        "id": "cjo7mrc8q00050a36u7o9t2ws",
        "text": "Call the plumber",
        "done": False,
        "createdAt": "2025-10-09T08:01:31.000Z",
        "updatedAt": "2025-10-09T08:01:31.000Z",
    },
]


def response(status_code: int, content: bytes = b"", url: str = ENDPOINT) -> Response:
    http_response = Response()
    http_response.status_code = status_code
    http_response.raw = io.BytesIO(content)
    http_response.url = url

    return http_response


def json_response(body: Any, status_code: int = 200) -> Response:
    return response(status_code, json.dumps(body).encode("utf-8"))


class FakeSession(Session):
    """requests.Session talking to a FakePrisma instead of the network"""

    def __init__(self, service: FakePrisma) -> None:
        super().__init__()
        self.service = service

    def request(  # type: ignore[override]  # pylint: disable=arguments-differ
        self, method: str, url: str, *args: Any, **kwargs: Any
    ) -> Response:
        return self.service.respond(method, url, **kwargs)


@dataclass
class FakePrisma:
    """In-memory stand-in for the remote Prisma service

    Executes forwarded queries against the generated type definitions.
    """

    todoes: list[dict[str, Any]] = field(default_factory=lambda: copy.deepcopy(TODOES))
    errors: list[dict[str, Any]] | None = None
    status_code: int = 200
    content: bytes | None = None
    requests: list[dict[str, Any]] = field(default_factory=list)
    sessions: list[FakeSession] = field(default_factory=list)
    todoes_args: list[dict[str, Any]] = field(default_factory=list)

    def new_session(self) -> FakeSession:
        session = FakeSession(self)
        self.sessions.append(session)

        return session

    def respond(self, method: str, url: str, **kwargs: Any) -> Response:
        self.requests.append({"method": method, "url": url, **kwargs})

        if self.content is not None:
            return response(self.status_code, self.content)

        if self.status_code != 200:
            return response(self.status_code, b"Internal Server Error")

        if self.errors:
            return json_response({"data": None, "errors": self.errors})

        payload = kwargs["json"]
        result = graphql_sync(
            load_remote_schema(DEFAULT_PRISMA_TYPE_DEFS),
            payload["query"],
            root_value=self.root_value(),
            variable_values=payload.get("variables"),
        )
        return json_response(result.formatted)

    def root_value(self) -> dict[str, Any]:
        return {
            "todoes": self.resolve_todoes,
            "createTodo": self.resolve_create_todo,
        }

    def resolve_todoes(
        self, _info: GraphQLResolveInfo, **args: Any
    ) -> list[dict[str, Any]]:
        self.todoes_args.append(args)
        where = args.get("where") or {}
        todoes = [
            todo
            for todo in self.todoes
            if all(todo[key] == value for key, value in where.items() if key in todo)
            and where.get("text_contains", "") in todo["text"]
        ]
        skip = args.get("skip") or 0
        first = args.get("first")

        return todoes[skip:] if first is None else todoes[skip : skip + first]

    def resolve_create_todo(
        self, _info: GraphQLResolveInfo, data: dict[str, Any]
    ) -> dict[str, Any]:
        todo = {
            "id": f"new{len(self.todoes)}",
            "text": data["text"],
            "done": data.get("done", False),
            "createdAt": "2025-10-19T12:00:00.000Z",
            "updatedAt": "2025-10-19T12:00:00.000Z",
        }
        self.todoes.append(todo)

        return todo

    @property
    def queries(self) -> list[str]:
        return [request["json"]["query"] for request in self.requests]


def graphql(client: Client, query: str, variables: dict[str, Any] | None = None) -> Any:
    """Execute GraphQL query on the Django test client.

    Return the parsed JSON response
    """
    return post_graphql(client, query, variables).json()


def post_graphql(
    client: Client, query: str, variables: dict[str, Any] | None = None
) -> Any:
    """POST the GraphQL query to the Django test client and return the response"""
    return client.post(
        "/graphql",
        {"query": query, "variables": variables},
        content_type="application/json",
    )


def project(todo: dict[str, Any], *fields: str) -> dict[str, Any]:
    """Return the todo with only the given fields"""
    return {name: todo[name] for name in fields}
