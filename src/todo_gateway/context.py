"""Per-request GraphQL context"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Self

from todo_gateway.prisma import Prisma
from todo_gateway.settings import Settings
from todo_gateway.utils import headers_from_environ


@dataclass(frozen=True, slots=True)
class RequestInfo:
    """The parts of the inbound HTTP request resolvers may use"""

    method: str
    path: str
    headers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_environ(cls: type[Self], environ: dict[str, Any]) -> Self:
        """Extract the request info from a WSGI environ"""
        return cls(
            method=environ.get("REQUEST_METHOD", "GET"),
            path=environ.get("PATH_INFO", "/"),
            headers=headers_from_environ(environ),
        )


@dataclass(frozen=True, slots=True)
class RequestContext:
    """Context handed to every resolver of a request"""

    request: RequestInfo
    db: Prisma


def make_context(
    environ: dict[str, Any], _data: Any = None, *, settings: Settings
) -> RequestContext:
    """Create the context for the given request

    Called once per request. Every context gets its own Prisma binding.
    """
    return RequestContext(
        request=RequestInfo.from_environ(environ), db=Prisma.from_settings(settings)
    )
