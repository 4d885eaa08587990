"""Django views for the Todo Gateway"""

from __future__ import annotations

from typing import Any

from django.http import HttpRequest, HttpResponse
from django.views.decorators.csrf import csrf_exempt

from todo_gateway.gateway import installed


@csrf_exempt
def graphql(request: HttpRequest) -> HttpResponse:
    """Hand the request to the installed gateway's GraphQL application"""
    environ = request_to_wsgi_environ(request)
    status = "400 Bad Request"
    headers: list[tuple[str, str]] = []

    def start_response(rstatus: str, rheaders: list[tuple[str, str]]) -> None:
        nonlocal status, headers
        status, headers = rstatus, rheaders

    response = installed().app(environ, start_response)
    status_code = int(status.split(None, 1)[0])

    return HttpResponse(response, status=status_code, headers=dict(headers))


def request_to_wsgi_environ(request: HttpRequest) -> dict[str, Any]:
    """Convert the given Django request to a WSGI environ"""
    updates = {
        "PATH_INFO": request.path,
        "wsgi.input": request,
        "wsgi.method": request.method,
        "wsgi.url_scheme": request.scheme,
        "SERVER_NAME": request.get_host(),
        "SERVER_PORT": request.get_port(),
    }
    return {**request.META, **updates}
