"""Command-line interface: start the Todo Gateway server

Loads the settings and schema, binds the listener and serves /graphql until
interrupted. Any failure before the server is listening is fatal.
"""

from __future__ import annotations

import argparse
import logging
import socketserver
import sys
from dataclasses import replace
from typing import Any, Sequence

from django.core.servers.basehttp import WSGIRequestHandler, WSGIServer
from django.core.wsgi import get_wsgi_application
from rich.console import Console

import todo_gateway._django_setup  # pylint: disable=unused-import
from todo_gateway.gateway import Gateway, install
from todo_gateway.graphql import SchemaLoadError
from todo_gateway.settings import Settings

logger = logging.getLogger(__name__)
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments"""
    parser = argparse.ArgumentParser(prog="todo-gateway", description=__doc__)
    parser.add_argument(
        "--host",
        default=None,
        help="Address to listen on (default: TODO_GATEWAY_HOST). Requests must use a"
        " Host in TODO_GATEWAY_ALLOWED_HOSTS",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: TODO_GATEWAY_PORT or 4000)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="INFO",
        help="Logging level",
    )

    return parser.parse_args(argv)


def make_server(host: str, port: int, app: Any) -> WSGIServer:
    """Bind a threaded WSGI server to host:port serving app

    Raise OSError if the address cannot be bound.
    """
    httpd_cls = type("WSGIServer", (socketserver.ThreadingMixIn, WSGIServer), {})
    httpd = httpd_cls((host, port), WSGIRequestHandler, ipv6=":" in host)
    httpd.daemon_threads = True
    httpd.set_app(app)

    return httpd


def main(argv: Sequence[str] | None = None, console: Console | None = None) -> int:
    """Program entry point"""
    args = parse_args(argv)
    console = console or Console()
    logging.basicConfig(level=args.log_level)

    try:
        settings = Settings.from_environ()
        if args.host:
            settings = replace(settings, HOST=args.host)
        if args.port is not None:
            settings = replace(settings, PORT=args.port)
        gateway = Gateway.from_settings(settings)
    except (SchemaLoadError, TypeError, ValueError) as error:
        logger.error("Cannot start the gateway: %s", error)
        return 1

    install(gateway)

    try:
        httpd = make_server(settings.HOST, settings.PORT, get_wsgi_application())
    except OSError as error:
        logger.error("Cannot listen on %s:%s: %s", settings.HOST, settings.PORT, error)
        return 1

    console.print(
        f"Server is running on http://{settings.HOST}:{httpd.server_port}",
        highlight=False,
    )
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        httpd.server_close()

    return 0


def run() -> None:
    """Console script entry point"""
    sys.exit(main())
