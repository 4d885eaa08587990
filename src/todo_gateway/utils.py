"""Misc utilities"""

from __future__ import annotations

from typing import Any, Callable

import requests
from cryptography.fernet import Fernet
from yarl import URL


def create_secret_key() -> bytes:
    """Return a byte string useful as a secret key"""
    return Fernet.generate_key()


def request_and_raise(
    request: Callable[..., requests.Response], url: str | URL, *args: Any, **kwargs: Any
) -> requests.Response:
    """Wrapper for resp = requests.request() ... resp.raise_for_status()"""
    response = request(str(url), *args, **kwargs)
    response.raise_for_status()

    return response


def headers_from_environ(environ: dict[str, Any]) -> dict[str, str]:
    """Return the HTTP headers of a WSGI environ as a dict of Header-Name -> value"""
    headers = {
        key[5:].replace("_", "-").title(): str(value)
        for key, value in environ.items()
        if key.startswith("HTTP_")
    }
    for key in ["CONTENT_TYPE", "CONTENT_LENGTH"]:
        if value := environ.get(key):
            headers[key.replace("_", "-").title()] = str(value)

    return headers
