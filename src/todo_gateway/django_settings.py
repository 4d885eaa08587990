"""Django settings for serving the Todo Gateway"""

import os
from typing import Mapping

from todo_gateway.utils import create_secret_key

LOCAL_HOSTS = ("localhost", "127.0.0.1", "[::1]")


def allowed_hosts(environ: Mapping[str, str]) -> list[str]:
    """Hosts the gateway answers to

    TODO_GATEWAY_ALLOWED_HOSTS (comma separated) when given, otherwise the local
    addresses plus TODO_GATEWAY_HOST.
    """
    if value := environ.get("TODO_GATEWAY_ALLOWED_HOSTS"):
        return [host.strip() for host in value.split(",") if host.strip()]

    hosts = list(LOCAL_HOSTS)
    if host := environ.get("TODO_GATEWAY_HOST"):
        host = f"[{host}]" if ":" in host else host
        if host not in hosts:
            hosts.append(host)

    return hosts


SECRET_KEY = os.environ.get("TODO_GATEWAY_SECRET_KEY") or create_secret_key().decode(
    "ascii"
)

DEBUG = False

ALLOWED_HOSTS = allowed_hosts(os.environ)

USE_TZ = True

INSTALLED_APPS = ["todo_gateway.apps.TodoGatewayConfig"]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "todo_gateway.urls"
