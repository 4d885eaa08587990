"""AppConfig for the Todo Gateway"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.apps import AppConfig

if TYPE_CHECKING:  # pragma: no cover
    from todo_gateway.gateway import Gateway


class TodoGatewayConfig(AppConfig):
    """AppConfig for the Todo Gateway"""

    name = "todo_gateway"
    verbose_name = "Todo Gateway"

    gateway: Gateway | None = None
