"""The Todo Gateway application"""

from __future__ import annotations

import logging
from functools import partial

from ariadne.wsgi import GraphQL
from django.apps import apps
from django.core.exceptions import ImproperlyConfigured
from graphql import GraphQLSchema

from todo_gateway.context import make_context
from todo_gateway.graphql import load_schema
from todo_gateway.settings import Settings

APP_LABEL = "todo_gateway"
logger = logging.getLogger(__name__)


class Gateway:
    """Holds the schema, the resolvers bound to it and the context factory

    Built once at startup. Nothing on it changes once the server is listening.
    """

    def __init__(self, settings: Settings, schema: GraphQLSchema) -> None:
        self.settings = settings
        self.schema = schema
        self.context = partial(make_context, settings=settings)
        self.app = GraphQL(schema, context_value=self.context, debug=settings.DEBUG)

    @classmethod
    def from_settings(cls: type[Gateway], settings: Settings) -> Gateway:
        """Load the schema given by settings and return a Gateway

        Raise SchemaLoadError if the schema cannot be loaded.
        """
        logger.info("Loading type definitions from %s", settings.TYPE_DEFS)

        return cls(settings, load_schema(settings.TYPE_DEFS))


def install(gateway: Gateway) -> None:
    """Make the given gateway the one serving /graphql"""
    apps.get_app_config(APP_LABEL).gateway = gateway


def installed() -> Gateway:
    """Return the gateway serving /graphql"""
    gateway: Gateway | None = apps.get_app_config(APP_LABEL).gateway

    if gateway is None:
        raise ImproperlyConfigured("No gateway installed")

    return gateway
