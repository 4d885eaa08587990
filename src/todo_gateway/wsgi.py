"""WSGI entry point for the Todo Gateway

For serving with an external WSGI server, e.g.

    gunicorn todo_gateway.wsgi
"""

from django.core.wsgi import get_wsgi_application

import todo_gateway._django_setup  # pylint: disable=unused-import
from todo_gateway.gateway import Gateway, install
from todo_gateway.settings import Settings

install(Gateway.from_settings(Settings.from_environ()))

application = get_wsgi_application()
