"""Configure Django for the Todo Gateway

Importing this module sets up Django with the gateway's settings unless
DJANGO_SETTINGS_MODULE says otherwise.
"""

import os

import django

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "todo_gateway.django_settings")
django.setup()
