"""pytest configuration: set up Django the same way tests/__main__.py does"""

import os

import django
from django.test.utils import setup_test_environment

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "tests.settings")
django.setup()
setup_test_environment()
