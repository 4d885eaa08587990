"""Tests for the Todo Gateway"""

# pylint: disable=missing-class-docstring,missing-function-docstring
import logging
import unittest

logging.basicConfig(handlers=[logging.NullHandler()])


class TestCase(unittest.TestCase):
    pass
