"""
lus Django application initialization.
"""

from django.apps import AppConfig


class LusConfig(AppConfig):
    """
    Configuration for the lus Django application.
    """

    name = "lus"
