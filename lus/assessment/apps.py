"""
lus.assessment Django application initialization.
"""

from django.apps import AppConfig


class LusAssessmentConfig(AppConfig):
    """
    Configuration for the lus.assessment Django application.
    """

    name = "lus.assessment"
    label = "assessment"
    verbose_name = "Reading assessment"
