"""
Signals for the assessment API.
See https://docs.djangoproject.com/en/stable/topics/signals/
"""

import django.dispatch

# Indicate that an assessment has been committed for a recording.
# Receivers get `recording_id` and `assessment_id` keyword arguments.
assessment_complete_signal = django.dispatch.Signal()
