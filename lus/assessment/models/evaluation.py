"""
Django models for scoring results: one Evaluation per evaluator and response
(or per evaluator and recording audio) and the Assessment that aggregates the
primary evaluator's evaluations.
"""

from django.core.cache import cache
from django.db import models
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver
from django.utils.timezone import now

from lus.assessment.constants import ASSESSMENT_CACHE_KEY, EVALUATION_TYPE_CHOICES, TEXT_EVALUATION

from .base import Recording, Response

__all__ = ['Evaluation', 'Assessment']


class Evaluation(models.Model):
    """
    The result of one evaluator scoring one response, or the whole
    recording's audio when ``response`` is null.

    Several evaluations can exist for the same response, one per evaluator
    run. They are never deduplicated.
    """
    recording = models.ForeignKey(Recording, related_name='evaluations', on_delete=models.CASCADE)
    response = models.ForeignKey(
        Response, related_name='evaluations', null=True, blank=True, on_delete=models.CASCADE
    )
    evaluator_type = models.CharField(max_length=50, db_index=True)
    evaluation_type = models.CharField(
        max_length=10, choices=EVALUATION_TYPE_CHOICES, default=TEXT_EVALUATION
    )
    score = models.FloatField()
    confidence = models.FloatField()

    # Evaluator-specific diagnostics
    details = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(default=now, db_index=True)

    class Meta:
        app_label = "assessment"
        ordering = ['id']

    @property
    def is_audio(self):
        return self.response_id is None

    def __str__(self):
        return "Evaluation {} ({}) of recording {}".format(self.pk, self.evaluator_type, self.recording_id)


class Assessment(models.Model):
    """
    The weighted outcome of the primary evaluator for a recording.

    ``total_score`` is the weighted sum of the evaluation ratios and
    ``normalized_score`` the weighted average as a percentage. The most
    recent assessment of a recording is its final one.
    """
    recording = models.ForeignKey(Recording, related_name='assessments', on_delete=models.CASCADE)
    total_score = models.FloatField()
    normalized_score = models.FloatField()
    confidence_score = models.FloatField(null=True, blank=True)
    assessed_by = models.CharField(max_length=40, blank=True, default='', db_index=True)
    completed_at = models.DateTimeField(default=now, db_index=True)

    class Meta:
        app_label = "assessment"
        ordering = ['-completed_at', '-id']

    @classmethod
    def latest_for_recording(cls, recording_id):
        return cls.objects.filter(recording_id=recording_id).first()

    def __str__(self):
        return "Assessment {} of recording {}: {:.1f}".format(self.pk, self.recording_id, self.normalized_score)


@receiver([post_save, post_delete], sender=Assessment)
def clear_cached_assessment(sender, instance, **kwargs):  # pylint: disable=unused-argument
    """
    Drop the cached copy of an assessment when it changes or is deleted,
    including deletes cascaded from its recording.
    """
    cache.delete(ASSESSMENT_CACHE_KEY.format(instance.pk))
