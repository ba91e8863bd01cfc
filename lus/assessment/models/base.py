"""
Django models for the reading material and the students' attempts at it:
passages, their comprehension questions, recordings and typed responses.

NOTE: If you make any edits to this file, you need to then generate a
matching migration for it using:

    ./manage.py makemigrations assessment

"""

from django.core.cache import cache
from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver
from django.utils.timezone import now
from django.utils.translation import gettext as _

from model_utils.models import TimeStampedModel

from lus.assessment.constants import (
    DEFAULT_DIFFICULTY_LEVEL, DEFAULT_TIME_LIMIT, DEFAULT_WEIGHT, MAX_DIFFICULTY_LEVEL, PASSAGE_CACHE_KEY,
    STATUS_CHOICES, STATUS_PENDING
)
from lus.assessment.values import DifficultyLevel, RecordingStatus

__all__ = ['Passage', 'Question', 'Recording', 'Response']


class PassageQuerySet(models.QuerySet):
    """ Queries over passages; `active()` leaves out soft-deleted ones. """

    def active(self):
        return self.filter(deleted_at__isnull=True)


class Passage(TimeStampedModel):
    """
    A text a student reads aloud.

    Passages are soft-deleted (``deleted_at`` is set) so that recordings
    made against them keep pointing at real rows.
    """
    title = models.CharField(max_length=255)
    content = models.TextField()
    time_limit = models.PositiveIntegerField(default=DEFAULT_TIME_LIMIT)
    difficulty_level = models.PositiveSmallIntegerField(
        default=DEFAULT_DIFFICULTY_LEVEL,
        validators=[MinValueValidator(1), MaxValueValidator(MAX_DIFFICULTY_LEVEL)],
    )
    created_by = models.CharField(max_length=40, db_index=True)
    deleted_at = models.DateTimeField(null=True, blank=True, db_index=True)

    objects = PassageQuerySet.as_manager()

    class Meta:
        app_label = "assessment"
        ordering = ['-created', '-id']

    @property
    def difficulty(self):
        return DifficultyLevel(self.difficulty_level)

    def soft_delete(self):
        self.deleted_at = now()
        self.save(update_fields=['deleted_at', 'modified'])

    def __str__(self):
        return self.title


class Question(TimeStampedModel):
    """
    A comprehension question about a passage, with the reference answer
    submitted answers are compared against.

    ``weight`` scales the question's share of the recording's assessment.
    Questions with responses are deactivated rather than deleted.
    """
    passage = models.ForeignKey(Passage, related_name='questions', on_delete=models.CASCADE)
    question_text = models.TextField()
    correct_answer = models.TextField()
    weight = models.FloatField(default=DEFAULT_WEIGHT)
    active = models.BooleanField(default=True, db_index=True)

    class Meta:
        app_label = "assessment"
        ordering = ['id']

    def clean(self):
        super().clean()
        if self.weight is None or self.weight <= 0:
            raise ValidationError({'weight': _("Question weight must be greater than zero.")})

    def __str__(self):
        return self.question_text


class Recording(TimeStampedModel):
    """
    One student's attempt at reading a passage aloud.
    """
    user_id = models.CharField(max_length=40, db_index=True)
    passage = models.ForeignKey(Passage, related_name='recordings', on_delete=models.PROTECT)
    audio_file_path = models.CharField(max_length=255, blank=True, default='')
    duration = models.PositiveIntegerField(default=0)
    status = models.CharField(
        max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True
    )

    class Meta:
        app_label = "assessment"
        ordering = ['-created', '-id']

    @property
    def lifecycle_status(self):
        return RecordingStatus(self.status)

    def __str__(self):
        return "Recording {} of passage {} by {}".format(self.pk, self.passage_id, self.user_id)


class Response(models.Model):
    """
    A typed answer to one question, given within one recording.

    ``similarity``, ``is_correct`` and ``score`` are computed once when the
    answer is submitted; later evaluations are stored as Evaluation rows.
    """
    recording = models.ForeignKey(Recording, related_name='responses', on_delete=models.CASCADE)
    question = models.ForeignKey(Question, related_name='responses', on_delete=models.PROTECT)
    user_answer = models.TextField(blank=True, default='')
    is_correct = models.BooleanField(default=False)
    score = models.FloatField(default=0)
    similarity = models.FloatField(default=0)
    created_at = models.DateTimeField(default=now, db_index=True)

    class Meta:
        app_label = "assessment"
        ordering = ['question_id', 'id']
        unique_together = ('recording', 'question')

    def __str__(self):
        return "Response {} to question {}".format(self.pk, self.question_id)


@receiver([post_save, post_delete], sender=Passage)
def clear_cached_passage(sender, instance, **kwargs):  # pylint: disable=unused-argument
    """
    Drop the cached copy of a passage whenever it is saved (including a
    soft delete) or deleted.
    """
    cache.delete(PASSAGE_CACHE_KEY.format(instance.pk))
