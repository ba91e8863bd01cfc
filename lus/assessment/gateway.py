"""
Persistence gateway used by the assessment APIs.

The APIs only ever see plain dicts; the gateway owns the ORM queries, the
transaction boundary and the read cache.
"""

from abc import ABCMeta, abstractmethod
import logging

from django.conf import settings
from django.core.cache import cache
from django.db import DatabaseError, transaction
from django.db.models import Avg, Count
from django.utils.timezone import now

from lus.assessment.constants import ASSESSMENT_CACHE_KEY, PASSAGE_CACHE_KEY, TEXT_EVALUATION
from lus.assessment.errors import AssessmentInternalError
from lus.assessment.models import Assessment, Evaluation, Passage, Recording, Response
from lus.assessment.serializers import (
    AssessmentSerializer, EvaluationSerializer, PassageSerializer, RecordingSerializer, ScoredResponseSerializer
)

logger = logging.getLogger(__name__)  # pylint: disable=invalid-name


def _cache_timeout():
    return getattr(settings, "LUS_CACHE_TIMEOUT", 300)


class PersistenceGateway(metaclass=ABCMeta):
    """
    The storage operations the assessment orchestrator depends on.

    `transaction()` returns a context manager: entering it begins a
    transaction, leaving it normally commits and leaving it with an
    exception rolls everything written inside it back.
    """

    @abstractmethod
    def transaction(self):
        """Context manager wrapping one atomic unit of work."""

    @abstractmethod
    def get_recording(self, recording_id, for_update=False):
        """Recording dict or None. `for_update` locks the row until commit."""

    @abstractmethod
    def get_recording_responses(self, recording_id):
        """Responses of a recording joined with correct_answer and weight."""

    @abstractmethod
    def get_passage(self, passage_id):
        """Passage dict or None."""

    @abstractmethod
    def save_evaluation(self, record):
        """Store an evaluation and return its id."""

    @abstractmethod
    def save_assessment(self, record):
        """Store an assessment and return its id."""

    @abstractmethod
    def update_recording(self, recording_id, data):
        """Update recording fields (currently only `status`)."""

    @abstractmethod
    def get_evaluations_for_recording(self, recording_id):
        """All evaluation dicts of a recording, oldest first."""

    @abstractmethod
    def get_assessment(self, assessment_id):
        """Assessment dict or None."""


class DjangoPersistenceGateway(PersistenceGateway):
    """
    Persistence gateway backed by the Django ORM.

    Database errors are logged and re-raised as `AssessmentInternalError`.
    """

    def transaction(self):
        return transaction.atomic()

    def get_recording(self, recording_id, for_update=False):
        try:
            recordings = Recording.objects.filter(pk=recording_id)
            if for_update:
                recordings = recordings.select_for_update()
            recording = recordings.first()
        except DatabaseError as ex:
            msg = "An error occurred while retrieving recording {}".format(recording_id)
            logger.exception(msg)
            raise AssessmentInternalError(msg) from ex
        return RecordingSerializer(recording).data if recording is not None else None

    def get_recording_responses(self, recording_id):
        try:
            responses = list(
                Response.objects.filter(recording_id=recording_id)
                .select_related('question')
                .order_by('question_id', 'id')
            )
        except DatabaseError as ex:
            msg = "An error occurred while retrieving the responses of recording {}".format(recording_id)
            logger.exception(msg)
            raise AssessmentInternalError(msg) from ex
        return ScoredResponseSerializer(responses, many=True).data

    def get_passage(self, passage_id):
        cache_key = PASSAGE_CACHE_KEY.format(passage_id)
        passage = cache.get(cache_key)
        if passage is not None:
            return passage

        try:
            passage_model = Passage.objects.filter(pk=passage_id).first()
        except DatabaseError as ex:
            msg = "An error occurred while retrieving passage {}".format(passage_id)
            logger.exception(msg)
            raise AssessmentInternalError(msg) from ex
        if passage_model is None:
            return None

        passage = dict(PassageSerializer(passage_model).data)
        cache.set(cache_key, passage, _cache_timeout())
        return passage

    def save_evaluation(self, record):
        try:
            evaluation = Evaluation.objects.create(
                recording_id=record['recording_id'],
                response_id=record.get('response_id'),
                evaluator_type=record['evaluator_type'],
                evaluation_type=record.get('evaluation_type', TEXT_EVALUATION),
                score=record['score'],
                confidence=record['confidence'],
                details=record.get('details') or {},
            )
        except DatabaseError as ex:
            msg = "An error occurred while saving a {} evaluation for recording {}".format(
                record.get('evaluator_type'), record.get('recording_id')
            )
            logger.exception(msg)
            raise AssessmentInternalError(msg) from ex
        return evaluation.id

    def save_assessment(self, record):
        try:
            assessment = Assessment.objects.create(
                recording_id=record['recording_id'],
                total_score=record['total_score'],
                normalized_score=record['normalized_score'],
                confidence_score=record.get('confidence_score'),
                assessed_by=record.get('assessed_by') or '',
            )
        except DatabaseError as ex:
            msg = "An error occurred while saving the assessment of recording {}".format(
                record.get('recording_id')
            )
            logger.exception(msg)
            raise AssessmentInternalError(msg) from ex
        return assessment.id

    def update_recording(self, recording_id, data):
        fields = {key: data[key] for key in ('status', 'duration', 'audio_file_path') if key in data}
        if not fields:
            return False
        fields['modified'] = now()
        try:
            updated = Recording.objects.filter(pk=recording_id).update(**fields)
        except DatabaseError as ex:
            msg = "An error occurred while updating recording {}".format(recording_id)
            logger.exception(msg)
            raise AssessmentInternalError(msg) from ex
        return bool(updated)

    def get_evaluations_for_recording(self, recording_id):
        try:
            evaluations = list(Evaluation.objects.filter(recording_id=recording_id).order_by('id'))
        except DatabaseError as ex:
            msg = "An error occurred while retrieving the evaluations of recording {}".format(recording_id)
            logger.exception(msg)
            raise AssessmentInternalError(msg) from ex
        return EvaluationSerializer(evaluations, many=True).data

    def get_assessment(self, assessment_id):
        cache_key = ASSESSMENT_CACHE_KEY.format(assessment_id)
        assessment = cache.get(cache_key)
        if assessment is not None:
            return assessment

        try:
            assessment_model = (
                Assessment.objects.select_related('recording__passage').filter(pk=assessment_id).first()
            )
        except DatabaseError as ex:
            msg = "An error occurred while retrieving assessment {}".format(assessment_id)
            logger.exception(msg)
            raise AssessmentInternalError(msg) from ex
        if assessment_model is None:
            return None

        assessment = dict(AssessmentSerializer(assessment_model).data)
        cache.set(cache_key, assessment, _cache_timeout())
        return assessment

    def get_passage_stats(self, passage_id, since=None):
        """
        Recording count, average normalized score, average duration and
        number of distinct users for a passage's recordings.
        """
        recordings = Recording.objects.filter(passage_id=passage_id)
        assessments = Assessment.objects.filter(recording__passage_id=passage_id)
        if since is not None:
            recordings = recordings.filter(created__gte=since)
            assessments = assessments.filter(recording__created__gte=since)
        try:
            recording_stats = recordings.aggregate(
                recording_count=Count('id'),
                avg_duration=Avg('duration'),
                unique_users=Count('user_id', distinct=True),
            )
            score_stats = assessments.aggregate(avg_score=Avg('normalized_score'))
        except DatabaseError as ex:
            msg = "An error occurred while computing statistics for passage {}".format(passage_id)
            logger.exception(msg)
            raise AssessmentInternalError(msg) from ex
        recording_stats.update(score_stats)
        return recording_stats
