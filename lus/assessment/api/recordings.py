"""
Public interface for creating recordings and submitting the answers given
within them.
"""

import logging

from django.conf import settings
from django.db import DatabaseError, IntegrityError, transaction
from django.utils.translation import gettext as _

from lus.assessment.errors import AssessmentInternalError, AssessmentRequestError
from lus.assessment.evaluators.similarity import similarity
from lus.assessment.models import Passage, Question, Recording, Response
from lus.assessment.serializers import RecordingSerializer, ResponseSerializer
from lus.assessment.values import RecordingStatus

logger = logging.getLogger(__name__)  # pylint: disable=invalid-name


def create_recording(user_id, passage_id, audio_file_path, duration=0):
    """
    Create a pending recording of a user reading a passage.

    Args:
        user_id (str): The user who made the recording.
        passage_id (int): The passage that was read. Must not be soft-deleted.
        audio_file_path (str): Where the uploaded audio is stored.
        duration (int): Length of the recording in seconds.

    Returns:
        dict: The serialized recording.

    Raises:
        AssessmentRequestError: Unknown passage or negative duration.
        AssessmentInternalError: The recording could not be saved.

    """
    if duration is None or duration < 0:
        raise AssessmentRequestError(_("Duration cannot be negative"))

    try:
        passage = Passage.objects.active().filter(pk=passage_id).first()
        if passage is None:
            raise AssessmentRequestError(_("Invalid passage ID."))
        recording = Recording.objects.create(
            user_id=user_id,
            passage=passage,
            audio_file_path=audio_file_path or '',
            duration=int(duration),
        )
    except DatabaseError as ex:
        msg = "An error occurred while saving a recording of passage {} for user {}".format(passage_id, user_id)
        logger.exception(msg)
        raise AssessmentInternalError(msg) from ex

    return RecordingSerializer(recording).data


def submit_response(recording_id, question_id, user_answer):
    """
    Store a user's answer to one question of the recording's passage.

    The answer is compared to the question's reference answer once, here:
    its similarity (0-100) is stored, it counts as correct when the
    similarity reaches LUS_CORRECT_ANSWER_THRESHOLD, and a correct answer
    scores the question's weight.

    Args:
        recording_id (int): The recording the answer belongs to.
        question_id (int): The question being answered.
        user_answer (str): The answer as typed by the user.

    Returns:
        dict: The serialized response.

    Raises:
        AssessmentRequestError: Unknown recording, inactive or unrelated
            question, or the question was already answered.
        AssessmentInternalError: The response could not be saved.

    """
    user_answer = (user_answer or '').strip()
    try:
        recording = Recording.objects.filter(pk=recording_id).first()
        if recording is None:
            raise AssessmentRequestError(_("Invalid recording ID."))

        question = Question.objects.filter(
            pk=question_id, passage_id=recording.passage_id, active=True
        ).first()
        if question is None:
            raise AssessmentRequestError(_("Invalid question ID."))

        answer_similarity = similarity(user_answer, question.correct_answer)
        is_correct = answer_similarity >= getattr(settings, "LUS_CORRECT_ANSWER_THRESHOLD", 90)

        with transaction.atomic():
            response = Response.objects.create(
                recording=recording,
                question=question,
                user_answer=user_answer,
                is_correct=is_correct,
                score=question.weight if is_correct else 0,
                similarity=answer_similarity,
            )
    except IntegrityError as ex:
        raise AssessmentRequestError(
            _("Question {question} was already answered in recording {recording}.").format(
                question=question_id, recording=recording_id
            )
        ) from ex
    except DatabaseError as ex:
        msg = "An error occurred while saving the answer to question {} in recording {}".format(
            question_id, recording_id
        )
        logger.exception(msg)
        raise AssessmentInternalError(msg) from ex

    return ResponseSerializer(response).data


def update_recording_status(recording_id, status):
    """
    Move a recording to a new status.

    Args:
        recording_id (int): The recording to update.
        status (str): The new status.

    Returns:
        dict: The serialized recording.

    Raises:
        AssessmentRequestError: Unknown recording, unknown status or a
            transition the status table does not allow.
        AssessmentInternalError: The recording could not be updated.

    """
    try:
        with transaction.atomic():
            recording = Recording.objects.select_for_update().filter(pk=recording_id).first()
            if recording is None:
                raise AssessmentRequestError(_("Invalid recording ID."))
            try:
                new_status = recording.lifecycle_status.transition_to(RecordingStatus(status))
            except ValueError as ex:
                raise AssessmentRequestError(str(ex)) from ex
            recording.status = new_status.status
            recording.save(update_fields=['status', 'modified'])
    except DatabaseError as ex:
        msg = "An error occurred while updating the status of recording {}".format(recording_id)
        logger.exception(msg)
        raise AssessmentInternalError(msg) from ex

    return RecordingSerializer(recording).data
