"""
Tests for creating recordings and submitting answers.
"""

from unittest import mock

from ddt import data, ddt, unpack
from django.db import DatabaseError
from django.test import override_settings
from django.utils.timezone import now

from lus.assessment.api import recordings as recordings_api
from lus.assessment.constants import STATUS_ASSESSED, STATUS_COMPLETED, STATUS_OVERDUE, STATUS_PENDING
from lus.assessment.errors import AssessmentInternalError, AssessmentRequestError
from lus.assessment.models import Recording, Response
from lus.test_utils import CacheResetTest
from lus.tests.factories import PassageFactory, QuestionFactory, RecordingFactory


class CreateRecordingTest(CacheResetTest):
    """
    Tests for `create_recording`.
    """

    def setUp(self):
        super().setUp()
        self.passage = PassageFactory()

    def test_create(self):
        recording = recordings_api.create_recording('42', self.passage.id, 'recordings/42.webm', duration=95)

        self.assertEqual(recording['user_id'], '42')
        self.assertEqual(recording['passage_id'], self.passage.id)
        self.assertEqual(recording['audio_file_path'], 'recordings/42.webm')
        self.assertEqual(recording['duration'], 95)
        self.assertEqual(recording['status'], STATUS_PENDING)
        self.assertTrue(Recording.objects.filter(pk=recording['id']).exists())

    def test_unknown_passage(self):
        with self.assertRaises(AssessmentRequestError):
            recordings_api.create_recording('42', 9999, 'recordings/42.webm')

    def test_deleted_passage(self):
        self.passage.soft_delete()
        with self.assertRaises(AssessmentRequestError):
            recordings_api.create_recording('42', self.passage.id, 'recordings/42.webm')

    def test_negative_duration(self):
        with self.assertRaises(AssessmentRequestError):
            recordings_api.create_recording('42', self.passage.id, 'recordings/42.webm', duration=-1)
        self.assertFalse(Recording.objects.exists())

    @mock.patch.object(Recording.objects, 'create')
    def test_database_error(self, mock_create):
        mock_create.side_effect = DatabaseError("Bad things happened")
        with self.assertRaises(AssessmentInternalError):
            recordings_api.create_recording('42', self.passage.id, 'recordings/42.webm')


@ddt
class SubmitResponseTest(CacheResetTest):
    """
    Tests for `submit_response`.
    """

    def setUp(self):
        super().setUp()
        self.recording = RecordingFactory()
        self.question = QuestionFactory(passage=self.recording.passage, correct_answer="green grass", weight=2.0)

    @data(
        ("green grass", True, 100.0),
        ("  Green  GRASS ", True, 100.0),
        ("green grss", True, 100 * (1 - 1 / 11)),
        ("red", False, 100 * (1 - 9 / 11)),
    )
    @unpack
    def test_scoring(self, answer, is_correct, expected_similarity):
        response = recordings_api.submit_response(self.recording.id, self.question.id, answer)

        self.assertEqual(response['is_correct'], is_correct)
        self.assertEqual(response['score'], 2.0 if is_correct else 0)
        self.assertAlmostEqual(response['similarity'], expected_similarity)
        self.assertEqual(response['recording_id'], self.recording.id)
        self.assertEqual(response['question_id'], self.question.id)

    def test_answer_trimmed(self):
        response = recordings_api.submit_response(self.recording.id, self.question.id, "  green grass \n")
        self.assertEqual(response['user_answer'], "green grass")

    @override_settings(LUS_CORRECT_ANSWER_THRESHOLD=95)
    def test_threshold_setting(self):
        response = recordings_api.submit_response(self.recording.id, self.question.id, "green grss")
        self.assertFalse(response['is_correct'])
        self.assertEqual(response['score'], 0)

    def test_already_answered(self):
        recordings_api.submit_response(self.recording.id, self.question.id, "green grass")
        with self.assertRaises(AssessmentRequestError):
            recordings_api.submit_response(self.recording.id, self.question.id, "green")
        self.assertEqual(Response.objects.filter(recording=self.recording).count(), 1)

    def test_unknown_recording(self):
        with self.assertRaises(AssessmentRequestError):
            recordings_api.submit_response(9999, self.question.id, "green grass")

    def test_question_of_another_passage(self):
        other = QuestionFactory()
        with self.assertRaises(AssessmentRequestError):
            recordings_api.submit_response(self.recording.id, other.id, "blue sky")

    def test_inactive_question(self):
        self.question.active = False
        self.question.save()
        with self.assertRaises(AssessmentRequestError):
            recordings_api.submit_response(self.recording.id, self.question.id, "green grass")

    @mock.patch.object(Response.objects, 'create')
    def test_database_error(self, mock_create):
        mock_create.side_effect = DatabaseError("Bad things happened")
        with self.assertRaises(AssessmentInternalError):
            recordings_api.submit_response(self.recording.id, self.question.id, "green grass")


@ddt
class UpdateRecordingStatusTest(CacheResetTest):
    """
    Tests for `update_recording_status`.
    """

    @data(
        (STATUS_PENDING, STATUS_ASSESSED),
        (STATUS_PENDING, STATUS_COMPLETED),
        (STATUS_ASSESSED, STATUS_COMPLETED),
        (STATUS_OVERDUE, STATUS_COMPLETED),
    )
    @unpack
    def test_allowed(self, old_status, new_status):
        recording = RecordingFactory(status=old_status)
        before = now()

        updated = recordings_api.update_recording_status(recording.id, new_status)

        self.assertEqual(updated['status'], new_status)
        recording.refresh_from_db()
        self.assertEqual(recording.status, new_status)
        self.assertGreaterEqual(recording.modified, before)

    @data(
        (STATUS_ASSESSED, STATUS_PENDING),
        (STATUS_COMPLETED, STATUS_ASSESSED),
        (STATUS_COMPLETED, STATUS_PENDING),
        (STATUS_OVERDUE, STATUS_ASSESSED),
        (STATUS_PENDING, STATUS_PENDING),
        (STATUS_PENDING, "archived"),
    )
    @unpack
    def test_rejected(self, old_status, new_status):
        recording = RecordingFactory(status=old_status)

        with self.assertRaises(AssessmentRequestError):
            recordings_api.update_recording_status(recording.id, new_status)

        recording.refresh_from_db()
        self.assertEqual(recording.status, old_status)

    def test_unknown_recording(self):
        with self.assertRaises(AssessmentRequestError):
            recordings_api.update_recording_status(9999, STATUS_COMPLETED)
