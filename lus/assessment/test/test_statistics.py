"""
Tests for the passage statistics API.
"""

import datetime

from freezegun import freeze_time

from lus.assessment.api.statistics import get_passage_assessment_stats
from lus.test_utils import CacheResetTest
from lus.tests.factories import AssessmentFactory, PassageFactory, RecordingFactory


class PassageAssessmentStatsTest(CacheResetTest):
    """
    Tests for `get_passage_assessment_stats`.
    """

    def setUp(self):
        super().setUp()
        self.passage = PassageFactory()
        with freeze_time("2024-01-10"):
            first = RecordingFactory(passage=self.passage, user_id='1', duration=60)
            AssessmentFactory(recording=first, normalized_score=50.0)
        with freeze_time("2024-02-10"):
            second = RecordingFactory(passage=self.passage, user_id='2', duration=120)
            AssessmentFactory(recording=second, normalized_score=100.0)
            RecordingFactory(passage=self.passage, user_id='2', duration=90)

        other = RecordingFactory(duration=500)
        AssessmentFactory(recording=other, normalized_score=0.0)

    def test_stats(self):
        stats = get_passage_assessment_stats(self.passage.id)

        self.assertEqual(stats['recording_count'], 3)
        self.assertEqual(stats['unique_users'], 2)
        self.assertEqual(stats['avg_duration'], 90.0)
        self.assertEqual(stats['avg_score'], 75.0)

    def test_since(self):
        since = datetime.datetime(2024, 2, 1, tzinfo=datetime.timezone.utc)

        stats = get_passage_assessment_stats(self.passage.id, since=since)

        self.assertEqual(stats['recording_count'], 2)
        self.assertEqual(stats['unique_users'], 1)
        self.assertEqual(stats['avg_duration'], 105.0)
        self.assertEqual(stats['avg_score'], 100.0)

    def test_unread_passage(self):
        stats = get_passage_assessment_stats(PassageFactory().id)

        self.assertEqual(stats['recording_count'], 0)
        self.assertEqual(stats['unique_users'], 0)
        self.assertIsNone(stats['avg_duration'])
        self.assertIsNone(stats['avg_score'])
