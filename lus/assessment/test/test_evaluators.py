# coding=utf-8
"""
Tests for the evaluation strategies.
"""

import datetime

from ddt import data, ddt, unpack
from django.test import SimpleTestCase, override_settings
from freezegun import freeze_time

from lus.assessment.evaluators.ai import NOT_IMPLEMENTED, AIEvaluator
from lus.assessment.evaluators.base import EvaluationStrategy
from lus.assessment.evaluators.levenshtein import LevenshteinStrategy
from lus.assessment.evaluators.manual import ManualEvaluator


class ManualEvaluatorTest(SimpleTestCase):
    """
    Tests for the default evaluator.
    """

    def setUp(self):
        super().setUp()
        self.evaluator = ManualEvaluator()

    def test_exact_answer(self):
        result = self.evaluator.evaluate("  Blue  Sky ", "blue sky")
        self.assertEqual(result['score'], 100)
        self.assertEqual(result['confidence'], 1.0)
        self.assertEqual(result['details'], {'method': 'levenshtein'})

    def test_one_edit(self):
        result = self.evaluator.evaluate("green grss", "green grass")
        self.assertAlmostEqual(result['score'], 100 * (1 - 1 / 11))
        self.assertEqual(self.evaluator.get_confidence(), 1.0)

    def test_punctuation_counts(self):
        result = self.evaluator.evaluate("blue sky!", "blue sky")
        self.assertAlmostEqual(result['score'], 100 * (1 - 1 / 9))

    @freeze_time("2024-03-01 10:00:00")
    def test_timestamp(self):
        result = self.evaluator.evaluate("a", "b")
        self.assertEqual(result['timestamp'], datetime.datetime(2024, 3, 1, 10, 0, tzinfo=datetime.timezone.utc))

    def test_always_suitable(self):
        self.assertTrue(self.evaluator.is_suitable_for("", ""))
        self.assertTrue(self.evaluator.is_suitable_for("x" * 5000, "y"))

    def test_does_not_evaluate_audio(self):
        self.assertFalse(ManualEvaluator.supports_audio)
        self.assertIsNone(self.evaluator.evaluate_recording("recordings/1.webm", "text"))

    def test_name_and_description(self):
        self.assertEqual(self.evaluator.get_name(), "Manual")
        self.assertTrue(self.evaluator.get_description())


@ddt
class LevenshteinStrategyTest(SimpleTestCase):
    """
    Tests for the weighted Levenshtein strategy.
    """

    def setUp(self):
        super().setUp()
        self.strategy = LevenshteinStrategy()

    def test_exact_match(self):
        result = self.strategy.evaluate("The blue sky", "the blue sky")
        self.assertEqual(result['details']['scores']['exact'], 100.0)
        self.assertEqual(result['details']['scores']['levenshtein'], 100.0)
        self.assertEqual(result['details']['scores']['length'], 100.0)
        self.assertEqual(result['similarity'], 100.0)
        self.assertEqual(result['confidence'], 1.0)

    def test_weighted_score(self):
        result = self.strategy.evaluate("Blue sky!", "blue sky")
        scores = result['details']['scores']

        # Normalization strips case and punctuation
        self.assertEqual(result['details']['normalized'], {'response': 'blue sky', 'answer': 'blue sky'})
        self.assertEqual(scores['length'], 100.0)
        self.assertEqual(scores['exact'], 100.0)
        self.assertEqual(scores['levenshtein'], 100.0)

        # The raw answers share "lue sky": 7 of 9 characters
        self.assertAlmostEqual(scores['case'], 700 / 9)
        self.assertEqual(result['score'], 97.78)

    def test_different_answers(self):
        result = self.strategy.evaluate("abc", "xyz")
        scores = result['details']['scores']
        self.assertEqual(scores['exact'], 0.0)
        self.assertEqual(scores['levenshtein'], 0.0)
        self.assertEqual(scores['case'], 0.0)
        self.assertEqual(scores['length'], 100.0)
        self.assertEqual(result['score'], 30.0)

    def test_empty_response(self):
        result = self.strategy.evaluate("", "blue sky")
        scores = result['details']['scores']
        self.assertEqual(scores['length'], 0.0)
        self.assertEqual(scores['levenshtein'], 0.0)
        self.assertEqual(result['score'], 0.0)

    def test_weights_reported(self):
        result = self.strategy.evaluate("abc", "abc")
        self.assertEqual(result['details']['weights'], {
            'length_weight': 0.3,
            'case_weight': 0.1,
            'exact_weight': 0.2,
            'leven_weight': 0.4,
        })

    @data(
        ("ab", "abcdef"),
        ("abcdef", "ab"),
        ("", "abc"),
        ("x" * 1001, "x" * 1001),
        ("abc", "x" * 1001),
    )
    @unpack
    def test_confidence_floor(self, response, answer):
        result = self.strategy.evaluate(response, answer)
        self.assertEqual(result['confidence'], 0.5)
        self.assertEqual(self.strategy.get_confidence(), 0.5)

    def test_confidence_scales_with_length_ratio(self):
        result = self.strategy.evaluate("abcd", "abcdefgh")
        self.assertAlmostEqual(result['confidence'], 0.75)

    def test_configurable_floor(self):
        strategy = LevenshteinStrategy(min_confidence=0.2)
        self.assertEqual(strategy.evaluate("ab", "ab")['confidence'], 0.2)
        self.assertAlmostEqual(strategy.evaluate("abcd", "abcdefgh")['confidence'], 0.6)

    @override_settings(LUS_LEVENSHTEIN_CONFIG={'min_length': 1})
    def test_settings_override(self):
        strategy = LevenshteinStrategy()
        self.assertEqual(strategy.config['min_length'], 1)
        self.assertTrue(strategy.is_suitable_for("a", "b"))

    @data(
        ("abc", "abc", True),
        ("ab", "abc", False),
        ("abc", "ab", False),
        ("x" * 1000, "abc", True),
        ("x" * 1001, "abc", False),
    )
    @unpack
    def test_is_suitable_for(self, response, answer, expected):
        self.assertEqual(self.strategy.is_suitable_for(response, answer), expected)

    def test_name(self):
        self.assertEqual(self.strategy.get_name(), "Levenshtein Distance")
        self.assertTrue(self.strategy.get_description())


class AIEvaluatorTest(SimpleTestCase):
    """
    Tests for the placeholder AI evaluator.
    """

    def test_not_implemented(self):
        evaluator = AIEvaluator()
        result = evaluator.evaluate("blue sky", "blue sky")
        self.assertEqual(result['score'], 0.0)
        self.assertEqual(result['confidence'], 0.0)
        self.assertEqual(result['details'], {'status': NOT_IMPLEMENTED})
        self.assertEqual(evaluator.get_confidence(), 0.0)

    def test_never_suitable(self):
        self.assertFalse(AIEvaluator().is_suitable_for("blue sky", "blue sky"))

    def test_declares_audio_but_produces_nothing(self):
        self.assertTrue(AIEvaluator.supports_audio)
        self.assertIsNone(AIEvaluator().evaluate_recording("recordings/1.webm", "passage"))


class EvaluationStrategyTest(SimpleTestCase):
    """
    Tests for the abstract strategy base class.
    """

    def test_cannot_instantiate_incomplete_strategy(self):

        class Incomplete(EvaluationStrategy):
            def evaluate(self, response, correct_answer):
                return self.format_result(1.0, 1.0)

        with self.assertRaises(TypeError):
            Incomplete()  # pylint: disable=abstract-class-instantiated

    def test_format_result_extra_keys(self):
        result = ManualEvaluator().format_result(50.0, 0.7, similarity=42.0)
        self.assertEqual(result['similarity'], 42.0)
        self.assertEqual(result['details'], {})
