"""
The default evaluator: plain Levenshtein similarity, fully trusted.
"""

from django.utils.translation import gettext as _

from .base import EvaluationStrategy
from .similarity import similarity


class ManualEvaluator(EvaluationStrategy):
    """
    Scores an answer by its Levenshtein similarity to the reference answer
    after lower-casing and whitespace normalization. Punctuation counts.
    """

    def evaluate(self, response, correct_answer):
        return self.format_result(
            similarity(response, correct_answer),
            1.0,
            {'method': 'levenshtein'},
        )

    def get_name(self):
        return _("Manual")

    def get_description(self):
        return _("Compares answers character by character using Levenshtein distance.")

    def is_suitable_for(self, response, correct_answer):
        return True
