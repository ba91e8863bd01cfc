"""
Weighted similarity strategy built around Levenshtein distance.
"""

from difflib import SequenceMatcher

from django.conf import settings
from django.utils.translation import gettext as _

from .base import EvaluationStrategy
from .similarity import normalize_text, similarity_of_normalized


class LevenshteinStrategy(EvaluationStrategy):
    """
    Blends four sub-scores (each 0 - 100) into one score:

        * length: how close the normalized answers are in length
        * case: characters shared by the raw answers, found by repeatedly
          matching the longest common substring
        * exact: 100 if the normalized answers are identical, else 0
        * levenshtein: edit-distance similarity of the normalized answers

    Answers are normalized by lower-casing, collapsing whitespace and
    dropping punctuation.

    Confidence depends only on the normalized lengths: the configured floor
    when either answer is shorter than `min_length` or longer than
    `max_length`, otherwise scaled from the floor up to 1.0 by the ratio of
    the shorter length to the longer one.
    """

    DEFAULT_CONFIG = {
        'min_length': 3,
        'max_length': 1000,
        'min_confidence': 0.5,
        'length_weight': 0.3,
        'case_weight': 0.1,
        'exact_weight': 0.2,
        'leven_weight': 0.4,
    }

    WEIGHT_KEYS = ('length_weight', 'case_weight', 'exact_weight', 'leven_weight')

    def __init__(self, **config):
        super().__init__()
        self.config = dict(self.DEFAULT_CONFIG)
        self.config.update(getattr(settings, 'LUS_LEVENSHTEIN_CONFIG', {}))
        self.config.update(config)

    def evaluate(self, response, correct_answer):
        clean_response = normalize_text(response, strip_punctuation=True)
        clean_answer = normalize_text(correct_answer, strip_punctuation=True)

        scores = {
            'length': self._length_score(clean_response, clean_answer),
            'case': self._case_score(response, correct_answer),
            'exact': 100.0 if clean_response == clean_answer else 0.0,
            'levenshtein': similarity_of_normalized(clean_response, clean_answer),
        }
        final_score = (
            scores['length'] * self.config['length_weight'] +
            scores['case'] * self.config['case_weight'] +
            scores['exact'] * self.config['exact_weight'] +
            scores['levenshtein'] * self.config['leven_weight']
        )

        return self.format_result(
            round(final_score, 2),
            self._confidence(clean_response, clean_answer),
            {
                'scores': scores,
                'weights': {key: self.config[key] for key in self.WEIGHT_KEYS},
                'normalized': {
                    'response': clean_response,
                    'answer': clean_answer,
                },
            },
            similarity=round(scores['levenshtein'], 2),
        )

    @staticmethod
    def _length_score(response, answer):
        if not answer:
            return 100.0 if not response else 0.0
        return 100 * (1 - abs(len(response) - len(answer)) / max(len(response), len(answer)))

    @staticmethod
    def _case_score(response, answer):
        max_length = max(len(response), len(answer))
        if max_length == 0:
            return 100.0
        matcher = SequenceMatcher(None, response, answer, autojunk=False)
        matches = sum(block.size for block in matcher.get_matching_blocks())
        return 100 * matches / max_length

    def _confidence(self, response, answer):
        min_length = self.config['min_length']
        max_length = self.config['max_length']
        floor = self.config['min_confidence']

        lengths = (len(response), len(answer))
        if min(lengths) < min_length or max(lengths) > max_length:
            return floor

        length_ratio = min(lengths) / max(lengths)
        return floor + (1.0 - floor) * length_ratio

    def get_name(self):
        return _("Levenshtein Distance")

    def get_description(self):
        return _("Compares answers by Levenshtein distance combined with weighted length and overlap scores.")

    def is_suitable_for(self, response, correct_answer):
        min_length = self.config['min_length']
        max_length = self.config['max_length']
        return all(
            min_length <= len(text) <= max_length
            for text in (response, correct_answer)
        )
