"""
Placeholder for a model-based evaluator.

It is wired through the registry and settings like any other evaluator so
that the configuration can already name it, but it scores nothing.
"""

from django.utils.translation import gettext as _

from .base import EvaluationStrategy

NOT_IMPLEMENTED = 'not_implemented'


class AIEvaluator(EvaluationStrategy):
    """
    Always returns a zero score with zero confidence and a
    ``not_implemented`` status in the details.
    """

    supports_audio = True

    def __init__(self, service=None):
        super().__init__()
        self.service = service

    def evaluate(self, response, correct_answer):
        return self.format_result(0.0, 0.0, {'status': NOT_IMPLEMENTED})

    def evaluate_recording(self, audio_path, passage_text):
        return None

    def get_name(self):
        return _("AI")

    def get_description(self):
        return _("Model-based evaluation. Not available yet.")

    def is_suitable_for(self, response, correct_answer):
        return False
