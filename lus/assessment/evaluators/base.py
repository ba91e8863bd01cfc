"""
Base class for the strategies that score a submitted answer against a
reference answer.
"""

from abc import ABCMeta, abstractmethod

from django.utils.timezone import now


class EvaluationStrategy(metaclass=ABCMeta):
    """
    Abstract base class for an answer evaluation strategy.

    `evaluate()` returns a dict with the keys:
        * score (float): 0 - 100
        * confidence (float): 0.0 - 1.0, how much the score can be trusted
        * details (dict): JSON-serializable, strategy-specific diagnostics
        * timestamp (datetime): when the evaluation was made

    Strategies that can also score the recorded audio set `supports_audio`
    and override `evaluate_recording()`. The flag is read once, when the
    strategy is registered.
    """

    supports_audio = False

    def __init__(self):
        self.last_confidence = 0.0

    @abstractmethod
    def evaluate(self, response, correct_answer):
        """
        Score a submitted answer.

        Args:
            response (str): The student's answer.
            correct_answer (str): The question's reference answer.

        Returns:
            dict (see the class docstring)

        """

    @abstractmethod
    def get_name(self):
        """Human readable name of the strategy."""

    @abstractmethod
    def get_description(self):
        """Human readable description of the strategy."""

    @abstractmethod
    def is_suitable_for(self, response, correct_answer):
        """
        Whether this strategy gives meaningful scores for the given pair.
        """

    def get_confidence(self):
        """Confidence of the most recent evaluation."""
        return self.last_confidence

    def evaluate_recording(self, audio_path, passage_text):  # pylint: disable=unused-argument
        """
        Score the recorded reading of a passage.

        Only called for strategies with `supports_audio` set.

        Args:
            audio_path (str): Location of the audio file.
            passage_text (str): The full text that was read aloud.

        Returns:
            dict in the same format as `evaluate()`, or None if no
            evaluation could be produced.

        """
        return None

    def format_result(self, score, confidence, details=None, **extra):
        """
        Build the result dict returned by `evaluate()` and remember the
        confidence.
        """
        self.last_confidence = confidence
        result = {
            'score': score,
            'confidence': confidence,
            'details': details or {},
            'timestamp': now(),
        }
        result.update(extra)
        return result
