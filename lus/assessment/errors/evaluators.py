"""
Errors related to evaluator configuration.
"""

from .base import AssessmentError

__all__ = [
    'EvaluatorConfigurationError',
    'UnknownEvaluator',
    'EvaluatorLoadError',
]


class EvaluatorConfigurationError(AssessmentError):
    """
    The evaluator configuration could not be used.
    Superclass for more specific errors below.
    """


class UnknownEvaluator(EvaluatorConfigurationError):
    """
    Evaluator type not found in the configuration.
    """
    def __init__(self, evaluator_type):
        msg = "Could not find evaluator \"{}\" in the configuration.".format(evaluator_type)
        super().__init__(msg)


class EvaluatorLoadError(EvaluatorConfigurationError):
    """
    Unable to load the evaluator class.
    """
    def __init__(self, evaluator_type, evaluator_path):
        msg = (
            "Could not load evaluator \"{evaluator_type}\" from \"{path}\""
        ).format(evaluator_type=evaluator_type, path=evaluator_path)
        super().__init__(msg)
