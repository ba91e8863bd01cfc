"""
Errors raised while processing and retrieving assessments.
"""

__all__ = [
    'AssessmentError',
    'AssessmentRequestError',
    'AssessmentInternalError',
    'EvaluationError',
]


class AssessmentError(Exception):
    """ A generic error for errors that occur during assessment. """


class AssessmentRequestError(AssessmentError):
    """
    Error indicating insufficient or incorrect parameters in the request:
    an unknown recording or question, a recording without responses, or no
    registered evaluator among those requested.
    """


class AssessmentInternalError(AssessmentError):
    """
    Error indicating an internal problem, typically a database failure,
    independent of the request.
    """


class EvaluationError(AssessmentError):
    """
    An evaluation strategy failed while scoring a response.
    """
    def __init__(self, evaluator_type, response_id, message):
        self.evaluator_type = evaluator_type
        self.response_id = response_id
        super().__init__(
            "Evaluator \"{}\" failed on response {}: {}".format(evaluator_type, response_id, message)
        )
