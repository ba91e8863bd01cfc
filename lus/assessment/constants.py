""" Constant strings shared by the assessment models, evaluators and APIs. """

from django.utils.translation import gettext as _

# Recording lifecycle
STATUS_PENDING = "pending"
STATUS_ASSESSED = "assessed"
STATUS_COMPLETED = "completed"
STATUS_OVERDUE = "overdue"

STATUS_CHOICES = (
    (STATUS_PENDING, "Pending"),
    (STATUS_ASSESSED, "Assessed"),
    (STATUS_COMPLETED, "Completed"),
    (STATUS_OVERDUE, "Overdue"),
)

# What an Evaluation row scored
TEXT_EVALUATION = "text"
AUDIO_EVALUATION = "audio"

EVALUATION_TYPE_CHOICES = (
    (TEXT_EVALUATION, "Text response"),
    (AUDIO_EVALUATION, "Audio recording"),
)

# Built-in evaluator type names
MANUAL_EVALUATOR = "manual"
LEVENSHTEIN_EVALUATOR = "levenshtein"
AI_EVALUATOR = "ai"

DEFAULT_TIME_LIMIT = 180
DEFAULT_DIFFICULTY_LEVEL = 1
MAX_DIFFICULTY_LEVEL = 20
DEFAULT_WEIGHT = 1.0


def evaluation_type_to_string(evaluation_type: str) -> str:
    """
    Converts the given evaluation type into its display representation.

    Args:
        evaluation_type (str): System representation of the evaluation type.

    Returns:
        (str) Human readable label.
    """
    EVALUATION_TYPE_MAP = {
        TEXT_EVALUATION: _("Text response"),
        AUDIO_EVALUATION: _("Audio recording"),
    }
    return EVALUATION_TYPE_MAP.get(evaluation_type, _("Unknown"))

# Cache keys for gateway reads, formatted with the row id
PASSAGE_CACHE_KEY = "lus.assessment.passage.{}"
ASSESSMENT_CACHE_KEY = "lus.assessment.assessment.{}"
