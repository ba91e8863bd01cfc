"""
Small immutable value types used by the models and APIs: recording status,
passage difficulty and percentage scores.

Invalid values raise ``ValueError``; the public APIs translate that into
``AssessmentRequestError``.
"""

from django.utils.translation import gettext as _
from django.utils.translation import gettext_lazy

from lus.assessment.constants import (
    MAX_DIFFICULTY_LEVEL, STATUS_ASSESSED, STATUS_COMPLETED, STATUS_OVERDUE, STATUS_PENDING
)


class RecordingStatus:
    """
    Lifecycle status of a recording.

    Transitions only move forward; `completed` is terminal and `overdue`
    (used for assignment tracking) can only be completed.
    """

    TRANSITIONS = {
        STATUS_PENDING: (STATUS_ASSESSED, STATUS_COMPLETED),
        STATUS_ASSESSED: (STATUS_COMPLETED,),
        STATUS_COMPLETED: (),
        STATUS_OVERDUE: (STATUS_COMPLETED,),
    }

    LABELS = {
        STATUS_PENDING: (gettext_lazy("Pending"), gettext_lazy("Waiting for assessment")),
        STATUS_ASSESSED: (gettext_lazy("Assessed"), gettext_lazy("Assessment completed")),
        STATUS_COMPLETED: (gettext_lazy("Completed"), gettext_lazy("Completed and approved")),
        STATUS_OVERDUE: (gettext_lazy("Overdue"), gettext_lazy("Submitted late")),
    }

    __slots__ = ('status',)

    def __init__(self, status):
        if status not in self.TRANSITIONS:
            raise ValueError(_("Invalid status: {status}").format(status=status))
        self.status = status

    @classmethod
    def pending(cls):
        return cls(STATUS_PENDING)

    @property
    def label(self):
        return self.LABELS[self.status][0]

    @property
    def description(self):
        return self.LABELS[self.status][1]

    @property
    def is_final(self):
        return not self.TRANSITIONS[self.status]

    def available_transitions(self):
        return list(self.TRANSITIONS[self.status])

    def can_transition_to(self, new_status):
        if isinstance(new_status, RecordingStatus):
            new_status = new_status.status
        return new_status in self.TRANSITIONS[self.status]

    def transition_to(self, new_status):
        """
        Return the status reached by moving to `new_status`.

        Raises:
            ValueError: the transition is not in the transition table.
        """
        if isinstance(new_status, RecordingStatus):
            new_status = new_status.status
        if not self.can_transition_to(new_status):
            raise ValueError(
                _("Invalid status transition from {old} to {new}").format(old=self.status, new=new_status)
            )
        return RecordingStatus(new_status)

    def __eq__(self, other):
        if isinstance(other, RecordingStatus):
            other = other.status
        return self.status == other

    def __hash__(self):
        return hash(self.status)

    def __str__(self):
        return str(self.label)

    def __repr__(self):
        return "RecordingStatus({!r})".format(self.status)


class DifficultyLevel:
    """
    Passage difficulty between 1 and MAX_DIFFICULTY_LEVEL; higher is harder.
    """

    # Upper threshold -> (label, description)
    CATEGORIES = (
        (1, gettext_lazy("Beginner"), gettext_lazy("Very simple text for beginners")),
        (5, gettext_lazy("Basic"), gettext_lazy("Simple text for early reading")),
        (10, gettext_lazy("Intermediate"), gettext_lazy("Text for intermediate readers")),
        (15, gettext_lazy("Advanced"), gettext_lazy("More challenging text")),
        (20, gettext_lazy("Expert"), gettext_lazy("Complex text for advanced readers")),
    )

    __slots__ = ('level',)

    def __init__(self, level):
        level = int(level)
        if level < 1 or level > MAX_DIFFICULTY_LEVEL:
            raise ValueError(
                _("Difficulty level must be between 1 and {max}").format(max=MAX_DIFFICULTY_LEVEL)
            )
        self.level = level

    @classmethod
    def from_category(cls, category):
        for threshold, label, _description in cls.CATEGORIES:
            if label == category:
                return cls(threshold)
        raise ValueError(_("Invalid difficulty category"))

    def _category(self):
        for category in self.CATEGORIES:
            if self.level <= category[0]:
                return category
        return self.CATEGORIES[-1]

    @property
    def category(self):
        return self._category()[1]

    @property
    def description(self):
        return self._category()[2]

    @property
    def normalized(self):
        """Difficulty scaled to 0.0 - 1.0."""
        return (self.level - 1) / (MAX_DIFFICULTY_LEVEL - 1)

    @property
    def is_beginner(self):
        return self.level <= 5

    @property
    def is_intermediate(self):
        return 5 < self.level <= 15

    @property
    def is_advanced(self):
        return self.level > 15

    def __eq__(self, other):
        return isinstance(other, DifficultyLevel) and self.level == other.level

    def __lt__(self, other):
        return self.level < other.level

    def __hash__(self):
        return hash(self.level)

    def __str__(self):
        return "{} - {}".format(self.level, self.category)


class Score:
    """
    A percentage score between 0 and 100.
    """

    MIN_SCORE = 0.0
    MAX_SCORE = 100.0

    __slots__ = ('value',)

    def __init__(self, value):
        value = float(value)
        if value < self.MIN_SCORE or value > self.MAX_SCORE:
            raise ValueError(
                _("Score must be between {min} and {max}").format(min=self.MIN_SCORE, max=self.MAX_SCORE)
            )
        self.value = value

    @classmethod
    def from_ratio(cls, correct, total):
        """
        Create a score from a count of correct answers out of `total`.
        """
        if total <= 0:
            raise ValueError(_("Total must be greater than zero"))
        if correct < 0 or correct > total:
            raise ValueError(_("Invalid number of correct answers"))
        return cls((correct / total) * 100)

    def as_ratio(self):
        return self.value / 100

    @property
    def letter_grade(self):
        for threshold, grade in ((90, 'A'), (80, 'B'), (70, 'C'), (60, 'D')):
            if self.value >= threshold:
                return grade
        return 'F'

    @property
    def is_perfect(self):
        return self.value == self.MAX_SCORE

    @property
    def is_failing(self):
        return self.value < 60

    def __eq__(self, other):
        return isinstance(other, Score) and self.value == other.value

    def __lt__(self, other):
        return self.value < other.value

    def __hash__(self):
        return hash(self.value)

    def __str__(self):
        return "{:.1f}%".format(self.value)
