"""
Create factories for passages, recordings and everything scored against them.
"""


import factory
from factory.django import DjangoModelFactory

from lus.assessment.constants import MANUAL_EVALUATOR, STATUS_PENDING
from lus.assessment.models import Assessment, Evaluation, Passage, Question, Recording, Response


class PassageFactory(DjangoModelFactory):
    """ Create mock Passage models. """
    class Meta:
        model = Passage

    title = factory.Sequence(lambda n: f'Passage {n}')  # pylint: disable=unnecessary-lambda
    content = "The sky was blue and the grass was green when Astrid walked to school."
    time_limit = 180
    difficulty_level = 1
    created_by = '1'


class QuestionFactory(DjangoModelFactory):
    """ Create mock Question models. """
    class Meta:
        model = Question

    passage = factory.SubFactory(PassageFactory)
    question_text = factory.Sequence(lambda n: f'Question {n}?')  # pylint: disable=unnecessary-lambda
    correct_answer = 'blue sky'
    weight = 1.0
    active = True


class RecordingFactory(DjangoModelFactory):
    """ Create mock Recording models. """
    class Meta:
        model = Recording

    user_id = factory.Sequence(lambda n: f'{n + 100}')  # pylint: disable=unnecessary-lambda
    passage = factory.SubFactory(PassageFactory)
    audio_file_path = factory.Sequence(lambda n: f'recordings/{n}.webm')  # pylint: disable=unnecessary-lambda
    duration = 60
    status = STATUS_PENDING


class ResponseFactory(DjangoModelFactory):
    """
    Create mock Response models.

    The question is created on the recording's passage.
    """
    class Meta:
        model = Response

    recording = factory.SubFactory(RecordingFactory)
    question = factory.SubFactory(QuestionFactory, passage=factory.SelfAttribute('..recording.passage'))
    user_answer = 'blue sky'


class EvaluationFactory(DjangoModelFactory):
    """ Create mock Evaluation models. """
    class Meta:
        model = Evaluation

    response = factory.SubFactory(ResponseFactory)
    recording = factory.SelfAttribute('response.recording')
    evaluator_type = MANUAL_EVALUATOR
    score = 100.0
    confidence = 1.0
    details = factory.LazyFunction(lambda: {'method': 'levenshtein'})


class AssessmentFactory(DjangoModelFactory):
    """ Create mock Assessment models. """
    class Meta:
        model = Assessment

    recording = factory.SubFactory(RecordingFactory)
    total_score = 1.0
    normalized_score = 100.0
    confidence_score = 1.0
    assessed_by = '1'
