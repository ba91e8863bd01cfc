"""
Serializers turning assessment models into the plain dicts passed across the
persistence gateway.
"""


from rest_framework import serializers

from lus.assessment.constants import evaluation_type_to_string
from lus.assessment.models import Assessment, Evaluation, Passage, Question, Recording, Response


__all__ = [
    'PassageSerializer',
    'QuestionSerializer',
    'RecordingSerializer',
    'ResponseSerializer',
    'ScoredResponseSerializer',
    'EvaluationSerializer',
    'AssessmentSerializer',
]


class PassageSerializer(serializers.ModelSerializer):
    """Serializer for :class:`Passage`"""

    # Django Rest Framework v3 no longer requires `PositiveIntegerField`s
    # to be positive by default, so we need to explicitly set the bounds
    # on the serializer field.
    difficulty_level = serializers.IntegerField(min_value=1, max_value=20)

    class Meta:
        model = Passage
        fields = (
            'id', 'title', 'content', 'time_limit', 'difficulty_level',
            'created_by', 'created', 'modified', 'deleted_at',
        )


class QuestionSerializer(serializers.ModelSerializer):
    """Serializer for :class:`Question`"""

    class Meta:
        model = Question
        fields = ('id', 'passage', 'question_text', 'correct_answer', 'weight', 'active')

    def validate_weight(self, value):
        """Questions must carry a positive weight."""
        if value <= 0:
            raise serializers.ValidationError("Weight must be greater than zero")
        return value


class RecordingSerializer(serializers.ModelSerializer):
    """Serializer for :class:`Recording`"""

    passage_id = serializers.IntegerField()

    class Meta:
        model = Recording
        fields = (
            'id', 'user_id', 'passage_id', 'audio_file_path', 'duration',
            'status', 'created', 'modified',
        )


class ResponseSerializer(serializers.ModelSerializer):
    """Serializer for :class:`Response`"""

    recording_id = serializers.IntegerField()
    question_id = serializers.IntegerField()

    class Meta:
        model = Response
        fields = (
            'id', 'recording_id', 'question_id', 'user_answer',
            'is_correct', 'score', 'similarity', 'created_at',
        )


class ScoredResponseSerializer(ResponseSerializer):
    """
    A response joined with what it is scored against: the question's
    text, reference answer and weight.
    """

    question_text = serializers.CharField(source='question.question_text', read_only=True)
    correct_answer = serializers.CharField(source='question.correct_answer', read_only=True)
    weight = serializers.FloatField(source='question.weight', read_only=True)

    class Meta(ResponseSerializer.Meta):
        fields = ResponseSerializer.Meta.fields + ('question_text', 'correct_answer', 'weight')


class EvaluationSerializer(serializers.ModelSerializer):
    """Serializer for :class:`Evaluation`"""

    recording_id = serializers.IntegerField()
    response_id = serializers.IntegerField(allow_null=True, required=False)
    evaluation_type_label = serializers.SerializerMethodField()

    class Meta:
        model = Evaluation
        fields = (
            'id', 'recording_id', 'response_id', 'evaluator_type', 'evaluation_type',
            'evaluation_type_label', 'score', 'confidence', 'details', 'created_at',
        )

    def get_evaluation_type_label(self, obj):
        return str(evaluation_type_to_string(obj.evaluation_type))


class AssessmentSerializer(serializers.ModelSerializer):
    """
    Serializer for :class:`Assessment`, including the passage the assessed
    recording was made against.
    """

    recording_id = serializers.IntegerField()
    passage_id = serializers.IntegerField(source='recording.passage_id', read_only=True)
    passage_title = serializers.CharField(source='recording.passage.title', read_only=True)

    class Meta:
        model = Assessment
        fields = (
            'id', 'recording_id', 'passage_id', 'passage_title', 'total_score',
            'normalized_score', 'confidence_score', 'assessed_by', 'completed_at',
        )
