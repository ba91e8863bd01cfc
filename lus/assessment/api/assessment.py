"""
Public interface for running evaluators over a recording's responses and
storing the resulting assessment.
"""

from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
import logging

from django.conf import settings
from django.utils.translation import gettext as _

from lus.assessment.constants import AUDIO_EVALUATION, STATUS_ASSESSED, TEXT_EVALUATION
from lus.assessment.errors import AssessmentError, AssessmentRequestError, EvaluationError
from lus.assessment.evaluators.registry import EvaluatorRegistry
from lus.assessment.gateway import DjangoPersistenceGateway
from lus.assessment.signals import assessment_complete_signal
from lus.assessment.values import RecordingStatus

logger = logging.getLogger(__name__)  # pylint: disable=invalid-name


class EvaluatorTally:
    """
    Running totals of one evaluator's response evaluations.

    Scores arrive as percentages and are weighted as ratios of 100, so
    `total_score` is in question-weight units and the normalized score is
    `total_score / total_weight * 100`.
    """

    def __init__(self):
        self.total_score = 0.0
        self.total_weight = 0.0
        self.confidence_sum = 0.0
        self.response_count = 0
        self.audio_score = None
        self.audio_confidence = None

    def add(self, score, weight, confidence):
        self.total_score += (score / 100) * weight
        self.total_weight += weight
        self.confidence_sum += confidence
        self.response_count += 1

    def add_audio(self, score, confidence):
        self.audio_score = score
        self.audio_confidence = confidence

    @property
    def normalized_score(self):
        if self.total_weight > 0:
            return (self.total_score / self.total_weight) * 100
        return 0

    @property
    def confidence_score(self):
        if self.response_count:
            return self.confidence_sum / self.response_count
        return None

    def as_dict(self):
        totals = {
            'total_score': self.total_score,
            'total_weight': self.total_weight,
            'confidence_sum': self.confidence_sum,
            'response_count': self.response_count,
            'normalized_score': self.normalized_score,
            'confidence_score': self.confidence_score,
        }
        if self.audio_score is not None:
            totals['audio_score'] = self.audio_score
            totals['audio_confidence'] = self.audio_confidence
        return totals


class AssessmentHandler:
    """
    Runs evaluators over the responses of a recording and stores the
    evaluations and the primary evaluator's assessment in one transaction.

    The evaluator registry and the persistence gateway are injected; by
    default they are built from the Django settings and the ORM.
    """

    def __init__(self, registry=None, gateway=None, audio_timeout=None):
        self.registry = registry if registry is not None else EvaluatorRegistry.from_settings()
        self.gateway = gateway if gateway is not None else DjangoPersistenceGateway()
        if audio_timeout is None:
            audio_timeout = getattr(settings, "LUS_AUDIO_EVALUATION_TIMEOUT", 30)
        self.audio_timeout = audio_timeout

    def register_evaluator(self, type_name, strategy):
        """
        Register an evaluation strategy, replacing any with the same name.
        """
        self.registry.register(type_name, strategy)

    def set_primary_evaluator(self, type_name):
        """
        Choose the evaluator whose results become the stored assessment.

        Returns:
            bool: False if `type_name` is not registered.
        """
        return self.registry.set_primary(type_name)

    def default_evaluator_types(self):
        """
        Evaluator types used when the caller does not name any: the
        LUS_ENABLED_EVALUATORS setting, or else just the primary evaluator.
        """
        enabled = getattr(settings, "LUS_ENABLED_EVALUATORS", None)
        return list(enabled) if enabled else [self.registry.primary]

    def process_assessment(self, recording_id, evaluator_types=None, assessed_by=None):
        """
        Evaluate every response of a recording and store the assessment.

        Every requested evaluator scores every response; each result is
        stored as an Evaluation. Evaluators that support audio also score
        the recording itself. The primary evaluator's weighted results are
        stored as the recording's Assessment and the recording is marked
        assessed. Everything happens in one transaction: if anything fails,
        nothing is stored.

        If the primary evaluator is not among `evaluator_types`, the
        evaluations are stored but no Assessment is written and the result
        has no `assessment_id`.

        Args:
            recording_id (int): The recording to assess.
            evaluator_types (list of str): Evaluator types to run. Defaults
                to `default_evaluator_types()`. Unregistered types are skipped;
                the run fails when none of them is registered.
            assessed_by (str): Identifier of the person running the assessment.

        Returns:
            dict: On success `{'success': True, 'results': {...}}` plus
            `assessment_id` when an assessment was stored; `results` maps
            each evaluator type to its aggregated totals. On failure
            `{'success': False, 'error': message}`.

        Example usage:

        >>> AssessmentHandler().process_assessment(12, ['manual', 'levenshtein'], assessed_by='3')
        {
            'success': True,
            'assessment_id': 7,
            'results': {
                'manual': {'total_score': 1.9, 'total_weight': 2.0, 'normalized_score': 95.0, ...},
                'levenshtein': {...},
            },
        }

        """
        if evaluator_types is None:
            evaluator_types = self.default_evaluator_types()

        try:
            with self.gateway.transaction():
                result = self._assess(recording_id, evaluator_types, assessed_by)
        except AssessmentError as ex:
            logger.warning(
                "Assessment of recording %s failed and was rolled back: %s", recording_id, ex
            )
            return {'success': False, 'error': str(ex)}
        except Exception as ex:  # pylint: disable=broad-except
            logger.exception(
                "Unexpected error while assessing recording %s; the assessment was rolled back", recording_id
            )
            return {'success': False, 'error': str(ex)}

        if 'assessment_id' in result:
            logger.info(
                "Stored assessment %s for recording %s", result['assessment_id'], recording_id
            )
            assessment_complete_signal.send(
                sender=self.__class__,
                recording_id=recording_id,
                assessment_id=result['assessment_id'],
            )
        return result

    def get_assessment_details(self, assessment_id):
        """
        Retrieve an assessment together with every evaluation of its recording.

        Args:
            assessment_id (int): The assessment to look up.

        Returns:
            dict: `{'assessment': {...}, 'evaluations': {'responses': {...}, 'audio': {...}}}`
            where `responses` maps response id -> evaluator type -> evaluation
            and `audio` maps evaluator type -> evaluation. When an evaluator ran
            more than once, its latest evaluation is kept. None if the
            assessment does not exist.

        Raises:
            AssessmentInternalError: The database could not be read.

        """
        assessment = self.gateway.get_assessment(assessment_id)
        if assessment is None:
            return None

        details = {
            'assessment': assessment,
            'evaluations': {
                'responses': {},
                'audio': {},
            },
        }
        for evaluation in self.gateway.get_evaluations_for_recording(assessment['recording_id']):
            if evaluation['response_id'] is not None:
                by_type = details['evaluations']['responses'].setdefault(evaluation['response_id'], {})
                by_type[evaluation['evaluator_type']] = evaluation
            else:
                details['evaluations']['audio'][evaluation['evaluator_type']] = evaluation
        return details

    def _assess(self, recording_id, evaluator_types, assessed_by):
        """
        The body of `process_assessment`, run inside its transaction.
        """
        recording = self.gateway.get_recording(recording_id, for_update=True)
        responses = self.gateway.get_recording_responses(recording_id) if recording else []
        if recording is None or not responses:
            raise AssessmentRequestError(_("Invalid recording or no responses found"))

        evaluators = self._resolve_evaluators(evaluator_types)
        if not evaluators:
            raise AssessmentRequestError(_("No valid evaluator types requested"))

        tallies = {}
        for response in responses:
            for evaluator in evaluators:
                evaluation = self._evaluate_response(evaluator, response)
                self.gateway.save_evaluation({
                    'recording_id': recording_id,
                    'response_id': response['id'],
                    'evaluator_type': evaluator.name,
                    'evaluation_type': TEXT_EVALUATION,
                    'score': evaluation['score'],
                    'confidence': evaluation['confidence'],
                    'details': evaluation.get('details') or {},
                })
                tallies.setdefault(evaluator.name, EvaluatorTally()).add(
                    evaluation['score'], response['weight'], evaluation['confidence']
                )

        self._assess_audio(recording, evaluators, tallies)

        result = {
            'success': True,
            'results': {name: tally.as_dict() for name, tally in tallies.items()},
        }

        # Only the primary evaluator's results become an assessment. When it
        # was not requested the evaluations above are still kept.
        primary = tallies.get(self.registry.primary)
        if primary is None or primary.response_count == 0:
            logger.warning(
                "Primary evaluator \"%s\" was not among %s; no assessment stored for recording %s",
                self.registry.primary, [evaluator.name for evaluator in evaluators], recording_id
            )
            return result

        result['assessment_id'] = self.gateway.save_assessment({
            'recording_id': recording_id,
            'total_score': primary.total_score,
            'normalized_score': primary.normalized_score,
            'confidence_score': primary.confidence_score,
            'assessed_by': assessed_by,
        })
        self._mark_assessed(recording)
        return result

    def _resolve_evaluators(self, evaluator_types):
        """
        Look up the requested evaluators, in order and without repeats.
        """
        evaluators = []
        for evaluator_type in evaluator_types:
            evaluator = self.registry.get(evaluator_type)
            if evaluator is None:
                logger.warning("Skipping unregistered evaluator type \"%s\"", evaluator_type)
            elif evaluator not in evaluators:
                evaluators.append(evaluator)
        return evaluators

    @staticmethod
    def _evaluate_response(evaluator, response):
        """
        Score one response with one evaluator.

        Raises:
            EvaluationError: The strategy raised or returned a malformed result.
        """
        try:
            evaluation = evaluator.strategy.evaluate(response['user_answer'], response['correct_answer'])
            evaluation['score'] = float(evaluation['score'])
            evaluation['confidence'] = float(evaluation['confidence'])
        except Exception as ex:  # pylint: disable=broad-except
            raise EvaluationError(evaluator.name, response['id'], ex) from ex
        return evaluation

    def _assess_audio(self, recording, evaluators, tallies):
        """
        Let every audio-capable evaluator score the recording itself.

        A missing passage, a failing or slow evaluator, or an empty result
        only means that no audio evaluation is stored.
        """
        audio_evaluators = [evaluator for evaluator in evaluators if evaluator.supports_audio]
        if not audio_evaluators:
            return

        passage = self.gateway.get_passage(recording['passage_id'])
        if passage is None:
            logger.warning(
                "Passage %s of recording %s not found; skipping audio evaluation",
                recording['passage_id'], recording['id']
            )
            return

        for evaluator in audio_evaluators:
            evaluation = self._evaluate_audio(evaluator, recording['audio_file_path'], passage['content'])
            if evaluation is None:
                continue
            self.gateway.save_evaluation({
                'recording_id': recording['id'],
                'response_id': None,
                'evaluator_type': evaluator.name,
                'evaluation_type': AUDIO_EVALUATION,
                'score': evaluation['score'],
                'confidence': evaluation['confidence'],
                'details': evaluation.get('details') or {},
            })
            tallies.setdefault(evaluator.name, EvaluatorTally()).add_audio(
                evaluation['score'], evaluation['confidence']
            )

    def _evaluate_audio(self, evaluator, audio_path, passage_text):
        """
        Run `evaluate_recording` with a timeout.

        A call that times out is abandoned: the worker thread cannot be
        interrupted and finishes in the background, its result discarded.

        Returns:
            dict or None
        """
        executor = ThreadPoolExecutor(max_workers=1)
        future = executor.submit(evaluator.strategy.evaluate_recording, audio_path, passage_text)
        try:
            evaluation = future.result(timeout=self.audio_timeout)
            if evaluation is not None:
                evaluation['score'] = float(evaluation['score'])
                evaluation['confidence'] = float(evaluation['confidence'])
        except FutureTimeoutError:
            future.cancel()
            logger.warning(
                "Audio evaluation by \"%s\" of %s timed out after %s seconds",
                evaluator.name, audio_path, self.audio_timeout
            )
            return None
        except Exception:  # pylint: disable=broad-except
            logger.exception("Audio evaluation by \"%s\" of %s failed", evaluator.name, audio_path)
            return None
        finally:
            executor.shutdown(wait=False)
        return evaluation

    def _mark_assessed(self, recording):
        """
        Move the recording to `assessed` if its current status allows it.
        """
        status = RecordingStatus(recording['status'])
        if status.can_transition_to(STATUS_ASSESSED):
            self.gateway.update_recording(recording['id'], {'status': STATUS_ASSESSED})
        elif status != STATUS_ASSESSED:
            logger.warning(
                "Recording %s stays \"%s\" after assessment; it cannot move to \"%s\"",
                recording['id'], status.status, STATUS_ASSESSED
            )
