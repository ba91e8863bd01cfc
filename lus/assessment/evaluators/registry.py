"""
Mapping from evaluator type names to evaluation strategies.

A registry is an ordinary object owned by whoever runs assessments; there
is no process-wide instance.
"""

from collections import namedtuple
import importlib
import logging

from django.conf import settings

from lus.assessment.constants import LEVENSHTEIN_EVALUATOR, MANUAL_EVALUATOR
from lus.assessment.errors import EvaluatorConfigurationError, EvaluatorLoadError, UnknownEvaluator

from .base import EvaluationStrategy
from .levenshtein import LevenshteinStrategy
from .manual import ManualEvaluator

logger = logging.getLogger(__name__)  # pylint: disable=invalid-name


DEFAULT_EVALUATORS = {
    MANUAL_EVALUATOR: 'lus.assessment.evaluators.manual.ManualEvaluator',
    LEVENSHTEIN_EVALUATOR: 'lus.assessment.evaluators.levenshtein.LevenshteinStrategy',
}


# A registered strategy and the capabilities it declared at registration.
RegisteredEvaluator = namedtuple('RegisteredEvaluator', ['name', 'strategy', 'supports_audio'])


def load_evaluator(evaluator_type, evaluators=None):
    """
    Instantiate an evaluator from its dotted class path in the configuration.

    Args:
        evaluator_type (str): The evaluator type name.
        evaluators (dict): Type name to dotted path. Defaults to the
            LUS_EVALUATORS setting.

    Returns:
        EvaluationStrategy

    Raises:
        UnknownEvaluator
        EvaluatorLoadError

    """
    if evaluators is None:
        evaluators = getattr(settings, "LUS_EVALUATORS", DEFAULT_EVALUATORS)
    cls_path = evaluators.get(evaluator_type)

    if cls_path is None:
        raise UnknownEvaluator(evaluator_type)

    module_path, _, name = cls_path.rpartition('.')
    try:
        evaluator_cls = getattr(importlib.import_module(module_path), name)
        evaluator = evaluator_cls()
    except (ImportError, ValueError, AttributeError, TypeError) as ex:
        raise EvaluatorLoadError(evaluator_type, cls_path) from ex

    if not isinstance(evaluator, EvaluationStrategy):
        raise EvaluatorLoadError(evaluator_type, cls_path)
    return evaluator


class EvaluatorRegistry:
    """
    Evaluation strategies by type name, plus the "primary" type whose
    aggregate becomes the stored assessment.

    A new registry always contains the `manual` and `levenshtein`
    evaluators, and `manual` is primary.
    """

    def __init__(self, primary=MANUAL_EVALUATOR):
        self._evaluators = {}
        self._primary = MANUAL_EVALUATOR
        self.register(MANUAL_EVALUATOR, ManualEvaluator())
        self.register(LEVENSHTEIN_EVALUATOR, LevenshteinStrategy())
        if primary != MANUAL_EVALUATOR and not self.set_primary(primary):
            raise UnknownEvaluator(primary)

    @classmethod
    def from_settings(cls):
        """
        Build a registry from the LUS_EVALUATORS setting, adding the
        LUS_AI_EVALUATORS entries when LUS_ENABLE_AI_EVALUATION is set.

        Raises:
            UnknownEvaluator: LUS_PRIMARY_EVALUATOR is not configured.
            EvaluatorLoadError: A configured class could not be loaded.

        """
        registry = cls()
        configured = dict(getattr(settings, "LUS_EVALUATORS", DEFAULT_EVALUATORS))
        if getattr(settings, "LUS_ENABLE_AI_EVALUATION", False):
            configured.update(getattr(settings, "LUS_AI_EVALUATORS", {}))

        for evaluator_type, cls_path in configured.items():
            # The built-in evaluators are already registered by the constructor
            if DEFAULT_EVALUATORS.get(evaluator_type) == cls_path:
                continue
            registry.register(evaluator_type, load_evaluator(evaluator_type, configured))

        primary = getattr(settings, "LUS_PRIMARY_EVALUATOR", MANUAL_EVALUATOR)
        if not registry.set_primary(primary):
            raise UnknownEvaluator(primary)
        return registry

    def register(self, name, strategy):
        """
        Register `strategy` under `name`, replacing any strategy already
        registered with that name.

        Raises:
            EvaluatorConfigurationError: `strategy` is not an EvaluationStrategy.
        """
        if not isinstance(strategy, EvaluationStrategy):
            raise EvaluatorConfigurationError(
                "Evaluator \"{}\" must be an EvaluationStrategy, got {!r}".format(name, strategy)
            )
        if name in self._evaluators:
            logger.info("Replacing evaluator \"%s\" with %s", name, type(strategy).__name__)
        self._evaluators[name] = RegisteredEvaluator(name, strategy, bool(strategy.supports_audio))

    def set_primary(self, name):
        """
        Make `name` the primary evaluator.

        Returns:
            bool: False (and no change) if `name` is not registered.
        """
        if name not in self._evaluators:
            return False
        self._primary = name
        return True

    @property
    def primary(self):
        return self._primary

    def supports_audio(self, name):
        """
        Whether the evaluator registered as `name` declared audio support
        when it was registered. False for unknown names.
        """
        evaluator = self._evaluators.get(name)
        return evaluator is not None and evaluator.supports_audio

    def get(self, name):
        """
        Returns:
            RegisteredEvaluator or None
        """
        return self._evaluators.get(name)

    def names(self):
        return list(self._evaluators)

    def __contains__(self, name):
        return name in self._evaluators

    def __len__(self):
        return len(self._evaluators)
