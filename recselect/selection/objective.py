"""
Objective functions of the hyperparameter searches.
An objective function evaluates the recommender configured by a point of the
search space and returns the chosen error metric, lower being better. Points
are rounded to integers, so the evaluations are memoized on the rounded point.
"""

import logging

import numpy as np

import config
from recselect.models.configuration import LatentFactorConfiguration, UserSimilarityConfiguration
from recselect.models.types import RecommenderFamily
from recselect.selection.evaluation import RecommenderEvaluation

logger = logging.getLogger(__name__)


def round_parameter(value) -> int:
    """Round half up to an integer, at least 1."""
    return max(1, int(np.floor(float(value) + 0.5)))


class RecommenderEvalFunction:
    """
    Base class of the objective functions.

    Subclasses turn a point into a hashable key of integers, and a key into a
    recommender configuration.
    """

    family = None

    def __init__(self, selector_configuration, recommender_type, minimum_coverage):
        if not 0 <= minimum_coverage <= 1:
            raise ValueError("The minimum coverage must be between 0 and 1.")
        if self.family is not None and recommender_type.family is not self.family:
            raise ValueError(f"{recommender_type} is not a {self.family.value} recommender.")
        self.selector_configuration = selector_configuration
        self.recommender_type = recommender_type
        self.minimum_coverage = minimum_coverage
        self.evaluations = []
        self._values = {}

    def key(self, point):
        raise NotImplementedError

    def configuration(self, key):
        raise NotImplementedError

    def value_from_coverage(self, coverage):
        """
        Value returned instead of the metric when the coverage is too low.

        It is higher than any error allowed by the rating scale, and grows
        exponentially with the coverage deficit.
        """
        data_model = self.selector_configuration.data_model
        span = data_model.max_preference - data_model.min_preference
        exponent = (config.COVERAGE_PENALTY_BASE_EXPONENT
                    + config.COVERAGE_PENALTY_SLOPE * (self.minimum_coverage - coverage))
        return (span + 1) * 2 ** exponent

    def evaluate(self, configuration) -> RecommenderEvaluation:
        report = self.selector_configuration.evaluate(configuration)
        evaluation = RecommenderEvaluation(configuration, report)
        self.evaluations.append(evaluation)
        logger.info("An evaluation has been performed. %s", evaluation)
        return evaluation

    def __call__(self, point) -> float:
        key = self.key(point)
        if key in self._values:
            return self._values[key]
        report = self.evaluate(self.configuration(key)).report
        if report.coverage < self.minimum_coverage:
            value = self.value_from_coverage(report.coverage)
        else:
            value = self.selector_configuration.evaluator.evaluation_summary(report)
            if np.isnan(value):
                value = self.value_from_coverage(report.coverage)
        self._values[key] = value
        return value


class UserSimilarityEvalFunction(RecommenderEvalFunction):
    """Objective function of the number of neighbors."""

    family = RecommenderFamily.USER_SIMILARITY_BASED

    def key(self, point):
        return (round_parameter(np.ravel(point)[0]),)

    def configuration(self, key):
        (neighbor_count,) = key
        reuse = self.selector_configuration.reuse_is_allowed
        return UserSimilarityConfiguration(
            self.recommender_type, neighbor_count,
            data_model=self.selector_configuration.data_model if reuse else None,
            reuse_similarity=reuse)


class LatentFactorEvalFunction(RecommenderEvalFunction):
    """Objective function of the numbers of features and iterations."""

    family = RecommenderFamily.LATENT_FACTOR

    def key(self, point):
        features, iterations = np.ravel(point)[:2]
        return (round_parameter(features), round_parameter(iterations))

    def configuration(self, key):
        feature_count, iteration_count = key
        reuse = self.selector_configuration.reuse_is_allowed
        return LatentFactorConfiguration(
            self.recommender_type, feature_count, iteration_count,
            data_model=self.selector_configuration.data_model if reuse else None,
            reuse_factorization=reuse)
