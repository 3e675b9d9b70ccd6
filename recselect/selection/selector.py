"""
Selection of the best recommender for one user.
Every requested recommender type is evaluated (with a hyperparameter search when
the type has hyperparameters), the evaluations with a too low coverage are
discarded, the evaluations significantly worse than another one are discarded,
and the best remaining evaluation is returned.
"""

import itertools
import logging

import config
from recselect.data.masking import PreferenceMaskingModel
from recselect.evaluation.evaluator import PersonalRecommenderEvaluator
from recselect.evaluation.report import MetricType
from recselect.models.configuration import BasicConfiguration, ItemSimilarityConfiguration
from recselect.models.types import RecommenderFamily, RecommenderType
from recselect.selection.configuration import SelectorConfiguration, SpeedOption
from recselect.selection.evaluation import (
    RecommenderEvaluation, are_significantly_different, evaluation_sort_key
)
from recselect.selection.latent_selector import LatentFactorRecommenderSelector
from recselect.selection.user_selector import UserRecommenderSelector

logger = logging.getLogger(__name__)

__all__ = ['RecommenderSelector', 'SelectorConfiguration', 'SpeedOption',
           'remove_unallowed_coverage', 'retain_best_evaluations']


def remove_unallowed_coverage(evaluations, minimum_coverage):
    return [evaluation for evaluation in evaluations
            if minimum_coverage <= evaluation.report.coverage]


def retain_best_evaluations(evaluations, metric, significance_test=are_significantly_different):
    """
    Discard the worse evaluation of each pair of significantly different evaluations.

    Evaluations which are not significantly different from each other are all kept.
    """
    key = evaluation_sort_key(metric)
    rejected = set()
    for index_a, index_b in itertools.combinations(range(len(evaluations)), 2):
        evaluation_a = evaluations[index_a]
        evaluation_b = evaluations[index_b]
        if significance_test(evaluation_a, evaluation_b, metric):
            if key(evaluation_b) < key(evaluation_a):
                rejected.add(index_a)
            else:
                rejected.add(index_b)
    return [evaluation for index, evaluation in enumerate(evaluations)
            if index not in rejected]


class RecommenderSelector:
    """
    Selects the recommender with the lowest error for a target user.

    Usage:
        selector = RecommenderSelector(data_model, user_id, speed=SpeedOption.FAST)
        evaluation = selector.select_among([RecommenderType.BASELINE], 0.5)
    """

    def __init__(self, data_model, target_user, metric=None, speed=None,
                 evaluation_percentage=config.DEFAULT_EVALUATION_PERCENTAGE,
                 random_state=config.RANDOM_SEED, reuse_state=config.REUSE_STATE):
        if not 0 < evaluation_percentage <= 1:
            raise ValueError("The evaluation percentage must be between 0 (excluded) and 1.")
        self.metric = MetricType.parse(metric or config.DEFAULT_METRIC)
        self.speed = SpeedOption.parse(speed or config.DEFAULT_SPEED)
        self.data_model = data_model
        self.target_user = target_user
        evaluator = PersonalRecommenderEvaluator(
            target_user, self.metric, self.speed.exhaustive, random_state)
        if evaluation_percentage == 1:
            data_model_builder = PreferenceMaskingModel(data_model, target_user)
        else:
            data_model_builder = None
        # reused similarities or factorizations have seen the tested ratings
        reuse_is_allowed = (reuse_state and evaluation_percentage == 1
                            and self.speed.training_percentage == 1)
        self.configuration = SelectorConfiguration(
            data_model, target_user, evaluator, evaluation_percentage,
            reuse_is_allowed, self.speed, data_model_builder, random_state)
        self.user_selector = UserRecommenderSelector(self.configuration)
        self.latent_selector = LatentFactorRecommenderSelector(self.configuration)

    def evaluate(self, configuration):
        report = self.configuration.evaluate(configuration)
        evaluation = RecommenderEvaluation(configuration, report)
        logger.info("An evaluation has been performed. %s", evaluation)
        return evaluation

    def evaluate_type(self, recommender_type, minimum_coverage):
        family = recommender_type.family
        if family is RecommenderFamily.BASIC:
            return [self.evaluate(BasicConfiguration(recommender_type))]
        if family is RecommenderFamily.ITEM_SIMILARITY_BASED:
            return [self.evaluate(ItemSimilarityConfiguration(recommender_type))]
        if family is RecommenderFamily.USER_SIMILARITY_BASED:
            return self.user_selector.select(recommender_type, minimum_coverage)
        if family is RecommenderFamily.LATENT_FACTOR:
            return self.latent_selector.select(recommender_type, minimum_coverage)
        raise ValueError(f"Unknown recommender family: {family}")

    def evaluate_all(self, recommender_types, minimum_coverage):
        """Evaluate every type, and return all the evaluations performed."""
        evaluations = []
        for recommender_type in recommender_types:
            evaluations.extend(self.evaluate_type(recommender_type, minimum_coverage))
        return evaluations

    def select_among(self, recommender_types, minimum_coverage=config.DEFAULT_MINIMUM_COVERAGE):
        """
        Select the best recommender among the given types.

        Args:
            recommender_types (list): RecommenderType (or names) to evaluate.
            minimum_coverage (float): Share of the target user ratings a recommender
                must be able to predict.

        Returns:
            RecommenderEvaluation: The best evaluation, None if no recommender reaches
                the minimum coverage.
        """
        recommender_types = [RecommenderType.parse(value) for value in recommender_types or []]
        if not recommender_types:
            raise ValueError("At least one recommender type must be given.")
        if not 0 <= minimum_coverage <= 1:
            raise ValueError("The minimum coverage must be between 0 and 1.")

        evaluations = self.evaluate_all(recommender_types, minimum_coverage)
        evaluations = remove_unallowed_coverage(evaluations, minimum_coverage)
        logger.info("%d evaluations reach a coverage of %.2f", len(evaluations), minimum_coverage)
        if not evaluations:
            return None
        evaluations = retain_best_evaluations(evaluations, self.metric)
        return min(evaluations, key=evaluation_sort_key(self.metric, minimum_coverage))

    def select(self):
        """Select the best recommender among all the working recommenders."""
        return self.select_among(RecommenderType.speed_ordered_recommenders(),
                                 config.DEFAULT_MINIMUM_COVERAGE)
