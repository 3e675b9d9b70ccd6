"""
Personalized evaluation of a recommender.
Measures the prediction errors of a recommender from the point of view of a single
target user: the ratings of this user are split into test sets, the ratings of the
other users are kept as training background.
"""

import logging
import math
import time

import numpy as np

from recselect.data.model import GenericDataModelBuilder
from recselect.evaluation.report import EvaluationReport, MetricType
from recselect.exceptions import UnknownItemError, UnknownUserError

logger = logging.getLogger(__name__)


def cap_estimated_preference(estimate, min_preference, max_preference):
    """Clamp an estimate into the rating scale of the data model."""
    if max_preference < estimate:
        return max_preference
    if estimate < min_preference:
        return min_preference
    return estimate


def number_of_test_sets(training_percentage, number_of_preferences):
    """Return the number of test sets needed by an exhaustive evaluation."""
    if training_percentage == 1:
        return number_of_preferences
    return min(int(round(1 / (1 - training_percentage))), number_of_preferences)


def _check_percentage(name, value):
    if not 0 <= value <= 1:
        raise ValueError(f"The {name} must be between 0 and 1, got {value}.")


class PersonalRecommenderEvaluator:
    """
    Evaluates a recommender for one target user.

    An exhaustive evaluation splits the ratings of the target user into several
    disjoint test sets, so that every rating is predicted once. It is slower
    than a non-exhaustive evaluation, but more accurate.
    """

    def __init__(self, target_user, metric=MetricType.ROOT_MEAN_SQUARED_ERROR,
                 exhaustive=True, random_state=None):
        """
        Args:
            target_user: Id of the user to evaluate the recommenders for.
            metric (MetricType): Metric returned by evaluation_summary().
            exhaustive (bool): Build one test set per fold instead of a single sample.
            random_state: Seed or numpy Generator driving the sampling.
        """
        self.target_user = target_user
        self.metric = metric
        self.exhaustive = exhaustive
        self.rng = np.random.default_rng(random_state)

    def build_base_training_preferences(self, data_model, evaluation_percentage):
        """
        Copy the ratings of a random share of the users, the target user excluded.

        Returns:
            dict: user id -> list of Rating.
        """
        result = {}
        for user_id in data_model.user_ids():
            if self.rng.random() < evaluation_percentage and user_id != self.target_user:
                result[user_id] = list(data_model.preferences_from_user(user_id))
        return result

    def build_test_sets(self, target_preferences, training_percentage):
        """
        Split the ratings of the target user into test sets.

        When the evaluation is not exhaustive, or when the training percentage
        is lower than 0.5, a single test set is built: each rating is tested
        with a probability of 1 - training_percentage. Otherwise the ratings
        are distributed among round(1 / (1 - training_percentage)) sets, one
        rating per set when there are as many sets as ratings.
        """
        if training_percentage < 0.5 or not self.exhaustive:
            test_set = [rating for rating in target_preferences
                        if training_percentage < self.rng.random()]
            return [test_set]

        n_preferences = len(target_preferences)
        n_sets = number_of_test_sets(training_percentage, n_preferences)
        result = [[] for _ in range(n_sets)]
        if n_sets == n_preferences:
            for index, rating in enumerate(target_preferences):
                result[index].append(rating)
        else:
            for rating in target_preferences:
                result[int(math.floor(self.rng.random() * n_sets))].append(rating)
        return result

    def build_training_preferences(self, base_preferences, target_preferences, test_set):
        """Add the target user ratings, except the tested ones, to a copy of the base preferences."""
        excluded_items = {rating.item_id for rating in test_set}
        result = dict(base_preferences)
        result[self.target_user] = [rating for rating in target_preferences
                                    if rating.item_id not in excluded_items]
        return result

    def evaluate(self, recommender_builder, data_model_builder, data_model,
                 training_percentage, evaluation_percentage) -> EvaluationReport:
        """
        Evaluate the recommender built by the given builder.

        Args:
            recommender_builder: Object whose build(training_model) returns a trained recommender.
            data_model_builder: Object whose build(training_preferences) returns the training
                model, or None for a GenericDataModelBuilder keeping the rating scale.
            data_model: Full dataset.
            training_percentage (float): Share of the target user ratings kept for training.
            evaluation_percentage (float): Share of the other users kept for training.

        Returns:
            EvaluationReport: errors and coverage of the predictions for the target user.
        """
        _check_percentage('training percentage', training_percentage)
        _check_percentage('evaluation percentage', evaluation_percentage)
        start = time.time()

        min_preference = data_model.min_preference
        max_preference = data_model.max_preference
        if data_model_builder is None:
            data_model_builder = GenericDataModelBuilder(
                rating_scale=(min_preference, max_preference))
        target_preferences = data_model.preferences_from_user(self.target_user)
        base_preferences = self.build_base_training_preferences(data_model, evaluation_percentage)
        test_sets = self.build_test_sets(target_preferences, training_percentage)

        actuals = []
        estimates = []
        n_requests = 0
        for fold, test_set in enumerate(test_sets, 1):
            training_preferences = self.build_training_preferences(
                base_preferences, target_preferences, test_set)
            training_model = data_model_builder.build(training_preferences)
            recommender = recommender_builder.build(training_model)

            for rating in test_set:
                n_requests += 1
                estimate = self._estimate(recommender, rating.item_id)
                if np.isnan(estimate):
                    continue
                actuals.append(rating.value)
                estimates.append(cap_estimated_preference(estimate, min_preference, max_preference))
            logger.debug("Fold %d/%d: %d tested ratings", fold, len(test_sets), len(test_set))

        return EvaluationReport(np.array(actuals), np.array(estimates), n_requests,
                                time.time() - start)

    def _estimate(self, recommender, item_id):
        # an item or the user may exist in the test data but not in the training data
        try:
            return float(recommender.estimate(self.target_user, item_id))
        except (UnknownUserError, UnknownItemError):
            return np.nan

    def evaluation_summary(self, report: EvaluationReport) -> float:
        """Return the MAE or the RMSE of the report, depending on the chosen metric."""
        return report.metric_value(self.metric)
