"""
Search of the number of neighbors of the user based recommenders.
"""

import logging
import math

from scipy.optimize import minimize_scalar  # type: ignore

import config
from recselect.selection.convergence import MaxIterationChecker
from recselect.selection.objective import UserSimilarityEvalFunction

logger = logging.getLogger(__name__)


class UserRecommenderSelector:
    """
    Finds a good number of neighbors for a user based recommender type.

    A coarse scan over a share of the maximum number of neighbors picks a
    starting point, then a bounded Brent search refines it around that point.
    """

    def __init__(self, selector_configuration):
        self.selector_configuration = selector_configuration

    def max_neighbors(self):
        conf = self.selector_configuration
        n_users = conf.data_model.num_users
        return max(1, int(n_users * conf.evaluation_percentage * conf.training_percentage))

    def convergence_checker(self, max_neighbors):
        """Iteration budget of the Brent search: log2 of the maximum number of neighbors."""
        return MaxIterationChecker(max(1, int(math.log2(max_neighbors))))

    def initial_guess(self, eval_function, max_neighbors):
        """
        Evaluate the scan points and return the best one with a search step.

        The step is the distance between the best and the second best points,
        reduced so that the search interval stays inside [1, max_neighbors].
        """
        best = second = None
        best_value = second_value = math.inf
        for factor in config.NEIGHBOR_SCAN_FACTORS:
            neighbors = max(1, int(max_neighbors * factor))
            value = eval_function(neighbors)
            if best is None or value < best_value:
                best, second = neighbors, best
                best_value, second_value = value, best_value
            elif second is None or value < second_value:
                second, second_value = neighbors, value
        if second is None:
            second = best
        step = min(abs(best - second), min(max_neighbors - best, best - 1))
        return best, max(1, step)

    def select(self, recommender_type, minimum_coverage):
        """
        Search the number of neighbors of the given type.

        The bounded method of minimize_scalar takes no callback, so the budget of
        the convergence checker is given as its maxiter, which bounds the number
        of evaluations of the search after the scan.

        Returns:
            list: every RecommenderEvaluation performed during the search.
        """
        eval_function = UserSimilarityEvalFunction(
            self.selector_configuration, recommender_type, minimum_coverage)
        max_neighbors = self.max_neighbors()
        start, step = self.initial_guess(eval_function, max_neighbors)
        lower = max(1, start - step)
        upper = min(max_neighbors, start + step)
        if lower < upper:
            checker = self.convergence_checker(max_neighbors)
            result = minimize_scalar(eval_function, bounds=(lower, upper), method='bounded',
                                     options={'maxiter': checker.max_iterations,
                                              'xatol': config.NEIGHBOR_XATOL})
            logger.debug("%s: best number of neighbors around %.1f after %d evaluations "
                         "(budget exhausted: %s)", recommender_type, result.x, result.nfev,
                         checker.converged(result.nfev))
        return eval_function.evaluations
