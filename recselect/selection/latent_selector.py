"""
Search of the numbers of features and iterations of the matrix factorization recommenders.
"""

import logging

import numpy as np
from scipy.optimize import minimize  # type: ignore

import config
from recselect.selection.convergence import MaxIterationChecker
from recselect.selection.objective import LatentFactorEvalFunction

logger = logging.getLogger(__name__)


def initial_simplex(initial_guess, step_sizes):
    """Simplex made of the initial guess and one step along each axis."""
    x0 = np.asarray(initial_guess, dtype=float)
    vertices = [x0]
    for axis, step in enumerate(step_sizes):
        vertex = x0.copy()
        vertex[axis] += step
        vertices.append(vertex)
    return np.array(vertices)


class LatentFactorRecommenderSelector:
    """
    Finds good numbers of features and iterations with a bounded Nelder-Mead
    search, stopped after a fixed number of iterations.
    """

    def __init__(self, selector_configuration):
        self.selector_configuration = selector_configuration

    @staticmethod
    def bounds():
        return [(config.LATENT_MIN_FEATURES, config.LATENT_MAX_FEATURES),
                (config.LATENT_MIN_ITERATIONS, config.LATENT_MAX_ITERATIONS)]

    def select(self, recommender_type, minimum_coverage):
        """
        Search the hyperparameters of the given type.

        Returns:
            list: every RecommenderEvaluation performed during the search.
        """
        eval_function = LatentFactorEvalFunction(
            self.selector_configuration, recommender_type, minimum_coverage)
        checker = MaxIterationChecker(config.LATENT_MAX_OPTIMIZER_ITERATIONS)
        result = minimize(
            eval_function,
            np.asarray(config.LATENT_INITIAL_GUESS, dtype=float),
            method='Nelder-Mead',
            bounds=self.bounds(),
            callback=checker,
            options={'initial_simplex': initial_simplex(config.LATENT_INITIAL_GUESS,
                                                        config.LATENT_STEP_SIZES),
                     'maxfev': np.inf,
                     'maxiter': np.inf,
                     'xatol': config.LATENT_XATOL})
        logger.debug("%s: best features/iterations around %s after %d iterations",
                     recommender_type, result.x, checker.iteration)
        return eval_function.evaluations
