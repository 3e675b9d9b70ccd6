import numpy as np
import pytest

import config
from recselect.models.types import RecommenderType
from recselect.selection.convergence import MaxIterationChecker
from recselect.selection.latent_selector import LatentFactorRecommenderSelector, initial_simplex
from recselect.selection.objective import UserSimilarityEvalFunction
from recselect.selection.user_selector import UserRecommenderSelector
from tests.stubs import StubEvaluator, make_report, make_selector_configuration


class TestMaxIterationChecker:

    def test_converged(self):
        checker = MaxIterationChecker(3)
        assert not checker.converged(2)
        assert checker.converged(3)
        assert checker.converged(4)

    def test_callback_stops_after_max_iterations(self):
        checker = MaxIterationChecker(2)
        checker(np.zeros(2))
        with pytest.raises(StopIteration):
            checker(np.zeros(2))

    def test_invalid_max_iterations(self):
        with pytest.raises(ValueError):
            MaxIterationChecker(0)


class TestUserRecommenderSelector:

    def test_max_neighbors(self):
        selector = UserRecommenderSelector(make_selector_configuration(StubEvaluator(make_report)))
        assert selector.max_neighbors() == 20

    def test_initial_guess(self):
        evaluator = StubEvaluator(lambda conf: make_report(abs(conf.neighbor_count - 7)))
        selector_configuration = make_selector_configuration(evaluator)
        eval_function = UserSimilarityEvalFunction(
            selector_configuration, RecommenderType.USER_SIMILARITY_WITH_COSINE, 0.5)
        start, step = UserRecommenderSelector(selector_configuration).initial_guess(eval_function, 20)
        # scan points are 2, 4, ..., 18
        assert start == 6
        assert step == 2

    def test_select_returns_every_evaluation(self):
        evaluator = StubEvaluator(lambda conf: make_report(abs(conf.neighbor_count - 7)))
        selector = UserRecommenderSelector(make_selector_configuration(evaluator))
        evaluations = selector.select(RecommenderType.USER_SIMILARITY_WITH_COSINE, 0.5)

        neighbor_counts = [e.configuration.neighbor_count for e in evaluations]
        assert set(range(2, 20, 2)) <= set(neighbor_counts)
        assert len(neighbor_counts) == len(set(neighbor_counts))
        assert all(1 <= n <= 20 for n in neighbor_counts)
        assert min(e.report.rmse for e in evaluations) <= 1

    def test_search_budget(self):
        selector = UserRecommenderSelector(make_selector_configuration(StubEvaluator(make_report)))
        checker = selector.convergence_checker(20)
        assert isinstance(checker, MaxIterationChecker)
        assert checker.max_iterations == 4
        assert selector.convergence_checker(1).max_iterations == 1

    def test_search_stops_after_the_budget(self):
        # a wavy objective keeps the search from converging on its tolerance
        evaluator = StubEvaluator(
            lambda conf: make_report(1 + (conf.neighbor_count * 7919) % 13 / 13.0))
        selector = UserRecommenderSelector(make_selector_configuration(evaluator))
        evaluations = selector.select(RecommenderType.USER_SIMILARITY_WITH_COSINE, 0.5)
        scan_count = len(config.NEIGHBOR_SCAN_FACTORS)
        assert scan_count < len(evaluations) <= scan_count + selector.convergence_checker(20).max_iterations

    def test_single_user(self):
        evaluator = StubEvaluator(lambda conf: make_report(1))
        selector = UserRecommenderSelector(make_selector_configuration(evaluator, n_users=1))
        evaluations = selector.select(RecommenderType.USER_SIMILARITY_WITH_COSINE, 0.5)
        assert [e.configuration.neighbor_count for e in evaluations] == [1]


class TestLatentFactorRecommenderSelector:

    def test_initial_simplex(self):
        simplex = initial_simplex([120, 2], [50, 1])
        assert simplex.tolist() == [[120, 2], [170, 2], [120, 3]]

    def test_select_stays_in_bounds(self):
        evaluator = StubEvaluator(lambda conf: make_report(
            abs(conf.feature_count - 300) / 100 + abs(conf.iteration_count - 2)))
        selector = LatentFactorRecommenderSelector(make_selector_configuration(evaluator))
        evaluations = selector.select(RecommenderType.SVD_WITH_SGD_FACTORIZER, 0.5)

        assert evaluations
        # initial simplex plus at most four new points per iteration
        assert len(evaluations) <= 3 + 4 * config.LATENT_MAX_OPTIMIZER_ITERATIONS
        for evaluation in evaluations:
            configuration = evaluation.configuration
            assert config.LATENT_MIN_FEATURES <= configuration.feature_count <= config.LATENT_MAX_FEATURES
            assert (config.LATENT_MIN_ITERATIONS <= configuration.iteration_count
                    <= config.LATENT_MAX_ITERATIONS)
        first = evaluations[0].configuration
        assert (first.feature_count, first.iteration_count) == (120, 2)
