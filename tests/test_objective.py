import numpy as np
import pytest

from recselect.models.types import RecommenderType
from recselect.selection.objective import (
    LatentFactorEvalFunction, UserSimilarityEvalFunction, round_parameter
)
from tests.stubs import StubEvaluator, make_report, make_selector_configuration


class TestUserSimilarityEvalFunction:

    def test_memoized_on_rounded_point(self):
        evaluator = StubEvaluator(lambda conf: make_report(conf.neighbor_count))
        function = UserSimilarityEvalFunction(
            make_selector_configuration(evaluator),
            RecommenderType.USER_SIMILARITY_WITH_COSINE, 0.5)
        assert function(3.2) == pytest.approx(3.0)
        assert function(2.6) == pytest.approx(3.0)
        assert function(np.array([3.4])) == pytest.approx(3.0)
        assert len(evaluator.configurations) == 1
        assert len(function.evaluations) == 1
        function(4)
        assert [e.configuration.neighbor_count for e in function.evaluations] == [3, 4]

    def test_rounding(self):
        assert round_parameter(2.5) == 3
        assert round_parameter(2.49) == 2
        assert round_parameter(0.2) == 1
        assert round_parameter(-7) == 1

    def test_low_coverage_is_penalized(self):
        evaluator = StubEvaluator(lambda conf: make_report(0.5, coverage=0.4))
        function = UserSimilarityEvalFunction(
            make_selector_configuration(evaluator),
            RecommenderType.USER_SIMILARITY_WITH_MSD, 0.5)
        value = function(5)
        # worse than any error on a 1..5 scale
        assert value > 4
        assert value == function.value_from_coverage(0.4)

    def test_penalty_grows_with_the_coverage_deficit(self):
        function = UserSimilarityEvalFunction(
            make_selector_configuration(StubEvaluator(make_report)),
            RecommenderType.USER_SIMILARITY_WITH_MSD, 0.8)
        penalties = [function.value_from_coverage(c) for c in (0.79, 0.6, 0.3, 0.0)]
        assert penalties == sorted(penalties)
        assert len(set(penalties)) == len(penalties)
        assert penalties[0] > 4

    def test_reuse_keeps_the_data_model(self):
        evaluator = StubEvaluator(lambda conf: make_report(1))
        selector_configuration = make_selector_configuration(evaluator, reuse=True)
        function = UserSimilarityEvalFunction(
            selector_configuration, RecommenderType.USER_SIMILARITY_WITH_COSINE, 0.5)
        function(2)
        configuration = function.evaluations[0].configuration
        assert configuration.reuse_similarity
        assert configuration.data_model is selector_configuration.data_model

    def test_invalid_arguments(self):
        selector_configuration = make_selector_configuration(StubEvaluator(make_report))
        with pytest.raises(ValueError):
            UserSimilarityEvalFunction(selector_configuration,
                                       RecommenderType.USER_SIMILARITY_WITH_COSINE, 1.2)
        with pytest.raises(ValueError):
            UserSimilarityEvalFunction(selector_configuration,
                                       RecommenderType.SVD_WITH_SGD_FACTORIZER, 0.5)


class TestLatentFactorEvalFunction:

    def test_two_parameters(self):
        evaluator = StubEvaluator(
            lambda conf: make_report(conf.feature_count / 100 + conf.iteration_count))
        function = LatentFactorEvalFunction(
            make_selector_configuration(evaluator), RecommenderType.SVD_WITH_SGD_FACTORIZER, 0.5)
        assert function(np.array([120.4, 1.6])) == pytest.approx(3.2)
        assert function(np.array([119.5, 2.4])) == pytest.approx(3.2)
        assert len(function.evaluations) == 1
        configuration = function.evaluations[0].configuration
        assert (configuration.feature_count, configuration.iteration_count) == (120, 2)
