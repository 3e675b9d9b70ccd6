import math

import numpy as np
import pytest

from recselect.evaluation import metrics
from recselect.evaluation.report import EvaluationReport, MetricType


class TestMetrics:

    def test_mae_and_rmse(self):
        assert metrics.mae([1, 2, 4], [2, 2, 2]) == pytest.approx(1.0)
        assert metrics.rmse([1, 2, 4], [2, 2, 2]) == pytest.approx(math.sqrt(5 / 3))

    def test_empty_predictions(self):
        assert math.isnan(metrics.mae([], []))
        assert math.isnan(metrics.rmse([], []))
        assert math.isnan(metrics.standard_deviation([1.0]))

    def test_prediction_coverage(self):
        assert metrics.prediction_coverage(3, 4) == 0.75
        assert metrics.prediction_coverage(0, 0) == 0.0


class TestEvaluationReport:

    def test_statistics(self):
        report = EvaluationReport(np.array([1, 2, 4]), np.array([2, 2, 2]), 4, duration=1.5)
        assert report.sample_count == 3
        assert report.coverage == 0.75
        assert report.mae == pytest.approx(1.0)
        assert report.rmse == pytest.approx(math.sqrt(5 / 3))
        assert list(report.values(MetricType.MEAN_ABSOLUTE_ERROR)) == [1, 0, 2]
        assert list(report.values(MetricType.ROOT_MEAN_SQUARED_ERROR)) == [1, 0, 4]
        assert report.mae_standard_deviation == pytest.approx(1.0)
        assert report.metric_value(MetricType.MEAN_ABSOLUTE_ERROR) == report.mae

    def test_empty_report(self):
        report = EvaluationReport(np.array([]), np.array([]), 3)
        assert report.coverage == 0.0
        assert math.isnan(report.rmse)

    def test_invalid_reports(self):
        with pytest.raises(ValueError):
            EvaluationReport(np.array([1, 2]), np.array([1]), 2)
        with pytest.raises(ValueError):
            EvaluationReport(np.array([1, 2]), np.array([1, 2]), 1)


class TestMetricType:

    def test_parse(self):
        assert MetricType.parse('MEAN_ABSOLUTE_ERROR') is MetricType.MEAN_ABSOLUTE_ERROR
        assert MetricType.parse(MetricType.ROOT_MEAN_SQUARED_ERROR) is MetricType.ROOT_MEAN_SQUARED_ERROR
        with pytest.raises(ValueError):
            MetricType.parse('precision')
