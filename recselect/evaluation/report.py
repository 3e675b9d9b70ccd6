"""
Evaluation report of one personalized evaluation run.
"""

from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from recselect.evaluation.metrics import (
    absolute_errors, mae, prediction_coverage, rmse, squared_errors, standard_deviation
)


class MetricType(Enum):
    MEAN_ABSOLUTE_ERROR = 'mean_absolute_error'
    ROOT_MEAN_SQUARED_ERROR = 'root_mean_squared_error'

    @classmethod
    def parse(cls, value):
        """Return the metric named by the given string, case insensitive."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value.lower())
        except ValueError:
            raise ValueError(f"Unknown metric: {value}") from None


@dataclass(frozen=True, eq=False)
class EvaluationReport:
    """
    Statistics over the predictions of one evaluation.

    Only the fulfilled predictions are stored. The number of requests also
    counts the predictions the recommender was unable to provide, so the
    coverage is the ratio between both.
    """
    actuals: np.ndarray
    estimates: np.ndarray
    prediction_request_count: int
    duration: float = 0.0
    absolute_errors: np.ndarray = field(init=False, repr=False)

    def __post_init__(self):
        actuals = np.asarray(self.actuals, dtype=float)
        estimates = np.asarray(self.estimates, dtype=float)
        if actuals.shape != estimates.shape:
            raise ValueError("Actual and estimated ratings must have the same length.")
        if self.prediction_request_count < len(actuals):
            raise ValueError("There can't be more predictions than prediction requests.")
        object.__setattr__(self, 'actuals', actuals)
        object.__setattr__(self, 'estimates', estimates)
        object.__setattr__(self, 'absolute_errors', absolute_errors(actuals, estimates))

    @property
    def sample_count(self) -> int:
        return len(self.actuals)

    @property
    def coverage(self) -> float:
        return prediction_coverage(self.sample_count, self.prediction_request_count)

    @property
    def squared_errors(self):
        return squared_errors(self.actuals, self.estimates)

    @property
    def mae(self) -> float:
        return mae(self.actuals, self.estimates)

    @property
    def mae_standard_deviation(self) -> float:
        return standard_deviation(self.absolute_errors)

    @property
    def rmse(self) -> float:
        return rmse(self.actuals, self.estimates)

    @property
    def rmse_standard_deviation(self) -> float:
        return standard_deviation(self.squared_errors)

    def metric_value(self, metric: MetricType) -> float:
        if metric is MetricType.MEAN_ABSOLUTE_ERROR:
            return self.mae
        if metric is MetricType.ROOT_MEAN_SQUARED_ERROR:
            return self.rmse
        raise ValueError(f"Unsupported metric: {metric}")

    def values(self, metric: MetricType):
        """Return the per-prediction error samples the given metric is computed from."""
        if metric is MetricType.MEAN_ABSOLUTE_ERROR:
            return self.absolute_errors
        if metric is MetricType.ROOT_MEAN_SQUARED_ERROR:
            return self.squared_errors
        raise ValueError(f"Unsupported metric: {metric}")

    def __repr__(self):
        return (f"EvaluationReport(mae={self.mae:.4f}, rmse={self.rmse:.4f}, "
                f"coverage={self.coverage:.2f}, samples={self.sample_count}, "
                f"duration={self.duration:.1f}s)")
