"""
Recommender evaluations and their ordering.
"""

import math
from dataclasses import dataclass

import numpy as np
from scipy import stats  # type: ignore

import config
from recselect.evaluation.report import EvaluationReport, MetricType


def _remove_digits(number):
    return round(number * 100) / 100.0


@dataclass(frozen=True, eq=False)
class RecommenderEvaluation:
    """A recommender configuration and the report of its evaluation."""
    configuration: object
    report: EvaluationReport

    def __post_init__(self):
        if self.configuration is None:
            raise ValueError("The configuration must not be None.")
        if self.report is None:
            raise ValueError("The report must not be None.")

    def __str__(self):
        report = self.report
        mae = str(_remove_digits(report.mae))
        rmse = str(_remove_digits(report.rmse))
        # standard deviations are only worth showing when they are large
        if 1 < report.mae_standard_deviation:
            mae += f"({_remove_digits(report.mae_standard_deviation)})"
        if 1 < report.rmse_standard_deviation:
            rmse += f"({_remove_digits(report.rmse_standard_deviation)})"
        return (f"{self.configuration}. Evaluation result: mae={mae}, rmse={rmse}, "
                f"coverage={round(report.coverage * 100)}%, duration={report.duration:.1f}s.")


def evaluation_sort_key(metric: MetricType, minimum_coverage=0.0):
    """
    Return a key function ordering evaluations from the best to the worst.

    An evaluation whose metric is NaN, or whose coverage is lower than the
    minimum coverage, is ordered after every other one.
    """
    def key(evaluation: RecommenderEvaluation):
        report = evaluation.report
        value = report.metric_value(metric)
        if math.isnan(value) or report.coverage < minimum_coverage:
            return math.inf
        return value
    return key


def are_significantly_different(evaluation_a, evaluation_b, metric,
                                significance_level=config.SIGNIFICANCE_LEVEL):
    """
    Welch's t-test on the per-prediction errors of two evaluations.

    Returns True if the null hypothesis (same mean error) is rejected at the
    given significance level. Samples too small or degenerate to be tested are
    never significantly different.
    """
    values_a = evaluation_a.report.values(metric)
    values_b = evaluation_b.report.values(metric)
    if len(values_a) < 2 or len(values_b) < 2:
        return False
    with np.errstate(divide='ignore', invalid='ignore'):
        _, p_value = stats.ttest_ind(values_a, values_b, equal_var=False)
    if np.isnan(p_value):
        return False
    return bool(p_value < significance_level)
