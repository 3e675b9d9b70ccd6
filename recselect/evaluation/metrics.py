"""
Metrics for evaluating rating predictions.
Includes implementations for RMSE, MAE, per-prediction errors and prediction coverage.
"""

import numpy as np
from sklearn.metrics import mean_squared_error, mean_absolute_error  # type: ignore


def rmse(y_true, y_pred):
    """
    Calculate Root Mean Squared Error (RMSE) between true and predicted ratings.

    Args:
        y_true (list[float]): Ground truth ratings.
        y_pred (list[float]): Predicted ratings.

    Returns:
        float: The RMSE value, NaN if there is no prediction.
    """
    if len(y_true) == 0:
        return np.nan
    return float(np.sqrt(mean_squared_error(y_true, y_pred)))


def mae(y_true, y_pred):
    """
    Calculate Mean Absolute Error (MAE) between true and predicted ratings.

    Returns:
        float: The MAE value, NaN if there is no prediction.
    """
    if len(y_true) == 0:
        return np.nan
    return float(mean_absolute_error(y_true, y_pred))


def absolute_errors(y_true, y_pred):
    return np.abs(np.asarray(y_true, dtype=float) - np.asarray(y_pred, dtype=float))


def squared_errors(y_true, y_pred):
    return absolute_errors(y_true, y_pred) ** 2


def standard_deviation(values):
    """Sample standard deviation, NaN for less than two values."""
    values = np.asarray(values, dtype=float)
    if len(values) < 2:
        return np.nan
    return float(np.std(values, ddof=1))


def prediction_coverage(n_predictions, n_requests):
    """
    Ratio between the fulfilled prediction requests and all the requests.
    Unlike the catalog coverage, only the items already rated by the user are requested.
    """
    if n_requests == 0:
        return 0.0
    return n_predictions / n_requests
