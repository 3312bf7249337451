"""
crimelens/projection.py
-----------------------
Linear trend projection of the national monthly series.

An ordinary least squares line is fitted against the position of each
month in the series (0, 1, 2, ...), then extended FORECAST_HORIZON
months past the last observation. The band around each forecast is
±1.96 residual standard deviations, a 95% interval if the residuals are
roughly normal. This is an illustrative trend line, not a seasonal or
validated forecasting model.

Degenerate input (fewer than two points, a zero denominator, or any
non-finite intermediate) raises ProjectionError instead of letting NaN
or infinity reach the chart.
"""

import logging
from typing import Iterable

import numpy as np
import pandas as pd
from sklearn.metrics import mean_absolute_error, mean_squared_error

from crimelens.constants import CONFIDENCE_Z, FORECAST_HORIZON, HISTORY_WINDOW
from crimelens.exceptions import ProjectionError
from crimelens.helpers import round_half_up

logger = logging.getLogger(__name__)

PROJECTION_COLUMNS = ["period", "actual", "forecast", "upper", "lower"]


def fit_linear_trend(values: Iterable[float]) -> dict:
    """
    Fit y = slope·x + intercept with x = 0, 1, 2, ... by closed-form OLS.

    Args:
        values: The y series, in order.

    Returns:
        dict with keys slope, intercept, r2, mae, rmse, std_residual, n.
        r2 is 0 when the series has zero variance. std_residual is the
        population standard deviation (divides by n).

    Raises:
        ProjectionError: fewer than two points, non-finite input, or a
                         zero denominator in the slope formula.
    """
    y = np.asarray(list(values), dtype=float)
    n = len(y)
    if n < 2:
        raise ProjectionError(f"Need at least 2 points to fit a trend, got {n}")
    if not np.isfinite(y).all():
        raise ProjectionError("Series contains non-finite values")

    x = np.arange(n, dtype=float)
    sum_x, sum_y = x.sum(), y.sum()
    sum_xy, sum_x2 = (x * y).sum(), (x * x).sum()

    denominator = n * sum_x2 - sum_x ** 2
    if denominator == 0:
        raise ProjectionError("All x values are identical; slope is undefined")

    slope     = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n

    fitted    = slope * x + intercept
    residuals = y - fitted
    ss_res    = float((residuals ** 2).sum())
    ss_tot    = float(((y - y.mean()) ** 2).sum())

    # r2_score() would report 1.0 for a flat, perfectly fitted series.
    fit = {
        "slope":        float(slope),
        "intercept":    float(intercept),
        "r2":           1 - ss_res / ss_tot if ss_tot > 0 else 0.0,
        "mae":          float(mean_absolute_error(y, fitted)),
        "rmse":         float(np.sqrt(mean_squared_error(y, fitted))),
        "std_residual": float(residuals.std()),
        "n":            n,
    }

    if not all(np.isfinite(v) for v in fit.values()):
        raise ProjectionError(f"Regression produced a non-finite result: {fit}")

    logger.debug(
        "Fitted trend over %d points: slope=%.3f intercept=%.3f r2=%.4f",
        n, fit["slope"], fit["intercept"], fit["r2"],
    )
    return fit


def next_periods(year: int, month: int, horizon: int) -> list[tuple[int, int]]:
    """
    The *horizon* (year, month) pairs after (year, month), rolling
    December over to January of the next year.
    """
    periods = []
    for _ in range(horizon):
        month += 1
        if month > 12:
            month = 1
            year += 1
        periods.append((year, month))
    return periods


def project_national_trend(
    monthly: pd.DataFrame,
    horizon: int = FORECAST_HORIZON,
    history: int = HISTORY_WINDOW,
) -> tuple[pd.DataFrame, dict]:
    """
    Extend the national monthly series with a linear forecast.

    Args:
        monthly: Output of get_national_monthly_trend(): chronological,
                 with period, year, month and total columns.
        horizon: Number of future months to forecast.
        history: Number of trailing actual months echoed for context.

    Returns:
        (projection, fit)

        projection – DataFrame with PROJECTION_COLUMNS. The first rows
                     are the last *history* actual months (actual set,
                     forecast/upper/lower <NA>); the remaining *horizon*
                     rows are forecasts (actual <NA>). Numeric columns
                     use the nullable Int64 dtype.
        fit        – the dict returned by fit_linear_trend().

    Raises:
        ProjectionError: the series is too short or degenerate.
    """
    fit = fit_linear_trend(monthly["total"])
    spread = CONFIDENCE_Z * fit["std_residual"]

    rows = [
        {"period": row.period, "actual": int(row.total),
         "forecast": None, "upper": None, "lower": None}
        for row in monthly.tail(history).itertuples(index=False)
    ]

    last     = monthly.iloc[-1]
    last_idx = len(monthly) - 1
    for step, (year, month) in enumerate(
        next_periods(int(last["year"]), int(last["month"]), horizon), start=1,
    ):
        predicted = fit["slope"] * (last_idx + step) + fit["intercept"]
        rows.append({
            "period":   f"{year}-{month:02d}",
            "actual":   None,
            "forecast": round_half_up(predicted),
            "upper":    round_half_up(predicted + spread),
            "lower":    round_half_up(max(0.0, predicted - spread)),
        })

    projection = pd.DataFrame(rows, columns=PROJECTION_COLUMNS).astype({
        "actual": "Int64", "forecast": "Int64", "upper": "Int64", "lower": "Int64",
    })
    return projection, fit
