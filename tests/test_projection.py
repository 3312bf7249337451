"""
tests/test_projection.py
------------------------
Regression and forecast tests for crimelens.projection.

Run with:
    pytest tests/test_projection.py -v

The closed-form fit is checked on exact lines (where every metric is
known) and cross-checked against scipy.stats.linregress on the
generated national series.
"""

import pandas as pd
import pytest
from scipy import stats

from crimelens.aggregations import get_national_monthly_trend
from crimelens.exceptions import CrimeLensError, ProjectionError
from crimelens.generator import generate_crime_data
from crimelens.projection import (
    PROJECTION_COLUMNS,
    fit_linear_trend,
    next_periods,
    project_national_trend,
)


# ── Helpers ───────────────────────────────────────────────────────

def make_monthly(totals: list, start_year: int = 2023) -> pd.DataFrame:
    """A national monthly frame starting in January of *start_year*."""
    rows = []
    for i, total in enumerate(totals):
        year, month = start_year + i // 12, i % 12 + 1
        rows.append({"period": f"{year}-{month:02d}", "year": year,
                     "month": month, "total": total})
    return pd.DataFrame(rows, columns=["period", "year", "month", "total"])


@pytest.fixture(scope="module")
def monthly():
    return get_national_monthly_trend(generate_crime_data())


# ══════════════════════════════════════════════════════════════════
# Linear fit
# ══════════════════════════════════════════════════════════════════

class TestFitLinearTrend:

    def test_exact_line(self):
        fit = fit_linear_trend([100 + 10 * x for x in range(24)])
        assert fit["slope"] == pytest.approx(10)
        assert fit["intercept"] == pytest.approx(100)
        assert fit["r2"] == pytest.approx(1.0)
        assert fit["mae"] == pytest.approx(0, abs=1e-9)
        assert fit["rmse"] == pytest.approx(0, abs=1e-9)
        assert fit["std_residual"] == pytest.approx(0, abs=1e-9)
        assert fit["n"] == 24

    def test_constant_series_has_zero_r2(self):
        fit = fit_linear_trend([5, 5, 5])
        assert fit["slope"] == 0
        assert fit["intercept"] == 5
        assert fit["r2"] == 0.0

    def test_two_points(self):
        fit = fit_linear_trend([3, 7])
        assert fit["slope"] == pytest.approx(4)
        assert fit["intercept"] == pytest.approx(3)

    def test_known_residuals(self):
        """y = [1, 3, 2]: slope 0.5, intercept 1.5, residuals [-0.5, 1, -0.5]."""
        fit = fit_linear_trend([1, 3, 2])
        assert fit["slope"] == pytest.approx(0.5)
        assert fit["intercept"] == pytest.approx(1.5)
        assert fit["mae"] == pytest.approx(2 / 3)
        assert fit["rmse"] == pytest.approx((1.5 / 3) ** 0.5)
        # Population standard deviation; residuals have mean 0
        assert fit["std_residual"] == pytest.approx((1.5 / 3) ** 0.5)
        assert fit["r2"] == pytest.approx(1 - 1.5 / 2)

    def test_matches_scipy_linregress(self, monthly):
        fit = fit_linear_trend(monthly["total"])
        ref = stats.linregress(range(len(monthly)), monthly["total"])
        assert fit["slope"] == pytest.approx(ref.slope)
        assert fit["intercept"] == pytest.approx(ref.intercept)
        assert fit["r2"] == pytest.approx(ref.rvalue ** 2)

    def test_metrics_are_plausible(self, monthly):
        fit = fit_linear_trend(monthly["total"])
        assert 0 <= fit["r2"] <= 1
        assert 0 < fit["mae"] <= fit["rmse"]
        assert fit["n"] == 82

    @pytest.mark.parametrize("values", [[], [42]])
    def test_too_few_points(self, values):
        with pytest.raises(ProjectionError, match="at least 2"):
            fit_linear_trend(values)

    def test_non_finite_rejected(self):
        with pytest.raises(ProjectionError):
            fit_linear_trend([1.0, float("nan"), 3.0])
        with pytest.raises(ProjectionError):
            fit_linear_trend([1.0, float("inf")])

    def test_error_hierarchy(self):
        assert issubclass(ProjectionError, CrimeLensError)
        assert issubclass(ProjectionError, ArithmeticError)


# ══════════════════════════════════════════════════════════════════
# Period arithmetic
# ══════════════════════════════════════════════════════════════════

class TestNextPeriods:

    def test_rolls_over_december(self):
        periods = next_periods(2024, 10, 12)
        assert periods[:3] == [(2024, 11), (2024, 12), (2025, 1)]
        assert periods[-1] == (2025, 10)
        assert len(periods) == 12

    def test_from_december(self):
        assert next_periods(2023, 12, 2) == [(2024, 1), (2024, 2)]

    def test_zero_horizon(self):
        assert next_periods(2024, 5, 0) == []


# ══════════════════════════════════════════════════════════════════
# Projection frame
# ══════════════════════════════════════════════════════════════════

class TestProjectNationalTrend:

    @pytest.fixture(scope="class")
    def result(self, monthly):
        return project_national_trend(monthly)

    def test_shape_and_columns(self, result):
        projection, _ = result
        assert list(projection.columns) == PROJECTION_COLUMNS
        assert len(projection) == 24

    def test_history_then_forecast(self, result, monthly):
        projection, _ = result
        history, future = projection.iloc[:12], projection.iloc[12:]
        assert history["actual"].notna().all()
        assert history[["forecast", "upper", "lower"]].isna().all().all()
        assert future["actual"].isna().all()
        assert future[["forecast", "upper", "lower"]].notna().all().all()
        assert history["period"].tolist() == monthly["period"].tail(12).tolist()
        assert history["actual"].tolist() == monthly["total"].tail(12).tolist()

    def test_periods_continue_without_gap(self, result):
        projection, _ = result
        assert projection["period"].iloc[11] == "2024-10"
        assert projection["period"].iloc[12] == "2024-11"
        assert projection["period"].iloc[14] == "2025-01"
        assert projection["period"].iloc[-1] == "2025-10"
        assert projection["period"].is_unique
        assert projection["period"].is_monotonic_increasing

    def test_band_ordering(self, result):
        projection, _ = result
        future = projection.iloc[12:]
        assert (future["lower"] <= future["forecast"]).all()
        assert (future["forecast"] <= future["upper"]).all()
        assert (future["lower"] >= 0).all()

    def test_nullable_integer_columns(self, result):
        projection, _ = result
        for col in ("actual", "forecast", "upper", "lower"):
            assert str(projection[col].dtype) == "Int64", f"{col} is {projection[col].dtype}"

    def test_returns_fit(self, result, monthly):
        _, fit = result
        assert fit == fit_linear_trend(monthly["total"])

    def test_exact_line_forecast(self):
        projection, fit = project_national_trend(
            make_monthly([100 + 10 * x for x in range(24)])
        )
        future = projection.iloc[12:]
        assert future["period"].iloc[0] == "2025-01"
        assert future["forecast"].tolist() == [340 + 10 * i for i in range(12)]
        # Zero residual spread collapses the band onto the line
        assert future["upper"].tolist() == future["forecast"].tolist()
        assert future["lower"].tolist() == future["forecast"].tolist()

    def test_lower_bound_clamped_at_zero(self):
        projection, _ = project_national_trend(
            make_monthly([300 - 20 * x for x in range(24)])
        )
        future = projection.iloc[12:]
        assert future["forecast"].iloc[0] == -180
        assert (future["lower"] == 0).all()

    def test_short_history(self):
        projection, _ = project_national_trend(make_monthly([10, 20, 30, 40, 50]))
        assert len(projection) == 5 + 12
        assert projection["actual"].notna().sum() == 5
        assert projection["period"].iloc[5] == "2023-06"

    def test_custom_horizon(self, monthly):
        projection, _ = project_national_trend(monthly, horizon=3, history=6)
        assert len(projection) == 9

    def test_single_month_rejected(self):
        with pytest.raises(ProjectionError):
            project_national_trend(make_monthly([10]))
