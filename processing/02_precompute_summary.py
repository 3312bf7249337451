"""
02_precompute_summary.py
------------------------
Pre-computes the dashboard views from the generated record set and
writes them as small CSVs, for reporting or for checking a change to
the generator tables against a previous run.

Outputs:
    data/processed/yearly_totals.csv       — national total per year
    data/processed/crime_type_trend.csv    — yearly totals per crime type (wide)
    data/processed/state_ranking.csv       — all 32 states by total, descending
    data/processed/national_monthly.csv    — national total per YYYY-MM period
    data/processed/projection.csv          — last 12 actual + 12 forecast months
    data/processed/projection_metrics.csv  — slope, intercept, R², MAE, RMSE

Run from project root (after `pip install -e .`):
    python processing/02_precompute_summary.py
"""

import os

import pandas as pd

from crimelens.aggregations import (
    get_national_monthly_trend,
    get_state_ranking,
    get_total_by_year,
    get_trend_by_crime_type,
)
from crimelens.generator import generate_crime_data
from crimelens.projection import project_national_trend

OUT_DIR = os.path.join("data", "processed")


def build_projection_metrics(fit: dict) -> pd.DataFrame:
    """One-row frame of the regression fit, rounded for reporting."""
    return pd.DataFrame([{
        "slope":        round(fit["slope"], 3),
        "intercept":    round(fit["intercept"], 3),
        "r2":           round(fit["r2"], 4),
        "mae":          round(fit["mae"]),
        "rmse":         round(fit["rmse"]),
        "std_residual": round(fit["std_residual"], 3),
        "n_months":     fit["n"],
    }])


def build_summaries(records: pd.DataFrame) -> dict:
    """Every precomputed output keyed by its filename."""
    monthly = get_national_monthly_trend(records)
    projection, fit = project_national_trend(monthly)
    return {
        "yearly_totals.csv":      get_total_by_year(records),
        "crime_type_trend.csv":   get_trend_by_crime_type(records),
        "state_ranking.csv":      get_state_ranking(records),
        "national_monthly.csv":   monthly,
        "projection.csv":         projection,
        "projection_metrics.csv": build_projection_metrics(fit),
    }


def main(out_dir: str = OUT_DIR):
    print("02_precompute_summary.py")
    print("=" * 50)

    print("Generating crime records...")
    records = generate_crime_data()
    print(f"  {len(records):,} records")

    os.makedirs(out_dir, exist_ok=True)

    for filename, df in build_summaries(records).items():
        print(f"  Building {filename}...")
        df.to_csv(os.path.join(out_dir, filename), index=False)
        print(f"    ✓ {len(df):,} rows")

    print(f"\n✓ Summary outputs written to {out_dir}")


if __name__ == "__main__":
    main()
