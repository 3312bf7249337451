"""
crimelens/aggregations.py
-------------------------
Read-only views over the record frame built by generator.py.

Every function takes the record frame as its first argument and returns
a new DataFrame (or dict); none of them write back to the input. All of
them accept an empty frame and return an empty or zero-valued result.

Ordering rules:
    - year / period views are chronological
    - ranking views are by total descending; ties keep the canonical
      order of STATES / CRIME_TYPES (a stable sort over that order)
    - the filtered view keeps input order

Import example:
    from crimelens.aggregations import get_total_by_year, get_state_ranking
"""

import logging
import math
from typing import Iterable

import pandas as pd

from crimelens.constants import (
    CRIME_TYPES,
    EXPORT_RENAME,
    MONTHS,
    PAGE_SIZE,
    RECORD_COLUMNS,
    STATES,
    YEARS,
)
from crimelens.exceptions import ValidationError
from crimelens.helpers import check_required_columns, pct_change

logger = logging.getLogger(__name__)


# ── Validation ────────────────────────────────────────────────────

def _validate_members(values: Iterable[str], allowed: tuple, label: str) -> list[str]:
    values  = list(values)
    unknown = [v for v in values if v not in allowed]
    if unknown:
        logger.warning("Rejected unknown %s: %s", label, unknown)
        raise ValidationError(f"Unknown {label}: {', '.join(map(str, unknown))}")
    return values


def validate_state(region: str) -> str:
    """Raise ValidationError unless *region* is one of STATES."""
    return _validate_members([region], STATES, "region")[0]


def empty_records() -> pd.DataFrame:
    """An empty record frame with the standard columns."""
    return pd.DataFrame(columns=RECORD_COLUMNS)


def _ordered_totals(totals: pd.Series, canonical: tuple) -> pd.Series:
    """Reindex onto the canonical order, zero-filling and keeping strays last."""
    extras = sorted(set(totals.index) - set(canonical))
    return totals.reindex(list(canonical) + extras, fill_value=0).astype("int64")


def _rank(totals: pd.Series, key: str) -> pd.DataFrame:
    return (
        totals.rename_axis(key)
        .reset_index(name="total")
        .sort_values("total", ascending=False, kind="stable")
        .reset_index(drop=True)
    )


# ── Yearly views ──────────────────────────────────────────────────

def get_total_by_year(records: pd.DataFrame) -> pd.DataFrame:
    """Summed incidents per year, ascending by year. Columns: year, total."""
    if records.empty:
        return pd.DataFrame({"year": pd.Series(dtype="int64"),
                             "total": pd.Series(dtype="int64")})
    return (
        records.groupby("year")["incident_count"]
        .sum()
        .astype("int64")
        .reset_index(name="total")
        .sort_values("year")
        .reset_index(drop=True)
    )


def get_trend_by_crime_type(records: pd.DataFrame) -> pd.DataFrame:
    """
    Wide-form yearly totals per crime type.

    One row per year (ascending) with a 'year' column followed by one
    column per crime type, in CRIME_TYPES order. A year/crime pair with
    no records is NaN rather than 0; charting code should fillna(0).
    """
    if records.empty:
        return pd.DataFrame({"year": pd.Series(dtype="int64")})

    wide = (
        records.groupby(["year", "crime_type"])["incident_count"]
        .sum()
        .unstack("crime_type")
    )
    ordered = [c for c in CRIME_TYPES if c in wide.columns]
    ordered += sorted(c for c in wide.columns if c not in CRIME_TYPES)
    wide = wide[ordered].sort_index().reset_index()
    wide.columns.name = None
    return wide


# ── State views ───────────────────────────────────────────────────

def get_state_ranking(records: pd.DataFrame) -> pd.DataFrame:
    """
    Total incidents per state across every year and month.

    All 32 STATES are present (zero when they have no records), sorted
    by total descending. Columns: region, total.
    """
    totals = records.groupby("region")["incident_count"].sum()
    return _rank(_ordered_totals(totals, STATES), "region")


def get_state_crime_breakdown(records: pd.DataFrame, region: str) -> pd.DataFrame:
    """
    Total incidents per crime type for one state, sorted descending.

    Raises:
        ValidationError: *region* is not one of STATES.
    """
    validate_state(region)
    subset = records[records["region"] == region]
    totals = subset.groupby("crime_type")["incident_count"].sum()
    return _rank(_ordered_totals(totals, CRIME_TYPES), "crime_type")


def get_monthly_heatmap(records: pd.DataFrame, region: str) -> pd.DataFrame:
    """
    Sparse monthly totals for one state, in chronological order.

    Only (year, month) cells with at least one contributing record are
    returned. An absent cell means zero, not "not yet computed"; use
    get_heatmap_grid() for the dense years × months view.

    Columns: year, month, month_label, total.

    Raises:
        ValidationError: *region* is not one of STATES.
    """
    validate_state(region)
    subset = records[records["region"] == region]
    if subset.empty:
        return pd.DataFrame(columns=["year", "month", "month_label", "total"])

    cells = (
        subset.groupby(["year", "month"])["incident_count"]
        .sum()
        .astype("int64")
        .reset_index(name="total")
        .sort_values(["year", "month"])
        .reset_index(drop=True)
    )
    cells.insert(2, "month_label", cells["month"].map(lambda m: MONTHS[int(m) - 1]))
    return cells


def get_heatmap_grid(heatmap: pd.DataFrame) -> pd.DataFrame:
    """
    Expand a sparse heatmap into a dense YEARS × MONTHS grid.

    Missing cells become 0. The index is the year, the columns are the
    month labels in calendar order.
    """
    grid = pd.DataFrame(
        0, index=pd.Index(YEARS, name="year"), columns=range(1, 13), dtype="int64",
    )
    if not heatmap.empty:
        dense = heatmap.pivot(index="year", columns="month", values="total")
        grid = (
            dense.reindex(index=grid.index, columns=grid.columns)
            .fillna(0)
            .astype("int64")
        )
    grid.columns = list(MONTHS)
    return grid


def get_heatmap_intensity(grid: pd.DataFrame) -> pd.DataFrame:
    """Scale a dense grid into [0, 1] by its maximum (floored at 1)."""
    peak = max(int(grid.to_numpy().max()) if grid.size else 0, 1)
    return grid / peak


# ── National series ───────────────────────────────────────────────

def get_national_monthly_trend(records: pd.DataFrame) -> pd.DataFrame:
    """
    National totals per calendar month, in chronological order.

    The period key is 'YYYY-MM' with a zero-padded month, so sorting by
    the string is also chronological.

    Columns: period, year, month, total.
    """
    if records.empty:
        return pd.DataFrame(columns=["period", "year", "month", "total"])

    monthly = (
        records.groupby(["year", "month"])["incident_count"]
        .sum()
        .astype("int64")
        .reset_index(name="total")
    )
    monthly.insert(
        0, "period",
        [f"{int(y)}-{int(m):02d}" for y, m in zip(monthly["year"], monthly["month"])],
    )
    return monthly.sort_values("period").reset_index(drop=True)


# ── Query interface ───────────────────────────────────────────────

def get_filtered_data(
    records: pd.DataFrame,
    years: Iterable[int] | None = None,
    regions: Iterable[str] | None = None,
    crime_types: Iterable[str] | None = None,
    search: str | None = None,
) -> pd.DataFrame:
    """
    Subset of the record frame matching every supplied filter.

    Filters are AND-combined. A None or empty filter matches everything.
    *search* is a case-insensitive substring match against the state and
    crime type names. Row order follows the input frame.

    Args:
        records:     Record frame.
        years:       Years to keep.
        regions:     States to keep. Must be members of STATES.
        crime_types: Crime types to keep. Must be members of CRIME_TYPES.
        search:      Free-text query over state / crime type names.

    Returns:
        A new DataFrame with a fresh RangeIndex.

    Raises:
        ValidationError: a region or crime type is not in the enumerations.
    """
    years       = list(years or [])
    regions     = _validate_members(regions or [], STATES, "region")
    crime_types = _validate_members(crime_types or [], CRIME_TYPES, "crime type")

    mask = pd.Series(True, index=records.index)
    if years:
        mask &= records["year"].isin(years)
    if regions:
        mask &= records["region"].isin(regions)
    if crime_types:
        mask &= records["crime_type"].isin(crime_types)
    if search:
        query = search.lower()
        mask &= (
            records["region"].str.lower().str.contains(query, regex=False)
            | records["crime_type"].str.lower().str.contains(query, regex=False)
        )

    return records.loc[mask].reset_index(drop=True)


def page_count(total_rows: int, page_size: int = PAGE_SIZE) -> int:
    """Number of pages needed to show *total_rows* rows."""
    if page_size < 1:
        raise ValidationError(f"page_size must be at least 1, got {page_size}")
    return math.ceil(total_rows / page_size)


def paginate(records: pd.DataFrame, page: int, page_size: int = PAGE_SIZE) -> pd.DataFrame:
    """
    Zero-indexed page of *records*. A page past the end is empty.

    Raises:
        ValidationError: page is negative or page_size is below 1.
    """
    if page < 0:
        raise ValidationError(f"page must be zero or positive, got {page}")
    if page_size < 1:
        raise ValidationError(f"page_size must be at least 1, got {page_size}")
    start = page * page_size
    return records.iloc[start:start + page_size]


def summary_stats(records: pd.DataFrame) -> dict:
    """
    Count, sum, mean, median, min and max of incident_count.

    The median is the element at index n // 2 of the ascending sort, so
    even-length sets report the upper-middle value rather than the mean
    of the two middle values. Every figure is 0 for an empty frame.
    """
    values = sorted(int(v) for v in records["incident_count"])
    n      = len(values)
    total  = sum(values)
    return {
        "count":  n,
        "sum":    total,
        "mean":   total / n if n else 0.0,
        "median": values[n // 2] if n else 0,
        "min":    values[0] if n else 0,
        "max":    values[-1] if n else 0,
    }


def export_csv(records: pd.DataFrame) -> str:
    """
    Render records as CSV text with the header
    'year,month,region,crimeType,incidentCount'.

    The month column carries the display label. Fields containing a
    comma are quoted by the CSV writer.

    Raises:
        ValidationError: the frame is missing record columns.
    """
    missing = check_required_columns(records, list(EXPORT_RENAME), "export")
    if missing:
        raise ValidationError(f"Cannot export records, missing columns: {missing}")
    out = records[list(EXPORT_RENAME)].rename(columns=EXPORT_RENAME)
    return out.to_csv(index=False, lineterminator="\n")


# ── Headline figures ──────────────────────────────────────────────

def get_overview_kpis(records: pd.DataFrame) -> dict:
    """
    Headline figures for the Overview page.

    Keys:
        latest_year, latest_total       – most recent year and its total
        previous_year, previous_total   – the year before (None / 0 if absent)
        yoy_change_pct                  – latest vs previous, 0.0 if undefined
        top_state, top_state_total      – first row of get_state_ranking()
        top_crime, top_crime_total      – crime type with the largest total
    """
    yearly = get_total_by_year(records)
    kpis = {
        "latest_year": None, "latest_total": 0,
        "previous_year": None, "previous_total": 0,
        "yoy_change_pct": 0.0,
        "top_state": "", "top_state_total": 0,
        "top_crime": "", "top_crime_total": 0,
    }
    if yearly.empty:
        return kpis

    latest = yearly.iloc[-1]
    kpis["latest_year"]  = int(latest["year"])
    kpis["latest_total"] = int(latest["total"])
    if len(yearly) > 1:
        previous = yearly.iloc[-2]
        kpis["previous_year"]  = int(previous["year"])
        kpis["previous_total"] = int(previous["total"])
        kpis["yoy_change_pct"] = pct_change(kpis["previous_total"], kpis["latest_total"])

    top = get_state_ranking(records).iloc[0]
    kpis["top_state"]       = top["region"]
    kpis["top_state_total"] = int(top["total"])

    crime_totals = _ordered_totals(
        records.groupby("crime_type")["incident_count"].sum(), CRIME_TYPES,
    )
    if crime_totals.max() > 0:
        kpis["top_crime"]       = crime_totals.idxmax()
        kpis["top_crime_total"] = int(crime_totals.max())
    return kpis


def get_crime_type_changes(records: pd.DataFrame) -> pd.DataFrame:
    """
    Change between the last two years on record for each crime type.

    Columns: crime_type, change_pct, latest. change_pct is 0 when a crime
    has fewer than two years of data or a zero base year.
    """
    rows = []
    if records.empty:
        yearly = {}
    else:
        per_year = records.groupby(["crime_type", "year"])["incident_count"].sum()
        yearly = {
            crime: series.droplevel("crime_type").sort_index()
            for crime, series in per_year.groupby(level="crime_type")
        }

    for crime in CRIME_TYPES:
        last_two = yearly.get(crime, pd.Series(dtype="int64")).iloc[-2:]
        change = 0.0
        if len(last_two) == 2:
            change = float(pct_change(last_two.iloc[0], last_two.iloc[1]))
        rows.append({
            "crime_type": crime,
            "change_pct": change,
            "latest":     int(last_two.iloc[-1]) if len(last_two) else 0,
        })
    return pd.DataFrame(rows, columns=["crime_type", "change_pct", "latest"])
