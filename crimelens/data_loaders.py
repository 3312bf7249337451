"""
crimelens/data_loaders.py
-------------------------
Cached data access for the dashboard.

The record frame is generated once per server process and held with
@st.cache_resource, so every section reads the same object and never
copies it. Derived views are wrapped in @st.cache_data keyed by their
parameters, so switching state or filters only recomputes what changed.

Sections should call these rather than the aggregation functions
directly; the aggregations stay free of any Streamlit dependency so the
processing scripts and tests can use them as plain functions.
"""

import pandas as pd
import streamlit as st

from crimelens import aggregations as agg
from crimelens.generator import generate_crime_data
from crimelens.projection import project_national_trend


# ── Record frame ──────────────────────────────────────────────────

@st.cache_resource
def load_crime_data() -> pd.DataFrame:
    """The session-wide record frame. Treat as read-only."""
    return generate_crime_data()


# ── Overview ──────────────────────────────────────────────────────

@st.cache_data
def load_overview_data() -> dict:
    """
    Returns a dict of views used by the Overview section.

    Keys:
        kpis    – get_overview_kpis()
        yearly  – get_total_by_year()
        trend   – get_trend_by_crime_type() (wide, NaN for missing)
        ranking – get_state_ranking()
    """
    records = load_crime_data()
    return {
        "kpis":    agg.get_overview_kpis(records),
        "yearly":  agg.get_total_by_year(records),
        "trend":   agg.get_trend_by_crime_type(records),
        "ranking": agg.get_state_ranking(records),
    }


# ── State Deep Dive ───────────────────────────────────────────────

@st.cache_data
def load_state_data(region: str) -> dict:
    """
    Returns the breakdown, sparse heatmap and dense grid for one state.

    Raises:
        ValidationError: *region* is not one of STATES.
    """
    records = load_crime_data()
    heatmap = agg.get_monthly_heatmap(records, region)
    grid    = agg.get_heatmap_grid(heatmap)
    return {
        "breakdown": agg.get_state_crime_breakdown(records, region),
        "heatmap":   heatmap,
        "grid":      grid,
        "intensity": agg.get_heatmap_intensity(grid),
    }


# ── Trends & Projection ───────────────────────────────────────────

@st.cache_data
def load_projection_data() -> dict:
    """
    Returns the national series, the projection frame, the fit metrics
    and the per-crime year-over-year changes.

    Raises:
        ProjectionError: the national series is degenerate.
    """
    records = load_crime_data()
    monthly = agg.get_national_monthly_trend(records)
    projection, fit = project_national_trend(monthly)
    return {
        "monthly":    monthly,
        "projection": projection,
        "fit":        fit,
        "changes":    agg.get_crime_type_changes(records),
    }


# ── Data Explorer ─────────────────────────────────────────────────

@st.cache_data
def load_filtered_data(
    years: tuple = (),
    regions: tuple = (),
    crime_types: tuple = (),
    search: str = "",
) -> pd.DataFrame:
    """
    Filtered record frame for the explorer. Arguments are tuples so the
    cache key is hashable and order-stable.

    Raises:
        ValidationError: a region or crime type is unknown.
    """
    return agg.get_filtered_data(
        load_crime_data(),
        years=years,
        regions=regions,
        crime_types=crime_types,
        search=search,
    )
