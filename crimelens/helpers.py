"""
crimelens/helpers.py
--------------------
Small general-purpose helper functions used across the core modules
and the sections. These are pure Python with no Streamlit or Plotly
dependencies so they can also be used safely inside processing scripts.

Import example:
    from crimelens.helpers import round_half_up, fmt_pct, fmt_count
"""

import logging
import math

import pandas as pd

logger = logging.getLogger(__name__)


# ── Numeric helpers ───────────────────────────────────────────────

def round_half_up(value: float) -> int:
    """
    Round to the nearest integer with .5 going towards +infinity.

    Python's round() uses banker's rounding (round(2.5) == 2), which
    would shift generated counts and forecast bounds away from the
    published figures on exact .5 ties.
    """
    return int(math.floor(value + 0.5))


def pct_change(before: float, after: float) -> float:
    """
    Percentage change from *before* to *after*.

    Returns 0.0 rather than raising when *before* is zero, so KPI cards
    can render a neutral delta.

    Args:
        before: Starting value.
        after:  Ending value.

    Returns:
        Change as a percentage, e.g. 12.5 for +12.5%.
    """
    if not before:
        return 0.0
    return (after - before) / before * 100


# ── Display formatting ────────────────────────────────────────────

def fmt_pct(value: float, sign: bool = True, decimals: int = 1) -> str:
    """'+4.2%' / '-18.5%' for value 4.2 / -18.5; sign=False drops the '+'."""
    spec = f"{'+' if sign else ''}.{decimals}f"
    return f"{value:{spec}}%"


def fmt_count(value: float | int) -> str:
    """Incident counts with comma thousands grouping, e.g. '15,744'."""
    return f"{int(value):,}"


def fmt_rate(value: float, decimals: int = 3) -> str:
    return f"{value:.{decimals}f}"


# ── Frame checks ──────────────────────────────────────────────────

def check_required_columns(
    df: pd.DataFrame,
    required: list[str],
    label: str = "frame",
) -> list[str]:
    """
    Names in *required* that *df* lacks, in the order given. A non-empty
    result is also logged as a warning tagged with *label* so the caller
    can raise with its own message.
    """
    absent = [col for col in required if col not in df.columns]
    if absent:
        logger.warning("[%s] missing columns: %s", label, absent)
    return absent
