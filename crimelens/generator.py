"""
crimelens/generator.py
----------------------
Deterministic synthesis of the crime record frame.

The frame is the Cartesian product YEARS × months × STATES × CRIME_TYPES,
with the latest year truncated after CUTOFF_MONTH. Every count is

    round(base rate × state multiplier × year trend × seasonality × noise)

where noise is drawn from a Lehmer (Park–Miller) generator scaled into
[0.7, 1.3). The generator state is exact integer arithmetic, so the same
seed reproduces the same frame on every run and every platform.

Build the frame once in the calling context and pass it to the views in
aggregations.py / projection.py; nothing here holds module-level state.
"""

import logging
from typing import Callable

import pandas as pd

from crimelens.constants import (
    BASE_RATES,
    CRIME_TYPES,
    CUTOFF_MONTH,
    MONTH_SEASONALITY,
    MONTHS,
    NOISE_FLOOR,
    NOISE_SPAN,
    RECORD_COLUMNS,
    SEED,
    STATE_MULTIPLIERS,
    STATES,
    YEAR_TRENDS,
    YEARS,
)
from crimelens.helpers import round_half_up

logger = logging.getLogger(__name__)

_MODULUS    = 2147483647
_MULTIPLIER = 16807


def seeded_random(seed: int) -> Callable[[], float]:
    """
    Return a zero-argument callable yielding floats in [0, 1).

    Each call advances s = (s × 16807) mod (2³¹ − 1) and returns
    (s − 1) / (2³¹ − 2).
    """
    state = seed

    def _next() -> float:
        nonlocal state
        state = (state * _MULTIPLIER) % _MODULUS
        return (state - 1) / (_MODULUS - 1)

    return _next


def expected_record_count() -> int:
    """Number of records generate_crime_data() produces."""
    months = sum(
        CUTOFF_MONTH if year == YEARS[-1] else len(MONTHS) for year in YEARS
    )
    return months * len(STATES) * len(CRIME_TYPES)


def generate_crime_data(seed: int = SEED) -> pd.DataFrame:
    """
    Build the full record frame.

    Iteration order is year → month → state → crime type, which is also
    the row order of the returned frame and the order in which noise
    values are drawn. Changing either changes every count after it.

    Args:
        seed: Initial generator state.

    Returns:
        DataFrame with RECORD_COLUMNS, one row per record.
    """
    rng     = seeded_random(seed)
    latest  = YEARS[-1]
    rows    = []

    for year in YEARS:
        year_mult = YEAR_TRENDS[year]
        for month_idx, month_label in enumerate(MONTHS):
            month = month_idx + 1
            if year == latest and month > CUTOFF_MONTH:
                continue
            month_mult = MONTH_SEASONALITY[month_idx]
            for state in STATES:
                state_mult = STATE_MULTIPLIERS[state]
                for crime in CRIME_TYPES:
                    noise = NOISE_FLOOR + rng() * NOISE_SPAN
                    value = round_half_up(
                        BASE_RATES[crime] * state_mult * year_mult
                        * month_mult * noise
                    )
                    rows.append(
                        (year, month, month_label, state, crime, max(0, value))
                    )

    records = pd.DataFrame(rows, columns=RECORD_COLUMNS)
    records["incident_count"] = records["incident_count"].astype("int64")
    logger.debug("Generated %d crime records (seed=%d)", len(records), seed)
    return records
