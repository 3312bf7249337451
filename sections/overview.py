"""
sections/overview.py
--------------------
'Panorama Nacional' section — headline KPIs, yearly trend per crime
type, and the ten states with the most incidents.
"""

import streamlit as st

from crimelens.charts import crime_trend_chart, state_ranking_chart
from crimelens.constants import (
    CHART_CONFIG,
    CUTOFF_MONTH,
    MONTHS,
    TOP_STATES_SHOWN,
    YEARS,
)
from crimelens.data_loaders import load_overview_data
from crimelens.helpers import fmt_count, fmt_pct


def render():
    st.title("Panorama Nacional")
    st.markdown(f"""
    Carpetas de investigación por delitos de alto impacto en las 32
    entidades federativas, {YEARS[0]} a {YEARS[-1]}. Los datos de
    {YEARS[-1]} llegan hasta {MONTHS[CUTOFF_MONTH - 1].lower()}.
    """)

    data    = load_overview_data()
    kpis    = data["kpis"]
    trend   = data["trend"]
    ranking = data["ranking"]

    if kpis["latest_year"] is None:
        st.info("No hay registros para mostrar.")
        return

    _render_kpis(kpis)

    st.divider()

    st.subheader("Tendencia anual por tipo de delito")
    fig = crime_trend_chart(trend)
    st.plotly_chart(fig, use_container_width=True, config=CHART_CONFIG)

    st.divider()

    st.subheader(f"Top {TOP_STATES_SHOWN} entidades")
    fig = state_ranking_chart(ranking, top_n=TOP_STATES_SHOWN)
    st.plotly_chart(fig, use_container_width=True, config=CHART_CONFIG)

    st.caption(
        "Fuente: datos sintéticos generados de forma determinista para "
        "demostración. No representan cifras oficiales."
    )


# ── Sub-renderers ─────────────────────────────────────────────────

def _render_kpis(kpis: dict):
    yoy = kpis["yoy_change_pct"]
    previous = kpis["previous_year"]

    col1, col2, col3, col4 = st.columns(4)
    col1.metric(
        f"Total carpetas {kpis['latest_year']}",
        fmt_count(kpis["latest_total"]),
        fmt_pct(yoy) if previous else None,
        delta_color="inverse",
    )
    col1.caption(f"{MONTHS[0]} – {MONTHS[CUTOFF_MONTH - 1]}")
    col2.metric(
        "Variación anual",
        fmt_pct(yoy),
        f"vs. {previous}" if previous else None,
        delta_color="off",
    )
    col3.metric(
        "Entidad más afectada",
        kpis["top_state"],
        f"{fmt_count(kpis['top_state_total'])} carpetas ({YEARS[0]}-{YEARS[-1]})",
        delta_color="off",
    )
    col4.metric(
        "Delito predominante",
        kpis["top_crime"],
        f"{fmt_count(kpis['top_crime_total'])} carpetas totales",
        delta_color="off",
    )
