"""
sections/data_explorer.py
-------------------------
'Explorador de Datos' section — filter the record frame by year, state,
crime type and free text, page through the result, see summary
statistics, and download the filtered rows as CSV.
"""

import streamlit as st

from crimelens.aggregations import export_csv, page_count, paginate, summary_stats
from crimelens.constants import (
    CRIME_TYPES,
    EXPORT_FILENAME,
    PAGE_SIZE,
    RECORD_RENAME,
    STATES,
    YEARS,
)
from crimelens.data_loaders import load_filtered_data
from crimelens.exceptions import ValidationError
from crimelens.helpers import fmt_count

_ALL = "Todos"


def render():
    st.title("Explorador de Datos")

    col1, col2, col3, col4 = st.columns([2, 1, 1, 1])
    search = col1.text_input("Buscar estado o delito...", key="explorer_search")
    region = col2.selectbox("Entidad", (_ALL,) + STATES, key="explorer_region")
    crime  = col3.selectbox("Delito", (_ALL,) + CRIME_TYPES, key="explorer_crime")
    year   = col4.selectbox("Año", (_ALL,) + YEARS, key="explorer_year")

    # Any filter change sends the user back to the first page
    filters = (search, region, crime, year)
    if st.session_state.get("explorer_filters") != filters:
        st.session_state["explorer_filters"] = filters
        st.session_state["explorer_page"] = 0

    try:
        filtered = load_filtered_data(
            years=() if year == _ALL else (year,),
            regions=() if region == _ALL else (region,),
            crime_types=() if crime == _ALL else (crime,),
            search=search,
        )
    except ValidationError as e:
        st.error(str(e))
        st.stop()

    _render_stats(summary_stats(filtered))

    st.divider()

    _render_table(filtered)

    st.download_button(
        label="Descargar CSV",
        data=export_csv(filtered).encode("utf-8"),
        file_name=EXPORT_FILENAME,
        mime="text/csv",
        disabled=filtered.empty,
    )


# ── Sub-renderers ─────────────────────────────────────────────────

def _render_stats(stats: dict):
    cols = st.columns(6)
    cols[0].metric("Registros", fmt_count(stats["count"]))
    cols[1].metric("Total carpetas", fmt_count(stats["sum"]))
    cols[2].metric("Media", fmt_count(round(stats["mean"])))
    cols[3].metric("Mediana", fmt_count(stats["median"]))
    cols[4].metric("Mínimo", fmt_count(stats["min"]))
    cols[5].metric("Máximo", fmt_count(stats["max"]))


def _render_table(filtered):
    total_rows  = len(filtered)
    total_pages = page_count(total_rows, PAGE_SIZE)
    page = min(st.session_state.get("explorer_page", 0), max(total_pages - 1, 0))

    rows = paginate(filtered, page, PAGE_SIZE)
    st.dataframe(
        rows[list(RECORD_RENAME)].rename(columns=RECORD_RENAME),
        hide_index=True,
        use_container_width=True,
    )

    if total_pages <= 1:
        return

    first = page * PAGE_SIZE + 1
    last  = min((page + 1) * PAGE_SIZE, total_rows)

    col1, col2, col3 = st.columns([3, 1, 1])
    col1.caption(f"Mostrando {first}–{last} de {fmt_count(total_rows)}")
    if col2.button("Anterior", disabled=page == 0):
        st.session_state["explorer_page"] = page - 1
        st.rerun()
    if col3.button("Siguiente", disabled=page >= total_pages - 1):
        st.session_state["explorer_page"] = page + 1
        st.rerun()
