import logging

import streamlit as st

from sections import data_explorer, overview, state_deep_dive, trends

st.set_page_config(
    page_title="CrimeLens MX",
    page_icon="🔍",
    layout="wide"
)

logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# ── Sidebar ───────────────────────────────────────────────────────

SECTIONS = {
    "Panorama Nacional":       overview,
    "Análisis por Entidad":    state_deep_dive,
    "Tendencias y Proyección": trends,
    "Explorador de Datos":     data_explorer,
}

st.sidebar.title("CrimeLens MX")
st.sidebar.caption("Incidencia delictiva de alto impacto, 2018–2024")
section = st.sidebar.radio("Navegar", list(SECTIONS))

SECTIONS[section].render()
