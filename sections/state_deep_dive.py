"""
sections/state_deep_dive.py
---------------------------
'Análisis por Entidad' section — per-crime breakdown and a years ×
months heatmap for one selected state.
"""

import streamlit as st

from crimelens.charts import crime_breakdown_chart, heatmap_chart
from crimelens.constants import CHART_CONFIG, DEFAULT_STATE, STATES
from crimelens.data_loaders import load_state_data
from crimelens.exceptions import ValidationError
from crimelens.helpers import fmt_count


def render():
    st.title("Análisis por Entidad")

    region = st.selectbox(
        "Entidad federativa",
        STATES,
        index=STATES.index(DEFAULT_STATE),
    )

    try:
        data = load_state_data(region)
    except ValidationError as e:
        st.error(str(e))
        st.stop()

    breakdown = data["breakdown"]
    grid      = data["grid"]

    total = int(breakdown["total"].sum())
    top   = breakdown.iloc[0]

    col1, col2 = st.columns(2)
    col1.metric("Total de carpetas", fmt_count(total))
    col2.metric("Delito principal", top["crime_type"], f"{fmt_count(top['total'])} carpetas",
                delta_color="off")

    st.divider()

    st.subheader(f"Desglose por tipo de delito — {region}")
    fig = crime_breakdown_chart(breakdown, region)
    st.plotly_chart(fig, use_container_width=True, config=CHART_CONFIG)

    st.divider()

    st.subheader(f"Mapa de calor mensual — {region}")
    st.markdown("""
    Cada celda suma todas las carpetas del mes. Las celdas vacías son meses
    sin registros (por ejemplo, los meses posteriores al corte del último año).
    """)
    fig = heatmap_chart(grid, data["intensity"], region)
    st.plotly_chart(fig, use_container_width=True, config=CHART_CONFIG)

    with st.expander("Ver tabla mensual"):
        st.dataframe(grid, use_container_width=True)
