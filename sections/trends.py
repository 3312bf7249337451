"""
sections/trends.py
------------------
'Tendencias y Proyección' section — linear trend projection of the
national monthly series with a 95% band, the fit metrics, and the
year-over-year change for each crime type.
"""

import streamlit as st

from crimelens.charts import crime_change_chart, projection_chart
from crimelens.constants import CHART_CONFIG, CONFIDENCE_Z, FORECAST_HORIZON
from crimelens.data_loaders import load_projection_data
from crimelens.exceptions import ProjectionError
from crimelens.helpers import fmt_count, fmt_pct, fmt_rate


def render():
    st.title("Tendencias y Proyección")
    st.markdown(f"""
    Regresión lineal simple sobre la serie nacional mensual, extendida
    {FORECAST_HORIZON} meses. La banda sombreada es ±{CONFIDENCE_Z} desviaciones
    estándar de los residuales. **Es una proyección ilustrativa, no un modelo
    estadístico validado:** no captura estacionalidad ni cambios de tendencia.
    """)

    try:
        data = load_projection_data()
    except ProjectionError as e:
        st.error(f"No se pudo calcular la proyección: {e}")
        st.stop()

    fit        = data["fit"]
    projection = data["projection"]
    changes    = data["changes"]

    _render_metrics(fit)

    st.divider()

    st.subheader("Proyección nacional mensual")
    fig = projection_chart(projection)
    st.plotly_chart(fig, use_container_width=True, config=CHART_CONFIG)

    with st.expander("Ver valores proyectados"):
        st.dataframe(
            projection[projection["forecast"].notna()][["period", "forecast", "lower", "upper"]]
            .rename(columns={
                "period":   "Periodo",
                "forecast": "Proyección",
                "lower":    "Límite inferior",
                "upper":    "Límite superior",
            }),
            hide_index=True,
        )

    st.divider()

    _render_crime_changes(changes)


# ── Sub-renderers ─────────────────────────────────────────────────

def _render_metrics(fit: dict):
    direction = "al alza" if fit["slope"] > 0 else "a la baja"

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("R²", fmt_rate(fit["r2"]))
    col2.metric("MAE", fmt_count(round(fit["mae"])))
    col3.metric("RMSE", fmt_count(round(fit["rmse"])))
    col4.metric(
        "Pendiente mensual",
        f"{fit['slope']:+,.1f}",
        f"Tendencia {direction}",
        delta_color="off",
    )
    st.caption(
        f"Ajuste sobre {fit['n']} meses. Un R² bajo indica que la tendencia "
        "lineal explica poca de la variación mensual."
    )


def _render_crime_changes(changes):
    st.subheader("Variación anual por tipo de delito")
    st.markdown("""
    Cambio entre los dos últimos años con datos. El último año está
    truncado, así que una caída puede reflejar meses aún no reportados.
    """)

    fig = crime_change_chart(changes)
    st.plotly_chart(fig, use_container_width=True, config=CHART_CONFIG)

    cols = st.columns(len(changes))
    for col, row in zip(cols, changes.itertuples(index=False)):
        col.metric(
            row.crime_type,
            fmt_count(row.latest),
            fmt_pct(row.change_pct),
            delta_color="inverse",
        )
