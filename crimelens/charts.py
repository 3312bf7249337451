"""
crimelens/charts.py
-------------------
Plotly figure builders for the four dashboard pages.

The layout helpers at the top give every figure the same dark,
transparent styling; the page figures below them take the frames
returned by aggregations.py / projection.py unchanged and return a
go.Figure ready for st.plotly_chart(fig, config=CHART_CONFIG).

Import example:
    from crimelens.charts import projection_chart, heatmap_chart
"""

import pandas as pd
import plotly.graph_objects as go

from crimelens.constants import (
    ACTUAL_COLOUR,
    AXIS_DEFAULTS,
    BAND_FILL,
    BASE_LAYOUT,
    CRIME_COLOURS,
    CRIME_TYPES,
    FALL_COLOUR,
    FORECAST_COLOUR,
    LEGEND_TOP,
    RISE_COLOUR,
)


# ── Layout helpers ────────────────────────────────────────────────

def apply_base_layout(fig: go.Figure, height: int = 420, **kwargs) -> go.Figure:
    """
    Merge BASE_LAYOUT, the height and any overrides into the figure
    layout, e.g. apply_base_layout(fig, height=320, hovermode="y").
    """
    fig.update_layout(**{**BASE_LAYOUT, "height": height, **kwargs})
    return fig


def style_xaxis(fig: go.Figure, show_labels: bool = False, **kwargs) -> go.Figure:
    fig.update_xaxes(**{**AXIS_DEFAULTS, "showticklabels": show_labels, **kwargs})
    return fig


def style_yaxis(fig: go.Figure, title: str = "", **kwargs) -> go.Figure:
    fig.update_yaxes(**{**AXIS_DEFAULTS, "title": title, **kwargs})
    return fig


def add_vline_annotation(
    fig: go.Figure,
    x: str | pd.Timestamp,
    label: str,
    color: str = "white",
    y_ref: float = 0.92,
) -> go.Figure:
    """Dashed vertical marker at *x* with *label* beside it (y_ref in paper units)."""
    fig.add_vline(x=x, line_dash="dash", line_color=color, opacity=0.6, line_width=1.5)
    fig.add_annotation(
        x=x, y=y_ref, yref="paper",
        text=label,
        font=dict(color=color, size=10),
        showarrow=False,
        xanchor="left",
        xshift=6,
    )
    return fig


# ── Generic builders ──────────────────────────────────────────────

def horizontal_bar_chart(
    df: pd.DataFrame,
    x_col: str,
    y_col: str,
    colorscale: str | list = "Teal",
    hover_template: str | None = None,
    height: int = 420,
    x_title: str = "",
    x_suffix: str = "",
) -> go.Figure:
    """
    One horizontal bar per row of *df*, shaded along *colorscale* by
    the value in *x_col*. The first row is drawn at the top, so pass
    ranking frames as they come.
    """
    bars = go.Bar(
        x=df[x_col],
        y=df[y_col],
        orientation="h",
        marker=dict(color=df[x_col], colorscale=colorscale, showscale=False),
        hovertemplate=hover_template,
    )
    fig = go.Figure(bars)
    fig = apply_base_layout(fig, height=height, hovermode="y")
    fig = style_xaxis(fig, show_labels=True, title=x_title, ticksuffix=x_suffix)
    fig = style_yaxis(fig, autorange="reversed")
    return fig


def wide_line_chart(
    wide: pd.DataFrame,
    x_col: str,
    series: list[str],
    colours: dict[str, str],
    height: int = 420,
    y_title: str = "",
    hover_unit: str = "",
) -> go.Figure:
    """
    One line-and-marker trace per column in *series*, drawn against
    *x_col*. Missing cells plot as zero. Columns absent from *wide* are
    skipped, so the legend only lists series that have data.
    """
    wide = wide.fillna(0)
    fig = go.Figure()
    for name in series:
        if name not in wide.columns:
            continue
        fig.add_trace(go.Scatter(
            x=wide[x_col],
            y=wide[name],
            name=name,
            mode="lines+markers",
            line=dict(color=colours.get(name, "#95a5a6"), width=2),
            hovertemplate=f"<b>{name}</b><br>%{{x}}: %{{y:,}} {hover_unit}<extra></extra>",
        ))
    fig = apply_base_layout(fig, height=height, legend=LEGEND_TOP)
    fig = style_xaxis(fig, show_labels=True)
    fig = style_yaxis(fig, title=y_title)
    return fig


# ── Page figures ──────────────────────────────────────────────────

def crime_trend_chart(trend: pd.DataFrame) -> go.Figure:
    """Yearly line per crime type from get_trend_by_crime_type(). Overview page."""
    fig = wide_line_chart(
        trend,
        x_col="year",
        series=list(CRIME_TYPES),
        colours=CRIME_COLOURS,
        height=380,
        y_title="Carpetas de investigación",
        hover_unit="carpetas",
    )
    return style_xaxis(fig, show_labels=True, dtick=1)


def state_ranking_chart(ranking: pd.DataFrame, top_n: int = 10) -> go.Figure:
    """Top *top_n* states by total incidents. Used on the Overview page."""
    return horizontal_bar_chart(
        df=ranking.head(top_n),
        x_col="total",
        y_col="region",
        colorscale="Teal",
        hover_template="<b>%{y}</b><br>%{x:,} carpetas<extra></extra>",
        height=380,
        x_title="Carpetas 2018–2024",
    )


def crime_breakdown_chart(breakdown: pd.DataFrame, region: str) -> go.Figure:
    """Per-crime totals for one state. Used on the State Deep Dive page."""
    fig = horizontal_bar_chart(
        df=breakdown,
        x_col="total",
        y_col="crime_type",
        colorscale="Teal",
        hover_template="<b>%{y}</b><br>%{x:,} carpetas<extra></extra>",
        height=320,
        x_title=f"Carpetas en {region}",
    )
    return fig


def heatmap_chart(grid: pd.DataFrame, intensity: pd.DataFrame, region: str) -> go.Figure:
    """
    Years × months heatmap. Colour comes from *intensity*
    (get_heatmap_intensity()), hover text from the raw totals in *grid*
    (get_heatmap_grid()). Zero cells are left blank.
    """
    z = intensity.where(grid > 0)
    fig = go.Figure(go.Heatmap(
        z=z.to_numpy(),
        x=[m[:3] for m in grid.columns],
        y=[str(y) for y in grid.index],
        colorscale="Teal",
        zmin=0,
        zmax=1,
        hoverongaps=False,
        text=grid.to_numpy(),
        hovertemplate=f"{region}<br>%{{x}} %{{y}}: %{{text:,}}<extra></extra>",
        showscale=False,
    ))
    fig = apply_base_layout(fig, height=340, hovermode="closest")
    fig = style_xaxis(fig, show_labels=True, side="top")
    fig = style_yaxis(fig, autorange="reversed")
    return fig


def projection_chart(projection: pd.DataFrame) -> go.Figure:
    """
    Actual months, forecast line and the shaded confidence band.
    Expects the frame returned by project_national_trend().
    """
    dates    = pd.to_datetime(projection["period"])
    actual   = projection[projection["actual"].notna()]
    forecast = projection[projection["forecast"].notna()]
    f_dates  = dates[forecast.index]

    fig = go.Figure()

    # Band first so the lines draw on top of it
    fig.add_trace(go.Scatter(
        x=pd.concat([f_dates, f_dates[::-1]]),
        y=pd.concat([forecast["upper"], forecast["lower"][::-1]]).astype(float),
        fill="toself",
        fillcolor=BAND_FILL,
        line=dict(color="rgba(255,255,255,0)"),
        name="Intervalo 95%",
        hoverinfo="skip",
    ))
    fig.add_trace(go.Scatter(
        x=dates[actual.index],
        y=actual["actual"].astype(float),
        name="Real",
        line=dict(color=ACTUAL_COLOUR, width=2.5),
        hovertemplate="%{x|%b %Y}<br>%{y:,} carpetas<extra></extra>",
    ))
    fig.add_trace(go.Scatter(
        x=f_dates,
        y=forecast["forecast"].astype(float),
        name="Proyección",
        line=dict(color=FORECAST_COLOUR, width=2, dash="dash"),
        hovertemplate="%{x|%b %Y}<br>%{y:,.0f} proyectadas<extra></extra>",
    ))

    if not actual.empty and not forecast.empty:
        boundary = dates[actual.index[-1]].strftime("%Y-%m-%d")
        fig = add_vline_annotation(fig, boundary, "Inicio de proyección", y_ref=1.04)

    fig = apply_base_layout(fig, height=400, legend=LEGEND_TOP)
    fig = style_xaxis(fig, show_labels=True)
    fig = style_yaxis(fig, title="Carpetas mensuales")
    return fig


def crime_change_chart(changes: pd.DataFrame) -> go.Figure:
    """
    Horizontal bars of year-over-year % change per crime type, red for
    rises and teal for falls. Used on the Trends page.
    """
    ordered = changes.sort_values("change_pct", ascending=False)
    colours = [RISE_COLOUR if c > 0 else FALL_COLOUR for c in ordered["change_pct"]]

    fig = go.Figure(go.Bar(
        x=ordered["change_pct"],
        y=ordered["crime_type"],
        orientation="h",
        marker=dict(color=colours),
        hovertemplate="<b>%{y}</b><br>%{x:+.1f}% vs año anterior<extra></extra>",
    ))
    fig.add_vline(x=0, line_color="white", opacity=0.3)
    fig = apply_base_layout(fig, height=320, hovermode="y")
    fig = style_xaxis(fig, show_labels=True, title="Variación anual", ticksuffix="%")
    fig = style_yaxis(fig, autorange="reversed")
    return fig
