"""
crimelens/constants.py
----------------------
Shared constants used across the generator, the aggregations and the
dashboard sections. Import from here rather than defining locally in
section files.

The enumerations below are the stable, ordered lists the query layer
and the UI select boxes consume. Their order is also the tie-break
order for the ranking views in aggregations.py, so do not re-sort them.
"""

# ── Fixed enumerations ────────────────────────────────────────────
STATES = (
    "Aguascalientes", "Baja California", "Baja California Sur", "Campeche",
    "Chiapas", "Chihuahua", "Ciudad de México", "Coahuila",
    "Colima", "Durango", "Estado de México", "Guanajuato",
    "Guerrero", "Hidalgo", "Jalisco", "Michoacán",
    "Morelos", "Nayarit", "Nuevo León", "Oaxaca",
    "Puebla", "Querétaro", "Quintana Roo", "San Luis Potosí",
    "Sinaloa", "Sonora", "Tabasco", "Tamaulipas",
    "Tlaxcala", "Veracruz", "Yucatán", "Zacatecas",
)

CRIME_TYPES = (
    "Homicidio doloso",
    "Robo con violencia",
    "Extorsión",
    "Secuestro",
    "Feminicidio",
    "Narcomenudeo",
)

MONTHS = (
    "Enero", "Febrero", "Marzo", "Abril", "Mayo", "Junio",
    "Julio", "Agosto", "Septiembre", "Octubre", "Noviembre", "Diciembre",
)

YEARS = (2018, 2019, 2020, 2021, 2022, 2023, 2024)

# ── Record frame schema ───────────────────────────────────────────
RECORD_COLUMNS = [
    "year", "month", "month_label", "region", "crime_type", "incident_count",
]

# Export header order is part of the download contract.
EXPORT_RENAME = {
    "year":           "year",
    "month_label":    "month",
    "region":         "region",
    "crime_type":     "crimeType",
    "incident_count": "incidentCount",
}
EXPORT_FILENAME = "crimelens_mx_export.csv"

# ── Generator parameters ──────────────────────────────────────────
SEED = 42

# Latest year only has data up to and including this month ("data as of").
CUTOFF_MONTH = 10

# Monthly base incidents per state, before multipliers
BASE_RATES = {
    "Homicidio doloso":   85,
    "Robo con violencia": 320,
    "Extorsión":          45,
    "Secuestro":          12,
    "Feminicidio":        8,
    "Narcomenudeo":       180,
}

STATE_MULTIPLIERS = {
    "Aguascalientes": 0.4, "Baja California": 1.5, "Baja California Sur": 0.5,
    "Campeche": 0.3, "Chiapas": 0.6, "Chihuahua": 1.6,
    "Ciudad de México": 2.2, "Coahuila": 0.8, "Colima": 1.8,
    "Durango": 0.6, "Estado de México": 2.5, "Guanajuato": 1.9,
    "Guerrero": 1.7, "Hidalgo": 0.5, "Jalisco": 1.8,
    "Michoacán": 1.4, "Morelos": 0.9, "Nayarit": 0.7,
    "Nuevo León": 1.3, "Oaxaca": 0.7, "Puebla": 1.0,
    "Querétaro": 0.5, "Quintana Roo": 0.8, "San Luis Potosí": 0.7,
    "Sinaloa": 1.2, "Sonora": 1.1, "Tabasco": 1.0,
    "Tamaulipas": 1.3, "Tlaxcala": 0.3, "Veracruz": 1.1,
    "Yucatán": 0.2, "Zacatecas": 1.0,
}

YEAR_TRENDS = {
    2018: 0.92, 2019: 1.05, 2020: 0.88,
    2021: 0.95, 2022: 1.02, 2023: 1.08, 2024: 1.04,
}

# Indexed by month - 1
MONTH_SEASONALITY = (
    0.95, 0.90, 0.98, 1.0, 1.05, 1.08,
    1.10, 1.05, 0.98, 1.02, 0.95, 1.12,
)

NOISE_FLOOR = 0.7
NOISE_SPAN  = 0.6

# ── Projection ────────────────────────────────────────────────────
FORECAST_HORIZON = 12
HISTORY_WINDOW   = 12
CONFIDENCE_Z     = 1.96

# ── Data explorer ─────────────────────────────────────────────────
PAGE_SIZE = 50
DEFAULT_STATE = "Ciudad de México"
TOP_STATES_SHOWN = 10

# ── Plotly chart config ───────────────────────────────────────────
CHART_CONFIG = {'displayModeBar': False, 'scrollZoom': False}

# ── Colour palette ────────────────────────────────────────────────
CRIME_COLOURS = {
    "Homicidio doloso":   "#1abc9c",
    "Robo con violencia": "#f39c12",
    "Extorsión":          "#3498db",
    "Secuestro":          "#e74c3c",
    "Feminicidio":        "#2ecc71",
    "Narcomenudeo":       "#9b59b6",
}

ACTUAL_COLOUR   = "#1abc9c"
FORECAST_COLOUR = "#f39c12"
BAND_FILL       = "rgba(243,156,18,0.12)"
RISE_COLOUR     = "#e74c3c"
FALL_COLOUR     = "#1abc9c"

# ── DataFrame column rename mappings ─────────────────────────────
RECORD_RENAME = {
    "year":           "Año",
    "month_label":    "Mes",
    "region":         "Entidad",
    "crime_type":     "Delito",
    "incident_count": "Carpetas",
}

RANKING_RENAME = {
    "region": "Entidad",
    "total":  "Carpetas",
}

# ── Shared layout defaults applied to all Plotly figures ─────────
BASE_LAYOUT = dict(
    plot_bgcolor='rgba(0,0,0,0)',
    paper_bgcolor='rgba(0,0,0,0)',
    dragmode=False,
    hovermode='x unified',
)

AXIS_DEFAULTS = dict(
    showspikes=False,
    gridcolor='rgba(255,255,255,0.05)',
)

LEGEND_TOP = dict(
    orientation='h',
    yanchor='bottom',
    y=1.02,
)
