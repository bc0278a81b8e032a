"""
Shared theme and styling for all pages.

Provides consistent CSS, the map/condition colour scales, and helper functions.
"""

from typing import List, Optional

from core.models import PriorityBand

# Color palette - water-monitoring blues
COLORS = {
    'primary': '#0369a1',      # Deep water blue
    'secondary': '#64748b',    # Slate gray
    'accent': '#0891b2',       # Teal
    'success': '#059669',      # Emerald
    'warning': '#d97706',      # Amber
    'danger': '#dc2626',       # Red
    'background': '#f0f9ff',   # Pale sky
    'surface': '#ffffff',
    'text': '#0f172a',
    'muted': '#64748b',
}

# Technical condition 1 (best) .. 5 (worst)
CONDITION_COLORS = {
    1: '#22c55e',
    2: '#86efac',
    3: '#facc15',
    4: '#fb923c',
    5: '#ef4444',
}
UNKNOWN_CONDITION_COLOR = '#999999'

PRIORITY_BAND_COLORS = {
    PriorityBand.HIGH.value: '#dc2626',
    PriorityBand.MEDIUM.value: '#d97706',
    PriorityBand.LOW.value: '#059669',
    PriorityBand.UNKNOWN.value: '#94a3b8',
}

# Map defaults: geographic centre of Kazakhstan
MAP_CENTER = (48.0196, 66.9237)
MAP_ZOOM = 5

# Shared CSS for all pages
SHARED_CSS = """
<style>
    /* Hide Streamlit chrome */
    #MainMenu, footer, .stDeployButton {
        visibility: hidden;
        display: none;
    }

    /* Page layout */
    .block-container {
        padding: 1.5rem 2rem;
        max-width: 1400px;
    }

    /* Typography */
    h1 {
        font-weight: 600;
        color: #0f172a;
        letter-spacing: -0.025em;
    }
    h2 {
        font-weight: 500;
        color: #075985;
        margin-top: 1.5rem;
    }
    h3 {
        font-weight: 500;
        color: #0369a1;
    }

    .stExpander {
        border: 1px solid #bae6fd;
        border-radius: 8px;
    }

    .stButton > button {
        font-weight: 500;
        border-radius: 6px;
    }

    [data-testid="stMetricValue"] {
        font-weight: 600;
    }

    .stTabs [data-baseweb="tab-list"] {
        gap: 8px;
    }
</style>
"""


def get_page_config(title: str):
    """Get consistent page configuration."""
    return {
        'page_title': f"{title} | GidroAtlas",
        'page_icon': "💧",
        'layout': "wide",
    }


def inject_theme():
    """Inject shared CSS into the page."""
    import streamlit as st
    st.markdown(SHARED_CSS, unsafe_allow_html=True)


def section_header(title: str, description: str = None):
    """Render a consistent section header."""
    import streamlit as st
    st.header(title)
    if description:
        st.caption(description)


def condition_color(condition: Optional[int]) -> str:
    return CONDITION_COLORS.get(condition, UNKNOWN_CONDITION_COLOR)


def hex_to_rgb(color: str, alpha: int = 200) -> List[int]:
    """'#22c55e' -> [34, 197, 94, alpha], the form pydeck layers expect."""
    value = color.lstrip('#')
    return [int(value[i:i + 2], 16) for i in (0, 2, 4)] + [alpha]


def map_records(objects) -> List[dict]:
    """
    Rows for the map layer: one per object with numeric coordinates,
    coloured by technical condition.
    """
    records = []
    for obj in objects:
        lat, lon = obj.latitude, obj.longitude
        if not isinstance(lat, (int, float)) or not isinstance(lon, (int, float)):
            continue
        if isinstance(lat, bool) or isinstance(lon, bool) or lat != lat or lon != lon:
            continue
        records.append({
            'id': obj.id,
            'name': obj.name,
            'region': obj.region,
            'lat': float(lat),
            'lon': float(lon),
            'condition': obj.technical_condition if obj.technical_condition is not None else '?',
            'priority': obj.priority if obj.priority is not None else 'N/A',
            'color': hex_to_rgb(condition_color(obj.technical_condition)),
        })
    return records
