"""
Dashboard - Map of water objects, filters and the inspection priority table.
"""

import streamlit as st
import pandas as pd
import pydeck as pdk
import logging
from datetime import datetime, timezone

from core.theme import (
    get_page_config, inject_theme, map_records, MAP_CENTER, MAP_ZOOM,
    PRIORITY_BAND_COLORS,
)

st.set_page_config(**get_page_config("Dashboard"))
inject_theme()

from core.auth import require_user
from core.filters import (
    apply_filters, apply_layer_toggles, available_regions, filters_for_role,
    find_highlighted, has_active_filters,
)
from core.models import (
    FilterState, ResourceType, WaterType, RESOURCE_TYPE_LABELS, WATER_TYPE_LABELS,
)
from core.priority import annotate_priorities, recalculate_priorities, priority_band
from core.sorting import DEFAULT_SORT, sort_objects, toggle_sort
from loaders.store import StoreError, get_store

log = logging.getLogger("dashboard")

user = require_user()
store = get_store()

# ═══════════════════════════════════════════════════════════════════════════
# LOAD COLLECTION
# ═══════════════════════════════════════════════════════════════════════════
if "objects" not in st.session_state:
    try:
        st.session_state.objects = annotate_priorities(store.fetch_water_objects(), datetime.now(timezone.utc))
    except StoreError as e:
        st.error(f"Could not load water objects: {e}")
        st.stop()

if "sort_spec" not in st.session_state:
    st.session_state.sort_spec = DEFAULT_SORT

objects = st.session_state.objects

# ═══════════════════════════════════════════════════════════════════════════
# SIDEBAR FILTERS
# ═══════════════════════════════════════════════════════════════════════════
st.sidebar.header("Filters")

ANY = ""
type_options = [ANY] + [t.value for t in ResourceType]
water_options = [ANY] + [t.value for t in WaterType]
fauna_options = {ANY: "Any", "true": "Yes", "false": "No"}

search_query = st.sidebar.text_input("Search by name", key="f_search")
region = st.sidebar.selectbox(
    "Region", [ANY] + available_regions(objects),
    format_func=lambda v: v or "All regions", key="f_region",
)
resource_type = st.sidebar.selectbox(
    "Resource type", type_options,
    format_func=lambda v: RESOURCE_TYPE_LABELS.get(v, "All types"), key="f_type",
)
water_type = st.sidebar.selectbox(
    "Water type", water_options,
    format_func=lambda v: WATER_TYPE_LABELS.get(v, "All"), key="f_water",
)
fauna = st.sidebar.selectbox(
    "Fauna", list(fauna_options),
    format_func=lambda v: fauna_options[v], key="f_fauna",
)

condition = ANY
date_from = date_to = None
if user.is_expert:
    st.sidebar.subheader("Expert filters")
    condition = st.sidebar.selectbox(
        "Technical condition", [ANY, "1", "2", "3", "4", "5"],
        format_func=lambda v: v or "Any", key="f_condition",
    )
    date_from = st.sidebar.date_input("Passport from", value=None, key="f_date_from")
    date_to = st.sidebar.date_input("Passport to", value=None, key="f_date_to")

filters = filters_for_role(
    FilterState(
        region=region,
        resource_type=resource_type,
        water_type=water_type,
        fauna=fauna,
        technical_condition=condition,
        passport_date_from=date_from.isoformat() if date_from else None,
        passport_date_to=date_to.isoformat() if date_to else None,
        search_query=search_query,
    ),
    user.role,
)


def clear_filters():
    for key in ("f_search", "f_region", "f_type", "f_water", "f_fauna", "f_condition"):
        st.session_state[key] = ANY
    for key in ("f_date_from", "f_date_to"):
        st.session_state[key] = None


if has_active_filters(filters) or filters.search_query:
    st.sidebar.button("Clear filters", on_click=clear_filters)

st.sidebar.subheader("Map layers")
visible_types = [
    rt.value for rt in ResourceType
    if st.sidebar.checkbox(RESOURCE_TYPE_LABELS[rt.value], value=True, key=f"layer_{rt.value}")
]

filtered = apply_filters(objects, filters)

# ═══════════════════════════════════════════════════════════════════════════
# HEADER
# ═══════════════════════════════════════════════════════════════════════════
col1, col2 = st.columns([4, 1])
with col1:
    st.title("🗺️ Water Objects")
    st.caption(f"{len(filtered)} of {len(objects)} objects match the current filters")

with col2:
    if user.is_expert and st.button("🔄 Recalculate priorities"):
        st.session_state.objects = recalculate_priorities(objects, datetime.now(timezone.utc))
        try:
            store.save_priorities(st.session_state.objects)
            st.success("Priorities recalculated")
        except StoreError as e:
            log.error(f"Saving priorities failed: {e}")
            st.warning(f"Recalculated locally, but saving failed: {e}")
        st.rerun()

tab_map, tab_table = st.tabs(["🗺️ Map", "📋 Priority table"])

# ═══════════════════════════════════════════════════════════════════════════
# MAP
# ═══════════════════════════════════════════════════════════════════════════
with tab_map:
    records = map_records(apply_layer_toggles(filtered, visible_types))
    highlighted = find_highlighted(filtered, filters.search_query)

    layers = [
        pdk.Layer(
            "ScatterplotLayer",
            pd.DataFrame(records, columns=["id", "name", "region", "lat", "lon", "condition", "priority", "color"]),
            get_position=["lon", "lat"],
            get_fill_color="color",
            get_radius=3000,
            radius_min_pixels=5,
            radius_max_pixels=18,
            pickable=True,
        )
    ]

    if highlighted and highlighted.latitude is not None and highlighted.longitude is not None:
        view = pdk.ViewState(latitude=highlighted.latitude, longitude=highlighted.longitude, zoom=9)
        layers.append(pdk.Layer(
            "ScatterplotLayer",
            pd.DataFrame([{"lat": highlighted.latitude, "lon": highlighted.longitude}]),
            get_position=["lon", "lat"],
            get_fill_color=[255, 255, 0, 230],
            get_radius=6000,
            radius_min_pixels=12,
        ))
    else:
        view = pdk.ViewState(latitude=MAP_CENTER[0], longitude=MAP_CENTER[1], zoom=MAP_ZOOM)

    st.pydeck_chart(
        pdk.Deck(
            layers=layers,
            initial_view_state=view,
            map_style="https://basemaps.cartocdn.com/gl/positron-gl-style/style.json",
            tooltip={"text": "{name}\n{region}\nCondition: {condition}/5\nPriority: {priority}"},
        ),
        height=520,
    )
    st.caption("Green = good condition | Red = critical | Grey = unknown | Yellow = search match")

# ═══════════════════════════════════════════════════════════════════════════
# PRIORITY TABLE
# ═══════════════════════════════════════════════════════════════════════════
SORTABLE_COLUMNS = {
    "name": "Name",
    "region": "Region",
    "resource_type": "Type",
    "technical_condition": "Condition",
    "passport_date": "Passport date",
    "priority": "Priority",
}

with tab_table:
    spec = st.session_state.sort_spec
    header = st.columns(len(SORTABLE_COLUMNS))
    for col, (field, label) in zip(header, SORTABLE_COLUMNS.items()):
        arrow = ""
        if spec.field == field:
            arrow = " ↓" if spec.direction == "desc" else " ↑"
        if col.button(f"{label}{arrow}", key=f"sort_{field}", width="stretch"):
            st.session_state.sort_spec = toggle_sort(spec, field)
            st.rerun()

    ordered = sort_objects(filtered, spec.field, spec.direction)
    if not ordered:
        st.info("No water objects match the current filters.")
    else:
        df = pd.DataFrame([
            {
                "Name": o.name,
                "Region": o.region,
                "Type": RESOURCE_TYPE_LABELS.get(o.resource_type, o.resource_type),
                "Water": WATER_TYPE_LABELS.get(o.water_type, o.water_type),
                "Fauna": "Yes" if o.fauna else "No",
                "Condition": o.technical_condition,
                "Passport date": o.passport_date,
                "Priority": o.priority,
                "Band": priority_band(o.priority).value,
            }
            for o in ordered
        ])

        def color_band(value):
            return f"color: {PRIORITY_BAND_COLORS.get(value, '#64748b')}; font-weight: 600"

        st.dataframe(df.style.map(color_band, subset=["Band"]), width="stretch", hide_index=True)

        with_pdf = [o for o in ordered if o.pdf_url]
        if with_pdf:
            with st.expander(f"Passports ({len(with_pdf)})"):
                for o in with_pdf:
                    st.markdown(f"- [{o.name}]({o.pdf_url})")
