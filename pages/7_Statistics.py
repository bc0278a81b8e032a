"""
Statistics - aggregate figures over the water object collection.
"""

import streamlit as st
import pandas as pd
import plotly.express as px
from datetime import datetime, timezone

from core.theme import get_page_config, inject_theme

st.set_page_config(**get_page_config("Statistics"))
inject_theme()

from core.auth import require_user
from core.models import RESOURCE_TYPE_LABELS, WATER_TYPE_LABELS
from core.priority import annotate_priorities
from core.statistics import compute_statistics, share
from loaders.store import StoreError, get_store

require_user()
store = get_store()

if "objects" not in st.session_state:
    try:
        st.session_state.objects = annotate_priorities(store.fetch_water_objects(), datetime.now(timezone.utc))
    except StoreError as e:
        st.error(f"Could not load water objects: {e}")
        st.stop()

stats = compute_statistics(st.session_state.objects)

st.title("📊 Statistics")

m1, m2, m3, m4 = st.columns(4)
m1.metric("Total objects", stats.total)
m2.metric("Regions", stats.region_count)
m3.metric("Avg. condition", f"{stats.avg_condition:.1f}")
m4.metric("With fauna", stats.with_fauna, f"{share(stats.with_fauna, stats.total)} %", delta_color="off")

m5, m6 = st.columns(2)
m5.metric("Good condition (1-2)", stats.good_condition, f"{share(stats.good_condition, stats.total)} %", delta_color="off")
m6.metric("Poor condition (4-5)", stats.poor_condition, f"{share(stats.poor_condition, stats.total)} %", delta_color="off")

if stats.total == 0:
    st.info("No water objects yet.")
    st.stop()

col1, col2 = st.columns(2)

with col1:
    st.subheader("By resource type")
    df_type = pd.DataFrame({
        "type": [RESOURCE_TYPE_LABELS.get(k, k) for k in stats.by_resource_type],
        "count": list(stats.by_resource_type.values()),
    })
    fig = px.pie(df_type, names="type", values="count", hole=0.4)
    fig.update_layout(height=320, margin=dict(l=20, r=20, t=20, b=20))
    st.plotly_chart(fig, width="stretch")

with col2:
    st.subheader("By water type")
    df_water = pd.DataFrame({
        "water": [WATER_TYPE_LABELS.get(k, k) for k in stats.by_water_type],
        "count": list(stats.by_water_type.values()),
    })
    fig = px.bar(df_water, x="water", y="count", color_discrete_sequence=["#0369a1"])
    fig.update_layout(height=320, margin=dict(l=20, r=20, t=20, b=20))
    st.plotly_chart(fig, width="stretch")
