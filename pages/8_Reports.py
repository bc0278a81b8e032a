"""
Reports - downloadable plain-text reports over the water objects.
"""

import streamlit as st
from datetime import datetime, timezone

from core.theme import get_page_config, inject_theme

st.set_page_config(**get_page_config("Reports"))
inject_theme()

from core.auth import require_user
from core.filters import available_regions
from core.priority import annotate_priorities
from core.reports import ReportType, render_report, report_filename, report_title, select_objects
from loaders.store import StoreError, get_store

require_user()
store = get_store()

if "objects" not in st.session_state:
    try:
        st.session_state.objects = annotate_priorities(store.fetch_water_objects(), datetime.now(timezone.utc))
    except StoreError as e:
        st.error(f"Could not load water objects: {e}")
        st.stop()

objects = st.session_state.objects

st.title("📄 Reports")

report_type = st.radio(
    "Report type",
    [t.value for t in ReportType],
    format_func=lambda v: report_title(v).split(":")[0],
    horizontal=True,
)

region = None
if report_type == ReportType.REGION.value:
    regions = available_regions(objects)
    if not regions:
        st.info("No regions available.")
        st.stop()
    region = st.selectbox("Region", regions)

selected = select_objects(objects, report_type, region)
st.caption(f"{len(selected)} objects in this report")

now = datetime.now(timezone.utc)
text = render_report(objects, report_type, region, today=now.date())

st.download_button(
    "⬇️ Download report",
    data=text,
    file_name=report_filename(now),
    mime="text/plain",
)

with st.expander("Preview", expanded=True):
    st.text(text)
