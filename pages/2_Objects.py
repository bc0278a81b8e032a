"""
Object management - create, edit and delete water objects (experts only).
"""

import streamlit as st
import logging
from datetime import datetime, timezone

from core.theme import get_page_config, inject_theme, section_header

st.set_page_config(**get_page_config("Objects"))
inject_theme()

from core.auth import require_user
from core.models import (
    ResourceType, WaterType, WaterObject, RESOURCE_TYPE_LABELS, WATER_TYPE_LABELS,
    missing_required_fields,
)
from core.priority import annotate_priorities, insert_new_object
from loaders.store import StoreError, get_store

log = logging.getLogger("objects")

user = require_user("objects")
store = get_store()

if "objects" not in st.session_state:
    try:
        st.session_state.objects = annotate_priorities(store.fetch_water_objects(), datetime.now(timezone.utc))
    except StoreError as e:
        st.error(f"Could not load water objects: {e}")
        st.stop()

st.title("🛠️ Object Management")

resource_types = [t.value for t in ResourceType]
water_types = [t.value for t in WaterType]
conditions = [1, 2, 3, 4, 5]

tab_list, tab_new = st.tabs(["📋 Objects", "➕ New object"])

# ═══════════════════════════════════════════════════════════════════════════
# NEW OBJECT
# ═══════════════════════════════════════════════════════════════════════════
with tab_new:
    section_header("Add water object", "Name, region and coordinates are required.")

    with st.form("new_object_form", clear_on_submit=True):
        c1, c2 = st.columns(2)
        with c1:
            name = st.text_input("Name")
            region = st.text_input("Region")
            resource_type = st.selectbox("Resource type", resource_types, format_func=RESOURCE_TYPE_LABELS.get)
            water_type = st.selectbox("Water type", water_types, format_func=WATER_TYPE_LABELS.get)
            fauna = st.checkbox("Fauna present")
        with c2:
            condition = st.selectbox("Technical condition (1 = best)", conditions, index=2)
            passport_date = st.date_input("Passport date", value=None)
            latitude = st.number_input("Latitude", value=None, step=0.0001, format="%.4f")
            longitude = st.number_input("Longitude", value=None, step=0.0001, format="%.4f")
            pdf_url = st.text_input("Passport PDF URL (optional)")

        submitted = st.form_submit_button("Create", width="stretch")

    if submitted:
        payload = {
            "name": name.strip(),
            "region": region.strip(),
            "resource_type": resource_type,
            "water_type": water_type,
            "fauna": fauna,
            "technical_condition": condition,
            "passport_date": passport_date.isoformat() if passport_date else None,
            "latitude": latitude,
            "longitude": longitude,
            "pdf_url": pdf_url.strip() or None,
        }
        missing = missing_required_fields(payload)
        if missing:
            st.error(f"Please fill in: {', '.join(missing)}")
        else:
            try:
                created = store.insert_water_object(payload)
            except StoreError as e:
                st.error(f"Could not create object: {e}")
            else:
                st.session_state.objects = insert_new_object(
                    st.session_state.objects, created, datetime.now(timezone.utc)
                )
                log.info(f"Object created by {user.login}: {created.name}")
                st.success(f"Created {created.name}")

# ═══════════════════════════════════════════════════════════════════════════
# EDIT / DELETE
# ═══════════════════════════════════════════════════════════════════════════


def edit_form(obj: WaterObject):
    with st.form(f"edit_{obj.id}"):
        c1, c2 = st.columns(2)
        with c1:
            name = st.text_input("Name", value=obj.name)
            region = st.text_input("Region", value=obj.region)
            resource_type = st.selectbox(
                "Resource type", resource_types, format_func=RESOURCE_TYPE_LABELS.get,
                index=resource_types.index(obj.resource_type) if obj.resource_type in resource_types else 0,
            )
            water_type = st.selectbox(
                "Water type", water_types, format_func=WATER_TYPE_LABELS.get,
                index=water_types.index(obj.water_type) if obj.water_type in water_types else 0,
            )
            fauna = st.checkbox("Fauna present", value=obj.fauna)
        with c2:
            condition = st.selectbox(
                "Technical condition", conditions,
                index=conditions.index(obj.technical_condition) if obj.technical_condition in conditions else 2,
            )
            latitude = st.number_input("Latitude", value=obj.latitude, step=0.0001, format="%.4f")
            longitude = st.number_input("Longitude", value=obj.longitude, step=0.0001, format="%.4f")
            pdf_url = st.text_input("Passport PDF URL", value=obj.pdf_url or "")

        save = st.form_submit_button("Save")

    if not save:
        return

    payload = {
        "name": name.strip(),
        "region": region.strip(),
        "resource_type": resource_type,
        "water_type": water_type,
        "fauna": fauna,
        "technical_condition": condition,
        "latitude": latitude,
        "longitude": longitude,
        "pdf_url": pdf_url.strip() or None,
    }
    missing = missing_required_fields(payload)
    if missing:
        st.error(f"Please fill in: {', '.join(missing)}")
        return
    try:
        store.update_water_object(obj.id, payload)
        st.session_state.objects = annotate_priorities(store.fetch_water_objects(), datetime.now(timezone.utc))
    except StoreError as e:
        st.error(f"Could not save {obj.name}: {e}")
        return
    st.rerun()


with tab_list:
    objects = st.session_state.objects
    if not objects:
        st.info("No water objects yet. Add one in the 'New object' tab.")

    for obj in objects:
        with st.expander(f"**{obj.name}** · {obj.region} · priority {obj.priority if obj.priority is not None else 'N/A'}"):
            edit_form(obj)
            if st.button("🗑️ Delete", key=f"delete_{obj.id}"):
                try:
                    store.delete_water_object(obj.id)
                except StoreError as e:
                    st.error(f"Could not delete {obj.name}: {e}")
                else:
                    st.session_state.objects = [o for o in objects if o.id != obj.id]
                    log.info(f"Object deleted by {user.login}: {obj.name}")
                    st.rerun()
