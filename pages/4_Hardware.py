"""
Hardware panel - live sensor readings and the remote-control switch (experts only).
"""

import streamlit as st
import logging

from core.theme import get_page_config, inject_theme

st.set_page_config(**get_page_config("Hardware"))
inject_theme()

from core.auth import require_user
from core.models import RemoteControl
from loaders.store import StoreError, get_store

log = logging.getLogger("hardware")

user = require_user("hardware")
store = get_store()

st.title("📡 Hardware")

try:
    hardware = store.fetch_hardware()
except StoreError as e:
    st.error(f"Could not load hardware state: {e}")
    st.stop()

m1, m2, m3 = st.columns(3)
m1.metric("Humidity", f"{hardware.humidity:.1f} %")
m2.metric("Temperature", f"{hardware.temperature:.1f} °C")
m3.metric("Mode", RemoteControl(hardware.remote_control).name if hardware.remote_control in (1, 0, -1) else "?")
st.caption(f"Last update: {hardware.updated_at or 'unknown'}")

st.markdown("---")
st.subheader("Remote control")

c1, c2, c3 = st.columns(3)
for col, mode in zip((c1, c2, c3), (RemoteControl.ON, RemoteControl.OFF, RemoteControl.AUTO)):
    active = hardware.remote_control == mode.value
    if col.button(mode.name, key=f"mode_{mode.name}", type="primary" if active else "secondary", width="stretch"):
        try:
            store.set_remote_control(mode.value)
            log.info(f"{user.login} set remote control to {mode.name}")
            st.rerun()
        except (StoreError, ValueError) as e:
            st.error(f"Could not switch mode: {e}")

if st.button("🔄 Refresh"):
    st.rerun()
