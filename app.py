"""
GidroAtlas - Main Application

Multi-page Streamlit application for monitoring water resources: login,
overview and navigation to the dashboard and management pages.
"""

import streamlit as st
import logging
from datetime import datetime, timezone

# ═══════════════════════════════════════════════════════════════════════════
# PAGE CONFIG
# ═══════════════════════════════════════════════════════════════════════════
st.set_page_config(
    page_title="GidroAtlas",
    page_icon="💧",
    layout="wide",
    initial_sidebar_state="expanded"
)

# ═══════════════════════════════════════════════════════════════════════════
# IMPORTS
# ═══════════════════════════════════════════════════════════════════════════
from core.config import configure_logging, get_settings
from core.theme import inject_theme
from core.auth import Authenticator
from core.priority import annotate_priorities, priority_band
from core.models import PriorityBand
from loaders.store import StoreError, get_store

settings = get_settings()
configure_logging(settings)
log = logging.getLogger("app")

inject_theme()
store = get_store()

# ═══════════════════════════════════════════════════════════════════════════
# LOGIN
# ═══════════════════════════════════════════════════════════════════════════
user = st.session_state.get("user")

if user is None:
    st.title("💧 GidroAtlas")
    st.markdown("Water resources monitoring system of Kazakhstan.")

    _, form_col, _ = st.columns([1, 2, 1])
    with form_col:
        with st.form("login_form"):
            st.subheader("Sign in")
            username = st.text_input("Login")
            password = st.text_input("Password", type="password")
            submitted = st.form_submit_button("Log in", width="stretch")

        if submitted:
            if not username or not password:
                st.error("Please enter login and password")
            else:
                result = Authenticator(store).login(username.strip(), password)
                if result.success:
                    st.session_state.user = result.user
                    st.rerun()
                else:
                    st.error(result.error)

        with st.expander("Demo accounts"):
            st.caption("guest / guest123 - view objects and map")
            st.caption("expert / expert123 - full access, including management pages")
    st.stop()

# ═══════════════════════════════════════════════════════════════════════════
# SIDEBAR
# ═══════════════════════════════════════════════════════════════════════════
st.sidebar.title("💧 GidroAtlas")
st.sidebar.markdown(f"Signed in as **{user.login}** ({user.role})")
st.sidebar.caption(f"Store: {store.backend}")

if st.sidebar.button("Log out"):
    log.info(f"Logout: {user.login}")
    for key in ("user", "chat_session", "sort_spec", "filters"):
        st.session_state.pop(key, None)
    st.rerun()

st.sidebar.markdown("---")

# ═══════════════════════════════════════════════════════════════════════════
# MAIN PAGE
# ═══════════════════════════════════════════════════════════════════════════
st.title("💧 GidroAtlas")
st.markdown("Monitoring lakes, canals and reservoirs, with inspection priorities.")

try:
    objects = annotate_priorities(store.fetch_water_objects(), datetime.now(timezone.utc))
except StoreError as e:
    st.error(f"Could not load water objects: {e}")
    st.stop()

bands = [priority_band(o.priority) for o in objects]
m1, m2, m3, m4 = st.columns(4)
m1.metric("Water objects", len(objects))
m2.metric("High priority", bands.count(PriorityBand.HIGH))
m3.metric("Medium priority", bands.count(PriorityBand.MEDIUM))
m4.metric("No passport date", bands.count(PriorityBand.UNKNOWN))

st.markdown("---")
st.subheader("Pages")

c1, c2 = st.columns(2)
with c1:
    st.page_link("pages/1_Dashboard.py", label="Map and priority table", icon="🗺️")
    st.page_link("pages/5_Assessment.py", label="Water quality assessment", icon="🧪")
    st.page_link("pages/6_Chat.py", label="AI assistant", icon="💬")
    st.page_link("pages/7_Statistics.py", label="Statistics", icon="📊")
with c2:
    st.page_link("pages/8_Reports.py", label="Reports", icon="📄")
    if user.is_expert:
        st.page_link("pages/2_Objects.py", label="Manage objects", icon="🛠️")
        st.page_link("pages/3_Users.py", label="Manage users", icon="👥")
        st.page_link("pages/4_Hardware.py", label="Hardware panel", icon="📡")
