"""
User management - list, add, edit and delete users (experts only).
"""

import streamlit as st
import logging

from core.theme import get_page_config, inject_theme

st.set_page_config(**get_page_config("Users"))
inject_theme()

from core.auth import require_user
from core.models import Role
from loaders.store import StoreError, get_store

log = logging.getLogger("users")

current = require_user("users")
store = get_store()

st.title("👥 Users")

roles = [r.value for r in Role]

# ═══════════════════════════════════════════════════════════════════════════
# ADD USER
# ═══════════════════════════════════════════════════════════════════════════
with st.expander("➕ Add user"):
    with st.form("new_user_form", clear_on_submit=True):
        login = st.text_input("Login")
        password = st.text_input("Password", type="password")
        role = st.selectbox("Role", roles, index=roles.index(Role.GUEST.value))
        submitted = st.form_submit_button("Create")

    if submitted:
        if not login.strip() or not password:
            st.error("Login and password are required")
        else:
            try:
                user = store.insert_user(login.strip(), password, role)
                st.success(f"Created user {user.login}")
            except StoreError as e:
                st.error(f"Could not create user: {e}")

# ═══════════════════════════════════════════════════════════════════════════
# USER LIST
# ═══════════════════════════════════════════════════════════════════════════
try:
    users = store.fetch_users()
except StoreError as e:
    st.error(f"Could not load users: {e}")
    st.stop()

if not users:
    st.info("No users in the store. Demo accounts still work for login.")

for user in users:
    col1, col2, col3 = st.columns([3, 2, 1])

    with col1:
        st.write(f"**{user.login}**")
        st.caption(f"Created: {user.created_at or 'unknown'}")

    with col2:
        new_role = st.selectbox(
            "Role", roles, index=roles.index(user.role) if user.role in roles else 0,
            key=f"role_{user.id}", label_visibility="collapsed",
        )
        if new_role != user.role:
            try:
                store.update_user_role(user.id, new_role)
                log.info(f"{current.login} changed role of {user.login} to {new_role}")
                st.rerun()
            except (StoreError, ValueError) as e:
                st.error(f"Could not change role: {e}")

    with col3:
        if user.id == current.id:
            st.caption("(you)")
        elif st.button("🗑️", key=f"delete_{user.id}"):
            try:
                store.delete_user(user.id)
                st.rerun()
            except StoreError as e:
                st.error(f"Could not delete user: {e}")

    with st.expander(f"Edit {user.login}"):
        with st.form(f"edit_user_{user.id}"):
            edited_login = st.text_input("Login", value=user.login)
            edited_password = st.text_input("New password (leave empty to keep)", type="password")
            save = st.form_submit_button("Save")

        if save:
            payload = {"login": edited_login.strip()}
            if edited_password:
                payload["password_hash"] = edited_password
            if not payload["login"]:
                st.error("Login cannot be empty")
            else:
                try:
                    store.update_user(user.id, payload)
                    st.rerun()
                except StoreError as e:
                    st.error(f"Could not save user: {e}")

    st.markdown("---")
