"""
Authentication against the object store, with demo accounts as a fallback.

A user found in the store must match the stored password. If the login is
unknown there, or the store cannot be reached, the built-in demo accounts
are tried.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Optional

from core.models import Role, User
from loaders.store import ObjectStore, StoreError

log = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid login or password"
SERVER_ERROR = "Server error"

DEMO_USERS: Dict[str, Dict[str, str]] = {
    "guest": {"password": "guest123", "role": Role.GUEST.value},
    "expert": {"password": "expert123", "role": Role.EXPERT.value},
}

# Pages only experts may open
EXPERT_PAGES = ("users", "objects", "hardware")


@dataclass
class LoginResult:
    success: bool
    user: Optional[User] = None
    error: Optional[str] = None


def _demo_user(username: str, password: str) -> Optional[User]:
    account = DEMO_USERS.get(username)
    if account is None or account["password"] != password:
        return None
    return User(
        id=f"demo-{username}",
        login=username,
        password_hash=password,
        role=account["role"],
        created_at=datetime.now(timezone.utc).isoformat(),
    )


class Authenticator:
    """Checks credentials for the login page."""

    def __init__(self, store: ObjectStore):
        self.store = store

    def login(self, username: str, password: str) -> LoginResult:
        """
        Check a username/password pair.

        Returns:
            LoginResult with the user on success, an error message otherwise
        """
        try:
            stored = self.store.find_user(username)
        except StoreError as e:
            log.error(f"Login lookup failed for {username}: {e}")
            demo = _demo_user(username, password)
            if demo:
                log.warning(f"Login successful (demo mode, store error): {username}")
                return LoginResult(success=True, user=demo)
            return LoginResult(success=False, error=SERVER_ERROR)

        if stored is not None:
            if stored.password_hash == password:
                log.info(f"Login successful: {username}")
                return LoginResult(success=True, user=stored)
            log.info(f"Wrong password for {username}")
            return LoginResult(success=False, error=INVALID_CREDENTIALS)

        demo = _demo_user(username, password)
        if demo:
            log.warning(f"Login successful (demo mode): {username}")
            return LoginResult(success=True, user=demo)

        log.info(f"Unknown user or wrong password: {username}")
        return LoginResult(success=False, error=INVALID_CREDENTIALS)


def can_access(user: Optional[User], page: str) -> bool:
    """Whether the user may open the given page."""
    if user is None:
        return False
    if page in EXPERT_PAGES:
        return user.is_expert
    return True


def require_user(page: str = None) -> User:
    """
    Page guard: stop rendering unless someone is logged in and, for expert
    pages, holds the expert role.
    """
    import streamlit as st
    user = st.session_state.get("user")
    if user is None:
        st.warning("Please log in on the main page first.")
        st.stop()
    if page and not can_access(user, page):
        st.error("This page is available to experts only.")
        st.stop()
    return user
