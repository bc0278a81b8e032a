"""
AI assistant - chat with the Gemini-backed GidroAtlas helper.
"""

import streamlit as st

from core.theme import get_page_config, inject_theme

st.set_page_config(**get_page_config("Assistant"))
inject_theme()

from core.auth import require_user
from core.chat import ChatSession, WELCOME_MESSAGE, MODEL

require_user()

st.title("💬 Assistant")

if "chat_session" not in st.session_state:
    st.session_state.chat_session = ChatSession()

session: ChatSession = st.session_state.chat_session

if st.sidebar.button("🧹 New conversation"):
    session.reset()
    st.rerun()

with st.chat_message("assistant"):
    st.markdown(WELCOME_MESSAGE)

for turn in session.history:
    with st.chat_message("assistant" if turn.role == MODEL else "user"):
        st.markdown(turn.content)

prompt = st.chat_input("Ask about water objects...")
if prompt:
    with st.chat_message("user"):
        st.markdown(prompt)

    with st.chat_message("assistant"):
        with st.spinner("Thinking..."):
            reply = session.send(prompt)
        if reply.ok:
            st.markdown(reply.reply)
        else:
            st.error(f"Error: {reply.error}")
