# Run from project root: streamlit run chat_gateway/ui.py
# UI talks to the backend API (POST /api/chat/stream for SSE). History is stored on the server by threadId.

import json
import os
import sys
import uuid
from pathlib import Path

# Ensure project root is on path (Streamlit may run with cwd != project root)
_root_from_file = Path(__file__).resolve().parent.parent
_cwd = os.getcwd()
for _root in (_root_from_file, _cwd):
    _root = str(_root)
    if _root not in sys.path:
        sys.path.insert(0, _root)

import requests
import streamlit as st

from chat_gateway.core.config import API_BASE

st.title("AI Agent")

try:
    r = requests.get(f"{API_BASE}/api/health", timeout=10)
    st.caption(r.json().get("message", "") if r.ok else f"Health check failed: {r.status_code}")
except requests.RequestException:
    st.caption("Backend not reachable. Start the API first.")

# One thread per conversation; server keeps history by threadId
if "thread_id" not in st.session_state:
    st.session_state.thread_id = str(uuid.uuid4())
if "messages" not in st.session_state:
    st.session_state.messages = []
if st.button("New chat", key="new_chat"):
    st.session_state.thread_id = str(uuid.uuid4())
    st.session_state.messages = []
    st.rerun()

for msg in st.session_state.messages:
    with st.chat_message(msg["role"]):
        st.markdown(msg["content"])

if st.session_state.get("pending_message"):
    prompt = st.session_state.pending_message
    with st.chat_message("assistant"):
        status_placeholder = st.empty()
        answer_placeholder = st.empty()
        answer = ""
        try:
            r = requests.post(
                f"{API_BASE}/api/chat/stream",
                json={"message": prompt, "threadId": st.session_state.thread_id},
                stream=True,
                timeout=90,
            )
            if not r.ok:
                answer = f"Error: {r.status_code}: {r.text[:200]}"
                answer_placeholder.error(answer)
            else:
                for line in r.iter_lines(decode_unicode=True):
                    if not line or not line.startswith("data:"):
                        continue
                    try:
                        data = json.loads(line[5:].strip())
                    except json.JSONDecodeError:
                        continue
                    event_type = data.get("type")
                    if event_type in ("start", "thinking"):
                        status_placeholder.caption(data.get("message", ""))
                    elif event_type == "content":
                        answer = data.get("content", "")
                        answer_placeholder.markdown(answer)
                    elif event_type == "end":
                        status_placeholder.empty()
                    elif event_type == "error":
                        status_placeholder.empty()
                        answer = data.get("message") or data.get("error") or "Unknown error"
                        answer_placeholder.error(answer)
        except requests.RequestException as e:
            answer = f"Connection failed: {e}"
            status_placeholder.empty()
            answer_placeholder.error(answer)
        st.session_state.messages.append({"role": "assistant", "content": answer or "No answer."})
    del st.session_state["pending_message"]
    st.rerun()

if prompt := st.chat_input("Say hello, or ask about news, prices, weather..."):
    st.session_state.messages.append({"role": "user", "content": prompt})
    st.session_state.pending_message = prompt
    st.rerun()
