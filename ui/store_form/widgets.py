"""
Field widgets shared by the step screens.
"""

from typing import List, Optional

import streamlit as st

from validators.rules import character_counter, REQUIRED_FIELDS
from .handlers import on_field_change
from .state import widget_key


def _label(label: str, field_id: str) -> str:
    return f"{label} *" if field_id in REQUIRED_FIELDS else label


def field_feedback(field_id: str):
    """Inline error and character counter under a field."""
    message = st.session_state.form_field_errors.get(field_id)
    if message:
        st.caption(f":red[{message}]")

    counter = character_counter(field_id, st.session_state.get(widget_key(field_id), ""))
    if counter:
        color = {"danger": "red", "warning": "orange"}.get(counter["level"])
        st.caption(f":{color}[{counter['text']}]" if color else counter["text"])


def text_field(
    field_id: str,
    label: str,
    placeholder: str = "",
    help: Optional[str] = None,
    multiline: bool = False,
):
    widget = st.text_area if multiline else st.text_input
    widget(
        _label(label, field_id),
        key=widget_key(field_id),
        placeholder=placeholder,
        help=help,
        on_change=on_field_change,
        args=(field_id,),
    )
    field_feedback(field_id)


def select_field(field_id: str, label: str, options: List[str], placeholder: str = "Select..."):
    current = st.session_state.get(widget_key(field_id), "")
    choices = [""] + list(options)
    # Restored drafts may hold a value the list no longer offers
    if current and current not in choices:
        choices.append(current)
    st.selectbox(
        _label(label, field_id),
        options=choices,
        format_func=lambda v: v.replace("-", " ").title() if v else placeholder,
        key=widget_key(field_id),
        on_change=on_field_change,
        args=(field_id,),
    )
    field_feedback(field_id)
