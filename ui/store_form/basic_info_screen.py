"""
Step 1: Basic information about the store and its public URL slug.
"""

import streamlit as st

from models.enums import StoreCategory, OpeningHoursStatus
from validators.slug import slug_preview
from .state import get_session, get_settings
from .widgets import text_field, select_field


def render():
    st.subheader("1. Basic Information")

    text_field("store_name", "Store name", placeholder="e.g. Corner Bakery")
    text_field(
        "store_slug",
        "Store URL slug",
        placeholder="corner-bakery",
        help="Generated from the store name until you edit it.",
    )

    preview = slug_preview(get_session().value("store_slug"), get_settings().public_base_url)
    if preview:
        st.caption(f"🔗 Store URL: `{preview}`")

    text_field("slogan", "Slogan", placeholder="Fresh bread every morning")

    col1, col2 = st.columns(2)
    with col1:
        select_field("store_category", "Category", [c.value for c in StoreCategory])
    with col2:
        select_field("opening_hours", "Opening hours", [s.value for s in OpeningHoursStatus])
