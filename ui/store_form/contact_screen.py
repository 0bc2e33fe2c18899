"""
Step 3: Contact details and address.
"""

import streamlit as st

from .widgets import text_field


def render():
    st.subheader("3. Contact Details")

    col1, col2 = st.columns(2)
    with col1:
        text_field("contact_email", "Email", placeholder="hello@yourstore.com")
        text_field("contact_whatsapp", "WhatsApp", placeholder="+1 555 000 0000")
    with col2:
        text_field("contact_phone", "Phone", placeholder="+1 555 000 0000")
        text_field("contact_website", "Website", placeholder="https://yourstore.com")

    text_field("address", "Address", placeholder="Street, city, postal code", multiline=True)
    text_field("details", "Store details", placeholder="Tell customers about your store", multiline=True)
