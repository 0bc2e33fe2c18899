"""
Step 4: Social media links (all optional).
"""

import streamlit as st

from models.enums import SocialPlatform
from .widgets import text_field

PLATFORM_LABELS = {
    SocialPlatform.FACEBOOK: ("Facebook", "https://facebook.com/yourstore"),
    SocialPlatform.INSTAGRAM: ("Instagram", "https://instagram.com/yourstore"),
    SocialPlatform.TWITTER: ("Twitter / X", "https://x.com/yourstore"),
    SocialPlatform.YOUTUBE: ("YouTube", "https://youtube.com/@yourstore"),
    SocialPlatform.LINKEDIN: ("LinkedIn", "https://linkedin.com/company/yourstore"),
    SocialPlatform.TIKTOK: ("TikTok", "https://tiktok.com/@yourstore"),
    SocialPlatform.PINTEREST: ("Pinterest", "https://pinterest.com/yourstore"),
    SocialPlatform.REDDIT: ("Reddit", "https://reddit.com/r/yourstore"),
}


def render():
    st.subheader("4. Social Media")
    st.caption("Optional. Links that do not look like the platform are flagged but do not block submission.")

    platforms = list(PLATFORM_LABELS.items())
    col1, col2 = st.columns(2)
    for idx, (platform, (label, placeholder)) in enumerate(platforms):
        with col1 if idx % 2 == 0 else col2:
            text_field(platform.field_id, label, placeholder=placeholder)
