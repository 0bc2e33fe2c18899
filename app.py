"""
Main Streamlit application — store registration wizard.
"""

import logging

import streamlit as st
from ui.store_form import main as store_form
from utils.config import FormSettings


settings = FormSettings.from_env()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Page configuration
st.set_page_config(
    page_title="Clasima — Add Your Store",
    page_icon="🏪",
    layout="centered",
    initial_sidebar_state="expanded",
)

# Custom CSS
st.markdown("""
<style>
    /* Step indicator buttons on one line */
    div[data-testid="stHorizontalBlock"] .stButton > button {
        min-height: 44px;
        font-size: 13px;
        white-space: nowrap;
    }

    /* Form fields keep iOS from zooming on focus */
    input, select, textarea {
        font-size: 16px !important;
    }

    /* Image previews in the upload step */
    [data-testid="stImage"] img {
        border-radius: 6px;
        max-height: 160px;
        object-fit: cover;
    }
</style>
""", unsafe_allow_html=True)


def main():
    """Main application entrypoint."""

    with st.sidebar:
        st.markdown("### 🏪 Clasima Dashboard")
        st.caption("Register your store in four steps. Progress is saved as a draft automatically.")

    store_form.render()


if __name__ == "__main__":
    main()
