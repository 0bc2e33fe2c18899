"""
Step 2: Store images — banner and logo.

Files are only staged here; they are uploaded to the media host on submit.
"""

import streamlit as st

from models.enums import FileSlot, Severity
from validators.files import ALLOWED_MIME_TYPES, format_file_size
from .handlers import on_file_selected, on_remove_file
from .state import get_session, upload_key

SLOT_HINTS = {
    FileSlot.BANNER: "Recommended 1230×350px, PNG/JPG/WEBP, at least 50KB, max 8MB.",
    FileSlot.LOGO: "Recommended 140×140px, PNG/JPG/WEBP, at least 10KB, max 8MB.",
}


def _render_slot(slot: FileSlot):
    st.markdown(f"#### {slot.label} *")
    staged = get_session().staged(slot)

    if staged is None:
        st.file_uploader(
            f"Upload {slot.value}",
            type=[t.split("/")[1] for t in ALLOWED_MIME_TYPES],
            key=upload_key(slot),
            on_change=on_file_selected,
            args=(slot,),
            label_visibility="collapsed",
        )
        st.caption(SLOT_HINTS[slot])
        return

    with st.container(border=True):
        col_img, col_info = st.columns([1, 2])
        with col_img:
            st.image(staged.content)
        with col_info:
            st.markdown(f"**{staged.name}**")
            meta = format_file_size(staged.size)
            if staged.width and staged.height:
                meta += f" · {staged.width}×{staged.height}px"
            st.caption(meta)

            advisory = st.session_state.form_image_advisories.get(slot)
            if advisory and advisory.recommendation:
                if advisory.severity == Severity.WARNING:
                    st.warning(advisory.recommendation, icon="⚠️")
                else:
                    st.info(advisory.recommendation, icon="ℹ️")
            elif advisory:
                st.success("Image dimensions look great!", icon="✅")

            st.button(
                "✖ Remove",
                key=f"remove_{slot.value}",
                on_click=on_remove_file,
                args=(slot,),
            )


def render():
    st.subheader("2. Store Images")
    _render_slot(FileSlot.BANNER)
    _render_slot(FileSlot.LOGO)
