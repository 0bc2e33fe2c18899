"""
Streamlit glue for the store form: services, the FormSession and widgets.

The FormSession lives in st.session_state and is only replaced through
`commit()`. Widget values are projected from it at the start of each run.
"""

import functools
import logging

import streamlit as st

from clients.media import CloudinaryClient
from clients.webhook import WebhookClient
from form import analytics
from form.draft import (
    AutosaveScheduler,
    DraftStore,
    JsonFileStorage,
    browser_draft_key,
    resolve_draft_id,
)
from form.notifications import LoadingState, NotificationCenter, describe_error
from form.session import FormSession, TEXT_FIELDS, new_session
from form.submission import SubmissionPipeline
from models.enums import FileSlot
from utils.config import FormSettings

logger = logging.getLogger(__name__)


@st.cache_resource
def get_settings() -> FormSettings:
    return FormSettings.from_env()


@st.cache_resource
def get_draft_storage() -> JsonFileStorage:
    """One directory for all drafts; each browser writes its own key."""
    return JsonFileStorage(get_settings().draft_dir)


def browser_draft_id() -> str:
    """Draft id carried in the page URL, so a reload finds the same draft."""
    draft_id = resolve_draft_id(st.query_params.get("draft"))
    if st.query_params.get("draft") != draft_id:
        st.query_params["draft"] = draft_id
    return draft_id


def _build_services():
    settings = get_settings()
    store = DraftStore(
        get_draft_storage(),
        key=browser_draft_key(settings.draft_key, browser_draft_id()),
    )
    st.session_state.form_draft_store = store
    st.session_state.form_autosave = AutosaveScheduler(store, delay=settings.autosave_delay)
    st.session_state.form_pipeline = SubmissionPipeline(
        media_client=CloudinaryClient(
            settings.cloudinary_cloud_name,
            settings.cloudinary_upload_preset,
            timeout=settings.http_timeout,
        ),
        webhook_client=WebhookClient(settings.webhook_proxy_url, timeout=settings.http_timeout),
        draft_store=store,
    )


def get_draft_store() -> DraftStore:
    return st.session_state.form_draft_store


def get_autosave() -> AutosaveScheduler:
    return st.session_state.form_autosave


def get_pipeline() -> SubmissionPipeline:
    return st.session_state.form_pipeline


def init_state():
    """Per-browser-session state, created once."""
    if "form_draft_store" not in st.session_state:
        _build_services()

    defaults = {
        "form_session": new_session(),
        "form_notifier": NotificationCenter(),
        "form_loading": LoadingState(),
        "form_field_errors": {},
        "form_image_advisories": {},
        "form_upload_nonce": 0,
        "form_sync_pending": True,
        "form_draft_checked": False,
        "form_pending_draft": None,
        "form_confirm_reset": False,
        "form_submitted": None,
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


def get_session() -> FormSession:
    return st.session_state.form_session


def get_notifier() -> NotificationCenter:
    return st.session_state.form_notifier


def widget_key(field_id: str) -> str:
    return f"field_{field_id}"


def upload_key(slot: FileSlot) -> str:
    return f"upload_{slot.value}_{st.session_state.form_upload_nonce}"


def commit(session: FormSession, autosave: bool = True):
    """Replace the FormSession and schedule a draft write."""
    st.session_state.form_session = session
    st.session_state.form_sync_pending = True
    if autosave:
        get_autosave().schedule(session)


def sync_widgets():
    """Project field values into widget state; must run before widgets render."""
    if not st.session_state.form_sync_pending:
        return
    session = get_session()
    for field_id in TEXT_FIELDS:
        st.session_state[widget_key(field_id)] = session.values.get(field_id, "")
    st.session_state.form_sync_pending = False


def clear_uploaders():
    """File uploaders cannot be reset directly; give them fresh keys."""
    st.session_state.form_upload_nonce += 1
    st.session_state.form_image_advisories = {}


def guarded(func):
    """Route unexpected errors in a handler to the notification surface."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except Exception as e:
            logger.exception("Error in %s", func.__name__)
            get_notifier().error(describe_error(e))
            analytics.track(
                "error",
                step=get_session().current_step,
                context=func.__name__,
                error_message=str(e),
            )
            return None
    return wrapper
