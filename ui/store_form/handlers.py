"""
Widget callbacks. Each one reads the widget, runs a FormSession transition
and commits the result; none of them render anything.
"""

import logging

import streamlit as st

from form import analytics
from form.draft import describe_saved_files, restore_session
from form.errors import FileValidationError
from form.session import set_field, stage_file, remove_file, reset_session
from form.steps import next_step, prev_step, go_to_step, StepOutcome
from models.enums import FileSlot, Severity
from validators.files import accept_file, measure_dimensions
from validators.rules import validate_field
from .state import (
    commit,
    clear_uploaders,
    get_autosave,
    get_draft_store,
    get_notifier,
    get_session,
    guarded,
    upload_key,
    widget_key,
)

logger = logging.getLogger(__name__)


def apply_outcome(outcome: StepOutcome, action: str):
    before = get_session().current_step
    commit(outcome.session)
    if outcome.error:
        get_notifier().error(outcome.error)
    if outcome.moved:
        st.query_params["step"] = str(outcome.session.current_step)
        analytics.track(action, step=outcome.session.current_step, from_step=before)


@guarded
def on_field_change(field_id: str):
    value = st.session_state.get(widget_key(field_id), "")
    session = set_field(get_session(), field_id, value)
    commit(session)

    errors = st.session_state.form_field_errors
    result = validate_field(field_id, session.values[field_id])
    if result.valid:
        errors.pop(field_id, None)
    else:
        errors[field_id] = result.message
        if not result.blocking and field_id.startswith("media_"):
            get_notifier().error(result.message)

    # The slug follows the name, so its inline error follows too
    if field_id == "store_name" and not session.slug_manually_edited:
        slug_result = validate_field("store_slug", session.values["store_slug"])
        if slug_result.valid:
            errors.pop("store_slug", None)
        else:
            errors["store_slug"] = slug_result.message


@guarded
def on_file_selected(slot: FileSlot):
    upload = st.session_state.get(upload_key(slot))
    notifier = get_notifier()

    if upload is None:
        on_remove_file(slot)
        return

    try:
        staged = accept_file(upload.name, upload.getvalue(), upload.type, slot)
    except FileValidationError as e:
        notifier.error(e.message)
        return

    staged, advisory = measure_dimensions(staged)
    st.session_state.form_image_advisories[slot] = advisory
    commit(stage_file(get_session(), staged))
    notifier.success(f"{slot.label} uploaded successfully!")
    if advisory.recommendation:
        notifier.notify(advisory.recommendation, advisory.severity)


@guarded
def on_remove_file(slot: FileSlot):
    commit(remove_file(get_session(), slot))
    st.session_state.form_image_advisories.pop(slot, None)
    st.session_state.form_upload_nonce += 1
    get_notifier().info(f"{slot.label} removed")


@guarded
def on_next():
    apply_outcome(next_step(get_session()), "step_forward")


@guarded
def on_prev():
    apply_outcome(prev_step(get_session()), "step_backward")


@guarded
def on_goto(step: int):
    apply_outcome(go_to_step(get_session(), step), "step_jump")


@guarded
def on_restore_draft():
    record = st.session_state.form_pending_draft
    st.session_state.form_pending_draft = None
    if record is None:
        return
    commit(restore_session(record), autosave=False)
    st.session_state.form_field_errors = {}
    clear_uploaders()

    notifier = get_notifier()
    notifier.success("Draft restored successfully")
    saved_files = describe_saved_files(record)
    if saved_files:
        names = ", ".join(f"{slot.value} ({name})" for slot, name in saved_files.items())
        notifier.notify(f"Please re-select your images: {names}", Severity.WARNING)
    analytics.track("draft_restored", step=record.current_step)


@guarded
def on_decline_draft():
    # The draft stays stored for a later visit
    st.session_state.form_pending_draft = None
    analytics.track("draft_declined")


def on_request_reset():
    st.session_state.form_confirm_reset = True


def on_cancel_reset():
    st.session_state.form_confirm_reset = False


@guarded
def on_confirm_reset():
    st.session_state.form_confirm_reset = False
    reset_form()
    get_notifier().success("Form has been reset")


def reset_form():
    """Blank session, no staged files, no draft."""
    get_autosave().cancel()
    commit(reset_session(get_session()), autosave=False)
    get_draft_store().clear()
    st.session_state.form_field_errors = {}
    clear_uploaders()
    st.query_params["step"] = "1"
