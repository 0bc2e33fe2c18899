"""
Main controller for the store registration wizard.
Owns navigation between the four steps, the draft prompt and submission.
"""

import logging

import streamlit as st

from form import analytics
from form.errors import StepValidationError, SubmissionError
from form.steps import (
    TOTAL_STEPS,
    STEP_TITLES,
    completion_percentage,
    go_to_step,
    is_step_accessible,
    parse_step_param,
    progress_percent,
    step_indicator,
    submit_or_advance,
)
from models.enums import Severity
from ui.store_form import basic_info_screen, images_screen, contact_screen, social_screen
from .handlers import (
    apply_outcome,
    on_cancel_reset,
    on_confirm_reset,
    on_decline_draft,
    on_goto,
    on_next,
    on_prev,
    on_request_reset,
    on_restore_draft,
)
from .state import (
    clear_uploaders,
    commit,
    get_autosave,
    get_draft_store,
    get_notifier,
    get_pipeline,
    get_session,
    guarded,
    init_state,
    sync_widgets,
)

logger = logging.getLogger(__name__)

SCREENS = {
    1: basic_info_screen,
    2: images_screen,
    3: contact_screen,
    4: social_screen,
}


def _first_run():
    """Look for a draft and honour a ?step= link, once per browser session."""
    if st.session_state.form_draft_checked:
        return
    st.session_state.form_draft_checked = True
    st.session_state.form_pending_draft = get_draft_store().load()

    requested = parse_step_param(st.query_params.get("step"))
    if requested is not None:
        outcome = go_to_step(get_session(), requested)
        if outcome.ok:
            commit(outcome.session, autosave=False)

    analytics.track("form_started", step=get_session().current_step)


def render_draft_prompt():
    record = st.session_state.form_pending_draft
    if record is None:
        return
    saved_at = get_draft_store().saved_at(record).astimezone()
    with st.container(border=True):
        st.info(
            f"Found a saved draft from {saved_at:%Y-%m-%d %H:%M}. "
            "Would you like to restore it?"
        )
        col1, col2, _ = st.columns([1, 1, 3])
        with col1:
            st.button("Restore draft", type="primary", on_click=on_restore_draft)
        with col2:
            st.button("Not now", on_click=on_decline_draft)


def render_notifications():
    notifier = get_notifier()
    for note in notifier.active():
        col_msg, col_close = st.columns([12, 1])
        with col_msg:
            if note.severity == Severity.ERROR:
                st.error(note.message, icon=note.icon)
            elif note.severity == Severity.WARNING:
                st.warning(note.message, icon=note.icon)
            elif note.severity == Severity.SUCCESS:
                st.success(note.message, icon=note.icon)
            else:
                st.info(note.message, icon=note.icon)
        with col_close:
            st.button("✖", key=f"dismiss_{note.id}", on_click=notifier.dismiss, args=(note.id,))


def render_step_indicator():
    session = get_session()
    st.progress(progress_percent(session.current_step) / 100)
    cols = st.columns(TOTAL_STEPS)
    for col, entry in zip(cols, step_indicator(session)):
        icon = {"active": "🔵", "completed": "✅", "pending": "⚪"}[entry["state"]]
        with col:
            st.button(
                f"{icon} {entry['step']}. {entry['title']}",
                key=f"goto_{entry['step']}",
                on_click=on_goto,
                args=(entry["step"],),
                disabled=not is_step_accessible(session, entry["step"]),
                use_container_width=True,
            )


def render_success():
    result = st.session_state.form_submitted
    if not result:
        return False
    st.balloons()
    st.success("🎉 Store created successfully!")
    st.markdown(f"""
    - **Store**: {result['store_name']}
    - **URL slug**: `{result['store_slug']}`
    - **Banner**: {result['banner_url']}
    - **Logo**: {result['logo_url']}
    """)

    def _another():
        st.session_state.form_submitted = None
        get_notifier().success("Ready to create another store!")

    st.button("Create another store", type="primary", on_click=_another)
    return True


@guarded
def submit():
    """Run the submission pipeline; returns True when the page must rerun."""
    session = get_session()
    notifier = get_notifier()

    outcome = submit_or_advance(session)
    if not outcome.ok or session.current_step < TOTAL_STEPS:
        apply_outcome(outcome, "step_forward")
        return True

    loading = st.session_state.form_loading
    loading.show("Preparing your store...")
    bar = st.progress(0, text=loading.message)

    def on_progress(message, pct):
        loading.update(message, pct)
        bar.progress(loading.progress, text=loading.message)

    # A pending autosave must not recreate the draft after a successful submit
    get_autosave().cancel()
    try:
        result = get_pipeline().run(outcome.session, on_progress=on_progress)
    except StepValidationError as e:
        loading.hide()
        commit(outcome.session.with_step(e.step))
        notifier.error(e.message)
        return True
    except SubmissionError as e:
        loading.hide()
        commit(outcome.session)
        notifier.error(f"Failed to create store: {e.message}")
        logger.error("Form submission error: %s", e.message)
        analytics.track("error", step=session.current_step, context="submission", error_message=e.message)
        return True

    loading.hide()
    commit(result.session, autosave=False)
    clear_uploaders()
    st.session_state.form_field_errors = {}
    st.session_state.form_submitted = {
        "store_name": result.payload.store_name,
        "store_slug": result.payload.store_slug,
        "banner_url": result.banner_url,
        "logo_url": result.logo_url,
    }
    st.query_params["step"] = "1"
    return True


def render_navigation():
    session = get_session()
    col_l, _, col_r = st.columns([1, 3, 1])
    with col_l:
        if session.current_step > 1:
            st.button("⬅️ Back", on_click=on_prev, use_container_width=True)
    with col_r:
        if session.current_step < TOTAL_STEPS:
            st.button("Next ➡️", type="primary", on_click=on_next, use_container_width=True)
        elif st.button("🚀 Create Store", type="primary", use_container_width=True):
            if submit():
                st.rerun()


def render_sidebar():
    session = get_session()
    with st.sidebar:
        st.markdown("---")
        pct = completion_percentage(session)
        st.markdown("#### 📋 Progress")
        st.progress(pct / 100, text=f"Form is {pct}% complete")
        st.caption(f"Step {session.current_step} of {TOTAL_STEPS}: {STEP_TITLES[session.current_step]}")

        st.markdown("---")
        if not st.session_state.form_confirm_reset:
            st.button("🔄 Reset Form", type="secondary", on_click=on_request_reset)
        else:
            st.warning("Are you sure you want to reset the form? All entered data will be lost.")
            col1, col2 = st.columns(2)
            with col1:
                st.button("Reset", type="primary", on_click=on_confirm_reset)
            with col2:
                st.button("Cancel", on_click=on_cancel_reset)


def render():
    st.header("🏪 Add Your Store")

    init_state()
    _first_run()
    sync_widgets()

    render_notifications()
    if render_success():
        return

    render_draft_prompt()
    render_step_indicator()

    SCREENS[get_session().current_step].render()

    st.markdown("---")
    render_navigation()
    render_sidebar()
