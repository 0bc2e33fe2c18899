"""
Tests for the form session and the step controller.
"""

import pytest

from conftest import make_staged
from form.session import (
    collect_form_data,
    iso_timestamp,
    remove_file,
    reset_session,
    set_field,
    stage_file,
)
from form.steps import (
    completion_percentage,
    go_to_step,
    is_step_accessible,
    next_step,
    parse_step_param,
    prev_step,
    progress_percent,
    step_indicator,
    submit_or_advance,
    validate_all_steps,
    validate_step,
)
from models.enums import FileSlot
from models.schema import StoreFormData


def _fill_step_one(session):
    session = set_field(session, "store_name", "Corner Bakery")
    return set_field(session, "store_category", "food-beverage")


# ===================================================================
# Session transitions
# ===================================================================


class TestSlugFollowsName:

    def test_name_edit_derives_slug(self, session):
        session = set_field(session, "store_name", "My Café!! Shop")
        assert session.values["store_slug"] == "my-caf-shop"
        assert not session.slug_manually_edited

    def test_manual_slug_stops_following(self, session):
        session = set_field(session, "store_name", "Corner Bakery")
        session = set_field(session, "store_slug", "the-corner")
        session = set_field(session, "store_name", "Corner Bakery & Cafe")
        assert session.values["store_slug"] == "the-corner"
        assert session.slug_manually_edited

    def test_clearing_name_keeps_slug(self, session):
        session = set_field(session, "store_name", "Corner Bakery")
        session = set_field(session, "store_name", "")
        assert session.values["store_slug"] == "corner-bakery"

    def test_reset_clears_manual_flag(self, session):
        session = set_field(session, "store_slug", "custom")
        session = reset_session(session)
        assert not session.slug_manually_edited
        session = set_field(session, "store_name", "New Name")
        assert session.values["store_slug"] == "new-name"


def test_set_field_enforces_limit(session):
    session = set_field(session, "slogan", "x" * 300)
    assert len(session.values["slogan"]) == 150


def test_set_field_unknown(session):
    with pytest.raises(ValueError):
        set_field(session, "favourite_colour", "blue")


def test_session_is_not_mutated(session):
    """Transitions return a new session and leave the old one alone."""
    updated = set_field(session, "store_name", "Corner Bakery")
    assert session.values["store_name"] == ""
    assert updated is not session


def test_stage_and_remove_file(session):
    staged = make_staged(FileSlot.BANNER)
    session = stage_file(session, staged)
    assert session.staged(FileSlot.BANNER) is staged
    assert session.staged(FileSlot.LOGO) is None

    session = remove_file(session, FileSlot.BANNER)
    assert session.staged(FileSlot.BANNER) is None


def test_iso_timestamp(fixed_now):
    assert iso_timestamp(fixed_now) == "2024-03-15T10:30:00.000Z"


def test_collect_form_data(filled_session, fixed_now):
    data = collect_form_data(filled_session, fixed_now, banner_url="https://img/b.png")

    assert data.store_name == "Corner Bakery"
    assert data.store_slug == "corner-bakery"
    assert data.contact.email == "hello@cornerbakery.com"
    assert data.media.instagram == "https://instagram.com/cornerbakery"
    assert data.media.facebook == ""
    assert data.store_banner.image_url == "https://img/b.png"
    assert data.store_banner.recommended_size == "1230x350px"
    assert data.store_logo.image_url == ""
    assert data.store_logo.allowed_types == ["png", "jpg", "jpeg", "webp"]
    assert data.submission_timestamp == "2024-03-15T10:30:00.000Z"
    assert data.submission_source == "clasima-dashboard"
    assert data.form_version == "1.0"
    assert data.current_step_completed == 4


def test_payload_example_is_valid():
    """Test the documented example parses as a payload."""
    example = StoreFormData.model_config["json_schema_extra"]["example"]
    data = StoreFormData.model_validate(example)
    assert data.store_slug == "corner-bakery"
    assert data.store_logo.recommended_size == "140x140px"


# ===================================================================
# Navigation
# ===================================================================


def test_next_from_empty_step_one_stays(session):
    """Test an incomplete step blocks forward movement with an error."""
    outcome = next_step(session)

    assert outcome.session.current_step == 1
    assert not outcome.moved
    assert outcome.error == "Please complete all required fields in this step before proceeding."
    fields = {issue.field for issue in outcome.result.errors}
    assert fields == {"store_name", "store_slug", "store_category"}
    assert outcome.session.step_validation[1] is False


def test_next_after_step_one_filled(session):
    outcome = next_step(_fill_step_one(session))

    assert outcome.ok
    assert outcome.moved
    assert outcome.session.current_step == 2
    assert outcome.session.step_validation[1] is True


def test_step_two_requires_images(session):
    session = _fill_step_one(session).with_step(2)
    outcome = next_step(session)
    assert outcome.session.current_step == 2
    assert outcome.error == (
        "Missing required images: Store banner is required, Store logo is required"
    )

    session = stage_file(session, make_staged(FileSlot.BANNER))
    session = stage_file(session, make_staged(FileSlot.LOGO))
    assert next_step(session).session.current_step == 3


def test_bad_website_does_not_block(session):
    session = set_field(session, "contact_email", "a@b.com")
    session = set_field(session, "address", "12 Market Street")
    session = set_field(session, "contact_website", "yourstore")
    session = session.with_step(3)

    outcome = next_step(session)

    assert outcome.ok
    assert outcome.session.current_step == 4
    assert [w.field for w in outcome.result.warnings] == ["contact_website"]


def test_step_four_always_valid(session):
    session = set_field(session.with_step(4), "media_facebook", "https://example.com")
    outcome = validate_step(session)
    assert outcome.ok
    assert outcome.session.step_validation[4] is True
    assert len(outcome.result.warnings) == 1


def test_prev_step(session):
    assert prev_step(session).session.current_step == 1
    assert not prev_step(session).moved

    outcome = prev_step(session.with_step(3))
    assert outcome.moved
    assert outcome.session.current_step == 2


def test_next_on_last_step_stays(filled_session):
    outcome = next_step(filled_session)
    assert outcome.ok
    assert not outcome.moved
    assert outcome.session.current_step == 4


class TestGoToStep:

    def test_backward_always_allowed(self, session):
        outcome = go_to_step(session.with_step(3), 1)
        assert outcome.ok
        assert outcome.session.current_step == 1

    def test_forward_one_requires_valid_step(self, session):
        assert not go_to_step(session, 2).ok
        assert go_to_step(_fill_step_one(session), 2).session.current_step == 2

    def test_cannot_skip_ahead(self, session):
        outcome = go_to_step(_fill_step_one(session), 3)
        assert outcome.error == "Please complete the steps in order."
        assert outcome.session.current_step == 1

    @pytest.mark.parametrize("step", [0, 5, -1])
    def test_out_of_range(self, session, step):
        outcome = go_to_step(session, step)
        assert outcome.error == f"Step {step} does not exist"

    def test_accessible(self, session):
        assert is_step_accessible(session, 1)
        assert not is_step_accessible(session, 2)
        assert is_step_accessible(_fill_step_one(session), 2)
        assert not is_step_accessible(session, 5)


def test_validate_all_first_failure_becomes_current(filled_session):
    session = remove_file(filled_session, FileSlot.LOGO)
    outcome = validate_all_steps(session)

    assert not outcome.ok
    assert outcome.failed_step == 2
    assert outcome.session.current_step == 2
    assert outcome.session.step_validation[1] is True
    assert outcome.session.step_validation[2] is False


def test_validate_all_passes(filled_session):
    outcome = validate_all_steps(filled_session)
    assert outcome.ok
    assert outcome.session.current_step == 4
    assert all(outcome.session.step_validation.values())


def test_submit_or_advance(session, filled_session):
    assert submit_or_advance(_fill_step_one(session)).session.current_step == 2
    assert submit_or_advance(filled_session).ok


# ===================================================================
# Indicator and progress
# ===================================================================


def test_progress_percent():
    assert [progress_percent(s) for s in (1, 2, 3, 4)] == pytest.approx([0, 33.33, 66.67, 100], abs=0.01)


def test_step_indicator(session):
    states = [e["state"] for e in step_indicator(session.with_step(3))]
    assert states == ["completed", "completed", "active", "pending"]


def test_completion_percentage(session, filled_session):
    assert completion_percentage(session) == 0
    assert completion_percentage(filled_session) == 100
    assert completion_percentage(_fill_step_one(session)) == 43


# ===================================================================
# Step links
# ===================================================================


@pytest.mark.parametrize("raw,expected", [
    ("3", 3),
    ("1", 1),
    ("12", 12),
    (None, None),
    ("", None),
    ("two", None),
    ("-1", None),
    ("2.0", None),
    ("²", None),
    ("٣", None),
])
def test_parse_step_param(raw, expected):
    assert parse_step_param(raw) == expected


def test_step_link_out_of_range_is_refused(session):
    """Test a parsed step still goes through the ordinary jump rules."""
    outcome = go_to_step(session, parse_step_param("12"))
    assert not outcome.ok
    assert outcome.session.current_step == 1
