"""
Step controller for the four-step store form.

Steps are linear: forward moves are gated on the current step validating,
backward moves are always allowed. Each function returns a StepOutcome with
the next session; nothing here touches the UI.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional

from models.enums import FileSlot, SocialPlatform
from validators.rules import FieldValidator, ValidationIssue, ValidationResult, REQUIRED_FIELDS
from .session import FormSession, TOTAL_STEPS

STEP_TITLES = {
    1: "Basic Information",
    2: "Store Images",
    3: "Contact Details",
    4: "Social Media",
}

STEP_REQUIRED_FIELDS = {
    1: ("store_name", "store_slug", "store_category"),
    3: ("contact_email", "address"),
}

# Optional URL fields checked per step; problems are warnings only
STEP_OPTIONAL_URL_FIELDS = {
    3: ("contact_website",),
    4: tuple(p.field_id for p in SocialPlatform),
}

STEP_INCOMPLETE_MESSAGE = "Please complete all required fields in this step before proceeding."

_validator = FieldValidator()


@dataclass
class StepOutcome:
    """Result of a step transition."""
    session: FormSession
    result: ValidationResult = field(default_factory=ValidationResult)
    moved: bool = False
    error: Optional[str] = None
    failed_step: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _validate_images(session: FormSession) -> ValidationResult:
    errors = [
        ValidationIssue(
            severity="error",
            message=f"Store {slot.value} is required",
            field=f"store_{slot.value}",
            step=2,
        )
        for slot in (FileSlot.BANNER, FileSlot.LOGO)
        if session.staged(slot) is None
    ]
    return ValidationResult(errors=errors)


def check_step(session: FormSession, step: int) -> ValidationResult:
    """Validate a step's content without changing the session."""
    if step == 2:
        return _validate_images(session)

    result = _validator.validate_fields(
        STEP_REQUIRED_FIELDS.get(step, ()), session.values, step=step
    )
    optional = _validator.validate_fields(
        STEP_OPTIONAL_URL_FIELDS.get(step, ()), session.values, step=step
    )
    # URL problems never block, even though the field reports invalid
    return ValidationResult(
        errors=result.errors,
        warnings=result.warnings + optional.errors + optional.warnings,
    )


def validate_step(session: FormSession, step: Optional[int] = None) -> StepOutcome:
    """
    Validate a step and record its flag.

    The flag is set only when the step validates; a failure clears it.
    """
    step = session.current_step if step is None else step
    result = check_step(session, step)
    updated = session.with_validation(step, result.is_valid)

    if result.is_valid:
        return StepOutcome(session=updated, result=result)

    if step == 2:
        error = "Missing required images: " + ", ".join(result.messages())
    else:
        error = STEP_INCOMPLETE_MESSAGE
    return StepOutcome(session=updated, result=result, error=error, failed_step=step)


def next_step(session: FormSession) -> StepOutcome:
    outcome = validate_step(session)
    if not outcome.ok:
        return outcome
    if session.current_step < TOTAL_STEPS:
        outcome.session = outcome.session.with_step(session.current_step + 1)
        outcome.moved = True
    return outcome


def prev_step(session: FormSession) -> StepOutcome:
    if session.current_step <= 1:
        return StepOutcome(session=session)
    return StepOutcome(session=session.with_step(session.current_step - 1), moved=True)


def parse_step_param(raw: Optional[str]) -> Optional[int]:
    """Step number from a `?step=` link, or None when it is not a plain integer."""
    if not raw or not raw.isascii() or not raw.isdecimal():
        return None
    return int(raw)


def is_step_accessible(session: FormSession, step: int) -> bool:
    """Any earlier step, or the next one when the current step validates."""
    if step < 1 or step > TOTAL_STEPS:
        return False
    if step <= session.current_step:
        return True
    return step == session.current_step + 1 and check_step(session, session.current_step).is_valid


def go_to_step(session: FormSession, step: int) -> StepOutcome:
    """Jump via the step indicator."""
    if step < 1 or step > TOTAL_STEPS:
        return StepOutcome(session=session, error=f"Step {step} does not exist")

    if step <= session.current_step:
        return StepOutcome(
            session=session.with_step(step),
            moved=step != session.current_step,
        )

    if step == session.current_step + 1:
        return next_step(session)

    return StepOutcome(
        session=session,
        error="Please complete the steps in order.",
    )


def validate_all_steps(session: FormSession) -> StepOutcome:
    """Validate every step; the first failing step becomes the current one."""
    combined = ValidationResult()
    for step in range(1, TOTAL_STEPS + 1):
        outcome = validate_step(session, step)
        session = outcome.session
        combined = combined.merge(outcome.result)
        if not outcome.ok:
            outcome.session = session.with_step(step)
            outcome.moved = step != session.current_step
            outcome.result = combined
            return outcome
    return StepOutcome(session=session, result=combined)


def submit_or_advance(session: FormSession) -> StepOutcome:
    """
    Keyboard-shortcut behaviour: advance when not on the last step,
    otherwise validate everything so the caller can submit.
    """
    if session.current_step < TOTAL_STEPS:
        return next_step(session)
    return validate_all_steps(session)


def progress_percent(step: int) -> float:
    return (step - 1) / (TOTAL_STEPS - 1) * 100


def step_indicator(session: FormSession) -> List[Dict]:
    """Indicator entries: active, completed (before current) or pending."""
    entries = []
    for step in range(1, TOTAL_STEPS + 1):
        if step == session.current_step:
            state = "active"
        elif step < session.current_step:
            state = "completed"
        else:
            state = "pending"
        entries.append({"step": step, "title": STEP_TITLES[step], "state": state})
    return entries


def completion_percentage(session: FormSession) -> int:
    """Share of required fields and images filled in, 0..100."""
    total = len(REQUIRED_FIELDS) + 2
    done = sum(1 for f in REQUIRED_FIELDS if session.value(f))
    done += sum(1 for slot in (FileSlot.BANNER, FileSlot.LOGO) if session.staged(slot))
    return round(done / total * 100)
