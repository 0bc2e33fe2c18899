"""
The single owned state object of the store form.

`FormSession` is immutable: every handler takes the current session and
returns the next one. Rendering reads from it and never writes to it.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Dict, Optional

from models.enums import FileSlot, SocialPlatform
from models.schema import (
    StoreFormData,
    ImageAsset,
    OpeningHours,
    ContactInfo,
    SocialMedia,
    StagedFile,
)
from validators.rules import enforce_limit
from validators.slug import slugify

TOTAL_STEPS = 4

TEXT_FIELDS = (
    "store_name",
    "store_slug",
    "slogan",
    "store_category",
    "opening_hours",
    "contact_email",
    "contact_phone",
    "contact_whatsapp",
    "contact_website",
    "address",
    "details",
) + tuple(p.field_id for p in SocialPlatform)


def _initial_validation() -> Dict[int, bool]:
    # Social links are optional, so the last step starts out valid
    return {1: False, 2: False, 3: False, 4: True}


def _empty_slots() -> Dict[FileSlot, Optional[StagedFile]]:
    return {FileSlot.BANNER: None, FileSlot.LOGO: None}


@dataclass(frozen=True)
class FormSession:
    """Field values, current step, validation flags and staged images."""
    values: Dict[str, str] = field(default_factory=lambda: {f: "" for f in TEXT_FIELDS})
    current_step: int = 1
    step_validation: Dict[int, bool] = field(default_factory=_initial_validation)
    staged_files: Dict[FileSlot, Optional[StagedFile]] = field(default_factory=_empty_slots)
    slug_manually_edited: bool = False

    def value(self, field_id: str) -> str:
        return (self.values.get(field_id) or "").strip()

    def staged(self, slot: FileSlot) -> Optional[StagedFile]:
        return self.staged_files.get(FileSlot(slot))

    def with_step(self, step: int) -> "FormSession":
        return replace(self, current_step=max(1, min(TOTAL_STEPS, step)))

    def with_validation(self, step: int, valid: bool) -> "FormSession":
        flags = dict(self.step_validation)
        flags[step] = valid
        return replace(self, step_validation=flags)


def new_session() -> FormSession:
    return FormSession()


def set_field(session: FormSession, field_id: str, value: str) -> FormSession:
    """
    Apply one field edit.

    Editing the slug marks it as manually edited, which stops it from
    following the store name until the form is reset.
    """
    if field_id not in TEXT_FIELDS:
        raise ValueError(f"Unknown form field: {field_id}")

    values = dict(session.values)
    values[field_id] = enforce_limit(field_id, value or "")
    manually_edited = session.slug_manually_edited

    if field_id == "store_slug":
        manually_edited = True
    elif field_id == "store_name" and values[field_id] and not manually_edited:
        values["store_slug"] = slugify(values[field_id])

    return replace(session, values=values, slug_manually_edited=manually_edited)


def stage_file(session: FormSession, staged: StagedFile) -> FormSession:
    """Put an accepted file in its slot, replacing any previous one."""
    slots = dict(session.staged_files)
    slots[staged.slot] = staged
    return replace(session, staged_files=slots)


def remove_file(session: FormSession, slot: FileSlot) -> FormSession:
    slots = dict(session.staged_files)
    slots[FileSlot(slot)] = None
    return replace(session, staged_files=slots)


def reset_session(session: Optional[FormSession] = None) -> FormSession:
    """Blank form on step 1; clears the manual-slug flag and staged files."""
    return FormSession()


def iso_timestamp(now: datetime) -> str:
    """UTC ISO-8601 with milliseconds and a Z suffix."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def collect_form_data(
    session: FormSession,
    now: Optional[datetime] = None,
    banner_url: str = "",
    logo_url: str = "",
) -> StoreFormData:
    """Assemble the payload-shaped snapshot of the current field values."""
    now = now or datetime.now(timezone.utc)
    v = session.value
    return StoreFormData(
        store_banner=ImageAsset.banner(banner_url),
        store_logo=ImageAsset.logo(logo_url),
        opening_hours=OpeningHours(status=v("opening_hours")),
        store_name=v("store_name"),
        store_slug=v("store_slug"),
        slogan=v("slogan"),
        store_category=v("store_category"),
        contact=ContactInfo(
            email=v("contact_email"),
            phone=v("contact_phone"),
            whatsapp=v("contact_whatsapp"),
            website=v("contact_website"),
        ),
        address=v("address"),
        details=v("details"),
        media=SocialMedia(**{p.value: v(p.field_id) for p in SocialPlatform}),
        submission_timestamp=iso_timestamp(now),
        current_step_completed=session.current_step,
    )


def values_from_form_data(data: StoreFormData) -> Dict[str, str]:
    """Flatten a snapshot back into field values; empty values are skipped."""
    flat = {
        "store_name": data.store_name,
        "store_slug": data.store_slug,
        "slogan": data.slogan,
        "store_category": data.store_category,
        "opening_hours": data.opening_hours.status,
        "details": data.details,
        "address": data.address,
        "contact_email": data.contact.email,
        "contact_phone": data.contact.phone,
        "contact_whatsapp": data.contact.whatsapp,
        "contact_website": data.contact.website,
    }
    for platform in SocialPlatform:
        flat[platform.field_id] = getattr(data.media, platform.value)
    return {k: val for k, val in flat.items() if val}
