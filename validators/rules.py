"""
Validation rules for store registration fields.
"""

import re
from typing import List, Dict, Any, Optional, Iterable, Mapping
from dataclasses import dataclass, field
from urllib.parse import urlparse

from models.enums import SocialPlatform


REQUIRED_FIELDS = (
    "store_name",
    "store_slug",
    "store_category",
    "contact_email",
    "address",
)

URL_FIELDS = ("contact_website",) + tuple(p.field_id for p in SocialPlatform)

CHARACTER_LIMITS = {
    "store_name": 100,
    "slogan": 150,
    "details": 1000,
}

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")

SOCIAL_URL_PATTERNS = {
    SocialPlatform.FACEBOOK: re.compile(r"^https?://(www\.)?facebook\.com/.+"),
    SocialPlatform.INSTAGRAM: re.compile(r"^https?://(www\.)?instagram\.com/.+"),
    SocialPlatform.TWITTER: re.compile(r"^https?://(www\.)?(twitter\.com|x\.com)/.+"),
    SocialPlatform.YOUTUBE: re.compile(r"^https?://(www\.)?youtube\.com/.+"),
    SocialPlatform.LINKEDIN: re.compile(r"^https?://(www\.)?linkedin\.com/.+"),
    SocialPlatform.TIKTOK: re.compile(r"^https?://(www\.)?tiktok\.com/.+"),
    SocialPlatform.PINTEREST: re.compile(r"^https?://(www\.)?pinterest\.com/.+"),
    SocialPlatform.REDDIT: re.compile(r"^https?://(www\.)?reddit\.com/.+"),
}


@dataclass
class FieldResult:
    """Outcome of checking one field value."""
    valid: bool
    message: Optional[str] = None
    # Optional URL fields report problems without holding the form back
    blocking: bool = True


@dataclass
class ValidationIssue:
    """A single validation issue."""
    severity: str  # "error" or "warning"
    message: str
    field: Optional[str] = None
    step: Optional[int] = None


@dataclass
class ValidationResult:
    """Result of validation."""
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if validation passed (no errors, warnings allowed)."""
        return len(self.errors) == 0

    @property
    def total_issues(self) -> int:
        """Total number of issues."""
        return len(self.errors) + len(self.warnings)

    def messages(self) -> List[str]:
        return [e.message for e in self.errors]

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        return ValidationResult(
            errors=self.errors + other.errors,
            warnings=self.warnings + other.warnings,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for storage/display."""
        return {
            "is_valid": self.is_valid,
            "error_count": len(self.errors),
            "warning_count": len(self.warnings),
            "errors": [
                {"message": e.message, "field": e.field, "step": e.step}
                for e in self.errors
            ],
            "warnings": [
                {"message": w.message, "field": w.field, "step": w.step}
                for w in self.warnings
            ],
        }


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


def is_absolute_url(url: str) -> bool:
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc)


def matches_platform(url: str, platform: SocialPlatform) -> bool:
    pattern = SOCIAL_URL_PATTERNS.get(platform)
    return bool(pattern.match(url)) if pattern else True


class FieldValidator:
    """Validator for individual form fields."""

    def __init__(self, required_fields: Iterable[str] = REQUIRED_FIELDS):
        self.required_fields = frozenset(required_fields)

    def validate_field(self, field_id: str, value: Optional[str]) -> FieldResult:
        """
        Validate a single field value.

        Args:
            field_id: Form field identifier (e.g. "store_slug")
            value: Raw input; surrounding whitespace is ignored

        Returns:
            FieldResult; URL problems come back with blocking=False
        """
        value = (value or "").strip()

        if field_id in self.required_fields and not value:
            return FieldResult(False, "This field is required")

        if field_id in URL_FIELDS:
            return self._validate_url(field_id, value)

        if not value:
            return FieldResult(True)

        if field_id == "store_name":
            if len(value) < 2:
                return FieldResult(False, "Store name must be at least 2 characters long")
            if len(value) > 100:
                return FieldResult(False, "Store name must be less than 100 characters")

        elif field_id == "store_slug":
            if not SLUG_PATTERN.match(value):
                return FieldResult(
                    False, "Slug can only contain lowercase letters, numbers, and hyphens"
                )
            if len(value) < 2:
                return FieldResult(False, "Slug must be at least 2 characters long")

        elif field_id == "contact_email":
            if not is_valid_email(value):
                return FieldResult(False, "Please enter a valid email address")

        elif field_id == "address":
            if len(value) < 10:
                return FieldResult(False, "Please enter a complete address")

        return FieldResult(True)

    def validate_fields(
        self,
        field_ids: Iterable[str],
        values: Mapping[str, str],
        step: Optional[int] = None,
    ) -> ValidationResult:
        """
        Validate several fields at once.

        Blocking failures become errors; non-blocking ones become warnings.
        """
        errors: List[ValidationIssue] = []
        warnings: List[ValidationIssue] = []

        for field_id in field_ids:
            result = self.validate_field(field_id, values.get(field_id, ""))
            if result.valid:
                continue
            issue = ValidationIssue(
                severity="error" if result.blocking else "warning",
                message=result.message or "Invalid value",
                field=field_id,
                step=step,
            )
            if result.blocking:
                errors.append(issue)
            else:
                warnings.append(issue)

        return ValidationResult(errors=errors, warnings=warnings)

    def _validate_url(self, field_id: str, value: str) -> FieldResult:
        if not value:
            return FieldResult(True)

        platform = None
        if field_id.startswith("media_"):
            platform = SocialPlatform(field_id[len("media_"):])

        if not is_absolute_url(value) or (platform and not matches_platform(value, platform)):
            if platform:
                message = f"Please enter a valid {platform.value} URL"
            else:
                message = "Please enter a valid URL"
            return FieldResult(False, message, blocking=False)

        return FieldResult(True)


_default_validator = FieldValidator()


def validate_field(field_id: str, value: Optional[str]) -> FieldResult:
    """Validate one field with the default required-field set."""
    return _default_validator.validate_field(field_id, value)


def character_counter(field_id: str, value: str) -> Optional[Dict[str, Any]]:
    """
    Counter text and level for fields with a character limit.

    Level is "danger" under 20 characters left, "warning" under 50.
    """
    limit = CHARACTER_LIMITS.get(field_id)
    if limit is None:
        return None
    current = len(value or "")
    remaining = limit - current
    if current >= limit:
        text = f"{limit}/{limit} characters (maximum reached)"
    else:
        text = f"{current}/{limit} characters"
    level = ""
    if remaining < 20:
        level = "danger"
    elif remaining < 50:
        level = "warning"
    return {"text": text, "level": level, "current": min(current, limit), "limit": limit}


def enforce_limit(field_id: str, value: str) -> str:
    """Truncate input to the field's character limit."""
    limit = CHARACTER_LIMITS.get(field_id)
    if limit is None or value is None:
        return value
    return value[:limit]
