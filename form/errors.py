"""
Exceptions raised by the store form core.

Validation errors are recoverable and shown inline; submission errors carry
the collaborator's raw response text so it can be surfaced to the user.
"""

from typing import List, Optional

from models.enums import FileSlot


class FormError(Exception):
    """Base class for every error the form reports to the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StepValidationError(FormError):
    """A step failed validation; `step` is the step to show."""

    def __init__(self, step: int, errors: Optional[List[str]] = None, message: Optional[str] = None):
        super().__init__(
            message or "Please complete all required fields in this step before proceeding."
        )
        self.step = step
        self.errors = list(errors or [])


class MissingImagesError(StepValidationError):
    """Banner or logo was not staged when the form was submitted."""

    def __init__(self, missing: List[FileSlot]):
        super().__init__(
            step=2,
            errors=[f"Store {slot.value} is required" for slot in missing],
            message="Please upload both store banner and logo images",
        )
        self.missing = list(missing)


class FileValidationError(FormError):
    """A selected file cannot be staged in its slot."""

    def __init__(self, slot: FileSlot, message: str):
        super().__init__(message)
        self.slot = slot


class SubmissionError(FormError):
    """A network stage of the submission failed; the attempt is over."""


class MediaUploadError(SubmissionError):
    """The media host rejected an upload or could not be reached."""

    def __init__(self, slot: FileSlot, detail: str):
        super().__init__(f"Failed to upload {slot.value} image: {detail}")
        self.slot = slot
        self.detail = detail


class WebhookError(SubmissionError):
    """The automation webhook (through the proxy) did not accept the payload."""

    def __init__(self, detail: str, status_code: Optional[int] = None):
        if status_code is None:
            message = f"Webhook error: {detail}"
        else:
            message = f"Webhook error: {status_code} - {detail}"
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail
