"""
Store form core: session state, step transitions, drafts and submission.

Submodules are imported directly (``from form.steps import next_step``);
only the error types are re-exported here.
"""

from .errors import (
    FormError,
    StepValidationError,
    MissingImagesError,
    FileValidationError,
    SubmissionError,
    MediaUploadError,
    WebhookError,
)

__all__ = [
    "FormError",
    "StepValidationError",
    "MissingImagesError",
    "FileValidationError",
    "SubmissionError",
    "MediaUploadError",
    "WebhookError",
]
