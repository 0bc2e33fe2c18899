"""
Submission pipeline.

Ties together step validation, the media host client, payload assembly and
the webhook client into one run that:

  1. Re-validates all four steps
  2. Requires both banner and logo to be staged
  3. Uploads banner, then logo
  4. Assembles the payload with the hosted URLs
  5. Posts it through the proxy
  6. Clears the draft and resets the form

Any failure ends the attempt; nothing is retried.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from clients.media import MediaHostClient
from clients.webhook import WebhookClient
from models.enums import FileSlot
from models.schema import StoreFormData
from .draft import DraftStore
from .errors import MissingImagesError, StepValidationError
from .session import FormSession, collect_form_data, reset_session
from .steps import validate_all_steps
from . import analytics

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int], None]


@dataclass
class SubmissionResult:
    """What a successful run leaves behind."""
    session: FormSession
    payload: StoreFormData
    response: Any
    banner_url: str
    logo_url: str


class SubmissionPipeline:
    """
    Runs one submission attempt.

    Usage:
        pipeline = SubmissionPipeline(
            media_client=CloudinaryClient("demo", "preset"),
            webhook_client=WebhookClient("http://localhost:8000/api/webhook"),
            draft_store=store,
        )
        result = pipeline.run(session, on_progress=lambda msg, pct: ...)
    """

    def __init__(
        self,
        media_client: MediaHostClient,
        webhook_client: WebhookClient,
        draft_store: Optional[DraftStore] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self._media = media_client
        self._webhook = webhook_client
        self._drafts = draft_store
        self._clock = clock

    def run(
        self,
        session: FormSession,
        on_progress: Optional[ProgressCallback] = None,
    ) -> SubmissionResult:
        """
        Submit the form.

        Raises:
            StepValidationError: a step does not validate; `.step` is the
                first failing step
            MissingImagesError: banner or logo not staged (step 2)
            MediaUploadError: an upload failed
            WebhookError: the webhook did not accept the payload
        """
        progress = on_progress or (lambda message, pct: None)

        checked = validate_all_steps(session)
        if not checked.ok:
            step = checked.failed_step or checked.session.current_step
            raise StepValidationError(
                step=step,
                errors=checked.result.messages(),
                message="Please complete all required fields before submitting",
            )
        session = checked.session

        missing = [slot for slot in (FileSlot.BANNER, FileSlot.LOGO) if session.staged(slot) is None]
        if missing:
            raise MissingImagesError(missing)

        progress("Preparing your store...", 10)

        progress("Uploading banner image...", 10)
        banner_url = self._media.upload(session.staged(FileSlot.BANNER))
        progress("Uploading logo image...", 40)
        logo_url = self._media.upload(session.staged(FileSlot.LOGO))
        progress("Preparing store data...", 70)

        payload = collect_form_data(
            session,
            self._clock(),
            banner_url=banner_url,
            logo_url=logo_url,
        )

        progress("Submitting to marketplace...", 80)
        response = self._webhook.send(payload.model_dump(mode="json"))
        progress("Store created successfully!", 100)

        logger.info("Store '%s' submitted", payload.store_slug)
        analytics.track("form_submitted", step=session.current_step, store_slug=payload.store_slug)

        if self._drafts is not None:
            self._drafts.clear()

        return SubmissionResult(
            session=reset_session(session),
            payload=payload,
            response=response,
            banner_url=banner_url,
            logo_url=logo_url,
        )

