"""
MediaHostClient ABC and the Cloudinary implementation.

Images are uploaded unsigned with an upload preset; the host answers with a
JSON body whose `secure_url` is the hosted image address.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Callable, Optional

import httpx

from form.errors import MediaUploadError
from models.schema import StagedFile

logger = logging.getLogger(__name__)


class MediaHostClient(ABC):
    """Abstract image host."""

    @abstractmethod
    def upload(self, staged: StagedFile) -> str:
        """Upload one staged image and return its hosted URL."""
        ...

    @property
    @abstractmethod
    def provider_name(self) -> str:
        ...


class CloudinaryClient(MediaHostClient):
    """Unsigned uploads to Cloudinary (https://cloudinary.com)."""

    API_URL = "https://api.cloudinary.com/v1_1/{cloud_name}/image/upload"
    FOLDER_PREFIX = "clasima-stores"

    def __init__(
        self,
        cloud_name: str,
        upload_preset: str,
        timeout: float = 30,
        transport: Optional[httpx.BaseTransport] = None,
        clock: Callable[[], float] = time.time,
    ):
        self._cloud_name = cloud_name
        self._upload_preset = upload_preset
        self._timeout = timeout
        self._transport = transport
        self._clock = clock

    @property
    def provider_name(self) -> str:
        return "cloudinary"

    @property
    def upload_url(self) -> str:
        return self.API_URL.format(cloud_name=self._cloud_name)

    def public_id(self, staged: StagedFile) -> str:
        return f"{int(self._clock() * 1000)}-{staged.slot.value}"

    def upload(self, staged: StagedFile) -> str:
        slot = staged.slot
        form = {
            "upload_preset": self._upload_preset,
            "folder": f"{self.FOLDER_PREFIX}/{slot.value}",
            "public_id": self.public_id(staged),
        }
        files = {"file": (staged.name, staged.content, staged.mime_type)}

        logger.info("Uploading %s image %s (%d bytes)", slot.value, staged.name, staged.size)
        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                resp = client.post(self.upload_url, data=form, files=files)
        except httpx.HTTPError as e:
            logger.error("Upload of %s failed: %s", slot.value, e)
            raise MediaUploadError(slot, str(e)) from e

        if resp.is_error:
            logger.error("Media host rejected %s: %d %s", slot.value, resp.status_code, resp.text)
            raise MediaUploadError(slot, resp.text)

        try:
            url = resp.json()["secure_url"]
        except (ValueError, KeyError, TypeError) as e:
            raise MediaUploadError(slot, f"Unexpected response from media host: {resp.text}") from e

        logger.info("Uploaded %s image to %s", slot.value, url)
        return url
