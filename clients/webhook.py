"""
Client for the automation webhook, reached through the proxy endpoint.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from form.errors import WebhookError

logger = logging.getLogger(__name__)


class WebhookClient:
    """Posts the finished submission as JSON."""

    def __init__(
        self,
        url: str,
        timeout: float = 30,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._url = url
        self._timeout = timeout
        self._transport = transport

    @property
    def url(self) -> str:
        return self._url

    def send(self, payload: Dict[str, Any]) -> Any:
        """
        POST the payload and return the decoded JSON response.

        Raises:
            WebhookError: transport failure or a non-2xx status; the message
                carries the response body text
        """
        headers = {
            "Content-Type": "application/json",
            "X-Requested-With": "XMLHttpRequest",
        }
        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                resp = client.post(self._url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            logger.error("Webhook request failed: %s", e)
            raise WebhookError(str(e)) from e

        if resp.is_error:
            logger.error("Webhook returned %d: %s", resp.status_code, resp.text)
            raise WebhookError(resp.text, status_code=resp.status_code)

        try:
            return resp.json()
        except ValueError as e:
            raise WebhookError(f"Invalid JSON response: {resp.text}", status_code=resp.status_code) from e
