"""
HTTP clients for the media host and the automation webhook.
"""

from .media import MediaHostClient, CloudinaryClient
from .webhook import WebhookClient

__all__ = ["MediaHostClient", "CloudinaryClient", "WebhookClient"]
