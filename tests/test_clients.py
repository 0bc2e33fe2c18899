"""
Tests for the Cloudinary and webhook clients against a mocked transport.
"""

import json

import httpx
import pytest

from clients.media import CloudinaryClient
from clients.webhook import WebhookClient
from conftest import make_staged
from form.errors import MediaUploadError, WebhookError
from models.enums import FileSlot


def _cloudinary(handler):
    return CloudinaryClient(
        "demo-cloud",
        "demo-preset",
        transport=httpx.MockTransport(handler),
        clock=lambda: 1710498600.5,
    )


class TestCloudinaryClient:

    def test_upload_returns_secure_url(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["body"] = request.content
            return httpx.Response(200, json={
                "secure_url": "https://res.cloudinary.com/demo-cloud/image/upload/banner.png",
            })

        url = _cloudinary(handler).upload(make_staged(FileSlot.BANNER))

        assert url == "https://res.cloudinary.com/demo-cloud/image/upload/banner.png"
        assert seen["url"] == "https://api.cloudinary.com/v1_1/demo-cloud/image/upload"
        body = seen["body"]
        assert b'name="upload_preset"\r\n\r\ndemo-preset' in body
        assert b'name="folder"\r\n\r\nclasima-stores/banner' in body
        assert b'name="public_id"\r\n\r\n1710498600500-banner' in body
        assert b'filename="banner.png"' in body

    def test_public_id(self):
        client = _cloudinary(lambda r: httpx.Response(200))
        assert client.public_id(make_staged(FileSlot.LOGO)) == "1710498600500-logo"
        assert client.provider_name == "cloudinary"

    def test_error_status_carries_body_text(self):
        def handler(request):
            return httpx.Response(400, text='{"error":{"message":"Upload preset not found"}}')

        with pytest.raises(MediaUploadError) as exc:
            _cloudinary(handler).upload(make_staged(FileSlot.LOGO))

        assert exc.value.slot == FileSlot.LOGO
        assert "Upload preset not found" in exc.value.message
        assert exc.value.message.startswith("Failed to upload logo image: ")

    def test_transport_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(MediaUploadError, match="connection refused"):
            _cloudinary(handler).upload(make_staged(FileSlot.BANNER))

    def test_missing_secure_url(self):
        with pytest.raises(MediaUploadError, match="Unexpected response"):
            _cloudinary(lambda r: httpx.Response(200, json={"public_id": "x"})).upload(
                make_staged(FileSlot.BANNER)
            )


class TestWebhookClient:

    def test_posts_json(self):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["headers"] = request.headers
            seen["payload"] = json.loads(request.content)
            return httpx.Response(200, json={"success": True})

        client = WebhookClient("http://proxy.test/api/webhook", transport=httpx.MockTransport(handler))
        assert client.send({"store_name": "Corner Bakery"}) == {"success": True}

        assert seen["method"] == "POST"
        assert seen["payload"] == {"store_name": "Corner Bakery"}
        assert seen["headers"]["content-type"] == "application/json"
        assert seen["headers"]["x-requested-with"] == "XMLHttpRequest"

    def test_error_status(self):
        client = WebhookClient(
            "http://proxy.test/api/webhook",
            transport=httpx.MockTransport(lambda r: httpx.Response(500, text="workflow crashed")),
        )
        with pytest.raises(WebhookError) as exc:
            client.send({})
        assert exc.value.status_code == 500
        assert exc.value.message == "Webhook error: 500 - workflow crashed"

    def test_invalid_json(self):
        client = WebhookClient(
            "http://proxy.test/api/webhook",
            transport=httpx.MockTransport(lambda r: httpx.Response(200, text="OK")),
        )
        with pytest.raises(WebhookError, match="Invalid JSON response"):
            client.send({})

    def test_transport_failure(self):
        def handler(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        client = WebhookClient("http://proxy.test/api/webhook", transport=httpx.MockTransport(handler))
        with pytest.raises(WebhookError) as exc:
            client.send({})
        assert exc.value.status_code is None
