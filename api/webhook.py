"""
Pass-through proxy to the automation webhook.

The browser cannot call the webhook directly (CORS), so this app forwards
the method and JSON body unchanged and mirrors the webhook's status code and
JSON answer back.

Run with:
    uvicorn api.webhook:app --port 8000
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx
import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from utils.config import FormSettings

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization, X-Requested-With",
}


def create_app(
    webhook_url: Optional[str] = None,
    timeout: float = 30,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    if webhook_url is None:
        webhook_url = FormSettings.from_env().automation_webhook_url

    app = FastAPI(
        title="Store Form Webhook Proxy",
        description="Forwards store submissions to the automation webhook.",
        version="1.0",
    )
    app.state.webhook_url = webhook_url

    @app.api_route("/api/webhook", methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"])
    async def proxy(request: Request) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=CORS_HEADERS)

        try:
            body = None
            if request.method != "GET":
                raw = await request.body()
                body = raw or None
            async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
                resp = await client.request(
                    request.method,
                    app.state.webhook_url,
                    content=body,
                    headers={"Content-Type": "application/json"},
                )
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Proxy error: %s", e)
            return JSONResponse(
                status_code=500,
                content={
                    "success": False,
                    "error": "Internal server error",
                    "message": str(e),
                },
                headers=CORS_HEADERS,
            )

        logger.info("Forwarded %s to webhook: %d", request.method, resp.status_code)
        return JSONResponse(status_code=resp.status_code, content=data, headers=CORS_HEADERS)

    return app


app = create_app()


if __name__ == "__main__":
    settings = FormSettings.from_env()
    logging.basicConfig(level=settings.log_level)
    uvicorn.run(
        "api.webhook:app",
        host=settings.proxy_host,
        port=settings.proxy_port,
        reload=False,
    )
