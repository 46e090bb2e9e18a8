"""
PixelRelay API - HTTP transport around the purchase pipeline.

Routes:
- POST /api/meta-purchase: bearer-authenticated purchase intake
- GET  /api/ir: WhatsApp redirect carrying UTM references
- GET  /healthz: liveness probe

The pipeline returns typed results; this module only maps them to
status codes and handles auth and CORS framing.
"""

from __future__ import annotations

import hmac
import json
import logging
import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse, Response

from pixelrelay.connectors import (
    PipelineOutcome,
    PipelineResult,
    PurchasePipeline,
    RelayConfig,
)
from pixelrelay_api.redirect import build_whatsapp_message, build_whatsapp_url

logger = logging.getLogger(__name__)

CORS_METHODS = ["GET", "OPTIONS", "PATCH", "DELETE", "POST", "PUT"]
CORS_HEADERS = [
    "X-CSRF-Token",
    "X-Requested-With",
    "Accept",
    "Accept-Version",
    "Content-Length",
    "Content-MD5",
    "Content-Type",
    "Date",
    "X-Api-Version",
    "Authorization",
]

STATUS_BY_OUTCOME = {
    PipelineOutcome.SUCCESS: 200,
    PipelineOutcome.VALIDATION_ERROR: 400,
    PipelineOutcome.UPSTREAM_REJECTION: 400,
    PipelineOutcome.CONFIGURATION_ERROR: 500,
    PipelineOutcome.UNEXPECTED_ERROR: 500,
}


def status_for(result: PipelineResult) -> int:
    """Map a pipeline outcome to an HTTP status code."""
    return STATUS_BY_OUTCOME[result.outcome]


def is_authorized(authorization: str | None, admin_token: str | None) -> bool:
    """Check a Bearer Authorization header against the admin token."""
    if not admin_token or not authorization:
        return False
    scheme, _, token = authorization.partition(" ")
    if scheme != "Bearer" or not token:
        return False
    return hmac.compare_digest(token.encode("utf-8"), admin_token.encode("utf-8"))


async def _read_payload(request: Request) -> dict:
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/x-www-form-urlencoded"):
        form = await request.form()
        return dict(form)

    body = await request.body()
    if not body:
        return {}
    try:
        payload = json.loads(body)
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


def create_app(
    config: RelayConfig | None = None,
    pipeline: PurchasePipeline | None = None,
) -> FastAPI:
    """Create the HTTP application.

    Args:
        config: Relay configuration. Defaults to RelayConfig.from_env().
        pipeline: Purchase pipeline. Defaults to PurchasePipeline(config).

    Returns:
        Configured FastAPI application.
    """
    config = config or RelayConfig.from_env()
    pipeline = pipeline or PurchasePipeline(config)

    app = FastAPI(title="PixelRelay", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )

    @app.options("/api/meta-purchase")
    async def meta_purchase_preflight() -> Response:
        return Response(status_code=200)

    @app.post("/api/meta-purchase")
    async def meta_purchase(request: Request) -> JSONResponse:
        if not is_authorized(request.headers.get("authorization"), config.admin_token):
            return JSONResponse(
                status_code=401,
                content={"success": False, "error": "Unauthorized. Invalid token."},
            )

        payload = await _read_payload(request)
        result = await pipeline.process(payload)
        return JSONResponse(status_code=status_for(result), content=result.to_dict())

    @app.api_route("/api/meta-purchase", methods=["GET", "PUT", "PATCH", "DELETE"])
    async def meta_purchase_wrong_method() -> JSONResponse:
        return JSONResponse(
            status_code=405,
            content={"success": False, "message": "Method not allowed"},
            headers={"Allow": "OPTIONS, POST"},
        )

    @app.get("/api/ir")
    async def whatsapp_redirect(
        phone: str | None = None,
        utm_campaign: str | None = None,
        utm_content: str | None = None,
    ) -> Response:
        destination = phone or config.whatsapp_fallback_phone
        if not destination:
            return JSONResponse(
                status_code=400,
                content={"success": False, "error": "No destination phone configured"},
            )
        message = build_whatsapp_message(config.whatsapp_greeting, utm_campaign, utm_content)
        return RedirectResponse(build_whatsapp_url(destination, message), status_code=307)

    @app.get("/healthz")
    async def healthz() -> dict:
        return {"status": "ok"}

    return app


def main():
    """Run the API server."""
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    # httpx logs request URLs at INFO; the access token is in the query string
    logging.getLogger("httpx").setLevel(logging.WARNING)
    uvicorn.run(
        create_app(),
        host=os.environ.get("PIXELRELAY_HOST", "0.0.0.0"),
        port=int(os.environ.get("PIXELRELAY_PORT", "8000")),
    )


if __name__ == "__main__":
    main()
