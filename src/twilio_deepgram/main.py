"""ASGI app entrypoint for the Twilio/Deepgram webhook service.

This module exposes the FastAPI `app` object and includes a
minimal healthcheck endpoint used by orchestration tooling.
"""

import logging

from fastapi import FastAPI

from .api import webhooks as webhooks_router
from .config import settings
from .schemas import HealthResponse

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Twilio Deepgram Webhook")

# Twilio is pointed at /api/twilio-webhook
app.include_router(webhooks_router.router, prefix="/api", tags=["twilio"])


@app.get("/health", response_model=HealthResponse, status_code=200)
async def health() -> HealthResponse:
    """Return a simple health status in a predictable JSON schema."""
    return HealthResponse()


def run() -> None:
    """Serve the app with uvicorn (console script `twilio-deepgram`)."""
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
