"""Webhook endpoint for inbound Twilio call events.

Twilio POSTs form-encoded call events here; each request is handled on its
own and answered with a TwiML document.
"""

from typing import Any, Dict, Optional
import logging

from fastapi import APIRouter, Depends, Request, Response

from ..config import Settings, get_settings
from ..handlers import voice as voice_handler
from ..integrations.deepgram import DeepgramService, IntegrationError
from ..schemas import ErrorKind, ProcessingResult, TwilioWebhook

logger = logging.getLogger(__name__)

TWIML_MEDIA_TYPE = "text/xml"

router = APIRouter()


async def _read_payload(request: Request) -> TwilioWebhook:
    # Accept form-encoded payloads (what Twilio sends) and fall back to JSON
    content_type = request.headers.get("content-type", "")
    payload: Dict[str, Any]
    if "application/x-www-form-urlencoded" in content_type or "form-data" in content_type:
        form = await request.form()
        payload = dict(form)
    else:
        body = await request.body()
        payload = await request.json() if body else {}
    return TwilioWebhook.model_validate(payload)


@router.post("/twilio-webhook")
async def twilio_webhook(request: Request, settings: Settings = Depends(get_settings)) -> Response:
    """Process a recording or speech result and tell Twilio what to do next.

    A `RecordingUrl` is fetched and transcribed by Deepgram; otherwise a
    `SpeechResult` is echoed back; with neither the call has just started
    and the caller is welcomed. Any failure ends the call with an apology
    and a 500.
    """
    try:
        webhook = await _read_payload(request)
        logger.info(
            "Received Twilio webhook: recording_url=%s speech_result=%s call_status=%s",
            webhook.RecordingUrl,
            webhook.SpeechResult,
            webhook.CallStatus,
        )

        service = DeepgramService(settings)
        if not await service.initialize():
            raise IntegrationError(ErrorKind.INITIALIZATION_FAILED, "Failed to initialize Deepgram service")

        result: Optional[ProcessingResult] = None
        if webhook.RecordingUrl:
            result = await service.process_audio_from_url(webhook.RecordingUrl)
        elif webhook.SpeechResult:
            result = service.process_speech_text(webhook.SpeechResult)

        logger.info("Processing result: %s", result.kind if result else None)

        action = request.url.path
        if result is not None:
            twiml = voice_handler.result_twiml(result, action)
        else:
            twiml = voice_handler.welcome_twiml(action)
    except IntegrationError as exc:
        logger.error("Error processing Twilio webhook (%s): %s", exc.kind.value, exc)
        return _error_response()
    except Exception:
        logger.exception("Error processing Twilio webhook")
        return _error_response()

    return Response(content=twiml, media_type=TWIML_MEDIA_TYPE)


def _error_response() -> Response:
    return Response(content=voice_handler.error_twiml(), media_type=TWIML_MEDIA_TYPE, status_code=500)
