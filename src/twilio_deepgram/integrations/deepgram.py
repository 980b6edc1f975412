"""Deepgram integration service.

Fetches Twilio recordings and forwards the raw bytes to Deepgram's
pre-recorded `/listen` endpoint. A fresh instance is built per webhook
request; the API key is fetched again on every `initialize()` call.

Failures come in two tiers: transcription failures are returned as a
`Failure` result so the call can carry on, while fetch failures and
use-before-initialize raise `IntegrationError`.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Optional

import httpx

from ..config import Settings
from ..schemas import EchoedText, ErrorKind, Failure, ProcessingResult, Transcription
from .credentials import get_api_key

logger = logging.getLogger(__name__)

KeyProvider = Callable[[Settings], Awaitable[Optional[str]]]

AUDIO_CONTENT_TYPE = "audio/wav"


class IntegrationError(Exception):
    """Raised for failures the webhook cannot recover from."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind


class DeepgramService:
    """Wraps every call to the recording host and to Deepgram."""

    def __init__(self, settings: Settings, key_provider: Optional[KeyProvider] = None):
        self.settings = settings
        self.api_url = settings.deepgram_api_url.rstrip("/")
        self._key_provider = key_provider
        self._api_key: Optional[str] = None

    async def initialize(self) -> bool:
        """Fetch the API key. Returns False instead of raising on failure."""
        provider = self._key_provider or get_api_key
        try:
            self._api_key = await provider(self.settings)
        except Exception as exc:
            logger.error("Error initializing Deepgram service: %s", exc)
            self._api_key = None
            return False

        if not self._api_key:
            logger.error("Failed to get API key for Deepgram service")
            return False
        return True

    async def process_audio_from_url(self, audio_url: str) -> ProcessingResult:
        """Download the audio at `audio_url` and transcribe it."""
        try:
            async with httpx.AsyncClient(timeout=self.settings.http_timeout) as client:
                resp = await client.get(audio_url)
        except httpx.HTTPError as exc:
            logger.error("Error fetching audio from %s: %s", audio_url, exc)
            raise IntegrationError(ErrorKind.FETCH_FAILED, f"Failed to fetch audio from URL: {exc}") from exc

        if not resp.is_success:
            logger.error("Audio fetch from %s returned %s", audio_url, resp.status_code)
            raise IntegrationError(
                ErrorKind.FETCH_FAILED,
                f"Failed to fetch audio from URL: {resp.reason_phrase}",
            )

        return await self.transcribe_audio(resp.content)

    async def transcribe_audio(self, audio: bytes) -> ProcessingResult:
        """Send raw audio bytes to Deepgram and normalize the reply."""
        if not self._api_key:
            raise IntegrationError(ErrorKind.INITIALIZATION_FAILED, "API key not initialized")

        headers = {
            "Authorization": f"Token {self._api_key}",
            "Content-Type": AUDIO_CONTENT_TYPE,
        }

        try:
            async with httpx.AsyncClient(timeout=self.settings.http_timeout) as client:
                resp = await client.post(f"{self.api_url}/listen", headers=headers, content=audio)

            if not resp.is_success:
                logger.error("Deepgram failed: %s - %s", resp.status_code, resp.text)
                return Failure(error=f"Deepgram API error: {resp.reason_phrase}")

            data = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Error transcribing audio: %s", exc)
            return Failure(error=str(exc))

        return Transcription(transcription=first_transcript(data), data=data if isinstance(data, dict) else {})

    def process_speech_text(self, speech_text: str) -> EchoedText:
        """Wrap text Twilio already transcribed, with a placeholder reply."""
        return EchoedText(
            text=speech_text,
            response=f'This is a placeholder response for: "{speech_text}"',
        )


def first_transcript(data: Any) -> str:
    """Pull results.channels[0].alternatives[0].transcript, or "" if absent."""
    try:
        transcript = data["results"]["channels"][0]["alternatives"][0]["transcript"]
    except (KeyError, IndexError, TypeError):
        return ""
    return transcript if isinstance(transcript, str) else ""
