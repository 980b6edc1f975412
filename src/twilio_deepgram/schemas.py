"""Pydantic schemas for webhook payloads and processing results."""

import enum
from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ErrorKind(str, enum.Enum):
    INITIALIZATION_FAILED = "initialization_failed"
    FETCH_FAILED = "fetch_failed"
    PROVIDER_CALL_FAILED = "provider_call_failed"


class TwilioWebhook(BaseModel):
    """The subset of a Twilio voice webhook this service acts on."""

    model_config = ConfigDict(extra="ignore")

    RecordingUrl: Optional[str] = None
    SpeechResult: Optional[str] = None
    CallStatus: Optional[str] = None

    @field_validator("RecordingUrl", "SpeechResult", "CallStatus", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        # Twilio sends empty form fields for values it does not have
        if isinstance(value, str) and not value.strip():
            return None
        return value


class Transcription(BaseModel):
    """Audio fetched from a recording and transcribed by Deepgram."""

    kind: Literal["transcription"] = "transcription"
    success: Literal[True] = True
    message: str = "Audio transcribed successfully"
    transcription: str = ""
    data: Dict[str, Any] = Field(default_factory=dict)


class EchoedText(BaseModel):
    """Speech already transcribed by Twilio, passed through with a placeholder reply."""

    kind: Literal["echoed_text"] = "echoed_text"
    success: Literal[True] = True
    message: str = "Speech processed successfully"
    text: str
    response: str


class Failure(BaseModel):
    """Deepgram could not transcribe the audio."""

    kind: Literal["failure"] = "failure"
    success: Literal[False] = False
    message: str = "Failed to transcribe audio"
    error: str
    error_kind: ErrorKind = ErrorKind.PROVIDER_CALL_FAILED


ProcessingResult = Annotated[Union[Transcription, EchoedText, Failure], Field(discriminator="kind")]


class HealthResponse(BaseModel):
    status: str = "ok"
