"""Tests for webhook payload and processing result schemas."""

import pytest
from pydantic import TypeAdapter, ValidationError

from twilio_deepgram.schemas import (
    EchoedText,
    ErrorKind,
    Failure,
    ProcessingResult,
    Transcription,
    TwilioWebhook,
)


class TestTwilioWebhook:
    def test_defaults(self):
        hook = TwilioWebhook()
        assert hook.RecordingUrl is None
        assert hook.SpeechResult is None
        assert hook.CallStatus is None

    def test_blank_fields_are_absent(self):
        hook = TwilioWebhook(RecordingUrl="", SpeechResult="   ", CallStatus="ringing")
        assert hook.RecordingUrl is None
        assert hook.SpeechResult is None
        assert hook.CallStatus == "ringing"

    def test_extra_twilio_fields_ignored(self):
        hook = TwilioWebhook.model_validate({"CallSid": "CA123", "From": "+15555550100", "SpeechResult": "hi"})
        assert hook.SpeechResult == "hi"
        assert not hasattr(hook, "CallSid")

    def test_url_shape_not_validated(self):
        assert TwilioWebhook(RecordingUrl="not a url").RecordingUrl == "not a url"


class TestProcessingResult:
    adapter = TypeAdapter(ProcessingResult)

    def test_discriminates_on_kind(self):
        assert isinstance(self.adapter.validate_python({"kind": "transcription", "transcription": "hi"}), Transcription)
        assert isinstance(self.adapter.validate_python({"kind": "echoed_text", "text": "a", "response": "b"}), EchoedText)
        assert isinstance(self.adapter.validate_python({"kind": "failure", "error": "boom"}), Failure)

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            self.adapter.validate_python({"kind": "other"})

    def test_failure_defaults(self):
        failure = Failure(error="boom")
        assert failure.success is False
        assert failure.message == "Failed to transcribe audio"
        assert failure.error_kind is ErrorKind.PROVIDER_CALL_FAILED

    def test_success_cannot_be_flipped(self):
        with pytest.raises(ValidationError):
            Transcription(success=False)
