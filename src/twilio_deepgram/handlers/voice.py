"""TwiML documents returned to Twilio.

Three shapes: a welcome prompt for a call that has just started, a result
prompt that reads back what was processed and listens again, and a final
apology used for every failure.
"""
from typing import Optional
from xml.sax.saxutils import escape

from ..schemas import EchoedText, ProcessingResult, Transcription

XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n'

WELCOME_MESSAGE = "Welcome to the Deepgram conversation demo."
ERROR_MESSAGE = "Sorry, there was an error processing your request."


def _gather(action: str, prompt: str) -> str:
    # Twilio POSTs the caller's next utterance back to `action` as SpeechResult
    action = escape(action, {'"': "&quot;"})
    return (
        f'  <Gather input="speech" action="{action}" method="POST" timeout="5">\n'
        f"    <Say>{prompt}</Say>\n"
        "  </Gather>\n"
    )


def welcome_twiml(action: str) -> str:
    """Greet the caller and open a speech prompt."""
    return (
        XML_HEADER
        + "<Response>\n"
        + f"  <Say>{WELCOME_MESSAGE}</Say>\n"
        + _gather(action, "Please speak after the tone.")
        + "</Response>"
    )


def _read_back(result: ProcessingResult) -> Optional[str]:
    if isinstance(result, EchoedText):
        return result.response
    if isinstance(result, Transcription) and result.transcription:
        return f"You said: {result.transcription}"
    return None


def result_twiml(result: ProcessingResult, action: str) -> str:
    """Speak the processing result, pause, and listen again.

    Args:
        result: Outcome of processing the recording or speech text.
        action: Path the next <Gather> posts back to.

    Returns:
        A TwiML XML string.
    """
    lines = [f"  <Say>I received your input. Here's what Deepgram processed: {escape(result.message)}</Say>\n"]
    read_back = _read_back(result)
    if read_back:
        lines.append(f"  <Say>{escape(read_back)}</Say>\n")
    lines.append('  <Pause length="1"/>\n')

    return (
        XML_HEADER
        + "<Response>\n"
        + "".join(lines)
        + _gather(action, "Please speak again after the tone.")
        + "</Response>"
    )


def error_twiml() -> str:
    """Apologize and end the call flow."""
    return XML_HEADER + "<Response>\n" + f"  <Say>{ERROR_MESSAGE}</Say>\n" + "</Response>"
