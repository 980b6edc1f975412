"""Shared fixtures: settings isolated from the environment and a mocked httpx client."""

from contextlib import contextmanager
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from twilio_deepgram.config import DEFAULT_DEEPGRAM_API_URL, Settings


DEEPGRAM_OK = {
    "metadata": {"request_id": "abc"},
    "results": {
        "channels": [{
            "alternatives": [{"transcript": "turn on the lights", "confidence": 0.97}],
        }],
    },
}


def make_response(status_code=200, json_data=None, content=b"", reason_phrase=None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.is_success = 200 <= status_code < 300
    resp.reason_phrase = reason_phrase or ("OK" if resp.is_success else "Internal Server Error")
    resp.content = content
    resp.text = "" if json_data is None else str(json_data)
    if isinstance(json_data, Exception):
        resp.json.side_effect = json_data
    else:
        resp.json.return_value = json_data
    return resp


@contextmanager
def mock_http(get=None, post=None):
    """Patch httpx.AsyncClient; `get`/`post` are return values or exceptions."""
    with patch("httpx.AsyncClient") as mock_client_cls:
        mock_client = AsyncMock()
        for name, outcome in (("get", get), ("post", post)):
            if isinstance(outcome, Exception):
                setattr(mock_client, name, AsyncMock(side_effect=outcome))
            else:
                setattr(mock_client, name, AsyncMock(return_value=outcome))
        mock_client.__aenter__ = AsyncMock(return_value=mock_client)
        mock_client.__aexit__ = AsyncMock(return_value=None)
        mock_client_cls.return_value = mock_client
        yield mock_client


@pytest.fixture
def settings():
    return Settings(_env_file=None, deepgram_api_url=DEFAULT_DEEPGRAM_API_URL, deepgram_api_key="test-key", deepgram_key_url=None)


@pytest.fixture
def keyless_settings():
    return Settings(_env_file=None, deepgram_api_url=DEFAULT_DEEPGRAM_API_URL, deepgram_api_key=None, deepgram_key_url=None)
