"""Deepgram API key retrieval.

Keys come either from a key endpoint (the pattern used by Deepgram starter
apps, which mint short-lived keys from an `/api/authenticate` route) or,
when no endpoint is configured, straight from the environment.
"""

import logging
from typing import Optional

import httpx

from ..config import Settings

logger = logging.getLogger(__name__)


async def get_api_key(settings: Settings) -> Optional[str]:
    """Return a Deepgram API key, or None when none is configured.

    Raises httpx errors if the key endpoint is unreachable or answers
    with a non-2xx status.
    """
    if not settings.deepgram_key_url:
        return settings.deepgram_api_key

    async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
        resp = await client.get(settings.deepgram_key_url)
        resp.raise_for_status()
        key = resp.json().get("key")

    if not key:
        logger.error("Key endpoint %s returned no key", settings.deepgram_key_url)
    return key
