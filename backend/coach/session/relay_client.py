"""
HTTP client for the prompt relay with an environment-configurable URL.

Environment variables:
- RELAY_URL (default: http://localhost:8000/api/generate-prompt)
"""

from typing import Optional

import httpx

from ..config import settings
from .capabilities import RelayClient


class HttpRelayClient(RelayClient):
    def __init__(self, url: Optional[str] = None, timeout: float = 30.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.url = url or settings.RELAY_URL
        self.timeout = timeout
        self.transport = transport

    async def generate_prompt(self, transcription: str, topic: str) -> dict:
        # Error statuses still carry a JSON body ({"error": ...}); hand it back as-is.
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.post(self.url, json={"transcription": transcription, "topic": topic})
            return response.json()
