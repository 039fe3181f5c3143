"""API client for the RiskAtlas chat endpoint."""

import logging

import httpx

from .config import CLIConfig

logger = logging.getLogger(__name__)

EVENT_REPLY = "reply"
EVENT_ERROR = "error"


class ChatAPIClient:
    """Client for the non-streaming ``/api/chat`` endpoint.

    The server keeps no conversation state, so the caller passes the
    full ``history`` on every request.
    """

    def __init__(
        self, config: CLIConfig, transport: httpx.AsyncBaseTransport | None = None
    ):
        self.config = config
        self.client = httpx.AsyncClient(timeout=config.timeout, transport=transport)

    async def chat(self, message: str, history: list[dict[str, str]]) -> dict:
        """Send one message and return a ``reply`` or ``error`` event dict."""
        url = self.config.chat_url
        payload = {"message": message, "history": history}
        logger.debug("POST %s (history_turns=%d)", url, len(history))

        try:
            response = await self.client.post(url, json=payload)
        except httpx.TimeoutException:
            return {"type": EVENT_ERROR, "message": "Request timed out.", "code": "TIMEOUT"}
        except httpx.ConnectError as e:
            return {
                "type": EVENT_ERROR,
                "message": f"Connection error: {e}",
                "code": "CONNECTION_ERROR",
            }

        logger.debug("Response status: %s", response.status_code)
        logger.debug("Response headers: %s", dict(response.headers))

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if response.status_code != 200:
            return {
                "type": EVENT_ERROR,
                "message": body.get("error") or f"HTTP {response.status_code}",
                "details": body.get("details"),
                "code": f"HTTP_{response.status_code}",
            }

        return {
            "type": EVENT_REPLY,
            "response": body.get("response", ""),
            "usage": body.get("usage") or {},
        }

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()
