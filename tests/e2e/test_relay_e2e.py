"""End-to-end checks against a running server and the real upstream model."""

import httpx
import pytest

CHAT_TIMEOUT = 120

pytestmark = pytest.mark.e2e


class TestRelayEndToEnd:
    @pytest.mark.asyncio
    async def test_single_turn(self, base_url: str):
        async with httpx.AsyncClient(timeout=CHAT_TIMEOUT) as client:
            response = await client.post(
                f"{base_url}/api/chat",
                json={"message": "What is the Insurability Score? One sentence."},
                headers={"Origin": "https://riskatlas.ai"},
            )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "https://riskatlas.ai"
        body = response.json()
        assert body["response"]
        assert body["usage"]["input_tokens"] > 0
        assert body["usage"]["output_tokens"] > 0

    @pytest.mark.asyncio
    async def test_history_is_forwarded(self, base_url: str):
        history = [
            {"role": "user", "content": "My company is called Zephyr Logistics."},
            {"role": "assistant", "content": "Noted, Zephyr Logistics."},
        ]
        async with httpx.AsyncClient(timeout=CHAT_TIMEOUT) as client:
            response = await client.post(
                f"{base_url}/api/chat",
                json={
                    "message": "Repeat my company name and nothing else.",
                    "history": history,
                },
            )

        assert response.status_code == 200
        assert "Zephyr" in response.json()["response"]

    @pytest.mark.asyncio
    async def test_method_gate(self, base_url: str):
        async with httpx.AsyncClient(timeout=CHAT_TIMEOUT) as client:
            response = await client.get(f"{base_url}/api/chat")

        assert response.status_code == 405
        assert response.json() == {"error": "Method not allowed"}
