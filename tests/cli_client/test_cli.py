"""Tests for the terminal client: HTTP client, formatter and history."""

import io
import json

import httpx
import pytest

from riskatlas_cli.__main__ import parse_args
from riskatlas_cli.chat_cli import RiskAtlasCLI
from riskatlas_cli.client import ChatAPIClient
from riskatlas_cli.config import CLIConfig
from riskatlas_cli.formatter import ResponseFormatter


def _client_with(handler) -> ChatAPIClient:
    return ChatAPIClient(CLIConfig(), transport=httpx.MockTransport(handler))


# =========================================================================
# ChatAPIClient
# =========================================================================


class TestChatAPIClient:
    @pytest.mark.asyncio
    async def test_posts_message_and_history(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={"response": "Hello!", "usage": {"input_tokens": 5, "output_tokens": 3}},
            )

        client = _client_with(handler)
        history = [{"role": "user", "content": "a"}, {"role": "assistant", "content": "b"}]
        event = await client.chat("hi", history)
        await client.close()

        assert event == {
            "type": "reply",
            "response": "Hello!",
            "usage": {"input_tokens": 5, "output_tokens": 3},
        }
        (request,) = seen
        assert request.method == "POST"
        assert str(request.url) == "http://localhost:8000/api/chat"
        assert json.loads(request.content) == {"message": "hi", "history": history}

    @pytest.mark.asyncio
    async def test_error_payload(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                500, json={"error": "Failed to process request", "details": "timeout"}
            )

        client = _client_with(handler)
        event = await client.chat("hi", [])
        await client.close()

        assert event["type"] == "error"
        assert event["message"] == "Failed to process request"
        assert event["details"] == "timeout"
        assert event["code"] == "HTTP_500"

    @pytest.mark.asyncio
    async def test_non_json_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="Bad Gateway")

        client = _client_with(handler)
        event = await client.chat("hi", [])
        await client.close()

        assert event["message"] == "HTTP 502"
        assert event["details"] is None

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        client = _client_with(handler)
        event = await client.chat("hi", [])
        await client.close()

        assert event["type"] == "error"
        assert event["code"] == "CONNECTION_ERROR"


# =========================================================================
# ResponseFormatter
# =========================================================================


class TestResponseFormatter:
    def test_reply_with_usage(self):
        out = io.StringIO()
        ResponseFormatter(out).handle_event(
            {"type": "reply", "response": "Hello!", "usage": {"input_tokens": 5, "output_tokens": 3}}
        )
        assert "Hello!" in out.getvalue()
        assert "[tokens: 5 in / 3 out]" in out.getvalue()

    def test_error_with_details(self):
        out = io.StringIO()
        ResponseFormatter(out).handle_event(
            {"type": "error", "message": "Failed to process request", "details": "timeout"}
        )
        assert "Error: Failed to process request (timeout)" in out.getvalue()


# =========================================================================
# RiskAtlasCLI
# =========================================================================


class _FakeClient:
    def __init__(self, events: list[dict]) -> None:
        self.events = list(events)
        self.requests: list[tuple[str, list[dict]]] = []
        self.closed = False

    async def chat(self, message: str, history: list[dict]) -> dict:
        self.requests.append((message, history))
        return self.events.pop(0)

    async def close(self) -> None:
        self.closed = True


class TestRiskAtlasCLI:
    @pytest.mark.asyncio
    async def test_history_grows_on_success_only(self):
        fake = _FakeClient(
            [
                {"type": "reply", "response": "A1", "usage": {}},
                {"type": "error", "message": "Failed to process request"},
                {"type": "reply", "response": "A3", "usage": {}},
            ]
        )
        cli = RiskAtlasCLI(
            CLIConfig(),
            input_stream=io.StringIO("q1\nq2\n\nq3\nexit\n"),
            output_stream=io.StringIO(),
            client=fake,
        )

        await cli.run()

        assert [message for message, _ in fake.requests] == ["q1", "q2", "q3"]
        assert fake.requests[0][1] == []
        assert fake.requests[1][1] == [
            {"role": "user", "content": "q1"},
            {"role": "assistant", "content": "A1"},
        ]
        assert fake.requests[2][1] == fake.requests[1][1]
        assert cli.history[-2:] == [
            {"role": "user", "content": "q3"},
            {"role": "assistant", "content": "A3"},
        ]
        assert fake.closed

    @pytest.mark.asyncio
    async def test_eof_ends_session(self):
        fake = _FakeClient([])
        out = io.StringIO()
        cli = RiskAtlasCLI(
            CLIConfig(), input_stream=io.StringIO(""), output_stream=out, client=fake
        )

        await cli.run()

        assert "Goodbye!" in out.getvalue()
        assert fake.requests == []
        assert fake.closed


def test_parse_args_defaults():
    args = parse_args([])
    assert (args.host, args.port, args.api_path, args.debug) == (
        "localhost",
        8000,
        "/api/chat",
        False,
    )


def test_parse_args_overrides():
    args = parse_args(["--host", "api.internal", "--port", "9000", "--debug"])
    assert (args.host, args.port, args.debug) == ("api.internal", 9000, True)


def test_help_describes_riskatlas_client(capsys):
    with pytest.raises(SystemExit):
        parse_args(["--help"])
    out = capsys.readouterr().out
    assert "RiskAtlas assistant" in out
    assert "riskatlas-cli --host api.internal --port 9000" in out
