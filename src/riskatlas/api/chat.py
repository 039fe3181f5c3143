"""Chat relay endpoint implementation."""

import logging

from fastapi import APIRouter, Request
from pydantic import ValidationError

from riskatlas.core.service import ChatContext, ChatRelayService, get_system_prompt
from riskatlas.core.service.metrics import CHAT_REQUESTS_TOTAL, OUTCOME_OK

from . import API_PREFIX
from .deps import AppConfigDep, LLMFactoryDep
from .exceptions import (
    ApiKeyNotConfigured,
    InvalidRequestBody,
    MessageRequired,
    MethodNotAllowed,
    UpstreamError,
)
from .models import ChatRequest, ChatResponse, TokenUsage

logger = logging.getLogger(__name__)

# OPTIONS never reaches the router; the CORS middleware answers it.
# Methods outside this list are rejected by the router and rendered as
# the same 405 in ``handle_http_exception``.
CHAT_ROUTE_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"]

router = APIRouter(prefix=API_PREFIX, tags=["chat"])


def _summarize_errors(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    )


async def parse_chat_request(request: Request) -> ChatRequest:
    """Validate the JSON body, mapping failures to 400 error results.

    An empty body, a non-object body or a missing/empty ``message`` is
    ``MessageRequired``; malformed JSON or a bad ``history`` is
    ``InvalidRequestBody``.
    """
    body = await request.body()
    if not body.strip():
        raise MessageRequired()

    try:
        payload = await request.json()
    except ValueError as exc:
        raise InvalidRequestBody(details="Body is not valid JSON") from exc

    try:
        return ChatRequest.model_validate(payload)
    except ValidationError as exc:
        if any(not err["loc"] or err["loc"][0] == "message" for err in exc.errors()):
            raise MessageRequired() from exc
        raise InvalidRequestBody(details=_summarize_errors(exc)) from exc


@router.api_route("/chat", methods=CHAT_ROUTE_METHODS)
async def chat(
    request: Request,
    config: AppConfigDep,
    llm_factory: LLMFactoryDep,
) -> ChatResponse:
    """Relay one user message (plus history) to the upstream model.

    Blocks until the upstream reply arrives or fails; there is no
    streaming and no retry.
    """
    if request.method != "POST":
        raise MethodNotAllowed()

    chat_request = await parse_chat_request(request)

    api_key = config.api_key
    if not api_key:
        logger.error("ANTHROPIC_API_KEY not set")
        raise ApiKeyNotConfigured()

    logger.info(
        "Calling upstream model %s (history_turns=%d, message_chars=%d)",
        config.llm.model_name,
        len(chat_request.history),
        len(chat_request.message),
    )
    logger.debug("Chat message: %s", chat_request.message)

    try:
        service = ChatRelayService(
            llm_factory(config.llm, api_key),
            get_system_prompt(),
            model_name=config.llm.model_name,
        )
        result = await service.reply(
            ChatContext(
                message=chat_request.message,
                history=chat_request.history_messages(),
            )
        )
    except Exception as exc:
        logger.exception("Chat relay failed")
        raise UpstreamError.from_exception(exc) from exc

    CHAT_REQUESTS_TOTAL.labels(outcome=OUTCOME_OK).inc()
    return ChatResponse(
        response=result.text,
        usage=TokenUsage(
            input_tokens=result.input_tokens,
            output_tokens=result.output_tokens,
        ),
    )
