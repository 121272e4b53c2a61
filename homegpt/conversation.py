"""JSON chat and question-answering routes."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from fastapi.concurrency import run_in_threadpool

from .config import Settings
from .errors import ParseError, TransportError
from .inference import InferenceClient
from .models import AskRequest, AskResponse, ChatMessage, ChatRouteRequest, ChatRouteResponse
from .single_chat import settings_dependency

logger = logging.getLogger(__name__)

router = APIRouter(tags=["conversation"])


async def _reply(call, *args) -> str:
    try:
        return await run_in_threadpool(call, *args)
    except ParseError as e:
        logger.error(f"Could not parse inference response: {e}")
        raise HTTPException(status_code=500, detail="Error parsing response")
    except TransportError as e:
        logger.error(f"Inference request failed: {e}")
        raise HTTPException(status_code=500, detail="Error sending request")


@router.post("/chat", response_model=ChatRouteResponse)
async def chat(request: ChatRouteRequest, settings: Settings = Depends(settings_dependency)):
    """
    Continue a conversation whose history the caller sends along.

    The system prompt goes first, then the earlier turns, then the new user message.
    """
    messages = []
    if request.system_prompt:
        messages.append(ChatMessage(role="system", content=request.system_prompt))
    messages.extend(request.messages)
    messages.append(ChatMessage(role="user", content=request.message))

    answer = await _reply(InferenceClient(settings).chat, messages)

    return ChatRouteResponse(
        message=answer,
        user_message=request.message,
        timestamp=datetime.now(timezone.utc),
        conversation_length=len(messages),
    )


@router.post("/ask", response_model=AskResponse)
async def ask(request: AskRequest, settings: Settings = Depends(settings_dependency)):
    answer = await _reply(InferenceClient(settings).ask, request.question, request.context)
    return AskResponse(message=answer, question=request.question, timestamp=datetime.now(timezone.utc))
