"""Routes for the single-chat endpoint."""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse

from .config import Settings
from .errors import ParseError, TransportError
from .inference import InferenceClient

logger = logging.getLogger(__name__)

router = APIRouter(tags=["single-chat"])


def settings_dependency(request: Request) -> Settings:
    """Settings the app was created with."""
    return request.app.state.settings


@router.get("/single-chat", response_class=PlainTextResponse)
async def get_single_chat():
    return "GET single chat endpoint"


@router.post("/single-chat", response_class=PlainTextResponse)
async def post_single_chat(request: Request, settings: Settings = Depends(settings_dependency)):
    """
    Relay the raw request body as a prompt and return the generated text.

    The body is read as plain UTF-8 text, not JSON.
    """
    message = (await request.body()).decode("utf-8", errors="replace")
    client = InferenceClient(settings)

    try:
        # requests blocks, so keep it off the event loop
        answer = await run_in_threadpool(client.generate, message)
    except ParseError as e:
        logger.error(f"Could not parse inference response: {e}")
        return PlainTextResponse("Error parsing response", status_code=500)
    except TransportError as e:
        logger.error(f"Inference request failed: {e}")
        return PlainTextResponse("Error sending request", status_code=500)

    return PlainTextResponse(answer)
