"""Top-level route registration."""

import logging

from fastapi import APIRouter, Depends, FastAPI
from fastapi.concurrency import run_in_threadpool

from .config import Settings
from .conversation import router as conversation_router
from .errors import BridgeError
from .inference import HEALTH_TIMEOUT, InferenceClient
from .single_chat import router as single_chat_router
from .single_chat import settings_dependency

logger = logging.getLogger(__name__)

health_router = APIRouter(tags=["health"])


@health_router.get("/health")
async def health(settings: Settings = Depends(settings_dependency)):
    """Report whether the inference server answers and which models it offers."""
    client = InferenceClient(settings)
    try:
        models = await run_in_threadpool(client.list_models, HEALTH_TIMEOUT)
        status = "healthy"
    except BridgeError as e:
        logger.warning(f"Inference server unavailable: {e}")
        models = []
        status = "unavailable"

    return {
        "status": status,
        "provider": settings.provider,
        "model": settings.resolved_model,
        "available_models": models,
    }


def register_routes(app: FastAPI) -> None:
    app.include_router(single_chat_router)
    app.include_router(conversation_router)
    app.include_router(health_router)
