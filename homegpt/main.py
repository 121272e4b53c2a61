import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings, get_settings
from .logger import setup_logging
from .routes import register_routes

logger = logging.getLogger("homegpt")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app; handlers read ``settings`` from ``app.state``."""
    if settings is None:
        settings = get_settings()

    app = FastAPI(title="HomeGPT bridge")
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()


def run():
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    if not settings.inference_base_url:
        logger.warning("No inference server URL configured, chat requests will fail")
    logger.info(f"Server starting on port {settings.resolved_port}")
    uvicorn.run(app, host=settings.server_host, port=settings.resolved_port, log_config=None)


if __name__ == "__main__":
    run()
