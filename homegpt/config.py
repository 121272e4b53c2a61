"""Application settings using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PORT = "3000"

# Completion path per provider, appended to the inference base URL
DEFAULT_COMPLETIONS_PATHS = {
    "ollama": "/generate",
    "openai": "/completions",
}

DEFAULT_CHAT_PATHS = {
    "ollama": "/chat",
    "openai": "/chat/completions",
}


class Settings(BaseSettings):
    """Process-wide configuration, read once from the environment and ``.env``.

    Absent variables fall back to empty strings; nothing is validated here.
    An unusable base URL shows up later as a transport error.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
        env_parse_none_str="null",
        # model_name is a setting, not a pydantic model attribute
        protected_namespaces=(),
    )

    # -------------------------------------------------------------------------
    # Inference server
    # -------------------------------------------------------------------------
    inference_base_url: str = Field(
        default="",
        validation_alias=AliasChoices(
            "inference_base_url", "OLLAMA_URL", "LM_STUDIO_URL"
        ),
    )
    model_name: str = ""
    provider: Literal["ollama", "openai"] = "ollama"
    completions_path: str | None = None
    chat_path: str | None = None
    default_model: str = "mistral"
    request_timeout: float | None = 120.0

    # Optional generation knobs, copied into every completion request
    temperature: float | None = None
    max_tokens: int | None = None
    stop_sequences: list[str] | None = None

    # -------------------------------------------------------------------------
    # Server
    # -------------------------------------------------------------------------
    server_host: str = "0.0.0.0"
    server_port: str = ""
    session_storage_path: str = ""
    cors_origins: list[str] = ["*"]

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "console"

    @property
    def resolved_model(self) -> str:
        return self.model_name or self.default_model

    @property
    def resolved_completions_path(self) -> str:
        if self.completions_path is not None:
            return self.completions_path
        return DEFAULT_COMPLETIONS_PATHS[self.provider]

    @property
    def resolved_chat_path(self) -> str:
        if self.chat_path is not None:
            return self.chat_path
        return DEFAULT_CHAT_PATHS[self.provider]

    @property
    def resolved_port(self) -> int:
        return int(self.server_port or DEFAULT_PORT)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
