"""Client for the local inference server (Ollama or OpenAI style)."""

import json
import logging

from pydantic import ValidationError

from .config import Settings
from .errors import ParseError
from .models import (
    ChatCompletionRequest,
    ChatMessage,
    ChatResponse,
    CompletionRequest,
    CompletionResponse,
    OpenAIChatResponse,
    OpenAICompletionResponse,
)
from .rest_utils import send_get_request, send_post_request

logger = logging.getLogger(__name__)

RESPONSE_MODELS = {
    "ollama": CompletionResponse,
    "openai": OpenAICompletionResponse,
}

CHAT_RESPONSE_MODELS = {
    "ollama": ChatResponse,
    "openai": OpenAIChatResponse,
}

MODEL_LIST_PATHS = {
    "ollama": "/tags",
    "openai": "/models",
}

# Fixed deadline for model listing, independent of request_timeout
HEALTH_TIMEOUT = 5.0


class InferenceClient:
    """
    Builds completion requests from settings and relays them to the inference server.

    Usage:
        client = InferenceClient(settings)
        text = client.generate("Why is the sky blue?")
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.provider = settings.provider

    @property
    def base_url(self) -> str:
        return self.settings.inference_base_url.rstrip("/")

    @property
    def completions_url(self) -> str:
        return self.base_url + self.settings.resolved_completions_path

    def build_request(self, prompt: str) -> CompletionRequest:
        return CompletionRequest(
            model=self.settings.resolved_model,
            prompt=prompt,
            temperature=self.settings.temperature,
            max_tokens=self.settings.max_tokens,
            stream=False,
            stop=self.settings.stop_sequences,
        )

    def parse_response(self, body: bytes) -> str:
        """
        Extract the generated text from a raw reply body.

        Raises:
            ParseError: the body is not JSON or not shaped like the provider's reply.
        """
        return self._parse(body, RESPONSE_MODELS[self.provider])

    def parse_chat_response(self, body: bytes) -> str:
        """Extract the assistant message from a raw chat reply body."""
        return self._parse(body, CHAT_RESPONSE_MODELS[self.provider])

    def _parse(self, body: bytes, response_model) -> str:
        try:
            return response_model.model_validate_json(body).text
        except ValidationError as e:
            raise ParseError(f"unexpected {self.provider} response: {e.error_count()} error(s)") from e

    def generate(self, prompt: str) -> str:
        """Send one completion request and return the generated text."""
        payload = self.build_request(prompt)
        logger.info(f"Sending prompt ({len(prompt)} chars) to {self.completions_url} [model={payload.model}]")
        body = send_post_request(self.completions_url, payload, timeout=self.settings.request_timeout)
        text = self.parse_response(body)
        logger.info(f"Received completion ({len(text)} chars)")
        return text

    @property
    def chat_url(self) -> str:
        return self.base_url + self.settings.resolved_chat_path

    def build_chat_request(self, messages: list[ChatMessage]) -> ChatCompletionRequest:
        request = ChatCompletionRequest(model=self.settings.resolved_model, messages=messages, stream=False)
        knobs = {
            "temperature": self.settings.temperature,
            "max_tokens": self.settings.max_tokens,
            "stop": self.settings.stop_sequences,
        }
        if self.provider == "ollama":
            options = {
                "temperature": knobs["temperature"],
                "num_predict": knobs["max_tokens"],
                "stop": knobs["stop"],
            }
            options = {key: value for key, value in options.items() if value is not None}
            return request.model_copy(update={"options": options or None})
        return request.model_copy(update=knobs)

    def chat(self, messages: list[ChatMessage]) -> str:
        """Send a whole conversation and return the assistant's reply."""
        payload = self.build_chat_request(messages)
        logger.info(f"Sending {len(messages)} message(s) to {self.chat_url} [model={payload.model}]")
        body = send_post_request(self.chat_url, payload, timeout=self.settings.request_timeout)
        text = self.parse_chat_response(body)
        logger.info(f"Received chat reply ({len(text)} chars)")
        return text

    def ask(self, question: str, context: str | None = None) -> str:
        """Answer a single question, optionally grounded on ``context``."""
        messages = []
        if context:
            messages.append(ChatMessage(role="system", content=f"Context: {context}"))
        messages.append(ChatMessage(role="user", content=question))
        return self.chat(messages)

    def list_models(self, timeout: float | None = HEALTH_TIMEOUT) -> list[str]:
        """Return the model names the inference server advertises."""
        body = send_get_request(self.base_url + MODEL_LIST_PATHS[self.provider], timeout=timeout)
        try:
            data = json.loads(body)
            if self.provider == "ollama":
                return [model["name"] for model in data.get("models", [])]
            return [model["id"] for model in data.get("data", [])]
        except (json.JSONDecodeError, UnicodeDecodeError, AttributeError, KeyError, TypeError) as e:
            raise ParseError(f"unexpected model list: {e}") from e

