from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, AliasChoices, BaseModel, Field


class CompletionRequest(BaseModel):
    model: str
    prompt: str
    temperature: float | None = None
    max_tokens: int | None = None
    stream: bool = False
    stop: list[str] | None = None


class CompletionResponse(BaseModel):
    """Reply of an Ollama-style ``/generate`` call."""

    model: str = ""
    created_at: str = ""
    response: str
    done: bool = False
    done_reason: str = ""
    context: list[int] = []
    total_duration: int = 0
    load_duration: int = 0
    prompt_eval_count: int = 0
    prompt_eval_duration: int = 0
    eval_count: int = 0
    eval_duration: int = 0

    @property
    def text(self) -> str:
        return self.response


class CompletionChoice(BaseModel):
    text: str
    index: int = 0
    finish_reason: str | None = None


class CompletionUsage(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class OpenAICompletionResponse(BaseModel):
    """Reply of an OpenAI-style ``/completions`` call."""

    id: str = ""
    object: str = "text_completion"
    created: int = 0
    model: str = ""
    choices: list[CompletionChoice] = Field(min_length=1)
    usage: CompletionUsage | None = None

    @property
    def text(self) -> str:
        return self.choices[0].text


class ChatMessage(BaseModel):
    role: str  # system/user/assistant
    content: str


class ChatCompletionRequest(BaseModel):
    model: str
    messages: list[ChatMessage]
    stream: bool = False
    temperature: float | None = None
    max_tokens: int | None = None
    stop: list[str] | None = None
    # Ollama reads sampling knobs from here instead of the top level
    options: dict | None = None


class ChatResponse(BaseModel):
    """Reply of an Ollama-style ``/chat`` call."""

    model: str = ""
    created_at: str = ""
    message: ChatMessage
    done: bool = False
    done_reason: str = ""
    total_duration: int = 0
    load_duration: int = 0
    prompt_eval_count: int = 0
    eval_count: int = 0

    @property
    def text(self) -> str:
        return self.message.content


class ChatChoice(BaseModel):
    index: int = 0
    message: ChatMessage
    finish_reason: str | None = None


class OpenAIChatResponse(BaseModel):
    """Reply of an OpenAI-style ``/chat/completions`` call."""

    id: str = ""
    object: str = "chat.completion"
    created: int = 0
    model: str = ""
    choices: list[ChatChoice] = Field(min_length=1)
    usage: CompletionUsage | None = None

    @property
    def text(self) -> str:
        return self.choices[0].message.content


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


NonBlankStr = Annotated[str, AfterValidator(_not_blank)]


class ChatRouteRequest(BaseModel):
    message: NonBlankStr
    messages: list[ChatMessage] = []  # earlier turns, kept by the caller
    system_prompt: str | None = Field(default=None, validation_alias=AliasChoices("system_prompt", "systemPrompt"))


class ChatRouteResponse(BaseModel):
    message: str
    user_message: str
    timestamp: datetime
    conversation_length: int


class AskRequest(BaseModel):
    question: NonBlankStr
    context: str | None = None


class AskResponse(BaseModel):
    message: str
    question: str
    timestamp: datetime
