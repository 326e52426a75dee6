"""Evaluator model provider using LangChain's OpenAI-compatible client."""

from __future__ import annotations

import enum
import typing as t
from dataclasses import dataclass, field

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from pydantic import SecretStr

OpenRouterBaseURL: t.Final[str] = "https://openrouter.ai/api/v1"


class MessageRole(enum.Enum):
    """Role of a message in a conversation."""

    System = "system"
    User = "user"
    Assistant = "assistant"


@dataclass
class LLMMessage:
    """A message in an LLM conversation."""

    role: MessageRole
    content: str

    def to_langchain(self) -> BaseMessage:
        """Convert to LangChain message format."""
        if self.role == MessageRole.System:
            return SystemMessage(content=self.content)
        elif self.role == MessageRole.Assistant:
            return AIMessage(content=self.content)
        return HumanMessage(content=self.content)


@dataclass
class ModelConfig:
    """Configuration for the evaluator model."""

    model_name: str
    base_url: str = OpenRouterBaseURL
    temperature: float = 0.3
    max_tokens: int = 2000
    timeout: float = 60.0
    max_retries: int = 0


def messages_to_langchain(messages: list[LLMMessage]) -> list[BaseMessage]:
    """Convert a list of LLMMessages to LangChain messages."""
    return [m.to_langchain() for m in messages]


def create_chat_model(config: ModelConfig, *, api_key: str | None = None) -> BaseChatModel:
    """Create a LangChain chat model from configuration.

    The client speaks the OpenAI chat completions protocol, pointed at
    `config.base_url` (OpenRouter by default).

    Args:
        config: Model configuration
        api_key: API key for the completion service

    Returns:
        Configured LangChain chat model
    """
    from langchain_openai import ChatOpenAI

    if api_key is None:
        raise ValueError("API key required for the evaluator model")

    return ChatOpenAI(
        model=config.model_name,
        base_url=config.base_url,
        temperature=config.temperature,
        max_tokens=config.max_tokens,
        timeout=config.timeout,
        max_retries=config.max_retries,
        api_key=SecretStr(api_key),
    )


def content_to_str(content: str | list[t.Any]) -> str:
    """Flatten LangChain message content into a plain string.

    Content may be a string or a list of content blocks; text blocks are
    concatenated in order and anything else is ignored.
    """
    if isinstance(content, str):
        return content
    parts: list[str] = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(str(block.get("text", "")))
    return "".join(parts)


@dataclass
class TokenUsage:
    """Token usage tracking."""

    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    def add(self, input_tokens: int, output_tokens: int) -> None:
        """Add token counts."""
        self.input_tokens += input_tokens
        self.output_tokens += output_tokens


@dataclass
class TokenTracker:
    """Tracks token usage across calls."""

    usage: TokenUsage = field(default_factory=TokenUsage)

    def track_response(self, response: t.Any) -> None:
        """Track tokens from a LangChain response."""
        metadata = getattr(response, "usage_metadata", None)
        if metadata:
            self.usage.add(
                metadata.get("input_tokens", 0),
                metadata.get("output_tokens", 0),
            )
