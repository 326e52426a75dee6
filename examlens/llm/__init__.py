"""LLM integration module using LangChain."""

__all__ = [
    # Provider types
    "MessageRole",
    "LLMMessage",
    "ModelConfig",
    "TokenUsage",
    "TokenTracker",
    # Factory
    "ModelFactory",
    "content_to_str",
    "create_chat_model",
    "messages_to_langchain",
    # Configuration
    "EvaluationSettings",
    "LLMSettings",
    "LLMSecrets",
    "ModelSettings",
]

from .config import EvaluationSettings, LLMSecrets, LLMSettings, ModelSettings
from .factory import ModelFactory
from .provider import content_to_str, create_chat_model, LLMMessage, MessageRole, messages_to_langchain, \
    ModelConfig, TokenTracker, TokenUsage
