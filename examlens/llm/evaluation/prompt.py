"""Prompt construction for question evaluation."""

from __future__ import annotations

import typing as t
from dataclasses import dataclass

import jinja2
from langchain_core.messages import BaseMessage

from examlens.llm.provider import LLMMessage, MessageRole, messages_to_langchain

RubricTemplate: t.Final[str] = "evaluation/question_quality.j2"
BloomLevels: t.Final[tuple[str, ...]] = ("Remember", "Understand", "Apply", "Analyze", "Evaluate", "Create")
SuggestionCount: t.Final[int] = 2


@dataclass(frozen=True)
class Prompt:
    system: str
    user: str

    def to_langchain(self) -> list[BaseMessage]:
        return messages_to_langchain([
            LLMMessage(role=MessageRole.System, content=self.system),
            LLMMessage(role=MessageRole.User, content=self.user),
        ])


def build_prompt(questions: t.Sequence[str], env: jinja2.Environment) -> Prompt:
    """Build the evaluator prompt for a batch of questions.

    Args:
        questions: Segmented questions, in order
        env: Jinja2 environment for prompt templates

    Returns:
        Prompt with the fixed rubric as system content and a 1-indexed
        numbered listing of the questions as user content
    """
    template = env.get_template(RubricTemplate)
    system = template.render(bloom_levels=BloomLevels, suggestion_count=SuggestionCount)
    user = "\n".join(f"{i}. {question}" for i, question in enumerate(questions, start=1))
    return Prompt(system=system, user=user)
