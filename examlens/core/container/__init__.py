__all__ = [
    "BootConfiguration",
    "BootEnvironmentVariable",
    "ExamlensContainer",
    "LLMContainer",
    "TemplateContainer",
]

from .examlens import BootConfiguration, BootEnvironmentVariable, ExamlensContainer
from .llm import LLMContainer
from .template import TemplateContainer
