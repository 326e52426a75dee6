from .base import BaseSettings


class TemplateSettings(BaseSettings):
    # relative to the directory containing the examlens package
    llm_path: str = "examlens/template/llm"
