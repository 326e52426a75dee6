__all__ = [
    "AnalyzerWebSettings",
    "LoggingSettings",
    "Secrets",
    "ServeSettings",
    "Settings",
    "TemplateSettings",
    "WebSettings",
]


from .logging import LoggingSettings
from .secrets import Secrets
from .settings import Settings
from .template import TemplateSettings
from .web import AnalyzerWebSettings, ServeSettings, WebSettings
