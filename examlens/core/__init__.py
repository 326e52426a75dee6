__all__ = [
    "BootConfiguration",
    "BootEnvironmentVariable",
    "di",
    "ExamlensContainer",
    "LoggingProvider",
    "Settings",
    "Secrets",
]


from . import di
from .config import Secrets, Settings
from .container import BootConfiguration, BootEnvironmentVariable, ExamlensContainer
from .provider import LoggingProvider
