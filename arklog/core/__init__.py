"""
arklog - Core

Chargement et validation de la configuration du logger (YAML + pydantic).
"""

from .interfaces import (
    IConfigLoader,
    LoggerSettings,
)
from .config_loader import (
    ConfigIntegrityError,
    ConfigLoader,
)

__all__ = [
    "IConfigLoader",
    "LoggerSettings",
    "ConfigLoader",
    "ConfigIntegrityError",
]
