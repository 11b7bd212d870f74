"""
arklog - Structured logging

Logger JSON structuré: appels de forme libre, contexte ambiant par
requête, masquage des données sensibles, sortie colorée en développement.
"""

from .core import ConfigIntegrityError, ConfigLoader, LoggerSettings
from .logging import (
    Error,
    InvalidLogLevelError,
    Logger,
    LoggerConfig,
    LogLevel,
    parse_log_output,
)
from .observability import ContextStore

__version__ = "1.0.0"

__all__ = [
    "Logger",
    "LoggerConfig",
    "LogLevel",
    "ContextStore",
    "ConfigLoader",
    "LoggerSettings",
    "ConfigIntegrityError",
    "Error",
    "InvalidLogLevelError",
    "parse_log_output",
]
