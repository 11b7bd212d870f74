"""
arklog - Logging

Logger structuré JSON avec:
- Appels de forme libre (texte, mapping, exception, paramètres variés)
- Promotion des erreurs (err/error, erreurs imbriquées)
- Masquage des clés sensibles, troncature des séquences, cycles
- Sortie colorée en développement, JSON compact en production
"""

from .interfaces import (
    # Types
    LogRecord,
    # Enums
    LogLevel,
    LOG_LEVELS,
    # Dataclasses
    LoggerConfig,
    # Constantes
    DEFAULT_MASK_FIELDS,
    MASK_VALUE,
    CIRCULAR_KEY,
    CIRCULAR_VALUE,
    # Interfaces
    ILogger,
    IEntrySanitizer,
    # Exceptions
    Error,
    InvalidLogLevelError,
)
from .safe_serializer import (
    SafeSerializer,
    format_error,
    make_safe_for_json,
    safe_stringify,
)
from .sanitizer import (
    EntrySanitizer,
    find_nested_error,
    sanitize_log_entry,
)
from .call_parser import (
    ExtractedArguments,
    NormalizedMessage,
    extract_error_and_extra,
    normalize_message,
)
from .formatter import (
    format_colored_json,
    format_plain_json,
    parse_log_output,
)
from .structured_logger import (
    Logger,
    resolve_is_development,
)

__all__ = [
    # Types
    "LogRecord",
    # Enums
    "LogLevel",
    "LOG_LEVELS",
    # Dataclasses
    "LoggerConfig",
    "NormalizedMessage",
    "ExtractedArguments",
    # Constantes
    "DEFAULT_MASK_FIELDS",
    "MASK_VALUE",
    "CIRCULAR_KEY",
    "CIRCULAR_VALUE",
    # Interfaces
    "ILogger",
    "IEntrySanitizer",
    # Implementations
    "Logger",
    "EntrySanitizer",
    "SafeSerializer",
    # Fonctions
    "find_nested_error",
    "sanitize_log_entry",
    "make_safe_for_json",
    "safe_stringify",
    "format_error",
    "normalize_message",
    "extract_error_and_extra",
    "format_colored_json",
    "format_plain_json",
    "parse_log_output",
    "resolve_is_development",
    # Exceptions
    "Error",
    "InvalidLogLevelError",
]
