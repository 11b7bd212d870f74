"""
arklog - Logging: Structured Logger

Logger JSON structuré, une ligne par appel.

Déroulement d'un appel:
    1. Filtre (niveau minimum, événements ignorés)
    2. Analyse du message principal et des paramètres
    3. Assemblage avec le contexte ambiant
    4. Nettoyage (masquage, troncature, cycles)
    5. Formatage (couleurs en développement, JSON compact sinon)
    6. Émission vers output_handler
"""

import json
import os
import sys
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from ..observability.interfaces import IContextStore
from .call_parser import (
    ExtractedArguments,
    NormalizedMessage,
    extract_error_and_extra,
    normalize_message,
)
from .formatter import format_colored_json, format_plain_json
from .interfaces import ILogger, LoggerConfig, LogLevel, LogRecord
from .safe_serializer import format_error
from .sanitizer import EntrySanitizer

PRODUCTION_ENVIRONMENT = "production"


def _write_stdout(line: str) -> None:
    sys.stdout.write(line + "\n")


def resolve_is_development(config: LoggerConfig) -> bool:
    """
    Mode développement effectif.

    Valeur explicite de la configuration, sinon variable ENVIRONMENT
    (tout sauf "production" est du développement).
    """
    if config.is_development is not None:
        return config.is_development
    return os.environ.get("ENVIRONMENT") != PRODUCTION_ENVIRONMENT


class Logger(ILogger):
    """
    Logger structuré.

    Accepte des appels de forme libre et ne lève jamais pendant le
    traitement d'un appel: en cas d'échec interne, une ligne de repli
    minimale (avec loggerError) est émise à la place.

    Example:
        logger = Logger(LoggerConfig(name="api", version="1.2.0", env="prod"))
        logger.log("Order created", {"orderId": 42})
        logger.error("Payment failed", exc, {"orderId": 42})
        logger.warn({"event": "retry", "attempt": 3})
    """

    def __init__(
        self,
        config: Optional[LoggerConfig] = None,
        context: Optional[IContextStore] = None,
        output_handler: Optional[Callable[[str], None]] = None,
    ) -> None:
        """
        Initialise le logger.

        Args:
            config: Configuration (défauts de LoggerConfig sinon)
            context: Contexte ambiant fusionné dans chaque entrée
            output_handler: Destination des lignes (stdout par défaut)

        Raises:
            ValueError: Si max_array_length est négatif
        """
        self._config = config or LoggerConfig()
        self._context = context
        self._output_handler = output_handler or _write_stdout
        self._is_development = resolve_is_development(self._config)
        self._sanitizer = EntrySanitizer(
            self._config.mask_fields,
            self._config.max_array_length,
        )

    @property
    def config(self) -> LoggerConfig:
        return self._config

    @property
    def log_level(self) -> LogLevel:
        """Niveau minimum émis."""
        return self._config.level

    @property
    def is_development(self) -> bool:
        return self._is_development

    @property
    def app_id(self) -> Optional[str]:
        return self._config.app_id

    def should_log(self, level: LogLevel) -> bool:
        """
        Vérifie si un appel doit produire une entrée.

        Refusé si le niveau est sous le minimum configuré, ou si
        l'événement du contexte courant fait partie de filter_events.

        Args:
            level: Niveau de l'appel

        Returns:
            True si l'appel doit être émis
        """
        if LogLevel.get_priority(level) < LogLevel.get_priority(self._config.level):
            return False
        if self._context is not None and self._config.filter_events:
            event = self._context.get_context().get("event")
            if event is not None and event in self._config.filter_events:
                return False
        return True

    def emit(
        self,
        level: LogLevel,
        message: Any,
        *params: Any,
        **fields: Any,
    ) -> Optional[LogRecord]:
        try:
            if not self.should_log(level):
                return None

            if fields:
                params = params + (fields,)

            normalized = normalize_message(message)
            extracted = extract_error_and_extra(params, level)
            entry = self._create_log_entry(level, normalized, extracted)

            record = self._sanitizer.sanitize(entry)
            if self._is_development:
                line = format_colored_json(record, level)
            else:
                line = format_plain_json(record)
        except Exception as exc:
            record = self._fallback_entry(level, message, exc)
            line = json.dumps(record, separators=(",", ":"), default=str)

        self._output_handler(line)
        return record

    def _create_log_entry(
        self,
        level: LogLevel,
        normalized: NormalizedMessage,
        extracted: ExtractedArguments,
    ) -> LogRecord:
        """
        Assemble l'entrée brute.

        Ordre de priorité (le dernier l'emporte): champs de base, appId,
        contexte, extra du message, extra des paramètres, fragment
        d'avertissement. L'erreur des paramètres prime sur celle du
        message principal.

        Args:
            level: Niveau de l'appel
            normalized: Message principal analysé
            extracted: Paramètres analysés

        Returns:
            Entrée non nettoyée
        """
        entry: LogRecord = {
            "level": level.value,
            "timestamp": self._generate_timestamp(),
            "pid": os.getpid(),
            "message": normalized.message,
        }

        app_id = self._config.app_id
        if app_id:
            entry["appId"] = app_id

        if self._context is not None:
            entry.update(self._context.get_context())

        if normalized.extra:
            entry.update(normalized.extra)
        entry.update(extracted.extra)
        if normalized.invalid_message_info:
            entry.update(normalized.invalid_message_info)

        error = extracted.error or normalized.error
        if error is not None:
            entry["error"] = format_error(error)

        return entry

    def _fallback_entry(self, level: LogLevel, message: Any, exc: Exception) -> LogRecord:
        return {
            "level": level.value if isinstance(level, LogLevel) else str(level),
            "timestamp": self._generate_timestamp(),
            "pid": os.getpid(),
            "message": message if isinstance(message, str) else "[unrenderable message]",
            "loggerError": f"{type(exc).__name__}: {exc}",
        }

    def _generate_timestamp(self) -> str:
        """
        Timestamp ISO 8601 UTC avec millisecondes.

        Format: 2024-12-04T14:30:00.123Z
        """
        now = datetime.now(timezone.utc)
        return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"

    def verbose(self, message: Any, *params: Any, **fields: Any) -> Optional[LogRecord]:
        return self.emit(LogLevel.VERBOSE, message, *params, **fields)

    def debug(self, message: Any, *params: Any, **fields: Any) -> Optional[LogRecord]:
        return self.emit(LogLevel.DEBUG, message, *params, **fields)

    def log(self, message: Any, *params: Any, **fields: Any) -> Optional[LogRecord]:
        return self.emit(LogLevel.LOG, message, *params, **fields)

    def warn(self, message: Any, *params: Any, **fields: Any) -> Optional[LogRecord]:
        return self.emit(LogLevel.WARN, message, *params, **fields)

    def error(self, message: Any, *params: Any, **fields: Any) -> Optional[LogRecord]:
        return self.emit(LogLevel.ERROR, message, *params, **fields)

    def fatal(self, message: Any, *params: Any, **fields: Any) -> Optional[LogRecord]:
        return self.emit(LogLevel.FATAL, message, *params, **fields)
