"""
arklog - Logging: Interfaces

Types et contrats du logger structuré:
- Niveaux ordonnés verbose < debug < log < warn < error < fatal
- Configuration immuable du logger
- Contrats logger et sanitizer
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

LogRecord = Dict[str, Any]


class InvalidLogLevelError(ValueError):
    """Niveau de log inconnu."""

    def __init__(self, level: Any) -> None:
        self.level = level
        super().__init__(f"Invalid log level: {level!r}")


class Error(Exception):
    """Erreur synthétique créée à partir d'un message texte."""


class LogLevel(Enum):
    """
    Niveaux de log.

    Ordre de sévérité: VERBOSE < DEBUG < LOG < WARN < ERROR < FATAL
    """

    VERBOSE = "verbose"
    DEBUG = "debug"
    LOG = "log"
    WARN = "warn"
    ERROR = "error"
    FATAL = "fatal"

    @classmethod
    def get_priority(cls, level: "LogLevel") -> int:
        """Retourne la priorité du niveau (plus haut = plus sévère)."""
        return LOG_LEVELS.index(level)

    @classmethod
    def parse(cls, value: Any) -> "LogLevel":
        """
        Convertit un nom de niveau (insensible à la casse) en LogLevel.

        Args:
            value: LogLevel ou nom du niveau

        Returns:
            LogLevel correspondant

        Raises:
            InvalidLogLevelError: Si le niveau est inconnu
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidLogLevelError(value)

    @property
    def is_error_level(self) -> bool:
        """True pour warn, error et fatal."""
        return self in (LogLevel.WARN, LogLevel.ERROR, LogLevel.FATAL)


LOG_LEVELS: Tuple[LogLevel, ...] = (
    LogLevel.VERBOSE,
    LogLevel.DEBUG,
    LogLevel.LOG,
    LogLevel.WARN,
    LogLevel.ERROR,
    LogLevel.FATAL,
)

DEFAULT_MASK_FIELDS: Tuple[str, ...] = (
    "password",
    "secret",
    "token",
    "authorization",
    "cookie",
    "apiKey",
    "apiSecret",
    "apiPass",
)

MASK_VALUE = "[MASKED]"
CIRCULAR_KEY = "[Circular]"
CIRCULAR_VALUE = "circular reference detected"


@dataclass(frozen=True)
class LoggerConfig:
    """
    Configuration du logger structuré.

    `mask_fields` complète DEFAULT_MASK_FIELDS, il ne le remplace pas.
    `is_development` à None est résolu depuis l'environnement
    (ENVIRONMENT != "production").
    """

    level: LogLevel = LogLevel.DEBUG
    is_development: Optional[bool] = None
    mask_fields: Tuple[str, ...] = ()
    filter_events: Tuple[str, ...] = ()
    max_array_length: int = 100
    name: Optional[str] = None
    version: Optional[str] = None
    env: Optional[str] = None

    @property
    def app_id(self) -> Optional[str]:
        """Identifiant `name-version-env` si les trois champs sont définis."""
        if self.name and self.version and self.env:
            return f"{self.name}-{self.version}-{self.env}"
        return None


class ILogger(ABC):
    """
    Interface logger structuré.

    Chaque méthode de niveau accepte un message principal (str, mapping
    ou exception), des paramètres optionnels et des champs nommés, et
    retourne l'entrée émise ou None si filtrée. Aucune méthode ne lève.
    """

    @abstractmethod
    def emit(
        self,
        level: LogLevel,
        message: Any,
        *params: Any,
        **fields: Any,
    ) -> Optional[LogRecord]:
        """
        Construit, nettoie, formate et émet une entrée.

        Args:
            level: Niveau de log
            message: Message principal
            *params: Paramètres optionnels (erreurs, mappings, textes)
            **fields: Champs supplémentaires

        Returns:
            Entrée nettoyée émise, ou None si filtrée
        """
        pass

    @abstractmethod
    def verbose(self, message: Any, *params: Any, **fields: Any) -> Optional[LogRecord]:
        """Log niveau VERBOSE."""
        pass

    @abstractmethod
    def debug(self, message: Any, *params: Any, **fields: Any) -> Optional[LogRecord]:
        """Log niveau DEBUG."""
        pass

    @abstractmethod
    def log(self, message: Any, *params: Any, **fields: Any) -> Optional[LogRecord]:
        """Log niveau LOG."""
        pass

    @abstractmethod
    def warn(self, message: Any, *params: Any, **fields: Any) -> Optional[LogRecord]:
        """Log niveau WARN."""
        pass

    @abstractmethod
    def error(self, message: Any, *params: Any, **fields: Any) -> Optional[LogRecord]:
        """Log niveau ERROR."""
        pass

    @abstractmethod
    def fatal(self, message: Any, *params: Any, **fields: Any) -> Optional[LogRecord]:
        """Log niveau FATAL."""
        pass


class IEntrySanitizer(ABC):
    """
    Interface nettoyage des entrées de log.

    Produit une copie sérialisable en JSON: valeurs sensibles masquées,
    séquences tronquées, types exotiques convertis, cycles détectés.
    """

    @abstractmethod
    def sanitize(self, entry: LogRecord) -> LogRecord:
        """
        Nettoie une entrée.

        Args:
            entry: Entrée assemblée

        Returns:
            Nouvelle entrée sûre pour JSON
        """
        pass

    @abstractmethod
    def is_sensitive_key(self, key: str) -> bool:
        """
        Vérifie si une clé est sensible.

        Args:
            key: Nom de la clé

        Returns:
            True si un motif de masquage est contenu dans la clé
        """
        pass
