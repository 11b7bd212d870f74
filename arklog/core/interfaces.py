"""
arklog - Core Interfaces
Contrats et modèles de configuration du logger.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from ..logging.interfaces import LoggerConfig, LogLevel


# ══════════════════════════════════════════════════════════════════════════════
# TYPES
# ══════════════════════════════════════════════════════════════════════════════


class LoggerSettings(BaseModel):
    """
    Configuration externe du logger (fichier YAML, mapping).

    Validée puis convertie en LoggerConfig immuable.
    """

    level: LogLevel = LogLevel.DEBUG
    is_development: Optional[bool] = None
    mask_fields: list[str] = []
    filter_events: list[str] = []
    max_array_length: int = Field(default=100, ge=0)
    name: Optional[str] = None
    version: Optional[str] = None
    env: Optional[str] = None

    @field_validator("level", mode="before")
    @classmethod
    def _parse_level(cls, value: Any) -> LogLevel:
        return LogLevel.parse(value)

    @field_validator("mask_fields", "filter_events", mode="before")
    @classmethod
    def _as_list(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value

    @field_validator("version", mode="before")
    @classmethod
    def _version_as_text(cls, value: Any) -> Any:
        # YAML lit `version: 1.0` comme un float
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    def to_config(self) -> LoggerConfig:
        """Convertit en LoggerConfig."""
        return LoggerConfig(
            level=self.level,
            is_development=self.is_development,
            mask_fields=tuple(self.mask_fields),
            filter_events=tuple(self.filter_events),
            max_array_length=self.max_array_length,
            name=self.name,
            version=self.version,
            env=self.env,
        )


# ══════════════════════════════════════════════════════════════════════════════
# INTERFACES
# ══════════════════════════════════════════════════════════════════════════════


class IConfigLoader(ABC):
    """Charge la configuration du logger."""

    @abstractmethod
    async def load(self, name: str) -> LoggerConfig:
        """
        Charge la configuration `name`.

        Raises:
            ConfigIntegrityError: Si fichier absent, illisible ou invalide
        """
        pass
