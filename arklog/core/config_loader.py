"""
arklog - Config Loader Implementation
Charge la configuration du logger depuis des fichiers YAML.
"""

from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import ValidationError

from ..logging.interfaces import LoggerConfig
from .interfaces import IConfigLoader, LoggerSettings

LOGGER_SECTION = "logger"


class ConfigIntegrityError(Exception):
    """Erreur d'intégrité de configuration."""

    pass


class ConfigLoader(IConfigLoader):
    """
    Chargement des configurations logger depuis fichiers YAML.

    Le fichier peut contenir une section `logger:` ou directement les
    champs de configuration:

        logger:
          level: warn
          name: billing
          version: 2.1.0
          env: production
          mask_fields: [iban]
    """

    def __init__(self, configs_path: str = "configs"):
        self.configs_path = Path(configs_path)

    async def load(self, name: str) -> LoggerConfig:
        """
        Charge `<configs_path>/<name>.yaml`.

        Args:
            name: Nom de la configuration

        Returns:
            LoggerConfig validée

        Raises:
            ConfigIntegrityError: Si fichier inexistant, YAML invalide ou
                valeurs refusées
        """
        config_file = self.configs_path / f"{name}.yaml"

        if not config_file.exists():
            raise ConfigIntegrityError(f"Configuration non trouvée: {name}")

        try:
            with open(config_file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigIntegrityError(f"Erreur de parsing YAML: {e}") from e
        except OSError as e:
            raise ConfigIntegrityError(f"Erreur de lecture fichier: {e}") from e

        return self.from_mapping(data)

    @staticmethod
    def from_mapping(data: Any) -> LoggerConfig:
        """
        Valide un mapping de configuration.

        Args:
            data: Contenu décodé (section `logger` ou mapping à plat)

        Returns:
            LoggerConfig

        Raises:
            ConfigIntegrityError: Si structure ou valeurs invalides
        """
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise ConfigIntegrityError("Configuration doit être un objet YAML")

        section = data.get(LOGGER_SECTION, data)
        if section is None:
            section = {}
        if not isinstance(section, Mapping):
            raise ConfigIntegrityError(f"Section '{LOGGER_SECTION}' doit être un objet")

        try:
            settings = LoggerSettings.model_validate(dict(section))
        except ValidationError as e:
            raise ConfigIntegrityError(f"Configuration logger invalide: {e}") from e

        return settings.to_config()
