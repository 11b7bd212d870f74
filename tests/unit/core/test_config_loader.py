"""
Tests unitaires pour ConfigLoader et LoggerSettings.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from arklog.core import ConfigIntegrityError, ConfigLoader, IConfigLoader, LoggerSettings
from arklog.logging import InvalidLogLevelError, LoggerConfig, LogLevel


def write_config(directory: Path, name: str, content: str) -> None:
    (directory / f"{name}.yaml").write_text(content, encoding="utf-8")


class TestConfigLoader:
    """Chargement des fichiers YAML."""

    @pytest.fixture(autouse=True)
    def setup_loader(self, tmp_path: Path) -> None:
        """Setup avant chaque test."""
        self.configs_path = tmp_path
        self.loader = ConfigLoader(str(tmp_path))

    def test_implements_interface(self) -> None:
        assert isinstance(self.loader, IConfigLoader)

    @pytest.mark.asyncio
    async def test_load_logger_section(self) -> None:
        """Section `logger:` chargée et validée."""
        write_config(
            self.configs_path,
            "billing",
            """
logger:
  level: WARN
  is_development: false
  name: billing
  version: 2.1.0
  env: production
  mask_fields: [iban, cardNumber]
  filter_events: [/health, /metrics]
  max_array_length: 20
""",
        )

        config = await self.loader.load("billing")

        assert isinstance(config, LoggerConfig)
        assert config.level == LogLevel.WARN
        assert config.is_development is False
        assert config.mask_fields == ("iban", "cardNumber")
        assert config.filter_events == ("/health", "/metrics")
        assert config.max_array_length == 20
        assert config.app_id == "billing-2.1.0-production"

    @pytest.mark.asyncio
    async def test_load_flat_mapping(self) -> None:
        write_config(self.configs_path, "flat", "level: verbose\nname: api\n")

        config = await self.loader.load("flat")

        assert config.level == LogLevel.VERBOSE
        assert config.name == "api"
        assert config.app_id is None

    @pytest.mark.asyncio
    async def test_empty_file_uses_defaults(self) -> None:
        write_config(self.configs_path, "empty", "")

        config = await self.loader.load("empty")

        assert config == LoggerConfig()

    @pytest.mark.asyncio
    async def test_load_nonexistent_raises(self) -> None:
        with pytest.raises(ConfigIntegrityError) as exc_info:
            await self.loader.load("missing")

        assert "Configuration non trouvée" in str(exc_info.value)
        assert "missing" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_invalid_yaml_raises(self) -> None:
        write_config(self.configs_path, "broken", "logger: [unclosed\n")

        with pytest.raises(ConfigIntegrityError) as exc_info:
            await self.loader.load("broken")

        assert "YAML" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_non_mapping_raises(self) -> None:
        write_config(self.configs_path, "list", "- a\n- b\n")

        with pytest.raises(ConfigIntegrityError):
            await self.loader.load("list")

    @pytest.mark.asyncio
    async def test_invalid_level_raises(self) -> None:
        write_config(self.configs_path, "level", "logger:\n  level: trace\n")

        with pytest.raises(ConfigIntegrityError) as exc_info:
            await self.loader.load("level")

        assert isinstance(exc_info.value.__cause__, ValidationError)

    @pytest.mark.asyncio
    async def test_negative_array_length_raises(self) -> None:
        write_config(self.configs_path, "negative", "max_array_length: -1\n")

        with pytest.raises(ConfigIntegrityError):
            await self.loader.load("negative")


class TestFromMapping:
    """Validation synchrone d'un mapping."""

    def test_defaults(self) -> None:
        assert ConfigLoader.from_mapping({}) == LoggerConfig()

    def test_none_section(self) -> None:
        assert ConfigLoader.from_mapping({"logger": None}) == LoggerConfig()

    def test_section_must_be_mapping(self) -> None:
        with pytest.raises(ConfigIntegrityError):
            ConfigLoader.from_mapping({"logger": "debug"})

    def test_single_string_becomes_list(self) -> None:
        config = ConfigLoader.from_mapping({"mask_fields": "iban"})

        assert config.mask_fields == ("iban",)

    def test_numeric_version(self) -> None:
        config = ConfigLoader.from_mapping({"name": "api", "version": 1.5, "env": "dev"})

        assert config.app_id == "api-1.5-dev"


class TestLoggerSettings:
    def test_level_case_insensitive(self) -> None:
        assert LoggerSettings(level="Error").level == LogLevel.ERROR

    def test_unknown_level(self) -> None:
        with pytest.raises(ValidationError):
            LoggerSettings(level="trace")

    def test_to_config(self) -> None:
        config = LoggerSettings(mask_fields=["pin"], max_array_length=0).to_config()

        assert config.mask_fields == ("pin",)
        assert config.max_array_length == 0


class TestLogLevelParse:
    def test_parse_names(self) -> None:
        assert LogLevel.parse("FATAL") == LogLevel.FATAL
        assert LogLevel.parse(" debug ") == LogLevel.DEBUG
        assert LogLevel.parse(LogLevel.LOG) is LogLevel.LOG

    def test_parse_unknown(self) -> None:
        with pytest.raises(InvalidLogLevelError) as exc_info:
            LogLevel.parse("trace")

        assert exc_info.value.level == "trace"

    def test_priority_order(self) -> None:
        priorities = [LogLevel.get_priority(level) for level in LogLevel]

        assert priorities == sorted(priorities)
