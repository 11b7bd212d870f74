"""
arklog - Pytest Configuration
Fixtures partagées pour tous les tests.
"""

from typing import Any, Callable, Dict, List, Mapping, Optional

import pytest

from arklog.logging import Logger, LoggerConfig, LogLevel
from arklog.observability import IContextStore


class StubContextStore(IContextStore):
    """Contexte fixe, modifiable directement par les tests."""

    def __init__(self, context: Optional[Dict[str, Any]] = None) -> None:
        self.context: Dict[str, Any] = dict(context or {})

    def get_context(self) -> Dict[str, Any]:
        return dict(self.context)

    def update_context(self, **fields: Any) -> None:
        self.context.update(fields)

    def run_with_context(
        self,
        context: Mapping[str, Any],
        callback: Callable[..., Any],
        *args: Any,
        **kwargs: Any,
    ) -> Any:
        previous = self.context
        self.context = dict(context)
        try:
            return callback(*args, **kwargs)
        finally:
            self.context = previous


@pytest.fixture
def test_config() -> LoggerConfig:
    """Configuration par défaut des tests."""
    return LoggerConfig(
        level=LogLevel.DEBUG,
        is_development=True,
        mask_fields=("password", "token", "apiKey", "apiSecret", "apiPass"),
        filter_events=("/health",),
        max_array_length=1,
        name="test-app",
        version="1.0.0",
        env="local",
    )


@pytest.fixture
def outputs() -> List[str]:
    """Lignes émises par le logger."""
    return []


@pytest.fixture
def context_store() -> StubContextStore:
    return StubContextStore()


@pytest.fixture
def logger(test_config: LoggerConfig, context_store: StubContextStore, outputs: List[str]) -> Logger:
    """Logger de test: sortie capturée dans `outputs`."""
    return Logger(test_config, context=context_store, output_handler=outputs.append)
