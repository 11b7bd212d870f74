"""
arklog - Observability

Contexte ambiant par requête logique (requestId, userId, event...),
isolé par thread et par tâche asyncio via contextvars.
"""

from .interfaces import (
    # Context variable
    log_context_var,
    # Interfaces
    IContextStore,
)
from .context import (
    ContextStore,
)

__all__ = [
    "log_context_var",
    "IContextStore",
    "ContextStore",
]
