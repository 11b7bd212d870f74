"""
arklog - Observability: Interfaces

Contexte ambiant par requête (requestId, userId, event...) fourni au
logger sans passage explicite de paramètres.
"""

from abc import ABC, abstractmethod
from contextvars import ContextVar
from typing import Any, Callable, Dict, Mapping, Optional, TypeVar

T = TypeVar("T")

# Contexte de la requête logique courante (thread ou tâche asyncio)
log_context_var: ContextVar[Optional[Dict[str, Any]]] = ContextVar(
    "arklog_log_context", default=None
)


class IContextStore(ABC):
    """
    Interface du stockage de contexte ambiant.

    Responsabilités:
        - Instantané du contexte courant (copie, jamais la référence)
        - Mise à jour du contexte courant
        - Exécution d'un traitement dans un contexte isolé
    """

    @abstractmethod
    def get_context(self) -> Dict[str, Any]:
        """
        Retourne une copie du contexte courant.

        Returns:
            Copie du contexte, {} hors de tout contexte
        """
        pass

    @abstractmethod
    def update_context(self, **fields: Any) -> None:
        """
        Met à jour le contexte courant (sans effet hors contexte).

        Args:
            **fields: Champs à ajouter ou remplacer
        """
        pass

    @abstractmethod
    def run_with_context(
        self,
        context: Mapping[str, Any],
        callback: Callable[..., T],
        *args: Any,
        **kwargs: Any,
    ) -> T:
        """
        Exécute callback dans un contexte dédié.

        Args:
            context: Contexte initial (copié)
            callback: Traitement à exécuter
            *args: Arguments positionnels du traitement
            **kwargs: Arguments nommés du traitement

        Returns:
            Valeur retournée par callback
        """
        pass
