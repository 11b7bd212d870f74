"""
arklog - Observability: Context Store

Stockage du contexte ambiant par requête logique.

Utilise ContextVar: chaque thread et chaque tâche asyncio voit son
propre contexte, les requêtes concurrentes restent isolées.
"""

import contextvars
from contextlib import contextmanager
from typing import Any, Awaitable, Callable, Dict, Generator, Mapping, TypeVar

from .interfaces import IContextStore, log_context_var

T = TypeVar("T")


class ContextStore(IContextStore):
    """
    Contexte ambiant lu par le logger.

    Example:
        store = ContextStore()
        store.run_with_context({"requestId": "r-1"}, handle_request)
        # dans handle_request: store.get_context() == {"requestId": "r-1"}
    """

    def get_context(self) -> Dict[str, Any]:
        context = log_context_var.get()
        if context is None:
            return {}
        return dict(context)

    def update_context(self, **fields: Any) -> None:
        context = log_context_var.get()
        if context is not None:
            context.update(fields)

    def run_with_context(
        self,
        context: Mapping[str, Any],
        callback: Callable[..., T],
        *args: Any,
        **kwargs: Any,
    ) -> T:
        """
        Exécute callback dans une copie du contexte d'exécution courant.

        Le contexte initial est copié: le modifier ensuite n'affecte pas
        le traitement en cours.

        Args:
            context: Contexte initial
            callback: Traitement à exécuter
            *args: Arguments positionnels du traitement
            **kwargs: Arguments nommés du traitement

        Returns:
            Valeur retournée par callback
        """
        execution_context = contextvars.copy_context()
        return execution_context.run(self._run, dict(context), callback, args, kwargs)

    @staticmethod
    def _run(
        context: Dict[str, Any],
        callback: Callable[..., T],
        args: tuple,
        kwargs: Dict[str, Any],
    ) -> T:
        log_context_var.set(context)
        return callback(*args, **kwargs)

    async def arun_with_context(
        self,
        context: Mapping[str, Any],
        callback: Callable[..., Awaitable[T]],
        *args: Any,
        **kwargs: Any,
    ) -> T:
        """
        Variante asynchrone de run_with_context.

        Args:
            context: Contexte initial
            callback: Coroutine function à attendre
            *args: Arguments positionnels
            **kwargs: Arguments nommés

        Returns:
            Résultat de la coroutine
        """
        with self.scope(context):
            return await callback(*args, **kwargs)

    @contextmanager
    def scope(self, context: Mapping[str, Any]) -> Generator[Dict[str, Any], None, None]:
        """
        Context manager établissant un contexte pour le bloc.

        Usage:
            with store.scope({"requestId": "r-1"}):
                logger.log("dans la requête")

        Yields:
            Contexte actif (modifiable via update_context)
        """
        active = dict(context)
        token = log_context_var.set(active)
        try:
            yield active
        finally:
            log_context_var.reset(token)
