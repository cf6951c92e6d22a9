"""
Utils - Event

Registre ordonné de callbacks pour un type de payload fixe.

Les handlers sont appelés dans l'ordre d'enregistrement, de façon
synchrone. Un handler asynchrone est lancé sans être attendu
(fire-and-forget); son échec éventuel est loggé, jamais propagé.
"""

import asyncio
import inspect
from typing import Any, Awaitable, Callable, Generic, List, ParamSpec, Set

from ..logging import get_logger

P = ParamSpec("P")


class Event(Generic[P]):
    """
    Événement multi-abonnés.

    Un même callback enregistré deux fois est appelé deux fois.
    `remove_handler` retire la dernière occurrence uniquement.

    Example:
        user_loaded: Event[[User]] = Event("User loaded")
        unsubscribe = user_loaded.add_handler(on_user)
        user_loaded.raise_event(user)
        unsubscribe()
    """

    def __init__(self, name: str) -> None:
        """
        Args:
            name: Nom lisible de l'événement (logs)
        """
        self._name = name
        self._logger = get_logger(f"Event({name})")
        self._callbacks: List[Callable[P, Any]] = []
        # Références fortes vers les handlers async en cours
        self._pending: Set["asyncio.Future[Any]"] = set()

    @property
    def name(self) -> str:
        """Retourne le nom de l'événement."""
        return self._name

    def add_handler(self, cb: Callable[P, Any]) -> Callable[[], None]:
        """
        Ajoute un handler en fin de liste.

        Args:
            cb: Callback (sync ou async)

        Returns:
            Fonction sans argument qui retire ce handler
        """
        self._callbacks.append(cb)
        return lambda: self.remove_handler(cb)

    def remove_handler(self, cb: Callable[P, Any]) -> None:
        """
        Retire la dernière occurrence de `cb` (no-op si absent).

        Args:
            cb: Callback à retirer
        """
        for idx in range(len(self._callbacks) - 1, -1, -1):
            if self._callbacks[idx] == cb:
                del self._callbacks[idx]
                return

    def raise_event(self, *args: P.args, **kwargs: P.kwargs) -> None:
        """
        Appelle chaque handler dans l'ordre d'enregistrement.

        Une exception levée de façon synchrone par un handler n'est pas
        interceptée.
        """
        self._logger.debug(f"Raising event: {self._name}")
        for cb in self._callbacks:
            result = cb(*args, **kwargs)
            if inspect.isawaitable(result):
                self._schedule(result)

    def _schedule(self, awaitable: Awaitable[Any]) -> None:
        try:
            future = asyncio.ensure_future(awaitable, loop=asyncio.get_running_loop())
        except RuntimeError:
            if inspect.iscoroutine(awaitable):
                awaitable.close()
            self._logger.warn("No running event loop, async handler dropped", event=self._name)
            return

        self._pending.add(future)
        future.add_done_callback(self._on_handler_done)

    def _on_handler_done(self, future: "asyncio.Future[Any]") -> None:
        self._pending.discard(future)
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            self._logger.error(
                "Async handler failed",
                event=self._name,
                error=repr(error),
            )

    def handler_count(self) -> int:
        """Retourne le nombre d'enregistrements (doublons inclus)."""
        return len(self._callbacks)
