"""
Utils - Timer

Timer d'expiration: lève un événement lorsque l'heure d'expiration
(epoch en secondes) est atteinte.

La vérification est périodique (au plus toutes les 5 secondes) plutôt
qu'un unique délai, pour rester correcte après une mise en veille ou un
ajustement d'horloge.
"""

import asyncio
import math
import time
from typing import Any, Callable, Optional

from ..logging import get_logger
from .event import Event


class Timer:
    """
    Timer d'expiration basé sur la boucle asyncio courante.

    Example:
        timer = Timer("Access token expiring")
        timer.add_handler(on_expiring)
        timer.init(300)  # lève l'événement dans ~300s
    """

    MAX_CHECK_INTERVAL_SECONDS: int = 5

    def __init__(self, name: str) -> None:
        self._name = name
        self._logger = get_logger(f"Timer('{name}')")
        self._event: Event[[]] = Event(name)
        self._handle: Optional[asyncio.TimerHandle] = None
        self._interval: float = 0
        self._expiration: int = 0

    @staticmethod
    def get_epoch_time() -> int:
        """Retourne l'heure courante en secondes epoch (arrondi inférieur)."""
        return math.floor(time.time())

    @property
    def expiration(self) -> int:
        """Heure d'expiration armée (epoch, 0 si jamais armé)."""
        return self._expiration

    @property
    def is_armed(self) -> bool:
        """True si une vérification est programmée."""
        return self._handle is not None

    def init(self, duration_in_seconds: float) -> None:
        """
        Arme le timer pour expirer dans `duration_in_seconds`.

        La durée est arrondie à l'inférieur et vaut au minimum 1 seconde.
        Réarmer avec la même expiration est sans effet.

        Args:
            duration_in_seconds: Durée avant expiration

        Raises:
            RuntimeError: Si aucune boucle asyncio n'est active
        """
        logger = self._logger.create("init")
        duration = max(math.floor(duration_in_seconds), 1)
        expiration = self.get_epoch_time() + duration
        if self._expiration == expiration and self._handle is not None:
            logger.debug("skipping since already initialized", expiration=expiration)
            return

        self.cancel()

        logger.debug("using duration", duration=duration)
        self._expiration = expiration
        self._interval = min(duration, self.MAX_CHECK_INTERVAL_SECONDS)
        self._schedule(asyncio.get_running_loop())

    def _schedule(self, loop: asyncio.AbstractEventLoop) -> None:
        self._handle = loop.call_later(self._interval, self._callback)

    def cancel(self) -> None:
        """Annule la vérification programmée (idempotent)."""
        self._logger.create("cancel").debug("canceling")
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _callback(self) -> None:
        diff = self._expiration - self.get_epoch_time()
        self._logger.debug("timer completes in", remaining=diff)

        if self._expiration <= self.get_epoch_time():
            self.cancel()
            self._event.raise_event()
        else:
            self._schedule(asyncio.get_running_loop())

    def add_handler(self, cb: Callable[[], Any]) -> Callable[[], None]:
        """Ajoute un handler d'expiration; retourne la fonction de retrait."""
        return self._event.add_handler(cb)

    def remove_handler(self, cb: Callable[[], Any]) -> None:
        """Retire la dernière occurrence du handler."""
        self._event.remove_handler(cb)
