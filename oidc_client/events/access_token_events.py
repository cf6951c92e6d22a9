"""
Events - Access Token Events

Timers "expiring" / "expired" de l'access token d'une session.
"""

from typing import Callable

from ..logging import get_logger
from ..user import User
from ..utils.timer import Timer
from .interfaces import AccessTokenCallback, IAccessTokenEvents


class AccessTokenEvents(IAccessTokenEvents):
    """
    Suivi de l'expiration de l'access token.

    Example:
        events = AccessTokenEvents(expiring_notification_time_in_seconds=60)
        events.add_access_token_expiring(renew)
        events.load(user)  # "expiring" ~60s avant expiration
    """

    def __init__(self, expiring_notification_time_in_seconds: int) -> None:
        """
        Args:
            expiring_notification_time_in_seconds: Avance de "expiring"
                par rapport à l'expiration
        """
        self._logger = get_logger("AccessTokenEvents")
        self._expiring_notification_time_in_seconds = expiring_notification_time_in_seconds
        self._expiring_timer = Timer("Access token expiring")
        self._expired_timer = Timer("Access token expired")

    @property
    def expiring_notification_time_in_seconds(self) -> int:
        return self._expiring_notification_time_in_seconds

    @property
    def expiring_timer(self) -> Timer:
        return self._expiring_timer

    @property
    def expired_timer(self) -> Timer:
        return self._expired_timer

    def load(self, user: User) -> None:
        """
        Arme les timers d'après `user.expires_in`.

        Sans access token ou sans expiration connue, les timers sont
        annulés.

        Raises:
            RuntimeError: Si des timers doivent être armés hors d'une
                boucle asyncio active
        """
        logger = self._logger.create("load")
        duration = user.expires_in

        if not user.access_token or duration is None:
            self._expiring_timer.cancel()
            self._expired_timer.cancel()
            return

        logger.debug("access token present, remaining duration", duration=duration)

        if duration > 0:
            # "expiring" seulement s'il reste du temps
            expiring = duration - self._expiring_notification_time_in_seconds
            if expiring <= 0:
                expiring = 1
            logger.debug("registering expiring timer", raising_in=expiring)
            self._expiring_timer.init(expiring)
        else:
            logger.debug("canceling existing expiring timer because we're past expiration")
            self._expiring_timer.cancel()

        # Durée négative: le timer lève quand même (minimum 1s)
        expired = duration + 1
        logger.debug("registering expired timer", raising_in=expired)
        self._expired_timer.init(expired)

    def unload(self) -> None:
        """Annule les timers."""
        self._logger.create("unload").debug("canceling existing access token timers")
        self._expiring_timer.cancel()
        self._expired_timer.cancel()

    def add_access_token_expiring(self, cb: AccessTokenCallback) -> Callable[[], None]:
        return self._expiring_timer.add_handler(cb)

    def remove_access_token_expiring(self, cb: AccessTokenCallback) -> None:
        self._expiring_timer.remove_handler(cb)

    def add_access_token_expired(self, cb: AccessTokenCallback) -> Callable[[], None]:
        return self._expired_timer.add_handler(cb)

    def remove_access_token_expired(self, cb: AccessTokenCallback) -> None:
        self._expired_timer.remove_handler(cb)
