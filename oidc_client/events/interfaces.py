"""
Events - Interfaces

Contrats des événements de session.
"""

from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Optional

from ..user import User

AccessTokenCallback = Callable[[], Optional[Awaitable[None]]]
UserLoadedCallback = Callable[[User], Optional[Awaitable[None]]]
UserUnloadedCallback = Callable[[], Optional[Awaitable[None]]]
SilentRenewErrorCallback = Callable[[Exception], Optional[Awaitable[None]]]
UserSignedInCallback = Callable[[], Optional[Awaitable[None]]]
UserSignedOutCallback = Callable[[], Optional[Awaitable[None]]]
UserSessionChangedCallback = Callable[[], Optional[Awaitable[None]]]


class IAccessTokenEvents(ABC):
    """
    Suivi de l'expiration de l'access token.

    Lève "expiring" avant l'expiration (avance configurable) et
    "expired" une fois l'expiration passée.
    """

    @abstractmethod
    def load(self, user: User) -> None:
        """
        Arme les timers d'après l'expiration de l'access token.

        Doit être appelé depuis la boucle asyncio qui exécutera les timers.
        """
        pass

    @abstractmethod
    def unload(self) -> None:
        """Annule les timers."""
        pass

    @abstractmethod
    def add_access_token_expiring(self, cb: AccessTokenCallback) -> Callable[[], None]:
        """Abonnement à "access token expiring"."""
        pass

    @abstractmethod
    def remove_access_token_expiring(self, cb: AccessTokenCallback) -> None:
        """Désabonnement de "access token expiring"."""
        pass

    @abstractmethod
    def add_access_token_expired(self, cb: AccessTokenCallback) -> Callable[[], None]:
        """Abonnement à "access token expired"."""
        pass

    @abstractmethod
    def remove_access_token_expired(self, cb: AccessTokenCallback) -> None:
        """Désabonnement de "access token expired"."""
        pass
