"""
Events - User Manager Events

Bus d'événements de session: enregistre les faits de session (via le
suivi d'expiration de l'access token) et les diffuse aux abonnés.

Canaux:
    user_loaded(user), user_unloaded(), silent_renew_error(error),
    user_signed_in(), user_signed_out(), user_session_changed()
    + access_token_expiring() / access_token_expired() (délégués)
"""

from typing import Callable, Optional

from ..core.interfaces import UserManagerSettings
from ..logging import get_logger
from ..user import User
from ..utils.event import Event
from .access_token_events import AccessTokenEvents
from .interfaces import (
    AccessTokenCallback,
    IAccessTokenEvents,
    SilentRenewErrorCallback,
    UserLoadedCallback,
    UserSessionChangedCallback,
    UserSignedInCallback,
    UserSignedOutCallback,
    UserUnloadedCallback,
)


class UserManagerEvents:
    """
    Bus d'événements de session.

    Compose un suivi d'expiration (`IAccessTokenEvents`) auquel `load` et
    `unload` délèguent avant de lever leurs événements. Les méthodes
    `_raise_*` sont réservées au gestionnaire de session.

    Example:
        events = UserManagerEvents(settings)
        events.add_user_loaded(on_user_loaded)
        events.add_access_token_expiring(start_silent_renew)
        events.load(user)
    """

    def __init__(
        self,
        settings: Optional[UserManagerSettings] = None,
        access_token_events: Optional[IAccessTokenEvents] = None,
    ) -> None:
        """
        Args:
            settings: Réglages (avance de "access token expiring")
            access_token_events: Suivi d'expiration (défaut: AccessTokenEvents)
        """
        settings = settings or UserManagerSettings()
        self._logger = get_logger("UserManagerEvents")
        self._access_token_events = access_token_events or AccessTokenEvents(
            expiring_notification_time_in_seconds=settings.access_token_expiring_notification_time_in_seconds
        )

        self._user_loaded: Event[[User]] = Event("User loaded")
        self._user_unloaded: Event[[]] = Event("User unloaded")
        self._silent_renew_error: Event[[Exception]] = Event("Silent renew error")
        self._user_signed_in: Event[[]] = Event("User signed in")
        self._user_signed_out: Event[[]] = Event("User signed out")
        self._user_session_changed: Event[[]] = Event("User session changed")

    @property
    def access_token_events(self) -> IAccessTokenEvents:
        """Suivi d'expiration composé."""
        return self._access_token_events

    def load(self, user: User, raise_event: bool = True) -> None:
        """
        Enregistre une session établie (ou rétablie).

        Args:
            user: Session chargée
            raise_event: False pour un rechargement silencieux (pas de
                "user loaded")

        Raises:
            RuntimeError: Hors boucle asyncio active, si l'access token
                a une expiration connue (armement des timers)
        """
        self._logger.debug("load")
        self._access_token_events.load(user)
        if raise_event:
            self._user_loaded.raise_event(user)

    def unload(self) -> None:
        """Enregistre la fin de session; lève toujours "user unloaded"."""
        self._logger.debug("unload")
        self._access_token_events.unload()
        self._user_unloaded.raise_event()

    # ── Access token (délégation) ────────────────────────────────────────────

    def add_access_token_expiring(self, cb: AccessTokenCallback) -> Callable[[], None]:
        """Ajout callback: levé avant l'expiration de l'access token."""
        return self._access_token_events.add_access_token_expiring(cb)

    def remove_access_token_expiring(self, cb: AccessTokenCallback) -> None:
        """Retrait callback: levé avant l'expiration de l'access token."""
        self._access_token_events.remove_access_token_expiring(cb)

    def add_access_token_expired(self, cb: AccessTokenCallback) -> Callable[[], None]:
        """Ajout callback: levé après l'expiration de l'access token."""
        return self._access_token_events.add_access_token_expired(cb)

    def remove_access_token_expired(self, cb: AccessTokenCallback) -> None:
        """Retrait callback: levé après l'expiration de l'access token."""
        self._access_token_events.remove_access_token_expired(cb)

    # ── User loaded / unloaded ───────────────────────────────────────────────

    def add_user_loaded(self, cb: UserLoadedCallback) -> Callable[[], None]:
        """Ajout callback: levé quand une session est établie (ou rétablie)."""
        return self._user_loaded.add_handler(cb)

    def remove_user_loaded(self, cb: UserLoadedCallback) -> None:
        """Retrait callback: levé quand une session est établie (ou rétablie)."""
        self._user_loaded.remove_handler(cb)

    def add_user_unloaded(self, cb: UserUnloadedCallback) -> Callable[[], None]:
        """Ajout callback: levé quand une session est terminée."""
        return self._user_unloaded.add_handler(cb)

    def remove_user_unloaded(self, cb: UserUnloadedCallback) -> None:
        """Retrait callback: levé quand une session est terminée."""
        self._user_unloaded.remove_handler(cb)

    # ── Silent renew error ───────────────────────────────────────────────────

    def add_silent_renew_error(self, cb: SilentRenewErrorCallback) -> Callable[[], None]:
        """Ajout callback: levé quand le renouvellement silencieux échoue."""
        return self._silent_renew_error.add_handler(cb)

    def remove_silent_renew_error(self, cb: SilentRenewErrorCallback) -> None:
        """Retrait callback: levé quand le renouvellement silencieux échoue."""
        self._silent_renew_error.remove_handler(cb)

    def _raise_silent_renew_error(self, error: Exception) -> None:
        self._logger.debug("_raise_silent_renew_error", error=str(error))
        self._silent_renew_error.raise_event(error)

    # ── Signed in / out ──────────────────────────────────────────────────────

    def add_user_signed_in(self, cb: UserSignedInCallback) -> Callable[[], None]:
        """Ajout callback: levé quand l'utilisateur est connecté."""
        return self._user_signed_in.add_handler(cb)

    def remove_user_signed_in(self, cb: UserSignedInCallback) -> None:
        """Retrait callback: levé quand l'utilisateur est connecté."""
        self._user_signed_in.remove_handler(cb)

    def _raise_user_signed_in(self) -> None:
        self._logger.debug("_raise_user_signed_in")
        self._user_signed_in.raise_event()

    def add_user_signed_out(self, cb: UserSignedOutCallback) -> Callable[[], None]:
        """Ajout callback: levé quand l'état de connexion chez l'OP a changé."""
        return self._user_signed_out.add_handler(cb)

    def remove_user_signed_out(self, cb: UserSignedOutCallback) -> None:
        """Retrait callback: levé quand l'état de connexion chez l'OP a changé."""
        self._user_signed_out.remove_handler(cb)

    def _raise_user_signed_out(self) -> None:
        self._logger.debug("_raise_user_signed_out")
        self._user_signed_out.raise_event()

    # ── Session changed ──────────────────────────────────────────────────────

    def add_user_session_changed(self, cb: UserSessionChangedCallback) -> Callable[[], None]:
        """Ajout callback: levé quand la session utilisateur a changé."""
        return self._user_session_changed.add_handler(cb)

    def remove_user_session_changed(self, cb: UserSessionChangedCallback) -> None:
        """Retrait callback: levé quand la session utilisateur a changé."""
        self._user_session_changed.remove_handler(cb)

    def _raise_user_session_changed(self) -> None:
        self._logger.debug("_raise_user_session_changed")
        self._user_session_changed.raise_event()
