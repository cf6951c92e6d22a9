"""
Events

Événements de session du client OIDC:
- Expiration de l'access token (expiring / expired)
- Cycle de vie de la session (loaded, unloaded, signed in/out,
  session changed, silent renew error)
"""

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
from .access_token_events import AccessTokenEvents
from .user_manager_events import UserManagerEvents

__all__ = [
    # Interfaces
    "IAccessTokenEvents",
    # Callback types
    "AccessTokenCallback",
    "UserLoadedCallback",
    "UserUnloadedCallback",
    "SilentRenewErrorCallback",
    "UserSignedInCallback",
    "UserSignedOutCallback",
    "UserSessionChangedCallback",
    # Implementations
    "AccessTokenEvents",
    "UserManagerEvents",
]
