"""
oidc_client

Navigation silencieuse (frame cachée) et bus d'événements de session
d'un client OpenID Connect / OAuth2.
"""

from .core import ConfigIntegrityError, SettingsLoader, UserManagerSettings
from .events import AccessTokenEvents, UserManagerEvents
from .navigators import (
    IFrameNavigator,
    IFrameWindow,
    IWindow,
    NavigateParams,
    NavigateResponse,
    NavigationClosedError,
    NavigationError,
    NavigationTimeoutError,
)
from .user import User
from .utils import Event, Timer

__version__ = "0.1.0"

__all__ = [
    "AccessTokenEvents",
    "ConfigIntegrityError",
    "Event",
    "IFrameNavigator",
    "IFrameWindow",
    "IWindow",
    "NavigateParams",
    "NavigateResponse",
    "NavigationClosedError",
    "NavigationError",
    "NavigationTimeoutError",
    "SettingsLoader",
    "Timer",
    "User",
    "UserManagerEvents",
    "UserManagerSettings",
]
