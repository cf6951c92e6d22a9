"""
Navigators

Surfaces de navigation pour l'aller-retour d'autorisation:
- Contrat IWindow (navigate / close) partagé par toutes les variantes
- Frame cachée (IFrameWindow) et sa fabrique (IFrameNavigator)
"""

from .interfaces import INavigator, IWindow, NavigateParams, NavigateResponse
from .iframe_window import (
    DEFAULT_TIMEOUT_IN_SECONDS,
    IFrameWindow,
    NavigationClosedError,
    NavigationError,
    NavigationTimeoutError,
)
from .iframe_navigator import IFrameNavigator

__all__ = [
    # Interfaces
    "INavigator",
    "IWindow",
    # Data classes
    "NavigateParams",
    "NavigateResponse",
    # Implementations
    "IFrameWindow",
    "IFrameNavigator",
    # Constants
    "DEFAULT_TIMEOUT_IN_SECONDS",
    # Exceptions
    "NavigationError",
    "NavigationTimeoutError",
    "NavigationClosedError",
]
