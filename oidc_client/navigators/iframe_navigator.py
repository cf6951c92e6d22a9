"""
Navigators - IFrame Navigator

Fabrique de `IFrameWindow` pour le renouvellement silencieux, et
point d'entrée côté page de callback.
"""

from typing import Optional

from ..browser.interfaces import IHostWindow
from ..core.interfaces import UserManagerSettings
from ..logging import get_logger
from .iframe_window import IFrameWindow
from .interfaces import INavigator


class IFrameNavigator(INavigator):
    """
    Navigateur "frame cachée".

    Example:
        # page hôte
        navigator = IFrameNavigator(host, settings)
        handle = navigator.prepare()
        response = await handle.navigate(NavigateParams(url=authorize_url))

        # page de callback chargée dans la frame
        IFrameNavigator(frame_window).callback()
    """

    def __init__(
        self,
        window: IHostWindow,
        settings: Optional[UserManagerSettings] = None,
    ) -> None:
        """
        Args:
            window: Fenêtre de la page courante
            settings: Réglages (délai par défaut des requêtes silencieuses)
        """
        self._window = window
        self._settings = settings or UserManagerSettings()
        self._logger = get_logger("IFrameNavigator")

    def prepare(
        self, silent_request_timeout_in_seconds: Optional[float] = None
    ) -> IFrameWindow:
        """
        Crée une nouvelle frame pour une tentative.

        Args:
            silent_request_timeout_in_seconds: Délai propre à la tentative
                (défaut: réglages)

        Returns:
            IFrameWindow à usage unique
        """
        timeout = silent_request_timeout_in_seconds
        if timeout is None:
            timeout = self._settings.silent_request_timeout_in_seconds
        self._logger.create("prepare").debug("creating frame window", timeout=timeout)
        return IFrameWindow(self._window, silent_request_timeout_in_seconds=timeout)

    def callback(self, url: Optional[str] = None) -> None:
        """
        Renvoie l'URL de réponse à la page parente.

        Args:
            url: URL de réponse (défaut: URL courante)
        """
        self._logger.create("callback").debug("notifying parent")
        IFrameWindow.notify_parent(self._window, url)
