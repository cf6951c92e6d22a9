"""
Navigators - IFrame Window

Navigation silencieuse dans une frame cachée de la page hôte.

Déroulé:
    1. Construction: listener "message" enregistré, frame créée (non attachée)
    2. navigate(): timeout armé, cible définie, PUIS frame attachée
    3. La page chargée dans la frame appelle `notify_parent` avec l'URL
       de réponse
    4. Le premier message corrélé, le timeout ou une fermeture règle
       l'opération; le nettoyage précède toujours le règlement
"""

import asyncio
from dataclasses import dataclass
from typing import Optional, Type

from ..browser.interfaces import IFrameElement, IHostWindow, MessageEvent
from ..logging import get_logger
from .interfaces import IWindow, NavigateParams, NavigateResponse

DEFAULT_TIMEOUT_IN_SECONDS: float = 10

_logger = get_logger("IFrameWindow")


class NavigationError(Exception):
    """Échec d'une navigation."""

    pass


class NavigationTimeoutError(NavigationError):
    """Aucune réponse corrélée dans le délai imparti."""

    def __init__(self, message: str = "Frame window timed out") -> None:
        super().__init__(message)


class NavigationClosedError(NavigationError):
    """Surface fermée avant la réponse."""

    def __init__(self, message: str = "Frame window closed") -> None:
        super().__init__(message)


@dataclass
class _FrameState:
    """État propre à une instance: frame, timer et opération en cours."""

    frame: Optional[IFrameElement]
    timer: Optional[asyncio.TimerHandle] = None
    future: Optional["asyncio.Future[NavigateResponse]"] = None


class IFrameWindow(IWindow):
    """
    Surface de navigation "frame cachée".

    Un message n'est accepté comme réponse que si:
        - un timeout est armé (opération en cours)
        - son origine est celle de la page hôte
        - sa source est la fenêtre de la frame
        - son payload est une chaîne commençant par http:// ou https://
    Tout autre message est ignoré silencieusement (trafic d'autres frames).

    Example:
        window = IFrameWindow(host, silent_request_timeout_in_seconds=5)
        response = await window.navigate(NavigateParams(url=authorize_url))
    """

    def __init__(
        self,
        window: IHostWindow,
        silent_request_timeout_in_seconds: float = DEFAULT_TIMEOUT_IN_SECONDS,
    ) -> None:
        """
        Args:
            window: Page hôte
            silent_request_timeout_in_seconds: Délai max de la navigation
        """
        self._window = window
        self._timeout_in_seconds = silent_request_timeout_in_seconds

        window.add_event_listener("message", self._on_message)

        frame = window.document.create_element("iframe")
        frame.style.update(
            {
                "visibility": "hidden",
                "position": "fixed",
                "left": "-1000px",
                "top": "0",
            }
        )
        frame.width = "0"
        frame.height = "0"

        self._state = _FrameState(frame=frame)

    @property
    def timeout_in_seconds(self) -> float:
        """Délai de navigation configuré."""
        return self._timeout_in_seconds

    @property
    def frame(self) -> Optional[IFrameElement]:
        """Frame courante (None après nettoyage)."""
        return self._state.frame

    async def navigate(self, params: NavigateParams) -> NavigateResponse:
        """
        Charge `params.url` dans la frame et attend la réponse.

        Args:
            params: Paramètres de navigation

        Returns:
            URL de réponse reçue de la frame

        Raises:
            NavigationError: URL absente, surface déjà fermée, ou
                navigate() déjà appelé sur cette instance
            NavigationTimeoutError: Pas de réponse dans le délai
            NavigationClosedError: close() appelé pendant l'attente
        """
        logger = _logger.create("navigate")
        state = self._state

        if state.future is not None:
            raise NavigationError("navigate() already called on this window")

        loop = asyncio.get_running_loop()
        state.future = loop.create_future()

        if params is None or not params.url:
            self._error("No url provided")
        elif state.frame is None:
            self._error("IFrame window already closed")
        else:
            logger.debug("using timeout of", timeout=self._timeout_in_seconds)
            state.timer = loop.call_later(self._timeout_in_seconds, self._on_timeout)
            # Cible définie avant l'attache: pas de chargement sans src
            state.frame.src = params.url
            self._window.document.body.append_child(state.frame)
            logger.debug("frame attached", url=params.url)

        try:
            return await state.future
        except asyncio.CancelledError:
            self._cleanup()
            raise

    def close(self) -> None:
        """Nettoie la surface; une navigation en attente échoue."""
        self._cleanup()

        future = self._state.future
        if future is not None and not future.done():
            _logger.debug("close: failing pending navigation")
            future.set_exception(NavigationClosedError())

    def _success(self, response: NavigateResponse) -> None:
        self._cleanup()

        _logger.debug("Successful response from frame window")
        future = self._state.future
        if future is not None and not future.done():
            future.set_result(response)

    def _error(
        self, message: str, error_type: Type[NavigationError] = NavigationError
    ) -> None:
        self._cleanup()

        _logger.error(message)
        future = self._state.future
        if future is not None and not future.done():
            future.set_exception(error_type(message))

    def _cleanup(self) -> None:
        state = self._state
        _logger.debug("cleanup")

        if state.timer is not None:
            state.timer.cancel()

        if state.frame is not None:
            self._window.remove_event_listener("message", self._on_message)
            if state.frame.is_connected:
                self._window.document.body.remove_child(state.frame)

        state.timer = None
        state.frame = None

    def _on_timeout(self) -> None:
        _logger.debug("timeout")
        self._error("Frame window timed out", NavigationTimeoutError)

    def _on_message(self, event: MessageEvent) -> None:
        state = self._state
        if state.timer is None or state.frame is None:
            return

        content_window = state.frame.content_window
        data = event.data
        if (
            content_window is not None
            and event.origin == self._window.origin
            and event.source is content_window
            and isinstance(data, str)
            and (data.startswith("http://") or data.startswith("https://"))
        ):
            self._success(NavigateResponse(url=data))

    @staticmethod
    def notify_parent(window: IHostWindow, url: Optional[str] = None) -> None:
        """
        Depuis la page chargée dans la frame: poste l'URL de réponse à
        la page parente, restreinte à l'origine de la page courante.

        Args:
            window: Fenêtre de la page de callback (dans la frame)
            url: URL à envoyer (défaut: URL courante de la fenêtre)
        """
        logger = _logger.create("notify_parent")
        url = url or window.href
        if url:
            logger.debug("posting url message to parent", url=url)
            window.parent.post_message(url, window.origin, source=window)
