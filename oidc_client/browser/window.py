"""
Browser - In-Memory Window

Implémentation en mémoire de la page hôte: fenêtres, document, frames
et messagerie inter-documents sur la boucle asyncio courante.

Sert de page hôte dans les environnements sans navigateur (tests,
orchestrateurs pilotant une page à distance qui relaient les messages).
"""

import asyncio
from typing import Any, Dict, List, Optional
from urllib.parse import urlsplit

from ..logging import get_logger
from .interfaces import (
    IBody,
    IDocument,
    IFrameElement,
    IHostWindow,
    MessageEvent,
    MessageListener,
)

_logger = get_logger("BrowserWindow")


class Location:
    """
    Adresse courante d'une fenêtre.

    Example:
        loc = Location("https://app.example:8443/cb?code=abc")
        loc.protocol  # "https:"
        loc.host      # "app.example:8443"
        loc.origin    # "https://app.example:8443"
    """

    def __init__(self, href: str) -> None:
        self._href = href

    @property
    def href(self) -> str:
        return self._href

    @property
    def protocol(self) -> str:
        return f"{urlsplit(self._href).scheme}:"

    @property
    def host(self) -> str:
        return urlsplit(self._href).netloc

    @property
    def origin(self) -> str:
        return f"{self.protocol}//{self.host}"

    def assign(self, url: str) -> None:
        """Navigue vers `url`."""
        self._href = url

    def __repr__(self) -> str:
        return f"Location({self._href!r})"


class FrameElement(IFrameElement):
    """Frame créée par `Document.create_element("iframe")`."""

    def __init__(self, owner: "BrowserWindow") -> None:
        self._owner = owner
        self._src: Optional[str] = None
        self._content_window: Optional[BrowserWindow] = None
        self.style: Dict[str, str] = {}
        self.width = ""
        self.height = ""

    @property
    def src(self) -> Optional[str]:
        return self._src

    @src.setter
    def src(self, url: Optional[str]) -> None:
        self._src = url
        # Frame déjà attachée: la fenêtre navigue vers la nouvelle cible
        if self._content_window is not None and url:
            self._content_window.location.assign(url)

    @property
    def content_window(self) -> Optional["BrowserWindow"]:
        return self._content_window

    @property
    def is_connected(self) -> bool:
        return self._content_window is not None

    def _attach(self) -> None:
        self._content_window = BrowserWindow(self._src or "about:blank", parent=self._owner)

    def _detach(self) -> None:
        if self._content_window is not None:
            self._content_window.close()
        self._content_window = None


class Body(IBody):
    """Corps du document."""

    def __init__(self) -> None:
        self._children: List[FrameElement] = []

    @property
    def children(self) -> List[FrameElement]:
        return list(self._children)

    def append_child(self, element: FrameElement) -> FrameElement:
        if element in self._children:
            self._children.remove(element)
        else:
            element._attach()
        self._children.append(element)
        return element

    def remove_child(self, element: FrameElement) -> FrameElement:
        if element not in self._children:
            raise ValueError("The node to be removed is not a child of this node")
        self._children.remove(element)
        element._detach()
        return element


class Document(IDocument):
    """Document d'une fenêtre."""

    def __init__(self, window: "BrowserWindow") -> None:
        self._window = window
        self._body = Body()

    @property
    def body(self) -> Body:
        return self._body

    def create_element(self, tag_name: str) -> FrameElement:
        """
        Crée un élément non attaché.

        Raises:
            ValueError: Si tag non supporté (seul "iframe" l'est)
        """
        if tag_name.lower() != "iframe":
            raise ValueError(f"Unsupported element: {tag_name}")
        return FrameElement(self._window)


class BrowserWindow(IHostWindow):
    """
    Fenêtre en mémoire.

    Les messages postés sont livrés au tour de boucle suivant
    (`loop.call_soon`), jamais pendant l'appel à `post_message`.

    Example:
        host = BrowserWindow("https://app.example/")
        host.add_event_listener("message", on_message)
        host.post_message("https://app.example/cb", host.origin, source=frame_window)
    """

    def __init__(self, href: str, parent: Optional["BrowserWindow"] = None) -> None:
        self.location = Location(href)
        self._parent = parent
        self._document = Document(self)
        self._listeners: Dict[str, List[MessageListener]] = {}
        self._closed = False

    @property
    def href(self) -> str:
        return self.location.href

    @property
    def origin(self) -> str:
        return self.location.origin

    @property
    def parent(self) -> "BrowserWindow":
        return self._parent if self._parent is not None else self

    @property
    def document(self) -> Document:
        return self._document

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Ferme la fenêtre: plus aucun message ne lui est livré."""
        self._closed = True

    def add_event_listener(self, event_type: str, listener: MessageListener) -> None:
        listeners = self._listeners.setdefault(event_type, [])
        if listener not in listeners:
            listeners.append(listener)

    def remove_event_listener(self, event_type: str, listener: MessageListener) -> None:
        listeners = self._listeners.get(event_type, [])
        if listener in listeners:
            listeners.remove(listener)

    def listener_count(self, event_type: str) -> int:
        """Nombre de listeners enregistrés pour `event_type`."""
        return len(self._listeners.get(event_type, []))

    def post_message(self, message: Any, target_origin: str, source: IHostWindow) -> None:
        if target_origin != "*" and target_origin != self.origin:
            _logger.debug(
                "post_message: target origin mismatch, message dropped",
                target_origin=target_origin,
                origin=self.origin,
            )
            return

        event = MessageEvent(data=message, origin=source.origin, source=source)
        asyncio.get_running_loop().call_soon(self._dispatch, "message", event)

    def _dispatch(self, event_type: str, event: MessageEvent) -> None:
        if self._closed:
            return
        for listener in list(self._listeners.get(event_type, [])):
            listener(event)

    def __repr__(self) -> str:
        return f"BrowserWindow({self.location.href!r})"
