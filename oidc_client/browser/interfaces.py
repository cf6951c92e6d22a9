"""
Browser - Interfaces

Contrats de la page hôte utilisés par les navigateurs silencieux:
fenêtre, document, frame et messagerie inter-documents.

Toute implémentation (page réelle pilotée, simulation en mémoire) DOIT
livrer les messages de façon asynchrone et renseigner `origin`/`source`
avec la fenêtre émettrice.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional


@dataclass(frozen=True)
class MessageEvent:
    """
    Message reçu via `post_message`.

    Attributes:
        data: Payload (pour la navigation silencieuse: URL de réponse)
        origin: Origine de la fenêtre émettrice (`scheme://host[:port]`)
        source: Fenêtre émettrice
    """

    data: Any
    origin: str
    source: Optional["IHostWindow"]


MessageListener = Callable[[MessageEvent], None]


class IFrameElement(ABC):
    """Élément frame (surface de navigation embarquée)."""

    style: Dict[str, str]
    width: str
    height: str

    @property
    @abstractmethod
    def src(self) -> Optional[str]:
        """URL cible de la frame."""
        pass

    @src.setter
    @abstractmethod
    def src(self, url: Optional[str]) -> None:
        pass

    @property
    @abstractmethod
    def content_window(self) -> Optional["IHostWindow"]:
        """Fenêtre chargée dans la frame (None si non attachée)."""
        pass

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """True si attachée au document."""
        pass


class IBody(ABC):
    """Corps du document: conteneur des frames attachées."""

    @abstractmethod
    def append_child(self, element: IFrameElement) -> IFrameElement:
        """Attache un élément (déclenche le chargement de la frame)."""
        pass

    @abstractmethod
    def remove_child(self, element: IFrameElement) -> IFrameElement:
        """
        Détache un élément.

        Raises:
            ValueError: Si l'élément n'est pas attaché
        """
        pass


class IDocument(ABC):
    """Document de la page hôte."""

    @property
    @abstractmethod
    def body(self) -> IBody:
        """Corps du document."""
        pass

    @abstractmethod
    def create_element(self, tag_name: str) -> IFrameElement:
        """Crée un élément non attaché."""
        pass


class IHostWindow(ABC):
    """
    Fenêtre de navigation (page hôte ou fenêtre d'une frame).
    """

    @property
    @abstractmethod
    def href(self) -> str:
        """URL courante."""
        pass

    @property
    @abstractmethod
    def origin(self) -> str:
        """Origine `protocol + "//" + host`."""
        pass

    @property
    @abstractmethod
    def parent(self) -> "IHostWindow":
        """Fenêtre parente (elle-même si fenêtre de premier niveau)."""
        pass

    @property
    @abstractmethod
    def document(self) -> IDocument:
        """Document chargé."""
        pass

    @abstractmethod
    def add_event_listener(self, event_type: str, listener: MessageListener) -> None:
        """Enregistre un listener (sans doublon)."""
        pass

    @abstractmethod
    def remove_event_listener(self, event_type: str, listener: MessageListener) -> None:
        """Retire un listener (no-op si absent)."""
        pass

    @abstractmethod
    def post_message(self, message: Any, target_origin: str, source: "IHostWindow") -> None:
        """
        Poste un message vers cette fenêtre.

        Le message est ignoré si `target_origin` n'est ni "*" ni
        l'origine de cette fenêtre.

        Args:
            message: Payload
            target_origin: Origine attendue du destinataire
            source: Fenêtre émettrice
        """
        pass
