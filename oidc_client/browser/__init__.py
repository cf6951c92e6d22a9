"""
Browser

Modèle de la page hôte pour la navigation silencieuse:
- Fenêtres, document et frames
- Messagerie inter-documents (origine + fenêtre source)
"""

from .interfaces import (
    IBody,
    IDocument,
    IFrameElement,
    IHostWindow,
    MessageEvent,
    MessageListener,
)
from .window import Body, BrowserWindow, Document, FrameElement, Location

__all__ = [
    # Interfaces
    "IBody",
    "IDocument",
    "IFrameElement",
    "IHostWindow",
    # Data classes
    "MessageEvent",
    "MessageListener",
    # Implementations
    "Body",
    "BrowserWindow",
    "Document",
    "FrameElement",
    "Location",
]
