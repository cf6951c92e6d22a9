"""
Navigators - Interfaces

Contrat commun des surfaces de navigation (frame cachée, popup,
redirection): charger une URL d'autorisation, récupérer l'URL de
réponse.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class NavigateParams:
    """
    Paramètres d'une navigation.

    Attributes:
        url: URL d'autorisation absolue (non vide)
        extras: Champs d'extension propres à l'appelant
    """

    url: str
    extras: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class NavigateResponse:
    """
    Réponse d'une navigation.

    Attributes:
        url: URL de callback reçue (opaque pour cette couche)
    """

    url: str


class IWindow(ABC):
    """
    Surface de navigation à usage unique.

    Une instance porte exactement une opération en cours, réglée au plus
    une fois (succès, erreur ou timeout).
    """

    @abstractmethod
    async def navigate(self, params: NavigateParams) -> NavigateResponse:
        """
        Charge `params.url` et attend l'URL de réponse.

        Raises:
            NavigationError: Précondition invalide, fermeture ou timeout
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """
        Libère la surface (idempotent).

        Une navigation encore en attente échoue.
        """
        pass


class INavigator(ABC):
    """
    Fabrique de surfaces de navigation, choisie par l'orchestrateur.
    """

    @abstractmethod
    def prepare(self, **options: Any) -> IWindow:
        """Crée une nouvelle surface pour une tentative de navigation."""
        pass

    @abstractmethod
    def callback(self, url: Optional[str] = None) -> None:
        """
        Côté page de callback: renvoie l'URL de réponse vers la page
        qui a lancé la navigation.
        """
        pass
