"""
User

Session utilisateur issue d'une réponse d'autorisation: tokens, profil
et expiration. Payload de l'événement "user loaded" et entrée du timer
d'expiration de l'access token.
"""

import json
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, List, Optional

from .utils.jwt_utils import JwtDecodeError, decode_without_validation
from .utils.timer import Timer


@dataclass
class User:
    """
    Session utilisateur.

    Attributes:
        access_token: Access token
        token_type: Type de token (ex: "Bearer")
        id_token: ID token brut
        session_state: État de session OP (monitoring de session)
        refresh_token: Refresh token
        scope: Scopes accordés (séparés par espace)
        profile: Claims du profil (par défaut: claims non validés de id_token)
        expires_at: Expiration de l'access token (epoch secondes)
        state: Données applicatives associées à la requête
    """

    access_token: str
    token_type: str = "Bearer"
    id_token: Optional[str] = None
    session_state: Optional[str] = None
    refresh_token: Optional[str] = None
    scope: Optional[str] = None
    profile: Dict[str, Any] = field(default_factory=dict)
    expires_at: Optional[int] = None
    state: Any = None

    def __post_init__(self):
        """Profil déduit de l'id_token si absent."""
        if not self.profile and self.id_token:
            try:
                self.profile = decode_without_validation(self.id_token)
            except JwtDecodeError:
                self.profile = {}

    @property
    def expires_in(self) -> Optional[int]:
        """Secondes restantes avant expiration (négatif si expiré)."""
        if self.expires_at is None:
            return None
        return self.expires_at - Timer.get_epoch_time()

    @expires_in.setter
    def expires_in(self, value: Optional[float]) -> None:
        if value is not None:
            self.expires_at = int(value) + Timer.get_epoch_time()

    @property
    def expired(self) -> Optional[bool]:
        """True si expiré, None si expiration inconnue."""
        expires_in = self.expires_in
        if expires_in is None:
            return None
        return expires_in <= 0

    @property
    def scopes(self) -> List[str]:
        """Liste des scopes accordés."""
        return (self.scope or "").split()

    def to_storage_string(self) -> str:
        """Sérialise en JSON pour le store de session."""
        return json.dumps(asdict(self))

    @classmethod
    def from_storage_string(cls, storage_string: str) -> "User":
        """
        Reconstruit un User depuis `to_storage_string`.

        Raises:
            ValueError: JSON invalide ou access_token manquant
        """
        data = json.loads(storage_string)
        if not isinstance(data, dict) or "access_token" not in data:
            raise ValueError("Invalid user storage string")
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})
