"""
Utils - JWT

Décodage du payload JWT sans validation (affichage du profil).

⚠️ NE JAMAIS utiliser pour authentification: la validation de signature
est du ressort du traitement de réponse, pas de cette couche.
"""

from typing import Any, Dict

import jwt


class JwtDecodeError(Exception):
    """JWT illisible."""

    pass


def decode_without_validation(token: str) -> Dict[str, Any]:
    """
    Décode le payload d'un JWT sans vérifier signature ni expiration.

    Args:
        token: JWT brut

    Returns:
        Claims du payload

    Raises:
        JwtDecodeError: Token malformé
    """
    try:
        return jwt.decode(
            token,
            options={
                "verify_signature": False,
                "verify_exp": False,
                "verify_aud": False,
            },
        )
    except jwt.InvalidTokenError as e:
        raise JwtDecodeError(f"Invalid token: {e}")
