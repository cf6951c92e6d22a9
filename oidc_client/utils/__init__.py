"""
Utils

Primitives partagées: événements, timer d'expiration, décodage JWT.
"""

from .event import Event
from .timer import Timer
from .jwt_utils import JwtDecodeError, decode_without_validation

__all__ = [
    "Event",
    "Timer",
    "JwtDecodeError",
    "decode_without_validation",
]
