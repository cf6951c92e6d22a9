"""
Core

Réglages du client OIDC (modèle validé + chargement YAML).
"""

from .interfaces import ISettingsLoader, UserManagerSettings
from .config_loader import SettingsLoader, ConfigIntegrityError

__all__ = [
    # Interfaces
    "ISettingsLoader",
    # Data classes
    "UserManagerSettings",
    # Implementations
    "SettingsLoader",
    # Exceptions
    "ConfigIntegrityError",
]
