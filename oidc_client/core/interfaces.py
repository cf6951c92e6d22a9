"""
Core - Interfaces

Contrats de configuration du client OIDC.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..logging import InvalidLogLevelError, LogConfig, LogLevel, parse_log_level


# ══════════════════════════════════════════════════════════════════════════════
# TYPES
# ══════════════════════════════════════════════════════════════════════════════


class UserManagerSettings(BaseModel):
    """
    Réglages du gestionnaire de session utilisées par la navigation
    silencieuse et le bus d'événements.

    Attributes:
        silent_request_timeout_in_seconds: Délai max d'un aller-retour
            dans la frame cachée
        access_token_expiring_notification_time_in_seconds: Avance (s)
            avec laquelle "access token expiring" est levé
        log_level: Niveau minimum des logs du client
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    silent_request_timeout_in_seconds: float = Field(default=10, gt=0)
    access_token_expiring_notification_time_in_seconds: int = Field(default=60, ge=0)
    log_level: LogLevel = LogLevel.WARN

    @field_validator("log_level", mode="before")
    @classmethod
    def _parse_log_level(cls, value: Any) -> LogLevel:
        if isinstance(value, LogLevel):
            return value
        try:
            return parse_log_level(value)
        except InvalidLogLevelError as e:
            raise ValueError(str(e))

    def to_log_config(self, **overrides: Any) -> LogConfig:
        """
        Configuration de logging correspondant à `log_level`.

        Example:
            configure_logging(settings.to_log_config(output_handler=print))
        """
        return LogConfig(min_level=self.log_level, **overrides)


# ══════════════════════════════════════════════════════════════════════════════
# INTERFACES
# ══════════════════════════════════════════════════════════════════════════════


class ISettingsLoader(ABC):
    """Charge les réglages client depuis fichiers."""

    @abstractmethod
    async def load(self, name: str) -> UserManagerSettings:
        """
        Charge les réglages nommés.

        Raises:
            ConfigIntegrityError: Si fichier absent ou contenu invalide
        """
        pass

    @abstractmethod
    def from_dict(self, data: Dict[str, Any]) -> UserManagerSettings:
        """Valide un dictionnaire de réglages."""
        pass
