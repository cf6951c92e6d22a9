"""
Core - Settings Loader

Charge les réglages client depuis fichiers YAML et les valide.
"""

from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import ValidationError

from .interfaces import ISettingsLoader, UserManagerSettings


class ConfigIntegrityError(Exception):
    """Erreur d'intégrité de configuration."""

    pass


class SettingsLoader(ISettingsLoader):
    """
    Chargement des réglages depuis fichiers YAML.

    Example:
        loader = SettingsLoader("config")
        settings = await loader.load("spa")  # lit config/spa.yaml
    """

    def __init__(self, configs_path: str = "config"):
        self.configs_path = Path(configs_path)

    async def load(self, name: str) -> UserManagerSettings:
        """
        Charge les réglages nommés.

        Args:
            name: Nom du fichier (sans extension)

        Returns:
            Réglages validés

        Raises:
            ConfigIntegrityError: Si fichier inexistant ou contenu invalide
        """
        config_file = self.configs_path / f"{name}.yaml"

        if not config_file.exists():
            raise ConfigIntegrityError(f"Configuration not found: {name}")

        try:
            with open(config_file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigIntegrityError(f"YAML parsing error: {e}")
        except OSError as e:
            raise ConfigIntegrityError(f"File read error: {e}")

        # Fichier vide = réglages par défaut
        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise ConfigIntegrityError("Configuration must be a YAML mapping")

        return self.from_dict(data)

    def from_dict(self, data: Dict[str, Any]) -> UserManagerSettings:
        """
        Valide un dictionnaire de réglages.

        Raises:
            ConfigIntegrityError: Si une clé ou une valeur est invalide
        """
        invalid_keys = [key for key in data if not isinstance(key, str)]
        if invalid_keys:
            raise ConfigIntegrityError(f"Invalid settings: non-string keys {invalid_keys!r}")

        try:
            return UserManagerSettings.model_validate(data)
        except ValidationError as e:
            raise ConfigIntegrityError(f"Invalid settings: {e}")
