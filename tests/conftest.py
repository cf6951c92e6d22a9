"""
oidc_client - Pytest Configuration
Fixtures partagées pour tous les tests.
"""

import pytest
from pathlib import Path

from oidc_client.browser import BrowserWindow
from oidc_client.core import UserManagerSettings
from oidc_client.logging import configure_logging, get_logging_config


@pytest.fixture
def fixtures_path() -> Path:
    """Chemin vers le dossier fixtures."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def host_window() -> BrowserWindow:
    """Page hôte de l'application."""
    return BrowserWindow("https://app.example/")


@pytest.fixture
def settings() -> UserManagerSettings:
    """Réglages par défaut."""
    return UserManagerSettings()


@pytest.fixture(autouse=True)
def restore_logging_config():
    """Restaure la configuration de logging globale après chaque test."""
    previous = get_logging_config()
    yield
    configure_logging(previous)
