"""
Tests unitaires User
"""

import json

import jwt
import pytest
from unittest.mock import patch

from oidc_client import User
from oidc_client.utils import Timer


NOW = 1000
SIGNING_KEY = "test-signing-key-with-at-least-32-bytes"


@pytest.fixture
def frozen_clock():
    with patch.object(Timer, "get_epoch_time", return_value=NOW) as clock:
        yield clock


class TestExpiration:
    """Tests expires_in / expired."""

    def test_unknown_expiration(self):
        """Sans expires_at, expiration inconnue."""
        user = User(access_token="at")

        assert user.expires_in is None
        assert user.expired is None

    def test_expires_in_relative_to_now(self, frozen_clock):
        """expires_in = expires_at - now."""
        user = User(access_token="at", expires_at=NOW + 300)

        assert user.expires_in == 300
        assert user.expired is False

    def test_expired_when_past(self, frozen_clock):
        """Expiration passée → expired, expires_in négatif."""
        user = User(access_token="at", expires_at=NOW - 5)

        assert user.expires_in == -5
        assert user.expired is True

    def test_expires_in_setter(self, frozen_clock):
        """Affecter expires_in calcule expires_at."""
        user = User(access_token="at")

        user.expires_in = 3600

        assert user.expires_at == NOW + 3600


class TestProfile:
    """Tests profil."""

    def test_profile_from_id_token(self):
        """Profil déduit des claims de l'id_token."""
        id_token = jwt.encode({"sub": "alice", "name": "Alice"}, SIGNING_KEY, algorithm="HS256")

        user = User(access_token="at", id_token=id_token)

        assert user.profile == {"sub": "alice", "name": "Alice"}

    def test_explicit_profile_kept(self):
        """Profil fourni prioritaire."""
        id_token = jwt.encode({"sub": "alice"}, SIGNING_KEY, algorithm="HS256")

        user = User(access_token="at", id_token=id_token, profile={"sub": "custom"})

        assert user.profile == {"sub": "custom"}

    def test_unreadable_id_token(self):
        """id_token illisible → profil vide."""
        assert User(access_token="at", id_token="garbage").profile == {}

    def test_scopes(self):
        """Scopes séparés par espace."""
        assert User(access_token="at", scope="openid profile").scopes == ["openid", "profile"]
        assert User(access_token="at").scopes == []


class TestStorage:
    """Tests sérialisation store de session."""

    def test_storage_roundtrip(self):
        """to_storage_string → from_storage_string conserve la session."""
        user = User(
            access_token="at",
            refresh_token="rt",
            scope="openid",
            profile={"sub": "alice"},
            expires_at=2000,
            state={"return_to": "/home"},
        )

        restored = User.from_storage_string(user.to_storage_string())

        assert restored == user

    def test_unknown_keys_ignored(self):
        """Clés inconnues ignorées."""
        data = json.dumps({"access_token": "at", "legacy_field": 1})

        assert User.from_storage_string(data).access_token == "at"

    @pytest.mark.parametrize("raw", ["not json", "[]", '{"scope": "openid"}'])
    def test_invalid_storage_string(self, raw):
        """JSON invalide ou access_token manquant → ValueError."""
        with pytest.raises(ValueError):
            User.from_storage_string(raw)
