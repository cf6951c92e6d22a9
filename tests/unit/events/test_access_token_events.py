"""
Tests unitaires AccessTokenEvents

Horloge figée à NOW via patch de Timer.get_epoch_time.
"""

import asyncio

import pytest
from unittest.mock import patch

from oidc_client import AccessTokenEvents, User
from oidc_client.events import IAccessTokenEvents
from oidc_client.utils import Timer


NOW = 1000


@pytest.fixture
def frozen_clock():
    with patch.object(Timer, "get_epoch_time", return_value=NOW) as clock:
        yield clock


@pytest.fixture
def events():
    tracker = AccessTokenEvents(expiring_notification_time_in_seconds=60)
    yield tracker
    tracker.unload()


def user_expiring_in(seconds) -> User:
    return User(access_token="at", expires_at=NOW + seconds)


class TestLoad:
    """Tests armement des timers."""

    def test_implements_interface(self, events):
        assert isinstance(events, IAccessTokenEvents)

    @pytest.mark.asyncio
    async def test_both_timers_armed(self, events, frozen_clock):
        """expiring = durée - avance, expired = durée + 1."""
        events.load(user_expiring_in(300))

        assert events.expiring_timer.expiration == NOW + 240
        assert events.expired_timer.expiration == NOW + 301
        assert events.expiring_timer.is_armed
        assert events.expired_timer.is_armed

    @pytest.mark.asyncio
    async def test_expiring_clamped_when_inside_lead_time(self, events, frozen_clock):
        """Durée restante < avance → expiring dans 1 seconde."""
        events.load(user_expiring_in(30))

        assert events.expiring_timer.expiration == NOW + 1
        assert events.expired_timer.expiration == NOW + 31

    @pytest.mark.asyncio
    async def test_already_expired(self, events, frozen_clock):
        """Token expiré → pas d'expiring, expired dans 1 seconde."""
        events.load(user_expiring_in(-10))

        assert not events.expiring_timer.is_armed
        assert events.expired_timer.is_armed
        assert events.expired_timer.expiration == NOW + 1

    @pytest.mark.asyncio
    async def test_expiring_exactly_now(self, events, frozen_clock):
        """Durée nulle → expiring annulé."""
        events.load(user_expiring_in(300))

        events.load(user_expiring_in(0))

        assert not events.expiring_timer.is_armed
        assert events.expired_timer.expiration == NOW + 1

    @pytest.mark.asyncio
    async def test_unknown_expiration_cancels(self, events, frozen_clock):
        """Sans expiration connue les timers sont annulés."""
        events.load(user_expiring_in(300))

        events.load(User(access_token="at"))

        assert not events.expiring_timer.is_armed
        assert not events.expired_timer.is_armed

    @pytest.mark.asyncio
    async def test_missing_access_token_cancels(self, events, frozen_clock):
        events.load(user_expiring_in(300))

        events.load(User(access_token="", expires_at=NOW + 300))

        assert not events.expiring_timer.is_armed
        assert not events.expired_timer.is_armed

    @pytest.mark.asyncio
    async def test_unload_cancels(self, events, frozen_clock):
        events.load(user_expiring_in(300))

        events.unload()

        assert not events.expiring_timer.is_armed
        assert not events.expired_timer.is_armed


class TestHandlers:
    """Tests abonnements."""

    @pytest.mark.asyncio
    async def test_expiring_raised(self, events, frozen_clock):
        """Handler expiring appelé à l'expiration du timer."""
        calls = []
        events.add_access_token_expiring(lambda: calls.append("expiring"))
        events.add_access_token_expired(lambda: calls.append("expired"))
        events.load(user_expiring_in(300))

        frozen_clock.return_value = NOW + 240
        events.expiring_timer._callback()

        assert calls == ["expiring"]

        frozen_clock.return_value = NOW + 301
        events.expired_timer._callback()

        assert calls == ["expiring", "expired"]

    @pytest.mark.asyncio
    async def test_remove_handlers(self, events, frozen_clock):
        calls = []

        def on_expiring():
            calls.append("expiring")

        def on_expired():
            calls.append("expired")

        events.add_access_token_expiring(on_expiring)
        events.add_access_token_expired(on_expired)
        events.remove_access_token_expiring(on_expiring)
        events.remove_access_token_expired(on_expired)
        events.load(user_expiring_in(300))

        frozen_clock.return_value = NOW + 400
        events.expiring_timer._callback()
        events.expired_timer._callback()

        assert calls == []

    @pytest.mark.asyncio
    async def test_expired_fires_on_real_clock(self):
        """Token déjà expiré: expired levé après ~1 seconde."""
        fired = asyncio.Event()
        tracker = AccessTokenEvents(expiring_notification_time_in_seconds=60)
        tracker.add_access_token_expired(fired.set)

        tracker.load(User(access_token="at", expires_at=Timer.get_epoch_time() - 5))

        await asyncio.wait_for(fired.wait(), timeout=3)
        tracker.unload()
