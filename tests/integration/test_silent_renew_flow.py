"""
Tests d'intégration: renouvellement silencieux

Scénario complet sur une page hôte en mémoire:
    session chargée → "access token expiring" → navigation dans la frame
    cachée → page de callback → nouvelle session (ou "silent renew error").
"""

import asyncio

import pytest
from unittest.mock import patch

from oidc_client import (
    IFrameNavigator,
    NavigateParams,
    NavigationError,
    NavigationTimeoutError,
    User,
    UserManagerEvents,
    UserManagerSettings,
)
from oidc_client.logging import LogConfig, LogLevel, configure_logging
from oidc_client.utils import Timer


NOW = 1000
AUTHORIZE_URL = "https://idp.example/authorize?client_id=spa&prompt=none&state=st4te-value"
CALLBACK_URL = "https://app.example/silent-callback?code=s3cr3t-code&state=st4te-value"


class SilentRenewHarness:
    """Gestionnaire de session minimal branché sur le bus d'événements."""

    def __init__(self, host_window, settings):
        self.events = UserManagerEvents(settings)
        self.navigator = IFrameNavigator(host_window, settings)
        self.handles = []
        self.responses = []
        self.events.add_access_token_expiring(self.renew)

    async def renew(self):
        handle = self.navigator.prepare()
        self.handles.append(handle)
        try:
            response = await handle.navigate(NavigateParams(url=AUTHORIZE_URL))
        except NavigationError as e:
            self.events._raise_silent_renew_error(e)
            return
        self.responses.append(response)
        self.events.load(User(access_token="renewed", expires_at=Timer.get_epoch_time() + 3600))


@pytest.fixture
def frozen_clock():
    with patch.object(Timer, "get_epoch_time", return_value=NOW) as clock:
        yield clock


async def trigger_expiring(harness: SilentRenewHarness, clock) -> None:
    """Avance l'horloge jusqu'à "expiring" et laisse la frame s'attacher."""
    timer = harness.events.access_token_events.expiring_timer
    clock.return_value = timer.expiration
    timer._callback()
    for _ in range(3):
        await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_silent_renew_success(host_window, frozen_clock):
    """expiring → frame → callback → nouvelle session chargée."""
    settings = UserManagerSettings(access_token_expiring_notification_time_in_seconds=60)
    harness = SilentRenewHarness(host_window, settings)
    loaded = []
    renewed = asyncio.Event()

    def on_loaded(user):
        loaded.append(user)
        if user.access_token == "renewed":
            renewed.set()

    harness.events.add_user_loaded(on_loaded)
    harness.events.load(User(access_token="initial", expires_at=NOW + 300))

    await trigger_expiring(harness, frozen_clock)

    assert len(harness.handles) == 1
    frame = harness.handles[0].frame
    assert frame.is_connected
    frame_window = frame.content_window
    assert frame_window.href == AUTHORIZE_URL

    # La page d'autorisation redirige vers le callback de l'application
    frame_window.location.assign(CALLBACK_URL)
    IFrameNavigator(frame_window).callback()

    await asyncio.wait_for(renewed.wait(), timeout=1)

    assert [u.access_token for u in loaded] == ["initial", "renewed"]
    assert harness.responses[0].url == CALLBACK_URL
    assert host_window.document.body.children == []
    assert host_window.listener_count("message") == 0
    assert harness.events.access_token_events.expiring_timer.expiration == NOW + 240 + 3600 - 60
    harness.events.unload()


@pytest.mark.asyncio
async def test_silent_renew_timeout_raises_error_event(host_window, frozen_clock):
    """Pas de réponse de l'IdP → "silent renew error" avec NavigationTimeoutError."""
    settings = UserManagerSettings(silent_request_timeout_in_seconds=0.05)
    harness = SilentRenewHarness(host_window, settings)
    errors = []
    failed = asyncio.Event()

    def on_error(error):
        errors.append(error)
        failed.set()

    harness.events.add_silent_renew_error(on_error)
    harness.events.load(User(access_token="initial", expires_at=NOW + 300))

    await trigger_expiring(harness, frozen_clock)
    await asyncio.wait_for(failed.wait(), timeout=1)

    assert isinstance(errors[0], NavigationTimeoutError)
    assert str(errors[0]) == "Frame window timed out"
    assert host_window.document.body.children == []
    assert host_window.listener_count("message") == 0
    harness.events.unload()


@pytest.mark.asyncio
async def test_unload_during_renew(host_window, frozen_clock):
    """Déconnexion pendant le renouvellement: timers annulés, frame fermée."""
    harness = SilentRenewHarness(host_window, UserManagerSettings())
    unloaded = []
    errors = []
    harness.events.add_user_unloaded(lambda: unloaded.append(True))
    harness.events.add_silent_renew_error(errors.append)
    harness.events.load(User(access_token="initial", expires_at=NOW + 300))

    await trigger_expiring(harness, frozen_clock)
    harness.events.unload()
    harness.handles[0].close()
    for _ in range(3):
        await asyncio.sleep(0)

    assert unloaded == [True]
    assert not harness.events.access_token_events.expired_timer.is_armed
    assert len(errors) == 1
    assert host_window.document.body.children == []


@pytest.mark.asyncio
async def test_sensitive_values_masked_in_logs(host_window, frozen_clock):
    """Le code d'autorisation et le state n'apparaissent pas dans les logs."""
    output = []
    configure_logging(LogConfig(min_level=LogLevel.DEBUG, output_handler=output.append))
    harness = SilentRenewHarness(host_window, UserManagerSettings())
    renewed = asyncio.Event()
    harness.events.add_user_loaded(lambda user: renewed.set() if user.access_token == "renewed" else None)
    harness.events.load(User(access_token="initial", expires_at=NOW + 300))

    await trigger_expiring(harness, frozen_clock)
    frame_window = harness.handles[0].frame.content_window
    frame_window.location.assign(CALLBACK_URL)
    IFrameNavigator(frame_window).callback()
    await asyncio.wait_for(renewed.wait(), timeout=1)

    logs = "\n".join(output)
    assert "IFrameWindow" in logs
    assert "s3cr3t-code" not in logs
    assert "st4te-value" not in logs
    harness.events.unload()
