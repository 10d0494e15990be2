"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from mood_match.adapters.connections import ConnectionHub
from mood_match.adapters.photo_verifier import (
    HttpxPhotoVerifier,
    PhotoVerifier,
    StaticPhotoVerifier,
)
from mood_match.api.dispatch import CommandDispatcher
from mood_match.config import Settings
from mood_match.services.admission import AdmissionService
from mood_match.services.lifecycle import SessionLifecycleController
from mood_match.services.matchmaker import Matchmaker
from mood_match.services.pool import WaitingPool
from mood_match.services.reaper import StaleSessionReaper


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    controller: SessionLifecycleController
    hub: ConnectionHub
    photo_verifier: PhotoVerifier
    admission_service: AdmissionService
    dispatcher: CommandDispatcher
    reaper: StaleSessionReaper
    close_resources: Callable[[], Awaitable[None]]


def build_photo_verifier(settings: Settings) -> HttpxPhotoVerifier | StaticPhotoVerifier:
    """Use the remote verifier when configured, otherwise accept all photos."""
    if settings.photo_verifier_url:
        return HttpxPhotoVerifier.create(
            settings.photo_verifier_url,
            timeout_seconds=settings.photo_verifier_timeout_seconds,
        )
    return StaticPhotoVerifier(trust_score=settings.default_trust_score)


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    matchmaker = Matchmaker(
        pool=WaitingPool(), strategy=resolved_settings.match_strategy
    )
    controller = SessionLifecycleController(matchmaker=matchmaker)
    hub = ConnectionHub()
    photo_verifier = build_photo_verifier(resolved_settings)
    admission_service = AdmissionService(
        photo_verifier=photo_verifier, min_age=resolved_settings.min_age
    )
    dispatcher = CommandDispatcher(
        controller=controller, admission_service=admission_service, hub=hub
    )
    reaper = StaleSessionReaper(
        controller=controller,
        deliver=hub.deliver,
        interval_seconds=resolved_settings.reaper_interval_seconds,
        max_age_seconds=resolved_settings.session_max_age_seconds,
    )

    async def close_resources() -> None:
        await reaper.stop()
        await photo_verifier.close()

    return AppContainer(
        settings=resolved_settings,
        controller=controller,
        hub=hub,
        photo_verifier=photo_verifier,
        admission_service=admission_service,
        dispatcher=dispatcher,
        reaper=reaper,
        close_resources=close_resources,
    )
