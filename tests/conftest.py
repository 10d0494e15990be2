"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest

from mood_match.adapters.connections import ConnectionHub
from mood_match.adapters.photo_verifier import PhotoVerification, PhotoVerifier
from mood_match.api.dispatch import CommandDispatcher
from mood_match.config import Settings
from mood_match.containers import AppContainer
from mood_match.domain.events import Delivery
from mood_match.domain.models import Gender, UserProfile
from mood_match.services.admission import AdmissionService
from mood_match.services.lifecycle import SessionLifecycleController
from mood_match.services.matchmaker import Matchmaker, MatchStrategy
from mood_match.services.pool import WaitingPool
from mood_match.services.reaper import StaleSessionReaper


@dataclass
class FakeClock:
    """Manually advanced clock."""

    now: datetime = field(
        default_factory=lambda: datetime(2026, 1, 1, 12, 0, tzinfo=UTC)
    )

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


@dataclass
class FakeSocket:
    """Socket double that records sent payloads."""

    sent: list[dict] = field(default_factory=list)
    fail: bool = False

    async def send_json(self, data: object, mode: str = "text") -> None:
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(data)  # type: ignore[arg-type]


@dataclass
class FakePhotoVerifier(PhotoVerifier):
    """Verifier returning a configured verdict."""

    verified: bool = True
    trust_score: int = 80
    error: Exception | None = None
    calls: list[str] = field(default_factory=list)

    async def verify(self, photo: str, name: str) -> PhotoVerification:
        self.calls.append(name)
        if self.error is not None:
            raise self.error
        return PhotoVerification(
            verified=self.verified,
            trust_score=self.trust_score if self.verified else 0,
            flags=[] if self.verified else ["suspicious_photo"],
            message=None if self.verified else "Photo did not pass verification",
        )

    async def close(self) -> None:
        return None


def make_profile(name: str, age: int = 25) -> UserProfile:
    return UserProfile(name=name, age=age, gender=Gender.FEMALE, trust_score=75)


def build_controller(
    strategy: MatchStrategy = MatchStrategy.PREFERRED_FIRST,
    clock: FakeClock | None = None,
) -> SessionLifecycleController:
    return SessionLifecycleController(
        matchmaker=Matchmaker(pool=WaitingPool(), strategy=strategy),
        clock=clock or FakeClock(),
    )


def join(controller: SessionLifecycleController, name: str) -> str:
    """Connect and admit a handle named ``name``; returns its id."""
    handle = controller.connect(handle_id=name)
    controller.admit(handle.id, make_profile(name))
    return handle.id


def events_for(deliveries: list[Delivery], recipient: str) -> list[str]:
    return [d.event.type for d in deliveries if d.recipient == recipient]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def controller(clock: FakeClock) -> SessionLifecycleController:
    return build_controller(clock=clock)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        admin_token="admin-token",
        environment="test",
        reaper_interval_seconds=30,
        session_max_age_seconds=120,
    )


@pytest.fixture
def photo_verifier() -> FakePhotoVerifier:
    return FakePhotoVerifier()


@pytest.fixture
def container(
    settings: Settings,
    clock: FakeClock,
    photo_verifier: FakePhotoVerifier,
) -> AppContainer:
    controller = build_controller(strategy=settings.match_strategy, clock=clock)
    hub = ConnectionHub()
    admission_service = AdmissionService(
        photo_verifier=photo_verifier, min_age=settings.min_age
    )
    dispatcher = CommandDispatcher(
        controller=controller, admission_service=admission_service, hub=hub
    )
    reaper = StaleSessionReaper(
        controller=controller,
        deliver=hub.deliver,
        interval_seconds=settings.reaper_interval_seconds,
        max_age_seconds=settings.session_max_age_seconds,
    )

    async def close_resources() -> None:
        await reaper.stop()

    return AppContainer(
        settings=settings,
        controller=controller,
        hub=hub,
        photo_verifier=photo_verifier,
        admission_service=admission_service,
        dispatcher=dispatcher,
        reaper=reaper,
        close_resources=close_resources,
    )
