"""Tests for container wiring."""

import asyncio

from mood_match.adapters.photo_verifier import HttpxPhotoVerifier, StaticPhotoVerifier
from mood_match.containers import build_container
from mood_match.services.matchmaker import MatchStrategy


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.controller.matchmaker.strategy == MatchStrategy.PREFERRED_FIRST
    assert isinstance(container.photo_verifier, StaticPhotoVerifier)
    assert container.reaper.max_age_seconds == 120
    asyncio.run(container.close_resources())


def test_build_container_uses_remote_verifier_when_configured(settings) -> None:
    configured = settings.model_copy(
        update={
            "photo_verifier_url": "https://verify.test/check",
            "match_strategy": MatchStrategy.EXACT,
        }
    )

    container = build_container(configured)

    assert isinstance(container.photo_verifier, HttpxPhotoVerifier)
    assert container.controller.matchmaker.strategy == MatchStrategy.EXACT
    asyncio.run(container.close_resources())
