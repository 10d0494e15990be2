"""Tests for registration checks."""

import asyncio
import logging

import pytest

from mood_match.domain.errors import AdmissionError
from mood_match.domain.models import Gender
from mood_match.services.admission import AdmissionService
from tests.conftest import FakePhotoVerifier


def test_admit_returns_profile_with_trust_score() -> None:
    service = AdmissionService(FakePhotoVerifier(trust_score=90))

    profile = asyncio.run(service.admit("Ann", 30, "female", "data:image/png;base64,"))

    assert profile.name == "Ann"
    assert profile.gender == Gender.FEMALE
    assert profile.trust_score == 90


def test_admit_rejects_minors_before_verification() -> None:
    verifier = FakePhotoVerifier()
    service = AdmissionService(verifier, min_age=18)

    with pytest.raises(AdmissionError) as excinfo:
        asyncio.run(service.admit("Kid", 17, "male", "photo"))

    assert excinfo.value.code == "registration_error"
    assert verifier.calls == []


def test_admit_rejects_unknown_gender() -> None:
    service = AdmissionService(FakePhotoVerifier())

    with pytest.raises(AdmissionError):
        asyncio.run(service.admit("Sam", 20, "other", "photo"))


def test_admit_reports_failed_photo_check() -> None:
    service = AdmissionService(FakePhotoVerifier(verified=False))

    with pytest.raises(AdmissionError) as excinfo:
        asyncio.run(service.admit("Ann", 30, "female", "photo"))

    assert excinfo.value.code == "photo_verification_failed"
    assert excinfo.value.details["flags"] == ["suspicious_photo"]


def test_admit_wraps_verifier_errors() -> None:
    service = AdmissionService(FakePhotoVerifier(error=RuntimeError("timeout")))

    with pytest.raises(AdmissionError) as excinfo:
        asyncio.run(service.admit("Ann", 30, "female", "photo"))

    assert excinfo.value.code == "registration_error"


class _RecordingHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


def test_verifier_error_is_logged_with_profile_name() -> None:
    service = AdmissionService(FakePhotoVerifier(error=RuntimeError("timeout")))
    handler = _RecordingHandler()
    logger = logging.getLogger("mood_match.services.admission")
    logger.addHandler(handler)
    try:
        with pytest.raises(AdmissionError):
            asyncio.run(service.admit("Ann", 30, "female", "photo"))
    finally:
        logger.removeHandler(handler)

    [record] = handler.records
    assert record.getMessage() == "Photo verification failed"
    assert record.profile_name == "Ann"
    assert record.exc_info is not None
