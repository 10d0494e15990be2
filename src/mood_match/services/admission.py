"""Registration checks run before a handle may search."""

import logging
from dataclasses import dataclass

from mood_match.adapters.photo_verifier import PhotoVerifier
from mood_match.domain.errors import AdmissionError
from mood_match.domain.models import Gender, UserProfile

logger = logging.getLogger(__name__)


@dataclass
class AdmissionService:
    """Validates a profile and verifies its photo."""

    photo_verifier: PhotoVerifier
    min_age: int = 18

    async def admit(
        self, name: str, age: int, gender: str, photo: str | None
    ) -> UserProfile:
        """Return the public profile for an accepted registration."""
        if age < self.min_age:
            raise AdmissionError(
                "registration_error", f"Minimum age is {self.min_age}"
            )
        try:
            parsed_gender = Gender(gender)
        except ValueError as exc:
            raise AdmissionError("registration_error", "Select a gender") from exc
        if not photo:
            raise AdmissionError("registration_error", "A photo is required")

        try:
            verification = await self.photo_verifier.verify(photo, name)
        except Exception as exc:
            logger.exception(
                "Photo verification failed", extra={"profile_name": name}
            )
            raise AdmissionError(
                "registration_error", "Photo verification is unavailable"
            ) from exc

        if not verification.verified:
            raise AdmissionError(
                "photo_verification_failed",
                verification.message or "Photo did not pass verification",
                details={
                    "trust_score": verification.trust_score,
                    "flags": verification.flags,
                },
            )
        return UserProfile(
            name=name,
            age=age,
            gender=parsed_gender,
            trust_score=verification.trust_score,
        )
