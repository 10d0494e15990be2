"""Photo authenticity verification clients."""

from dataclasses import dataclass
from typing import Protocol

import httpx
from pydantic import BaseModel, Field


class PhotoVerification(BaseModel):
    """Verdict returned by a photo verifier."""

    verified: bool
    trust_score: int = Field(default=0, ge=0, le=100)
    flags: list[str] = Field(default_factory=list)
    message: str | None = None


class PhotoVerifier(Protocol):
    """Interface for photo authenticity checks."""

    async def verify(self, photo: str, name: str) -> PhotoVerification:
        """Return a verdict for a profile photo."""


@dataclass
class StaticPhotoVerifier(PhotoVerifier):
    """Verifier that accepts every photo with a fixed trust score."""

    trust_score: int = 75

    async def verify(self, photo: str, name: str) -> PhotoVerification:
        """Accept the photo."""
        return PhotoVerification(
            verified=True, trust_score=self.trust_score, message="Photo verified"
        )

    async def close(self) -> None:
        """Nothing to release."""


@dataclass
class HttpxPhotoVerifier(PhotoVerifier):
    """HTTPX-backed verifier posting photos to an external service."""

    url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 10.0

    @classmethod
    def create(cls, url: str, timeout_seconds: float = 10.0) -> "HttpxPhotoVerifier":
        """Create a verifier with a managed httpx session."""
        return cls(
            url=url,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def verify(self, photo: str, name: str) -> PhotoVerification:
        """Post the photo and parse the verdict."""
        response = await self.http_client.post(
            self.url,
            json={"photo": photo, "name": name},
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        return PhotoVerification.model_validate(response.json())

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
