"""ASGI entrypoint for the mood match API."""

from mood_match.api.app import create_app
from mood_match.containers import build_container

app = create_app(build_container())
