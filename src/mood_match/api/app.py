"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import anyio
from fastapi import FastAPI, Request, WebSocket, WebSocketDisconnect

from mood_match.api.admin import router as admin_router
from mood_match.app_logging import configure_logging
from mood_match.containers import AppContainer
from mood_match.domain.events import ErrorEvent
from mood_match.domain.moods import (
    MOOD_PRESENTATION,
    Mood,
    compatible_moods,
    preferred_moods,
)

APP_VERSION = "2.1.0"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.container.reaper.start()
        logger.info(
            "Matchmaking started",
            extra={"strategy": app.state.container.settings.match_strategy},
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    @app.get("/health")
    async def health(request: Request) -> dict[str, object]:
        """Simple health check endpoint."""
        state_container: AppContainer = request.app.state.container
        stats = state_container.controller.stats()
        return {
            "status": "ok",
            "timestamp": state_container.controller.clock().isoformat(),
            "users": stats.online,
            "rooms": stats.active_rooms,
        }

    @app.get("/api/stats")
    async def api_stats(request: Request) -> dict[str, object]:
        """Return live counters for the stats collaborator."""
        state_container: AppContainer = request.app.state.container
        stats = state_container.controller.stats()
        return {
            "online": stats.online,
            "waiting": stats.waiting,
            "active_rooms": stats.active_rooms,
            "moods": len(Mood),
            "version": APP_VERSION,
        }

    @app.get("/api/moods")
    async def api_moods() -> dict[str, object]:
        """Return the mood catalogue."""
        return {"moods": [_mood_payload(mood) for mood in Mood]}

    @app.websocket("/ws")
    async def chat_socket(websocket: WebSocket) -> None:
        """One connection per user handle."""
        state_container: AppContainer = websocket.app.state.container
        dispatcher = state_container.dispatcher
        await websocket.accept()
        handle_id = await dispatcher.connect(websocket)
        try:
            while True:
                try:
                    raw = await websocket.receive_json()
                except (ValueError, KeyError):
                    # Malformed JSON or a binary frame.
                    await state_container.hub.send(
                        handle_id,
                        ErrorEvent(code="invalid_message", message="Expected JSON"),
                    )
                    continue
                await dispatcher.handle(handle_id, raw)
        except WebSocketDisconnect:
            logger.info("Socket closed", extra={"handle_id": handle_id})
        finally:
            # The partner must still hear about the drop when this task is
            # cancelled.
            with anyio.CancelScope(shield=True):
                await dispatcher.disconnect(handle_id)

    return app


def _mood_payload(mood: Mood) -> dict[str, object]:
    presentation = MOOD_PRESENTATION[mood]
    return {
        "id": mood.value,
        "label": presentation.label,
        "emoji": presentation.emoji,
        "color": presentation.color,
        "compatible": [item.value for item in compatible_moods(mood)],
        "preferred": sorted(item.value for item in preferred_moods(mood)),
    }
