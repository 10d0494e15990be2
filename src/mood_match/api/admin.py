"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

if TYPE_CHECKING:
    from mood_match.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/rooms", dependencies=[Depends(require_admin)])
async def list_rooms(request: Request) -> dict[str, object]:
    """Return live rooms with their ages."""
    container: AppContainer = request.app.state.container
    now = container.controller.clock()
    return {
        "rooms": [
            {
                "id": room.id,
                "member_a": room.member_a,
                "member_b": room.member_b,
                "mood": room.mood.value,
                "created_at": room.created_at.isoformat(),
                "age_seconds": round(room.age_seconds(now), 1),
            }
            for room in container.controller.rooms()
        ]
    }


@router.get("/waiting", dependencies=[Depends(require_admin)])
async def list_waiting(request: Request) -> dict[str, object]:
    """Return the waiting pool in FIFO order."""
    container: AppContainer = request.app.state.container
    return {
        "waiting": [
            {
                "handle_id": entry.handle_id,
                "mood": entry.mood.value,
                "enqueued_at": entry.enqueued_at.isoformat(),
            }
            for entry in container.controller.waiting()
        ]
    }


@router.post("/reap", dependencies=[Depends(require_admin)])
async def reap_now(request: Request) -> dict[str, object]:
    """Run one stale-room sweep immediately."""
    container: AppContainer = request.app.state.container
    before = container.controller.stats().active_rooms
    await container.reaper.sweep()
    after = container.controller.stats().active_rooms
    return {"expired": before - after, "active_rooms": after}
