"""Best-effort delivery of outbound events to live connections."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from mood_match.domain.events import Delivery, OutboundEvent

logger = logging.getLogger(__name__)


class EventSocket(Protocol):
    """Subset of the WebSocket interface used for delivery."""

    async def send_json(self, data: object, mode: str = "text") -> None:
        """Send a JSON payload."""


@dataclass
class ConnectionHub:
    """Maps handle ids to sockets and delivers events to them."""

    _sockets: dict[str, EventSocket] = field(default_factory=dict)

    def attach(self, handle_id: str, socket: EventSocket) -> None:
        self._sockets[handle_id] = socket

    def detach(self, handle_id: str) -> None:
        self._sockets.pop(handle_id, None)

    def __len__(self) -> int:
        return len(self._sockets)

    async def send(self, handle_id: str, event: OutboundEvent) -> bool:
        """Send one event. Returns False when the recipient is gone."""
        socket = self._sockets.get(handle_id)
        if socket is None:
            return False
        try:
            await socket.send_json(event.to_payload())
        except Exception:
            logger.warning(
                "Dropping event for unreachable handle",
                extra={"handle_id": handle_id, "event_type": event.type},
            )
            return False
        return True

    async def deliver(self, deliveries: list[Delivery]) -> None:
        """Send each delivery in order."""
        for delivery in deliveries:
            await self.send(delivery.recipient, delivery.event)

    async def broadcast(self, event: OutboundEvent) -> None:
        """Send an event to every attached handle."""
        for handle_id in list(self._sockets):
            await self.send(handle_id, event)
