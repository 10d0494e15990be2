"""Routes validated client commands to the matchmaking core."""

import logging
from dataclasses import dataclass

from pydantic import ValidationError

from mood_match.adapters.connections import ConnectionHub, EventSocket
from mood_match.api.ws_models import (
    ClientCommand,
    LeaveCommand,
    MessageCommand,
    RegisterCommand,
    StartSearchCommand,
    TypingCommand,
    client_command_adapter,
)
from mood_match.domain.errors import AdmissionError, MatchmakingError
from mood_match.domain.events import (
    Connected,
    Delivery,
    ErrorEvent,
    StatsUpdate,
)
from mood_match.services.admission import AdmissionService
from mood_match.services.lifecycle import SessionLifecycleController

logger = logging.getLogger(__name__)


@dataclass
class CommandDispatcher:
    """Connection-level entry points for the WebSocket endpoint."""

    controller: SessionLifecycleController
    admission_service: AdmissionService
    hub: ConnectionHub

    async def connect(self, socket: EventSocket) -> str:
        """Create a handle for a new socket and greet it."""
        handle = self.controller.connect()
        self.hub.attach(handle.id, socket)
        await self.hub.send(handle.id, Connected(handle_id=handle.id))
        await self.hub.send(handle.id, self.stats_event())
        return handle.id

    async def handle(self, handle_id: str, raw: object) -> None:
        """Validate one inbound message and apply it."""
        try:
            command = client_command_adapter.validate_python(raw)
        except ValidationError as exc:
            fields = [".".join(str(part) for part in err["loc"]) for err in exc.errors()]
            await self.hub.send(
                handle_id,
                ErrorEvent(
                    code="invalid_message",
                    message="Message could not be parsed",
                    details={"fields": fields},
                ),
            )
            return

        try:
            deliveries = await self._execute(handle_id, command)
        except MatchmakingError as exc:
            await self.hub.send(
                handle_id, ErrorEvent(code=exc.code, message=str(exc) or exc.code)
            )
            return
        except AdmissionError as exc:
            await self.hub.send(
                handle_id,
                ErrorEvent(code=exc.code, message=exc.message, details=exc.details),
            )
            return
        await self.hub.deliver(deliveries)
        if isinstance(command, RegisterCommand):
            await self.hub.broadcast(self.stats_event())

    async def disconnect(self, handle_id: str) -> None:
        """Tear down everything the handle owned."""
        self.hub.detach(handle_id)
        deliveries = self.controller.disconnect(handle_id)
        await self.hub.deliver(deliveries)
        await self.hub.broadcast(self.stats_event())

    def stats_event(self) -> StatsUpdate:
        stats = self.controller.stats()
        return StatsUpdate(
            online=stats.online,
            waiting=stats.waiting,
            active_rooms=stats.active_rooms,
        )

    async def _execute(
        self, handle_id: str, command: ClientCommand
    ) -> list[Delivery]:
        if isinstance(command, RegisterCommand):
            return await self._register(handle_id, command)
        if isinstance(command, StartSearchCommand):
            return self.controller.start_search(handle_id, command.mood)
        if isinstance(command, MessageCommand):
            return self.controller.relay_message(handle_id, command.text)
        if isinstance(command, TypingCommand):
            return self.controller.relay_typing(handle_id, command.is_typing)
        if isinstance(command, LeaveCommand):
            return self.controller.leave(handle_id)
        return []

    async def _register(
        self, handle_id: str, command: RegisterCommand
    ) -> list[Delivery]:
        handle = self.controller.get_handle(handle_id)
        if handle is not None and handle.verified:
            raise AdmissionError("registration_error", "Already registered")
        # Verification may be slow; it runs before the handle touches the core.
        profile = await self.admission_service.admit(
            name=command.name,
            age=command.age,
            gender=command.gender,
            photo=command.photo,
        )
        logger.info("Handle admitted", extra={"handle_id": handle_id})
        return self.controller.admit(handle_id, profile)
