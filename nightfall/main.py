"""Nightfall Socket.IO server"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, Optional, Type, TypeVar

import socketio
import uvicorn
from fastapi import FastAPI
from pydantic import ValidationError

from nightfall.config import ServerSettings
from nightfall.game.engine import GameManager
from nightfall.types.events import OutboundEvent
from nightfall.types.requests import (
    CreateRoomRequest,
    InboundRequest,
    JoinLobbyRequest,
    SendMessageRequest,
    StartGameRequest,
    TargetRequest,
)

logger = logging.getLogger(__name__)

RequestT = TypeVar("RequestT", bound=InboundRequest)


class GameServer:
    """Maps Socket.IO connections onto the game manager.

    Each connection id is a player id. Outbound events from the game core
    are queued and sent in order by a single dispatcher task.
    """

    def __init__(self, settings: Optional[ServerSettings] = None):
        self.settings = settings or ServerSettings()
        self.queue: asyncio.Queue = asyncio.Queue()
        self.manager = GameManager(self.queue.put_nowait, config=self.settings.game)
        self._dispatcher: Optional[asyncio.Task] = None

        self.sio = socketio.AsyncServer(
            async_mode="asgi",
            cors_allowed_origins=self.settings.cors_origins,
        )
        self.app = FastAPI(title="Nightfall", lifespan=self.lifespan)
        self.app.add_api_route("/health", self.health, methods=["GET"])
        self.asgi_app = socketio.ASGIApp(self.sio, other_asgi_app=self.app)
        self._register_handlers()

    def _register_handlers(self) -> None:
        self.sio.on("connect", handler=self.on_connect)
        self.sio.on("disconnect", handler=self.on_disconnect)
        self.sio.on("create_room", handler=self.on_create_room)
        self.sio.on("join_lobby", handler=self.on_join_lobby)
        self.sio.on("start_game", handler=self.on_start_game)
        self.sio.on("day_vote", handler=self.on_day_vote)
        self.sio.on("werewolf_vote", handler=self.on_werewolf_vote)
        self.sio.on("seer_check", handler=self.on_seer_check)
        self.sio.on("doctor_save", handler=self.on_doctor_save)
        self.sio.on("send_message", handler=self.on_send_message)

    @asynccontextmanager
    async def lifespan(self, app: FastAPI):
        self.start_dispatcher()
        yield
        await self.stop_dispatcher()

    async def health(self) -> dict:
        return {"status": "ok"}

    def start_dispatcher(self) -> None:
        if self._dispatcher is None or self._dispatcher.done():
            self._dispatcher = asyncio.create_task(self._dispatch_events())

    async def stop_dispatcher(self) -> None:
        if self._dispatcher is not None:
            self._dispatcher.cancel()
            try:
                await self._dispatcher
            except asyncio.CancelledError:
                pass
            self._dispatcher = None

    async def _dispatch_events(self) -> None:
        while True:
            event: OutboundEvent = await self.queue.get()
            try:
                await self.deliver(event)
            except Exception as e:
                logger.error(f"Failed to deliver {event.name}: {e}", exc_info=True)
            finally:
                self.queue.task_done()

    async def deliver(self, event: OutboundEvent) -> None:
        payload = event.to_wire()
        for sid in event.recipients:
            await self.sio.emit(event.name, payload, to=sid)

    @staticmethod
    def _parse(model: Type[RequestT], event: str, sid: str, data: Any) -> Optional[RequestT]:
        try:
            return model.model_validate(data or {})
        except ValidationError as e:
            logger.warning(f"Malformed {event} from {sid}: {e.error_count()} errors")
            return None

    async def on_connect(self, sid: str, environ: dict, auth: Any = None) -> None:
        logger.info(f"User connected: {sid}")

    async def on_disconnect(self, sid: str, reason: Any = None) -> None:
        logger.info(f"User disconnected: {sid}")
        self.manager.disconnect(sid)

    async def on_create_room(self, sid: str, data: Any) -> None:
        request = self._parse(CreateRoomRequest, "create_room", sid, data)
        if request:
            self.manager.create_room(sid, request.username)

    async def on_join_lobby(self, sid: str, data: Any) -> None:
        request = self._parse(JoinLobbyRequest, "join_lobby", sid, data)
        if request:
            logger.info(f"User {request.username} ({sid}) joining room {request.room_code}")
            self.manager.join_lobby(sid, request.username, request.room_code)

    async def on_start_game(self, sid: str, data: Any) -> None:
        request = self._parse(StartGameRequest, "start_game", sid, data)
        if request:
            self.manager.start_game(sid, request.room_code)

    async def on_day_vote(self, sid: str, data: Any) -> None:
        request = self._parse(TargetRequest, "day_vote", sid, data)
        if request:
            self.manager.day_vote(sid, request.room_code, request.target_id)

    async def on_werewolf_vote(self, sid: str, data: Any) -> None:
        request = self._parse(TargetRequest, "werewolf_vote", sid, data)
        if request:
            self.manager.werewolf_vote(sid, request.room_code, request.target_id)

    async def on_seer_check(self, sid: str, data: Any) -> None:
        request = self._parse(TargetRequest, "seer_check", sid, data)
        if request:
            self.manager.seer_check(sid, request.room_code, request.target_id)

    async def on_doctor_save(self, sid: str, data: Any) -> None:
        request = self._parse(TargetRequest, "doctor_save", sid, data)
        if request:
            self.manager.doctor_save(sid, request.room_code, request.target_id)

    async def on_send_message(self, sid: str, data: Any) -> None:
        request = self._parse(SendMessageRequest, "send_message", sid, data)
        if request:
            self.manager.send_message(
                sid, request.room_code, request.message, request.is_werewolf_chat
            )


def start_server(settings: Optional[ServerSettings] = None) -> None:
    """Configure logging and serve the game until interrupted."""
    settings = settings or ServerSettings.from_env()

    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logger.info(f"Starting Nightfall on {settings.host}:{settings.port}")

    server = GameServer(settings)
    uvicorn.run(server.asgi_app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    start_server()
