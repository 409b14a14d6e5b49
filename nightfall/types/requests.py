"""Inbound event payloads as sent by clients"""

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class InboundRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateRoomRequest(InboundRequest):
    username: str


class JoinLobbyRequest(InboundRequest):
    username: str
    room_code: str


class StartGameRequest(InboundRequest):
    room_code: str


class TargetRequest(InboundRequest):
    """Body of day_vote, werewolf_vote, seer_check and doctor_save"""
    room_code: str
    target_id: Optional[str] = None


class SendMessageRequest(InboundRequest):
    room_code: str
    message: str
    is_werewolf_chat: bool = False
