"""Process settings loaded from the environment"""

import os
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from nightfall.types.game import GameConfig


class ServerSettings(BaseModel):
    """Settings for the Socket.IO server process"""
    host: str = Field("0.0.0.0", description="Interface to bind")
    port: int = Field(3001, ge=1, le=65535)
    client_url: str = Field("*", description="Allowed browser origin, '*' for any")
    log_level: str = Field("INFO")
    game: GameConfig = Field(default_factory=GameConfig)

    @property
    def cors_origins(self) -> List[str] | str:
        return "*" if self.client_url == "*" else [self.client_url]

    @classmethod
    def from_env(cls) -> "ServerSettings":
        """Read settings from the environment, honouring a local .env file."""
        load_dotenv()

        game_overrides = {}
        for env_name, field_name in (
            ("NIGHT_DURATION", "night_duration"),
            ("DAY_DURATION", "day_duration"),
            ("TRANSITION_DELAY", "transition_delay"),
        ):
            value = os.getenv(env_name)
            if value:
                game_overrides[field_name] = float(value)

        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3001")),
            client_url=os.getenv("CLIENT_URL", "*"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            game=GameConfig(**game_overrides),
        )
