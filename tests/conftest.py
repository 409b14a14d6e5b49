"""Shared test fixtures for Nightfall game logic."""

from collections.abc import Callable
from typing import Dict, Iterable, Optional

import pytest

from nightfall.game.engine import GameManager
from nightfall.testing.fakes import ManualScheduler, RecordingSink
from nightfall.types.game import GameConfig, GamePhase, Player, Role, Room


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def manager(sink, scheduler) -> GameManager:
    return GameManager(sink, scheduler=scheduler, config=GameConfig())


@pytest.fixture
def room_factory() -> Callable[..., Room]:
    """Factory fixture that builds customizable rooms for tests."""

    def _factory(
        *,
        phase: GamePhase = GamePhase.DAY,
        roles: Optional[Dict[str, Role]] = None,
        dead: Optional[Iterable[str]] = None,
        day_count: int = 1,
        room_code: str = "ABCD",
    ) -> Room:
        roles = roles or {
            "wolf": Role.WEREWOLF,
            "seer": Role.SEER,
            "doctor": Role.DOCTOR,
            "villager_1": Role.VILLAGER,
            "villager_2": Role.VILLAGER,
        }
        dead_set = set(dead or [])
        players = {
            player_id: Player(
                id=player_id,
                username=player_id.replace("_", " ").title(),
                role=role,
                is_alive=player_id not in dead_set,
            )
            for player_id, role in roles.items()
        }
        return Room(
            room_code=room_code,
            host=next(iter(players)),
            players=players,
            phase=phase,
            day_count=day_count if phase != GamePhase.LOBBY else 0,
        )

    return _factory


@pytest.fixture
def lobby(manager) -> Callable[..., str]:
    """Open a room through the manager and fill it with players."""

    def _lobby(*player_ids: str) -> str:
        host, *others = player_ids
        room_code = manager.create_room(host, host.title())
        for player_id in others:
            manager.join_lobby(player_id, player_id.title(), room_code)
        return room_code

    return _lobby


@pytest.fixture
def start_with_roles(manager, lobby, monkeypatch) -> Callable[[Dict[str, Role]], Room]:
    """Start a game whose roles are fixed instead of shuffled."""

    def _start(roles: Dict[str, Role]) -> Room:
        def fake_assign_roles(room: Room) -> Dict[str, Role]:
            for player_id, role in roles.items():
                room.players[player_id].role = role
            return dict(roles)

        monkeypatch.setattr(manager.phases.role_assigner, "assign_roles", fake_assign_roles)

        room_code = lobby(*roles)
        host = next(iter(roles))
        assert manager.start_game(host, room_code)
        return manager.registry.get_room(room_code)

    return _start
