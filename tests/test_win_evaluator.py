"""Tests for win detection."""

from nightfall.game.win import WinEvaluator
from nightfall.testing.fakes import ManualTimer
from nightfall.types.game import GamePhase, Role, Winner


def test_no_winner_while_villagers_outnumber(room_factory):
    room = room_factory()
    assert WinEvaluator.check(room) is None


def test_villagers_win_without_werewolves(room_factory):
    room = room_factory(dead=["wolf"])
    assert WinEvaluator.check(room) == Winner.VILLAGERS


def test_werewolves_win_on_parity(room_factory):
    room = room_factory(roles={"wolf": Role.WEREWOLF, "villager": Role.VILLAGER})
    assert WinEvaluator.check(room) == Winner.WEREWOLVES


def test_werewolves_win_when_outnumbering(room_factory):
    room = room_factory(
        roles={
            "wolf_1": Role.WEREWOLF,
            "wolf_2": Role.WEREWOLF,
            "seer": Role.SEER,
            "villager": Role.VILLAGER,
        },
        dead=["seer"],
    )
    assert WinEvaluator.check(room) == Winner.WEREWOLVES


def test_evaluate_ends_game_and_broadcasts_reveal(room_factory, sink):
    room = room_factory(phase=GamePhase.DAY)
    room.eliminate("wolf")
    assert room.eliminate("wolf") is None  # never recorded twice
    timer = ManualTimer(due=120, callback=lambda: None)
    room.replace_timer(timer)

    assert WinEvaluator(sink).evaluate(room)

    assert room.phase == GamePhase.GAME_OVER
    assert room.winner == Winner.VILLAGERS
    assert timer.cancelled

    event = sink.last("game_over")
    assert set(event.recipients) == set(room.players)
    payload = event.to_wire()
    assert payload["winner"] == "VILLAGERS"
    assert {entry["id"]: entry["role"] for entry in payload["roleReveal"]} == {
        "wolf": "WEREWOLF",
        "seer": "SEER",
        "doctor": "DOCTOR",
        "villager_1": "VILLAGER",
        "villager_2": "VILLAGER",
    }
    assert payload["roleHistory"] == [
        {"id": "wolf", "username": "Wolf", "role": "WEREWOLF", "dayEliminated": 1}
    ]


def test_evaluate_is_noop_without_winner(room_factory, sink):
    room = room_factory(phase=GamePhase.NIGHT)

    assert not WinEvaluator(sink).evaluate(room)
    assert room.phase == GamePhase.NIGHT
    assert sink.events == []


def test_evaluate_ignores_lobby_and_finished_rooms(room_factory, sink):
    lobby = room_factory(phase=GamePhase.LOBBY, dead=["wolf"])
    assert not WinEvaluator(sink).evaluate(lobby)

    finished = room_factory(phase=GamePhase.GAME_OVER, dead=["wolf"])
    assert WinEvaluator(sink).evaluate(finished)
    assert sink.named("game_over") == []
