"""End-to-end tests for the game manager."""

from collections import Counter

from nightfall.types.game import GamePhase, Role, Winner

FOUR_PLAYERS = {
    "a": Role.WEREWOLF,
    "b": Role.VILLAGER,
    "c": Role.SEER,
    "d": Role.VILLAGER,
}

EIGHT_PLAYERS = {
    "a": Role.WEREWOLF,
    "b": Role.WEREWOLF,
    "c": Role.SEER,
    "d": Role.DOCTOR,
    "e": Role.VILLAGER,
    "f": Role.VILLAGER,
    "g": Role.VILLAGER,
    "h": Role.VILLAGER,
}


def test_create_room_replies_to_creator(manager, sink):
    room_code = manager.create_room("p1", "Alice")

    assert sink.received_by("p1", "room_created") == [{"roomCode": room_code}]
    lobby = sink.received_by("p1", "lobby_update")[-1]
    assert lobby["host"] == "p1"
    assert [p["username"] for p in lobby["players"]] == ["Alice"]


def test_join_lobby_notifies_joiner_and_room(manager, sink):
    room_code = manager.create_room("p1", "Alice")
    sink.clear()

    manager.join_lobby("p2", "Bob", room_code)

    assert sink.received_by("p2", "room_joined") == [{"roomCode": room_code, "isHost": False}]
    update = sink.last("lobby_update")
    assert set(update.recipients) == {"p1", "p2"}
    assert [p["id"] for p in update.to_wire()["players"]] == ["p1", "p2"]
    assert all(p["role"] is None for p in update.to_wire()["players"])


def test_join_unknown_room_reports_error(manager, sink):
    manager.join_lobby("p2", "Bob", "ZZZZ")

    assert sink.received_by("p2") == [{"message": "Room does not exist"}]
    assert manager.registry.room_of("p2") is None


def test_join_started_room_reports_error(start_with_roles, manager, sink):
    room = start_with_roles(FOUR_PLAYERS)
    sink.clear()

    manager.join_lobby("late", "Late", room.room_code)

    assert sink.events[-1].recipients == ["late"]
    assert sink.events[-1].to_wire() == {"message": "Game has already started"}
    assert "late" not in room.players


def test_start_game_with_too_few_players_errors_to_host_only(manager, lobby, sink):
    room_code = lobby("a", "b", "c")
    sink.clear()

    assert not manager.start_game("a", room_code)

    assert len(sink.events) == 1
    assert sink.events[0].name == "error"
    assert sink.events[0].recipients == ["a"]
    assert sink.events[0].to_wire() == {"message": "Need at least 4 players to start"}
    assert manager.registry.get_room(room_code).phase == GamePhase.LOBBY


def test_non_host_start_is_ignored(manager, lobby, sink):
    room_code = lobby("a", "b", "c", "d")
    sink.clear()

    assert not manager.start_game("b", room_code)
    assert sink.events == []
    assert manager.registry.get_room(room_code).phase == GamePhase.LOBBY


def test_start_game_twice_is_ignored(start_with_roles, manager, sink, scheduler):
    room = start_with_roles(FOUR_PLAYERS)
    sink.clear()

    assert not manager.start_game("a", room.room_code)
    assert sink.events == []
    assert len(scheduler.pending) == 1


def test_start_with_four_players_assigns_one_werewolf(manager, lobby, sink):
    room_code = lobby("a", "b", "c", "d")

    assert manager.start_game("a", room_code)

    room = manager.registry.get_room(room_code)
    assert room.phase == GamePhase.NIGHT
    assert room.day_count == 1
    counts = Counter(p.role for p in room.players.values())
    assert counts == {Role.WEREWOLF: 1, Role.SEER: 1, Role.VILLAGER: 2}

    assigned = sink.named("role_assigned")
    assert sorted(r for e in assigned for r in e.recipients) == ["a", "b", "c", "d"]


def test_role_assigned_reveals_werewolves_only_to_werewolves(start_with_roles, sink):
    start_with_roles(EIGHT_PLAYERS)

    wolf_view = sink.received_by("a", "role_assigned")[0]
    assert wolf_view["role"] == "WEREWOLF"
    assert {p["id"]: p["role"] for p in wolf_view["players"]} == {
        "a": "WEREWOLF", "b": "WEREWOLF",
        "c": None, "d": None, "e": None, "f": None, "g": None, "h": None,
    }

    seer_view = sink.received_by("c", "role_assigned")[0]
    assert seer_view["role"] == "SEER"
    assert all(p["role"] is None for p in seer_view["players"])


def test_werewolf_plurality_with_tie_break(start_with_roles, manager, scheduler):
    room = start_with_roles(EIGHT_PLAYERS)

    manager.werewolf_vote("a", room.room_code, "e")
    manager.werewolf_vote("b", room.room_code, "f")
    scheduler.advance(30)

    assert not room.players["e"].is_alive
    assert room.players["f"].is_alive


def test_dead_player_can_no_longer_act(start_with_roles, manager, sink, scheduler):
    room = start_with_roles(EIGHT_PLAYERS)
    manager.werewolf_vote("a", room.room_code, "c")
    manager.werewolf_vote("b", room.room_code, "c")
    scheduler.advance(30)
    sink.clear()

    assert not manager.day_vote("c", room.room_code, "a")
    assert not manager.send_message("c", room.room_code, "it was a!")
    scheduler.advance(125)
    assert not manager.seer_check("c", room.room_code, "a")
    assert not manager.send_message("c", room.room_code, "psst", True)

    assert not room.players["c"].is_alive
    assert sink.received_by("c", "seer_result") == []
    assert sink.named("receive_message") == []


def test_actions_for_unknown_room_are_dropped(manager, sink):
    assert not manager.day_vote("p1", "NOPE", "p2")
    assert not manager.werewolf_vote("p1", "NOPE", "p2")
    assert not manager.seer_check("p1", "NOPE", "p2")
    assert not manager.doctor_save("p1", "NOPE", "p2")
    assert not manager.send_message("p1", "NOPE", "hi")
    assert not manager.start_game("p1", "NOPE")
    assert sink.events == []


def test_lobby_disconnect_reassigns_host(manager, lobby, sink):
    room_code = lobby("a", "b", "c")
    sink.clear()

    manager.disconnect("a")

    left = sink.last("player_left")
    assert left.to_wire() == {"playerId": "a", "username": "A", "newHost": "b"}
    assert set(left.recipients) == {"b", "c"}
    assert sink.last("lobby_update").to_wire()["host"] == "b"
    assert manager.registry.get_room(room_code).role_history == []


def test_last_disconnect_destroys_room(manager, sink):
    room_code = manager.create_room("p1", "Alice")
    sink.clear()

    manager.disconnect("p1")

    assert room_code not in manager.registry
    assert sink.events == []


def test_disconnect_unknown_player_is_noop(manager, sink):
    manager.disconnect("nobody")
    assert sink.events == []


def test_seer_disconnect_mid_night(start_with_roles, manager, sink, scheduler):
    room = start_with_roles(EIGHT_PLAYERS)

    manager.disconnect("c")

    assert "c" not in room.players
    assert [(e.id, e.role, e.day_eliminated) for e in room.role_history] == [
        ("c", Role.SEER, 1)
    ]
    assert room.phase == GamePhase.NIGHT
    assert sink.last("player_left").to_wire()["username"] == "C"

    scheduler.advance(30)
    assert room.phase == GamePhase.DAY


def test_disconnect_win_stops_pending_timers(start_with_roles, manager, sink, scheduler):
    room = start_with_roles(FOUR_PLAYERS)

    manager.disconnect("a")

    assert room.phase == GamePhase.GAME_OVER
    assert room.winner == Winner.VILLAGERS
    over = sink.last("game_over").to_wire()
    assert [h["id"] for h in over["roleHistory"]] == ["a"]
    assert "a" not in [p["id"] for p in over["roleReveal"]]
    assert sink.events[-1].name == "player_left"

    sink.clear()
    scheduler.advance(300)
    assert room.phase == GamePhase.GAME_OVER
    assert sink.events == []


def test_dead_player_disconnect_not_recorded_twice(start_with_roles, manager, scheduler):
    room = start_with_roles(EIGHT_PLAYERS)
    manager.werewolf_vote("a", room.room_code, "e")
    scheduler.advance(30)

    manager.disconnect("e")

    assert [e.id for e in room.role_history] == ["e"]


def test_departed_werewolf_vote_is_withdrawn(start_with_roles, manager, scheduler):
    room = start_with_roles(EIGHT_PLAYERS)
    manager.werewolf_vote("a", room.room_code, "e")
    manager.werewolf_vote("b", room.room_code, "f")

    manager.disconnect("a")

    assert room.werewolf_votes == {"b": "f"}
    scheduler.advance(30)
    assert room.players["e"].is_alive
    assert not room.players["f"].is_alive


def test_departed_day_votes_leave_the_count(start_with_roles, manager, sink, scheduler):
    room = start_with_roles(EIGHT_PLAYERS)
    scheduler.advance(30)
    for voter in ("c", "d", "e", "f"):
        manager.day_vote(voter, room.room_code, "g")

    manager.disconnect("c")
    manager.disconnect("d")
    manager.day_vote("h", room.room_code, "g")

    assert set(room.votes) == {"e", "f", "h"}
    assert sink.last("vote_update").to_wire() == {"voteCount": 3, "totalAlive": 6}


def test_creating_a_room_leaves_the_previous_one(manager, lobby):
    first = lobby("a", "b")

    second = manager.create_room("b", "B")

    assert "b" not in manager.registry.get_room(first).players
    assert manager.registry.room_of("b").room_code == second


def test_joining_another_room_leaves_the_previous_one(manager):
    first = manager.create_room("a", "A")
    second = manager.create_room("b", "B")

    manager.join_lobby("a", "A", second)

    assert first not in manager.registry
    assert list(manager.registry.get_room(second).players) == ["b", "a"]
