#!/usr/bin/env python3
"""Play a full game with scripted random players against the game core."""

import argparse
import json
import logging
import random
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from nightfall.game.engine import GameManager
from nightfall.testing.fakes import ManualScheduler, RecordingSink
from nightfall.types.game import GamePhase, Role, Room


def play_night(manager: GameManager, room: Room, rng: random.Random) -> None:
    alive = [p.id for p in room.alive_players()]
    for player in room.alive_players():
        others = [pid for pid in alive if pid != player.id]
        if player.role == Role.WEREWOLF:
            prey = [pid for pid in others if room.players[pid].role != Role.WEREWOLF]
            if prey:
                manager.werewolf_vote(player.id, room.room_code, rng.choice(prey))
        elif player.role == Role.SEER and others:
            manager.seer_check(player.id, room.room_code, rng.choice(others))
        elif player.role == Role.DOCTOR:
            manager.doctor_save(player.id, room.room_code, rng.choice(alive))


def play_day(manager: GameManager, room: Room, rng: random.Random) -> None:
    alive = [p.id for p in room.alive_players()]
    for player_id in alive:
        manager.send_message(player_id, room.room_code, "I have my suspicions...")
        manager.day_vote(player_id, room.room_code, rng.choice(alive))


def run_simulation(args: argparse.Namespace) -> int:
    rng = random.Random(args.seed)
    sink = RecordingSink()
    scheduler = ManualScheduler()
    manager = GameManager(sink, scheduler=scheduler, rng=rng)

    room_code = manager.create_room("player_0", "Player 0")
    for idx in range(1, args.num_players):
        manager.join_lobby(f"player_{idx}", f"Player {idx}", room_code)
    manager.start_game("player_0", room_code)

    room = manager.registry.get_room(room_code)
    while room.phase != GamePhase.GAME_OVER:
        if room.phase == GamePhase.NIGHT:
            play_night(manager, room, rng)
        elif room.phase == GamePhase.DAY and room.votes == {}:
            play_day(manager, room, rng)
        if not scheduler.run_next():
            break

    for event in sink.events:
        if args.verbose or event.name in ("phase_change", "day_result", "game_over"):
            print(f"{event.name}: {json.dumps(event.to_wire())}")

    print(f"Winner after {room.day_count} days: {room.winner.value if room.winner else None}")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--num-players", type=int, default=8, help="Players in the room (min 4)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for a reproducible game")
    parser.add_argument("--verbose", action="store_true", help="Print every event, not just phase results")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    return run_simulation(args)


if __name__ == "__main__":
    sys.exit(main())
