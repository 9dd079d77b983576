"""
Balance a lobby described in a JSON file and print the teams.

The file holds the stored roster and match history:
  {
    "players": [{"id": "...", "name": "...", "rank": "gold2", "wins": 0,
                 "losses": 0, "streak": 0, "selected": true}, ...],
    "history": [{"id": "...", "winner": "A", "teamAIds": [...], ...}, ...]
  }

Usage:
  python run_balance.py lobby.json
  python run_balance.py lobby.json --lookback 5 --seed 42
"""

from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from typing import Any

from config import TEAMMATE_LOOKBACK
from domain.models.match_record import MatchRecord
from domain.models.player import Player
from rating_system import streak_adjustment
from services.match_service import LobbyState, MatchService
from services.player_service import PlayerService
from shuffler import BalancedShuffler

logger = logging.getLogger("balance_bot")


def _player_from_dict(data: dict[str, Any]) -> Player:
    kwargs = {"player_id": str(data["id"])} if data.get("id") else {}
    selected = data.get("selected")
    return Player(
        name=str(data["name"]),
        rank=str(data.get("rank") or ""),
        wins=int(data.get("wins") or 0),
        losses=int(data.get("losses") or 0),
        streak=int(data.get("streak") or 0),
        selected=True if selected is None else bool(selected),
        **kwargs,
    )


def load_state(path: str) -> LobbyState:
    with open(path, encoding="utf-8") as f:
        payload = json.load(f)
    if not isinstance(payload, dict):
        raise ValueError(f"expected a JSON object, got {type(payload).__name__}")
    roster = tuple(_player_from_dict(p) for p in payload.get("players") or [])
    history = tuple(MatchRecord.from_dict(h) for h in payload.get("history") or [])
    return LobbyState(roster=roster, history=history)


def _print_team(label: str, players, rating: int, changes: dict[str, bool]) -> None:
    print(f"Team {label} (rating {rating})")
    for p in sorted(players, key=lambda x: x.rating, reverse=True):
        marker = "<> " if changes.get(p.player_id) else "   "
        print(f"  {marker}{p.name} ({p.rating})")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Balance ten players into two teams.")
    parser.add_argument("lobby", help="Path to a JSON file with players and history")
    parser.add_argument("--lookback", type=int, default=TEAMMATE_LOOKBACK, help="Recent matches to consider")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the random fallback search")
    parser.add_argument("--verbose", action="store_true", help="Log candidate matchups")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        state = load_state(args.lobby)
    except (OSError, ValueError, KeyError, TypeError, AttributeError) as exc:
        logger.error(f"Could not load lobby file {args.lobby}: {exc}")
        return 2

    service = MatchService(
        state,
        shuffler=BalancedShuffler(rng=random.Random(args.seed)),
        lookback=args.lookback,
    )
    result = service.shuffle()
    if not result:
        print(f"Error: {result.error}", file=sys.stderr)
        return 1

    outcome = result.unwrap()
    assignment = outcome.assignment
    _print_team("A", assignment.team_a, assignment.rating_a, outcome.changes)
    _print_team("B", assignment.team_b, assignment.rating_b, outcome.changes)
    print(
        f"Score {assignment.score} = rating diff {assignment.rating_diff} "
        f"+ teammate penalty {assignment.pair_penalty} (last {args.lookback} matches)"
    )

    leaders = PlayerService.get_streak_leaders(state.roster)
    if leaders.win_streak:
        print(
            f"Win streak: {', '.join(leaders.win_names)} x{leaders.win_streak} "
            f"({streak_adjustment(leaders.win_streak):+d})"
        )
    if leaders.loss_streak:
        print(
            f"Loss streak: {', '.join(leaders.loss_names)} x{leaders.loss_streak} "
            f"({streak_adjustment(-leaders.loss_streak):+d})"
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
