#!/usr/bin/env python3
"""Interactive CLI to play a match of Open Table against the computer."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from random import Random
from typing import Optional, Tuple

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from opentable.errors import EngineError
from opentable.rules_schema import EngineConfig
from opentable.service import GameService
from opentable.turns import TurnView


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play Open Table against the computer.")
    parser.add_argument("--matches", type=int, default=1, help="Number of matches to play.")
    parser.add_argument("--player-name", type=str, default=None, help="Report finished matches under this name.")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args()


def print_state(view: TurnView) -> None:
    print("\n============================")
    print(f"Round {view.round_number} | main deck: {view.stock_size} | open table: {view.discard_size}")
    top = view.discard_top["label"] if view.discard_top else "(empty)"
    print(f"Top of open table: {top}")
    print(f"Computer holds {view.opponent_hand_size} cards")
    print(f"Your hand (score {view.player_score}):")
    for idx, label in enumerate(view.player_hand_labels):
        print(f"  [{idx}] {label}")


def prompt(text: str) -> str:
    choice = input(text).strip()
    if choice.lower() == "q":
        raise KeyboardInterrupt
    return choice


def choose_source(view: TurnView) -> str:
    while True:
        choice = prompt("Draw from [m]ain deck or [o]pen table (q to quit): ").lower()
        if choice == "m":
            return "stock"
        if choice == "o":
            if view.discard_top is None:
                print("The open table is empty.")
                continue
            return "discard"
        print("Please enter m or o.")


def choose_decision(view: TurnView) -> Tuple[bool, Optional[int]]:
    while True:
        choice = prompt("Swap with card number, or d to discard: ").lower()
        if choice == "d":
            return False, None
        if choice.isdigit():
            return True, int(choice)
        print("Please enter a card number or d.")


def play_match(service: GameService) -> TurnView:
    view = service.start_match()
    while not view.is_over:
        print_state(view)
        try:
            reveal = service.reveal(view.match_id, choose_source(view))
        except EngineError as exc:
            print(f"Cannot draw: {exc}")
            continue
        print(f"You drew: {reveal.label}")
        swap, index = choose_decision(view)
        view = service.commit(view.match_id, reveal.token, swap=swap, swap_index=index)
        print(view.message)
    return view


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    service = GameService(config=EngineConfig(seed=args.seed), rng=Random(args.seed))
    for match_idx in range(1, args.matches + 1):
        print(f"\n===== Match {match_idx} =====")
        try:
            view = play_match(service)
        except KeyboardInterrupt:
            print("\nExiting early.")
            break
        if args.player_name:
            service.report_result(view.match_id, args.player_name)


if __name__ == "__main__":
    main()
