"""Simple bot arena: scripted players against the engine's computer."""

from __future__ import annotations

import argparse
import logging
from random import Random
from typing import Dict, Iterable, Optional

from opentable.rules_schema import EngineConfig
from opentable.service import GameService
from opentable.turns import TurnView

from .base import BotStrategy
from .baseline_greedy import GreedyBot
from .random_bot import PassiveBot, RandomBot

BOT_REGISTRY: Dict[str, type[BotStrategy]] = {
    "greedy": GreedyBot,
    "random": RandomBot,
    "passive": PassiveBot,
}


def play_match(service: GameService, bot: BotStrategy, *, max_rounds: int = 1000) -> TurnView:
    view = service.start_match()
    bot.on_match_start(view)
    while not view.is_over:
        if view.round_number > max_rounds:
            raise RuntimeError(f"Match {view.match_id} did not finish within {max_rounds} rounds.")
        source = bot.choose_source(view)
        reveal = service.reveal(view.match_id, source)
        swap, index = bot.decide(view, reveal.card)
        view = service.commit(view.match_id, reveal.token, swap=swap, swap_index=index)
    return view


def run_matches(
    bot: BotStrategy,
    *,
    n_matches: int = 10,
    seed: int | None = None,
    player_name: Optional[str] = None,
) -> dict:
    service = GameService(config=EngineConfig(seed=seed), rng=Random(seed))
    history = []
    reported = 0
    for _ in range(n_matches):
        view = play_match(service, bot)
        if player_name and service.report_result(view.match_id, player_name):
            reported += 1
        history.append(
            {
                "scores": (view.player_score, view.opponent_score),
                "rounds": view.round_number,
                "winner": view.winner,
            }
        )
    tally = {outcome: sum(1 for entry in history if entry["winner"] == outcome) for outcome in ("PLAYER", "COMPUTER", "TIE")}
    return {"history": history, "tally": tally, "reported": reported}


def main(argv: Iterable[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run scripted players against the computer.")
    parser.add_argument("--bot", default="greedy", choices=BOT_REGISTRY.keys())
    parser.add_argument("--n", type=int, default=10, help="Number of matches to play.")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    bot = BOT_REGISTRY[args.bot]()
    results = run_matches(bot, n_matches=args.n, seed=args.seed)

    tally = results["tally"]
    print(f"Results after {args.n} matches: player {tally['PLAYER']}, computer {tally['COMPUTER']}, ties {tally['TIE']}")
    average = sum(entry["scores"][0] for entry in results["history"]) / max(1, len(results["history"]))
    print(f"Average player score: {average:.2f}")


if __name__ == "__main__":
    main()
