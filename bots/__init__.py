"""Scripted player strategies for Open Table."""

from .baseline_greedy import GreedyBot
from .random_bot import PassiveBot, RandomBot

__all__ = ["GreedyBot", "PassiveBot", "RandomBot"]
