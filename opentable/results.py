"""Result events sent to the external results archive."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .errors import InvalidState
from .turns import TurnEngine

logger = logging.getLogger(__name__)


class GameResultEvent(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    player_name: str = Field(alias="playerName")
    player_score: int = Field(alias="playerScore")
    computer_score: int = Field(alias="computerScore")
    rounds: int = Field(ge=0)

    def payload(self) -> dict:
        return self.model_dump(by_alias=True)


class ResultChannel(ABC):
    """Transport for result events; delivery guarantees belong to the implementation."""

    @abstractmethod
    def publish(self, channel: str, payload: dict) -> None:
        raise NotImplementedError


class InMemoryResultChannel(ResultChannel):
    def __init__(self) -> None:
        self.published: Dict[str, List[dict]] = {}

    def publish(self, channel: str, payload: dict) -> None:
        self.published.setdefault(channel, []).append(dict(payload))

    def messages(self, channel: str) -> List[dict]:
        return list(self.published.get(channel, []))


class ResultReporter:
    """Fire-and-forget publisher of finished-match results."""

    def __init__(self, channel: ResultChannel, channel_name: str = "game-result") -> None:
        self.channel = channel
        self.channel_name = channel_name

    def report(self, player_name: str, player_score: int, computer_score: int, rounds: int) -> bool:
        event = GameResultEvent(
            player_name=player_name,
            player_score=player_score,
            computer_score=computer_score,
            rounds=rounds,
        )
        try:
            self.channel.publish(self.channel_name, event.payload())
        except Exception:
            logger.exception("Failed to publish result for %s to %s", player_name, self.channel_name)
            return False
        logger.info("Published result for %s to %s", player_name, self.channel_name)
        return True

    def report_match(self, engine: TurnEngine, match_id: str, player_name: Optional[str]) -> bool:
        match = engine.load_match(match_id)
        if not match.is_over:
            raise InvalidState("Only finished games can be reported.")
        return self.report(
            player_name or "anonymous",
            match.player_score,
            match.opponent_score,
            match.round_number,
        )
