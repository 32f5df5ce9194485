"""Validation schema for Open Table engine configuration."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from .cards import RANKS


class EngineConfig(BaseModel):
    hand_size: int = Field(4, description="Cards dealt to each hand at the start of a match.")
    result_channel: str = Field("game-result", description="Channel that receives finished-match results.")
    default_save_label: str = Field("Saved Game", description="Label used when a save is created without one.")
    seed: Optional[int] = Field(None, description="Seed for the shuffling RNG; random when unset.")

    @field_validator("hand_size")
    @classmethod
    def validate_hand_size(cls, value: int) -> int:
        if value < 1 or value > len(RANKS):
            raise ValueError(f"hand_size must be between 1 and {len(RANKS)}.")
        return value

    @field_validator("result_channel", "default_save_label")
    @classmethod
    def ensure_non_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Value must not be blank.")
        return value.strip()


def load_config(payload: Optional[Mapping[str, Any]] = None) -> EngineConfig:
    return EngineConfig.model_validate(dict(payload or {}))
