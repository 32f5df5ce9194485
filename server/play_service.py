"""REST service to play Open Table against the computer."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field

from opentable.errors import (
    DataIntegrity,
    EmptyPile,
    EngineError,
    InvalidArgument,
    InvalidState,
    NotFound,
)
from opentable.service import GameService

logger = logging.getLogger(__name__)


class RevealRequest(BaseModel):
    source: str = "stock"


class CommitRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    token: str
    swap: bool = False
    swap_index: Optional[int] = Field(None, alias="swapIndex")


class SaveRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    player_name: str = Field(alias="playerName")
    save_name: Optional[str] = Field(None, alias="saveName")


class ResultRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    player_name: Optional[str] = Field(None, alias="playerName")


# Order matters: subclasses before their bases.
ERROR_STATUS = [
    (NotFound, 404),
    (InvalidArgument, 400),
    (InvalidState, 409),
    (EmptyPile, 409),
    (DataIntegrity, 500),
]


def to_http_error(exc: EngineError) -> HTTPException:
    for error_type, status in ERROR_STATUS:
        if isinstance(exc, error_type):
            if status >= 500:
                logger.error("Engine integrity failure: %s", exc)
            return HTTPException(status_code=status, detail=str(exc))
    return HTTPException(status_code=400, detail=str(exc))


def create_app(service: Optional[GameService] = None) -> FastAPI:
    game = service or GameService()
    api = FastAPI(title="Open Table Play Service")
    api.state.game = game
    api.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @api.get("/cards")
    def list_cards() -> List[dict]:
        return game.list_cards()

    @api.post("/game/start")
    def start_game() -> Dict[str, object]:
        return asdict(game.start_match())

    @api.get("/game/{match_id}")
    def get_game(match_id: str) -> Dict[str, object]:
        try:
            return asdict(game.get_view(match_id))
        except EngineError as exc:
            raise to_http_error(exc) from exc

    @api.post("/game/{match_id}/reveal")
    def reveal(match_id: str, request: RevealRequest) -> Dict[str, object]:
        try:
            return asdict(game.reveal(match_id, request.source))
        except EngineError as exc:
            raise to_http_error(exc) from exc

    @api.post("/game/{match_id}/commit")
    def commit(match_id: str, request: CommitRequest) -> Dict[str, object]:
        try:
            view = game.commit(match_id, request.token, swap=request.swap, swap_index=request.swap_index)
        except EngineError as exc:
            raise to_http_error(exc) from exc
        return asdict(view)

    @api.post("/game/{match_id}/end")
    def end_game(match_id: str) -> Dict[str, object]:
        try:
            return asdict(game.end_match(match_id))
        except EngineError as exc:
            raise to_http_error(exc) from exc

    @api.delete("/game/{match_id}", status_code=204)
    def delete_game(match_id: str) -> None:
        try:
            game.discard_match(match_id)
        except EngineError as exc:
            raise to_http_error(exc) from exc

    @api.post("/game/{match_id}/save")
    def save_game(match_id: str, request: SaveRequest) -> Dict[str, object]:
        try:
            return asdict(game.save_match(match_id, request.player_name, request.save_name))
        except EngineError as exc:
            raise to_http_error(exc) from exc

    @api.post("/game/{match_id}/result")
    def save_result(match_id: str, request: ResultRequest) -> Dict[str, object]:
        try:
            delivered = game.report_result(match_id, request.player_name)
        except EngineError as exc:
            raise to_http_error(exc) from exc
        return {"delivered": delivered}

    @api.get("/saves")
    def list_saves(playerName: Optional[str] = None) -> List[Dict[str, object]]:
        try:
            return [asdict(summary) for summary in game.list_saves(playerName)]
        except EngineError as exc:
            raise to_http_error(exc) from exc

    @api.post("/saves/{save_id}/load")
    def load_save(save_id: str) -> Dict[str, object]:
        try:
            return asdict(game.load_save(save_id))
        except EngineError as exc:
            raise to_http_error(exc) from exc

    @api.delete("/saves/{save_id}", status_code=204)
    def delete_save(save_id: str) -> None:
        try:
            game.delete_save(save_id)
        except EngineError as exc:
            raise to_http_error(exc) from exc

    return api


app = create_app()
