"""REST API for the player roster."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from enum import Enum
from typing import Iterator, TypeVar

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from rpgroster.api.schemas import PlayerCreateRequest, PlayerResponse, PlayerUpdateRequest
from rpgroster.config import Settings, load_settings
from rpgroster.exceptions import InvalidArgument, NotFound, ValidationFailed
from rpgroster.models import PlayerOrder, Profession, Race, epoch_millis_to_datetime
from rpgroster.persistence import PlayerStore
from rpgroster.query import FilterCriteria
from rpgroster.service import PlayerService


logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


def _parse_enum(enum_cls: type[E], raw: str | None, param: str) -> E | None:
    if raw is None:
        return None
    try:
        return enum_cls(raw)
    except ValueError:
        choices = ", ".join(member.name for member in enum_cls)
        raise HTTPException(
            status_code=400,
            detail=f"Invalid {param} {raw!r}; expected one of {choices}",
        ) from None


def _parse_millis(raw: int | None, param: str):
    if raw is None:
        return None
    try:
        return epoch_millis_to_datetime(raw)
    except OverflowError:
        raise HTTPException(status_code=400, detail=f"{param} {raw} is out of range") from None


def filter_criteria(
    name: str | None = Query(None),
    title: str | None = Query(None),
    race: str | None = Query(None),
    profession: str | None = Query(None),
    after: int | None = Query(None, description="Epoch milliseconds, inclusive"),
    before: int | None = Query(None, description="Epoch milliseconds, inclusive"),
    banned: bool | None = Query(None),
    min_experience: int | None = Query(None, alias="minExperience"),
    max_experience: int | None = Query(None, alias="maxExperience"),
    min_level: int | None = Query(None, alias="minLevel"),
    max_level: int | None = Query(None, alias="maxLevel"),
) -> FilterCriteria:
    return FilterCriteria(
        name=name,
        title=title,
        race=_parse_enum(Race, race, "race"),
        profession=_parse_enum(Profession, profession, "profession"),
        after=_parse_millis(after, "after"),
        before=_parse_millis(before, "before"),
        banned=banned,
        min_experience=min_experience,
        max_experience=max_experience,
        min_level=min_level,
        max_level=max_level,
    )


@contextmanager
def _client_errors() -> Iterator[None]:
    try:
        yield
    except NotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except (InvalidArgument, ValidationFailed) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()
    app = FastAPI(title="rpgroster")
    service = PlayerService(
        PlayerStore(settings.db_path),
        default_page_size=settings.default_page_size,
    )
    app.state.player_service = service
    logger.info("Serving players from %s", settings.db_path)

    @app.exception_handler(RequestValidationError)
    async def bad_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        # Malformed ids, enum values and paging parameters are client errors.
        return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/rest/players", response_model=list[PlayerResponse])
    async def list_players(
        criteria: FilterCriteria = Depends(filter_criteria),
        order: str | None = Query(None),
        page_number: int | None = Query(None, alias="pageNumber", ge=0),
        page_size: int | None = Query(None, alias="pageSize", ge=0),
    ):
        player_order = _parse_enum(PlayerOrder, order, "order")
        with _client_errors():
            players = service.list_players(criteria, player_order, page_number, page_size)
        return [PlayerResponse.from_record(player) for player in players]

    @app.get("/rest/players/count")
    async def count_players(criteria: FilterCriteria = Depends(filter_criteria)) -> int:
        return service.count_players(criteria)

    @app.get("/rest/players/{player_id}", response_model=PlayerResponse)
    async def get_player(player_id: int):
        with _client_errors():
            player = service.get_player(player_id)
        return PlayerResponse.from_record(player)

    @app.post("/rest/players", response_model=PlayerResponse)
    async def create_player(payload: PlayerCreateRequest):
        with _client_errors():
            player = service.create_player(payload.to_candidate())
        return PlayerResponse.from_record(player)

    @app.post("/rest/players/{player_id}", response_model=PlayerResponse)
    async def update_player(player_id: int, payload: PlayerUpdateRequest):
        with _client_errors():
            # Look the id up before converting the birthday so unknown ids are 404s
            # even when the birthday is out of range.
            service.get_player(player_id)
            player = service.update_player(player_id, payload.to_update())
        return PlayerResponse.from_record(player)

    @app.delete("/rest/players/{player_id}")
    async def delete_player(player_id: int):
        with _client_errors():
            service.delete_player(player_id)
        return Response(status_code=200)

    return app


__all__ = [
    "create_app",
    "filter_criteria",
]
