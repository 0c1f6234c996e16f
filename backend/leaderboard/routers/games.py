from fastapi import APIRouter, Depends, File, Query, Response, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from leaderboard.database import get_db
from leaderboard.schemas.games import (
    GameCreate,
    GameResponse,
    GameUpdate,
    ReorderRequest,
    ReorderResponse,
)
from leaderboard.schemas.scores import ScoreResponse
from leaderboard.services.game_service import GameService
from leaderboard.services.score_service import ScoreService
from leaderboard.services.upload_service import UploadService

router = APIRouter(prefix="/api/games", tags=["games"])


@router.get("", response_model=list[GameResponse])
async def list_games(
    include_hidden: bool = Query(False, alias="includeHidden"),
    db: AsyncSession = Depends(get_db),
):
    games = await GameService(db).list_games(include_hidden=include_hidden)
    return [GameResponse.model_validate(g) for g in games]


@router.post("", response_model=GameResponse, status_code=201)
async def create_game(payload: GameCreate, db: AsyncSession = Depends(get_db)):
    game = await GameService(db).add_game(payload)
    return GameResponse.model_validate(game)


# Registered ahead of the /{game_id} routes so "reorder" is never read as an id
@router.patch("/reorder", response_model=ReorderResponse)
@router.post("/reorder", response_model=ReorderResponse)
async def reorder_games(payload: ReorderRequest, db: AsyncSession = Depends(get_db)):
    updated = await GameService(db).reorder_games(payload.game_orders)
    return ReorderResponse(message="Game order updated", updated=updated)


@router.get("/{game_id}", response_model=GameResponse)
async def get_game(game_id: int, db: AsyncSession = Depends(get_db)):
    game = await GameService(db).get_game(game_id)
    return GameResponse.model_validate(game)


@router.patch("/{game_id}", response_model=GameResponse)
async def update_game(game_id: int, payload: GameUpdate, db: AsyncSession = Depends(get_db)):
    game = await GameService(db).update_game(game_id, payload)
    return GameResponse.model_validate(game)


@router.delete("/{game_id}", status_code=204)
async def delete_game(game_id: int, db: AsyncSession = Depends(get_db)):
    await GameService(db).delete_game(game_id)
    return Response(status_code=204)


@router.get("/{game_id}/scores", response_model=list[ScoreResponse])
async def list_game_scores(game_id: int, db: AsyncSession = Depends(get_db)):
    scores = await ScoreService(db).get_scores_by_game(game_id)
    return [ScoreResponse.model_validate(s) for s in scores]


@router.post("/{game_id}/upload-marquee", response_model=GameResponse)
async def upload_marquee(
    game_id: int,
    marquee_image: UploadFile = File(..., alias="marqueeImage"),
    db: AsyncSession = Depends(get_db),
):
    service = GameService(db)
    await service.get_game(game_id)
    url = await UploadService().save(marquee_image, "marquee")
    game = await service.set_image(game_id, "image_url", url)
    return GameResponse.model_validate(game)


@router.post("/{game_id}/upload-overlay", response_model=GameResponse)
async def upload_overlay(
    game_id: int,
    overlay_image: UploadFile = File(..., alias="overlayImage"),
    db: AsyncSession = Depends(get_db),
):
    service = GameService(db)
    await service.get_game(game_id)
    url = await UploadService().save(overlay_image, "overlay")
    game = await service.set_image(game_id, "overlay_image_url", url)
    return GameResponse.model_validate(game)
