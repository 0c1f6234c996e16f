from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from leaderboard.database import get_db
from leaderboard.schemas.scores import ScoreCreate, ScoreResponse
from leaderboard.services.score_service import ScoreService

router = APIRouter(prefix="/api/scores", tags=["scores"])


@router.post("", response_model=ScoreResponse, status_code=201)
async def submit_score(payload: ScoreCreate, db: AsyncSession = Depends(get_db)):
    score = await ScoreService(db).submit_score(payload)
    return ScoreResponse.model_validate(score)


@router.delete("/{score_id}", status_code=204)
async def delete_score(score_id: int, db: AsyncSession = Depends(get_db)):
    await ScoreService(db).delete_score(score_id)
    return Response(status_code=204)
