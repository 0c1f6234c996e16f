import logging

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from leaderboard.errors import NotFoundError
from leaderboard.models import Game, Score
from leaderboard.models.base import utcnow
from leaderboard.schemas.scores import ScoreCreate
from leaderboard.services.champion_reconciler import ChampionReconciler

logger = logging.getLogger(__name__)


class ScoreService:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def submit_score(self, data: ScoreCreate) -> Score:
        """Record a score and promote it to champion if it beats the current best.

        The promotion is a single conditional UPDATE evaluated by the database
        under the row lock, so two concurrent high scores for the same game
        cannot overwrite each other with a lower value.
        """
        game = await self.db.get(Game, data.game_id)
        if game is None:
            logger.warning("Score rejected for unknown game %d", data.game_id)
            raise NotFoundError("Game not found")

        score = Score(
            game_id=data.game_id,
            player_name=data.player_name,
            score=data.score,
            phone_number=data.phone_number,
            image_url=data.image_url,
            latitude=data.latitude,
            longitude=data.longitude,
            submitted_at=data.submitted_at or utcnow(),
        )
        self.db.add(score)
        await self.db.flush()

        promoted = await self.db.execute(
            update(Game)
            .where(Game.id == data.game_id, Game.current_high_score < data.score)
            .values(
                current_high_score=data.score,
                top_scorer_name=data.player_name,
                top_score_date=score.submitted_at,
            )
            .returning(Game.id)
            .execution_options(synchronize_session=False)
        )
        is_champion = promoted.first() is not None

        await self.db.commit()
        if is_champion:
            logger.info(
                "New high score for game %d: %d by %s",
                data.game_id,
                data.score,
                data.player_name,
            )
        else:
            logger.info("Score %d recorded for game %d", data.score, data.game_id)
        return score

    async def get_scores_by_game(self, game_id: int) -> list[Score]:
        """Scores for a game, best first; among equal scores the first recorded leads."""
        result = await self.db.execute(
            select(Score)
            .where(Score.game_id == game_id)
            .order_by(Score.score.desc(), Score.id.asc())
        )
        return list(result.scalars().all())

    async def delete_score(self, score_id: int) -> None:
        """Remove a score and rebuild its game's champion cache."""
        score = await self.db.get(Score, score_id)
        if score is None:
            raise NotFoundError("Score not found")

        game = await self.db.get(Game, score.game_id)
        await self.db.delete(score)
        await self.db.flush()

        if game is not None:
            await ChampionReconciler(self.db).reconcile_game(game)

        await self.db.commit()
        logger.info("Deleted score %d from game %d", score_id, score.game_id)
