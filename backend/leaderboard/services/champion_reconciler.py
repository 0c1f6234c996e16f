import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from leaderboard.models import Game, Score

logger = logging.getLogger(__name__)


class ChampionReconciler:
    """Rebuilds a game's champion cache from its score rows."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def top_score(self, game_id: int) -> Score | None:
        """The score holding the title for a game, or None.

        Mirrors promotion on submission: only a strictly higher score takes
        the title, so among equal scores the first one recorded keeps it and
        a score of zero never holds it.
        """
        result = await self.db.execute(
            select(Score)
            .where(Score.game_id == game_id, Score.score > 0)
            .order_by(Score.score.desc(), Score.id.asc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def reconcile_game(self, game: Game) -> bool:
        """Bring ``game``'s champion fields in line with its scores.

        Returns True if anything changed. Does not commit.
        """
        best = await self.top_score(game.id)
        if best is None:
            expected = (0, None, None)
        else:
            expected = (best.score, best.player_name, best.submitted_at)

        current = (game.current_high_score, game.top_scorer_name, game.top_score_date)
        if _same_champion(current, expected):
            return False

        game.current_high_score, game.top_scorer_name, game.top_score_date = expected
        await self.db.flush()
        logger.info(
            "Champion cache for game %d corrected: %s -> %s",
            game.id,
            current[0],
            expected[0],
        )
        return True

    async def reconcile_all(self) -> int:
        """Reconcile every game and commit. Returns how many were corrected."""
        result = await self.db.execute(select(Game).order_by(Game.id))
        games = result.scalars().all()

        updated = 0
        for game in games:
            if await self.reconcile_game(game):
                updated += 1

        await self.db.commit()
        logger.info("Champion reconciliation checked %d games, corrected %d", len(games), updated)
        return updated


def _same_champion(current: tuple, expected: tuple) -> bool:
    if current[0] != expected[0] or current[1] != expected[1]:
        return False
    current_date, expected_date = current[2], expected[2]
    if current_date is None or expected_date is None:
        return current_date is expected_date
    # SQLite hands back naive datetimes; compare wall-clock values only
    return current_date.replace(tzinfo=None) == expected_date.replace(tzinfo=None)
