import logging

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from leaderboard.errors import NotFoundError, ValidationError
from leaderboard.models import Game, Score
from leaderboard.schemas.games import GameCreate, GameOrder, GameUpdate

logger = logging.getLogger(__name__)


class GameService:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_games(self, include_hidden: bool = False) -> list[Game]:
        """Games in display order; ties fall back to creation time, then id."""
        query = select(Game).order_by(
            Game.display_order.asc(), Game.created_at.asc(), Game.id.asc()
        )
        if not include_hidden:
            query = query.where(Game.hidden == False)  # noqa: E712
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_game(self, game_id: int) -> Game:
        game = await self.db.get(Game, game_id)
        if game is None:
            raise NotFoundError("Game not found")
        return game

    async def add_game(self, data: GameCreate) -> Game:
        """Create a game appended after the current last display position."""
        max_order = (
            await self.db.execute(select(func.max(Game.display_order)))
        ).scalar()
        game = Game(
            name=data.name,
            type=data.type,
            subtitle=data.subtitle,
            image_url=data.image_url,
            overlay_image_url=data.overlay_image_url,
            hidden=data.hidden,
            display_order=(max_order or 0) + 1,
            current_high_score=0,
            top_scorer_name=None,
            top_score_date=None,
        )
        self.db.add(game)
        await self.db.flush()
        await self.db.commit()
        logger.info("Added game %d '%s' at display order %d", game.id, game.name, game.display_order)
        return game

    async def update_game(self, game_id: int, data: GameUpdate) -> Game:
        """Apply the fields present in ``data``. The champion cache is left alone."""
        game = await self.get_game(game_id)
        changes = data.model_dump(exclude_unset=True)
        for field, value in changes.items():
            setattr(game, field, value)
        await self.db.flush()
        await self.db.commit()
        logger.info("Updated game %d fields=%s", game_id, sorted(changes))
        return game

    async def set_image(self, game_id: int, field: str, url: str) -> Game:
        game = await self.get_game(game_id)
        setattr(game, field, url)
        await self.db.flush()
        await self.db.commit()
        return game

    async def delete_game(self, game_id: int) -> None:
        """Delete a game and every score recorded against it."""
        game = await self.get_game(game_id)
        removed = await self.db.execute(delete(Score).where(Score.game_id == game_id))
        await self.db.delete(game)
        await self.db.flush()
        await self.db.commit()
        logger.info("Deleted game %d and %d scores", game_id, removed.rowcount)

    async def reorder_games(self, orders: list[GameOrder]) -> int:
        """Assign new display orders to a batch of games, all or nothing.

        Every id is checked before anything is written; one unknown id aborts
        the whole batch. Returns the number of games updated.
        """
        if not orders:
            return 0

        ids = [o.id for o in orders]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValidationError(
                "Invalid game order data",
                [
                    {"field": "gameOrders", "message": f"Game {i} appears more than once"}
                    for i in duplicates
                ],
            )

        result = await self.db.execute(select(Game).where(Game.id.in_(ids)))
        games = {g.id: g for g in result.scalars().all()}

        missing = [i for i in ids if i not in games]
        if missing:
            logger.warning("Reorder rejected, unknown game ids: %s", missing)
            raise NotFoundError(f"Games not found: {', '.join(str(i) for i in missing)}")

        for order in orders:
            games[order.id].display_order = order.display_order

        await self.db.flush()
        await self.db.commit()
        logger.info("Reordered %d games", len(orders))
        return len(orders)
