import logging
import random
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from leaderboard.models import Game, Score, VenueSettings
from leaderboard.services.champion_reconciler import ChampionReconciler
from leaderboard.services.settings_service import VenueSettingsService
from leaderboard.services.upload_service import UploadService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DemoGame:
    name: str
    subtitle: str
    type: str
    min_score: int
    max_score: int


DEMO_GAMES = [
    DemoGame("Godzilla", "Pinball Pro Monsters Edition", "pinball", 10_000_000, 100_000_000),
    DemoGame("X-Men", "Magneto's Revenge", "pinball", 5_000_000, 50_000_000),
    DemoGame("Star Wars", "Battle of Endor", "arcade", 500_000, 3_000_000),
    DemoGame("Pac-Man", "Championship Edition", "arcade", 200_000, 1_000_000),
    DemoGame("Jurassic Park", "The Lost World", "pinball", 8_000_000, 70_000_000),
]

DEMO_PLAYERS = [
    "MaxPinball", "PinWizard", "RebelAce", "GhostHunter", "DinoTamer",
    "ArcadeKing", "FlipperQueen", "HighScorer", "GameMaster", "TokenChamp",
    "PinballPro", "JoystickJedi", "QuarterSlinger", "ComboBreaker", "TiltMaster",
]

DEMO_PHONES = [
    "+15551234567", "+15552345678", "+15553456789", "+15554567890", "+15555678901",
    "+15556789012", "+15557890123", "+15558901234", "+15559012345", "+15550123456",
]

# Around Winona, MN
DEMO_LOCATIONS = [
    (44.0521, -91.6380),
    (44.0508, -91.6346),
    (44.0535, -91.6405),
    (44.0492, -91.6372),
    (44.0550, -91.6390),
]

# Opening hours by weekday (Mon=0): (first hour, last hour), None when closed
OPENING_HOURS = {2: (16, 21), 4: (16, 21), 5: (11, 21), 6: (12, 17)}

DEMO_DAYS = [
    datetime(2025, month, day, tzinfo=timezone.utc)
    for month in (1, 2, 3)
    for day in range(1, 29)
    if datetime(2025, month, day).weekday() in OPENING_HOURS
]


class DemoDataSeeder:
    """Populates the database with a handful of games and plausible scores."""

    def __init__(self, db: AsyncSession, seed: int | None = None) -> None:
        self.db = db
        self.rng = random.Random(seed)

    def _random_time(self) -> datetime:
        day = self.rng.choice(DEMO_DAYS)
        first, last = OPENING_HOURS[day.weekday()]
        return day.replace(hour=self.rng.randint(first, last), minute=self.rng.randrange(0, 60, 5))

    async def seed(self) -> tuple[int, int]:
        """Insert demo games and scores. Returns (games added, scores added)."""
        max_order = (await self.db.execute(select(func.max(Game.display_order)))).scalar() or 0

        games: list[Game] = []
        for offset, demo in enumerate(DEMO_GAMES, start=1):
            game = Game(
                name=demo.name,
                subtitle=demo.subtitle,
                type=demo.type,
                display_order=max_order + offset,
                current_high_score=0,
            )
            self.db.add(game)
            games.append(game)
        await self.db.flush()

        score_count = 0
        for game, demo in zip(games, DEMO_GAMES):
            for _ in range(self.rng.randint(8, 12)):
                latitude, longitude = self.rng.choice(DEMO_LOCATIONS)
                self.db.add(
                    Score(
                        game_id=game.id,
                        player_name=self.rng.choice(DEMO_PLAYERS),
                        score=self.rng.randrange(demo.min_score, demo.max_score, 10),
                        phone_number=self.rng.choice(DEMO_PHONES),
                        latitude=latitude,
                        longitude=longitude,
                        submitted_at=self._random_time(),
                    )
                )
                score_count += 1
        await self.db.flush()

        reconciler = ChampionReconciler(self.db)
        for game in games:
            await reconciler.reconcile_game(game)

        await self.db.commit()
        logger.info("Seeded %d demo games with %d scores", len(games), score_count)
        return len(games), score_count


async def referenced_upload_urls(db: AsyncSession) -> set[str]:
    """Every media URL currently stored on a game, score or the venue."""
    urls: set[str] = set()
    queries = [
        select(Game.image_url),
        select(Game.overlay_image_url),
        select(Score.image_url),
        select(VenueSettings.logo_url),
        select(VenueSettings.animated_logo_url),
    ]
    for query in queries:
        result = await db.execute(query)
        urls.update(url for url in result.scalars().all() if url)
    return urls


async def clear_all_data(db: AsyncSession, uploads: UploadService | None = None) -> dict:
    """Remove all games, scores and uploads and reset the venue settings."""
    scores = await db.execute(delete(Score))
    games = await db.execute(delete(Game))
    await VenueSettingsService(db).reset()
    await db.commit()

    files = (uploads or UploadService()).clear()
    logger.info(
        "Cleared %d games, %d scores and %d uploaded files",
        games.rowcount,
        scores.rowcount,
        files,
    )
    return {"games": games.rowcount, "scores": scores.rowcount, "files": files}
