import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from leaderboard.config import settings
from leaderboard.models import VENUE_SETTINGS_ID, VenueSettings
from leaderboard.schemas.settings import VenueSettingsUpdate
from leaderboard.utils.theme_presets import (
    DEFAULT_LEADERBOARD_NAME,
    default_theme,
    default_theme_presets,
)

logger = logging.getLogger(__name__)


def default_venue_settings() -> VenueSettings:
    """A fresh settings row; display options take their column defaults."""
    return VenueSettings(
        id=VENUE_SETTINGS_ID,
        name=settings.venue_default_name,
        leaderboard_name=DEFAULT_LEADERBOARD_NAME,
        theme=default_theme(),
        theme_presets=default_theme_presets(),
    )


class VenueSettingsService:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_settings(self) -> VenueSettings:
        """Return the venue settings row, creating it with defaults if absent."""
        row = await self.db.get(VenueSettings, VENUE_SETTINGS_ID)
        if row is not None:
            return row

        # Insert-if-absent: the fixed primary key makes a concurrent second
        # insert fail, in which case the winner's row is read back.
        try:
            async with self.db.begin_nested():
                row = default_venue_settings()
                self.db.add(row)
            await self.db.commit()
            logger.info("Created default venue settings")
        except IntegrityError:
            logger.info("Venue settings created concurrently, reloading")
            row = await self.db.get(VenueSettings, VENUE_SETTINGS_ID, populate_existing=True)
        return row

    async def update_settings(self, data: VenueSettingsUpdate) -> VenueSettings:
        """Merge the provided fields over the stored row.

        Fields absent from the request keep their stored value rather than
        falling back to the defaults.
        """
        row = await self.get_settings()
        changes = data.changes()
        for field, value in changes.items():
            setattr(row, field, value)
        await self.db.flush()
        await self.db.commit()
        logger.info("Updated venue settings fields=%s", sorted(changes))
        return row

    async def set_field(self, field: str, value: str | None) -> VenueSettings:
        row = await self.get_settings()
        setattr(row, field, value)
        await self.db.flush()
        await self.db.commit()
        return row

    async def reset(self) -> VenueSettings:
        """Replace the settings row with a default one. Does not commit."""
        existing = await self.db.get(VenueSettings, VENUE_SETTINGS_ID)
        if existing is not None:
            await self.db.delete(existing)
            await self.db.flush()
        row = default_venue_settings()
        self.db.add(row)
        await self.db.flush()
        return row
