import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from leaderboard.database import async_session

logger = logging.getLogger(__name__)

scheduler = AsyncIOScheduler()

ORPHAN_MIN_AGE_SECONDS = 3600


async def reconcile_champions_job() -> None:
    """Rebuild every game's champion cache from its scores."""
    logger.info("Running scheduled job: reconcile_champions")
    async with async_session() as db:
        try:
            from leaderboard.services.champion_reconciler import ChampionReconciler

            updated = await ChampionReconciler(db).reconcile_all()
            logger.info("Champion reconciliation corrected %d games", updated)
        except Exception:
            logger.exception("Champion reconciliation failed")
            await db.rollback()


async def sweep_uploads_job() -> None:
    """Delete uploaded files that nothing refers to any more."""
    logger.info("Running scheduled job: sweep_uploads")
    async with async_session() as db:
        try:
            from leaderboard.services.maintenance import referenced_upload_urls
            from leaderboard.services.upload_service import UploadService

            urls = await referenced_upload_urls(db)
            removed = UploadService().sweep_orphans(urls, ORPHAN_MIN_AGE_SECONDS)
            logger.info("Upload sweep removed %d files", removed)
        except Exception:
            logger.exception("Upload sweep failed")


def setup_scheduler():
    scheduler.add_job(
        reconcile_champions_job,
        "cron",
        hour=4,
        minute=0,
        id="reconcile_champions",
        replace_existing=True,
    )
    scheduler.add_job(
        sweep_uploads_job,
        "cron",
        hour=4,
        minute=30,
        id="sweep_uploads",
        replace_existing=True,
    )
