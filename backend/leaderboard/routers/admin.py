import logging

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from leaderboard.database import get_db
from leaderboard.schemas.settings import UploadResponse, VenueSettingsResponse, VenueSettingsUpdate
from leaderboard.services.settings_service import VenueSettingsService
from leaderboard.services.upload_service import UploadService

router = APIRouter(prefix="/api/admin", tags=["admin"])
logger = logging.getLogger(__name__)


@router.get("/settings", response_model=VenueSettingsResponse)
async def get_settings(db: AsyncSession = Depends(get_db)):
    row = await VenueSettingsService(db).get_settings()
    return VenueSettingsResponse.model_validate(row)


@router.patch("/settings", response_model=VenueSettingsResponse)
@router.put("/settings", response_model=VenueSettingsResponse)
async def update_settings(payload: VenueSettingsUpdate, db: AsyncSession = Depends(get_db)):
    row = await VenueSettingsService(db).update_settings(payload)
    return VenueSettingsResponse.model_validate(row)


@router.post("/upload-logo", response_model=UploadResponse)
async def upload_logo(
    logo: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
):
    url = await UploadService().save(logo, "logo")
    await VenueSettingsService(db).set_field("logo_url", url)
    return UploadResponse(url=url)


@router.post("/upload-animated-logo", response_model=UploadResponse)
async def upload_animated_logo(
    animated_logo: UploadFile = File(..., alias="animatedLogo"),
    db: AsyncSession = Depends(get_db),
):
    url = await UploadService().save(animated_logo, "animated-logo")
    await VenueSettingsService(db).set_field("animated_logo_url", url)
    return UploadResponse(url=url)


@router.post("/reconcile-champions")
async def reconcile_champions(db: AsyncSession = Depends(get_db)):
    from leaderboard.services.champion_reconciler import ChampionReconciler

    updated = await ChampionReconciler(db).reconcile_all()
    return {"status": "ok", "updated": updated}


@router.post("/seed-demo")
async def seed_demo(seed: int | None = None, db: AsyncSession = Depends(get_db)):
    from leaderboard.services.maintenance import DemoDataSeeder

    games, scores = await DemoDataSeeder(db, seed=seed).seed()
    return {"status": "ok", "games": games, "scores": scores}


@router.post("/clear-data")
async def clear_data(db: AsyncSession = Depends(get_db)):
    from leaderboard.services.maintenance import clear_all_data

    counts = await clear_all_data(db)
    logger.warning("All leaderboard data cleared")
    return {
        "status": "ok",
        "message": (
            f"Removed {counts['games']} games, {counts['scores']} scores "
            f"and {counts['files']} uploaded files"
        ),
    }


@router.post("/sweep-uploads")
async def sweep_uploads(db: AsyncSession = Depends(get_db)):
    from leaderboard.services.maintenance import referenced_upload_urls

    urls = await referenced_upload_urls(db)
    removed = UploadService().sweep_orphans(urls)
    return {"status": "ok", "removed": removed}
