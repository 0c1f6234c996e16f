import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from leaderboard.config import settings
from leaderboard.database import init_db
from leaderboard.errors import register_exception_handlers
from leaderboard.jobs.scheduler import scheduler, setup_scheduler
from leaderboard.routers import admin, games, scores, uploads

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
    if settings.scheduler_enabled:
        setup_scheduler()
        scheduler.start()
        logging.getLogger(__name__).info("Scheduler started")
    yield
    if settings.scheduler_enabled:
        scheduler.shutdown()
        logging.getLogger(__name__).info("Scheduler shut down")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Arcade Leaderboard API",
        version="0.1.0",
        description="High-score tracking for arcade and pinball venues",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(games.router)
    app.include_router(scores.router)
    app.include_router(admin.router)
    app.include_router(uploads.router)

    # The directory is created on startup, so it may not exist yet at import time
    app.mount(
        settings.uploads_url_path,
        StaticFiles(directory=settings.upload_dir, check_dir=False),
        name="uploads",
    )

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
