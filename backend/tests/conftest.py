import asyncio
import os
import tempfile

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SCHEDULER_ENABLED", "false")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="leaderboard-uploads-"))

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402
from starlette.testclient import TestClient  # noqa: E402

from leaderboard.config import settings  # noqa: E402
from leaderboard.database import get_db  # noqa: E402
from leaderboard.main import create_app  # noqa: E402
from leaderboard.models import Base  # noqa: E402

VALID_SCORE = {
    "playerName": "Player",
    "score": 100,
    "phoneNumber": "+15551234567",
    "latitude": 44.05,
    "longitude": -91.64,
}


@pytest.fixture
def engine(tmp_path):
    # File-backed SQLite with NullPool: every session opens its own connection,
    # so the engine can be used from both TestClient and asyncio.run().
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'leaderboard.db'}", poolclass=NullPool
    )

    async def _create():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(_create())
    yield engine
    asyncio.run(engine.dispose())


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
def run_db(session_factory):
    """Run ``fn(session)`` to completion in a fresh session and return its result."""

    def _run(fn):
        async def _inner():
            async with session_factory() as session:
                return await fn(session)

        return asyncio.run(_inner())

    return _run


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    path = tmp_path / "uploads"
    monkeypatch.setattr(settings, "upload_dir", str(path))
    return path


@pytest.fixture
def client(session_factory, upload_dir):
    app = create_app()

    async def _get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _get_db
    return TestClient(app)


@pytest.fixture
def make_game(client):
    def _make(name="Pac-Man", type="arcade", **fields):
        response = client.post("/api/games", json={"name": name, "type": type, **fields})
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def submit_score(client):
    def _submit(game_id, player_name="Player", score=100, **fields):
        body = {**VALID_SCORE, "gameId": game_id, "playerName": player_name, "score": score, **fields}
        return client.post("/api/scores", json=body)

    return _submit
