"""
Pytest configuration and shared fixtures.

Each test gets its own SQLite file under tmp_path with the schema created,
so tests never share rows.
"""
import pytest

from resume_core.core.config import Settings
from resume_core.db.session import Database
from resume_core.services.resume_service import ResumeService


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'resumes.db'}",
        SECTION_FETCH_TIMEOUT_SECONDS=5.0,
    )


@pytest.fixture
async def database(settings):
    db = Database(settings=settings).connect()
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
def service(database):
    return ResumeService(database)


@pytest.fixture
async def resume(service):
    """A resume root with no sections at all."""
    return await service.resumes.create({"user_id": "u1", "title": "Bare", "template": "modern"})
