import pytest
from fastapi.testclient import TestClient

from kosync.core.config import Settings
from kosync.core.security import PasswordHasher
from kosync.db.base import Base
from kosync.db.session import create_engine, create_session_factory
from kosync.main import create_app

TEST_SALT = "test-salt"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'kosync.db'}",
        password_salt=TEST_SALT,
        password_hash_rounds=4,
        log_format="text",
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def hasher():
    return PasswordHasher(TEST_SALT, rounds=4)


@pytest.fixture
async def session_factory(settings):
    engine = create_engine(settings.database_url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield create_session_factory(engine)
    await engine.dispose()


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


def auth_headers(username, password):
    return {"x-auth-user": username, "x-auth-key": password}
