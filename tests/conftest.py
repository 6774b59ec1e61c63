from __future__ import annotations

import os
import tempfile
from collections.abc import AsyncIterator, Iterator

import pytest

_TEST_DB_DIR = tempfile.mkdtemp(prefix="copa_litoral_tests_")

# engine and settings are built at import time, so the environment goes first
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_TEST_DB_DIR, 'copa_litoral.db')}"
os.environ["ENVIRONMENT"] = "test"
os.environ["JWT_SECRET"] = "copa-litoral-test-secret-0123456789abcdef"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RATE_LIMIT_DEFAULT"] = "10000/minute"
os.environ["DEBUG_ERRORS"] = "false"

from fastapi.testclient import TestClient  # noqa: E402

from copa_litoral.api.middleware import build_limiter  # noqa: E402
from copa_litoral.core.config import get_settings  # noqa: E402
from copa_litoral.db.models import Base  # noqa: E402
from copa_litoral.db.session import engine  # noqa: E402
from copa_litoral.main import app  # noqa: E402


@pytest.fixture
async def db() -> AsyncIterator[None]:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


@pytest.fixture
def fresh_limiter(monkeypatch) -> None:
    monkeypatch.setattr(app.state, "limiter", build_limiter(get_settings()))


@pytest.fixture
def client(db, fresh_limiter) -> Iterator[TestClient]:
    yield TestClient(app)
