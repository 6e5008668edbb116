"""Shared pytest setup: in-memory SQLite and a fresh schema per test."""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_KEY", "test-signing-key-that-is-long-enough-for-hs256")
os.environ.setdefault("JWT_ISSUER", "people-api-tests")
os.environ.setdefault("JWT_AUDIENCE", "people-api-tests")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402

from people_api.core.database import engine  # noqa: E402
from people_api.models.tables import Base  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_schema():
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    yield
