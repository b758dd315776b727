"""
Shared test configuration.
Every test app runs against an in-memory mongomock database passed to create_app.
"""

from typing import Iterator

import mongomock
import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app
from support import TEST_SECRET


@pytest.fixture
def settings() -> Settings:
    return Settings(jwt_secret=TEST_SECRET, allowed_origins=["http://testserver"])


@pytest.fixture
def db():
    return mongomock.MongoClient()["studyPlatform_test"]


@pytest.fixture
def client(settings: Settings, db) -> Iterator[TestClient]:
    app = create_app(settings=settings, db=db)
    with TestClient(app) as test_client:
        yield test_client
