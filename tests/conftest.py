import os

os.environ["TESTING"] = "1"
os.environ["TEST_DATABASE_URL"] = "sqlite://"

import logging

import fakeredis
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from appointment_api.main import create_app
from appointment_api.core.config import Settings
from appointment_api.core.database import Base, get_db, get_redis

# One in-memory database shared by every session in a test
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

def build_app(settings, redis_client):
    application = create_app(settings)
    application.dependency_overrides[get_db] = override_get_db
    application.dependency_overrides[get_redis] = lambda: redis_client
    return application

@pytest.fixture(scope="function")
def test_db():
    # Create tables
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)

@pytest.fixture
def db_session(test_db):
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

@pytest.fixture
def settings():
    return Settings(
        TESTING=True,
        SECRET_KEY="test-secret-key",
        RATE_LIMIT_PER_HOUR=1000,
        LOG_LEVEL="WARNING",
    )

@pytest.fixture
def logger():
    return logging.getLogger("appointment_api.tests")

@pytest.fixture
def fake_redis():
    return fakeredis.FakeRedis(decode_responses=True)

@pytest.fixture
def app(test_db, settings, fake_redis):
    return build_app(settings, fake_redis)

@pytest.fixture
def client(app):
    with TestClient(app, base_url="http://testserver") as test_client:
        yield test_client
