from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from appointment_api.main import create_app
from appointment_api.core.config import Settings
from appointment_api.core.database import get_redis
from appointment_api.models.user import User

def test_engine_and_redis_follow_settings(tmp_path):
    database_url = f"sqlite:///{tmp_path / 'other.db'}"
    settings = Settings(
        TESTING=False,
        DATABASE_URL=database_url,
        REDIS_URL="redis://localhost:6390/0",
    )

    app = create_app(settings)
    try:
        assert str(app.state.engine.url) == database_url
        assert app.state.redis.connection_pool.connection_kwargs["port"] == 6390
    finally:
        app.state.engine.dispose()

def test_requests_use_the_configured_database(tmp_path, fake_redis):
    """A user registered through the API lands in the database named by the settings."""
    database_url = f"sqlite:///{tmp_path / 'app.db'}"
    settings = Settings(
        TESTING=True,
        TEST_DATABASE_URL=database_url,
        SECRET_KEY="test-secret-key",
        LOG_LEVEL="WARNING",
    )
    app = create_app(settings)
    app.dependency_overrides[get_redis] = lambda: fake_redis

    with TestClient(app) as client:
        response = client.post("/auth/register", json={
            "email": "file@example.com", "password": "password123", "name": "File"
        })
        assert response.status_code == 201

    engine = create_engine(database_url)
    db = sessionmaker(bind=engine)()
    try:
        stored = db.query(User).filter(User.email == "file@example.com").one()
        assert str(stored.id) == response.json()["user"]["id"]
    finally:
        db.close()
        engine.dispose()
