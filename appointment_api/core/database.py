from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from typing import Generator
import redis

Base = declarative_base()

def _engine_options(database_url: str) -> dict:
    if database_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": 5,
        "max_overflow": 10,
        "pool_timeout": 30,
        "pool_recycle": 1800,  # Recycle connections after 30 minutes
    }

def create_db_engine(database_url: str) -> Engine:
    """Create the engine for the configured database URL."""
    return create_engine(database_url, **_engine_options(database_url))

def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)

def create_redis_client(redis_url: str) -> redis.Redis:
    return redis.from_url(redis_url, decode_responses=True)

# Database dependency
def get_db(request: Request) -> Generator[Session, None, None]:
    """Get database session from the application's session factory."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()

# Redis dependency
def get_redis(request: Request) -> redis.Redis:
    """Get the application's Redis client."""
    return request.app.state.redis

# Database initialization
def init_db(engine: Engine):
    """Initialize database tables."""
    Base.metadata.create_all(bind=engine)
