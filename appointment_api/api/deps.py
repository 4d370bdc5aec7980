from fastapi import Depends, Request
from sqlalchemy.orm import Session
from typing import Optional
import logging
import redis

from ..core.config import Settings
from ..core.database import get_db, get_redis
from ..core.exceptions import AuthenticationRequired, RateLimited
from ..models.user import User
from ..services.auth_service import AuthService

RATE_LIMIT_WINDOW_SECONDS = 3600

def get_app_settings(request: Request) -> Settings:
    """Settings the application was built with."""
    return request.app.state.settings

def get_app_logger(request: Request) -> logging.Logger:
    """Logger the application was built with."""
    return request.app.state.logger

def get_auth_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    logger: logging.Logger = Depends(get_app_logger),
) -> AuthService:
    return AuthService(db, settings, logger)

def _bearer_token(request: Request) -> Optional[str]:
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        return None
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()

# Optional authentication: a missing or bad token yields an anonymous request
async def get_current_user_optional(
    request: Request,
    auth_service: AuthService = Depends(get_auth_service),
) -> Optional[User]:
    """Get current user if authenticated, None otherwise."""
    return auth_service.resolve_token(_bearer_token(request))

async def get_current_user(
    current_user: Optional[User] = Depends(get_current_user_optional),
) -> User:
    """Get current authenticated user, failing when there is none."""
    if current_user is None:
        raise AuthenticationRequired()
    return current_user

# Rate limiting dependency
async def rate_limit_check(
    request: Request,
    redis_client: redis.Redis = Depends(get_redis),
    settings: Settings = Depends(get_app_settings),
    logger: logging.Logger = Depends(get_app_logger),
) -> None:
    """Basic rate limiting for authentication endpoints."""
    if not settings.RATE_LIMIT_ENABLED:
        return

    client_ip = request.client.host if request.client else "unknown"
    key = f"rate_limit:{request.url.path}:{client_ip}"

    current_requests = redis_client.incr(key)
    if current_requests == 1:
        redis_client.expire(key, RATE_LIMIT_WINDOW_SECONDS)

    if current_requests > settings.RATE_LIMIT_PER_HOUR:
        logger.warning("Rate limit exceeded for %s on %s", client_ip, request.url.path)
        raise RateLimited()
