from fastapi import Depends
from sqlalchemy.orm import Session
from strawberry.fastapi import BaseContext
from typing import Optional
import logging

from ..deps import get_app_logger, get_app_settings, get_current_user_optional
from ...core.config import Settings
from ...core.database import get_db
from ...models.user import User
from ...services.auth_service import AuthService
from ...services.appointment_service import AppointmentService


class RequestContext(BaseContext):
    """Per-request state handed to every resolver."""

    def __init__(
        self,
        db: Session,
        user: Optional[User],
        settings: Settings,
        logger: logging.Logger,
    ):
        super().__init__()
        self.db = db
        self.user = user
        self.settings = settings
        self.logger = logger

    @property
    def auth(self) -> AuthService:
        return AuthService(self.db, self.settings, self.logger)

    @property
    def appointments(self) -> AppointmentService:
        return AppointmentService(self.db, self.logger)


async def get_context(
    db: Session = Depends(get_db),
    user: Optional[User] = Depends(get_current_user_optional),
    settings: Settings = Depends(get_app_settings),
    logger: logging.Logger = Depends(get_app_logger),
) -> RequestContext:
    return RequestContext(db=db, user=user, settings=settings, logger=logger)
