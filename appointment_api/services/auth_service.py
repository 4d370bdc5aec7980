from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import Optional
import logging

from ..models.user import User
from ..core.config import Settings
from ..core.exceptions import DuplicateEmail, InvalidCredentials
from ..core.security import (
    verify_password, get_password_hash, create_access_token,
    verify_token, UserRole
)
from ..schemas.auth import UserLogin, UserRegister

class AuthService:
    def __init__(self, db: Session, settings: Settings, logger: logging.Logger):
        self.db = db
        self.settings = settings
        self.logger = logger

    def register_user(self, user_data: UserRegister) -> tuple[str, User]:
        """Register a new user and return a token for them."""
        existing_user = self.db.query(User).filter(
            User.email == user_data.email
        ).first()

        if existing_user:
            self.logger.warning("Registration rejected, email already in use: %s", user_data.email)
            raise DuplicateEmail()

        new_user = User(
            email=user_data.email,
            password_hash=get_password_hash(user_data.password),
            name=user_data.name,
            role=UserRole.USER,
        )

        self.db.add(new_user)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race against a concurrent registration for the same email
            self.db.rollback()
            raise DuplicateEmail()
        self.db.refresh(new_user)

        self.logger.info("Registered user %s (id=%s)", new_user.email, new_user.id)
        return self.issue_token(new_user), new_user

    def authenticate_user(self, login_data: UserLogin) -> tuple[str, User]:
        """Check credentials and return a token for the user."""
        user = self.db.query(User).filter(
            User.email == login_data.email
        ).first()

        if not user or not verify_password(login_data.password, user.password_hash):
            self.logger.warning("Failed login for %s", login_data.email)
            raise InvalidCredentials()

        self.logger.info("User %s logged in", user.id)
        return self.issue_token(user), user

    def issue_token(self, user: User) -> str:
        return create_access_token(str(user.id), self.settings)

    def resolve_token(self, token: Optional[str]) -> Optional[User]:
        """Map a bearer token to its user, or None when it cannot be trusted."""
        if not token:
            return None

        token_payload = verify_token(token, self.settings)
        if not token_payload or not token_payload.sub:
            return None

        try:
            user_id = int(token_payload.sub)
        except ValueError:
            return None

        return self.db.get(User, user_id)

    def list_users(self) -> list[User]:
        return self.db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()
