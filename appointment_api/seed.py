from sqlalchemy.orm import Session
from typing import Optional

from .core.config import get_settings
from .core.database import create_db_engine, create_session_factory, init_db
from .core.logging import configure_logging
from .core.security import UserRole, get_password_hash
from .models.user import User
from .models.appointment import Appointment  # noqa: F401  registers the mapper


def seed_admin(db: Session, email: str, password: str, name: Optional[str] = "Administrator") -> User:
    """Create the admin account, or promote an existing user with that email."""
    email = email.strip().lower()
    user = db.query(User).filter(User.email == email).first()
    if user is None:
        user = User(
            email=email,
            password_hash=get_password_hash(password),
            name=name,
            role=UserRole.ADMIN,
        )
        db.add(user)
    else:
        user.role = UserRole.ADMIN
    db.commit()
    db.refresh(user)
    return user


def main():
    settings = get_settings()
    logger = configure_logging(settings)

    if not settings.SEED_ADMIN_EMAIL or not settings.SEED_ADMIN_PASSWORD:
        logger.error("SEED_ADMIN_EMAIL and SEED_ADMIN_PASSWORD must be set")
        raise SystemExit(1)

    engine = create_db_engine(settings.get_database_url)
    init_db(engine)
    db = create_session_factory(engine)()
    try:
        user = seed_admin(db, settings.SEED_ADMIN_EMAIL, settings.SEED_ADMIN_PASSWORD)
        logger.info("Admin account ready: %s (id=%s)", user.email, user.id)
    finally:
        db.close()
        engine.dispose()


if __name__ == "__main__":
    main()
