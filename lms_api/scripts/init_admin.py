# lms_api/scripts/init_admin.py
"""
Create the first administrator account.

    python -m lms_api.scripts.init_admin

Credentials come from ADMIN_EMAIL / ADMIN_PASSWORD / ADMIN_FULL_NAME in the
environment or .env. Running it twice is harmless.
"""
import logging

from sqlalchemy.orm import Session

from lms_api.core.config import settings
from lms_api.core.security import get_password_hash
from lms_api.crud.user import get_user_by_email
from lms_api.db.models.user import User

logger = logging.getLogger(__name__)


def ensure_admin(db: Session, email: str, password: str, full_name: str) -> User:
    user = get_user_by_email(db, email)
    if user:
        if user.role != "admin":
            user.role = "admin"
            db.commit()
            logger.info(f"Promoted existing user {email} to admin")
        return user

    user = User(
        email=email,
        hashed_password=get_password_hash(password),
        full_name=full_name,
        role="admin",
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Admin user created: {email}")
    return user


def main() -> None:
    from lms_api.db.session import SessionLocal

    logging.basicConfig(level=settings.LOG_LEVEL)
    db = SessionLocal()
    try:
        ensure_admin(db, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD, settings.ADMIN_FULL_NAME)
    finally:
        db.close()


if __name__ == "__main__":
    main()
