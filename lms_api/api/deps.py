# lms_api/api/deps.py
from typing import Generator

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy.orm import Session

from lms_api.core.security import get_token_subject
from lms_api.crud import user as crud_user
from lms_api.db.models.user import User
from lms_api.db.session import SessionLocal

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        email = get_token_subject(token)
    except JWTError:
        raise credentials_exception

    user = crud_user.get_user_by_email(db, email)
    if not user or not user.is_active:
        raise credentials_exception
    return user


def require_trainer(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role not in ("trainer", "admin"):
        raise HTTPException(status_code=403, detail="Trainers only")
    return current_user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != "admin":
        raise HTTPException(status_code=403, detail="Administrators only")
    return current_user
