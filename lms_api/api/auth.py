from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from lms_api.api.deps import get_db, get_current_user
from lms_api.schemas.user import UserCreate, UserLogin, Token, UserOut
from lms_api.crud import user as crud_user
from lms_api.core.security import verify_password, create_access_token

router = APIRouter()

# admins are created by scripts/init_admin.py, never through registration
REGISTRABLE_ROLES = ("trainer", "student")


@router.post("/register", response_model=Token)
def register(user_in: UserCreate, db: Session = Depends(get_db)):
    if crud_user.get_user_by_email(db, user_in.email):
        raise HTTPException(status_code=400, detail="Email already registered")
    if user_in.role not in REGISTRABLE_ROLES:
        raise HTTPException(status_code=400, detail="Role must be 'trainer' or 'student'")

    user = crud_user.create_user(db, user_in)
    access_token = create_access_token(user.email, role=user.role)
    return {"access_token": access_token, "token_type": "bearer"}


@router.post("/login", response_model=Token)
def login(form: UserLogin, db: Session = Depends(get_db)):
    user = crud_user.get_user_by_email(db, form.email)
    if not user or not verify_password(form.password, user.hashed_password):
        raise HTTPException(status_code=401, detail="Invalid email or password")
    if not user.is_active:
        raise HTTPException(status_code=403, detail="Account is disabled")
    access_token = create_access_token(user.email, role=user.role)
    return {"access_token": access_token, "token_type": "bearer"}


@router.get("/me", response_model=UserOut)
def read_me(current_user=Depends(get_current_user)):
    return current_user
