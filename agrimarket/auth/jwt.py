import logging
from datetime import timedelta
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from agrimarket.db.session import get_db
from agrimarket.models.user import User
from agrimarket.schemas.user import Token, UserWithToken, UserCreate, User as UserSchema
from agrimarket.auth.security import (
    get_password_hash,
    verify_password,
    create_access_token,
    ACCESS_TOKEN_EXPIRE_MINUTES,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _authenticate(db: Session, form_data: OAuth2PasswordRequestForm) -> User:
    user = db.query(User).filter(User.username == form_data.username).first()
    if not user or not verify_password(form_data.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def _issue_token(user: User) -> str:
    access_token_expires = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    return create_access_token(data={"sub": user.username}, expires_delta=access_token_expires)


# LOGIN: returns user + token (frontend-friendly)
@router.post("/login", response_model=UserWithToken)
def login_with_user(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    user = _authenticate(db, form_data)
    return UserWithToken(
        user=UserSchema.model_validate(user),
        access_token=_issue_token(user),
        token_type="bearer"
    )

# TOKEN-ONLY: OAuth2 compatibility (for Swagger/OAuth2PasswordBearer)
@router.post("/token", response_model=Token)
def login_token_only(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    user = _authenticate(db, form_data)
    return {"access_token": _issue_token(user), "token_type": "bearer"}

# REGISTER: create user + return user + token
@router.post("/register", response_model=UserWithToken, status_code=status.HTTP_201_CREATED)
def register_user(
    user_data: UserCreate,
    db: Session = Depends(get_db)
):
    existing_user = db.query(User).filter(
        (User.username == user_data.username) | (User.email == user_data.email)
    ).first()
    if existing_user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username or email already registered"
        )

    db_user = User(
        username=user_data.username,
        email=user_data.email,
        hashed_password=get_password_hash(user_data.password),
        full_name=user_data.full_name,
        phone_number=user_data.phone_number,
        role=user_data.role,
    )

    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    logger.info("Registered %s %s", db_user.role, db_user.username)

    return UserWithToken(
        user=UserSchema.model_validate(db_user),
        access_token=_issue_token(db_user),
        token_type="bearer"
    )
