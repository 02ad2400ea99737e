"""Authentication endpoints for registration and login."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from tidyhome.api.deps import get_current_user
from tidyhome.config import settings
from tidyhome.core.security import hash_password, verify_password, create_access_token
from tidyhome.database import get_db
from tidyhome.models.user import User
from tidyhome.schemas.user import UserCreate, UserResponse, Token

logger = logging.getLogger(__name__)

router = APIRouter()


def _issue_token(user: User) -> dict:
    # sub must be a string for JWT
    access_token = create_access_token(data={"sub": str(user.id)})
    return {"access_token": access_token, "token_type": "bearer"}


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
def register(user_data: UserCreate, db: Session = Depends(get_db)):
    """
    Register a new user account.

    Args:
        user_data: Username (3-20 chars, letters, digits, underscore) and password
        db: Database session

    Returns:
        JWT token for the newly created user

    Raises:
        HTTPException: 403 if signups are disabled, 400 if the username is taken
    """
    if not settings.ALLOW_SIGNUPS:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Signups are disabled"
        )

    # Usernames are stored lower-cased, so this check is case-insensitive
    existing_user = db.query(User).filter(User.username == user_data.username).first()
    if existing_user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already taken"
        )

    new_user = User(
        username=user_data.username,
        hashed_password=hash_password(user_data.password)
    )

    db.add(new_user)
    db.commit()
    db.refresh(new_user)

    logger.info("Registered user %s", new_user.id)
    return _issue_token(new_user)


@router.post("/login", response_model=Token)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    """
    Login with username and password.

    Args:
        form_data: OAuth2 form data containing username and password
        db: Database session

    Returns:
        JWT token for authenticated user

    Raises:
        HTTPException: If credentials are invalid
    """
    user = db.query(User).filter(User.username == form_data.username.lower()).first()

    # Verify user exists and password is correct
    if not user or not verify_password(form_data.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return _issue_token(user)


@router.get("/me", response_model=UserResponse)
def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get current authenticated user information."""
    return current_user
