from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from cinexnema.auth import (
    MIN_PASSWORD_LENGTH,
    get_current_user,
    hash_password,
    login,
    login_or_signup,
    signup,
    create_access_token,
)
from cinexnema.database import commit, get_db
from cinexnema.errors import ValidationFailed
from cinexnema.models.user import User
from cinexnema.schemas.user import LoginRequest, SetPasswordRequest, SignupRequest, TokenResponse, UserResponse

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/signup", response_model=TokenResponse)
def signup_user(body: SignupRequest, db: Session = Depends(get_db)):
    """Create a creator account and return its token."""
    user = signup(db, body.email, body.password, body.full_name)
    return TokenResponse(access_token=create_access_token(user.id, user.email), created=True)


@router.post("/login", response_model=TokenResponse)
def login_user(body: LoginRequest, db: Session = Depends(get_db)):
    """Login with email and password."""
    return TokenResponse(access_token=login(db, body.email, body.password))


@router.post("/session", response_model=TokenResponse)
def open_session(body: SignupRequest, db: Session = Depends(get_db)):
    """Login; unknown email signs up first and logs in once more. Wrong password stays 401."""
    token, created = login_or_signup(db, body.email, body.password, body.full_name)
    return TokenResponse(access_token=token, created=created)


@router.get("/me", response_model=UserResponse)
def get_me(user: User = Depends(get_current_user)):
    return user


@router.put("/me/password")
def set_password(
    body: SetPasswordRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Set or change password."""
    if len(body.new_password) < MIN_PASSWORD_LENGTH:
        raise ValidationFailed(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    user.password = hash_password(body.new_password)
    commit(db)
    return {"message": "Password updated successfully"}
