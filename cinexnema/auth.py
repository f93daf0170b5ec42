from datetime import datetime, timedelta
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy import func
from sqlalchemy.orm import Session
from cinexnema.config import get_settings
from cinexnema.database import commit, get_db
from cinexnema.errors import Forbidden, Unauthorized, ValidationFailed
from cinexnema.models.user import User, UserRole
from cinexnema.schemas.user import TokenPayload

settings = get_settings()
security = HTTPBearer(auto_error=False)

# Use Argon2 for password hashing
pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
)

MIN_PASSWORD_LENGTH = 6


class AccountNotFound(Unauthorized):
    """Login for an email with no account. The only error that lets /session fall back to signup."""


class AccountExists(ValidationFailed):
    default_message = "Email is already registered"


def hash_password(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(plain: str, hashed: str | None) -> bool:
    if not hashed:
        return False
    return pwd_context.verify(plain, hashed)

def create_access_token(user_id: str, email: str) -> str:
    expire = datetime.utcnow() + timedelta(
        minutes=settings.access_token_expire_minutes
    )
    payload = {
        "sub": user_id,
        "email": email,
        "exp": expire,
        "type": "access",
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)

def decode_token(token: str) -> TokenPayload | None:
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.algorithm],
        )
        return TokenPayload(
            sub=payload["sub"],
            email=payload["email"],
            exp=payload["exp"],
        )
    except (JWTError, KeyError):
        return None


def _find_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(func.lower(User.email) == email.strip().lower()).first()


def login(db: Session, email: str, password: str) -> str:
    """Return an access token. AccountNotFound if no such email, Unauthorized on bad password."""
    user = _find_by_email(db, email)
    if not user:
        raise AccountNotFound("Invalid email or password")
    if not verify_password(password, user.password):
        raise Unauthorized("Invalid email or password")
    return create_access_token(user.id, user.email)


def signup(db: Session, email: str, password: str, full_name: str = "") -> User:
    email = email.strip().lower()
    if not email or "@" not in email:
        raise ValidationFailed("A valid email is required")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationFailed(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if _find_by_email(db, email):
        raise AccountExists()
    user = User(
        email=email,
        password=hash_password(password),
        full_name=full_name[:100],
        role=UserRole.CREATOR.value,
    )
    db.add(user)
    commit(db)
    db.refresh(user)
    return user


def login_or_signup(db: Session, email: str, password: str, full_name: str = "") -> tuple[str, bool]:
    """
    Log in; if the account does not exist, sign up and retry the login once.
    Returns (token, created). A wrong password for an existing account is never turned into a signup.
    """
    try:
        return login(db, email, password), False
    except AccountNotFound:
        pass
    signup(db, email, password, full_name)
    return login(db, email, password), True


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    if not credentials:
        raise Unauthorized("Not authenticated")

    token = credentials.credentials
    payload = decode_token(token)

    if not payload:
        raise Unauthorized("Invalid or expired token")

    user = db.query(User).filter(User.id == payload.sub).first()

    if not user:
        raise Unauthorized("User not found")

    return user


def get_current_user_admin(
    user: User = Depends(get_current_user),
) -> User:
    """User must be logged in and have ADMIN role."""
    if user.role != UserRole.ADMIN.value:
        raise Forbidden("Only admin can access.")
    return user
