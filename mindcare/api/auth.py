"""
Auth API: email/password signup and login, /auth/profile.
Returns a bearer JWT carrying the user's role; the profile (name, role) is stored under user:<id>.
"""
import logging
import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from mindcare.api.dependencies import get_current_user, get_store
from mindcare.core.auth_utils import create_jwt, hash_password, verify_password
from mindcare.core.errors import DependencyUnavailableError, InvalidInputError, UnauthorizedError
from mindcare.core.permissions import AuthenticatedUser
from mindcare.db.database import get_db
from mindcare.db.kv_store import KVStore
from mindcare.db.models import User
from mindcare.schemas.user import AuthResponse, LoginRequest, ProfileResponse, SignupRequest, UserProfile
from mindcare.services.directory import get_profile, require_profile, save_profile

router = APIRouter()
logger = logging.getLogger(__name__)


def _find_user(db: Session, email: str):
    try:
        return db.query(User).filter(User.email == email).first()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Database error loading user")
        raise DependencyUnavailableError()


@router.post("/signup", response_model=AuthResponse)
async def signup(body: SignupRequest, db: Session = Depends(get_db), store: KVStore = Depends(get_store)):
    """Create an account. Email is confirmed immediately (no mail server in the loop)."""
    email = body.email.strip().lower()
    if _find_user(db, email):
        raise InvalidInputError("A user with this email address has already been registered")

    user = User(id=str(uuid.uuid4()), email=email, password_hash=hash_password(body.password))
    try:
        db.add(user)
        db.commit()
        db.refresh(user)
    except IntegrityError:
        db.rollback()
        raise InvalidInputError("A user with this email address has already been registered")
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Database error creating user")
        raise DependencyUnavailableError()

    profile = UserProfile(
        id=user.id,
        email=email,
        name=body.name.strip(),
        role=body.role,
        created_at=datetime.now(timezone.utc),
    )
    save_profile(store, profile)
    logger.info("Signed up user %s role=%s", user.id, profile.role)
    return AuthResponse(access_token=create_jwt(user.id, email, profile.role), profile=profile)


@router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest, db: Session = Depends(get_db), store: KVStore = Depends(get_store)):
    email = body.email.strip().lower()
    user = _find_user(db, email)
    if not user or not verify_password(body.password, user.password_hash):
        raise UnauthorizedError("Invalid email or password")
    profile = get_profile(store, user.id)
    if not profile:
        logger.warning("User %s has credentials but no profile", user.id)
        raise UnauthorizedError("Invalid email or password")
    return AuthResponse(access_token=create_jwt(user.id, email, profile.role), profile=profile)


@router.get("/profile", response_model=ProfileResponse)
async def profile(user: AuthenticatedUser = Depends(get_current_user), store: KVStore = Depends(get_store)):
    return ProfileResponse(profile=require_profile(store, user.user_id))
