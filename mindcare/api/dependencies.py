"""
FastAPI dependencies: store access, caller identity and role gates.

Role checks live here and nowhere else. Handlers receive an AuthenticatedUser, or an
AdminAuthorization for admin-only reads, and pass it down to the services.
"""
import logging
import random
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from mindcare.config import settings
from mindcare.core.auth_utils import decode_jwt, get_bearer_token
from mindcare.core.errors import ForbiddenError, UnauthorizedError
from mindcare.core.permissions import AdminAuthorization, AuthenticatedUser
from mindcare.core.responses import ReplySelector
from mindcare.db.database import get_db
from mindcare.db.kv_store import KVStore

logger = logging.getLogger(__name__)

_selector: Optional[ReplySelector] = None


def get_store(db: Session = Depends(get_db)) -> KVStore:
    return KVStore(db)


def get_reply_selector() -> ReplySelector:
    """One selector per process so a configured seed gives a reproducible reply sequence."""
    global _selector
    if _selector is None:
        _selector = ReplySelector(random.Random(settings.response_seed))
    return _selector


def get_current_user(authorization: Optional[str] = Header(None)) -> AuthenticatedUser:
    token = get_bearer_token(authorization)
    if not token:
        raise UnauthorizedError("Missing bearer token")
    claims = decode_jwt(token)
    if not claims:
        raise UnauthorizedError("Invalid or expired token")
    logger.debug("Authenticated user %s role=%s", claims.user_id, claims.role)
    return AuthenticatedUser(user_id=claims.user_id, email=claims.email, role=claims.role)


def require_role(*roles: str):
    def _check(user: AuthenticatedUser = Depends(get_current_user)) -> AuthenticatedUser:
        if user.role not in roles:
            raise ForbiddenError(f"Access denied - {' or '.join(r.capitalize() for r in roles)} only")
        return user
    return _check


def require_admin(user: AuthenticatedUser = Depends(require_role("admin"))) -> AdminAuthorization:
    return AdminAuthorization(admin_id=user.user_id)
