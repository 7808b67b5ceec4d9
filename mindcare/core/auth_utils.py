"""
JWT and password helpers for MindCare auth.
Tokens travel as "Authorization: Bearer <jwt>" and carry the subject id, email and role.
"""
import logging
import time
from typing import NamedTuple, Optional

import jwt
from passlib.context import CryptContext

from mindcare.config import settings

logger = logging.getLogger(__name__)
pwd_ctx = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

_ALGORITHM = "HS256"


class TokenClaims(NamedTuple):
    user_id: str
    email: str
    role: str


def create_jwt(user_id: str, email: str, role: str) -> str:
    now = int(time.time())
    payload = {
        "sub": user_id,
        "email": email,
        "role": role,
        "exp": now + settings.auth_token_max_age_seconds,
        "iat": now,
    }
    return jwt.encode(payload, settings.auth_secret_key, algorithm=_ALGORITHM)


def decode_jwt(token: str) -> Optional[TokenClaims]:
    try:
        payload = jwt.decode(token, settings.auth_secret_key, algorithms=[_ALGORITHM])
    except jwt.PyJWTError as e:
        logger.debug("JWT decode failed: %s", e)
        return None
    if not payload.get("sub") or not payload.get("role"):
        return None
    return TokenClaims(payload["sub"], payload.get("email") or "", payload["role"])


def get_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def hash_password(password: str) -> str:
    return pwd_ctx.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    if not hashed:
        return False
    try:
        return pwd_ctx.verify(plain, hashed)
    except ValueError:
        # Unrecognised or malformed hash
        return False
