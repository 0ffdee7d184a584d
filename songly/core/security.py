# ============================================================================
# FILE: songly/core/security.py
# ============================================================================
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
import logging

import bcrypt
import jwt

from songly.config import settings

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class Principal:
    """Identity decoded from a verified token; `is_admin` is kept exactly as signed"""
    username: str
    is_admin: Any = False
    issued_at: Optional[int] = None

def get_password_hash(password: str) -> str:
    """Hash a plaintext password with bcrypt"""
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_WORK_FACTOR)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plaintext password against a stored bcrypt digest"""
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # Malformed digest in the database
        logger.warning("Stored password digest could not be parsed")
        return False

def create_token(user: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Return a signed JWT with a {username, isAdmin} payload from user data

    isAdmin defaults to False when the user data does not carry it.
    """
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    payload = {
        "username": user["username"],
        "isAdmin": user.get("isAdmin") or False,
        "iat": int(now.timestamp()),
        "exp": now + expires_delta,
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

def decode_token(token: str) -> Optional[Principal]:
    """
    Verify a token's signature and expiry

    Returns None on any failure; callers treat that as "no token presented".
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.PyJWTError as e:
        logger.debug(f"Rejected token: {e}")
        return None

    username = payload.get("username")
    if not isinstance(username, str) or not username:
        return None

    return Principal(
        username=username,
        is_admin=payload.get("isAdmin", False),
        issued_at=payload.get("iat"),
    )
