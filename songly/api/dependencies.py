# ============================================================================
# FILE: songly/api/dependencies.py
# ============================================================================
from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from songly.core.errors import UnauthorizedError
from songly.core.security import Principal, decode_token
from songly.config import settings
from typing import Optional

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_PREFIX}/auth/token", auto_error=False)

def get_current_principal(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme)
) -> Optional[Principal]:
    """
    Decode the bearer token, if any, and attach the principal to the request
    Returns None if no token or invalid token (allows anonymous access)
    """
    principal = decode_token(token) if token else None
    request.state.principal = principal
    return principal

def ensure_logged_in(principal: Optional[Principal]) -> None:
    """Raise Unauthorized unless someone is logged in"""
    if principal is None or not principal.username:
        raise UnauthorizedError()

def ensure_admin(principal: Optional[Principal]) -> None:
    """Raise Unauthorized unless the principal is an admin (strictly the boolean True)"""
    if principal is None or not principal.username or principal.is_admin is not True:
        raise UnauthorizedError()

def ensure_correct_user_or_admin(principal: Optional[Principal], username: str) -> None:
    """Raise Unauthorized unless the principal is `username` or an admin"""
    if principal is None or not principal.username:
        raise UnauthorizedError()
    if principal.username != username and principal.is_admin is not True:
        raise UnauthorizedError()

def require_logged_in(
    principal: Optional[Principal] = Depends(get_current_principal)
) -> Principal:
    """
    Require authenticated user (raises 401 if not authenticated)
    Use this dependency for protected endpoints
    """
    ensure_logged_in(principal)
    return principal

def require_admin(
    principal: Optional[Principal] = Depends(get_current_principal)
) -> Principal:
    """Require an admin token"""
    ensure_admin(principal)
    return principal

def require_correct_user_or_admin(
    username: str,
    principal: Optional[Principal] = Depends(get_current_principal)
) -> Principal:
    """Require the user named in the route, or an admin"""
    ensure_correct_user_or_admin(principal, username)
    return principal