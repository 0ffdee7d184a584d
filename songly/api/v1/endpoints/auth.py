# ============================================================================
# FILE: songly/api/v1/endpoints/auth.py
# ============================================================================
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from songly.db.session import get_db
from songly.schemas.user import UserLogin, UserRegister, Token
from songly.services.user_service import user_service
from songly.core.security import create_token

router = APIRouter()

@router.post("/token", response_model=Token)
def login(
    credentials: UserLogin,
    db: Session = Depends(get_db)
):
    """
    Login with { username, password }
    Returns JWT token which can be used to authenticate further requests
    """
    user = user_service.authenticate(db, credentials.username, credentials.password)
    return {"token": create_token(user)}

@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    db: Session = Depends(get_db)
):
    """
    Register a new (non-admin) user account
    Returns JWT token for the new user
    """
    user = user_service.register(db, {**user_data.model_dump(by_alias=True), "isAdmin": False})
    return {"token": create_token(user)}
