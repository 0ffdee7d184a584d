# ============================================================================
# FILE: songly/api/v1/endpoints/user.py
# ============================================================================
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from songly.db.session import get_db
from songly.api.dependencies import require_admin, require_correct_user_or_admin
from songly.schemas.user import (
    UserCreate,
    UserUpdate,
    UserOut,
    UserListOut,
    UserCreatedOut,
    UserDeletedOut
)
from songly.services.user_service import user_service
from songly.core.security import create_token

router = APIRouter()

@router.post("", response_model=UserCreatedOut, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_admin)])
def create_user(
    user_data: UserCreate,
    db: Session = Depends(get_db)
):
    """
    Add a new user; unlike registration, the new user may be an admin
    Returns the user and a token for them
    Requires admin
    """
    user = user_service.register(db, user_data.model_dump(by_alias=True))
    token = create_token(user)
    return {"user": user, "token": token}

@router.get("", response_model=UserListOut, dependencies=[Depends(require_admin)])
def list_users(
    db: Session = Depends(get_db)
):
    """
    List all users
    Requires admin
    """
    users = user_service.find_all(db)
    return {"users": users}

@router.get("/{username}", response_model=UserOut,
            dependencies=[Depends(require_correct_user_or_admin)])
def get_user(
    username: str,
    db: Session = Depends(get_db)
):
    """
    Get user information
    Requires admin or the same user as :username
    """
    user = user_service.get(db, username)
    return {"user": user}

@router.patch("/{username}", response_model=UserOut,
              dependencies=[Depends(require_correct_user_or_admin)])
def update_user(
    username: str,
    update_data: UserUpdate,
    db: Session = Depends(get_db)
):
    """
    Update firstName, lastName, password or email
    Requires admin or the same user as :username
    """
    user = user_service.update(db, username, update_data.model_dump(by_alias=True, exclude_unset=True))
    return {"user": user}

@router.delete("/{username}", response_model=UserDeletedOut,
               dependencies=[Depends(require_correct_user_or_admin)])
def delete_user(
    username: str,
    db: Session = Depends(get_db)
):
    """
    Delete a user
    Requires admin or the same user as :username
    """
    user_service.remove(db, username)
    return {"deleted": username}
