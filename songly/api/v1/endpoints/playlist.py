# ============================================================================
# FILE: songly/api/v1/endpoints/playlist.py
# ============================================================================
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session
from songly.db.session import get_db
from songly.api.dependencies import require_admin
from songly.core.validation import validate
from songly.schemas.playlist import (
    PlaylistCreate,
    PlaylistUpdate,
    PlaylistSearch,
    PlaylistOut,
    PlaylistDetailOut,
    PlaylistListOut,
    PlaylistDeletedOut
)
from songly.services.playlist_service import playlist_service
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("", response_model=PlaylistOut, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_admin)])
def create_playlist(
    playlist_data: PlaylistCreate,
    db: Session = Depends(get_db)
):
    """
    Create a new playlist from { handle, name, description, logoUrl }
    Requires admin
    """
    playlist = playlist_service.create(db, playlist_data.model_dump(by_alias=True))
    return {"playlist": playlist}

@router.get("", response_model=PlaylistListOut)
def list_playlists(
    request: Request,
    db: Session = Depends(get_db)
):
    """
    List playlists ordered by name
    Can filter on nameLike (case-insensitive, partial match)
    """
    filters = validate(dict(request.query_params), PlaylistSearch)
    playlists = playlist_service.find_all(db, filters.model_dump(by_alias=True, exclude_none=True))
    return {"playlists": playlists}

@router.get("/{handle}", response_model=PlaylistDetailOut)
def get_playlist(
    handle: str,
    db: Session = Depends(get_db)
):
    """Get a playlist and its songs"""
    playlist = playlist_service.get(db, handle)
    return {"playlist": playlist}

@router.patch("/{handle}", response_model=PlaylistOut, dependencies=[Depends(require_admin)])
def update_playlist(
    handle: str,
    update_data: PlaylistUpdate,
    db: Session = Depends(get_db)
):
    """
    Update playlist details (name, description, logoUrl)
    Requires admin
    """
    playlist = playlist_service.update(db, handle, update_data.model_dump(by_alias=True, exclude_unset=True))
    return {"playlist": playlist}

@router.delete("/{handle}", response_model=PlaylistDeletedOut, dependencies=[Depends(require_admin)])
def delete_playlist(
    handle: str,
    db: Session = Depends(get_db)
):
    """
    Delete a playlist along with its songs
    Requires admin
    """
    playlist_service.remove(db, handle)
    return {"deleted": handle}
