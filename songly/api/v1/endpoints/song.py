# ============================================================================
# FILE: songly/api/v1/endpoints/song.py
# ============================================================================
from fastapi import APIRouter, Depends, Path, Request, status
from sqlalchemy.orm import Session
from songly.db.session import get_db
from songly.api.dependencies import require_admin
from songly.core.validation import validate
from songly.schemas.song import (
    SongCreate,
    SongUpdate,
    SongSearch,
    SongOut,
    SongDetailOut,
    SongListOut,
    SongDeletedOut
)
from songly.services.song_service import song_service

# Largest id a 64-bit INTEGER column can hold
MAX_SONG_ID = 2**63 - 1

router = APIRouter()

@router.post("", response_model=SongOut, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_admin)])
def create_song(
    song_data: SongCreate,
    db: Session = Depends(get_db)
):
    """
    Add a song { title, artist, link, playlistHandle } to an existing playlist
    Requires admin
    """
    song = song_service.create(db, song_data.model_dump(by_alias=True))
    return {"song": song}

@router.get("", response_model=SongListOut)
def list_songs(
    request: Request,
    db: Session = Depends(get_db)
):
    """
    List songs with their playlist name
    Can filter on title (case-insensitive, partial match)
    """
    filters = validate(dict(request.query_params), SongSearch)
    songs = song_service.find_all(db, filters.model_dump(exclude_none=True))
    return {"songs": songs}

@router.get("/{song_id}", response_model=SongDetailOut)
def get_song(
    song_id: int = Path(..., le=MAX_SONG_ID),
    db: Session = Depends(get_db)
):
    """Get a song and the playlist it belongs to"""
    song = song_service.get(db, song_id)
    return {"song": song}

@router.patch("/{song_id}", response_model=SongOut, dependencies=[Depends(require_admin)])
def update_song(
    update_data: SongUpdate,
    song_id: int = Path(..., le=MAX_SONG_ID),
    db: Session = Depends(get_db)
):
    """
    Update song details (title, artist, link)
    Requires admin
    """
    song = song_service.update(db, song_id, update_data.model_dump(exclude_unset=True))
    return {"song": song}

@router.delete("/{song_id}", response_model=SongDeletedOut, dependencies=[Depends(require_admin)])
def delete_song(
    song_id: int = Path(..., le=MAX_SONG_ID),
    db: Session = Depends(get_db)
):
    """
    Delete a song
    Requires admin
    """
    song_service.remove(db, song_id)
    return {"deleted": song_id}
