# ============================================================================
# FILE: songly/schemas/song.py
# ============================================================================
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional
from songly.schemas.playlist import PlaylistResponse

class SongCreate(BaseModel):
    """Schema for adding a song to a playlist"""
    title: str = Field(..., min_length=1)
    artist: str = Field(..., min_length=1)
    link: str = Field(..., min_length=1)
    playlist_handle: str = Field(..., min_length=1, max_length=25)

    class Config:
        alias_generator = to_camel
        extra = "forbid"

class SongUpdate(BaseModel):
    """Schema for updating a song; it cannot move to another playlist"""
    title: str = Field(None, min_length=1)
    artist: str = Field(None, min_length=1)
    link: str = Field(None, min_length=1)

    class Config:
        extra = "forbid"

class SongSearch(BaseModel):
    """Query string filters for listing songs"""
    title: Optional[str] = None

    class Config:
        extra = "forbid"

class SongResponse(BaseModel):
    """Schema for song response"""
    id: int
    title: str
    artist: str
    link: str
    playlist_handle: str

    class Config:
        alias_generator = to_camel
        populate_by_name = True

class SongListItem(SongResponse):
    playlist_name: Optional[str] = None

class SongDetailResponse(BaseModel):
    """Song with its parent playlist attached in place of the handle"""
    id: int
    title: str
    artist: str
    link: str
    playlist: Optional[PlaylistResponse] = None

class SongOut(BaseModel):
    song: SongResponse

class SongDetailOut(BaseModel):
    song: SongDetailResponse

class SongListOut(BaseModel):
    songs: List[SongListItem]

class SongDeletedOut(BaseModel):
    deleted: int
