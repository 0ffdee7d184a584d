# ============================================================================
# FILE: songly/schemas/playlist.py
# ============================================================================
from pydantic import AfterValidator, AnyHttpUrl, BaseModel, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel
from typing import Annotated, List, Optional

_http_url = TypeAdapter(AnyHttpUrl)

def _check_url(value: str) -> str:
    try:
        _http_url.validate_python(value)
    except ValidationError:
        raise ValueError("must be a valid http(s) URL")
    return value

# Validated as a URL but kept verbatim (no normalization)
UrlStr = Annotated[str, AfterValidator(_check_url)]

class PlaylistCreate(BaseModel):
    """Schema for creating a playlist"""
    handle: str = Field(..., min_length=1, max_length=25)
    name: str = Field(..., min_length=1)
    description: str
    logo_url: Optional[UrlStr] = None

    class Config:
        alias_generator = to_camel
        extra = "forbid"

class PlaylistUpdate(BaseModel):
    """Schema for updating a playlist; the handle can never change"""
    name: str = Field(None, min_length=1)
    description: str = None
    logo_url: Optional[UrlStr] = None

    class Config:
        alias_generator = to_camel
        extra = "forbid"

class PlaylistSearch(BaseModel):
    """Query string filters for listing playlists"""
    name_like: Optional[str] = None

    class Config:
        alias_generator = to_camel
        extra = "forbid"

class PlaylistSongResponse(BaseModel):
    """Schema for a song nested in a playlist"""
    id: int
    title: str
    artist: str
    link: str

class PlaylistResponse(BaseModel):
    """Schema for playlist response"""
    handle: str
    name: str
    description: str
    logo_url: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True

class PlaylistDetailResponse(PlaylistResponse):
    """Playlist along with its songs, ordered by id"""
    songs: List[PlaylistSongResponse] = []

class PlaylistOut(BaseModel):
    playlist: PlaylistResponse

class PlaylistDetailOut(BaseModel):
    playlist: PlaylistDetailResponse

class PlaylistListOut(BaseModel):
    playlists: List[PlaylistResponse]

class PlaylistDeletedOut(BaseModel):
    deleted: str
