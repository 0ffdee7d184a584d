# ============================================================================
# FILE: songly/db/models/playlist.py
# ============================================================================
from sqlalchemy import Column, String, Text
from sqlalchemy.orm import relationship
from songly.db.base import Base

class Playlist(Base):
    """Playlist identified by an immutable handle"""
    __tablename__ = "playlists"

    handle = Column(String(25), primary_key=True)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    logo_url = Column(Text, nullable=True)

    # Relationships
    songs = relationship("Song", back_populates="playlist", passive_deletes=True)
