# ============================================================================
# FILE: songly/db/models/song.py
# ============================================================================
from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from songly.db.base import Base

class Song(Base):
    """Song belonging to exactly one playlist"""
    __tablename__ = "songs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    artist = Column(Text, nullable=False)
    link = Column(Text, nullable=False)
    # Deleting a playlist deletes its songs
    playlist_handle = Column(
        String(25),
        ForeignKey("playlists.handle", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships
    playlist = relationship("Playlist", back_populates="songs")
