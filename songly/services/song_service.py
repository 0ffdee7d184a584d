# ============================================================================
# FILE: songly/services/song_service.py
# ============================================================================
from typing import Any, Dict, List, Mapping, Optional, Tuple
from sqlalchemy import text
from sqlalchemy.orm import Session
from songly.core.errors import NotFoundError
from songly.services.playlist_service import PLAYLIST_COLUMNS, PLAYLIST_FIELDS
from songly.services.sql import placeholder, positional_params, select_columns, sql_for_partial_update
import logging

logger = logging.getLogger(__name__)

SONG_COLUMNS = {"playlistHandle": "playlist_handle"}
SONG_FIELDS = ("id", "title", "artist", "link", "playlistHandle")

class SongService:
    """Service layer for song operations"""

    def create(self, db: Session, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Add a song from {title, artist, link, playlistHandle}

        Raises NotFoundError if the playlist does not exist; nothing is inserted.
        """
        playlist_handle = data["playlistHandle"]
        playlist = db.execute(
            text("SELECT handle FROM playlists WHERE handle = :p1"),
            positional_params([playlist_handle]),
        ).first()
        if not playlist:
            raise NotFoundError(f"No playlist: {playlist_handle}")

        try:
            row = db.execute(
                text(f"""
                    INSERT INTO songs (title, artist, link, playlist_handle)
                    VALUES (:p1, :p2, :p3, :p4)
                    RETURNING {select_columns(SONG_FIELDS, SONG_COLUMNS)}"""),
                positional_params([data["title"], data["artist"], data["link"], playlist_handle]),
            ).mappings().one()
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating song in {playlist_handle}: {e}")
            raise

        logger.info(f"Song {row['id']} added to playlist {playlist_handle}")
        return dict(row)

    @staticmethod
    def _filter_where_builder(criteria: Mapping[str, Any]) -> Tuple[str, List[Any]]:
        """
        Build the WHERE condition for song searches

        criteria (all optional):
        - title: case-insensitive, partial match on title
        """
        where_parts = []
        values = []

        title = criteria.get("title")
        if title:
            values.append(f"%{title.lower()}%")
            where_parts.append(f"lower(s.title) LIKE {placeholder(len(values))}")

        return " AND ".join(where_parts), values

    def find_all(self, db: Session, filters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        """Get all songs with their playlist name, optionally filtered by title"""
        where, values = self._filter_where_builder(filters or {})
        where_sql = f"WHERE {where}" if where else ""

        rows = db.execute(
            text(f"""
                SELECT {select_columns(SONG_FIELDS, SONG_COLUMNS, table="s")},
                       p.name AS "playlistName"
                FROM songs s
                LEFT JOIN playlists p ON p.handle = s.playlist_handle
                {where_sql}
                ORDER BY s.id"""),
            positional_params(values),
        ).mappings().all()
        return [dict(row) for row in rows]

    def get(self, db: Session, song_id: int) -> Dict[str, Any]:
        """
        Get a song with its playlist

        Returns {id, title, artist, link, playlist}; playlistHandle is dropped
        once the playlist is attached.
        """
        row = db.execute(
            text(f"""
                SELECT {select_columns(SONG_FIELDS, SONG_COLUMNS)}
                FROM songs
                WHERE id = :p1"""),
            positional_params([song_id]),
        ).mappings().first()
        if not row:
            raise NotFoundError(f"No song: {song_id}")

        song = dict(row)
        playlist = db.execute(
            text(f"""
                SELECT {select_columns(PLAYLIST_FIELDS, PLAYLIST_COLUMNS)}
                FROM playlists
                WHERE handle = :p1"""),
            positional_params([song.pop("playlistHandle")]),
        ).mappings().first()
        song["playlist"] = dict(playlist) if playlist else None
        return song

    def update(self, db: Session, song_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Partial update of {title, artist, link}

        Raises BadRequestError on empty data, NotFoundError if no such song.
        """
        set_cols, values = sql_for_partial_update(data, SONG_COLUMNS)
        id_idx = placeholder(len(values) + 1)

        try:
            row = db.execute(
                text(f"""
                    UPDATE songs
                    SET {set_cols}
                    WHERE id = {id_idx}
                    RETURNING {select_columns(SONG_FIELDS, SONG_COLUMNS)}"""),
                positional_params([*values, song_id]),
            ).mappings().first()
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Error updating song {song_id}: {e}")
            raise

        if not row:
            raise NotFoundError(f"No song: {song_id}")

        logger.info(f"Song updated: {song_id}")
        return dict(row)

    def remove(self, db: Session, song_id: int) -> None:
        """Delete a song; NotFoundError if missing"""
        try:
            row = db.execute(
                text("DELETE FROM songs WHERE id = :p1 RETURNING id"),
                positional_params([song_id]),
            ).first()
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Error deleting song {song_id}: {e}")
            raise

        if not row:
            raise NotFoundError(f"No song: {song_id}")

        logger.info(f"Song deleted: {song_id}")

# Create singleton instance
song_service = SongService()
