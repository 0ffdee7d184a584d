# ============================================================================
# FILE: songly/services/playlist_service.py
# ============================================================================
from typing import Any, Dict, List, Mapping, Optional, Tuple
from sqlalchemy import text
from sqlalchemy.orm import Session
from songly.core.errors import BadRequestError, NotFoundError
from songly.services.sql import placeholder, positional_params, select_columns, sql_for_partial_update
import logging

logger = logging.getLogger(__name__)

# API field name -> column name, where they differ
PLAYLIST_COLUMNS = {"logoUrl": "logo_url"}
PLAYLIST_FIELDS = ("handle", "name", "description", "logoUrl")
PLAYLIST_SONG_FIELDS = ("id", "title", "artist", "link")

class PlaylistService:
    """Service layer for playlist operations"""

    def create(self, db: Session, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Create a playlist from {handle, name, description, logoUrl}

        Raises BadRequestError if the handle is already taken.
        """
        handle = data["handle"]
        duplicate = db.execute(
            text("SELECT handle FROM playlists WHERE handle = :p1"),
            positional_params([handle]),
        ).first()
        if duplicate:
            raise BadRequestError(f"Duplicate playlist: {handle}")

        try:
            row = db.execute(
                text(f"""
                    INSERT INTO playlists (handle, name, description, logo_url)
                    VALUES (:p1, :p2, :p3, :p4)
                    RETURNING {select_columns(PLAYLIST_FIELDS, PLAYLIST_COLUMNS)}"""),
                positional_params([handle, data["name"], data["description"], data.get("logoUrl")]),
            ).mappings().one()
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating playlist {handle}: {e}")
            raise

        logger.info(f"Playlist created: {handle}")
        return dict(row)

    @staticmethod
    def _filter_where_builder(criteria: Mapping[str, Any]) -> Tuple[str, List[Any]]:
        """
        Build the WHERE condition for playlist searches

        criteria (all optional):
        - nameLike: case-insensitive, partial match on name

        Returns ("lower(name) LIKE :p1", ["%apple%"]), or ("", []) when no
        filter applies.
        """
        where_parts = []
        values = []

        name_like = criteria.get("nameLike")
        if name_like:
            values.append(f"%{name_like.lower()}%")
            where_parts.append(f"lower(name) LIKE {placeholder(len(values))}")

        return " AND ".join(where_parts), values

    def find_all(self, db: Session, filters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        """Get all playlists ordered by name, optionally filtered"""
        where, values = self._filter_where_builder(filters or {})
        where_sql = f"WHERE {where}" if where else ""

        rows = db.execute(
            text(f"""
                SELECT {select_columns(PLAYLIST_FIELDS, PLAYLIST_COLUMNS)}
                FROM playlists {where_sql}
                ORDER BY name"""),
            positional_params(values),
        ).mappings().all()
        return [dict(row) for row in rows]

    def get(self, db: Session, handle: str) -> Dict[str, Any]:
        """
        Get a playlist with its songs

        Returns {handle, name, description, logoUrl, songs}
        where songs is [{id, title, artist, link}, ...] ordered by id.
        """
        row = db.execute(
            text(f"""
                SELECT {select_columns(PLAYLIST_FIELDS, PLAYLIST_COLUMNS)}
                FROM playlists
                WHERE handle = :p1"""),
            positional_params([handle]),
        ).mappings().first()
        if not row:
            raise NotFoundError(f"No playlist: {handle}")

        playlist = dict(row)
        songs = db.execute(
            text(f"""
                SELECT {select_columns(PLAYLIST_SONG_FIELDS, {})}
                FROM songs
                WHERE playlist_handle = :p1
                ORDER BY id"""),
            positional_params([handle]),
        ).mappings().all()
        playlist["songs"] = [dict(song) for song in songs]
        return playlist

    def update(self, db: Session, handle: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Partial update: only the provided fields of {name, description, logoUrl} change

        Raises BadRequestError on empty data, NotFoundError if no such playlist.
        """
        set_cols, values = sql_for_partial_update(data, PLAYLIST_COLUMNS)
        handle_idx = placeholder(len(values) + 1)

        try:
            row = db.execute(
                text(f"""
                    UPDATE playlists
                    SET {set_cols}
                    WHERE handle = {handle_idx}
                    RETURNING {select_columns(PLAYLIST_FIELDS, PLAYLIST_COLUMNS)}"""),
                positional_params([*values, handle]),
            ).mappings().first()
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Error updating playlist {handle}: {e}")
            raise

        if not row:
            raise NotFoundError(f"No playlist: {handle}")

        logger.info(f"Playlist updated: {handle}")
        return dict(row)

    def remove(self, db: Session, handle: str) -> None:
        """Delete a playlist (its songs go with it); NotFoundError if missing"""
        try:
            row = db.execute(
                text("DELETE FROM playlists WHERE handle = :p1 RETURNING handle"),
                positional_params([handle]),
            ).first()
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Error deleting playlist {handle}: {e}")
            raise

        if not row:
            raise NotFoundError(f"No playlist: {handle}")

        logger.info(f"Playlist deleted: {handle}")

# Create singleton instance
playlist_service = PlaylistService()
