"""Pytest configuration for songly tests.

Every test gets a fresh in-memory SQLite database seeded with three
playlists, three songs on c1 and three regular users.
"""

import os

# Settings are read at import time; fast hashing and no on-disk database
os.environ.setdefault("BCRYPT_WORK_FACTOR", "4")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "songly-test-secret-key-not-for-production")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from songly.core.security import create_token
from songly.db.base import init_db
from songly.db.session import build_engine, get_db
from songly.main import app
from songly.services.playlist_service import playlist_service
from songly.services.song_service import song_service
from songly.services.user_service import user_service


def seed(db: Session) -> list[int]:
    """Insert the shared fixture rows; returns the song ids in insertion order."""
    for n in (1, 2, 3):
        playlist_service.create(db, {
            "handle": f"c{n}",
            "name": f"C{n}",
            "description": f"Desc{n}",
            "logoUrl": f"http://c{n}.img",
        })

    song_ids = []
    for title, artist in (("Song1", "ArtistA"), ("Song2", "ArtistB"), ("Song3", "ArtistB")):
        song = song_service.create(db, {
            "title": title,
            "artist": artist,
            "link": "soundcloud.com",
            "playlistHandle": "c1",
        })
        song_ids.append(song["id"])

    for n in (1, 2, 3):
        user_service.register(db, {
            "username": f"u{n}",
            "firstName": f"U{n}F",
            "lastName": f"U{n}L",
            "email": f"user{n}@user.com",
            "password": f"password{n}",
            "isAdmin": False,
        })

    return song_ids


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = Session(bind=engine)
    session.info["song_ids"] = seed(session)
    yield session
    session.close()


@pytest.fixture
def song_ids(db):
    return db.info["song_ids"]


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def u1_token():
    return create_token({"username": "u1", "isAdmin": False})


@pytest.fixture
def u2_token():
    return create_token({"username": "u2", "isAdmin": False})


@pytest.fixture
def admin_token():
    return create_token({"username": "admin", "isAdmin": True})


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_header():
    """Build an Authorization header from a token."""
    return auth
