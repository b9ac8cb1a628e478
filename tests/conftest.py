import os

# Configure the app before it is imported: no Redis, throwaway database
os.environ["REDIS_URL"] = ""
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"

import asyncio
from datetime import datetime, timedelta
from typing import Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from goonj.client.audio import AudioBackend, AudioHandle, PlaybackError, PlaybackStatus
from goonj.db.base import Base
from goonj.db.models.song import Song
from goonj.db.session import get_db
from goonj.main import app
from goonj.schemas.song import SongResponse


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def override_db(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client(override_db):
    return TestClient(app)


@pytest.fixture
def make_song(db_session):
    """Insert a song directly, spacing created_at so ordering is deterministic"""
    counter = {"n": 0}

    def _make_song(**overrides) -> Song:
        counter["n"] += 1
        values = dict(
            title=f"Song {counter['n']}",
            artist="Zubeen Garg",
            language="Assamese",
            genre="Pop",
            era="2000s",
            audio_url=f"https://cdn.goonj.test/{counter['n']}.mp3",
            cover_image_url="https://images.goonj.test/cover.jpg",
            duration_seconds=200,
            created_at=datetime(2024, 1, 1) + timedelta(minutes=counter["n"]),
        )
        values.update(overrides)
        song = Song(**values)
        db_session.add(song)
        db_session.commit()
        db_session.refresh(song)
        return song

    return _make_song


def register(client, username="asha", email="asha@gmail.com", password="s3cret-pass"):
    response = client.post(
        "/api/auth/register",
        json={"username": username, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.fixture
def auth_headers(client):
    payload = register(client)
    return {"Authorization": f"Bearer {payload['token']}"}


def song_model(index: int, **overrides) -> SongResponse:
    values = dict(
        id=f"song-{index}",
        title=f"Track {index}",
        artist="Arijit Singh",
        language="Hindi",
        genre="Bollywood",
        era="2010s",
        audio_url=f"https://cdn.goonj.test/{index}.mp3",
        cover_image_url="https://images.goonj.test/cover.jpg",
        duration_seconds=180,
        created_at=datetime(2024, 1, 1),
    )
    values.update(overrides)
    return SongResponse(**values)


class FakeHandle(AudioHandle):
    def __init__(self, url, on_status, duration: Optional[float] = 200.0):
        self.url = url
        self.on_status = on_status
        self._duration = duration
        self.playing = True
        self.position = 0.0
        self.unloaded = False

    @property
    def duration(self):
        return self._duration

    async def play(self):
        self.playing = True

    async def pause(self):
        self.playing = False

    async def set_position(self, seconds):
        self.position = seconds

    async def unload(self):
        self.unloaded = True

    def emit(self, position, finished=False):
        self.on_status(PlaybackStatus(
            position_seconds=position,
            duration_seconds=self._duration,
            is_playing=self.playing,
            did_just_finish=finished,
        ))


class FakeBackend(AudioBackend):
    def __init__(self, failing_urls=(), duration: Optional[float] = 200.0):
        self.failing_urls = set(failing_urls)
        self.duration = duration
        self.handles = []

    async def load(self, url, on_status, should_play=True):
        # yield like a real media layer would
        await asyncio.sleep(0)
        if url in self.failing_urls:
            raise PlaybackError(f"cannot open {url}")
        handle = FakeHandle(url, on_status, self.duration)
        handle.playing = should_play
        self.handles.append(handle)
        return handle

    @property
    def live_handles(self):
        return [handle for handle in self.handles if not handle.unloaded]


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def notices():
    return []
