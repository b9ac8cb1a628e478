# ============================================================================
# FILE: goonj/db/models/song.py
# ============================================================================
import uuid
from sqlalchemy import Column, Integer, String, DateTime, Text
from sqlalchemy.orm import relationship
from datetime import datetime
from goonj.db.base import Base

def new_id() -> str:
    return str(uuid.uuid4())

class Song(Base):
    """Song uploaded to the catalogue"""
    __tablename__ = "songs"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String, nullable=False)
    artist = Column(String, nullable=False)
    language = Column(String, nullable=False, index=True)
    genre = Column(String, nullable=False, index=True)
    era = Column(String, nullable=False)
    audio_url = Column(String, nullable=False)
    cover_image_url = Column(String, nullable=False)
    duration_seconds = Column(Integer, nullable=False, default=0)
    lyrics = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)

    # Relationships
    playlist_entries = relationship("PlaylistSong", back_populates="song", cascade="all, delete-orphan")
