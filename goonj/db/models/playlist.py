
# ============================================================================
# FILE: goonj/db/models/playlist.py
# ============================================================================
from sqlalchemy import Column, String, DateTime, ForeignKey, Boolean, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from goonj.db.base import Base
from goonj.db.models.song import Song, new_id
from goonj.db.models.user import User  # noqa: F401

class Playlist(Base):
    """Playlist owned by exactly one user"""
    __tablename__ = "playlists"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String, nullable=False)
    is_public = Column(Boolean, nullable=False, default=False)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    user = relationship("User", back_populates="playlists")
    songs = relationship(
        "PlaylistSong",
        back_populates="playlist",
        cascade="all, delete-orphan",
        order_by="PlaylistSong.added_at"
    )

class PlaylistSong(Base):
    """Junction table linking one playlist to one song"""
    __tablename__ = "playlist_songs"
    __table_args__ = (
        UniqueConstraint("playlist_id", "song_id", name="uq_playlist_song"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    playlist_id = Column(String(36), ForeignKey("playlists.id"), nullable=False)
    song_id = Column(String(36), ForeignKey("songs.id"), nullable=False)
    added_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    playlist = relationship("Playlist", back_populates="songs")
    song = relationship(Song, back_populates="playlist_entries")
