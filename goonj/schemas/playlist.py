
# ============================================================================
# FILE: goonj/schemas/playlist.py
# ============================================================================
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from goonj.schemas.song import SongResponse

class PlaylistCreate(BaseModel):
    """Schema for creating a playlist"""
    title: str = Field(..., min_length=1)
    is_public: bool = False

class PlaylistSongAdd(BaseModel):
    """Schema for adding a song to playlist"""
    playlist_id: str
    song_id: str

class PlaylistSongResponse(BaseModel):
    """Junction row, with the linked song when it still exists"""
    id: str
    playlist_id: str
    song_id: str
    song: Optional[SongResponse] = None

    class Config:
        from_attributes = True

class PlaylistResponse(BaseModel):
    """Schema for playlist response"""
    id: str
    title: str
    is_public: bool = False
    user_id: str
    created_at: datetime
    songs: List[PlaylistSongResponse] = []

    class Config:
        from_attributes = True
