# ============================================================================
# FILE: goonj/schemas/song.py
# ============================================================================
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

class SongCreate(BaseModel):
    """Schema for uploading a song; missing optional fields get server defaults"""
    title: str = Field(..., min_length=1)
    artist: str = Field(..., min_length=1)
    audio_url: str = Field(..., min_length=1)
    language: Optional[str] = None
    genre: Optional[str] = None
    era: Optional[str] = None
    cover_image_url: Optional[str] = None
    duration_seconds: Optional[int] = Field(None, ge=0)
    lyrics: Optional[str] = None

class SongResponse(BaseModel):
    """Schema for song response"""
    id: str
    title: str
    artist: str
    language: str
    genre: str
    era: str
    audio_url: str
    cover_image_url: str
    duration_seconds: int = 0
    lyrics: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
