# ============================================================================
# FILE: goonj/api/v1/endpoints/songs.py
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from goonj.db.session import get_db
from goonj.schemas.envelope import Envelope, MessageEnvelope, success, message
from goonj.schemas.song import SongCreate, SongResponse
from goonj.services.song_service import song_service
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("", response_model=Envelope[List[SongResponse]])
async def list_songs(
    language: Optional[str] = Query(None, description="Exact language filter"),
    genre: Optional[str] = Query(None, description="Exact genre filter"),
    db: Session = Depends(get_db)
):
    """
    List songs, newest first
    Available to all users
    """
    try:
        songs = song_service.list_songs(db, language, genre)
    except Exception as e:
        logger.error(f"Fetch songs error: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch songs")
    return success(songs)

@router.post("", response_model=Envelope[SongResponse], status_code=status.HTTP_201_CREATED)
async def upload_song(
    song_data: SongCreate,
    db: Session = Depends(get_db)
):
    """
    Add a song to the catalogue
    title, artist and audio_url are required, everything else is defaulted
    """
    try:
        song = song_service.create_song(db, song_data)
    except Exception as e:
        logger.error(f"Upload error: {e}")
        raise HTTPException(status_code=500, detail="Upload failed")
    return success(song)

@router.delete("/{song_id}", response_model=MessageEnvelope)
async def delete_song(
    song_id: str,
    db: Session = Depends(get_db)
):
    """Delete a song and every playlist entry pointing at it"""
    try:
        deleted = song_service.delete_song(db, song_id)
    except Exception as e:
        logger.error(f"Delete song error: {e}")
        raise HTTPException(status_code=500, detail="Delete failed")
    if not deleted:
        raise HTTPException(status_code=404, detail="Song not found")
    return message("Song deleted")
