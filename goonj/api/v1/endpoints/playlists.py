# ============================================================================
# FILE: goonj/api/v1/endpoints/playlists.py
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from goonj.db.session import get_db
from goonj.api.dependencies import require_current_user
from goonj.schemas.envelope import Envelope, success
from goonj.schemas.playlist import (
    PlaylistCreate,
    PlaylistResponse,
    PlaylistSongAdd,
    PlaylistSongResponse
)
from goonj.services.playlist_service import playlist_service, PlaylistError
from goonj.db.models.user import User
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("", response_model=Envelope[List[PlaylistResponse]])
async def get_my_playlists(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Get all playlists for the current user, with their songs
    Requires authentication
    """
    try:
        playlists = playlist_service.get_user_playlists(db, current_user.id)
    except Exception as e:
        logger.error(f"Fetch playlists error: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch playlists")
    return success(playlists)

@router.post("", response_model=Envelope[PlaylistResponse], status_code=status.HTTP_201_CREATED)
async def create_playlist(
    playlist_data: PlaylistCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Create a new playlist
    Requires authentication
    """
    if not playlist_data.title.strip():
        raise HTTPException(status_code=400, detail="Playlist title cannot be empty")
    try:
        playlist = playlist_service.create_playlist(db, current_user.id, playlist_data)
    except Exception as e:
        logger.error(f"Create playlist error: {e}")
        raise HTTPException(status_code=500, detail="Failed to create playlist")
    return success(playlist)

@router.post("/add-song", response_model=Envelope[PlaylistSongResponse], status_code=status.HTTP_201_CREATED)
async def add_song_to_playlist(
    song_data: PlaylistSongAdd,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Add a song to a playlist
    Requires authentication and ownership, duplicates are rejected
    """
    try:
        entry = playlist_service.add_song_to_playlist(
            db, song_data.playlist_id, current_user.id, song_data.song_id
        )
    except PlaylistError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Add song to playlist error: {e}")
        raise HTTPException(status_code=500, detail="Failed to add song to playlist")
    return success(entry)
