# ============================================================================
# FILE: goonj/services/playlist_service.py
# ============================================================================
from typing import List, Optional
from sqlalchemy.orm import Session, selectinload
from goonj.db.models.playlist import Playlist, PlaylistSong
from goonj.db.models.song import Song
from goonj.schemas.playlist import PlaylistCreate
import logging

logger = logging.getLogger(__name__)

class PlaylistError(Exception):
    """Base error for playlist operations that the API maps to a status code"""
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

class PlaylistNotFound(PlaylistError):
    status_code = 404

class SongNotFound(PlaylistError):
    status_code = 404

class PlaylistAccessDenied(PlaylistError):
    status_code = 403

class DuplicatePlaylistSong(PlaylistError):
    status_code = 400

class PlaylistService:
    """Service layer for playlist operations"""

    def create_playlist(self, db: Session, user_id: str, playlist_data: PlaylistCreate) -> Playlist:
        """Create a new playlist for a user"""
        try:
            playlist = Playlist(
                user_id=user_id,
                title=playlist_data.title.strip(),
                is_public=playlist_data.is_public
            )
            db.add(playlist)
            db.commit()
            db.refresh(playlist)
            logger.info(f"Playlist created: {playlist.id} for user {user_id}")
            return playlist
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating playlist: {e}")
            raise

    def get_user_playlists(self, db: Session, user_id: str) -> List[Playlist]:
        """Get all playlists for a user, newest first, songs eagerly loaded"""
        return (
            db.query(Playlist)
            .options(selectinload(Playlist.songs).selectinload(PlaylistSong.song))
            .filter(Playlist.user_id == user_id)
            .order_by(Playlist.created_at.desc())
            .all()
        )

    def get_playlist(self, db: Session, playlist_id: str, user_id: str) -> Playlist:
        """Get a specific playlist, verifying ownership"""
        playlist = db.query(Playlist).filter(Playlist.id == playlist_id).first()
        if not playlist:
            raise PlaylistNotFound("Playlist not found")
        if playlist.user_id != user_id:
            logger.warning(f"User {user_id} tried to access playlist {playlist_id}")
            raise PlaylistAccessDenied("You do not own this playlist")
        return playlist

    def find_entry(self, db: Session, playlist_id: str, song_id: str) -> Optional[PlaylistSong]:
        return db.query(PlaylistSong).filter(
            PlaylistSong.playlist_id == playlist_id,
            PlaylistSong.song_id == song_id
        ).first()

    def add_song_to_playlist(self, db: Session, playlist_id: str, user_id: str, song_id: str) -> PlaylistSong:
        """Append a song to a playlist the user owns; a pair is stored at most once"""
        self.get_playlist(db, playlist_id, user_id)

        song = db.query(Song).filter(Song.id == song_id).first()
        if not song:
            raise SongNotFound("Song not found")

        # Check if song already exists in playlist
        if self.find_entry(db, playlist_id, song_id):
            logger.info(f"Song already in playlist {playlist_id}: {song_id}")
            raise DuplicatePlaylistSong("Song already in playlist")

        try:
            playlist_song = PlaylistSong(playlist_id=playlist_id, song_id=song_id)
            db.add(playlist_song)
            db.commit()
            db.refresh(playlist_song)
            logger.info(f"Song added to playlist {playlist_id}: {song_id}")
            return playlist_song
        except Exception as e:
            db.rollback()
            logger.error(f"Error adding song to playlist: {e}")
            raise

# Create singleton instance
playlist_service = PlaylistService()
