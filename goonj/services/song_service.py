# ============================================================================
# FILE: goonj/services/song_service.py
# ============================================================================
import json
from typing import List, Dict, Optional
from sqlalchemy.orm import Session
from goonj.core.cache import cache
from goonj.config import settings
from goonj.db.models.song import Song
from goonj.schemas.song import SongCreate, SongResponse
import logging

logger = logging.getLogger(__name__)

CACHE_PREFIX = "songs"

class SongService:
    """Service layer for the song catalogue"""

    def _cache_key(self, language: Optional[str], genre: Optional[str]) -> str:
        # JSON keeps filter values such as "*" or "a:b" from colliding
        return f"{CACHE_PREFIX}:{json.dumps([language or None, genre or None])}"

    def list_songs(self, db: Session, language: Optional[str] = None, genre: Optional[str] = None) -> List[Dict]:
        """
        List songs newest first, optionally filtered by exact language/genre
        Listings are cached in Redis until the catalogue changes
        """
        cache_key = self._cache_key(language, genre)
        cached_songs = cache.get_cache(cache_key)
        if cached_songs is not None:
            logger.info(f"Cache hit for song listing: {cache_key}")
            return cached_songs

        query = db.query(Song)
        if language:
            query = query.filter(Song.language == language)
        if genre:
            query = query.filter(Song.genre == genre)
        songs = query.order_by(Song.created_at.desc()).all()

        formatted_songs = [SongResponse.model_validate(song).model_dump(mode="json") for song in songs]
        cache.set_cache(cache_key, formatted_songs, settings.CACHE_EXPIRE_SECONDS)
        return formatted_songs

    def get_song(self, db: Session, song_id: str) -> Optional[Song]:
        return db.query(Song).filter(Song.id == song_id).first()

    def create_song(self, db: Session, song_data: SongCreate) -> Song:
        """Create a song, filling unspecified fields with catalogue defaults"""
        try:
            song = Song(
                title=song_data.title,
                artist=song_data.artist,
                audio_url=song_data.audio_url,
                language=song_data.language or settings.DEFAULT_LANGUAGE,
                genre=song_data.genre or settings.DEFAULT_GENRE,
                era=song_data.era or settings.DEFAULT_ERA,
                cover_image_url=song_data.cover_image_url or settings.DEFAULT_COVER_IMAGE_URL,
                duration_seconds=song_data.duration_seconds or 0,
                lyrics=song_data.lyrics or None
            )
            db.add(song)
            db.commit()
            db.refresh(song)
            logger.info(f"Song created: {song.id} ({song.title} by {song.artist})")
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating song: {e}")
            raise

        cache.delete_pattern(f"{CACHE_PREFIX}:*")
        return song

    def delete_song(self, db: Session, song_id: str) -> bool:
        """Delete a song and its playlist entries; False if it does not exist"""
        song = self.get_song(db, song_id)
        if not song:
            return False

        try:
            db.delete(song)
            db.commit()
            logger.info(f"Song deleted: {song_id}")
        except Exception as e:
            db.rollback()
            logger.error(f"Error deleting song: {e}")
            raise

        cache.delete_pattern(f"{CACHE_PREFIX}:*")
        return True

# Create singleton instance
song_service = SongService()
