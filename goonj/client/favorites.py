# ============================================================================
# FILE: goonj/client/favorites.py
# ============================================================================
import asyncio
from typing import Iterable, List, Set
from goonj.client.storage import LocalStorage, FAVORITES_KEY
from goonj.schemas.song import SongResponse
import logging

logger = logging.getLogger(__name__)

class Favorites:
    """Set of favorite song ids kept in local storage, independent of the server"""

    def __init__(self, storage: LocalStorage):
        self.storage = storage
        self.ids: Set[str] = set()
        self._lock = asyncio.Lock()

    async def load(self) -> Set[str]:
        stored = await asyncio.to_thread(self.storage.get_json, FAVORITES_KEY, [])
        self.ids = {str(song_id) for song_id in stored} if isinstance(stored, list) else set()
        return set(self.ids)

    async def toggle(self, song_id: str) -> bool:
        """Flip membership of a song id and persist; returns the new membership"""
        # writes land in toggle order so the file always matches the last toggle
        async with self._lock:
            if song_id in self.ids:
                self.ids.discard(song_id)
                is_favorite = False
            else:
                self.ids.add(song_id)
                is_favorite = True
            await asyncio.to_thread(self.storage.set_json, FAVORITES_KEY, sorted(self.ids))
        logger.info(f"Favorite {'added' if is_favorite else 'removed'}: {song_id}")
        return is_favorite

    def is_favorite(self, song_id: str) -> bool:
        return song_id in self.ids

    def filter(self, songs: Iterable[SongResponse]) -> List[SongResponse]:
        """Songs that are favorites; ids of songs no longer listed are ignored"""
        return [song for song in songs if song.id in self.ids]
