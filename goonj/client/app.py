# ============================================================================
# FILE: goonj/client/app.py
# Wires the HTTP client, local storage and playback session together.
# Every failure is caught here and turned into a user-visible notice.
# ============================================================================
import asyncio
from typing import Dict, List, Optional, Sequence
import httpx
from goonj.client.api import ApiError, GoonjApiClient
from goonj.client.audio import AudioBackend, MpvAudioBackend
from goonj.client.auth import AuthSession
from goonj.client.favorites import Favorites
from goonj.client.playback import Notifier, PlaybackSession, log_notice
from goonj.client.storage import LocalStorage
from goonj.client.views import (
    FormError,
    validate_login_form,
    validate_playlist_title,
    validate_register_form,
    validate_upload_form,
)
from goonj.config import ClientSettings
from goonj.schemas.playlist import PlaylistResponse, PlaylistSongResponse
from goonj.schemas.song import SongResponse
import logging

logger = logging.getLogger(__name__)

class GoonjClientApp:
    """Client-side application state shared by every screen"""

    def __init__(
        self,
        api: GoonjApiClient,
        auth: AuthSession,
        favorites: Favorites,
        session: PlaybackSession,
        notify: Optional[Notifier] = None
    ):
        self.api = api
        self.auth = auth
        self.favorites = favorites
        self.session = session
        self.notify = notify or log_notice
        self.songs: List[SongResponse] = []
        self.playlists: List[PlaylistResponse] = []

    @classmethod
    def from_settings(
        cls,
        settings: Optional[ClientSettings] = None,
        backend: Optional[AudioBackend] = None,
        notify: Optional[Notifier] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "GoonjClientApp":
        settings = settings or ClientSettings()
        notify = notify or log_notice
        storage = LocalStorage(settings.STORAGE_PATH)
        auth = AuthSession(storage)
        api = GoonjApiClient(settings.API_URL, auth, timeout=settings.REQUEST_TIMEOUT, transport=transport)
        session = PlaybackSession(
            backend or MpvAudioBackend(),
            notify=notify,
            sleep_tick_seconds=settings.SLEEP_TIMER_TICK_SECONDS
        )
        return cls(api, auth, Favorites(storage), session, notify=notify)

    async def start(self):
        """Restore login, then fetch songs and favorites together"""
        await self.auth.load()
        await asyncio.gather(self.refresh_songs(), self.favorites.load())

    async def close(self):
        await self.session.close()
        await self.api.close()

    # Library

    async def refresh_songs(self, language: Optional[str] = None, genre: Optional[str] = None) -> bool:
        try:
            self.songs = await self.api.fetch_songs(language, genre)
        except ApiError as e:
            logger.error(f"Fetch songs failed: {e.message}")
            self.notify("Error", "Could not load songs.")
            return False
        if self.session.current_song is None or not self.session.queue:
            self.session.set_queue(self.songs)
        return True

    async def toggle_favorite(self, song_id: str) -> bool:
        return await self.favorites.toggle(song_id)

    async def upload(self, form: Dict[str, str]) -> Optional[SongResponse]:
        try:
            payload = validate_upload_form(form)
            song = await self.api.upload_song(payload)
        except FormError as e:
            self.notify(e.title, e.message)
            return None
        except ApiError:
            self.notify("Error", "Upload failed. Check your server connection.")
            return None
        self.notify("Success", "Goonj updated with new track!")
        await self.refresh_songs()
        return song

    async def delete_song(self, song_id: str) -> bool:
        try:
            await self.api.delete_song(song_id)
        except ApiError as e:
            self.notify("Error", e.message)
            return False
        await self.refresh_songs()
        return True

    # Playback

    async def play(self, song: SongResponse, queue: Optional[Sequence[SongResponse]] = None) -> bool:
        """Play `song`; skip order follows `queue`, or the whole library"""
        self.session.set_queue(queue if queue is not None else self.songs)
        return await self.session.play(song)

    # Playlists

    async def refresh_playlists(self) -> bool:
        try:
            self.playlists = await self.api.fetch_playlists()
        except ApiError as e:
            logger.error(f"Fetch playlists failed: {e.message}")
            self.notify("Error", "Could not load playlists.")
            return False
        return True

    async def create_playlist(self, title: str, is_public: bool = False) -> Optional[PlaylistResponse]:
        try:
            playlist = await self.api.create_playlist(validate_playlist_title(title), is_public)
        except FormError as e:
            self.notify(e.title, e.message)
            return None
        except ApiError:
            self.notify("Error", "Failed to create playlist.")
            return None
        await self.refresh_playlists()
        return playlist

    async def add_to_playlist(self, playlist_id: str, song_id: str) -> Optional[PlaylistSongResponse]:
        try:
            entry = await self.api.add_song_to_playlist(playlist_id, song_id)
        except ApiError as e:
            self.notify("Error", e.message)
            return None
        await self.refresh_playlists()
        return entry

    # Auth

    async def login(self, email: str, password: str) -> bool:
        try:
            validate_login_form(email, password)
            payload = await self.api.login(email.strip(), password)
        except FormError as e:
            self.notify(e.title, e.message)
            return False
        except ApiError as e:
            self.notify("Login Failed", e.message)
            return False
        await self.auth.login(payload.token, payload.user)
        return True

    async def register(self, username: str, email: str, password: str) -> bool:
        try:
            validate_register_form(username, email, password)
            payload = await self.api.register(username.strip(), email.strip(), password)
        except FormError as e:
            self.notify(e.title, e.message)
            return False
        except ApiError as e:
            self.notify("Registration Failed", e.message)
            return False
        await self.auth.login(payload.token, payload.user)
        return True

    async def logout(self):
        await self.auth.logout()
        self.playlists = []
