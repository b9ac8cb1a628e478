# ============================================================================
# FILE: goonj/client/api.py
# Thin async HTTP client for the Goonj REST API
# ============================================================================
import httpx
from typing import Any, Dict, List, Optional
from pydantic import TypeAdapter, ValidationError
from goonj.client.auth import AuthSession
from goonj.schemas.playlist import PlaylistResponse, PlaylistSongResponse
from goonj.schemas.song import SongResponse
from goonj.schemas.user import AuthPayload
import logging

logger = logging.getLogger(__name__)

_songs_adapter = TypeAdapter(List[SongResponse])
_playlists_adapter = TypeAdapter(List[PlaylistResponse])

class ApiError(Exception):
    """Raised for network failures, error envelopes and malformed payloads"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

class GoonjApiClient:
    """
    Wrapper around httpx.AsyncClient that speaks the {status, data|message} envelope
    Every payload is validated against the API schemas before it is returned
    """

    def __init__(
        self,
        base_url: str,
        auth: AuthSession,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.auth = auth
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport
        )

    async def close(self):
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    async def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        headers = kwargs.pop("headers", {})
        headers.update(self.auth.headers())
        try:
            response = await self._client.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise ApiError("Check your network connection.") from e

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if response.is_error or body.get("status") == "error":
            detail = body.get("message") or f"Request failed with status {response.status_code}"
            logger.warning(f"{method} {path} -> {response.status_code}: {detail}")
            raise ApiError(detail, response.status_code)
        return body

    def _validate(self, adapter_or_model, payload: Any):
        try:
            if isinstance(adapter_or_model, TypeAdapter):
                return adapter_or_model.validate_python(payload)
            return adapter_or_model.model_validate(payload)
        except ValidationError as e:
            logger.error(f"Malformed payload from API: {e}")
            raise ApiError("Received malformed data from the server.") from e

    # Health

    async def health(self) -> str:
        body = await self._request("GET", "/health")
        return body.get("message", "")

    # Songs

    async def fetch_songs(self, language: Optional[str] = None, genre: Optional[str] = None) -> List[SongResponse]:
        params = {key: value for key, value in (("language", language), ("genre", genre)) if value}
        body = await self._request("GET", "/songs", params=params)
        songs = self._validate(_songs_adapter, body.get("data"))
        logger.info(f"Fetched {len(songs)} songs")
        return songs

    async def upload_song(self, form: Dict[str, Any]) -> SongResponse:
        payload = {key: value for key, value in form.items() if value not in (None, "")}
        body = await self._request("POST", "/songs", json=payload)
        return self._validate(SongResponse, body.get("data"))

    async def delete_song(self, song_id: str) -> str:
        body = await self._request("DELETE", f"/songs/{song_id}")
        return body.get("message", "")

    # Playlists

    async def fetch_playlists(self) -> List[PlaylistResponse]:
        body = await self._request("GET", "/playlists")
        return self._validate(_playlists_adapter, body.get("data"))

    async def create_playlist(self, title: str, is_public: bool = False) -> PlaylistResponse:
        body = await self._request("POST", "/playlists", json={"title": title, "is_public": is_public})
        return self._validate(PlaylistResponse, body.get("data"))

    async def add_song_to_playlist(self, playlist_id: str, song_id: str) -> PlaylistSongResponse:
        body = await self._request(
            "POST", "/playlists/add-song", json={"playlist_id": playlist_id, "song_id": song_id}
        )
        return self._validate(PlaylistSongResponse, body.get("data"))

    # Auth

    async def register(self, username: str, email: str, password: str) -> AuthPayload:
        body = await self._request(
            "POST", "/auth/register", json={"username": username, "email": email, "password": password}
        )
        return self._validate(AuthPayload, body.get("data"))

    async def login(self, email: str, password: str) -> AuthPayload:
        body = await self._request("POST", "/auth/login", json={"email": email, "password": password})
        return self._validate(AuthPayload, body.get("data"))
