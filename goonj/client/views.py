# ============================================================================
# FILE: goonj/client/views.py
# Screen view-models: plain data the UI renders, including empty states
# ============================================================================
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence
from goonj.client.favorites import Favorites
from goonj.schemas.playlist import PlaylistResponse
from goonj.schemas.song import SongResponse

CATEGORIES = ["All", "Assamese", "Hindi", "English"]
DEFAULT_UPLOAD_LANGUAGE = "Assamese"

class FormError(ValueError):
    """Client-side validation failed before any request was made"""

    def __init__(self, title: str, message: str):
        super().__init__(message)
        self.title = title
        self.message = message

@dataclass
class SongRow:
    song: SongResponse
    is_current: bool = False
    is_favorite: bool = False

@dataclass
class SongListView:
    rows: List[SongRow]
    empty_message: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.rows

@dataclass
class PlaylistRow:
    playlist: PlaylistResponse
    count_label: str

@dataclass
class PlaylistListView:
    rows: List[PlaylistRow]
    empty_message: Optional[str] = None

@dataclass
class PlaylistDetailView:
    title: str
    count_label: str
    rows: List[SongRow] = field(default_factory=list)
    empty_message: Optional[str] = None

def song_count_label(count: int) -> str:
    return f"{count} {'song' if count == 1 else 'songs'}"

def _rows(songs: Sequence[SongResponse], current_song_id: Optional[str], favorites: Optional[Favorites]) -> List[SongRow]:
    return [
        SongRow(
            song=song,
            is_current=song.id == current_song_id,
            is_favorite=bool(favorites and favorites.is_favorite(song.id))
        )
        for song in songs
    ]

def home_view(
    songs: Sequence[SongResponse],
    category: str = "All",
    current_song_id: Optional[str] = None,
    favorites: Optional[Favorites] = None
) -> SongListView:
    """Songs in a language category (case-insensitive), or every song for 'All'"""
    if category == "All":
        filtered = list(songs)
    else:
        wanted = category.lower()
        filtered = [song for song in songs if (song.language or "").lower() == wanted]
    rows = _rows(filtered, current_song_id, favorites)
    empty_message = None if rows else f"No {category} songs found in database."
    return SongListView(rows=rows, empty_message=empty_message)

def search_view(
    songs: Sequence[SongResponse],
    query: str,
    favorites: Optional[Favorites] = None
) -> SongListView:
    """Case-insensitive title/artist match; a blank query shows nothing"""
    needle = query.strip().lower()
    if not needle:
        return SongListView(rows=[], empty_message="Start typing to find music.")
    matches = [
        song for song in songs
        if (song.title and needle in song.title.lower()) or (song.artist and needle in song.artist.lower())
    ]
    rows = _rows(matches, None, favorites)
    return SongListView(rows=rows, empty_message=None if rows else "No results found.")

def favorites_view(
    songs: Sequence[SongResponse],
    favorites: Favorites,
    current_song_id: Optional[str] = None
) -> SongListView:
    rows = _rows(favorites.filter(songs), current_song_id, favorites)
    return SongListView(rows=rows, empty_message=None if rows else "No favorites yet.")

def playlist_list_view(playlists: Sequence[PlaylistResponse]) -> PlaylistListView:
    rows = [PlaylistRow(playlist=playlist, count_label=song_count_label(len(playlist.songs))) for playlist in playlists]
    empty_message = None if rows else "You haven't created any playlists yet."
    return PlaylistListView(rows=rows, empty_message=empty_message)

def playlist_detail_view(playlist: PlaylistResponse, current_song_id: Optional[str] = None) -> PlaylistDetailView:
    """Songs behind a playlist's junction rows; rows whose song is gone are skipped"""
    songs = [entry.song for entry in playlist.songs if entry.song is not None]
    rows = _rows(songs, current_song_id, None)
    return PlaylistDetailView(
        title=playlist.title,
        count_label=song_count_label(len(rows)),
        rows=rows,
        empty_message=None if rows else "This playlist is empty."
    )

def empty_upload_form() -> Dict[str, str]:
    return {
        "title": "",
        "artist": "",
        "language": DEFAULT_UPLOAD_LANGUAGE,
        "audio_url": "",
        "cover_image_url": "",
        "lyrics": "",
    }

def validate_upload_form(form: Dict[str, str]) -> Dict[str, str]:
    """Strip the form and make sure title, artist and audio_url are present"""
    cleaned = {key: (value.strip() if isinstance(value, str) else value) for key, value in form.items()}
    if not cleaned.get("title") or not cleaned.get("artist") or not cleaned.get("audio_url"):
        raise FormError("Validation Error", "Title, Artist, and Audio URL are required.")
    return cleaned

def validate_login_form(email: str, password: str):
    if not email.strip() or not password:
        raise FormError("Error", "Email and password are required.")

def validate_register_form(username: str, email: str, password: str):
    if not username.strip() or not email.strip() or not password:
        raise FormError("Error", "All fields are required.")

def validate_playlist_title(title: str) -> str:
    cleaned = title.strip()
    if not cleaned:
        raise FormError("Error", "Playlist title cannot be empty.")
    return cleaned
