# ============================================================================
# FILE: goonj/client/audio.py
# Media layer: one AudioHandle per loaded track, created by an AudioBackend
# ============================================================================
import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional
import logging

logger = logging.getLogger(__name__)

@dataclass
class PlaybackStatus:
    """Snapshot pushed by the media layer while a track is loaded"""
    position_seconds: float = 0.0
    duration_seconds: Optional[float] = None
    is_playing: bool = False
    did_just_finish: bool = False

StatusCallback = Callable[[PlaybackStatus], None]

class PlaybackError(Exception):
    """The media layer could not load or drive an audio resource"""

class AudioHandle(ABC):
    """A loaded audio resource; must be unloaded exactly once"""

    @property
    @abstractmethod
    def duration(self) -> Optional[float]:
        """Track length in seconds, None until the media layer knows it"""

    @abstractmethod
    async def play(self) -> None: ...

    @abstractmethod
    async def pause(self) -> None: ...

    @abstractmethod
    async def set_position(self, seconds: float) -> None: ...

    @abstractmethod
    async def unload(self) -> None: ...

class AudioBackend(ABC):
    """Factory for audio handles addressed by URL"""

    @abstractmethod
    async def load(self, url: str, on_status: StatusCallback, should_play: bool = True) -> AudioHandle:
        """Acquire a resource for `url`; raises PlaybackError when it cannot"""


class MpvAudioHandle(AudioHandle):
    """Audio handle backed by a dedicated python-mpv player"""

    def __init__(self, player, loop: asyncio.AbstractEventLoop, on_status: StatusCallback):
        self.player = player
        self._loop = loop
        self._on_status = on_status
        self._finished = False

        # Bind events
        self.player.observe_property("time-pos", self._handle_time_update)
        self.player.observe_property("eof-reached", self._handle_eof)

    @property
    def duration(self) -> Optional[float]:
        return self.player.duration

    def _status(self, did_just_finish: bool = False) -> PlaybackStatus:
        return PlaybackStatus(
            position_seconds=self.player.time_pos or 0.0,
            duration_seconds=self.player.duration,
            is_playing=not self.player.pause,
            did_just_finish=did_just_finish
        )

    def _emit(self, status: PlaybackStatus):
        # mpv observers run on mpv's event thread
        self._loop.call_soon_threadsafe(self._on_status, status)

    def _handle_time_update(self, name, value):
        if value is not None:
            self._emit(self._status())

    def _handle_eof(self, name, value):
        if value and not self._finished:
            self._finished = True
            self._emit(self._status(did_just_finish=True))

    async def play(self):
        self.player.pause = False

    async def pause(self):
        self.player.pause = True

    async def set_position(self, seconds: float):
        self._finished = False
        try:
            await asyncio.to_thread(self.player.seek, seconds, reference="absolute")
        except Exception as e:
            raise PlaybackError(f"Seek failed: {e}") from e

    async def unload(self):
        await asyncio.to_thread(self.player.terminate)


class MpvAudioBackend(AudioBackend):
    """
    Streams URLs through libmpv (install the `player` extra)
    The mpv module is imported lazily so the rest of the client works without libmpv
    """

    def __init__(self, load_timeout: float = 15.0):
        self.load_timeout = load_timeout

    def _open(self, url: str, should_play: bool):
        import mpv

        # vo='null' because we are audio-only
        player = mpv.MPV(vo="null", video=False, ytdl=False, keep_open="yes")
        try:
            player.pause = not should_play
            player.play(url)
            player.wait_for_property("duration", lambda value: value is not None, timeout=self.load_timeout)
        except Exception:
            player.terminate()
            raise
        return player

    async def load(self, url: str, on_status: StatusCallback, should_play: bool = True) -> AudioHandle:
        try:
            player = await asyncio.to_thread(self._open, url, should_play)
        except Exception as e:
            logger.error(f"Could not load {url}: {e}")
            raise PlaybackError(f"Could not load audio from {url}") from e
        return MpvAudioHandle(player, asyncio.get_running_loop(), on_status)
