# ============================================================================
# FILE: goonj/client/playback.py
# ============================================================================
"""
Playback session: the single active audio resource and the "now playing" state.

States are idle, loaded-paused and loaded-playing. A session holds an audio
handle exactly when it is not idle. Commands (play, toggle, seek, skip) run one
at a time per session, so releasing the old resource and acquiring the next one
never interleave with another command.
"""
import asyncio
from enum import Enum
from typing import Callable, Iterable, List, Optional, Set
from goonj.client.audio import AudioBackend, AudioHandle, PlaybackError, PlaybackStatus
from goonj.schemas.song import SongResponse
import logging

logger = logging.getLogger(__name__)

NEXT = "next"
PREV = "prev"

Notifier = Callable[[str, str], None]

class PlaybackState(str, Enum):
    IDLE = "idle"
    PAUSED = "loaded-paused"
    PLAYING = "loaded-playing"

def next_index(current: int, length: int, direction: str) -> int:
    """
    Index to skip to from `current` in a list of `length` songs, wrapping at both ends
    A current index of -1 (nothing from the list playing) starts from the first or last song
    """
    if length <= 0:
        raise ValueError("Cannot skip within an empty song list")
    if direction not in (NEXT, PREV):
        raise ValueError(f"Unknown skip direction: {direction}")
    if current < 0 or current >= length:
        return 0 if direction == NEXT else length - 1
    step = 1 if direction == NEXT else -1
    return (current + step) % length

def log_notice(title: str, text: str):
    logger.warning(f"{title}: {text}")

class PlaybackSession:
    """Owns one audio handle at a time and mediates track transitions"""

    def __init__(
        self,
        backend: AudioBackend,
        notify: Optional[Notifier] = None,
        sleep_tick_seconds: float = 60.0
    ):
        self.backend = backend
        self.notify = notify or log_notice
        self.sleep_tick_seconds = sleep_tick_seconds

        self.state = PlaybackState.IDLE
        self.current_song: Optional[SongResponse] = None
        self.queue: List[SongResponse] = []
        self.position_seconds = 0.0
        self.duration_seconds: Optional[float] = None
        self.is_seeking = False
        self.sleep_timer_minutes: Optional[int] = None

        self._handle: Optional[AudioHandle] = None
        self._generation = 0
        self._lock = asyncio.Lock()
        self._sleep_task: Optional[asyncio.Task] = None
        self._pending: Set[asyncio.Task] = set()

    # Derived state

    @property
    def is_playing(self) -> bool:
        return self.state is PlaybackState.PLAYING

    @property
    def is_idle(self) -> bool:
        return self.state is PlaybackState.IDLE

    @property
    def current_index(self) -> int:
        if self.current_song is None:
            return -1
        for index, song in enumerate(self.queue):
            if song.id == self.current_song.id:
                return index
        return -1

    @property
    def progress(self) -> float:
        """Position as a fraction of the duration, 0 when unknown"""
        if not self.duration_seconds:
            return 0.0
        return min(max(self.position_seconds / self.duration_seconds, 0.0), 1.0)

    def set_queue(self, songs: Iterable[SongResponse]):
        self.queue = list(songs)

    # Commands

    async def play(self, song: SongResponse) -> bool:
        """Replace the active resource with one for `song`; False if it could not load"""
        async with self._lock:
            return await self._play(song)

    async def _play(self, song: SongResponse) -> bool:
        self._generation += 1
        generation = self._generation

        previous = self._handle
        if previous is not None:
            self._handle = None
            self.state = PlaybackState.IDLE
            try:
                await previous.unload()
            except PlaybackError as e:
                logger.warning(f"Releasing previous track failed: {e}")

        try:
            handle = await self.backend.load(song.audio_url, self._status_listener(generation))
        except PlaybackError as e:
            logger.error(f"Playback error for {song.id}: {e}")
            self.notify("Playback Error", f"Could not play \"{song.title}\".")
            return False

        self._handle = handle
        self.current_song = song
        self.position_seconds = 0.0
        self.duration_seconds = handle.duration or (song.duration_seconds or None)
        self.is_seeking = False
        self.state = PlaybackState.PLAYING
        logger.info(f"Now playing: {song.title} by {song.artist}")
        return True

    async def toggle(self) -> PlaybackState:
        """Pause if playing, resume if paused, nothing when idle"""
        async with self._lock:
            if self._handle is None:
                return self.state
            try:
                if self.state is PlaybackState.PLAYING:
                    await self._handle.pause()
                    self.state = PlaybackState.PAUSED
                else:
                    await self._handle.play()
                    self.state = PlaybackState.PLAYING
            except PlaybackError as e:
                logger.error(f"Toggle failed for {self.current_song.id}: {e}")
                self.notify("Playback Error", "Could not change playback.")
            return self.state

    def begin_seek(self):
        """A seek gesture started; progress updates are ignored until it ends"""
        if self._handle is not None:
            self.is_seeking = True

    def cancel_seek(self):
        self.is_seeking = False

    async def seek(self, fraction: float) -> bool:
        """Move to `fraction` of the known duration; ends any seek gesture"""
        async with self._lock:
            try:
                if self._handle is None:
                    return False
                duration = self._handle.duration or self.duration_seconds
                if not duration:
                    return False
                target = min(max(fraction, 0.0), 1.0) * duration
                try:
                    await self._handle.set_position(target)
                except PlaybackError as e:
                    logger.error(f"Seek failed: {e}")
                    self.notify("Playback Error", "Could not seek.")
                    return False
                self.position_seconds = target
                self.duration_seconds = duration
                return True
            finally:
                self.is_seeking = False

    async def skip(self, direction: str = NEXT) -> bool:
        async with self._lock:
            return await self._skip(direction)

    async def _skip(self, direction: str) -> bool:
        if not self.queue:
            return False
        target = next_index(self.current_index, len(self.queue), direction)
        return await self._play(self.queue[target])

    # Media layer callbacks

    def _status_listener(self, generation: int):
        def on_status(status: PlaybackStatus):
            if generation != self._generation:
                # superseded by a newer play()
                return
            if status.duration_seconds:
                self.duration_seconds = status.duration_seconds
            if status.did_just_finish:
                self._spawn(self._finish(generation))
                return
            if not self.is_seeking:
                self.position_seconds = status.position_seconds
        return on_status

    async def _finish(self, generation: int):
        async with self._lock:
            if generation != self._generation:
                return
            if not self.queue:
                self.state = PlaybackState.PAUSED
                self.position_seconds = self.duration_seconds or self.position_seconds
                return
            await self._skip(NEXT)

    def _spawn(self, coro):
        task = asyncio.get_running_loop().create_task(coro)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    # Sleep timer

    def set_sleep_timer(self, minutes: int):
        """Pause playback after `minutes` ticks; replaces any armed timer"""
        if minutes <= 0:
            raise ValueError("Sleep timer needs a positive number of minutes")
        self.cancel_sleep_timer()
        self.sleep_timer_minutes = minutes
        self._sleep_task = asyncio.get_running_loop().create_task(self._run_sleep_timer())
        logger.info(f"Sleep timer set for {minutes} minutes")

    def cancel_sleep_timer(self):
        if self._sleep_task is not None and not self._sleep_task.done():
            self._sleep_task.cancel()
        self._sleep_task = None
        self.sleep_timer_minutes = None

    async def _run_sleep_timer(self):
        while self.sleep_timer_minutes:
            await asyncio.sleep(self.sleep_tick_seconds)
            self.sleep_timer_minutes -= 1

        async with self._lock:
            if self._handle is not None and self.state is PlaybackState.PLAYING:
                try:
                    await self._handle.pause()
                    self.state = PlaybackState.PAUSED
                    logger.info("Sleep timer finished, playback paused")
                except PlaybackError as e:
                    logger.error(f"Sleep timer could not pause: {e}")
                    self.notify("Playback Error", "Could not change playback.")

        if self._sleep_task is asyncio.current_task():
            self._sleep_task = None
            self.sleep_timer_minutes = None

    # Teardown

    async def close(self):
        tasks = list(self._pending)
        if self._sleep_task is not None:
            tasks.append(self._sleep_task)
        self.cancel_sleep_timer()
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        async with self._lock:
            self._generation += 1
            handle, self._handle = self._handle, None
            self.state = PlaybackState.IDLE
            if handle is not None:
                await handle.unload()
