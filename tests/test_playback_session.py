import asyncio

import pytest

from goonj.client.audio import PlaybackError
from goonj.client.playback import NEXT, PREV, PlaybackSession, PlaybackState, next_index
from conftest import FakeBackend, song_model


async def settle():
    for _ in range(20):
        await asyncio.sleep(0)


@pytest.fixture
def songs():
    return [song_model(0), song_model(1), song_model(2)]


@pytest.fixture
def session(backend, notices):
    return PlaybackSession(backend, notify=lambda title, text: notices.append((title, text)), sleep_tick_seconds=0.01)


@pytest.mark.parametrize("current, direction, expected", [
    (0, NEXT, 1),
    (2, NEXT, 0),
    (0, PREV, 2),
    (1, PREV, 0),
    (-1, NEXT, 0),
    (-1, PREV, 2),
])
def test_next_index_wraps_at_both_ends(current, direction, expected):
    assert next_index(current, 3, direction) == expected


def test_next_index_rejects_bad_input():
    with pytest.raises(ValueError):
        next_index(0, 0, NEXT)
    with pytest.raises(ValueError):
        next_index(0, 3, "sideways")


async def test_new_session_is_idle(session):
    assert session.state is PlaybackState.IDLE
    assert session.current_song is None
    assert session.current_index == -1


async def test_play_loads_and_starts_the_track(session, backend, songs):
    assert await session.play(songs[0]) is True

    assert session.state is PlaybackState.PLAYING
    assert session.current_song.id == songs[0].id
    assert [handle.url for handle in backend.live_handles] == [songs[0].audio_url]
    assert session.duration_seconds == 200.0


async def test_play_releases_previous_resource_first(session, backend, songs):
    await session.play(songs[0])
    await session.play(songs[1])

    assert backend.handles[0].unloaded is True
    assert len(backend.live_handles) == 1
    assert session.current_song.id == songs[1].id


async def test_rapid_plays_leave_a_single_live_resource(session, backend, songs):
    await asyncio.gather(*(session.play(song) for song in songs))

    assert len(backend.live_handles) == 1
    assert backend.live_handles[0].url == songs[2].audio_url
    assert session.current_song.id == songs[2].id


async def test_toggle_pauses_and_resumes(session, backend, songs):
    await session.play(songs[0])
    handle = backend.live_handles[0]

    assert await session.toggle() is PlaybackState.PAUSED
    assert handle.playing is False
    assert await session.toggle() is PlaybackState.PLAYING
    assert handle.playing is True


async def test_toggle_when_idle_does_nothing(session):
    assert await session.toggle() is PlaybackState.IDLE


async def test_seek_positions_proportionally(session, backend, songs):
    await session.play(songs[0])

    assert await session.seek(0.5) is True
    assert backend.live_handles[0].position == 100.0
    assert session.position_seconds == 100.0

    await session.seek(1.5)
    assert backend.live_handles[0].position == 200.0


async def test_seek_is_ignored_when_idle(session):
    assert await session.seek(0.5) is False


async def test_seek_needs_a_known_duration():
    session = PlaybackSession(FakeBackend(duration=None))
    await session.play(song_model(0, duration_seconds=0))
    assert await session.seek(0.5) is False


async def test_progress_updates_are_suppressed_during_seek_gesture(session, backend, songs):
    await session.play(songs[0])
    handle = backend.live_handles[0]

    handle.emit(10.0)
    assert session.position_seconds == 10.0

    session.begin_seek()
    handle.emit(50.0)
    assert session.position_seconds == 10.0

    await session.seek(0.25)
    assert session.is_seeking is False
    handle.emit(60.0)
    assert session.position_seconds == 60.0
    assert session.progress == pytest.approx(0.3)


async def test_skip_next_from_last_wraps_to_first(session, songs):
    session.set_queue(songs)
    await session.play(songs[2])

    await session.skip(NEXT)

    assert session.current_index == 0
    assert session.current_song.id == songs[0].id


async def test_skip_prev_from_first_wraps_to_last(session, songs):
    session.set_queue(songs)
    await session.play(songs[0])

    await session.skip(PREV)

    assert session.current_index == 2


async def test_skip_with_empty_queue_is_a_no_op(session, songs):
    await session.play(songs[0])
    assert await session.skip(NEXT) is False
    assert session.current_song.id == songs[0].id


async def test_natural_completion_advances_to_next_track(session, backend, songs):
    session.set_queue(songs)
    await session.play(songs[1])

    backend.live_handles[0].emit(200.0, finished=True)
    await settle()

    assert session.current_song.id == songs[2].id
    assert session.state is PlaybackState.PLAYING
    assert len(backend.live_handles) == 1


async def test_completion_without_queue_pauses_at_the_end(session, backend, songs):
    await session.play(songs[0])

    backend.live_handles[0].emit(200.0, finished=True)
    await settle()

    assert session.state is PlaybackState.PAUSED
    assert session.current_song.id == songs[0].id


async def test_callbacks_from_a_replaced_track_are_ignored(session, backend, songs):
    session.set_queue(songs)
    await session.play(songs[0])
    stale = backend.handles[0]
    await session.play(songs[1])

    stale.emit(42.0)
    stale.emit(200.0, finished=True)
    await settle()

    assert session.position_seconds == 0.0
    assert session.current_song.id == songs[1].id


async def test_load_failure_notifies_and_keeps_logical_state(notices, songs):
    broken = song_model(9, title="Broken", audio_url="https://cdn.goonj.test/broken.mp3")
    backend = FakeBackend(failing_urls={broken.audio_url})
    session = PlaybackSession(backend, notify=lambda title, text: notices.append((title, text)))

    await session.play(songs[0])
    assert await session.play(broken) is False

    assert notices == [("Playback Error", "Could not play \"Broken\".")]
    assert session.current_song.id == songs[0].id
    assert backend.live_handles == []
    assert session.state is PlaybackState.IDLE


async def test_load_failure_from_idle_stays_idle(notices):
    broken = song_model(9, audio_url="https://cdn.goonj.test/broken.mp3")
    session = PlaybackSession(FakeBackend(failing_urls={broken.audio_url}), notify=lambda *args: notices.append(args))

    assert await session.play(broken) is False
    assert session.state is PlaybackState.IDLE
    assert session.current_song is None
    assert len(notices) == 1


async def test_sleep_timer_pauses_playback_and_disarms(session, songs):
    await session.play(songs[0])

    session.set_sleep_timer(2)
    assert session.sleep_timer_minutes == 2
    await asyncio.sleep(0.1)

    assert session.state is PlaybackState.PAUSED
    assert session.sleep_timer_minutes is None


async def test_cancelled_sleep_timer_does_not_pause(session, songs):
    await session.play(songs[0])

    session.set_sleep_timer(2)
    session.cancel_sleep_timer()
    await asyncio.sleep(0.05)

    assert session.state is PlaybackState.PLAYING
    assert session.sleep_timer_minutes is None


async def test_sleep_timer_requires_positive_minutes(session):
    with pytest.raises(ValueError):
        session.set_sleep_timer(0)


async def test_close_releases_the_resource(session, backend, songs):
    await session.play(songs[0])
    session.set_sleep_timer(5)

    await session.close()

    assert backend.live_handles == []
    assert session.state is PlaybackState.IDLE
    assert session.sleep_timer_minutes is None


async def test_rearming_the_sleep_timer_replaces_the_running_one(session, songs):
    await session.play(songs[0])

    session.set_sleep_timer(1)
    session.set_sleep_timer(20)
    await asyncio.sleep(0.05)

    assert session.state is PlaybackState.PLAYING
    assert session.sleep_timer_minutes is not None
    assert session.sleep_timer_minutes > 1


async def test_close_waits_for_background_tasks(session, backend, songs):
    session.set_queue(songs)
    await session.play(songs[0])
    session.set_sleep_timer(5)
    sleep_task = session._sleep_task
    backend.live_handles[0].emit(200.0, finished=True)
    pending = list(session._pending)

    await session.close()

    assert pending and all(task.done() for task in pending)
    assert sleep_task.done()
    assert backend.live_handles == []


async def failing_transport(*args):
    raise PlaybackError("device lost")


async def test_toggle_failure_notifies_and_keeps_state(session, backend, songs, notices):
    await session.play(songs[0])
    backend.live_handles[0].pause = failing_transport

    assert await session.toggle() is PlaybackState.PLAYING
    assert notices == [("Playback Error", "Could not change playback.")]


async def test_seek_failure_notifies_and_ends_gesture(session, backend, songs, notices):
    await session.play(songs[0])
    backend.live_handles[0].set_position = failing_transport
    session.begin_seek()

    assert await session.seek(0.5) is False
    assert session.is_seeking is False
    assert session.position_seconds == 0.0
    assert notices == [("Playback Error", "Could not seek.")]
