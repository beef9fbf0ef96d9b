"""
Unit tests for the playback session (tick / seek / load orchestration)
"""
import asyncio

import pytest

from fusion_replay.core.session import PlaybackSession
from fusion_replay.recording.cursor import CursorSignal
from fusion_replay.recording.errors import ManifestMissing
from fusion_replay.recording.storage import MemoryStorage

from tests.conftest import BASE_MS, RecordingBuilder, peaked


def run(coro):
    return asyncio.run(coro)


def loaded_session(builder):
    session = PlaybackSession()
    run(session.load(builder.storage()))
    return session


class TestLoad:
    def test_load_assembles_first_frame(self, ten_frames):
        session = loaded_session(ten_frames)
        assert session.loaded
        assert session.frame.ordinal == 0
        assert session.state.retained_tag == session.frame.tag
        assert session.snapshot()["frame_count"] == 10

    def test_failed_load_keeps_previous_recording(self, ten_frames):
        session = loaded_session(ten_frames)
        run(session.seek(3))
        before = session.frame
        with pytest.raises(ManifestMissing):
            run(session.load(MemoryStorage({}, name="empty")))
        assert session.state.current_ordinal == 3
        assert session.frame is before
        assert before.image_refs.color in session.blobs

    def test_new_load_replaces_state_and_releases_images(self, ten_frames):
        session = loaded_session(ten_frames)
        old = session.frame
        other = RecordingBuilder().frames_at([BASE_MS + 5000, BASE_MS + 6000])
        run(session.load(other.storage(name="other")))
        assert session.state.name == "other"
        assert session.state.frame_count == 2
        assert session.state.retained_beam is None
        assert old.image_refs.color not in session.blobs
        assert len(session.blobs) == 1

    def test_non_finite_lidar_row_still_loads(self, builder):
        builder.frame(BASE_MS, lidar=[("inf", 1.0, 10, 1), ("nan", 2.0, 10, 1), (0, 1.0, 255, 1)])
        session = loaded_session(builder)
        assert session.frame is not None
        assert len(session.frame.range_points) == 1

    def test_idle_session(self):
        session = PlaybackSession()
        assert run(session.seek(2)) is CursorSignal.NOT_LOADED
        assert run(session.step()) is CursorSignal.NOT_LOADED
        assert run(session.tick()) is None
        assert run(session.refresh()) is None
        assert session.play() is CursorSignal.NOT_LOADED
        assert session.snapshot()["loaded"] is False


class TestPlayback:
    def test_tick_is_noop_while_paused(self, ten_frames):
        session = loaded_session(ten_frames)
        assert run(session.tick()) is None
        assert session.frame.ordinal == 0

    def test_tick_advances_and_releases_previous_images(self, ten_frames):
        session = loaded_session(ten_frames)
        first = session.frame
        session.play()
        assert run(session.tick()) is CursorSignal.ADVANCED
        assert session.frame.ordinal == 1
        assert first.image_refs.color not in session.blobs
        assert first.image_refs.depth not in session.blobs
        assert len(session.blobs) == 2

    def test_end_of_recording_pauses(self, builder):
        builder.frames_at([BASE_MS, BASE_MS + 33])
        session = loaded_session(builder)
        session.play()
        assert run(session.tick()) is CursorSignal.ADVANCED
        assert run(session.tick()) is CursorSignal.END_OF_RECORDING
        assert not session.cursor.playing
        assert session.frame.ordinal == 1

    def test_tick_during_assembly_is_dropped(self, ten_frames):
        session = loaded_session(ten_frames)
        session.play()

        async def two_ticks():
            return await asyncio.gather(session.tick(), session.tick())

        first, second = run(two_ticks())
        assert first is CursorSignal.ADVANCED
        assert second is None
        assert session.dropped_ticks == 1
        assert session.frame.ordinal == 1

    def test_superseded_assembly_is_discarded(self, ten_frames):
        session = loaded_session(ten_frames)

        async def step_then_seek():
            return await asyncio.gather(session.step(), session.seek(5))

        run(step_then_seek())
        assert session.frame.ordinal == 5
        assert session.state.current_ordinal == 5
        # only the live frame's images are held
        assert len(session.blobs) == 2
        assert not session.busy

    def test_seek_asymmetry(self, ten_frames):
        session = loaded_session(ten_frames)
        run(session.seek(3))
        assert session.frame.tag is not None
        assert session.frame.beam is not None
        beam_before = session.frame.beam
        run(session.seek(9))
        assert session.frame.tag is None
        assert session.frame.beam == beam_before

    def test_retention_across_ticks(self, builder):
        times = [BASE_MS + i * 500 for i in range(4)]
        builder.frames_at(times)
        builder.tag(times[1], x=7.0)
        builder.beam(times[1], peaked(12))
        session = loaded_session(builder)
        assert session.frame.tag is None and session.frame.beam is None
        session.play()
        seen = []
        for _ in range(3):
            run(session.tick())
            seen.append((session.frame.tag.x, session.frame.beam.peak_index))
        assert seen == [(7.0, 12)] * 3

    def test_close_releases_everything(self, ten_frames):
        session = loaded_session(ten_frames)
        session.close()
        assert not session.loaded
        assert session.frame is None
        assert len(session.blobs) == 0
