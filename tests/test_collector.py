"""Tests for incremental keyframe collection."""
import pytest

from chapterize.collector import KeyFrameCollector
from chapterize.exceptions import (
    DoubleResolutionError,
    MalformedRecordError,
    UpstreamProcessError
)
from chapterize.frames import KeyFrame

TIMES = [0, 50, 200, 210, 400]


def feed_in_chunks(collector, data: bytes, size: int) -> None:
    for offset in range(0, len(data), size):
        collector.feed(data[offset:offset + size])


def test_single_chunk_collects_keyframes_only(probe_output):
    collector = KeyFrameCollector()
    collector.feed(probe_output(TIMES))
    assert [k.pts_time for k in collector.keyframes] == TIMES
    assert collector.keyframes[0] == KeyFrame(0, 4096)


@pytest.mark.parametrize("size", [1, 2, 3, 7, 8, 13, 64, 251])
def test_chunk_boundary_independence(probe_output, size):
    """Any chunking yields the same keyframes as one big chunk."""
    data = probe_output(TIMES)
    whole = KeyFrameCollector()
    whole.feed(data)

    chunked = KeyFrameCollector()
    feed_in_chunks(chunked, data, size)
    assert chunked.keyframes == whole.keyframes


def test_incomplete_block_waits_for_more_input(frame_text):
    block = frame_text(1, "12.5", "99").encode()
    collector = KeyFrameCollector()
    collector.feed(block[:-3])
    assert collector.keyframes == []
    collector.feed(block[-3:])
    assert collector.keyframes == [KeyFrame(12, 99)]


def test_split_utf8_sequence(frame_text):
    data = ("[FRAME]\nkey_frame=1\ntitle=é\npts_time=3\npkt_pos=1\n[/FRAME]\n").encode("utf-8")
    split = data.index("é".encode("utf-8")) + 1
    collector = KeyFrameCollector()
    collector.feed(data[:split])
    collector.feed(data[split:])
    assert collector.keyframes == [KeyFrame(3, 1)]


def test_finish_resolves_with_selected_boundaries(probe_output):
    collector = KeyFrameCollector()
    collector.feed(probe_output(TIMES))
    collector.finish()
    assert [k.pts_time for k in collector.result(timeout=1)] == [200, 400]


def test_finish_without_complete_block():
    collector = KeyFrameCollector()
    collector.feed(b"[FRAME]\nkey_frame=1\npts_time=4")
    collector.finish()
    assert collector.result(timeout=1) == []
    assert collector.keyframes == []


def test_single_keyframe_yields_no_boundaries(probe_output):
    collector = KeyFrameCollector()
    collector.feed(probe_output([500]))
    collector.finish()
    assert collector.result(timeout=1) == []


def test_progress_callback_per_keyframe(probe_output):
    seen = []
    collector = KeyFrameCollector(on_keyframe=seen.append)
    feed_in_chunks(collector, probe_output(TIMES), 5)
    assert [k.pts_time for k in seen] == TIMES


def test_abort_fails_completion():
    collector = KeyFrameCollector()
    collector.feed(b"[FRAME]\nkey_frame=1\n")
    collector.abort(UpstreamProcessError("exit 1"))
    with pytest.raises(UpstreamProcessError):
        collector.result(timeout=1)


def test_malformed_keyframe_raises_and_fails_completion(frame_text, probe_output):
    collector = KeyFrameCollector()
    data = frame_text(1, None, "100").encode() + probe_output([10])
    with pytest.raises(MalformedRecordError):
        collector.feed(data)
    assert collector.done.done()
    with pytest.raises(MalformedRecordError):
        collector.result(timeout=1)


def test_malformed_non_keyframe_is_ignored(frame_text, probe_output):
    collector = KeyFrameCollector()
    collector.feed(frame_text(0, None, None).encode() + probe_output([7]))
    assert [k.pts_time for k in collector.keyframes] == [7]


def test_double_resolution_is_an_error():
    collector = KeyFrameCollector()
    collector.finish()
    with pytest.raises(DoubleResolutionError):
        collector.finish()
    with pytest.raises(DoubleResolutionError):
        collector.abort(UpstreamProcessError("late"))
    with pytest.raises(DoubleResolutionError):
        collector.feed(b"[FRAME]")


def test_custom_min_interval(probe_output):
    collector = KeyFrameCollector(min_interval=40)
    collector.feed(probe_output(TIMES))
    collector.finish()
    assert [k.pts_time for k in collector.result(timeout=1)] == [50, 200, 400]


def test_negative_min_interval_rejected():
    with pytest.raises(ValueError):
        KeyFrameCollector(min_interval=-1)


def test_zero_min_interval_keeps_chapters_non_empty():
    """Keyframes truncating to the same second never form a zero-length chapter."""
    data = b"".join(
        b"[FRAME]\nkey_frame=1\npts_time=%s\npkt_pos=1\n[/FRAME]\n" % t
        for t in (b"0.000000", b"12.040000", b"12.500000", b"13.000000")
    )
    collector = KeyFrameCollector(min_interval=0)
    collector.feed(data)
    collector.finish()
    assert [k.pts_time for k in collector.result(timeout=1)] == [12, 13]
