"""Incremental keyframe collection from a chunked ffprobe output stream

Responsibilities:
- Buffer decoded text until a complete [FRAME]...[/FRAME] block is present
- Keep only blocks flagged as keyframes and parse them into KeyFrame records
- Hand the spaced-out keyframe list to a waiting consumer exactly once
"""

import codecs
import logging
from concurrent.futures import Future, InvalidStateError
from typing import Callable, List, Optional

from .chapters import select_boundaries
from .config import CHAPTER_MIN_INTERVAL
from .exceptions import DoubleResolutionError, MalformedRecordError
from .frames import FRAME_CLOSE, FRAME_OPEN, KeyFrame, is_keyframe_block, parse_frame_record

logger = logging.getLogger(__name__)

class KeyFrameCollector:
    """
    Consumes ffprobe -show_frames output one chunk at a time.

    Chunks may split a frame block (or a UTF-8 sequence) anywhere; a block
    is only handled once both of its markers are buffered. feed() must be
    called from a single producer, in arrival order.

    Attributes:
        keyframes (List[KeyFrame]): Keyframes seen so far, in arrival order
        min_interval (int): Minimum spacing in seconds between chapter marks
    """
    def __init__(self, min_interval: int = CHAPTER_MIN_INTERVAL,
                 on_keyframe: Optional[Callable[[KeyFrame], None]] = None):
        if min_interval < 0:
            raise ValueError(f"min_interval must be >= 0, got {min_interval}")
        self.min_interval = min_interval
        self.keyframes: List[KeyFrame] = []
        self._on_keyframe = on_keyframe
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""
        # Offset in _buffer where the next [/FRAME] search resumes
        self._scan_from = 0
        self._done: Future = Future()

    @property
    def done(self) -> Future:
        """Completion value: the spaced-out keyframes, or the failure"""
        return self._done

    def feed(self, chunk: bytes) -> None:
        """
        Append a chunk of raw ffprobe output and consume every complete block.

        Raises:
            MalformedRecordError: If a keyframe block lacks pts_time or pkt_pos.
                The collector is failed with the same error.
            DoubleResolutionError: If the collector has already completed
        """
        if self._done.done():
            raise DoubleResolutionError("feed() called on a completed collector", module="collector")
        self._buffer += self._decoder.decode(chunk)
        try:
            while self._consume_next_block():
                pass
        except MalformedRecordError as e:
            self.abort(e)
            raise

    def _consume_next_block(self) -> bool:
        """Remove and handle the next complete block; False if none is buffered yet."""
        start = self._buffer.find(FRAME_OPEN)
        if start == -1:
            # Hold back a tail that may be the start of a split "[FRAME]"
            self._buffer = self._buffer[-(len(FRAME_OPEN) - 1):]
            self._scan_from = 0
            return False
        if start > 0:
            self._buffer = self._buffer[start:]
            self._scan_from = max(self._scan_from - start, 0)

        end = self._buffer.find(FRAME_CLOSE, max(self._scan_from, len(FRAME_OPEN)))
        if end == -1:
            self._scan_from = max(len(self._buffer) - len(FRAME_CLOSE) + 1, len(FRAME_OPEN))
            return False

        block = self._buffer[len(FRAME_OPEN):end]
        # Drop the block before parsing so a bad block is never rescanned
        self._buffer = self._buffer[end + len(FRAME_CLOSE):]
        self._scan_from = 0

        if is_keyframe_block(block):
            keyframe = parse_frame_record(block)
            self.keyframes.append(keyframe)
            logger.debug("Keyframe at %ds (byte %d)", keyframe.pts_time, keyframe.pkt_pos)
            if self._on_keyframe is not None:
                self._on_keyframe(keyframe)
        return True

    def finish(self) -> None:
        """Signal end of input and resolve with the spaced-out keyframes."""
        self._buffer += self._decoder.decode(b"", final=True)
        boundaries = select_boundaries(self.keyframes, self.min_interval)
        logger.debug("Collected %d keyframes, %d chapter boundaries",
                     len(self.keyframes), len(boundaries))
        self._resolve(lambda: self._done.set_result(boundaries))
        self._buffer = ""

    def abort(self, error: BaseException) -> None:
        """Signal an upstream failure; buffered text is discarded."""
        self._buffer = ""
        self._resolve(lambda: self._done.set_exception(error))

    def _resolve(self, resolve: Callable[[], None]) -> None:
        try:
            resolve()
        except InvalidStateError as e:
            raise DoubleResolutionError(
                "keyframe collector resolved more than once", module="collector"
            ) from e

    def result(self, timeout: Optional[float] = None) -> List[KeyFrame]:
        """Block until the collector completes and return the spaced-out keyframes."""
        return self._done.result(timeout)
