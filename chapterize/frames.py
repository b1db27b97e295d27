"""Parsing of ffprobe frame descriptors

ffprobe -show_frames prints one block per frame:

    [FRAME]
    media_type=video
    key_frame=1
    pts_time=12.345000
    pkt_pos=48213
    ...
    [/FRAME]

Only the key_frame flag, pts_time and pkt_pos fields are read.
"""

import re
from dataclasses import dataclass

from .exceptions import MalformedRecordError

FRAME_OPEN = "[FRAME]"
FRAME_CLOSE = "[/FRAME]"

# Fields are anchored at line start so pkt_pts_time= etc. never match pts_time=
_KEY_FRAME_RE = re.compile(r"^key_frame=1\s*$", re.MULTILINE)
_PTS_TIME_RE = re.compile(r"^pts_time=(\d+)(?:\.\d*)?\s*$", re.MULTILINE)
# ffprobe 4.x prints only pkt_pts_time
_PKT_PTS_TIME_RE = re.compile(r"^pkt_pts_time=(\d+)(?:\.\d*)?\s*$", re.MULTILINE)
_PKT_POS_RE = re.compile(r"^pkt_pos=(\d+)\s*$", re.MULTILINE)

@dataclass(frozen=True)
class KeyFrame:
    """A keyframe's presentation time in whole seconds and its byte offset"""
    pts_time: int
    pkt_pos: int

def is_keyframe_block(text: str) -> bool:
    """Return True if the frame descriptor is flagged as a keyframe"""
    return _KEY_FRAME_RE.search(text) is not None

def parse_frame_record(text: str) -> KeyFrame:
    """
    Parse the body of one frame descriptor block into a KeyFrame.

    The fractional part of pts_time is dropped; chapter spacing is
    compared in whole seconds. pkt_pts_time is used when pts_time is
    absent or N/A.

    Raises:
        MalformedRecordError: If pts_time or pkt_pos is missing or not numeric
    """
    pts_match = _PTS_TIME_RE.search(text) or _PKT_PTS_TIME_RE.search(text)
    if pts_match is None:
        raise MalformedRecordError("no pts_time field in frame block", module="frames")
    pos_match = _PKT_POS_RE.search(text)
    if pos_match is None:
        raise MalformedRecordError("no pkt_pos field in frame block", module="frames")
    return KeyFrame(pts_time=int(pts_match.group(1)), pkt_pos=int(pos_match.group(1)))
