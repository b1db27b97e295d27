"""Chapter boundary selection and ffmetadata rendering

Keyframes are thinned out to chapter boundaries spaced more than
CHAPTER_MIN_INTERVAL seconds apart. Each boundary marks the end of one
chapter; the first chapter always starts at 0 and the last chapter's end
is left to ffmpeg.

Example document for boundaries at 200s and 400s:

    ;FFMETADATA1
    [CHAPTER]
    TIMEBASE=1/1
    START=0
    END=200
    title=Chapter 1
    [CHAPTER]
    TIMEBASE=1/1
    START=200
    END=400
    title=Chapter 2
"""

import re
from dataclasses import dataclass
from typing import Iterable, List, Sequence

from .config import CHAPTER_MIN_INTERVAL
from .exceptions import MalformedRecordError
from .frames import KeyFrame

METADATA_HEADER = ";FFMETADATA1"
CHAPTER_SECTION = "[CHAPTER]"
TIMEBASE = "1/1"

_CHAPTER_FIELD_RE = re.compile(r"^(TIMEBASE|START|END|title)=(.*)$")

@dataclass(frozen=True)
class ChapterBoundary:
    """One chapter of the rendered table"""
    ordinal: int
    start: int
    end: int
    title: str

def select_boundaries(keyframes: Sequence[KeyFrame],
                      min_interval: int = CHAPTER_MIN_INTERVAL) -> List[KeyFrame]:
    """
    Select keyframes spaced more than min_interval seconds apart.

    The first keyframe only seeds the spacing baseline and is never itself
    selected, since the first chapter starts at 0.

    Args:
        keyframes: Keyframes in presentation order
        min_interval: Required gap in seconds, exclusive

    Returns:
        List[KeyFrame]: Selected keyframes, possibly empty

    Raises:
        ValueError: If min_interval is negative
    """
    if min_interval < 0:
        raise ValueError(f"min_interval must be >= 0, got {min_interval}")
    if not keyframes:
        return []
    selected = []
    baseline = keyframes[0]
    for frame in keyframes[1:]:
        if frame.pts_time - baseline.pts_time > min_interval:
            selected.append(frame)
            baseline = frame
    return selected

def build_chapters(boundaries: Iterable[KeyFrame]) -> List[ChapterBoundary]:
    """Turn chapter end markers into contiguous chapters starting at 0"""
    chapters = []
    start = 0
    for ordinal, frame in enumerate(boundaries, start=1):
        chapters.append(ChapterBoundary(
            ordinal=ordinal,
            start=start,
            end=frame.pts_time,
            title=f"Chapter {ordinal}"
        ))
        start = frame.pts_time
    return chapters

def render_chapter_metadata(boundaries: Iterable[KeyFrame]) -> str:
    """Render chapter boundaries as an ffmetadata document (header only if empty)"""
    lines = [METADATA_HEADER]
    for chapter in build_chapters(boundaries):
        lines.extend([
            CHAPTER_SECTION,
            f"TIMEBASE={TIMEBASE}",
            f"START={chapter.start}",
            f"END={chapter.end}",
            f"title={chapter.title}",
        ])
    return "\n".join(lines) + "\n"

def parse_chapter_metadata(text: str) -> List[ChapterBoundary]:
    """
    Read chapters back out of a rendered ffmetadata document.

    Raises:
        MalformedRecordError: If the header is missing or a chapter lacks START/END
    """
    lines = text.splitlines()
    if not lines or lines[0].strip() != METADATA_HEADER:
        raise MalformedRecordError("missing ffmetadata header", module="chapters")

    records = []
    current = None
    for line in lines[1:]:
        line = line.strip()
        if line == CHAPTER_SECTION:
            current = {}
            records.append(current)
            continue
        match = _CHAPTER_FIELD_RE.match(line)
        if match and current is not None:
            current[match.group(1)] = match.group(2)

    chapters = []
    for ordinal, record in enumerate(records, start=1):
        try:
            start, end = int(record["START"]), int(record["END"])
        except (KeyError, ValueError) as e:
            raise MalformedRecordError(
                f"chapter {ordinal} has no valid START/END", module="chapters"
            ) from e
        chapters.append(ChapterBoundary(
            ordinal=ordinal,
            start=start,
            end=end,
            title=record.get("title", f"Chapter {ordinal}")
        ))
    return chapters
