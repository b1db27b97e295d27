"""High-level pipeline orchestration for chapterizing video files

Responsibilities:
  - Find media files under a source directory and mirror their paths.
  - Run the keyframe probe and chapter mux stages for each file.
  - Keep per-file failures from aborting the batch.
  - Present a final summary of the run.
"""

import logging
import re
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional

from .chapters import build_chapters, render_chapter_metadata
from .collector import KeyFrameCollector
from .command_jobs import ChapterMuxJob, KeyframeProbeJob
from .config import CHAPTER_MIN_INTERVAL, MEDIA_EXTENSIONS
from .exceptions import ChapterizeError, DoubleResolutionError
from .formatting import (
    console, print_chapter_table, print_error, print_header,
    print_info, print_progress_tick, print_success
)
from .utils import format_duration

logger = logging.getLogger(__name__)

_MEDIA_FILE_RE = re.compile(r"\.(%s)$" % "|".join(MEDIA_EXTENSIONS), re.IGNORECASE)

def find_media_files(input_dir: Path) -> List[Path]:
    """Recursively list media files under input_dir, sorted by path."""
    return sorted(
        path for path in input_dir.rglob("*")
        if path.is_file() and _MEDIA_FILE_RE.search(path.name)
    )

def chapterize_file(input_file: Path, output_file: Path,
                    min_interval: int = CHAPTER_MIN_INTERVAL,
                    dry_run: bool = False) -> dict:
    """
    Add evenly spaced chapters to one file.

    Args:
        input_file: Source video file
        output_file: Destination for the stream-copied file
        min_interval: Minimum chapter spacing in seconds
        dry_run: Compute and print chapters without running ffmpeg

    Returns:
        dict: Summary with the keyframe count and rendered chapters

    Raises:
        ChapterizeError: If probing, parsing or muxing fails
    """
    print_info(f"Calculating chapters for {input_file.name}")
    collector = KeyFrameCollector(min_interval, on_keyframe=lambda _: print_progress_tick())
    KeyframeProbeJob(input_file).execute(collector)
    boundaries = collector.result()
    console.print()

    chapters = build_chapters(boundaries)
    logger.info("%s: %d keyframes, %d chapters", input_file.name,
                len(collector.keyframes), len(chapters))

    if dry_run:
        print_chapter_table(chapters)
    else:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        ChapterMuxJob(input_file, output_file).execute(render_chapter_metadata(boundaries))

    return {
        "filename": input_file.name,
        "output_file": output_file,
        "keyframes": len(collector.keyframes),
        "chapters": chapters
    }

def process_file(input_file: Path, output_file: Path,
                 min_interval: int = CHAPTER_MIN_INTERVAL,
                 dry_run: bool = False) -> Optional[dict]:
    """
    Process a single input file, logging rather than raising on failure.

    Returns:
        Optional[dict]: Summary from chapterize_file, or None if the file failed
    """
    logger.info("%s -> %s", input_file, output_file)
    try:
        summary = chapterize_file(input_file, output_file, min_interval, dry_run)
    except DoubleResolutionError:
        raise
    except (ChapterizeError, OSError) as e:
        console.print()
        logger.error("Failed to chapterize %s: %s", input_file.name, e)
        return None

    print_success(f"{input_file.name}: {len(summary['chapters'])} chapters")
    return summary

def process_directory(input_dir: Path, output_dir: Path, jobs: int = 1,
                      min_interval: int = CHAPTER_MIN_INTERVAL,
                      dry_run: bool = False) -> bool:
    """
    Process all media files under input_dir, mirroring their relative
    paths into output_dir.

    Args:
        input_dir: Directory searched recursively for media files
        output_dir: Destination root
        jobs: Number of files processed in parallel

    Returns:
        bool: True if all files processed successfully
    """
    input_dir = input_dir.resolve()
    output_dir = output_dir.resolve()
    video_files = find_media_files(input_dir)

    if not video_files:
        logger.error("No video files found in %s", input_dir)
        return False

    print_info(f"source: {input_dir} destination: {output_dir}")
    targets = [(path, output_dir / path.relative_to(input_dir)) for path in video_files]
    dir_start_time = time.time()

    if jobs > 1:
        with ThreadPoolExecutor(max_workers=jobs) as executor:
            futures = [
                executor.submit(process_file, src, dst, min_interval, dry_run)
                for src, dst in targets
            ]
            summaries = [future.result() for future in futures]
    else:
        summaries = [process_file(src, dst, min_interval, dry_run) for src, dst in targets]

    succeeded = [s for s in summaries if s]
    failed = [src for (src, _), s in zip(targets, summaries) if not s]

    print_header("Chapterize Summary")
    for s in succeeded:
        print_success(f"{s['filename']}: {len(s['chapters'])} chapters from {s['keyframes']} keyframes")
    for path in failed:
        print_error(f"{path.name}: failed")
    print_info(f"Total execution time: {format_duration(time.time() - dir_start_time)}")

    return not failed
