"""Configuration settings for chapterize

This module centralizes all configuration settings including:
- Log file locations and default log level
- Chapter spacing
- External tool names and timeouts

Settings can be overridden through environment variables.
"""

import os
from pathlib import Path

# LOG_DIR: user definable with default of "$HOME/chapterize_logs"
LOG_DIR = Path(os.environ.get("CHAPTERIZE_LOG_DIR", str(Path.home() / "chapterize_logs")))

# Logging configuration
LOG_LEVEL = "INFO"  # Default logging level; valid values: DEBUG, INFO, WARNING, ERROR, CRITICAL

# Chapter settings
CHAPTER_MIN_INTERVAL = int(os.environ.get("CHAPTERIZE_MIN_INTERVAL", "180"))  # seconds between chapter marks
if CHAPTER_MIN_INTERVAL < 0:
    raise ValueError(f"CHAPTERIZE_MIN_INTERVAL must be >= 0, got {CHAPTER_MIN_INTERVAL}")

# External tools
FFPROBE = os.environ.get("CHAPTERIZE_FFPROBE", "ffprobe")
FFMPEG = os.environ.get("CHAPTERIZE_FFMPEG", "ffmpeg")

# No timeouts exist in ffprobe/ffmpeg themselves; a hung process is killed after these
PROBE_TIMEOUT = float(os.environ.get("CHAPTERIZE_PROBE_TIMEOUT", "3600"))
MUX_TIMEOUT = float(os.environ.get("CHAPTERIZE_MUX_TIMEOUT", "3600"))

# Bytes requested per read from the ffprobe output pipe
READ_CHUNK_SIZE = 65536

# Input file extensions, matched case-insensitively
MEDIA_EXTENSIONS = ("mp4", "mkv")
