"""Utility functions for the chapterize pipeline"""

import logging
import shutil
from datetime import datetime

from .config import FFMPEG, FFPROBE

logger = logging.getLogger(__name__)

def get_timestamp() -> str:
    """Get current timestamp in YYYYMMDD_HHMMSS format"""
    return datetime.now().strftime("%Y%m%d_%H%M%S")

def format_duration(seconds: float) -> str:
    """Format a duration in seconds as HH:MM:SS"""
    seconds = int(seconds)
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    return f"{hours:02d}:{minutes:02d}:{seconds % 60:02d}"

def check_dependencies() -> bool:
    """Check for required dependencies"""
    required = [FFPROBE, FFMPEG]

    for cmd in required:
        if shutil.which(cmd) is None:
            logger.error("Required dependency not found: %s", cmd)
            return False

    return True
