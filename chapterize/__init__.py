"""
chapterize - Evenly spaced chapter markers for a video library

This package adds a chapter table to video files without re-encoding them:
- Streams keyframe descriptors out of ffprobe
- Collects keyframe timestamps incrementally as the output arrives
- Keeps keyframes spaced at least a few minutes apart
- Renders an ffmetadata chapter document
- Stream-copies each file through ffmpeg with the chapters attached
"""

__version__ = "0.1.0"
