"""Custom exceptions for the chapterize pipeline"""

class ChapterizeError(Exception):
    """Base exception for all chapterize errors"""
    def __init__(self, message: str, module: str = None):
        self.message = message
        self.module = module or "unknown"
        super().__init__(f"[{self.module}] {self.message}")

class MalformedRecordError(ChapterizeError):
    """A frame descriptor block is missing a required field"""
    def __init__(self, message: str, module: str = None):
        super().__init__(f"Malformed frame record: {message}", module)

class ProcessError(ChapterizeError):
    """Base class for external process failures"""

class UpstreamProcessError(ProcessError):
    """The frame analysis process (ffprobe) terminated abnormally"""
    def __init__(self, message: str, module: str = None, returncode: int = None):
        self.returncode = returncode
        super().__init__(f"Keyframe analysis failed: {message}", module)

class DownstreamProcessError(ProcessError):
    """The muxer process (ffmpeg) exited non-zero"""
    def __init__(self, message: str, module: str = None,
                 returncode: int = None, stderr: str = ""):
        self.returncode = returncode
        self.stderr = stderr
        if stderr:
            message = f"{message}, here's the stderr:\n{stderr}"
        super().__init__(f"Chapter muxing failed: {message}", module)

class DoubleResolutionError(ChapterizeError):
    """A keyframe collector was resolved more than once"""
