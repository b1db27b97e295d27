"""
command_jobs.py

Defines a base class for command jobs and the two external steps of the
pipeline: streaming keyframes out of ffprobe and muxing chapters with ffmpeg.
"""

import logging
import subprocess
import threading
from pathlib import Path
from typing import List, Optional

from .collector import KeyFrameCollector
from .config import FFMPEG, FFPROBE, MUX_TIMEOUT, PROBE_TIMEOUT, READ_CHUNK_SIZE
from .exceptions import DownstreamProcessError, MalformedRecordError, UpstreamProcessError

logger = logging.getLogger(__name__)

class CommandJob:
    """
    Base class representing a command job.

    Attributes:
        cmd (List[str]): The command to run
        timeout (float): Seconds before the process is killed
    """
    def __init__(self, cmd: List[str], timeout: Optional[float] = None):
        self.cmd = cmd
        self.timeout = timeout

    def describe(self) -> str:
        return " ".join(self.cmd)

class KeyframeProbeJob(CommandJob):
    """Job streaming ffprobe keyframe descriptors into a KeyFrameCollector."""
    def __init__(self, input_file: Path, timeout: Optional[float] = PROBE_TIMEOUT,
                 chunk_size: int = READ_CHUNK_SIZE):
        super().__init__([
            FFPROBE, "-v", "error",
            "-select_streams", "v",
            "-show_frames",
            "-skip_frame", "nokey",
            str(input_file)
        ], timeout)
        self.input_file = input_file
        self.chunk_size = chunk_size

    def execute(self, collector: KeyFrameCollector) -> None:
        """
        Run ffprobe and feed its stdout to the collector in arrival order.

        The collector is finished on a clean exit and aborted with an
        UpstreamProcessError otherwise.

        Raises:
            MalformedRecordError: If a keyframe block cannot be parsed
        """
        logger.info("Running command: %s", self.describe())
        process = subprocess.Popen(self.cmd, stdout=subprocess.PIPE, stderr=subprocess.DEVNULL)
        timed_out = threading.Event()

        def _kill_hung_process():
            timed_out.set()
            logger.warning("ffprobe exceeded %.0fs on %s, killing it", self.timeout, self.input_file.name)
            process.kill()

        watchdog = None
        if self.timeout is not None:
            watchdog = threading.Timer(self.timeout, _kill_hung_process)
            watchdog.daemon = True
            watchdog.start()

        try:
            while True:
                chunk = process.stdout.read1(self.chunk_size)
                if not chunk:
                    break
                collector.feed(chunk)
        except MalformedRecordError:
            process.kill()
            raise
        finally:
            if watchdog is not None:
                watchdog.cancel()
            process.stdout.close()
            returncode = process.wait()

        # A watchdog firing after a clean exit does not fail the run
        if returncode == 0:
            collector.finish()
        elif timed_out.is_set():
            collector.abort(UpstreamProcessError(
                f"ffprobe timed out after {self.timeout:.0f}s on {self.input_file}",
                module="command_jobs",
                returncode=returncode
            ))
        else:
            collector.abort(UpstreamProcessError(
                f"ffprobe exited with code {returncode} on {self.input_file}",
                module="command_jobs",
                returncode=returncode
            ))

class ChapterMuxJob(CommandJob):
    """Job stream-copying a file through ffmpeg with a chapter table on stdin."""
    def __init__(self, input_file: Path, output_file: Path,
                 timeout: Optional[float] = MUX_TIMEOUT):
        super().__init__([
            FFMPEG, "-y", "-hide_banner",
            "-i", str(input_file),
            "-i", "-",
            "-map_chapters", "1",
            "-codec", "copy",
            str(output_file)
        ], timeout)
        self.input_file = input_file
        self.output_file = output_file

    def execute(self, document: str) -> None:
        """
        Run ffmpeg, write the chapter document to its stdin and close it.

        Raises:
            DownstreamProcessError: If ffmpeg exits non-zero or times out
        """
        logger.info("Running command: %s", self.describe())
        process = subprocess.Popen(
            self.cmd,
            stdin=subprocess.PIPE,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE
        )
        try:
            _, stderr = process.communicate(document.encode("utf-8"), timeout=self.timeout)
        except subprocess.TimeoutExpired:
            process.kill()
            _, stderr = process.communicate()
            raise DownstreamProcessError(
                f"ffmpeg timed out after {self.timeout:.0f}s writing {self.output_file}",
                module="command_jobs",
                returncode=process.returncode,
                stderr=stderr.decode("utf-8", errors="replace")
            )

        if process.returncode != 0:
            stderr_text = stderr.decode("utf-8", errors="replace")
            logger.debug("Command stderr: %s", stderr_text)
            raise DownstreamProcessError(
                f"could not write chapters to {self.output_file} (exit code {process.returncode})",
                module="command_jobs",
                returncode=process.returncode,
                stderr=stderr_text
            )
