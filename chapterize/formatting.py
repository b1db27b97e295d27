"""Rich-based console output for chapterize runs"""

from typing import Sequence

from rich.console import Console
from rich.text import Text

from .chapters import ChapterBoundary
from .utils import format_duration

console = Console()

def _print_marked(mark: str, message: str, style: str) -> None:
    console.print(Text(f"{mark} ", style=f"bold {style}") + Text(message, style=style))

def print_success(message: str) -> None:
    """Print a finished-file or finished-run message."""
    _print_marked("✓", message, "green")

def print_warning(message: str) -> None:
    _print_marked("⚠", message, "yellow")

def print_error(message: str) -> None:
    _print_marked("✗", message, "red")

def print_info(message: str) -> None:
    _print_marked("ℹ", message, "blue")

def print_header(title: str) -> None:
    """Print a full-width rule with the title centered in it."""
    console.rule(Text(title, style="bold blue"), style="blue")

def print_progress_tick() -> None:
    """Print one keyframe progress dot without a newline."""
    console.print(".", end="", style="dim", highlight=False)

def print_chapter_table(chapters: Sequence[ChapterBoundary]) -> None:
    """Print one line per chapter with its start and end time."""
    if not chapters:
        print_warning("No chapter boundaries found")
        return
    for chapter in chapters:
        console.print(
            f"  {chapter.title:<12} {format_duration(chapter.start)} -> {format_duration(chapter.end)}",
            style="blue"
        )
