import os
import sys

import pytest

# Ensure the project root is on sys.path so the package is importable without an install.
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)


def render_frame(key_frame: int, pts_time: str = None, pkt_pos: str = None) -> str:
    """Render one ffprobe -show_frames block."""
    lines = ["[FRAME]", "media_type=video", "stream_index=0", f"key_frame={key_frame}"]
    if pts_time is not None:
        lines += ["pts=%d" % int(float(pts_time) * 1000), f"pts_time={pts_time}"]
    lines += ["pkt_dts_time=N/A", "best_effort_timestamp_time=0.000000"]
    if pkt_pos is not None:
        lines.append(f"pkt_pos={pkt_pos}")
    lines += ["pict_type=I" if key_frame else "pict_type=P", "[/FRAME]"]
    return "\n".join(lines) + "\n"


@pytest.fixture
def frame_text():
    """Factory rendering a single frame block."""
    return render_frame


@pytest.fixture
def probe_output():
    """Factory rendering ffprobe output for keyframes at the given whole-second times."""
    def _render(times, with_inter_frames=True) -> bytes:
        blocks = []
        for index, t in enumerate(times):
            blocks.append(render_frame(1, f"{t}.041667", str(4096 * (index + 1))))
            if with_inter_frames:
                blocks.append(render_frame(0, f"{t}.083333", str(4096 * (index + 1) + 512)))
        return "".join(blocks).encode("ascii")
    return _render
