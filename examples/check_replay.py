"""Quick check for the session pipeline.

Synthesizes a side-on lifter doing two squats, writes the landmarks to a JSONL
replay file, replays it, and prints the verdict.
"""

import math
import sys
import tempfile
from pathlib import Path

# Allow running this script directly without installing the package.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from squatdepth.report import format_report  # noqa: E402
from squatdepth.session import replay  # noqa: E402
from squatdepth.vision.cache import PoseFrame, load_pose_frames, save_pose_frames  # noqa: E402
from squatdepth.vision.landmarks import Landmark  # noqa: E402


def synthetic_frame(idx: int, depth: float) -> PoseFrame:
    landmarks = [Landmark(x=0.5, y=0.5) for _ in range(33)]
    landmarks[11] = Landmark(x=0.45, y=0.3)
    landmarks[12] = Landmark(x=0.55, y=0.3)
    # Hip swings down and forward around a fixed knee, femur 0.2 long.
    angle = math.asin(max(0.0, min(depth, 1.0)))
    hip = Landmark(x=0.5 - 0.2 * math.cos(angle), y=0.6 + 0.2 * math.sin(angle))
    knee = Landmark(x=0.5, y=0.6)
    landmarks[23] = landmarks[24] = hip
    landmarks[25] = landmarks[26] = knee
    return PoseFrame(frame_index=idx, timestamp=idx / 30, landmarks=landmarks, width=1080, height=1080)


def main() -> None:
    profile = [0.0, 0.0, 0.3, 0.6, 0.9, 0.6, 0.3, 0.0]
    depths = [d for d in profile for _ in range(3)] * 2
    clip = Path(tempfile.mkdtemp()) / "session.jsonl"
    save_pose_frames(clip, (synthetic_frame(i, d) for i, d in enumerate(depths)))

    report = replay(load_pose_frames(clip))
    print(format_report(report))


if __name__ == "__main__":
    main()
