"""Synthetic MediaPipe-style landmark frames for tests."""

import math
from typing import List, Optional, Sequence

FRAME_W = 1000
FRAME_H = 1000
NUM_LANDMARKS = 33
FEMUR = 0.2  # normalized, i.e. 200 px in a 1000 px frame


def blank_frame(visibility: Optional[float] = 1.0) -> List[dict]:
    lm = {"x": 0.5, "y": 0.5, "z": 0.0}
    if visibility is not None:
        lm["visibility"] = visibility
    return [dict(lm) for _ in range(NUM_LANDMARKS)]


def side_on_frame(depth: float, *, visibility: Optional[float] = 1.0) -> List[dict]:
    """A frame with wide shoulders (passes the gate) and both legs at ``depth``."""
    frame = blank_frame(visibility)
    frame[11].update(x=0.45, y=0.3)
    frame[12].update(x=0.55, y=0.3)

    d = min(max(depth, 0.0), 1.0)
    knee_x, knee_y = 0.5, 0.6
    hip_x = knee_x - math.sqrt(1.0 - d * d) * FEMUR
    hip_y = knee_y + d * FEMUR if depth > 0 else knee_y - FEMUR
    if depth <= 0:
        hip_x = knee_x
    for hip_idx, knee_idx in ((23, 25), (24, 26)):
        frame[hip_idx].update(x=hip_x, y=hip_y)
        frame[knee_idx].update(x=knee_x, y=knee_y)
    return frame


def cycle(values: Sequence[float], repeat: int) -> List[float]:
    """Repeat every value ``repeat`` times in order."""
    return [v for v in values for _ in range(repeat)]


SQUAT_CYCLE = (0.0, 0.0, 0.3, 0.6, 0.9, 0.6, 0.3, 0.0)


def two_rep_series() -> List[float]:
    """Two squats, each sample held for three frames (48 samples)."""
    return cycle(SQUAT_CYCLE, 3) * 2
