"""Side-on (profile) view gate.

Depth ratios only mean something when the camera looks at the lifter from the
side. The gate estimates that from how far apart the bilateral landmark pairs
are, either horizontally on screen or along the engine's relative-depth axis.
"""

from __future__ import annotations

from dataclasses import dataclass

from squatdepth.config import DepthConfig, FrameSize
from squatdepth.vision.landmarks import PROFILE_PAIRS, Landmarks, landmark_at


@dataclass(frozen=True)
class GateResult:
    passed: bool
    side: float
    profile_spread: float


class LandmarkGate:
    """Decide whether a frame's geometry supports a profile measurement."""

    def __init__(self, config: DepthConfig) -> None:
        self.config = config

    def _pair_spreads(self, landmarks: Landmarks, size: FrameSize) -> tuple[float, float]:
        """Return (max horizontal px separation, max depth-derived px separation)."""
        dx_max = 0.0
        dz_max = 0.0
        scale = size.scale
        for a_idx, b_idx in PROFILE_PAIRS:
            a = landmark_at(landmarks, a_idx)
            b = landmark_at(landmarks, b_idx)
            if a is None or b is None:
                continue
            dx_px = abs(a.x - b.x) * (size.width or scale)
            dz_px = abs(a.z - b.z) * scale * self.config.depth_z_scale
            dx_max = max(dx_max, dx_px)
            dz_max = max(dz_max, dz_px)
        return dx_max, dz_max

    def side_score(self, landmarks: Landmarks, size: FrameSize) -> float:
        return max(self._pair_spreads(landmarks, size))

    def profile_spread(self, landmarks: Landmarks, size: FrameSize) -> float:
        return self._pair_spreads(landmarks, size)[1]

    def evaluate(self, landmarks: Landmarks, size: FrameSize) -> GateResult:
        """Run the gate and keep both metrics for diagnostics.

        Passes on a wide side score, or on a strong depth-only spread which
        covers steep profile stances with little horizontal separation.
        """
        dx_max, dz_max = self._pair_spreads(landmarks, size)
        side = max(dx_max, dz_max)
        passed = side >= self.config.side_px or dz_max >= self.config.profile_px
        return GateResult(passed=passed, side=side, profile_spread=dz_max)
