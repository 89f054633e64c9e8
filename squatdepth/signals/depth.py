"""Per-frame depth ratio estimation.

A frame that passes the side-on gate is measured on whichever leg shows the
longer femur on screen. The depth ratio is the vertical hip-below-knee
displacement in pixels divided by that femur length, clamped at zero while
the hip is still above the knee.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from squatdepth.config import DepthConfig, FrameSize
from squatdepth.signals.gate import LandmarkGate
from squatdepth.vision.landmarks import BodyPart, Landmarks, landmark_at


class DiagnosticReason(str, Enum):
    NO_POSE = "no-pose"
    SIDE_TOO_SMALL = "side-too-small"
    LOW_VISIBILITY = "low-visibility"
    INSUFFICIENT_POINTS = "insufficient-points"
    OK = "ok"


@dataclass(frozen=True)
class FrameDiagnostic:
    """Live per-frame outcome handed to the rendering side."""

    ok: bool
    reason: DiagnosticReason
    side: Optional[float] = None
    profile_spread: Optional[float] = None
    femur: Optional[float] = None
    depth: Optional[float] = None

    @property
    def sample(self) -> Optional[float]:
        """Depth sample to buffer for this frame (None for unusable frames)."""
        return self.depth if self.ok else None

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "reason": self.reason.value,
            "side": self.side,
            "profileSpread": self.profile_spread,
            "femur": self.femur,
            "depth": self.depth,
        }


@dataclass(frozen=True)
class LegMeasure:
    side: str
    femur: float
    depth: float


class DepthEstimator:
    """Turn one frame of landmarks into a depth ratio plus diagnostic."""

    LEGS = (
        ("right", BodyPart.RIGHT_HIP, BodyPart.RIGHT_KNEE),
        ("left", BodyPart.LEFT_HIP, BodyPart.LEFT_KNEE),
    )

    def __init__(self, config: DepthConfig, gate: Optional[LandmarkGate] = None) -> None:
        self.config = config
        self.gate = gate or LandmarkGate(config)

    def _visible_point(
        self, landmarks: Landmarks, part: BodyPart, size: FrameSize
    ) -> Optional[tuple[float, float]]:
        lm = landmark_at(landmarks, part)
        if lm is None or lm.visibility < self.config.vis_th:
            return None
        return size.to_pixels(lm.x, lm.y)

    def measure_leg(
        self, landmarks: Landmarks, side: str, hip_part: BodyPart, knee_part: BodyPart, size: FrameSize
    ) -> Optional[LegMeasure]:
        hip = self._visible_point(landmarks, hip_part, size)
        knee = self._visible_point(landmarks, knee_part, size)
        if hip is None or knee is None:
            return None
        femur = math.hypot(hip[0] - knee[0], hip[1] - knee[1])
        if not femur or math.isnan(femur):
            return None
        depth_raw = hip[1] - knee[1]
        depth = depth_raw / femur if depth_raw > 0 else 0.0
        return LegMeasure(side=side, femur=femur, depth=depth)

    def pick_leg(self, landmarks: Landmarks, size: FrameSize) -> Optional[LegMeasure]:
        """Prefer the leg with the longer on-screen femur; ties go right."""
        best: Optional[LegMeasure] = None
        for side, hip_part, knee_part in self.LEGS:
            leg = self.measure_leg(landmarks, side, hip_part, knee_part, size)
            if leg is None:
                continue
            if best is None or not best.femur >= leg.femur:
                best = leg
        return best

    def diagnose(self, landmarks: Landmarks, size: FrameSize) -> FrameDiagnostic:
        if not landmarks:
            return FrameDiagnostic(ok=False, reason=DiagnosticReason.NO_POSE)

        gate = self.gate.evaluate(landmarks, size)
        if not gate.passed:
            return FrameDiagnostic(
                ok=False,
                reason=DiagnosticReason.SIDE_TOO_SMALL,
                side=gate.side,
                profile_spread=gate.profile_spread,
            )

        leg = self.pick_leg(landmarks, size)
        if leg is None:
            return FrameDiagnostic(
                ok=False,
                reason=DiagnosticReason.LOW_VISIBILITY,
                side=gate.side,
                profile_spread=gate.profile_spread,
            )

        # Only reachable with non-finite input coordinates.
        if not math.isfinite(leg.femur) or not math.isfinite(leg.depth):
            return FrameDiagnostic(
                ok=False,
                reason=DiagnosticReason.INSUFFICIENT_POINTS,
                side=gate.side,
                profile_spread=gate.profile_spread,
            )

        return FrameDiagnostic(
            ok=True,
            reason=DiagnosticReason.OK,
            side=gate.side,
            profile_spread=gate.profile_spread,
            femur=leg.femur,
            depth=leg.depth,
        )
