"""Landmark records as consumed by the depth pipeline.

The pose-estimation engine hands over loosely shaped per-landmark records
(dicts or objects with optional ``z``/``visibility``). They are normalized
once here into fixed-shape :class:`Landmark` values so the rest of the
pipeline never has to check for missing fields.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple


class BodyPart(IntEnum):
    """MediaPipe Pose landmark indices used by the depth pipeline."""

    LEFT_SHOULDER = 11
    RIGHT_SHOULDER = 12
    LEFT_HIP = 23
    RIGHT_HIP = 24
    LEFT_KNEE = 25
    RIGHT_KNEE = 26
    LEFT_ANKLE = 27
    RIGHT_ANKLE = 28


# Bilateral pairs whose separation indicates a side-on camera view.
PROFILE_PAIRS: Tuple[Tuple[BodyPart, BodyPart], ...] = (
    (BodyPart.LEFT_SHOULDER, BodyPart.RIGHT_SHOULDER),
    (BodyPart.LEFT_HIP, BodyPart.RIGHT_HIP),
    (BodyPart.LEFT_ANKLE, BodyPart.RIGHT_ANKLE),
)


@dataclass(frozen=True)
class Landmark:
    """Single pose landmark in normalized image coordinates.

    Absent ``z`` is stored as 0.0 and absent ``visibility`` as 1.0.
    """

    x: float
    y: float
    z: float = 0.0
    visibility: float = 1.0

    @classmethod
    def from_obj(cls, obj: Any) -> "Landmark":
        """Build a landmark from a mapping or an attribute-style record.

        ``x`` and ``y`` are required: a mapping without them raises
        ``KeyError`` and any other record without them raises ``TypeError``.
        """
        if isinstance(obj, Landmark):
            return obj
        if isinstance(obj, Mapping):
            get = obj.get
            x, y = obj["x"], obj["y"]
        elif hasattr(obj, "x") and hasattr(obj, "y") and not isinstance(obj, (str, bytes)):
            def get(key: str, default: Any = None) -> Any:
                return getattr(obj, key, default)

            x, y = obj.x, obj.y
        else:
            raise TypeError(f"landmark must be an object with x/y, got {type(obj).__name__}")

        z = get("z")
        visibility = get("visibility")
        return cls(
            x=float(x),
            y=float(y),
            z=float(z) if z is not None else 0.0,
            visibility=float(visibility) if visibility is not None else 1.0,
        )

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "z": self.z, "visibility": self.visibility}


Landmarks = Sequence[Optional[Landmark]]


def normalize_landmarks(raw: Optional[Iterable[Any]]) -> List[Optional[Landmark]]:
    """Convert an engine landmark sequence into :class:`Landmark` values.

    ``None`` (no pose this frame) becomes an empty list. ``None`` entries
    inside the sequence are kept as absent landmarks so indices stay aligned.
    """

    if raw is None:
        return []
    return [Landmark.from_obj(item) if item is not None else None for item in raw]


def landmark_at(landmarks: Landmarks, part: int) -> Optional[Landmark]:
    """Return the landmark for ``part`` or None when the sequence lacks it."""
    if part < 0 or part >= len(landmarks):
        return None
    return landmarks[part]
