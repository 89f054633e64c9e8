"""On-disk replay files for recorded landmark sessions.

Each line of the JSONL file holds one frame as handed over by the pose
engine, together with the pixel size of that frame. Replaying the file
through :func:`squatdepth.session.replay` reproduces a session exactly, which
keeps verdicts deterministic for tests and debugging.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from squatdepth.vision.landmarks import Landmark, normalize_landmarks


class PoseCacheError(RuntimeError):
    """Raised when a replay file cannot be read or holds invalid records."""


@dataclass(frozen=True)
class PoseFrame:
    """Pose data for a single frame.

    ``landmarks`` is empty when the engine found no pose in the frame.
    ``width``/``height`` may be None when the recording did not keep them;
    the caller then has to supply a frame size.
    """

    frame_index: int
    timestamp: float
    landmarks: List[Optional[Landmark]] = field(default_factory=list)
    width: Optional[int] = None
    height: Optional[int] = None


def _frame_to_json(frame: PoseFrame) -> str:
    payload = {
        "frame_index": frame.frame_index,
        "timestamp": frame.timestamp,
        "width": frame.width,
        "height": frame.height,
        "landmarks": [lm.to_dict() if lm is not None else None for lm in frame.landmarks]
        if frame.landmarks
        else None,
    }
    return json.dumps(payload)


def _frame_from_obj(obj: dict, line_no: int) -> PoseFrame:
    try:
        return PoseFrame(
            frame_index=int(obj.get("frame_index", line_no - 1)),
            timestamp=float(obj.get("timestamp", 0.0)),
            landmarks=normalize_landmarks(obj.get("landmarks")),
            width=int(obj["width"]) if obj.get("width") is not None else None,
            height=int(obj["height"]) if obj.get("height") is not None else None,
        )
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise PoseCacheError(f"Invalid frame record on line {line_no}: {exc}") from exc


def save_pose_frames(
    cache_file: Path, frames: Iterable[PoseFrame], *, overwrite: bool = True
) -> Path:
    """Write pose frames to a JSONL replay file.

    Args:
        cache_file: Destination path for the JSONL file.
        frames: Iterable of PoseFrame instances.
        overwrite: Whether to overwrite an existing file.
    """

    cache_file.parent.mkdir(parents=True, exist_ok=True)
    if cache_file.exists() and not overwrite:
        raise FileExistsError(f"Replay file already exists: {cache_file}")

    with cache_file.open("w", encoding="utf-8") as fh:
        for frame in frames:
            fh.write(_frame_to_json(frame))
            fh.write("\n")
    return cache_file


def load_pose_frames(cache_file: Path) -> Iterator[PoseFrame]:
    """Read pose frames from a JSONL replay file."""
    try:
        fh = cache_file.open("r", encoding="utf-8")
    except OSError as exc:
        raise PoseCacheError(f"Cannot open replay file {cache_file}: {exc}") from exc

    with fh:
        for line_no, line in enumerate(fh, start=1):
            if not line.strip():
                continue
            try:
                obj = json.loads(line)
            except json.JSONDecodeError as exc:
                raise PoseCacheError(f"Invalid JSON on line {line_no}: {exc}") from exc
            if not isinstance(obj, dict):
                raise PoseCacheError(f"Line {line_no} is not a JSON object")
            yield _frame_from_obj(obj, line_no)
