"""squatdepth: squat depth judging from per-frame pose landmarks.

This package hosts the side-on gate, per-frame depth ratio estimation, the
bounded depth series, smoothing, rep detection and the session verdict. Pose
extraction, playback and drawing live with the caller.
"""

__all__ = [
    "cli",
    "config",
    "session",
]

__version__ = "0.1.0"
