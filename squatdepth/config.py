"""Shared configuration and data models used across the analysis pipeline."""

import math
from dataclasses import dataclass, fields, replace
from typing import Optional


@dataclass(frozen=True)
class FrameSize:
    """Pixel dimensions of the frame a set of landmarks was extracted from.

    Attributes:
        width: Pixel width of the decoded frame.
        height: Pixel height of the decoded frame.
    """

    width: int
    height: int

    @property
    def scale(self) -> int:
        """Largest frame side, used to turn relative depth into pixels."""
        return max(self.width or 0, self.height or 0, 1)

    def to_pixels(self, x: float, y: float) -> tuple[float, float]:
        """Map normalized image-plane coordinates to pixel coordinates."""
        return (x * self.width, y * self.height)


@dataclass(frozen=True)
class DepthConfig:
    """Numeric policy for gating, depth estimation, and rep detection.

    One instance is injected into every stage of a session so thresholds never
    come from module scope. Values only tune behaviour; none change structure.

    Attributes:
        vis_th: Minimum hip/knee visibility for a leg to be measured.
        th_high: Depth ratio a peak must reach to count as a passing rep.
        hold_n: Samples around a peak that must stay above ``th_low``.
        side_px: Minimum side-on separation (pixels) for the profile gate.
        hysteresis_ratio: ``th_low`` as a fraction of ``th_high``.
        th_low: Explicit lower threshold; derived from the ratio when None.
        min_gap: Indices skipped after a counted rep.
        min_prominence: Minimum rise of a peak above its surrounding minima.
        prominence_window: Half-width of the window searched for minima.
        profile_ratio: Fraction of ``side_px`` the depth-only spread must reach.
        depth_z_scale: Multiplier turning relative z into pixel-like units.
        count_low_peaks_as_fail: Count rejected candidate peaks as FAIL reps.
        buffer_capacity: Series length that triggers compaction.
        buffer_retain: Samples kept after compaction.
    """

    vis_th: float = 0.5
    th_high: float = 0.8
    hold_n: int = 3
    side_px: float = 60.0
    hysteresis_ratio: float = 0.85
    th_low: Optional[float] = None
    min_gap: int = 12
    min_prominence: float = 0.04
    prominence_window: int = 10
    profile_ratio: float = 0.6
    depth_z_scale: float = 5.0
    count_low_peaks_as_fail: bool = False
    buffer_capacity: int = 2000
    buffer_retain: int = 1000

    FINITE_FIELDS = (
        "vis_th",
        "th_high",
        "th_low",
        "side_px",
        "hysteresis_ratio",
        "min_prominence",
        "profile_ratio",
        "depth_z_scale",
    )

    def __post_init__(self) -> None:
        for name in self.FINITE_FIELDS:
            value = getattr(self, name)
            if value is not None and not math.isfinite(value):
                raise ValueError(f"{name} must be a finite number")
        if not 0.0 <= self.vis_th <= 1.0:
            raise ValueError("vis_th must be within [0, 1]")
        if self.th_high <= 0:
            raise ValueError("th_high must be positive")
        if self.th_low is not None and self.th_low > self.th_high:
            raise ValueError("th_low cannot exceed th_high")
        if not 0.0 < self.hysteresis_ratio <= 1.0:
            raise ValueError("hysteresis_ratio must be within (0, 1]")
        if self.hold_n < 0:
            raise ValueError("hold_n must be non-negative")
        if self.side_px < 0:
            raise ValueError("side_px must be non-negative")
        if self.min_gap < 0:
            raise ValueError("min_gap must be non-negative")
        if self.min_prominence < 0:
            raise ValueError("min_prominence must be non-negative")
        if self.prominence_window < 1:
            raise ValueError("prominence_window must be at least 1")
        if self.buffer_retain <= 0 or self.buffer_retain >= self.buffer_capacity:
            raise ValueError("buffer_retain must be positive and below buffer_capacity")

    @property
    def low_threshold(self) -> float:
        """Lower hysteresis threshold used for candidates and hold counting."""
        if self.th_low is not None:
            return self.th_low
        return self.th_high * self.hysteresis_ratio

    @property
    def profile_px(self) -> float:
        """Depth-only spread that passes the gate on its own."""
        return self.side_px * self.profile_ratio

    @property
    def reject_skip(self) -> int:
        """Indices skipped after a rejected candidate."""
        return max(4, self.min_gap // 2)

    def with_overrides(self, **overrides: object) -> "DepthConfig":
        """Return a copy with the non-None overrides applied.

        Unknown keys raise ``ValueError`` so typos in CLI/API input surface.
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValueError(f"Unknown config option(s): {', '.join(unknown)}")
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)
