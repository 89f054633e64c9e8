"""Offline squat rep detection over a smoothed depth-ratio series.

Bottoms of squats show up as peaks in the depth ratio. A peak counts as a
passing rep when it

- is a local maximum over a five-sample window (ties allowed),
- clears the low hysteresis threshold,
- rises at least ``min_prominence`` above the higher of the minima on either
  side within ``prominence_window`` samples,
- reaches the high threshold while at least ``hold_n`` samples around it stay
  above the low threshold.

After a counted rep the scan jumps ``min_gap`` indices so the same bottom is
not counted twice; after a rejected candidate it jumps
``max(4, min_gap // 2)``. The whole series is needed up front because the
prominence check looks ahead, so detection runs once when a session ends.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from squatdepth.config import DepthConfig
from squatdepth.utils.logger import get_logger

log = get_logger(__name__)

DepthSample = Optional[float]

EDGE_MARGIN = 2


@dataclass(frozen=True)
class PeakCandidate:
    """A local maximum that reached the pass/reject decision."""

    index: int
    value: float
    prominence: float
    hold: int
    accepted: bool

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "value": self.value,
            "prominence": self.prominence,
            "hold": self.hold,
            "accepted": self.accepted,
        }


@dataclass
class Detection:
    passed: int = 0
    failed: int = 0
    depth_ratio_max: Optional[float] = None
    candidates: List[PeakCandidate] = field(default_factory=list)

    @property
    def depth_observed(self) -> bool:
        return self.depth_ratio_max is not None


class RepDetector:
    def __init__(self, config: DepthConfig) -> None:
        self.config = config

    def is_local_max(self, t: Sequence[DepthSample], i: int) -> bool:
        c = t[i]
        if c is None:
            return False
        return all(v is None or c >= v for v in t[i - EDGE_MARGIN:i + EDGE_MARGIN + 1])

    def prominence(self, t: Sequence[DepthSample], i: int) -> float:
        window = self.config.prominence_window
        lo = max(0, i - window)
        hi = min(len(t) - 1, i + window)
        left_min = min((v for v in t[lo:i] if v is not None), default=math.inf)
        right_min = min((v for v in t[i + 1:hi + 1] if v is not None), default=math.inf)
        base = max(
            left_min if math.isfinite(left_min) else 0.0,
            right_min if math.isfinite(right_min) else 0.0,
        )
        return t[i] - base

    def hold_count(self, t: Sequence[DepthSample], i: int) -> int:
        th_low = self.config.low_threshold
        return sum(
            1 for v in t[i - EDGE_MARGIN:i + EDGE_MARGIN + 1] if v is not None and v >= th_low
        )

    def detect(self, t: Sequence[DepthSample]) -> Detection:
        cfg = self.config
        th_low = cfg.low_threshold
        result = Detection()
        n = len(t)

        i = EDGE_MARGIN
        while i < n - EDGE_MARGIN:
            skip = 0
            c = t[i]
            if self.is_local_max(t, i) and c >= th_low:
                prom = self.prominence(t, i)
                if prom >= cfg.min_prominence:
                    hold = self.hold_count(t, i)
                    accepted = c >= cfg.th_high and hold >= cfg.hold_n
                    result.candidates.append(
                        PeakCandidate(index=i, value=c, prominence=prom, hold=hold, accepted=accepted)
                    )
                    if accepted:
                        result.passed += 1
                        if result.depth_ratio_max is None or c > result.depth_ratio_max:
                            result.depth_ratio_max = c
                        skip = cfg.min_gap
                        log.debug("rep counted at %d: depth=%.3f prom=%.3f hold=%d", i, c, prom, hold)
                    else:
                        if cfg.count_low_peaks_as_fail:
                            result.failed += 1
                        skip = cfg.reject_skip
                        log.debug("peak rejected at %d: depth=%.3f prom=%.3f hold=%d", i, c, prom, hold)
            i += skip + 1

        if result.passed == 0:
            result.depth_ratio_max = max((v for v in t if v is not None), default=None)
        return result
