"""Final session verdict built from rep detection counts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from squatdepth.config import DepthConfig
from squatdepth.repdetect.hysteresis import Detection


class Verdict(str, Enum):
    PASS = "PASS"
    FAIL = "FAIL"
    MIXED = "MIXED"
    UNSURE = "UNSURE"


@dataclass(frozen=True)
class SummarizeResult:
    """Verdict record handed to the transport side at session end.

    Attributes:
        summary: Overall verdict.
        passed: Reps that reached ``threshold`` with enough hold frames.
        failed: Rejected peaks; stays 0 unless low peaks count as FAIL.
        threshold: High threshold the reps were judged against.
        hold: Hold frame count required.
        depth_ratio_max: Deepest counted rep, or deepest smoothed sample when
            nothing was counted; None when no depth was ever measured.
    """

    summary: Verdict
    passed: int
    failed: int
    threshold: float
    hold: int
    depth_ratio_max: Optional[float] = None

    def to_dict(self) -> dict:
        payload = {
            "summary": self.summary.value,
            "pass": self.passed,
            "fail": self.failed,
            "threshold": self.threshold,
            "hold": self.hold,
        }
        if self.depth_ratio_max is not None:
            payload["depthRatioMax"] = self.depth_ratio_max
        return payload


def classify(passed: int, failed: int, depth_observed: bool) -> Verdict:
    if passed > 0 and failed == 0:
        return Verdict.PASS
    if passed > 0:
        return Verdict.MIXED
    return Verdict.FAIL if depth_observed else Verdict.UNSURE


class Summarizer:
    def __init__(self, config: DepthConfig) -> None:
        self.config = config

    def summarize(self, detection: Detection) -> SummarizeResult:
        return SummarizeResult(
            summary=classify(detection.passed, detection.failed, detection.depth_observed),
            passed=detection.passed,
            failed=detection.failed,
            threshold=self.config.th_high,
            hold=self.config.hold_n,
            depth_ratio_max=detection.depth_ratio_max,
        )
