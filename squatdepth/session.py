"""One squat analysis session: per-frame streaming plus a single finalize.

Frames are pushed as they arrive from the pose engine. Each frame is gated,
measured, and appended to the session's depth buffer, and the caller gets a
diagnostic and live feedback back for drawing. When the set is over,
:meth:`SquatSession.finalize` smooths the whole buffered series, detects reps
and returns the verdict. A session is finalized once and then discarded.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence

from squatdepth.config import DepthConfig, FrameSize
from squatdepth.repdetect.hysteresis import PeakCandidate, RepDetector
from squatdepth.repdetect.summary import SummarizeResult, Summarizer
from squatdepth.signals.buffer import DepthSample, DepthSeriesBuffer
from squatdepth.signals.depth import DepthEstimator, DiagnosticReason, FrameDiagnostic
from squatdepth.signals.smoothing import Smoother
from squatdepth.utils.logger import get_logger
from squatdepth.vision.cache import PoseFrame
from squatdepth.vision.landmarks import normalize_landmarks

log = get_logger(__name__)


class SessionFinalizedError(RuntimeError):
    """Raised when a finalized session is fed frames or finalized again."""


class FeedbackStatus(str, Enum):
    UNSURE = "unsure"
    SHALLOW = "shallow"
    DEEP = "deep"


STATUS_COLORS = {
    FeedbackStatus.UNSURE: "orange",
    FeedbackStatus.SHALLOW: "red",
    FeedbackStatus.DEEP: "green",
}


@dataclass(frozen=True)
class LiveFeedback:
    status: FeedbackStatus
    label: str

    @property
    def color(self) -> str:
        return STATUS_COLORS[self.status]

    @classmethod
    def from_sample(
        cls, sample: DepthSample, diagnostic: FrameDiagnostic, th_high: float
    ) -> "LiveFeedback":
        reason = diagnostic.reason.value
        if diagnostic.reason is DiagnosticReason.NO_POSE:
            return cls(FeedbackStatus.UNSURE, "No pose / UNSURE")
        if sample is None:
            return cls(FeedbackStatus.UNSURE, f"UNSURE ({reason})")
        status = FeedbackStatus.DEEP if sample >= th_high else FeedbackStatus.SHALLOW
        return cls(status, f"depth_ratio: {sample:.2f} ({reason})")


@dataclass(frozen=True)
class FrameUpdate:
    diagnostic: FrameDiagnostic
    latest: DepthSample
    feedback: LiveFeedback


@dataclass(frozen=True)
class SessionReport:
    result: SummarizeResult
    frames_processed: int
    reason_counts: Dict[str, int]
    candidates: List[PeakCandidate] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "result": self.result.to_dict(),
            "framesProcessed": self.frames_processed,
            "reasonCounts": dict(self.reason_counts),
            "candidates": [c.to_dict() for c in self.candidates],
        }


def analyze_series(series: Sequence[DepthSample], config: DepthConfig) -> tuple[SummarizeResult, List[PeakCandidate]]:
    """Smooth, detect, and summarize a complete depth series."""
    smoothed = Smoother().smooth(series)
    detection = RepDetector(config).detect(smoothed)
    return Summarizer(config).summarize(detection), detection.candidates


class SquatSession:
    def __init__(self, config: Optional[DepthConfig] = None) -> None:
        self.config = config or DepthConfig()
        self.estimator = DepthEstimator(self.config)
        self.buffer = DepthSeriesBuffer.from_config(self.config)
        self.frames_processed = 0
        self.reason_counts: Counter = Counter()
        self._finalized = False

    @property
    def finalized(self) -> bool:
        return self._finalized

    def _ensure_open(self) -> None:
        if self._finalized:
            raise SessionFinalizedError("session already finalized; start a new session")

    def process_frame(
        self, landmarks: Optional[Iterable[Any]], width: int, height: int
    ) -> FrameUpdate:
        """Gate, measure and buffer one frame.

        ``landmarks`` is the engine's landmark sequence for the frame, or None
        when no pose was found. Degraded frames never raise; they produce a
        None sample and the matching diagnostic reason.
        """
        self._ensure_open()
        normalized = normalize_landmarks(landmarks)
        diagnostic = self.estimator.diagnose(normalized, FrameSize(width=width, height=height))
        latest = self.buffer.append([diagnostic.sample])

        self.frames_processed += 1
        self.reason_counts[diagnostic.reason.value] += 1
        return FrameUpdate(
            diagnostic=diagnostic,
            latest=latest,
            feedback=LiveFeedback.from_sample(latest, diagnostic, self.config.th_high),
        )

    def series(self) -> List[DepthSample]:
        return self.buffer.snapshot()

    def finalize(self) -> SessionReport:
        """Run smoothing, rep detection and summarizing over the session."""
        self._ensure_open()
        self._finalized = True

        result, candidates = analyze_series(self.buffer.snapshot(), self.config)
        log.info(
            "session finalized: %s pass=%d fail=%d frames=%d",
            result.summary.value,
            result.passed,
            result.failed,
            self.frames_processed,
        )
        return SessionReport(
            result=result,
            frames_processed=self.frames_processed,
            reason_counts={reason.value: self.reason_counts.get(reason.value, 0) for reason in DiagnosticReason},
            candidates=candidates,
        )


def replay(
    frames: Iterable[PoseFrame],
    config: Optional[DepthConfig] = None,
    *,
    size: Optional[FrameSize] = None,
) -> SessionReport:
    """Run a recorded session through a fresh :class:`SquatSession`.

    ``size`` overrides the per-frame dimensions; it is required for frames
    that were recorded without width/height.
    """

    session = SquatSession(config)
    for frame in frames:
        if size is not None:
            width, height = size.width, size.height
        elif frame.width is not None and frame.height is not None:
            width, height = frame.width, frame.height
        else:
            raise ValueError(f"frame {frame.frame_index} has no frame size; pass size explicitly")
        session.process_frame(frame.landmarks, width, height)
    return session.finalize()
