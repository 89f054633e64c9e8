"""
Service helpers for running a posted landmark session through the core pipeline.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import HTTPException

from api.schemas import AnalyzeRequest, AnalyzeResponse, DiagnosticOut, ResultOut
from squatdepth.config import DepthConfig
from squatdepth.session import SquatSession
from squatdepth.utils.logger import get_logger

log = get_logger("api.analysis")


def build_config(payload: AnalyzeRequest, base: Optional[DepthConfig] = None) -> DepthConfig:
    """
    Apply request overrides on top of the server defaults; invalid combinations become a 400.
    """
    base = base or DepthConfig()
    if payload.config is None:
        return base
    try:
        return base.with_overrides(**payload.config.model_dump(exclude_none=True))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid config: {exc}") from exc


def run_analysis(payload: AnalyzeRequest, base: Optional[DepthConfig] = None) -> AnalyzeResponse:
    config = build_config(payload, base)
    session = SquatSession(config)

    diagnostics: List[DiagnosticOut] = []
    for frame in payload.frames:
        landmarks = (
            [lm.model_dump() if lm is not None else None for lm in frame.landmarks]
            if frame.landmarks
            else None
        )
        update = session.process_frame(landmarks, frame.width, frame.height)
        if payload.include_diagnostics:
            diagnostics.append(DiagnosticOut.model_validate(update.diagnostic.to_dict()))

    report = session.finalize()
    log.info("analyzed %d frames: %s", report.frames_processed, report.result.summary.value)

    return AnalyzeResponse(
        result=ResultOut.model_validate(report.result.to_dict()),
        frames_processed=report.frames_processed,
        reason_counts=report.reason_counts,
        diagnostics=diagnostics if payload.include_diagnostics else None,
    )
