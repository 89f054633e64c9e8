from __future__ import annotations

from fastapi import APIRouter

from api.schemas import AnalyzeRequest, AnalyzeResponse
from api.services.analysis import run_analysis

router = APIRouter(tags=["analysis"])


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    response_model_by_alias=True,
    response_model_exclude_none=True,
)
def analyze_session(payload: AnalyzeRequest) -> AnalyzeResponse:
    """
    Judge a whole recorded session. Frames are processed in order exactly as a live
    session would, then finalized once.
    """
    return run_analysis(payload)


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}
