import math
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LandmarkIn(BaseModel):
    x: float
    y: float
    z: Optional[float] = Field(None, description="Relative depth; treated as 0 when absent.")
    visibility: Optional[float] = Field(None, description="Visibility in [0, 1]; treated as 1 when absent.")


class FrameIn(BaseModel):
    landmarks: Optional[List[Optional[LandmarkIn]]] = Field(
        None, description="Landmark sequence indexed by MediaPipe body part; null when no pose was found."
    )
    width: int = Field(..., gt=0, description="Frame width in pixels.")
    height: int = Field(..., gt=0, description="Frame height in pixels.")


class ConfigOverrides(BaseModel):
    """
    Optional threshold overrides. Unset fields keep the server defaults.
    """
    model_config = ConfigDict(populate_by_name=True)

    vis_th: Optional[float] = Field(None, alias="visTh")
    th_high: Optional[float] = Field(None, alias="thHigh")
    hold_n: Optional[int] = Field(None, alias="holdN")
    side_px: Optional[float] = Field(None, alias="sidePx")
    hysteresis_ratio: Optional[float] = Field(None, alias="hysteresisRatio")
    min_gap: Optional[int] = Field(None, alias="minGap")
    min_prominence: Optional[float] = Field(None, alias="minProminence")
    profile_ratio: Optional[float] = Field(None, alias="profileRatio")
    count_low_peaks_as_fail: Optional[bool] = Field(None, alias="countLowPeaksAsFail")

    @field_validator("vis_th", "th_high", "side_px", "hysteresis_ratio", "min_prominence", "profile_ratio")
    @classmethod
    def finite(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and (math.isnan(v) or math.isinf(v)):
            raise ValueError("threshold values must be finite numbers")
        return v


class AnalyzeRequest(BaseModel):
    """
    A whole recorded session: one entry per processed frame, in order.
    """
    model_config = ConfigDict(populate_by_name=True)

    frames: List[FrameIn] = Field(..., description="Per-frame landmarks in capture order.")
    config: Optional[ConfigOverrides] = None
    include_diagnostics: bool = Field(False, alias="includeDiagnostics")


class ResultOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    summary: str
    passed: int = Field(..., alias="pass")
    failed: int = Field(..., alias="fail")
    threshold: float
    hold: int
    depth_ratio_max: Optional[float] = Field(None, alias="depthRatioMax")


class DiagnosticOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ok: bool
    reason: str
    side: Optional[float] = None
    profile_spread: Optional[float] = Field(None, alias="profileSpread")
    femur: Optional[float] = None
    depth: Optional[float] = None


class AnalyzeResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    result: ResultOut
    frames_processed: int = Field(..., alias="framesProcessed")
    reason_counts: Dict[str, int] = Field(default_factory=dict, alias="reasonCounts")
    diagnostics: Optional[List[DiagnosticOut]] = None
