"""
Pydantic models for Cadastre Collector output
Report and project state shapes written to JSON
"""

from datetime import datetime, timezone
from typing import List, Optional, Dict, Any, Literal
from pydantic import BaseModel, Field


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


# ============================================================
# Measurement Models
# ============================================================

class ParcelMeasurement(BaseModel):
    feature_id: str
    pnu: Optional[str] = None
    area_sqm: float
    perimeter_m: float
    ring_closed: bool  # Outer ring repeats its first vertex (closing edge measured)
    bbox: List[float] = Field(default_factory=list)  # [min_lon, min_lat, max_lon, max_lat]
    properties: Dict[str, Any] = Field(default_factory=dict)


class RegionReport(BaseModel):
    region_code: str
    status: Literal["collected", "empty", "failed"]
    reason: Optional[str] = None
    parcel_count: int = 0
    total_area_sqm: float = 0.0
    total_perimeter_m: float = 0.0
    generated_at: str = Field(default_factory=_utc_now)
    parcels: List[ParcelMeasurement] = Field(default_factory=list)


# ============================================================
# Project State
# ============================================================

class ProjectState(BaseModel):
    project_name: str
    lands: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    updated_at: str = Field(default_factory=_utc_now)
