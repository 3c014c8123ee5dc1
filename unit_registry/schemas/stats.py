# unit_registry/schemas/stats.py
from pydantic import BaseModel, Field
from datetime import date
from typing import Dict, Optional


class ReleaseBucket(BaseModel):
    total: int = 0
    released: int = 0
    not_released: int = 0


class KeyCount(BaseModel):
    yes: int = 0
    no: int = 0


class VehicleStats(BaseModel):
    total: int = 0
    released: int = 0
    not_released: int = 0
    by_city: Dict[str, ReleaseBucket] = Field(default_factory=dict)
    by_type: Dict[str, ReleaseBucket] = Field(default_factory=dict)
    by_key: KeyCount = Field(default_factory=KeyCount)
    by_state: Dict[str, int] = Field(default_factory=dict)


class ValueBucket(BaseModel):
    count: int = 0
    value: float = 0.0


class AssetStats(BaseModel):
    total: int = 0
    total_value: float = 0.0
    by_sector: Dict[str, ValueBucket] = Field(default_factory=dict)
    by_conservation_state: Dict[str, int] = Field(default_factory=dict)
    by_class: Dict[str, int] = Field(default_factory=dict)


class VehicleReportOut(BaseModel):
    city: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    stats: VehicleStats


class AssetReportOut(BaseModel):
    sector: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    stats: AssetStats
