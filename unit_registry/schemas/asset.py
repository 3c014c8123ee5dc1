# unit_registry/schemas/asset.py
from pydantic import BaseModel, Field, field_validator
from datetime import date, datetime
from typing import List, Optional

from unit_registry.constants import (
    ASSET_CLASSES, CONSERVATION_STATES, INCORPORATION_TYPES, SECTORS, TRANSFER_SECTORS,
)


def _one_of(value: str, allowed: list, label: str) -> str:
    if value not in allowed:
        raise ValueError(f"{label} inválido: {value}")
    return value


class AssetForm(BaseModel):
    """Editable fields. The sector is set on creation and then only via transfers."""
    general_tag: str = Field(..., min_length=1)
    local_tag: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    asset_class: str
    conservation_state: str
    acquisition_date: date
    incorporation_type: str
    acquisition_value: float = Field(0, ge=0)
    evaluation_value: float = Field(0, ge=0)
    net_value: float = Field(0, ge=0)

    @field_validator("asset_class")
    @classmethod
    def _known_class(cls, value: str) -> str:
        return _one_of(value, ASSET_CLASSES, "Classe")

    @field_validator("conservation_state")
    @classmethod
    def _known_state(cls, value: str) -> str:
        return _one_of(value, CONSERVATION_STATES, "Estado de conservação")

    @field_validator("incorporation_type")
    @classmethod
    def _known_incorporation(cls, value: str) -> str:
        return _one_of(value, INCORPORATION_TYPES, "Tipo de incorporação")


class AssetCreate(AssetForm):
    sector: str

    @field_validator("sector")
    @classmethod
    def _known_sector(cls, value: str) -> str:
        return _one_of(value, SECTORS, "Setor")


class TransferRequest(BaseModel):
    to_sector: str
    reason: Optional[str] = None

    @field_validator("to_sector")
    @classmethod
    def _known_sector(cls, value: str) -> str:
        return _one_of(value, TRANSFER_SECTORS, "Setor")


class TransferEntry(BaseModel):
    from_sector: str
    to_sector: str
    date: datetime
    reason: Optional[str] = None


class AssetOut(BaseModel):
    id: str
    sector: str
    general_tag: str
    local_tag: str
    description: str
    asset_class: str
    conservation_state: str
    acquisition_date: date
    incorporation_type: str
    acquisition_value: float
    evaluation_value: float
    net_value: float
    transfer_history: List[TransferEntry] = []
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True


class AssetFilter(BaseModel):
    general_tag: Optional[str] = None
    local_tag: Optional[str] = None
    description: Optional[str] = None       # substring, case-insensitive
    sector: Optional[str] = None
    asset_class: Optional[str] = None
    conservation_state: Optional[str] = None
    acquisition_from: Optional[date] = None
    acquisition_to: Optional[date] = None
    min_value: Optional[float] = None       # on net_value
    max_value: Optional[float] = None
