# unit_registry/schemas/vehicle.py
from pydantic import BaseModel, field_validator, model_validator
from datetime import date, datetime
from typing import Optional

from unit_registry.constants import CITIES, NO_PLATE, NO_STATE, STATES, VEHICLE_TYPES


def apply_plate_rule(data: dict) -> dict:
    """
    Keep plate/state consistent with the no-plate flag.
    Flag on forces the sentinels; flag off with the sentinel plate (in any
    case or spacing) clears both.
    """
    data = dict(data)
    plate = data.get("plate")
    if isinstance(plate, str):
        plate = data["plate"] = plate.strip().upper()
    if data.get("has_no_plate"):
        data["plate"] = NO_PLATE
        data["state"] = NO_STATE
    elif plate == NO_PLATE:
        data["plate"] = ""
        data["state"] = ""
    return data


class VehicleForm(BaseModel):
    """Create/edit form. release_date is only honoured on edit."""
    use_external_registration: bool = False
    external_registration_number: Optional[str] = None
    plate: str = ""
    state: str = ""
    inspection_date: date
    brand: str
    model: str
    vehicle_type: str
    has_key: bool = False
    chassis_observation: str = ""
    city: str
    bou_trv: str = ""
    has_no_plate: bool = False
    release_date: Optional[date] = None

    @model_validator(mode="before")
    @classmethod
    def _plate_rule(cls, data):
        return apply_plate_rule(data) if isinstance(data, dict) else data

    @field_validator("plate")
    @classmethod
    def _upper_plate(cls, value: str) -> str:
        return value.strip().upper()

    @field_validator("vehicle_type")
    @classmethod
    def _known_type(cls, value: str) -> str:
        if value not in VEHICLE_TYPES:
            raise ValueError(f"Tipo de veículo inválido: {value}")
        return value

    @field_validator("city")
    @classmethod
    def _known_city(cls, value: str) -> str:
        if value not in CITIES:
            raise ValueError(f"Cidade inválida: {value}")
        return value

    @field_validator("state")
    @classmethod
    def _known_state(cls, value: str) -> str:
        if value and value not in STATES:
            raise ValueError(f"UF inválida: {value}")
        return value

    @model_validator(mode="after")
    def _required_fields(self):
        if not self.plate:
            raise ValueError("Informe a placa ou marque o veículo como sem placa")
        if self.plate == NO_PLATE and not self.has_no_plate:
            raise ValueError("Marque o veículo como sem placa para usar 'SEM PLACA'")
        if not self.state:
            raise ValueError("Selecione a UF")
        if not self.brand.strip() or not self.model.strip():
            raise ValueError("Marca e modelo são obrigatórios")
        return self


class VehicleOut(BaseModel):
    id: str
    registration_number: int
    plate: str
    state: str
    inspection_date: date
    release_date: Optional[date]
    brand: str
    model: str
    vehicle_type: str
    has_key: bool
    chassis_observation: Optional[str]
    city: str
    bou_trv: Optional[str]
    has_no_plate: bool
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True


class VehicleFormState(VehicleOut):
    """Edit-form defaults: which registration mode the vehicle was stored under."""
    use_external_registration: bool
    external_registration_number: Optional[str] = None


class ReleaseDateUpdate(BaseModel):
    release_date: Optional[date] = None   # None clears it (vehicle back to not released)


class NextRegistrationOut(BaseModel):
    registration_number: int


class VehicleFilter(BaseModel):
    registration_number: Optional[int] = None
    plate: Optional[str] = None
    city: Optional[str] = None
    vehicle_type: Optional[str] = None
    state: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    has_key: Optional[bool] = None
    is_released: Optional[bool] = None     # None = either
    bou_trv: Optional[str] = None
    has_no_plate: bool = False
    inspection_from: Optional[date] = None
    inspection_to: Optional[date] = None
    release_from: Optional[date] = None
    release_to: Optional[date] = None
