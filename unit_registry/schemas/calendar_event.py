# unit_registry/schemas/calendar_event.py
from pydantic import BaseModel, Field, field_validator, model_validator
from datetime import datetime, timezone
from typing import Optional


class EventForm(BaseModel):
    title: str = Field(..., min_length=1)
    order_number: str = Field(..., min_length=1)
    start: datetime
    end: datetime
    location: str = Field(..., min_length=1)
    description: Optional[str] = None

    @field_validator("start", "end")
    @classmethod
    def _naive_utc(cls, value: datetime) -> datetime:
        # Stored columns are naive; offsets are folded into UTC
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    @model_validator(mode="after")
    def _end_after_start(self):
        if self.end < self.start:
            raise ValueError("O fim não pode ser anterior ao início")
        return self


class EventOut(BaseModel):
    id: str
    title: str
    order_number: str
    start: datetime
    end: datetime
    location: str
    description: Optional[str]
    color: str
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True
