"""
Impounded vehicles collection.
registration_number is meant to be unique but only the allocation
procedure keeps it that way; there is no DB constraint.
"""

from sqlalchemy import Boolean, Column, Date, DateTime, Integer, String, Text
from unit_registry.database import Base, generate_id


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(String(32), primary_key=True, default=generate_id)
    registration_number = Column(Integer, nullable=False, index=True)
    plate = Column(String(20), nullable=False, index=True)   # "SEM PLACA" when has_no_plate
    state = Column(String(2), nullable=False)                # UF, "EX" or "--"
    inspection_date = Column(Date, nullable=False, index=True)
    release_date = Column(Date)                              # NULL = not released yet
    brand = Column(String(100), nullable=False)
    model = Column(String(100), nullable=False)
    vehicle_type = Column(String(50), nullable=False, index=True)
    has_key = Column(Boolean, default=False, nullable=False)
    chassis_observation = Column(Text, default="")
    city = Column(String(50), nullable=False, index=True)
    bou_trv = Column(String(100), default="")
    has_no_plate = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, index=True)
    updated_at = Column(DateTime)

    def __repr__(self):
        return f"<Vehicle {self.registration_number} plate={self.plate} city={self.city}>"
