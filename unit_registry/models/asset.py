"""
Unit property (patrimônio) collection.
transfer_history is an append-only JSON list of
{from_sector, to_sector, date, reason} entries; sector only changes through a transfer.
"""

from sqlalchemy import Column, Date, DateTime, Float, JSON, String, Text
from unit_registry.database import Base, generate_id


class Asset(Base):
    __tablename__ = "assets"

    id = Column(String(32), primary_key=True, default=generate_id)
    sector = Column(String(50), nullable=False, index=True)
    general_tag = Column(String(50), nullable=False, index=True)
    local_tag = Column(String(50), nullable=False, index=True)
    description = Column(Text, nullable=False)
    asset_class = Column(String(100), nullable=False, index=True)
    conservation_state = Column(String(20), nullable=False, index=True)
    acquisition_date = Column(Date, nullable=False)
    incorporation_type = Column(String(30), nullable=False)
    acquisition_value = Column(Float, default=0.0, nullable=False)
    evaluation_value = Column(Float, default=0.0, nullable=False)
    net_value = Column(Float, default=0.0, nullable=False)
    transfer_history = Column(JSON, default=list, nullable=False)
    created_at = Column(DateTime, index=True)
    updated_at = Column(DateTime)

    def __repr__(self):
        return f"<Asset {self.general_tag}/{self.local_tag} sector={self.sector}>"
