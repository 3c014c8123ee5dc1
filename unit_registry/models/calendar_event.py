"""
Service orders shown on the calendar.
color is picked once at creation and never rewritten.
"""

from sqlalchemy import Column, DateTime, String, Text
from unit_registry.database import Base, generate_id


class CalendarEvent(Base):
    __tablename__ = "events"

    id = Column(String(32), primary_key=True, default=generate_id)
    title = Column(String(200), nullable=False)
    order_number = Column(String(50), nullable=False)   # free text, not unique
    start = Column(DateTime, nullable=False, index=True)
    end = Column(DateTime, nullable=False)
    location = Column(String(200), nullable=False)
    description = Column(Text)
    color = Column(String(7), nullable=False)
    created_at = Column(DateTime, index=True)
    updated_at = Column(DateTime)

    def __repr__(self):
        return f"<CalendarEvent {self.order_number} title={self.title} start={self.start}>"
