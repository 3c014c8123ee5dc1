# Unit Registry: database models
# Import all models here for SQLAlchemy discovery

from unit_registry.models.vehicle import Vehicle               # noqa
from unit_registry.models.asset import Asset                   # noqa
from unit_registry.models.calendar_event import CalendarEvent  # noqa

# Collection name -> model, used by the record store
COLLECTIONS = {
    "vehicles": Vehicle,
    "assets": Asset,
    "events": CalendarEvent,
}
