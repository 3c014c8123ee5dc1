# unit_registry/services/event_service.py
"""Service orders on the calendar."""

import hashlib
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from unit_registry.constants import EVENT_COLORS
from unit_registry.database import generate_id
from unit_registry.schemas.calendar_event import EventForm
from unit_registry.services.query import Constraint, Op, run_query
from unit_registry.services.store import RecordStore
from unit_registry.utils.logger import get_logger

logger = get_logger(__name__)


def _store(db: Session) -> RecordStore:
    return RecordStore(db, "events")


def pick_color(event_id: str) -> str:
    """Same id, same palette colour."""
    digest = hashlib.sha1(event_id.encode("utf-8")).hexdigest()
    return EVENT_COLORS[int(digest, 16) % len(EVENT_COLORS)]


def list_events(db: Session) -> List:
    return _store(db).find([Constraint("start", Op.ORDER_ASC)])


def upcoming_events(db: Session, now: Optional[datetime] = None) -> List:
    now = now or datetime.now()
    return run_query(_store(db), [Constraint("start", Op.ORDER_ASC), Constraint("start", Op.GTE, now)])


def get_event(db: Session, event_id: str):
    return _store(db).require(event_id)


def create_event(db: Session, form: EventForm):
    event_id = generate_id()
    now = datetime.utcnow()
    event = _store(db).create(
        id=event_id,
        color=pick_color(event_id),
        created_at=now,
        updated_at=now,
        **form.model_dump(),
    )
    logger.info(f"[EVENT] OS {event.order_number} scheduled for {event.start}")
    return event


def update_event(db: Session, event_id: str, form: EventForm):
    store = _store(db)
    event = store.require(event_id)
    return store.update(event, {**form.model_dump(), "updated_at": datetime.utcnow()})


def delete_event(db: Session, event_id: str):
    store = _store(db)
    store.delete(store.require(event_id))
