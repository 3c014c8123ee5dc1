# unit_registry/routers/events.py
"""
Service orders on the calendar.
GET /events?upcoming=true only returns orders that have not started yet.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from unit_registry.database import get_db
from unit_registry.schemas.calendar_event import EventForm, EventOut
from unit_registry.services import event_service

router = APIRouter()


@router.get("/events", response_model=list[EventOut], summary="List service orders by start time")
def list_events(upcoming: bool = False, db: Session = Depends(get_db)):
    if upcoming:
        return event_service.upcoming_events(db)
    return event_service.list_events(db)


@router.get("/events/{event_id}", response_model=EventOut)
def get_event(event_id: str, db: Session = Depends(get_db)):
    return event_service.get_event(db, event_id)


@router.post("/events", response_model=EventOut, status_code=201, summary="Schedule a service order")
def create_event(body: EventForm, db: Session = Depends(get_db)):
    return event_service.create_event(db, body)


@router.put("/events/{event_id}", response_model=EventOut, summary="Edit a service order")
def update_event(event_id: str, body: EventForm, db: Session = Depends(get_db)):
    return event_service.update_event(db, event_id, body)


@router.delete("/events/{event_id}", summary="Cancel a service order")
def delete_event(event_id: str, db: Session = Depends(get_db)):
    event_service.delete_event(db, event_id)
    return {"status": "removed", "id": event_id}
