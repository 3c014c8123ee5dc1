# tests/test_event_service.py
"""Service orders on the calendar."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from datetime import datetime
from pydantic import ValidationError

from factories import event_payload
from unit_registry.constants import EVENT_COLORS
from unit_registry.schemas.calendar_event import EventForm
from unit_registry.services import event_service


class TestColor:
    def test_same_id_same_color(self):
        assert event_service.pick_color("abc123") == event_service.pick_color("abc123")

    def test_color_from_palette(self):
        assert all(event_service.pick_color(str(i)) in EVENT_COLORS for i in range(50))


class TestEventForm:
    def test_end_before_start_rejected(self):
        with pytest.raises(ValidationError):
            EventForm(**event_payload(start=datetime(2030, 1, 2, 10), end=datetime(2030, 1, 2, 9)))

    def test_same_start_and_end_allowed(self):
        moment = datetime(2030, 1, 2, 10)
        assert EventForm(**event_payload(start=moment, end=moment)).end == moment

    def test_offset_times_folded_into_utc(self):
        form = EventForm(**event_payload(start="2030-01-15T08:00:00-03:00", end="2030-01-15T12:00:00"))
        assert form.start == datetime(2030, 1, 15, 11, 0)
        assert form.start.tzinfo is None

    def test_mixed_offsets_still_checked(self):
        with pytest.raises(ValidationError):
            EventForm(**event_payload(start="2030-01-15T12:00:00Z", end="2030-01-15T11:00:00"))


class TestEventService:
    def test_create_assigns_deterministic_color(self, db):
        event = event_service.create_event(db, EventForm(**event_payload()))
        assert event.color == event_service.pick_color(event.id)

    def test_update_keeps_color(self, db):
        event = event_service.create_event(db, EventForm(**event_payload()))
        color = event.color
        updated = event_service.update_event(db, event.id, EventForm(**event_payload(title="Patrulha escolar")))
        assert updated.title == "Patrulha escolar"
        assert updated.color == color

    def test_list_orders_by_start(self, db):
        event_service.create_event(db, EventForm(**event_payload(order_number="B", start=datetime(2030, 3, 1),
                                                                 end=datetime(2030, 3, 1, 1))))
        event_service.create_event(db, EventForm(**event_payload(order_number="A", start=datetime(2030, 2, 1),
                                                                 end=datetime(2030, 2, 1, 1))))
        assert [e.order_number for e in event_service.list_events(db)] == ["A", "B"]

    def test_upcoming_excludes_past(self, db):
        event_service.create_event(db, EventForm(**event_payload(order_number="OLD", start=datetime(2020, 1, 1),
                                                                 end=datetime(2020, 1, 1, 2))))
        event_service.create_event(db, EventForm(**event_payload(order_number="NEW")))
        upcoming = event_service.upcoming_events(db, now=datetime(2025, 1, 1))
        assert [e.order_number for e in upcoming] == ["NEW"]
