# tests/test_registration.py
"""Unit tests for registration-number allocation."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from datetime import date
from unittest.mock import MagicMock

from unit_registry.config import settings
from unit_registry.errors import RecordValidationError
from unit_registry.services.registration import (
    RegistrationAllocation, is_external_registration, next_registration_number,
    parse_external_registration,
)
from unit_registry.services.store import RecordStore


def store_with_last(number):
    store = MagicMock()
    store.find.return_value = [MagicMock(registration_number=number)] if number is not None else []
    return store


class TestNextNumber:
    def test_seed_on_empty_collection(self):
        assert next_registration_number(store_with_last(None)) == settings.REGISTRATION_SEED == 1202891

    def test_max_plus_one(self):
        assert next_registration_number(store_with_last(1203000)) == 1203001

    def test_reads_highest_number_from_store(self, db):
        store = RecordStore(db, "vehicles")
        for number in (1202895, 1202999, 1202900):
            store.create(registration_number=number, plate="AAA0000", state="PR",
                         inspection_date=date(2024, 1, 1), brand="VW", model="Gol",
                         vehicle_type="Automóvel", city="Missal")
        assert next_registration_number(store) == 1203000


class TestManualNumber:
    @pytest.mark.parametrize("raw,message", [
        (None, "Por favor, insira um número de registro"),
        ("   ", "Por favor, insira um número de registro"),
        ("12a", "O número de registro deve ser um número válido"),
        ("0", "O número de registro deve ser maior que zero"),
        ("-5", "O número de registro deve ser maior que zero"),
    ])
    def test_rejected(self, raw, message):
        with pytest.raises(RecordValidationError) as exc:
            parse_external_registration(raw)
        assert exc.value.message == message

    def test_accepted(self):
        assert parse_external_registration(" 987 ") == 987


class TestAllocation:
    def test_auto_mode_allocates(self):
        allocation = RegistrationAllocation()
        assert allocation.resolve(store_with_last(10)) == 11

    def test_auto_mode_keeps_number_on_edit(self):
        allocation = RegistrationAllocation()
        assert allocation.resolve(store_with_last(500), current=42) == 42

    def test_manual_mode_uses_supplied_number(self):
        allocation = RegistrationAllocation(manual=True, external_number="777")
        assert allocation.resolve(store_with_last(10)) == 777

    def test_new_allocation_starts_empty(self):
        assert RegistrationAllocation(manual=True, external_number="5").value is None

    def test_switching_to_manual_ignores_auto_number(self, db):
        store = RecordStore(db, "vehicles")
        auto = RegistrationAllocation()
        assert auto.resolve(store) == 1202891

        manual = RegistrationAllocation(manual=True, external_number=" 42 ")
        assert manual.resolve(store) == 42

    def test_manual_mode_on_edit_replaces_number(self):
        allocation = RegistrationAllocation(manual=True, external_number="900")
        assert allocation.resolve(store_with_last(10), current=5) == 900


class TestExternalDetection:
    def test_far_below_sequence_is_external(self):
        assert is_external_registration(500, store_with_last(1203000))

    def test_recent_number_is_not_external(self):
        assert not is_external_registration(1202950, store_with_last(1203000))

    def test_boundary(self):
        last = 1203000
        assert not is_external_registration(last - settings.EXTERNAL_REGISTRATION_GAP, store_with_last(last))
        assert is_external_registration(last - settings.EXTERNAL_REGISTRATION_GAP - 1, store_with_last(last))
