# tests/test_asset_service.py
"""Asset registration, edits and sector transfers."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from datetime import date
from pydantic import ValidationError

from factories import asset_payload
from unit_registry.errors import RecordValidationError
from unit_registry.schemas.asset import AssetCreate, AssetFilter, AssetForm, TransferRequest
from unit_registry.services import asset_service


def create(db, **overrides):
    return asset_service.create_asset(db, AssetCreate(**asset_payload(**overrides)))


class TestAssetForm:
    @pytest.mark.parametrize("field,value", [
        ("sector", "Removido"),
        ("sector", "Garagem"),
        ("asset_class", "Veículos"),
        ("conservation_state", "Ótimo"),
        ("incorporation_type", "Permuta"),
        ("general_tag", ""),
        ("net_value", -1),
    ])
    def test_rejects_invalid(self, field, value):
        with pytest.raises(ValidationError):
            AssetCreate(**asset_payload(**{field: value}))

    def test_transfer_accepts_removed(self):
        assert TransferRequest(to_sector="Removido").to_sector == "Removido"


class TestAssetService:
    def test_create_starts_with_empty_history(self, db):
        asset = create(db)
        assert asset.transfer_history == []
        assert asset.sector == "Comando"

    def test_transfer_appends_entry(self, db):
        asset = create(db, sector="Comando")
        before = len(asset.transfer_history)

        moved = asset_service.transfer_asset(db, asset.id, TransferRequest(to_sector="Rotam", reason="Remanejamento"))

        assert moved.sector == "Rotam"
        assert len(moved.transfer_history) == before + 1
        entry = moved.transfer_history[-1]
        assert entry["from_sector"] == "Comando"
        assert entry["to_sector"] == "Rotam"
        assert entry["reason"] == "Remanejamento"

    def test_second_transfer_keeps_first(self, db):
        asset = create(db, sector="Comando")
        asset_service.transfer_asset(db, asset.id, TransferRequest(to_sector="Rotam"))
        moved = asset_service.transfer_asset(db, asset.id, TransferRequest(to_sector="Removido", reason="  "))
        assert [e["to_sector"] for e in moved.transfer_history] == ["Rotam", "Removido"]
        assert moved.transfer_history[-1]["reason"] is None

    def test_same_sector_rejected(self, db):
        asset = create(db, sector="Comando")
        with pytest.raises(RecordValidationError):
            asset_service.transfer_asset(db, asset.id, TransferRequest(to_sector="Comando"))
        assert asset_service.get_asset(db, asset.id).transfer_history == []

    def test_update_does_not_touch_sector(self, db):
        asset = create(db, sector="Academia")
        form = AssetForm(**{k: v for k, v in asset_payload(description="Esteira").items() if k != "sector"})
        updated = asset_service.update_asset(db, asset.id, form)
        assert updated.description == "Esteira"
        assert updated.sector == "Academia"

    def test_list_by_sector(self, db):
        create(db, sector="Comando")
        create(db, sector="Rotam")
        assert [a.sector for a in asset_service.list_assets(db, "Rotam")] == ["Rotam"]
        assert len(asset_service.list_assets(db)) == 2

    def test_search_description_and_value(self, db):
        create(db, description="Mesa de reunião", net_value=900)
        create(db, description="Mesa lateral", net_value=90)
        create(db, description="Cadeira", net_value=900)
        result = asset_service.search_assets(db, AssetFilter(description="mesa", min_value=100))
        assert [a.description for a in result] == ["Mesa de reunião"]

    def test_descriptions_are_distinct_and_sorted(self, db):
        for description in ("Mesa", "Cadeira", "Mesa"):
            create(db, description=description)
        assert asset_service.list_descriptions(db) == ["Cadeira", "Mesa"]

    def test_report_filters_by_acquisition_date(self, db):
        create(db, acquisition_date=date(2020, 1, 1))
        create(db, acquisition_date=date(2023, 6, 1), net_value=10.0)
        assets, stats = asset_service.asset_report(db, None, date(2023, 1, 1), None)
        assert len(assets) == 1
        assert stats.total_value == 10.0
