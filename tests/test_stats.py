# tests/test_stats.py
"""Unit tests for the statistics aggregator."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import date
from types import SimpleNamespace

from unit_registry.constants import CITIES, TRANSFER_SECTORS
from unit_registry.services.query import apply_constraints, vehicle_report_constraints
from unit_registry.services.stats_service import asset_stats, vehicle_stats


def make_vehicle(city, release=None, vehicle_type="Automóvel", state="PR", has_key=False, number=1):
    return SimpleNamespace(
        registration_number=number, city=city, release_date=release, vehicle_type=vehicle_type,
        state=state, has_key=has_key, inspection_date=date(2024, 1, 1),
    )


def make_asset(sector, value=100.0, conservation="Bom", asset_class="Mobiliário em geral"):
    return SimpleNamespace(sector=sector, net_value=value, conservation_state=conservation, asset_class=asset_class)


class TestVehicleStats:
    def test_empty_set(self):
        stats = vehicle_stats([])
        assert stats.total == 0
        assert list(stats.by_city) == CITIES
        assert all(b.total == 0 for b in stats.by_city.values())

    def test_buckets_sum_to_total(self):
        vehicles = [
            make_vehicle("Medianeira", date(2024, 1, 5), has_key=True),
            make_vehicle("SMI", state="SC"),
            make_vehicle("Missal", vehicle_type="Motocicleta"),
            make_vehicle("Missal", date(2024, 2, 1), vehicle_type="Motocicleta", has_key=True),
        ]
        stats = vehicle_stats(vehicles)
        assert stats.total == 4
        assert stats.released + stats.not_released == stats.total
        assert sum(b.total for b in stats.by_city.values()) == stats.total
        assert sum(b.total for b in stats.by_type.values()) == stats.total
        assert sum(stats.by_state.values()) == stats.total
        assert stats.by_key.yes + stats.by_key.no == stats.total
        assert stats.by_type["Motocicleta"].released == 1

    def test_unknown_city_kept_after_canonical(self):
        stats = vehicle_stats([make_vehicle("Foz do Iguaçu")])
        assert list(stats.by_city)[-1] == "Foz do Iguaçu"
        assert stats.by_city["Foz do Iguaçu"].total == 1

    def test_medianeira_scenario(self):
        vehicles = [
            make_vehicle("Medianeira", date(2024, 3, 1), number=3),
            make_vehicle("Medianeira", None, number=2),
            make_vehicle("SMI", date(2024, 3, 2), number=1),
        ]
        filtered = apply_constraints(vehicles, vehicle_report_constraints("Medianeira", None, None))
        assert len(filtered) == 2

        stats = vehicle_stats(filtered)
        assert stats.by_city["Medianeira"].total == 2
        assert stats.by_city["Medianeira"].released == 1
        assert stats.by_city["Medianeira"].not_released == 1
        assert stats.by_city["SMI"].total == 0


class TestAssetStats:
    def test_totals_and_values(self):
        assets = [make_asset("Comando", 100.0), make_asset("Comando", 50.5), make_asset("Rotam", 10.0, "Ruim")]
        stats = asset_stats(assets)
        assert stats.total == 3
        assert stats.total_value == 160.5
        assert stats.by_sector["Comando"].count == 2
        assert stats.by_sector["Comando"].value == 150.5
        assert sum(b.count for b in stats.by_sector.values()) == stats.total
        assert sum(stats.by_conservation_state.values()) == stats.total
        assert sum(stats.by_class.values()) == stats.total

    def test_removed_sector_is_a_bucket(self):
        stats = asset_stats([make_asset("Removido")])
        assert list(stats.by_sector) == TRANSFER_SECTORS
        assert stats.by_sector["Removido"].count == 1

    def test_missing_value_counts_as_zero(self):
        stats = asset_stats([make_asset("Comando", None)])
        assert stats.total_value == 0.0
