# unit_registry/services/stats_service.py
"""
Statistics aggregator: grouped counts (and asset value sums) over a filtered set.

One linear pass per call. Buckets come out in the canonical enumeration
order with zeros for absent categories, followed by any non-enumerated
values in order of first appearance, so every record lands in exactly one
bucket per dimension and report/chart output is stable across runs.
"""

from typing import Callable, Dict, Iterable, List, TypeVar

from unit_registry.constants import (
    ASSET_CLASSES, CITIES, CONSERVATION_STATES, STATES, TRANSFER_SECTORS, VEHICLE_TYPES,
)
from unit_registry.schemas.stats import (
    AssetStats, KeyCount, ReleaseBucket, ValueBucket, VehicleStats,
)

B = TypeVar("B")


def canonical_order(counts: Dict[str, B], canonical: List[str], empty: Callable[[], B]) -> Dict[str, B]:
    ordered = {key: counts.get(key, empty()) for key in canonical}
    for key, bucket in counts.items():
        if key not in ordered:
            ordered[key] = bucket
    return ordered


def _count_release(bucket: ReleaseBucket, released: bool):
    bucket.total += 1
    if released:
        bucket.released += 1
    else:
        bucket.not_released += 1


def vehicle_stats(vehicles: Iterable) -> VehicleStats:
    by_city: Dict[str, ReleaseBucket] = {}
    by_type: Dict[str, ReleaseBucket] = {}
    by_state: Dict[str, int] = {}
    by_key = KeyCount()
    total = released = 0

    for vehicle in vehicles:
        is_released = vehicle.release_date is not None
        total += 1
        released += is_released
        _count_release(by_city.setdefault(vehicle.city, ReleaseBucket()), is_released)
        _count_release(by_type.setdefault(vehicle.vehicle_type, ReleaseBucket()), is_released)
        by_state[vehicle.state] = by_state.get(vehicle.state, 0) + 1
        if vehicle.has_key:
            by_key.yes += 1
        else:
            by_key.no += 1

    return VehicleStats(
        total=total,
        released=released,
        not_released=total - released,
        by_city=canonical_order(by_city, CITIES, ReleaseBucket),
        by_type=canonical_order(by_type, VEHICLE_TYPES, ReleaseBucket),
        by_key=by_key,
        by_state=canonical_order(by_state, STATES, int),
    )


def asset_stats(assets: Iterable) -> AssetStats:
    by_sector: Dict[str, ValueBucket] = {}
    by_conservation: Dict[str, int] = {}
    by_class: Dict[str, int] = {}
    total = 0
    total_value = 0.0

    for asset in assets:
        value = asset.net_value or 0.0
        total += 1
        total_value += value
        bucket = by_sector.setdefault(asset.sector, ValueBucket())
        bucket.count += 1
        bucket.value += value
        by_conservation[asset.conservation_state] = by_conservation.get(asset.conservation_state, 0) + 1
        by_class[asset.asset_class] = by_class.get(asset.asset_class, 0) + 1

    return AssetStats(
        total=total,
        total_value=total_value,
        by_sector=canonical_order(by_sector, TRANSFER_SECTORS, ValueBucket),
        by_conservation_state=canonical_order(by_conservation, CONSERVATION_STATES, int),
        by_class=canonical_order(by_class, ASSET_CLASSES, int),
    )
