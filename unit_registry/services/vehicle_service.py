# unit_registry/services/vehicle_service.py
"""
Impounded vehicles: create/edit through the form schema, search, release
and report data. Used by the vehicles and reports routers.
"""

from datetime import date, datetime
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from unit_registry.schemas.stats import VehicleStats
from unit_registry.schemas.vehicle import VehicleFilter, VehicleForm, VehicleFormState, VehicleOut
from unit_registry.services.query import (
    Constraint, Op, run_query, vehicle_constraints, vehicle_report_constraints,
)
from unit_registry.services.registration import (
    RegistrationAllocation, is_external_registration, next_registration_number,
)
from unit_registry.services.stats_service import vehicle_stats
from unit_registry.services.store import RecordStore
from unit_registry.utils.logger import get_logger

logger = get_logger(__name__)

FORM_ONLY_FIELDS = {"use_external_registration", "external_registration_number", "release_date"}


def _store(db: Session) -> RecordStore:
    return RecordStore(db, "vehicles")


def _record_fields(form: VehicleForm) -> dict:
    return form.model_dump(exclude=FORM_ONLY_FIELDS)


def list_vehicles(db: Session) -> List:
    """All vehicles, highest registration number first."""
    return _store(db).find([Constraint("registration_number", Op.ORDER_DESC)])


def search_vehicles(db: Session, criteria: VehicleFilter) -> List:
    return run_query(_store(db), vehicle_constraints(criteria))


def get_vehicle(db: Session, vehicle_id: str):
    return _store(db).require(vehicle_id)


def preview_registration_number(db: Session) -> int:
    return next_registration_number(_store(db))


def create_vehicle(db: Session, form: VehicleForm):
    store = _store(db)
    allocation = RegistrationAllocation(form.use_external_registration, form.external_registration_number)
    number = allocation.resolve(store)
    now = datetime.utcnow()
    vehicle = store.create(
        registration_number=number,
        release_date=None,
        created_at=now,
        updated_at=now,
        **_record_fields(form),
    )
    logger.info(f"[VEHICLE] Registered #{number} plate={vehicle.plate} city={vehicle.city}")
    return vehicle


def update_vehicle(db: Session, vehicle_id: str, form: VehicleForm):
    store = _store(db)
    vehicle = store.require(vehicle_id)
    allocation = RegistrationAllocation(form.use_external_registration, form.external_registration_number)
    fields = _record_fields(form)
    fields.update(
        registration_number=allocation.resolve(store, current=vehicle.registration_number),
        release_date=form.release_date,
        updated_at=datetime.utcnow(),
    )
    return store.update(vehicle, fields)


def set_release_date(db: Session, vehicle_id: str, release_date: Optional[date]):
    store = _store(db)
    vehicle = store.require(vehicle_id)
    logger.info(f"[VEHICLE] #{vehicle.registration_number} release date -> {release_date}")
    return store.update(vehicle, {"release_date": release_date, "updated_at": datetime.utcnow()})


def delete_vehicle(db: Session, vehicle_id: str):
    store = _store(db)
    store.delete(store.require(vehicle_id))


def vehicle_form_state(db: Session, vehicle_id: str) -> VehicleFormState:
    """Stored vehicle plus the registration mode its edit form should open in."""
    store = _store(db)
    vehicle = store.require(vehicle_id)
    external = is_external_registration(vehicle.registration_number, store)
    return VehicleFormState(
        **VehicleOut.model_validate(vehicle).model_dump(),
        use_external_registration=external,
        external_registration_number=str(vehicle.registration_number) if external else None,
    )


def vehicle_report(db: Session, city: Optional[str], start: Optional[date],
                   end: Optional[date]) -> Tuple[List, VehicleStats]:
    vehicles = run_query(_store(db), vehicle_report_constraints(city, start, end))
    return vehicles, vehicle_stats(vehicles)
