# unit_registry/routers/vehicles.py
"""Impounded vehicles: CRUD, search, release date and registration numbers."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from unit_registry.config import settings
from unit_registry.database import get_db
from unit_registry.schemas.common import Page, build_page
from unit_registry.schemas.vehicle import (
    NextRegistrationOut, ReleaseDateUpdate, VehicleFilter, VehicleForm, VehicleFormState, VehicleOut,
)
from unit_registry.services import vehicle_service

router = APIRouter()


@router.get("/vehicles", response_model=Page[VehicleOut], summary="List vehicles, newest registration first")
def list_vehicles(
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=500),
    db: Session = Depends(get_db),
):
    return build_page(vehicle_service.list_vehicles(db), page, page_size, VehicleOut)


@router.post("/vehicles/search", response_model=Page[VehicleOut], summary="Search vehicles")
def search_vehicles(
    criteria: VehicleFilter,
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=500),
    db: Session = Depends(get_db),
):
    """Blank criteria are ignored. Results are ordered by registration number, descending."""
    return build_page(vehicle_service.search_vehicles(db, criteria), page, page_size, VehicleOut)


@router.get("/vehicles/registration/next", response_model=NextRegistrationOut,
            summary="Registration number the next auto-numbered vehicle would get")
def next_registration(db: Session = Depends(get_db)):
    return {"registration_number": vehicle_service.preview_registration_number(db)}


@router.get("/vehicles/{vehicle_id}", response_model=VehicleOut)
def get_vehicle(vehicle_id: str, db: Session = Depends(get_db)):
    return vehicle_service.get_vehicle(db, vehicle_id)


@router.get("/vehicles/{vehicle_id}/form", response_model=VehicleFormState,
            summary="Edit-form state, including registration mode")
def get_vehicle_form(vehicle_id: str, db: Session = Depends(get_db)):
    return vehicle_service.vehicle_form_state(db, vehicle_id)


@router.post("/vehicles", response_model=VehicleOut, status_code=201, summary="Register a vehicle")
def create_vehicle(body: VehicleForm, db: Session = Depends(get_db)):
    return vehicle_service.create_vehicle(db, body)


@router.put("/vehicles/{vehicle_id}", response_model=VehicleOut, summary="Edit a vehicle")
def update_vehicle(vehicle_id: str, body: VehicleForm, db: Session = Depends(get_db)):
    return vehicle_service.update_vehicle(db, vehicle_id, body)


@router.patch("/vehicles/{vehicle_id}/release-date", response_model=VehicleOut,
              summary="Set or clear the release date")
def set_release_date(vehicle_id: str, body: ReleaseDateUpdate, db: Session = Depends(get_db)):
    return vehicle_service.set_release_date(db, vehicle_id, body.release_date)


@router.delete("/vehicles/{vehicle_id}", summary="Remove a vehicle")
def delete_vehicle(vehicle_id: str, db: Session = Depends(get_db)):
    vehicle_service.delete_vehicle(db, vehicle_id)
    return {"status": "removed", "id": vehicle_id}
