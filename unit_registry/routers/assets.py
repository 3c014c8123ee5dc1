# unit_registry/routers/assets.py
"""Unit property: CRUD, search, sector transfers."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from unit_registry.config import settings
from unit_registry.database import get_db
from unit_registry.schemas.asset import AssetCreate, AssetFilter, AssetForm, AssetOut, TransferEntry, TransferRequest
from unit_registry.schemas.common import Page, build_page
from unit_registry.services import asset_service

router = APIRouter()


@router.get("/assets", response_model=Page[AssetOut], summary="List assets, newest first")
def list_assets(
    sector: Optional[str] = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=500),
    db: Session = Depends(get_db),
):
    return build_page(asset_service.list_assets(db, sector), page, page_size, AssetOut)


@router.post("/assets/search", response_model=Page[AssetOut], summary="Search assets")
def search_assets(
    criteria: AssetFilter,
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=500),
    db: Session = Depends(get_db),
):
    return build_page(asset_service.search_assets(db, criteria), page, page_size, AssetOut)


@router.get("/assets/descriptions", response_model=List[str], summary="Descriptions in use (autocomplete)")
def list_descriptions(db: Session = Depends(get_db)):
    return asset_service.list_descriptions(db)


@router.get("/assets/{asset_id}", response_model=AssetOut)
def get_asset(asset_id: str, db: Session = Depends(get_db)):
    return asset_service.get_asset(db, asset_id)


@router.post("/assets", response_model=AssetOut, status_code=201, summary="Register an asset")
def create_asset(body: AssetCreate, db: Session = Depends(get_db)):
    return asset_service.create_asset(db, body)


@router.put("/assets/{asset_id}", response_model=AssetOut, summary="Edit an asset (sector excluded)")
def update_asset(asset_id: str, body: AssetForm, db: Session = Depends(get_db)):
    return asset_service.update_asset(db, asset_id, body)


@router.post("/assets/{asset_id}/transfer", response_model=AssetOut, summary="Move an asset to another sector")
def transfer_asset(asset_id: str, body: TransferRequest, db: Session = Depends(get_db)):
    """Appends one entry to the transfer history. 'Removido' takes the asset out of service."""
    return asset_service.transfer_asset(db, asset_id, body)


@router.get("/assets/{asset_id}/transfers", response_model=List[TransferEntry], summary="Transfer history")
def transfer_history(asset_id: str, db: Session = Depends(get_db)):
    return asset_service.get_asset(db, asset_id).transfer_history or []
