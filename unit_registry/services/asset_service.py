# unit_registry/services/asset_service.py
"""
Unit property: registration, edits, sector transfers and report data.

A transfer appends to transfer_history and moves the sector in the same
write. The history list is read, extended and written back whole, so two
concurrent transfers of the same asset can lose one entry.
"""

from datetime import date, datetime
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from unit_registry.errors import RecordValidationError
from unit_registry.schemas.asset import AssetCreate, AssetFilter, AssetForm, TransferRequest
from unit_registry.schemas.stats import AssetStats
from unit_registry.services.query import (
    Constraint, Op, asset_constraints, asset_report_constraints, equal, run_query,
)
from unit_registry.services.stats_service import asset_stats
from unit_registry.services.store import RecordStore
from unit_registry.utils.logger import get_logger

logger = get_logger(__name__)


def _store(db: Session) -> RecordStore:
    return RecordStore(db, "assets")


def list_assets(db: Session, sector: Optional[str] = None) -> List:
    """Newest first, optionally limited to one sector."""
    return run_query(_store(db), [Constraint("created_at", Op.ORDER_DESC)] + equal("sector", sector))


def search_assets(db: Session, criteria: AssetFilter) -> List:
    return run_query(_store(db), asset_constraints(criteria))


def get_asset(db: Session, asset_id: str):
    return _store(db).require(asset_id)


def create_asset(db: Session, form: AssetCreate):
    now = datetime.utcnow()
    asset = _store(db).create(
        **form.model_dump(),
        transfer_history=[],
        created_at=now,
        updated_at=now,
    )
    logger.info(f"[ASSET] Registered {asset.general_tag}/{asset.local_tag} in {asset.sector}")
    return asset


def update_asset(db: Session, asset_id: str, form: AssetForm):
    store = _store(db)
    asset = store.require(asset_id)
    fields = form.model_dump(exclude={"sector"})
    fields["updated_at"] = datetime.utcnow()
    return store.update(asset, fields)


def transfer_asset(db: Session, asset_id: str, request: TransferRequest):
    store = _store(db)
    asset = store.require(asset_id)
    if request.to_sector == asset.sector:
        raise RecordValidationError("O patrimônio já está neste setor")

    now = datetime.utcnow()
    reason = request.reason.strip() if request.reason and request.reason.strip() else None
    history = list(asset.transfer_history or [])
    history.append({
        "from_sector": asset.sector,
        "to_sector": request.to_sector,
        "date": now.isoformat(),
        "reason": reason,
    })
    logger.info(f"[ASSET] {asset.general_tag}: {asset.sector} -> {request.to_sector}")
    return store.update(asset, {
        "sector": request.to_sector,
        "transfer_history": history,
        "updated_at": now,
    })


def list_descriptions(db: Session) -> List[str]:
    """Distinct descriptions already in use, for form autocomplete."""
    return sorted({asset.description for asset in _store(db).find()})


def asset_report(db: Session, sector: Optional[str], start: Optional[date],
                 end: Optional[date]) -> Tuple[List, AssetStats]:
    assets = run_query(_store(db), asset_report_constraints(sector, start, end))
    return assets, asset_stats(assets)
