# unit_registry/routers/reports.py
"""
Report screens: statistics for a filtered set, plus PDF and PNG exports.
Filters: city/sector, and a date range on inspection (vehicles) or
acquisition (assets). Every filter is optional.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from unit_registry.database import get_db
from unit_registry.schemas.stats import AssetReportOut, VehicleReportOut
from unit_registry.services import asset_service, vehicle_service
from unit_registry.services.chart_service import asset_charts, render_charts_png, vehicle_charts
from unit_registry.services.report_service import build_asset_report, build_vehicle_report, render_pdf

router = APIRouter()


def _attachment(content: bytes, media_type: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# ── Vehicles ─────────────────────────────────────────────────────────────────
@router.get("/reports/vehicles", response_model=VehicleReportOut, summary="Vehicle statistics")
def vehicle_report(city: Optional[str] = None, start_date: Optional[date] = None,
                   end_date: Optional[date] = None, db: Session = Depends(get_db)):
    _, stats = vehicle_service.vehicle_report(db, city, start_date, end_date)
    return VehicleReportOut(city=city, start_date=start_date, end_date=end_date, stats=stats)


@router.get("/reports/vehicles/pdf", summary="Detailed vehicle report (PDF)")
def vehicle_report_pdf(city: Optional[str] = None, start_date: Optional[date] = None,
                       end_date: Optional[date] = None, db: Session = Depends(get_db)):
    vehicles, stats = vehicle_service.vehicle_report(db, city, start_date, end_date)
    document = build_vehicle_report(vehicles, stats, city, start_date, end_date)
    return _attachment(render_pdf(document), "application/pdf", document.filename)


@router.get("/reports/vehicles/charts.png", summary="Vehicle charts (PNG)")
def vehicle_report_charts(city: Optional[str] = None, start_date: Optional[date] = None,
                          end_date: Optional[date] = None,
                          dimension: Optional[List[str]] = Query(None),
                          db: Session = Depends(get_db)):
    """`dimension` may repeat: city, vehicle_type, release_status, key, state. Default: all."""
    _, stats = vehicle_service.vehicle_report(db, city, start_date, end_date)
    png = render_charts_png(vehicle_charts(stats, dimension))
    return _attachment(png, "image/png", "graficos-veiculos.png")


# ── Assets ───────────────────────────────────────────────────────────────────
@router.get("/reports/assets", response_model=AssetReportOut, summary="Asset statistics")
def asset_report(sector: Optional[str] = None, start_date: Optional[date] = None,
                 end_date: Optional[date] = None, db: Session = Depends(get_db)):
    _, stats = asset_service.asset_report(db, sector, start_date, end_date)
    return AssetReportOut(sector=sector, start_date=start_date, end_date=end_date, stats=stats)


@router.get("/reports/assets/pdf", summary="Detailed asset report (PDF)")
def asset_report_pdf(sector: Optional[str] = None, start_date: Optional[date] = None,
                     end_date: Optional[date] = None, db: Session = Depends(get_db)):
    assets, stats = asset_service.asset_report(db, sector, start_date, end_date)
    document = build_asset_report(assets, stats, sector, start_date, end_date)
    return _attachment(render_pdf(document), "application/pdf", document.filename)


@router.get("/reports/assets/charts.png", summary="Asset charts (PNG)")
def asset_report_charts(sector: Optional[str] = None, start_date: Optional[date] = None,
                        end_date: Optional[date] = None,
                        dimension: Optional[List[str]] = Query(None),
                        db: Session = Depends(get_db)):
    """`dimension` may repeat: sector, conservation_state, asset_class. Default: all."""
    _, stats = asset_service.asset_report(db, sector, start_date, end_date)
    png = render_charts_png(asset_charts(stats, dimension))
    return _attachment(png, "image/png", "graficos-patrimonio.png")
