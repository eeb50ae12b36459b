from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session
from typing import Optional
from datetime import date, datetime

from app.dependencies import get_db
from app.constants.label_types import LabelType, ReportFormat, ReportKind, SortOrder
from app.db.schemas.common import ApiResponse
from app.db.schemas.report import ReportOptions, ReportPage
from app.services.report_service import ReportService

router = APIRouter(
    prefix="/reports",
    tags=["Reports"]
)

def get_report_options(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    day: Optional[date] = Query(None, alias="date", description="Single UTC day, YYYY-MM-DD"),
    device_id: Optional[str] = None,
    label_type: Optional[LabelType] = None,
    created_by: Optional[str] = None,
    format: ReportFormat = ReportFormat.JSON,
    sort: SortOrder = SortOrder.DESC
) -> ReportOptions:
    return ReportOptions(
        page=page,
        limit=limit,
        start_date=start_date,
        end_date=end_date,
        day=day,
        device_id=device_id,
        label_type=label_type,
        created_by=created_by,
        format=format,
        sort=sort,
    )

@router.get("/{kind}", response_model=ApiResponse[ReportPage])
def get_report(
    kind: ReportKind,
    options: ReportOptions = Depends(get_report_options),
    db: Session = Depends(get_db)
):
    """Generate a labeling report as JSON, or as a CSV download with format=csv"""
    if options.format == ReportFormat.CSV:
        return Response(
            content=ReportService.export_csv(db, kind, options),
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{kind.value}-report.csv"'},
        )
    report = ReportService.get_report(db, kind, options)
    return ApiResponse(message="Report generated successfully", data=report)
