from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime

from app.dependencies import get_db
from app.constants.label_types import SortOrder
from app.db.schemas.common import ApiResponse
from app.db.schemas.event import EventPage, UnlabeledEventOptions
from app.services.label_service import LabelService

router = APIRouter(
    prefix="/events",
    tags=["Events"]
)

@router.get("/unlabeled", response_model=ApiResponse[EventPage])
def get_unlabeled_events(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    device_id: Optional[str] = None,
    types: Optional[List[str]] = Query(None, description="Event types to include"),
    sort: SortOrder = SortOrder.DESC,
    db: Session = Depends(get_db)
):
    """List events that are not covered by any label"""
    options = UnlabeledEventOptions(
        page=page,
        limit=limit,
        start_date=start_date,
        end_date=end_date,
        device_id=device_id,
        types=types,
        sort=sort,
    )
    events = LabelService.get_unlabeled_events(db, options)
    return ApiResponse(message="Unlabeled events retrieved successfully", data=events)
