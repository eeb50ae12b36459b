from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date, datetime

from app.dependencies import get_db, get_current_user
from app.constants.label_types import LabelType, SortOrder, get_all_label_types
from app.db.schemas.common import ApiResponse
from app.db.schemas.label import (
    BulkDeleteRequest,
    BulkDeleteResult,
    Label,
    LabelCreate,
    LabelListOptions,
    LabelPage,
    LabelUpdate,
    ProgramGuideLabel,
)
from app.services.label_service import LabelService

router = APIRouter(
    prefix="/labels",
    tags=["Labels"]
)

@router.get("/types", response_model=ApiResponse[List[str]])
def get_label_types():
    """Get all supported label types"""
    return ApiResponse(message="Label types retrieved successfully", data=get_all_label_types())

@router.post("", response_model=ApiResponse[Label], status_code=status.HTTP_201_CREATED)
def create_label(
    label: LabelCreate,
    created_by: str = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a label over one or more events"""
    created = LabelService.create_label(db, label, created_by)
    return ApiResponse(message="Label created successfully", data=created)

@router.get("", response_model=ApiResponse[LabelPage])
def get_labels(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    created_by: Optional[str] = None,
    label_type: Optional[LabelType] = None,
    device_id: Optional[str] = None,
    sort: SortOrder = SortOrder.DESC,
    db: Session = Depends(get_db)
):
    """List labels with optional filters"""
    options = LabelListOptions(
        page=page,
        limit=limit,
        start_date=start_date,
        end_date=end_date,
        created_by=created_by,
        label_type=label_type,
        device_id=device_id,
        sort=sort,
    )
    return ApiResponse(message="Labels retrieved successfully", data=LabelService.get_labels(db, options))

@router.get("/program-guide", response_model=ApiResponse[List[ProgramGuideLabel]])
def get_program_guide(
    day: date = Query(..., alias="date", description="UTC day, YYYY-MM-DD"),
    device_id: str = Query(..., min_length=1),
    sort: SortOrder = SortOrder.DESC,
    db: Session = Depends(get_db)
):
    """Get the labels overlapping a UTC day for a device"""
    guide = LabelService.get_program_guide_by_date(db, day, device_id, sort)
    return ApiResponse(message="Program guide retrieved successfully", data=guide)

@router.post("/bulk-delete", response_model=ApiResponse[BulkDeleteResult])
def delete_labels_bulk(request: BulkDeleteRequest, db: Session = Depends(get_db)):
    """Delete several labels; IDs that do not exist are ignored"""
    deleted = LabelService.delete_labels_bulk(db, request.label_ids)
    return ApiResponse(message="Labels deleted successfully", data=BulkDeleteResult(deleted=deleted))

@router.get("/{label_id}", response_model=ApiResponse[Label])
def get_label(label_id: int, db: Session = Depends(get_db)):
    """Get a specific label"""
    return ApiResponse(message="Label retrieved successfully", data=LabelService.get_label(db, label_id))

@router.put("/{label_id}", response_model=ApiResponse[Label])
def update_label(label_id: int, label: LabelUpdate, db: Session = Depends(get_db)):
    """Update a label's events, details or notes"""
    updated = LabelService.update_label(db, label_id, label)
    return ApiResponse(message="Label updated successfully", data=updated)

@router.delete("/{label_id}", response_model=ApiResponse)
def delete_label(label_id: int, db: Session = Depends(get_db)):
    """Delete a label"""
    LabelService.delete_label(db, label_id)
    return ApiResponse(message="Label deleted successfully")
