from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from app.dependencies import get_db
from app.db.crud import device as device_crud
from app.db.schemas.common import ApiResponse
from app.db.schemas.device import Device

router = APIRouter(
    prefix="/devices",
    tags=["Devices"]
)

@router.get("", response_model=ApiResponse[List[Device]])
def get_devices(
    skip: int = 0,
    limit: int = 100,
    is_active: Optional[bool] = None,
    db: Session = Depends(get_db)
):
    """Get monitoring devices"""
    devices = device_crud.get_devices(db, skip=skip, limit=limit, is_active=is_active)
    return ApiResponse(
        message="Devices retrieved successfully",
        data=[Device.model_validate(device) for device in devices],
    )
