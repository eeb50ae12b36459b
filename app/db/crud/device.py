from sqlalchemy.orm import Session
from typing import List, Optional
from app.db.models.device import Device
from app.db.schemas.device import DeviceCreate

def get_device_by_device_id(db: Session, device_id: str) -> Optional[Device]:
    """Get a device by its device ID"""
    return db.query(Device).filter(Device.device_id == device_id).first()

def get_devices(
    db: Session,
    skip: int = 0,
    limit: int = 100,
    is_active: Optional[bool] = None
) -> List[Device]:
    """Get devices with optional active filter"""
    query = db.query(Device)
    if is_active is not None:
        query = query.filter(Device.is_active == is_active)
    return query.order_by(Device.device_id).offset(skip).limit(limit).all()

def create_device(db: Session, device: DeviceCreate) -> Device:
    """Create a new device"""
    db_device = Device(**device.model_dump())
    db.add(db_device)
    db.commit()
    db.refresh(db_device)
    return db_device
