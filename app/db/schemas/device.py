from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional

class DeviceBase(BaseModel):
    device_id: str
    name: Optional[str] = None
    location: Optional[str] = None
    is_active: bool = True

class DeviceCreate(DeviceBase):
    pass

class Device(DeviceBase):
    id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
