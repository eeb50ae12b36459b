from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from typing import List, Optional

from app.constants.label_types import SortOrder
from .common import PageMeta

class EventAd(BaseModel):
    id: int
    brand: Optional[str] = None
    product: Optional[str] = None
    confidence: Optional[float] = None

    model_config = ConfigDict(from_attributes=True)

class EventChannel(BaseModel):
    id: int
    channel_name: Optional[str] = None
    channel_number: Optional[str] = None
    confidence: Optional[float] = None

    model_config = ConfigDict(from_attributes=True)

class EventContent(BaseModel):
    id: int
    title: Optional[str] = None
    artist: Optional[str] = None
    confidence: Optional[float] = None

    model_config = ConfigDict(from_attributes=True)

class Event(BaseModel):
    # Big integer columns are sent as strings so JavaScript clients keep full precision
    id: str
    device_id: str
    timestamp: str
    type: str
    image_path: Optional[str] = None
    created_at: Optional[datetime] = None
    ads: List[EventAd] = []
    channels: List[EventChannel] = []
    content: List[EventContent] = []

    model_config = ConfigDict(from_attributes=True)

    @field_validator("id", "timestamp", mode="before")
    @classmethod
    def stringify_big_integers(cls, value):
        return str(value) if isinstance(value, int) else value

class UnlabeledEventOptions(BaseModel):
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    device_id: Optional[str] = None
    types: Optional[List[str]] = None
    sort: SortOrder = SortOrder.DESC

class EventPage(PageMeta):
    events: List[Event]
