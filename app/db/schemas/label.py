from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from datetime import datetime
from typing import List, Optional, Union

from app.constants.label_types import LabelType, SortOrder
from .common import PageMeta

# Type-specific label fields

class SongDetails(BaseModel):
    song_name: str = Field(..., min_length=1, description="Title of the song")
    artist: str = Field(..., min_length=1, description="Performing artist")
    album: Optional[str] = None
    language: Optional[str] = None
    release_year: Optional[int] = None

class AdDetails(BaseModel):
    brand: str = Field(..., min_length=1, description="Advertised brand")
    product: Optional[str] = None
    category: Optional[str] = None
    sector: Optional[str] = None
    ad_format: Optional[str] = None

class ErrorDetails(BaseModel):
    error_type: str = Field(..., min_length=1, description="e.g. no_signal, frozen_frame, audio_loss")
    description: Optional[str] = None

class ProgramDetails(BaseModel):
    program_title: str = Field(..., min_length=1)
    genre: Optional[str] = None
    program_category: Optional[str] = None
    language: Optional[str] = None

class MovieDetails(BaseModel):
    movie_title: str = Field(..., min_length=1)
    director: Optional[str] = None
    language: Optional[str] = None
    release_year: Optional[int] = None

class PromoDetails(BaseModel):
    promo_title: str = Field(..., min_length=1)
    promo_type: Optional[str] = None
    channel_name: Optional[str] = None
    language: Optional[str] = None

class SportsDetails(BaseModel):
    program_title: str = Field(..., min_length=1)
    sport_type: str = Field(..., min_length=1)
    program_category: Optional[str] = None
    language: Optional[str] = None

class _StoredDetails(BaseModel):
    id: int
    label_id: int

    model_config = ConfigDict(from_attributes=True)

class SongDetailsRead(SongDetails, _StoredDetails):
    pass

class AdDetailsRead(AdDetails, _StoredDetails):
    pass

class ErrorDetailsRead(ErrorDetails, _StoredDetails):
    pass

class ProgramDetailsRead(ProgramDetails, _StoredDetails):
    pass

class MovieDetailsRead(MovieDetails, _StoredDetails):
    pass

class PromoDetailsRead(PromoDetails, _StoredDetails):
    pass

class SportsDetailsRead(SportsDetails, _StoredDetails):
    pass

def _provided_details(model: BaseModel) -> List[str]:
    return [label_type.value for label_type in LabelType if getattr(model, label_type.value) is not None]

# Requests

class LabelDetailsMixin(BaseModel):
    song: Optional[SongDetails] = None
    ad: Optional[AdDetails] = None
    error: Optional[ErrorDetails] = None
    program: Optional[ProgramDetails] = None
    movie: Optional[MovieDetails] = None
    promo: Optional[PromoDetails] = None
    sports: Optional[SportsDetails] = None

class LabelCreate(LabelDetailsMixin):
    event_ids: List[Union[int, str]] = Field(..., min_length=1, description="IDs of the events covered by the label")
    label_type: LabelType
    notes: Optional[str] = None

    @model_validator(mode="after")
    def check_details_match_type(self):
        provided = _provided_details(self)
        if getattr(self, self.label_type.value) is None:
            raise ValueError(f"'{self.label_type.value}' details are required for label_type '{self.label_type.value}'")
        if len(provided) > 1:
            raise ValueError(f"Only '{self.label_type.value}' details may be provided for label_type '{self.label_type.value}'")
        return self

class LabelUpdate(LabelDetailsMixin):
    event_ids: Optional[List[Union[int, str]]] = Field(None, min_length=1)
    label_type: Optional[LabelType] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def check_single_details(self):
        provided = _provided_details(self)
        if len(provided) > 1:
            raise ValueError("Only one type of label details may be provided")
        if provided and self.label_type is not None and provided[0] != self.label_type.value:
            raise ValueError(f"'{provided[0]}' details do not match label_type '{self.label_type.value}'")
        return self

class BulkDeleteRequest(BaseModel):
    label_ids: List[int] = Field(..., min_length=1)

class BulkDeleteResult(BaseModel):
    deleted: int

class LabelListOptions(BaseModel):
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    created_by: Optional[str] = None
    label_type: Optional[LabelType] = None
    device_id: Optional[str] = None
    sort: SortOrder = SortOrder.DESC

# Responses

class LabelBase(BaseModel):
    id: int
    label_type: LabelType
    created_by: str
    created_at: datetime
    # Seconds since epoch, sent as strings like event ids
    start_time: str
    end_time: str
    notes: Optional[str] = None
    image_paths: List[Optional[str]] = []
    song: Optional[SongDetailsRead] = None
    ad: Optional[AdDetailsRead] = None
    error: Optional[ErrorDetailsRead] = None
    program: Optional[ProgramDetailsRead] = None
    movie: Optional[MovieDetailsRead] = None
    promo: Optional[PromoDetailsRead] = None
    sports: Optional[SportsDetailsRead] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def stringify_epoch(cls, value):
        return str(value) if isinstance(value, int) else value

class Label(LabelBase):
    event_ids: List[str] = []

class ProgramGuideLabel(LabelBase):
    device_id: Optional[str] = None

class LabelPage(PageMeta):
    labels: List[Label]
