from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from app.constants.label_types import LabelType, ReportFormat, SortOrder
from .common import PageMeta
from .label import Label

class ReportOptions(BaseModel):
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    day: Optional[date] = Field(None, description="Restrict to a single UTC day")
    device_id: Optional[str] = None
    label_type: Optional[LabelType] = None
    created_by: Optional[str] = None
    format: ReportFormat = ReportFormat.JSON
    sort: SortOrder = SortOrder.DESC

class ReportRow(BaseModel):
    """Report rows are serialized with camelCase keys"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class UserLabelingReport(ReportRow):
    user: str
    label_count: int
    label_type: Optional[LabelType] = None
    device_ids: List[str]
    created_at: datetime

class ContentLabelingReport(ReportRow):
    device_id: str
    labeled_count: int
    unlabeled_count: int
    total_events: int

class EmployeePerformanceReport(ReportRow):
    user: str
    label_count: int
    labels: List[Label]

class LabelTypeDistributionReport(ReportRow):
    label_type: LabelType
    count: int
    percentage: float

class LabelTypeCount(ReportRow):
    label_type: LabelType
    count: int

class DeviceActivitySummaryReport(ReportRow):
    device_id: str
    total_events: int
    labeled_events: int
    unlabeled_events: int
    label_types: List[LabelTypeCount]

class LabelingEfficiencyReport(ReportRow):
    user: str
    label_count: int
    average_labeling_time_seconds: Optional[float] = None
    total_labeling_time_seconds: Optional[float] = None

class ReportPage(PageMeta):
    report: List[Dict[str, Any]]
