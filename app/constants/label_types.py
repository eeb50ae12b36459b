"""
Label, sort order and report constants
"""

from enum import Enum
from typing import List

class LabelType(str, Enum):
    SONG = "song"
    AD = "ad"
    ERROR = "error"
    PROGRAM = "program"
    MOVIE = "movie"
    PROMO = "promo"
    SPORTS = "sports"

class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"

class ReportFormat(str, Enum):
    JSON = "json"
    CSV = "csv"

class ReportKind(str, Enum):
    USER_LABELING = "user-labeling"
    CONTENT_LABELING = "content-labeling"
    EMPLOYEE_PERFORMANCE = "employee-performance"
    LABEL_TYPE_DISTRIBUTION = "label-type-distribution"
    DEVICE_ACTIVITY_SUMMARY = "device-activity-summary"
    LABELING_EFFICIENCY = "labeling-efficiency"

def get_all_label_types() -> List[str]:
    """Get all label type values"""
    return [label_type.value for label_type in LabelType]
