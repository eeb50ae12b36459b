from .label_service import LabelService
from .report_service import ReportService

__all__ = ['LabelService', 'ReportService']
