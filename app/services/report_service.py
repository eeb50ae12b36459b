"""
Report service: aggregates labels and events into the labeling reports.

Every report is built as a full list of camelCase rows, then paginated in
memory or exported as CSV. Label filters (created_by, label_type, the date
window) apply to label created_at; event counts use the event timestamps
inside the same window.
"""

import csv
import io
import json
import logging
from collections import Counter, defaultdict
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple, Type

from pydantic.alias_generators import to_camel
from sqlalchemy.orm import Session

from app.constants.label_types import ReportKind, SortOrder
from app.db.crud import event as event_crud
from app.db.crud import label as label_crud
from app.db.models.label import Label
from app.db.schemas import report as schemas
from app.services.label_service import store_errors, to_label_schema
from app.services.pagination import page_count, page_offset
from app.time_utils import to_epoch_seconds, to_naive_utc, utc_day_datetimes

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


def _window(options: schemas.ReportOptions) -> Tuple[Optional[datetime], Optional[datetime]]:
    """Resolve the created_at window; a single day wins over start/end dates"""
    if options.day is not None:
        return utc_day_datetimes(options.day)
    return to_naive_utc(options.start_date), to_naive_utc(options.end_date)


def _timestamp_window(options: schemas.ReportOptions) -> Tuple[Optional[int], Optional[int]]:
    start, end = _window(options)
    return (
        to_epoch_seconds(start) if start else None,
        to_epoch_seconds(end) if end else None,
    )


def _labels(db: Session, options: schemas.ReportOptions) -> List[Label]:
    start, end = _window(options)
    return label_crud.get_all_labels(
        db,
        start_date=start,
        end_date=end,
        created_by=options.created_by,
        label_type=options.label_type,
        device_id=options.device_id,
        sort=options.sort,
    )


def _label_devices(label: Label) -> List[str]:
    return sorted({link.event.device_id for link in label.events})


def _dump(row: schemas.ReportRow) -> Row:
    return row.model_dump(by_alias=True, mode="json")


def _order(rows: List[Row], key: str, sort: SortOrder, tie: str) -> List[Row]:
    rows = sorted(rows, key=lambda row: row[tie])
    return sorted(rows, key=lambda row: row[key], reverse=sort == SortOrder.DESC)


def user_labeling(db: Session, options: schemas.ReportOptions) -> List[Row]:
    groups: Dict[Tuple[str, str], List[Label]] = defaultdict(list)
    for label in _labels(db, options):
        groups[(label.created_by, label.label_type)].append(label)

    rows = []
    for (user, label_type), labels in groups.items():
        devices = sorted({device for label in labels for device in _label_devices(label)})
        rows.append(_dump(schemas.UserLabelingReport(
            user=user,
            label_count=len(labels),
            label_type=label_type,
            device_ids=devices,
            created_at=max(label.created_at for label in labels),
        )))
    return _order(rows, "createdAt", options.sort, "user")


def content_labeling(db: Session, options: schemas.ReportOptions) -> List[Row]:
    start_timestamp, end_timestamp = _timestamp_window(options)
    totals = event_crud.count_events_by_device(db, start_timestamp, end_timestamp, options.device_id)
    labeled = event_crud.count_events_by_device(db, start_timestamp, end_timestamp, options.device_id, labeled=True)

    rows = [
        _dump(schemas.ContentLabelingReport(
            device_id=device_id,
            labeled_count=labeled.get(device_id, 0),
            unlabeled_count=total - labeled.get(device_id, 0),
            total_events=total,
        ))
        for device_id, total in totals.items()
    ]
    return _order(rows, "totalEvents", options.sort, "deviceId")


def employee_performance(db: Session, options: schemas.ReportOptions) -> List[Row]:
    groups: Dict[str, List[Label]] = defaultdict(list)
    for label in _labels(db, options):
        groups[label.created_by].append(label)

    rows = [
        _dump(schemas.EmployeePerformanceReport(
            user=user,
            label_count=len(labels),
            labels=[to_label_schema(label) for label in labels],
        ))
        for user, labels in groups.items()
    ]
    return _order(rows, "labelCount", options.sort, "user")


def label_type_distribution(db: Session, options: schemas.ReportOptions) -> List[Row]:
    counts = Counter(label.label_type for label in _labels(db, options))
    total = sum(counts.values())

    rows = [
        _dump(schemas.LabelTypeDistributionReport(
            label_type=label_type,
            count=count,
            percentage=round(count * 100 / total, 2),
        ))
        for label_type, count in counts.items()
    ]
    return _order(rows, "count", options.sort, "labelType")


def device_activity_summary(db: Session, options: schemas.ReportOptions) -> List[Row]:
    start_timestamp, end_timestamp = _timestamp_window(options)
    totals = event_crud.count_events_by_device(db, start_timestamp, end_timestamp, options.device_id)
    labeled = event_crud.count_events_by_device(db, start_timestamp, end_timestamp, options.device_id, labeled=True)

    type_counts: Dict[str, Counter] = defaultdict(Counter)
    for label in _labels(db, options):
        for device_id in _label_devices(label):
            type_counts[device_id][label.label_type] += 1

    rows = []
    for device_id, total in totals.items():
        label_types = [
            schemas.LabelTypeCount(label_type=label_type, count=count)
            for label_type, count in sorted(type_counts[device_id].items())
        ]
        rows.append(_dump(schemas.DeviceActivitySummaryReport(
            device_id=device_id,
            total_events=total,
            labeled_events=labeled.get(device_id, 0),
            unlabeled_events=total - labeled.get(device_id, 0),
            label_types=label_types,
        )))
    return _order(rows, "totalEvents", options.sort, "deviceId")


def labeling_efficiency(db: Session, options: schemas.ReportOptions) -> List[Row]:
    # Labeling time: seconds between the end of the labeled span and label creation
    durations: Dict[str, List[int]] = defaultdict(list)
    for label in _labels(db, options):
        durations[label.created_by].append(to_epoch_seconds(label.created_at) - label.end_time)

    rows = []
    for user, seconds in durations.items():
        total = sum(seconds)
        rows.append(_dump(schemas.LabelingEfficiencyReport(
            user=user,
            label_count=len(seconds),
            average_labeling_time_seconds=round(total / len(seconds), 2),
            total_labeling_time_seconds=total,
        )))
    return _order(rows, "labelCount", options.sort, "user")


REPORT_BUILDERS: Dict[ReportKind, Callable[[Session, schemas.ReportOptions], List[Row]]] = {
    ReportKind.USER_LABELING: user_labeling,
    ReportKind.CONTENT_LABELING: content_labeling,
    ReportKind.EMPLOYEE_PERFORMANCE: employee_performance,
    ReportKind.LABEL_TYPE_DISTRIBUTION: label_type_distribution,
    ReportKind.DEVICE_ACTIVITY_SUMMARY: device_activity_summary,
    ReportKind.LABELING_EFFICIENCY: labeling_efficiency,
}


REPORT_ROW_MODELS: Dict[ReportKind, Type[schemas.ReportRow]] = {
    ReportKind.USER_LABELING: schemas.UserLabelingReport,
    ReportKind.CONTENT_LABELING: schemas.ContentLabelingReport,
    ReportKind.EMPLOYEE_PERFORMANCE: schemas.EmployeePerformanceReport,
    ReportKind.LABEL_TYPE_DISTRIBUTION: schemas.LabelTypeDistributionReport,
    ReportKind.DEVICE_ACTIVITY_SUMMARY: schemas.DeviceActivitySummaryReport,
    ReportKind.LABELING_EFFICIENCY: schemas.LabelingEfficiencyReport,
}


def csv_columns(row_model: Type[schemas.ReportRow]) -> List[str]:
    return [to_camel(name) for name in row_model.model_fields]


def rows_to_csv(rows: List[Row], columns: List[str]) -> str:
    """Render report rows as CSV under a header row; nested values are JSON-encoded"""
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=columns)
    writer.writeheader()
    for row in rows:
        writer.writerow({
            key: json.dumps(value) if isinstance(value, (list, dict)) else value
            for key, value in row.items()
        })
    return buffer.getvalue()


class ReportService:
    @staticmethod
    def build_report(db: Session, kind: ReportKind, options: schemas.ReportOptions) -> List[Row]:
        with store_errors(db, "Failed to generate report"):
            rows = REPORT_BUILDERS[ReportKind(kind)](db, options)
            logger.info(f"Report {ReportKind(kind).value} built with {len(rows)} rows")
            return rows

    @staticmethod
    def get_report(db: Session, kind: ReportKind, options: schemas.ReportOptions) -> schemas.ReportPage:
        rows = ReportService.build_report(db, kind, options)
        start = page_offset(options.page, options.limit)
        return schemas.ReportPage(
            report=rows[start:start + options.limit],
            total=len(rows),
            total_pages=page_count(len(rows), options.limit),
            current_page=options.page,
        )

    @staticmethod
    def export_csv(db: Session, kind: ReportKind, options: schemas.ReportOptions) -> str:
        rows = ReportService.build_report(db, kind, options)
        return rows_to_csv(rows, csv_columns(REPORT_ROW_MODELS[ReportKind(kind)]))
