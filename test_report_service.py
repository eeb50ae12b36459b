"""Tests for ReportService aggregations."""

import csv
import io
from datetime import date, datetime

import pytest

from app.constants.label_types import ReportKind, SortOrder
from app.db.schemas.report import ReportOptions
from app.services.report_service import ReportService, rows_to_csv
from conftest import DAY_START


@pytest.fixture
def labeled_data(make_device, make_event, make_label):
    """Two devices, three users' worth of labels and some unlabeled events"""
    make_device("device-1")
    make_device("device-2")
    make_label([make_event(DAY_START, device_id="device-1")], label_type="song", created_by="alice",
               created_at=datetime(2023, 11, 14, 0, 10, 0))
    make_label([make_event(DAY_START + 60, device_id="device-1"), make_event(DAY_START + 120, device_id="device-2")],
               label_type="song", created_by="alice", created_at=datetime(2023, 11, 14, 0, 20, 0))
    make_label([make_event(DAY_START + 180, device_id="device-2")], label_type="ad", created_by="bob",
               created_at=datetime(2023, 11, 14, 0, 30, 0))
    make_label([make_event(DAY_START + 240, device_id="device-1")], label_type="error", created_by="alice",
               created_at=datetime(2023, 11, 15, 9, 0, 0))
    make_event(DAY_START + 300, device_id="device-1")
    make_event(DAY_START + 360, device_id="device-1")


def build(db, kind, **options):
    return ReportService.build_report(db, kind, ReportOptions(**options))


def test_label_type_distribution(db, labeled_data):
    rows = build(db, ReportKind.LABEL_TYPE_DISTRIBUTION)

    assert rows == [
        {"labelType": "song", "count": 2, "percentage": 50.0},
        {"labelType": "ad", "count": 1, "percentage": 25.0},
        {"labelType": "error", "count": 1, "percentage": 25.0},
    ]


def test_label_type_distribution_single_day(db, labeled_data):
    rows = build(db, ReportKind.LABEL_TYPE_DISTRIBUTION, day=date(2023, 11, 15))

    assert rows == [{"labelType": "error", "count": 1, "percentage": 100.0}]


def test_user_labeling_groups_by_user_and_type(db, labeled_data):
    rows = build(db, ReportKind.USER_LABELING, sort=SortOrder.ASC)

    alice_songs = next(row for row in rows if row["user"] == "alice" and row["labelType"] == "song")
    assert alice_songs["labelCount"] == 2
    assert alice_songs["deviceIds"] == ["device-1", "device-2"]
    assert alice_songs["createdAt"].startswith("2023-11-14T00:20:00")
    assert [row["labelType"] for row in rows] == ["song", "ad", "error"]


def test_content_labeling_counts_events_per_device(db, labeled_data):
    rows = build(db, ReportKind.CONTENT_LABELING)

    assert rows == [
        {"deviceId": "device-1", "labeledCount": 3, "unlabeledCount": 2, "totalEvents": 5},
        {"deviceId": "device-2", "labeledCount": 2, "unlabeledCount": 0, "totalEvents": 2},
    ]


def test_device_activity_summary(db, labeled_data):
    rows = build(db, ReportKind.DEVICE_ACTIVITY_SUMMARY, device_id="device-2")

    assert rows == [{
        "deviceId": "device-2",
        "totalEvents": 2,
        "labeledEvents": 2,
        "unlabeledEvents": 0,
        "labelTypes": [{"labelType": "ad", "count": 1}, {"labelType": "song", "count": 1}],
    }]


def test_employee_performance(db, labeled_data):
    rows = build(db, ReportKind.EMPLOYEE_PERFORMANCE)

    assert [(row["user"], row["labelCount"]) for row in rows] == [("alice", 3), ("bob", 1)]
    assert rows[1]["labels"][0]["ad"]["brand"] == "Acme"


def test_labeling_efficiency(db, labeled_data):
    rows = build(db, ReportKind.LABELING_EFFICIENCY, created_by="bob")

    # Bob's ad ends at DAY_START + 180 and was labeled at 00:30:00
    assert rows == [{
        "user": "bob",
        "labelCount": 1,
        "averageLabelingTimeSeconds": 1620.0,
        "totalLabelingTimeSeconds": 1620.0,
    }]


def test_get_report_paginates_rows(db, labeled_data):
    page = ReportService.get_report(db, ReportKind.LABEL_TYPE_DISTRIBUTION, ReportOptions(page=2, limit=2))

    assert page.total == 3
    assert page.total_pages == 2
    assert page.current_page == 2
    assert [row["labelType"] for row in page.report] == ["error"]


def test_report_on_empty_database(db):
    page = ReportService.get_report(db, ReportKind.LABELING_EFFICIENCY, ReportOptions())

    assert page.total == 0
    assert page.total_pages == 0
    assert page.report == []


def test_export_csv(db, labeled_data):
    content = ReportService.export_csv(db, ReportKind.DEVICE_ACTIVITY_SUMMARY, ReportOptions())

    rows = list(csv.DictReader(io.StringIO(content)))
    assert [row["deviceId"] for row in rows] == ["device-1", "device-2"]
    assert rows[0]["labelTypes"].startswith("[{")


def test_export_csv_on_empty_database_keeps_header(db):
    content = ReportService.export_csv(db, ReportKind.USER_LABELING, ReportOptions())

    assert content.splitlines() == ["user,labelCount,labelType,deviceIds,createdAt"]


def test_rows_to_csv_without_rows_writes_header():
    assert rows_to_csv([], ["user", "labelCount"]).splitlines() == ["user,labelCount"]
