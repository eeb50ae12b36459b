"""HTTP-level tests: envelopes, status codes and query parameter handling."""

import pytest

from conftest import DAY_START

USER = {"X-User-Id": "alice"}


@pytest.fixture
def events(make_device, make_event):
    make_device("device-1")
    return [make_event(DAY_START + offset) for offset in (300, 100, 200)]


def create_song(client, event_ids, headers=USER):
    return client.post(
        "/api/v1/labels",
        json={
            "event_ids": [str(event_id) for event_id in event_ids],
            "label_type": "song",
            "song": {"song_name": "Blue Monday", "artist": "New Order"},
        },
        headers=headers,
    )


def test_health(client):
    res = client.get("/health")

    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


def test_create_label_returns_envelope(client, events):
    res = create_song(client, [event.id for event in events])

    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    assert body["message"] == "Label created successfully"
    assert body["data"]["created_by"] == "alice"
    assert body["data"]["start_time"] == str(DAY_START + 100)
    assert body["data"]["end_time"] == str(DAY_START + 300)
    assert body["data"]["song"]["artist"] == "New Order"


def test_create_label_requires_user_header(client, events):
    res = create_song(client, [events[0].id], headers={})

    assert res.status_code == 401
    assert res.json() == {"success": False, "message": "Missing X-User-Id header"}


def test_create_label_validation_error_is_400(client, events):
    res = client.post(
        "/api/v1/labels",
        json={"event_ids": [str(events[0].id)], "label_type": "song"},
        headers=USER,
    )

    assert res.status_code == 400
    assert res.json() == {
        "success": False,
        "message": "'song' details are required for label_type 'song'",
    }


def test_create_label_missing_event_is_404(client, events):
    res = create_song(client, [events[0].id, 987654])

    assert res.status_code == 404
    assert res.json()["message"] == "One or more events not found"


def test_create_label_twice_on_same_event_is_409(client, events):
    create_song(client, [events[0].id])

    res = create_song(client, [events[0].id])

    assert res.status_code == 409
    assert res.json()["success"] is False


def test_list_labels_page_metadata(client, events):
    for event in events:
        create_song(client, [event.id])

    res = client.get("/api/v1/labels", params={"page": 1, "limit": 2, "label_type": "song"})

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["total"] == 3
    assert data["totalPages"] == 2
    assert data["currentPage"] == 1
    assert len(data["labels"]) == 2


def test_list_labels_rejects_bad_page(client):
    res = client.get("/api/v1/labels", params={"page": 0})

    assert res.status_code == 400
    assert res.json()["success"] is False


def test_get_update_and_delete_label(client, events):
    label_id = create_song(client, [events[0].id]).json()["data"]["id"]

    got = client.get(f"/api/v1/labels/{label_id}")
    updated = client.put(
        f"/api/v1/labels/{label_id}",
        json={"event_ids": [str(events[1].id)], "notes": "re-aligned"},
    )
    deleted = client.delete(f"/api/v1/labels/{label_id}")
    missing = client.get(f"/api/v1/labels/{label_id}")

    assert got.status_code == 200
    assert updated.json()["data"]["event_ids"] == [str(events[1].id)]
    assert updated.json()["data"]["notes"] == "re-aligned"
    assert deleted.json() == {"success": True, "message": "Label deleted successfully", "data": None}
    assert missing.status_code == 404


def test_update_missing_label_is_404(client):
    res = client.put("/api/v1/labels/555", json={"notes": "x"})

    assert res.status_code == 404
    assert res.json() == {"success": False, "message": "Label not found"}


def test_delete_missing_label_is_404(client):
    res = client.delete("/api/v1/labels/555")

    assert res.status_code == 404


@pytest.mark.parametrize("method", ["get", "put", "delete"])
def test_label_id_beyond_column_range_is_404(client, method):
    kwargs = {"json": {"notes": "x"}} if method == "put" else {}

    res = getattr(client, method)(f"/api/v1/labels/{2**70}", **kwargs)

    assert res.status_code == 404
    assert res.json() == {"success": False, "message": "Label not found"}


def test_create_label_event_id_beyond_column_range_is_404(client, events):
    res = create_song(client, [events[0].id, 2**70])

    assert res.status_code == 404
    assert res.json()["message"] == "One or more events not found"


def test_bulk_delete(client, events):
    ids = [create_song(client, [event.id]).json()["data"]["id"] for event in events[:2]]

    res = client.post("/api/v1/labels/bulk-delete", json={"label_ids": ids + [9999]})

    assert res.status_code == 200
    assert res.json()["data"] == {"deleted": 2}
    assert client.get("/api/v1/labels").json()["data"]["total"] == 0


def test_bulk_delete_ignores_ids_beyond_column_range(client, events):
    label_id = create_song(client, [events[0].id]).json()["data"]["id"]

    res = client.post("/api/v1/labels/bulk-delete", json={"label_ids": [label_id, 2**70]})

    assert res.status_code == 200
    assert res.json()["data"] == {"deleted": 1}


def test_unlabeled_events(client, events):
    create_song(client, [events[0].id])

    res = client.get("/api/v1/events/unlabeled", params={"sort": "asc", "types": ["song"]})

    data = res.json()["data"]
    assert data["total"] == 2
    assert [event["timestamp"] for event in data["events"]] == [str(DAY_START + 100), str(DAY_START + 200)]


def test_program_guide(client, events):
    create_song(client, [events[1].id, events[2].id])

    res = client.get("/api/v1/labels/program-guide", params={"date": "2023-11-14", "device_id": "device-1"})
    unknown = client.get("/api/v1/labels/program-guide", params={"date": "2023-11-14", "device_id": "nope"})

    assert res.status_code == 200
    guide = res.json()["data"]
    assert len(guide) == 1
    assert guide[0]["device_id"] == "device-1"
    assert unknown.status_code == 404
    assert unknown.json()["message"] == "Invalid device ID"


def test_label_types(client):
    res = client.get("/api/v1/labels/types")

    assert res.json()["data"] == ["song", "ad", "error", "program", "movie", "promo", "sports"]


def test_devices(client, events):
    res = client.get("/api/v1/devices")

    assert [device["device_id"] for device in res.json()["data"]] == ["device-1"]


def test_report_json(client, events):
    create_song(client, [events[0].id])

    res = client.get("/api/v1/reports/label-type-distribution")

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["report"] == [{"labelType": "song", "count": 1, "percentage": 100.0}]
    assert data["totalPages"] == 1


def test_report_csv(client, events):
    create_song(client, [events[0].id])

    res = client.get("/api/v1/reports/content-labeling", params={"format": "csv"})

    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/csv")
    assert res.text.splitlines()[0] == "deviceId,labeledCount,unlabeledCount,totalEvents"


def test_report_csv_without_rows_has_header(client):
    res = client.get("/api/v1/reports/labeling-efficiency", params={"format": "csv"})

    assert res.status_code == 200
    assert res.text.splitlines() == ["user,labelCount,averageLabelingTimeSeconds,totalLabelingTimeSeconds"]


def test_unknown_report_kind(client):
    res = client.get("/api/v1/reports/nonsense")

    assert res.status_code == 400
