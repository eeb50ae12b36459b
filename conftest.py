"""
Shared test fixtures: an in-memory SQLite database per test, plus helpers for
seeding devices, events and labels.
"""

import os

# Must be set before app.database creates its engine
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENV", "production")

from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.db.models import Device, Event, Label
from app.db.schemas.label import LabelCreate
from app.main import app
from app.services.label_service import LabelService

# 2023-11-14 00:00:00 UTC
DAY_START = 1699920000
DAY_END = DAY_START + 86399


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    """FastAPI test client with the DB dependency pointed at the test database"""
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_device(db):
    def _make_device(device_id="device-1", name=None):
        device = Device(device_id=device_id, name=name or device_id)
        db.add(device)
        db.commit()
        db.refresh(device)
        return device
    return _make_device


@pytest.fixture
def make_event(db):
    def _make_event(timestamp, device_id="device-1", event_type="song", image_path=None):
        event = Event(
            device_id=device_id,
            timestamp=timestamp,
            type=event_type,
            image_path=image_path or f"/frames/{device_id}/{timestamp}.jpg",
        )
        db.add(event)
        db.commit()
        db.refresh(event)
        return event
    return _make_event


SAMPLE_DETAILS = {
    "song": {"song_name": "Blue Monday", "artist": "New Order"},
    "ad": {"brand": "Acme", "product": "Rocket Skates"},
    "error": {"error_type": "no_signal"},
    "program": {"program_title": "Evening News"},
    "movie": {"movie_title": "Metropolis"},
    "promo": {"promo_title": "Coming Up Next"},
    "sports": {"program_title": "Match Day", "sport_type": "football"},
}


@pytest.fixture
def make_label(db):
    def _make_label(events, label_type="song", created_by="alice", created_at=None, notes=None):
        data = LabelCreate(
            event_ids=[event.id for event in events],
            label_type=label_type,
            notes=notes,
            **{label_type: SAMPLE_DETAILS[label_type]},
        )
        label = LabelService.create_label(db, data, created_by)
        if created_at is not None:
            stored = db.get(Label, label.id)
            stored.created_at = created_at
            db.commit()
            label = LabelService.get_label(db, label.id)
        return label
    return _make_label


@pytest.fixture
def base_time():
    return datetime(2023, 11, 14, 12, 0, 0)
