"""Tests for database seeding."""

from app.db.models import Device
from app.init_db import DEFAULT_DEVICE_ID, seed


def test_seed_creates_default_device_once(db, session_factory):
    seed(session_factory)
    seed(session_factory)

    devices = db.query(Device).all()
    assert [device.device_id for device in devices] == [DEFAULT_DEVICE_ID]
