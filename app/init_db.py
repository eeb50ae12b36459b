# init_db.py
import logging
import os
from app.database import engine, SessionLocal, Base
from app.db.crud import device as device_crud
from app.db.models.device import Device
from app.db.schemas.device import DeviceCreate

logger = logging.getLogger(__name__)

DEFAULT_DEVICE_ID = os.getenv("DEFAULT_DEVICE_ID", "device-001")

def seed(session_factory=SessionLocal):
    db = session_factory()
    try:
        # Seed a monitoring device so events can be ingested right away
        if not db.query(Device).first():
            device_crud.create_device(db, DeviceCreate(device_id=DEFAULT_DEVICE_ID, name="Default Device"))
    finally:
        db.close()

def init():
    Base.metadata.create_all(bind=engine)
    logger.info("Tables created")
    seed()
    logger.info("Seed data added")

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init()
