from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Float, BigInteger
from datetime import datetime
from app.database import Base, BigIntegerId
from sqlalchemy.orm import relationship

class Event(Base):
    __tablename__ = "events"

    id = Column(BigIntegerId, primary_key=True, autoincrement=True)
    device_id = Column(String, ForeignKey("devices.device_id"), nullable=False, index=True)
    timestamp = Column(BigInteger, nullable=False, index=True)  # seconds since epoch (UTC)
    type = Column(String, nullable=False, index=True)
    image_path = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    device = relationship("Device", back_populates="events")
    ads = relationship("EventAd", back_populates="event", cascade="all, delete-orphan")
    channels = relationship("EventChannel", back_populates="event", cascade="all, delete-orphan")
    content = relationship("EventContent", back_populates="event", cascade="all, delete-orphan")
    label_links = relationship("LabelEvent", back_populates="event")

    def __repr__(self):
        return f"<Event(id={self.id}, device_id='{self.device_id}', timestamp={self.timestamp}, type='{self.type}')>"

class EventAd(Base):
    __tablename__ = "event_ads"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(BigIntegerId, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    brand = Column(String, nullable=True)
    product = Column(String, nullable=True)
    confidence = Column(Float, nullable=True)

    event = relationship("Event", back_populates="ads")

class EventChannel(Base):
    __tablename__ = "event_channels"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(BigIntegerId, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    channel_name = Column(String, nullable=True)
    channel_number = Column(String, nullable=True)
    confidence = Column(Float, nullable=True)

    event = relationship("Event", back_populates="channels")

class EventContent(Base):
    __tablename__ = "event_content"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(BigIntegerId, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=True)
    artist = Column(String, nullable=True)
    confidence = Column(Float, nullable=True)

    event = relationship("Event", back_populates="content")
