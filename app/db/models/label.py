from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, BigInteger, Text
from datetime import datetime
from app.database import Base, BigIntegerId
from sqlalchemy.orm import relationship

class Label(Base):
    __tablename__ = "labels"

    id = Column(Integer, primary_key=True, index=True)
    label_type = Column(String, nullable=False, index=True)  # song, ad, error, program, movie, promo, sports
    created_by = Column(String, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    # Span of the labeled events, seconds since epoch (UTC)
    start_time = Column(BigInteger, nullable=False, index=True)
    end_time = Column(BigInteger, nullable=False, index=True)
    notes = Column(Text, nullable=True)

    # Relationships
    events = relationship("LabelEvent", back_populates="label", cascade="all, delete-orphan")
    song = relationship("SongLabel", back_populates="label", uselist=False, cascade="all, delete-orphan")
    ad = relationship("AdLabel", back_populates="label", uselist=False, cascade="all, delete-orphan")
    error = relationship("ErrorLabel", back_populates="label", uselist=False, cascade="all, delete-orphan")
    program = relationship("ProgramLabel", back_populates="label", uselist=False, cascade="all, delete-orphan")
    movie = relationship("MovieLabel", back_populates="label", uselist=False, cascade="all, delete-orphan")
    promo = relationship("PromoLabel", back_populates="label", uselist=False, cascade="all, delete-orphan")
    sports = relationship("SportsLabel", back_populates="label", uselist=False, cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Label(id={self.id}, label_type='{self.label_type}', created_by='{self.created_by}')>"

class LabelEvent(Base):
    __tablename__ = "label_events"

    id = Column(Integer, primary_key=True, index=True)
    label_id = Column(Integer, ForeignKey("labels.id", ondelete="CASCADE"), nullable=False, index=True)
    # An event can belong to one label only
    event_id = Column(BigIntegerId, ForeignKey("events.id"), nullable=False, unique=True)

    label = relationship("Label", back_populates="events")
    event = relationship("Event", back_populates="label_links")
