from sqlalchemy import Column, Integer, String, ForeignKey
from app.database import Base
from sqlalchemy.orm import relationship

# One detail row per label, selected by Label.label_type

class SongLabel(Base):
    __tablename__ = "song_labels"

    id = Column(Integer, primary_key=True, index=True)
    label_id = Column(Integer, ForeignKey("labels.id", ondelete="CASCADE"), nullable=False, unique=True)
    song_name = Column(String, nullable=False)
    artist = Column(String, nullable=False)
    album = Column(String, nullable=True)
    language = Column(String, nullable=True)
    release_year = Column(Integer, nullable=True)

    label = relationship("Label", back_populates="song")

class AdLabel(Base):
    __tablename__ = "ad_labels"

    id = Column(Integer, primary_key=True, index=True)
    label_id = Column(Integer, ForeignKey("labels.id", ondelete="CASCADE"), nullable=False, unique=True)
    brand = Column(String, nullable=False)
    product = Column(String, nullable=True)
    category = Column(String, nullable=True)
    sector = Column(String, nullable=True)
    ad_format = Column(String, nullable=True)

    label = relationship("Label", back_populates="ad")

class ErrorLabel(Base):
    __tablename__ = "error_labels"

    id = Column(Integer, primary_key=True, index=True)
    label_id = Column(Integer, ForeignKey("labels.id", ondelete="CASCADE"), nullable=False, unique=True)
    error_type = Column(String, nullable=False)  # e.g. no_signal, frozen_frame, audio_loss
    description = Column(String, nullable=True)

    label = relationship("Label", back_populates="error")

class ProgramLabel(Base):
    __tablename__ = "program_labels"

    id = Column(Integer, primary_key=True, index=True)
    label_id = Column(Integer, ForeignKey("labels.id", ondelete="CASCADE"), nullable=False, unique=True)
    program_title = Column(String, nullable=False)
    genre = Column(String, nullable=True)
    program_category = Column(String, nullable=True)
    language = Column(String, nullable=True)

    label = relationship("Label", back_populates="program")

class MovieLabel(Base):
    __tablename__ = "movie_labels"

    id = Column(Integer, primary_key=True, index=True)
    label_id = Column(Integer, ForeignKey("labels.id", ondelete="CASCADE"), nullable=False, unique=True)
    movie_title = Column(String, nullable=False)
    director = Column(String, nullable=True)
    language = Column(String, nullable=True)
    release_year = Column(Integer, nullable=True)

    label = relationship("Label", back_populates="movie")

class PromoLabel(Base):
    __tablename__ = "promo_labels"

    id = Column(Integer, primary_key=True, index=True)
    label_id = Column(Integer, ForeignKey("labels.id", ondelete="CASCADE"), nullable=False, unique=True)
    promo_title = Column(String, nullable=False)
    promo_type = Column(String, nullable=True)
    channel_name = Column(String, nullable=True)
    language = Column(String, nullable=True)

    label = relationship("Label", back_populates="promo")

class SportsLabel(Base):
    __tablename__ = "sports_labels"

    id = Column(Integer, primary_key=True, index=True)
    label_id = Column(Integer, ForeignKey("labels.id", ondelete="CASCADE"), nullable=False, unique=True)
    program_title = Column(String, nullable=False)
    sport_type = Column(String, nullable=False)
    program_category = Column(String, nullable=True)
    language = Column(String, nullable=True)

    label = relationship("Label", back_populates="sports")
